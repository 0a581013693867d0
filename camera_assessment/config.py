"""
Configuration module for camera assessment.

Holds the fixed rig geometry and the numeric settings of the solvers, and
handles loading and saving them as YAML files.
"""

import yaml
import numpy as np
from numbers import Real
from pathlib import Path
from dataclasses import dataclass, field, fields, asdict
from typing import Any, Dict
import logging

from .errors import ValidationError

logger = logging.getLogger(__name__)


def _check_numbers(obj, owner: str, integral: tuple) -> None:
    """Reject non-numeric fields and store integral fields as int."""
    for f in fields(obj):
        value = getattr(obj, f.name)
        if isinstance(value, bool) or not isinstance(value, Real):
            raise ValidationError(f"{owner} {f.name} must be a number, got: {value!r}")
        if f.name in integral:
            if not float(value).is_integer():
                raise ValidationError(f"{owner} {f.name} must be an integer, got: {value}")
            # frozen dataclass
            object.__setattr__(obj, f.name, int(value))


@dataclass(frozen=True)
class CameraConfiguration:
    """
    Fixed camera rig geometry.

    The physical sensor size is not configured directly. It is derived from
    the reference field of view at the base (minimum) focal length.

    Attributes:
        height: Camera height above the ground plane in meters
        resolution_x: Horizontal sensor resolution in pixels
        resolution_y: Vertical sensor resolution in pixels
        focal_length_min: Focal length at zoom level 1 in mm
        focal_length_max: Hardware maximum focal length in mm
        fov_horizontal: Horizontal field of view at focal_length_min in degrees
        fov_vertical: Vertical field of view at focal_length_min in degrees
        marker_gap: Spacing between consecutive ground markings in meters
    """
    height: float = 20.0
    resolution_x: int = 2560
    resolution_y: int = 1440
    focal_length_min: float = 4.8
    focal_length_max: float = 120.0
    fov_horizontal: float = 55.0
    fov_vertical: float = 33.0
    marker_gap: float = 2.0

    def __post_init__(self):
        _check_numbers(self, "Camera", ('resolution_x', 'resolution_y'))
        for name in ('height', 'resolution_x', 'resolution_y',
                     'focal_length_min', 'focal_length_max', 'marker_gap'):
            value = getattr(self, name)
            if not value > 0:
                raise ValidationError(f"Camera {name} must be positive, got: {value}")
        if self.focal_length_max < self.focal_length_min:
            raise ValidationError(
                f"focal_length_max ({self.focal_length_max}) is below "
                f"focal_length_min ({self.focal_length_min})"
            )
        for name in ('fov_horizontal', 'fov_vertical'):
            value = getattr(self, name)
            if not 0 < value < 180:
                raise ValidationError(f"Camera {name} must be in (0, 180) degrees, got: {value}")

    @property
    def sensor_width(self) -> float:
        """Physical sensor width in mm."""
        return float(2 * self.focal_length_min * np.tan(np.radians(self.fov_horizontal / 2)))

    @property
    def sensor_height(self) -> float:
        """Physical sensor height in mm."""
        return float(2 * self.focal_length_min * np.tan(np.radians(self.fov_vertical / 2)))


@dataclass(frozen=True)
class SolverSettings:
    """
    Numeric settings of the tilt solver and the distance search.

    Attributes:
        target_row_fraction: Row (fraction of vertical resolution) the target marking is placed on
        tilt_perturbation: Finite-difference step for the Newton derivative (radians)
        damping: Newton step damping factor
        max_newton_iterations: Iteration budget of the tilt solver
        pixel_tolerance: Convergence threshold on the row error (pixels)
        min_derivative: Derivatives below this stop the Newton iteration
        tilt_margin: Distance kept from 0 and pi/2 when clamping the tilt (radians)
        initial_search_markings: Initial upper search bound, in markings
        max_bound_doublings: Safety valve on the exponential bound expansion
        distance_tolerance: Bisection stops below this interval width (meters)
    """
    target_row_fraction: float = 0.9
    tilt_perturbation: float = 1e-4
    damping: float = 0.5
    max_newton_iterations: int = 20
    pixel_tolerance: float = 1.0
    min_derivative: float = 1e-6
    tilt_margin: float = 1e-6
    initial_search_markings: int = 50
    max_bound_doublings: int = 64
    distance_tolerance: float = 1e-3

    def __post_init__(self):
        _check_numbers(
            self, "Solver",
            ('max_newton_iterations', 'initial_search_markings', 'max_bound_doublings'),
        )
        for f in fields(self):
            value = getattr(self, f.name)
            if not value > 0:
                raise ValidationError(f"Solver {f.name} must be positive, got: {value}")
        if not self.target_row_fraction < 1:
            raise ValidationError(
                f"target_row_fraction must be below 1, got: {self.target_row_fraction}"
            )


DEFAULT_CAMERA = CameraConfiguration()
DEFAULT_SOLVER = SolverSettings()


def _section(cls, data: Dict[str, Any]):
    """Build a dataclass from a YAML section, ignoring unknown keys."""
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        logger.warning(f"Ignoring unknown {cls.__name__} keys: {sorted(unknown)}")
    return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class Config:
    """
    Main configuration class for camera assessment.

    Attributes:
        camera: Camera rig geometry
        solver: Solver settings
    """
    camera: CameraConfiguration = field(default_factory=CameraConfiguration)
    solver: SolverSettings = field(default_factory=SolverSettings)

    @classmethod
    def from_yaml(cls, config_path: str) -> "Config":
        """
        Load configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            Config object with loaded parameters

        Example YAML structure:
            camera:
              height: 20.0
              resolution_x: 2560
              resolution_y: 1440
              focal_length_min: 4.8
              focal_length_max: 120.0
              fov_horizontal: 55.0
              fov_vertical: 33.0
              marker_gap: 2.0
            solver:
              target_row_fraction: 0.9
              max_newton_iterations: 20
              distance_tolerance: 0.001
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}

        logger.info(f"Loading configuration from {config_path}")

        return cls(
            camera=_section(CameraConfiguration, data.get('camera') or {}),
            solver=_section(SolverSettings, data.get('solver') or {}),
        )

    def to_yaml(self, config_path: str) -> None:
        """Save configuration to a YAML file."""
        data = {
            'camera': asdict(self.camera),
            'solver': asdict(self.solver),
        }

        with open(config_path, 'w') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

        logger.info(f"Configuration saved to {config_path}")
