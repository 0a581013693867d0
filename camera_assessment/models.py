"""
Value objects shared across the package.

Angles are carried as :class:`Angle` instances so that degrees and radians
cannot be mixed up at function boundaries. Radians are canonical.
"""

import numpy as np
from dataclasses import dataclass
from typing import Any, Dict

from .config import CameraConfiguration, DEFAULT_CAMERA
from .errors import InvalidZoomLevelError


@dataclass(frozen=True)
class Angle:
    """Immutable angle, stored in radians."""
    radians: float

    @classmethod
    def from_radians(cls, radians: float) -> "Angle":
        return cls(float(radians))

    @classmethod
    def from_degrees(cls, degrees: float) -> "Angle":
        return cls(float(np.radians(degrees)))

    @property
    def degrees(self) -> float:
        return float(np.degrees(self.radians))


@dataclass(frozen=True)
class ZoomLevel:
    """
    Camera zoom level.

    The focal length grows linearly with the level from the base focal
    length and is clamped at the hardware maximum. There is no upper bound
    on the level itself.
    """
    level: float

    def __post_init__(self):
        if not self.level >= 1:
            raise InvalidZoomLevelError(self.level)

    def focal_length(self, camera: CameraConfiguration = DEFAULT_CAMERA) -> float:
        """Focal length in mm for this zoom level on the given camera."""
        return float(min(camera.focal_length_min * self.level, camera.focal_length_max))


@dataclass(frozen=True)
class CameraViewAnalysis:
    """
    Result of analysing one zoom level.

    Attributes:
        distance_meters: Distance to the farthest marking that still satisfies the gap
        tilt_angle: Tilt (pitch-down) used to view that marking
        line_count: Number of markings up to that distance
        focal_length_mm: Focal length of the analysed zoom level
    """
    distance_meters: float
    tilt_angle: Angle
    line_count: int
    focal_length_mm: float

    @property
    def tilt_angle_radians(self) -> float:
        return self.tilt_angle.radians

    @property
    def tilt_angle_degrees(self) -> float:
        return self.tilt_angle.degrees

    def to_dict(self) -> Dict[str, Any]:
        """Output record consumed by formatters and external callers."""
        return {
            'distance_meters': self.distance_meters,
            'tilt_angle_radians': self.tilt_angle_radians,
            'tilt_angle_degrees': self.tilt_angle_degrees,
            'line_count': self.line_count,
            'focal_length_mm': self.focal_length_mm,
        }
