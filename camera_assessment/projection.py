"""
Ground projection module for a pitched pinhole camera.

Coordinate System:
    - World: the camera sits at height H above the ground plane, ground
      points lie along the optical azimuth at horizontal distance d
    - Camera frame: Y up, Z along the optical axis, after pitching by the
      tilt angle
    - Image rows: origin at the top edge, rows grow toward the bottom

Projection Model:
    1. Pitch rotation:  y_cam = -H*cos(t) - d*sin(t),  z_cam = -H*sin(t) + d*cos(t)
    2. Perspective:     y_img = f * y_cam / z_cam   (mm on the sensor)
    3. Pixel row:       row = (0.5 - y_img / sensor_height) * resolution_y

Nearer markings always map to larger rows (bottom of the frame) and farther
markings to smaller rows (top of the frame).
"""

import numpy as np
from dataclasses import dataclass
from typing import Tuple
import logging

from .config import CameraConfiguration, DEFAULT_CAMERA
from .errors import BehindCameraError, ValidationError
from .models import Angle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectionParameters:
    """
    Inputs to a single projection.

    Attributes:
        focal_length: Focal length in mm
        tilt: Downward pitch of the optical axis
        camera_height: Camera height above the ground in meters
    """
    focal_length: float
    tilt: Angle
    camera_height: float

    def __post_init__(self):
        if not self.focal_length > 0:
            raise ValidationError(f"Focal length must be positive, got: {self.focal_length}")


def project_ground_point(
    distance: float,
    params: ProjectionParameters,
    camera: CameraConfiguration = DEFAULT_CAMERA,
) -> float:
    """
    Project a ground point to its pixel row.

    Args:
        distance: Horizontal ground distance from the camera foot in meters
        params: Focal length, tilt and camera height
        camera: Camera configuration supplying the sensor geometry

    Returns:
        Vertical pixel coordinate of the point

    Raises:
        BehindCameraError: If the point is not in front of the lens
    """
    tilt = params.tilt.radians
    height = params.camera_height

    y_cam = -height * np.cos(tilt) - distance * np.sin(tilt)
    z_cam = -height * np.sin(tilt) + distance * np.cos(tilt)

    if z_cam <= 0:
        raise BehindCameraError(distance, float(z_cam))

    y_img = params.focal_length * (y_cam / z_cam)

    return float((0.5 - y_img / camera.sensor_height) * camera.resolution_y)


def pixel_gap(
    distance_a: float,
    distance_b: float,
    params: ProjectionParameters,
    camera: CameraConfiguration = DEFAULT_CAMERA,
) -> float:
    """Vertical pixel separation between the projections of two ground points."""
    row_a = project_ground_point(distance_a, params, camera)
    row_b = project_ground_point(distance_b, params, camera)
    return abs(row_a - row_b)


def project_marking_rows(
    line_count: int,
    params: ProjectionParameters,
    camera: CameraConfiguration = DEFAULT_CAMERA,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Project markings 1..line_count at once.

    Markings that fall behind the camera are reported through the mask
    rather than raised, which is what renderers drawing a whole strip need.

    Args:
        line_count: Number of markings, spaced by camera.marker_gap
        params: Focal length, tilt and camera height
        camera: Camera configuration

    Returns:
        Tuple of:
            - rows: line_count-element array of pixel rows (NaN when invalid)
            - valid: line_count-element boolean array, True when in front of the lens
    """
    distances = np.arange(1, line_count + 1, dtype=np.float64) * camera.marker_gap
    tilt = params.tilt.radians
    height = params.camera_height

    y_cam = -height * np.cos(tilt) - distances * np.sin(tilt)
    z_cam = -height * np.sin(tilt) + distances * np.cos(tilt)

    valid = z_cam > 0
    rows = np.full(line_count, np.nan)
    y_img = params.focal_length * (y_cam[valid] / z_cam[valid])
    rows[valid] = (0.5 - y_img / camera.sensor_height) * camera.resolution_y

    if not np.all(valid):
        logger.debug(f"{int(np.sum(~valid))} of {line_count} markings behind the camera")

    return rows, valid
