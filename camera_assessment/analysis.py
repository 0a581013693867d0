"""
Camera view analysis module.

This is the main module that orchestrates one analysis:
    1. Validate the zoom level, pixel gap and per-call overrides
    2. Resolve the boundary cases (gap above or equal to the vertical resolution)
    3. Derive the focal length from the zoom level
    4. Search for the maximum distance and solve the tilt used there
    5. Assemble the CameraViewAnalysis record
"""

import math
from dataclasses import replace
from numbers import Real
from typing import Optional, Union
import logging

from .config import CameraConfiguration, SolverSettings, DEFAULT_CAMERA, DEFAULT_SOLVER
from .errors import ImpossibleConstraintError, ValidationError
from .models import Angle, CameraViewAnalysis, ZoomLevel
from .optimization import find_max_distance_with_details

logger = logging.getLogger(__name__)


def resolve_camera(
    camera: Optional[CameraConfiguration] = None,
    camera_height: Optional[float] = None,
    marker_gap: Optional[float] = None,
) -> CameraConfiguration:
    """
    Apply per-call overrides to a camera configuration.

    The shared configuration is never modified; overrides produce a copy,
    which re-runs the configuration's own validation.
    """
    camera = camera or DEFAULT_CAMERA
    overrides = {}
    if camera_height is not None:
        overrides['height'] = camera_height
    if marker_gap is not None:
        overrides['marker_gap'] = marker_gap
    return replace(camera, **overrides) if overrides else camera


def _validate_pixel_gap(min_pixel_gap: float) -> None:
    if isinstance(min_pixel_gap, bool) or not isinstance(min_pixel_gap, Real):
        raise ValidationError(f"Minimum pixel gap must be a number, got: {min_pixel_gap!r}")
    if math.isnan(min_pixel_gap) or min_pixel_gap < 0:
        raise ValidationError(f"Minimum pixel gap must be non-negative, got: {min_pixel_gap}")


def analyze(
    zoom_level: Union[float, ZoomLevel],
    min_pixel_gap: float,
    camera_height: Optional[float] = None,
    marker_gap: Optional[float] = None,
    camera: Optional[CameraConfiguration] = None,
    settings: Optional[SolverSettings] = None,
    strict: bool = True,
) -> CameraViewAnalysis:
    """
    Analyze the camera view for a zoom level and minimum pixel gap.

    Args:
        zoom_level: Zoom level (>= 1) or a ZoomLevel instance
        min_pixel_gap: Minimum vertical separation between consecutive markings (pixels)
        camera_height: Optional override of the camera height in meters
        marker_gap: Optional override of the marking spacing in meters
        camera: Camera configuration (defaults to the reference rig)
        settings: Solver settings
        strict: Raise ImpossibleConstraintError for a gap above the vertical
            resolution; when False, return a zero-line analysis instead

    Returns:
        CameraViewAnalysis with distance, tilt angle, line count and focal length

    Raises:
        InvalidZoomLevelError: If the zoom level is below 1
        ValidationError: If the gap is negative or an override is not positive
        ImpossibleConstraintError: If the gap exceeds the sensor height (strict mode)
        SearchDivergedError: If the gap is 0, so that no distance bounds the search
    """
    zoom = zoom_level if isinstance(zoom_level, ZoomLevel) else ZoomLevel(zoom_level)
    _validate_pixel_gap(min_pixel_gap)
    camera = resolve_camera(camera, camera_height, marker_gap)
    settings = settings or DEFAULT_SOLVER

    focal_length = zoom.focal_length(camera)
    resolution = camera.resolution_y

    if min_pixel_gap > resolution:
        if strict:
            raise ImpossibleConstraintError(min_pixel_gap, resolution)
        logger.info(f"Gap {min_pixel_gap} px exceeds sensor height {resolution} px, no markings fit")
        return CameraViewAnalysis(
            distance_meters=0.0,
            tilt_angle=Angle(0.0),
            line_count=0,
            focal_length_mm=focal_length,
        )

    result = find_max_distance_with_details(focal_length, min_pixel_gap, camera, settings)

    logger.info(
        f"Zoom {zoom.level}: {result.distance} m ({result.line_count} markings), "
        f"tilt {result.optimal_angle.degrees:.2f} deg, f={focal_length} mm"
    )

    return CameraViewAnalysis(
        distance_meters=result.distance,
        tilt_angle=result.optimal_angle,
        line_count=result.line_count,
        focal_length_mm=focal_length,
    )


def compute_max_distance(
    zoom_level: Union[float, ZoomLevel],
    min_pixel_gap: float,
    camera_height: Optional[float] = None,
    marker_gap: Optional[float] = None,
    camera: Optional[CameraConfiguration] = None,
    settings: Optional[SolverSettings] = None,
) -> float:
    """
    Maximum marking distance in meters; 0 when the gap cannot fit on the sensor.

    Raises the same errors as analyze() except ImpossibleConstraintError,
    including SearchDivergedError for a zero gap.
    """
    return analyze(
        zoom_level,
        min_pixel_gap,
        camera_height=camera_height,
        marker_gap=marker_gap,
        camera=camera,
        settings=settings,
        strict=False,
    ).distance_meters
