"""
Camera Assessment Package

Determines, for an elevated fixed-height camera observing evenly spaced
parallel ground markings, the farthest marking that can still be resolved at
a given zoom level, and the camera tilt that achieves it.

Pipeline:
    Zoom level → focal length → distance search (tilt solver + ground
    projection per probe) → CameraViewAnalysis

Conventions:
    - Ideal pinhole camera, pitch only (no roll or yaw)
    - Tilt is a downward pitch from horizontal, carried as an Angle
    - Pixel rows grow toward the bottom of the frame; nearer markings
      project to larger rows
"""

from .config import Config, CameraConfiguration, SolverSettings, DEFAULT_CAMERA, DEFAULT_SOLVER
from .errors import (
    CameraAssessmentError,
    ValidationError,
    InvalidZoomLevelError,
    ZoomRangeError,
    ImpossibleConstraintError,
    BehindCameraError,
    SearchDivergedError,
)
from .models import Angle, ZoomLevel, CameraViewAnalysis
from .projection import ProjectionParameters, project_ground_point, pixel_gap, project_marking_rows
from .optimization import MaxDistanceResult, solve_tilt, find_max_distance, find_max_distance_with_details
from .analysis import analyze, compute_max_distance
from .zoom_range import parse_zoom_range
from .batch import BatchResult, process_batch, get_successful_results, get_failed_results

__version__ = "1.0.0"
__all__ = [
    "Config",
    "CameraConfiguration",
    "SolverSettings",
    "DEFAULT_CAMERA",
    "DEFAULT_SOLVER",
    "CameraAssessmentError",
    "ValidationError",
    "InvalidZoomLevelError",
    "ZoomRangeError",
    "ImpossibleConstraintError",
    "BehindCameraError",
    "SearchDivergedError",
    "Angle",
    "ZoomLevel",
    "CameraViewAnalysis",
    "ProjectionParameters",
    "project_ground_point",
    "pixel_gap",
    "project_marking_rows",
    "MaxDistanceResult",
    "solve_tilt",
    "find_max_distance",
    "find_max_distance_with_details",
    "analyze",
    "compute_max_distance",
    "parse_zoom_range",
    "BatchResult",
    "process_batch",
    "get_successful_results",
    "get_failed_results",
]
