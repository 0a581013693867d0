"""
Numerical solvers for camera tilt and maximum viewing distance.

Tilt solver:
    Damped Newton-Raphson on the row error of the target marking, so that it
    lands near the bottom of the frame (target_row_fraction of the vertical
    resolution). Non-convergence is not an error; the best estimate is
    returned.

Distance search:
    The feasibility predicate "pixel gap between the marking at d and its
    predecessor, at the tilt solved for d, is at least the minimum" is
    non-increasing in d. The upper bound is found by doubling until the
    predicate fails, then bisection narrows the interval. No maximum
    distance is encoded; the doubling count is only a safety valve.
"""

import numpy as np
from dataclasses import dataclass
from typing import Dict
import logging

from .config import CameraConfiguration, SolverSettings, DEFAULT_CAMERA, DEFAULT_SOLVER
from .errors import BehindCameraError, SearchDivergedError, ValidationError
from .models import Angle
from .projection import ProjectionParameters, project_ground_point, pixel_gap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MaxDistanceResult:
    """Outcome of the distance search."""
    distance: float
    optimal_angle: Angle
    line_count: int


def solve_tilt(
    target_distance: float,
    focal_length: float,
    camera: CameraConfiguration = DEFAULT_CAMERA,
    settings: SolverSettings = DEFAULT_SOLVER,
) -> Angle:
    """
    Find the tilt that places the marking at target_distance near the frame bottom.

    Args:
        target_distance: Ground distance of the marking in meters
        focal_length: Focal length in mm
        camera: Camera configuration (camera.height is the camera height)
        settings: Solver settings

    Returns:
        Best-effort tilt angle, strictly inside (0, pi/2)
    """
    if not target_distance > 0:
        raise ValidationError(f"Target distance must be positive, got: {target_distance}")

    lower = settings.tilt_margin
    upper = np.pi / 2 - settings.tilt_margin
    target_row = settings.target_row_fraction * camera.resolution_y
    delta = settings.tilt_perturbation

    def row_at(tilt: float) -> float:
        params = ProjectionParameters(focal_length, Angle(tilt), camera.height)
        return project_ground_point(target_distance, params, camera)

    # Initial estimate: look straight at the target
    tilt = float(np.clip(np.arctan(camera.height / target_distance), lower, upper))

    for _ in range(settings.max_newton_iterations):
        try:
            row = row_at(tilt)
            error = row - target_row

            if abs(error) < settings.pixel_tolerance:
                break

            derivative = (row_at(tilt + delta) - row) / delta
        except BehindCameraError:
            # Back off toward horizontal until the target is in front of the lens
            tilt = 0.5 * (tilt + lower)
            logger.debug(f"Target {target_distance} m behind camera, tilt backed off to {tilt:.6f} rad")
            continue

        if abs(derivative) < settings.min_derivative:
            logger.debug(f"Negligible derivative at tilt {tilt:.6f} rad, stopping")
            break

        # Damped update
        tilt = float(np.clip(tilt - settings.damping * error / derivative, lower, upper))
    else:
        logger.debug(
            f"Tilt solver did not converge for {target_distance} m "
            f"within {settings.max_newton_iterations} iterations"
        )

    return Angle(tilt)


def _is_feasible(
    line_count: int,
    focal_length: float,
    min_pixel_gap: float,
    camera: CameraConfiguration,
    settings: SolverSettings,
) -> bool:
    """Check the gap between marking line_count and its predecessor at the solved tilt."""
    distance = line_count * camera.marker_gap
    try:
        tilt = solve_tilt(distance, focal_length, camera, settings)
        params = ProjectionParameters(focal_length, tilt, camera.height)
        gap = pixel_gap(distance, distance - camera.marker_gap, params, camera)
    except BehindCameraError:
        return False
    return gap >= min_pixel_gap


def _search_line_count(
    focal_length: float,
    min_pixel_gap: float,
    camera: CameraConfiguration,
    settings: SolverSettings,
) -> int:
    """Largest feasible marking index for a satisfiable, non-trivial gap."""
    gap = camera.marker_gap
    cache: Dict[int, bool] = {}

    def feasible(line_count: int) -> bool:
        # The first marking has no predecessor and is always admissible
        if line_count <= 1:
            return True
        if line_count not in cache:
            cache[line_count] = _is_feasible(line_count, focal_length, min_pixel_gap, camera, settings)
        return cache[line_count]

    # Exponential expansion of the upper bound
    best = 1
    bound = max(settings.initial_search_markings, 2)
    doublings = 0
    while feasible(bound):
        best = bound
        if doublings >= settings.max_bound_doublings:
            raise SearchDivergedError(
                f"Distance search still feasible at {bound * gap} m after "
                f"{doublings} bound doublings (focal length {focal_length} mm, "
                f"min gap {min_pixel_gap} px)"
            )
        bound *= 2
        doublings += 1
        logger.debug(f"Search bound expanded to {bound * gap} m")

    # Bisection between the last feasible and first infeasible bound
    low = best * gap
    high = bound * gap
    while high - low > settings.distance_tolerance:
        mid = (low + high) / 2
        line_count = int(np.floor(mid / gap))
        if feasible(line_count):
            low = mid
            best = max(best, line_count)
        else:
            high = mid

    return best


def find_max_distance_with_details(
    focal_length: float,
    min_pixel_gap: float,
    camera: CameraConfiguration = DEFAULT_CAMERA,
    settings: SolverSettings = DEFAULT_SOLVER,
) -> MaxDistanceResult:
    """
    Find the farthest marking whose gap to its predecessor meets min_pixel_gap.

    Args:
        focal_length: Focal length in mm
        min_pixel_gap: Required vertical separation in pixels
        camera: Camera configuration
        settings: Solver settings

    Returns:
        MaxDistanceResult with the distance, the tilt solved for it and the
        number of markings. An unsatisfiable gap yields zero distance and a
        zero angle.

    Raises:
        SearchDivergedError: If the bound expansion exceeds its safety budget
    """
    resolution = camera.resolution_y

    if min_pixel_gap > resolution:
        return MaxDistanceResult(distance=0.0, optimal_angle=Angle(0.0), line_count=0)

    if min_pixel_gap == resolution:
        line_count = 1
    else:
        line_count = _search_line_count(focal_length, min_pixel_gap, camera, settings)

    distance = line_count * camera.marker_gap
    tilt = solve_tilt(distance, focal_length, camera, settings)

    logger.debug(
        f"Max distance {distance} m ({line_count} markings) at f={focal_length} mm, "
        f"gap={min_pixel_gap} px, tilt={tilt.degrees:.3f} deg"
    )
    return MaxDistanceResult(distance=distance, optimal_angle=tilt, line_count=line_count)


def find_max_distance(
    focal_length: float,
    min_pixel_gap: float,
    camera: CameraConfiguration = DEFAULT_CAMERA,
    settings: SolverSettings = DEFAULT_SOLVER,
) -> float:
    """Farthest satisfying marking distance in meters (a multiple of the marker gap)."""
    return find_max_distance_with_details(
        focal_length, min_pixel_gap, camera, settings
    ).distance
