"""
Batch evaluation of several zoom levels.

Each zoom level is analysed independently. A failure for one zoom level is
recorded on its result and does not stop the others.
"""

from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import List, Optional, Sequence
import logging

from tqdm import tqdm

from .analysis import analyze, resolve_camera
from .config import Config, CameraConfiguration, SolverSettings
from .errors import CameraAssessmentError
from .models import CameraViewAnalysis

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Result of processing a single zoom level."""
    zoom_level: float
    success: bool
    analysis: Optional[CameraViewAnalysis] = None
    error: Optional[str] = None


def _process_zoom(
    zoom_level: float,
    min_pixel_gap: float,
    camera: CameraConfiguration,
    settings: SolverSettings,
) -> BatchResult:
    try:
        analysis = analyze(zoom_level, min_pixel_gap, camera=camera, settings=settings, strict=False)
    except CameraAssessmentError as e:
        return BatchResult(zoom_level=zoom_level, success=False, error=str(e))
    return BatchResult(zoom_level=zoom_level, success=True, analysis=analysis)


def process_batch(
    zoom_levels: Sequence[float],
    min_pixel_gap: float,
    camera_height: Optional[float] = None,
    marker_gap: Optional[float] = None,
    config: Optional[Config] = None,
    workers: int = 1,
    progress: bool = False,
) -> List[BatchResult]:
    """
    Analyze every zoom level for the same pixel gap.

    Args:
        zoom_levels: Zoom levels to process
        min_pixel_gap: Minimum vertical separation between consecutive markings (pixels)
        camera_height: Optional override of the camera height in meters
        marker_gap: Optional override of the marking spacing in meters
        config: Camera and solver configuration (defaults when None)
        workers: Number of worker processes; 1 runs in-process
        progress: Show a progress bar

    Returns:
        One BatchResult per zoom level, in input order
    """
    config = config or Config()
    camera = resolve_camera(config.camera, camera_height, marker_gap)
    settings = config.solver

    logger.info(f"Processing {len(zoom_levels)} zoom levels with gap {min_pixel_gap} px")

    if workers <= 1:
        iterator = tqdm(zoom_levels, desc="Analyzing", unit="zoom", disable=not progress)
        results = [_process_zoom(z, min_pixel_gap, camera, settings) for z in iterator]
    else:
        ordered: List[Optional[BatchResult]] = [None] * len(zoom_levels)
        pbar = tqdm(total=len(zoom_levels), desc="Analyzing", unit="zoom", disable=not progress)
        with ProcessPoolExecutor(max_workers=workers) as executor:
            future_to_idx = {
                executor.submit(_process_zoom, z, min_pixel_gap, camera, settings): idx
                for idx, z in enumerate(zoom_levels)
            }
            for future in as_completed(future_to_idx):
                ordered[future_to_idx[future]] = future.result()
                pbar.update(1)
        pbar.close()
        results = ordered

    failed = get_failed_results(results)
    for result in failed:
        logger.warning(f"Zoom {result.zoom_level} failed: {result.error}")

    logger.info(f"Batch complete: {len(results) - len(failed)}/{len(results)} succeeded")
    return results


def get_successful_results(results: List[BatchResult]) -> List[BatchResult]:
    """Results that carry an analysis."""
    return [r for r in results if r.success and r.analysis is not None]


def get_failed_results(results: List[BatchResult]) -> List[BatchResult]:
    """Results that carry an error message."""
    return [r for r in results if not r.success and r.error is not None]
