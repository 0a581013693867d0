"""
Tests for the analysis orchestrator.
"""

import math

import pytest
import numpy as np

from camera_assessment.analysis import analyze, compute_max_distance, resolve_camera
from camera_assessment.config import CameraConfiguration, SolverSettings, DEFAULT_CAMERA
from camera_assessment.errors import (
    ImpossibleConstraintError,
    InvalidZoomLevelError,
    SearchDivergedError,
    ValidationError,
)
from camera_assessment.models import CameraViewAnalysis, ZoomLevel


class TestScenarios:
    """Reference scenarios on the default rig (20 m, 2560x1440, 2 m markings)."""

    def test_gap_above_resolution_non_strict(self):
        """2000 px cannot fit on a 1440 px sensor: zero lines."""
        result = analyze(1, 2000, strict=False)

        assert result.distance_meters == 0
        assert result.line_count == 0
        assert result.tilt_angle_radians == 0

    def test_gap_above_resolution_strict(self):
        """In strict mode the impossible constraint is raised."""
        with pytest.raises(ImpossibleConstraintError) as exc_info:
            analyze(1, 2000)

        assert exc_info.value.min_pixel_gap == 2000
        assert exc_info.value.resolution == 1440

    def test_gap_equal_to_resolution(self):
        """A full-frame gap leaves exactly one marking."""
        result = analyze(1, 1440)

        assert result.distance_meters == 2
        assert result.line_count == 1
        assert 0 < result.tilt_angle_radians < np.pi / 2

    def test_zoom_5(self):
        """Zoom 5 at 10 px reaches past 200 m and beyond zoom 1."""
        zoom_1 = analyze(1, 10)
        zoom_5 = analyze(5, 10)

        assert 200 <= zoom_5.distance_meters <= 240
        assert zoom_5.distance_meters > zoom_1.distance_meters

    def test_zoom_25_does_not_plateau(self):
        """Zoom 25 keeps growing well past the zoom 5 result."""
        zoom_5 = analyze(5, 10)
        zoom_25 = analyze(25, 10)

        assert zoom_25.distance_meters > 400
        assert zoom_25.distance_meters > 2 * zoom_5.distance_meters


class TestResult:
    """Tests for the assembled analysis record."""

    def test_fields(self):
        """Distance, line count and focal length are consistent."""
        result = analyze(10, 50)

        assert isinstance(result, CameraViewAnalysis)
        assert result.focal_length_mm == pytest.approx(48.0)
        assert result.line_count == result.distance_meters / DEFAULT_CAMERA.marker_gap
        assert 0 < result.tilt_angle_degrees < 90

    def test_to_dict(self):
        """The output record carries both angle units."""
        record = analyze(3, 20).to_dict()

        assert set(record) == {
            'distance_meters',
            'tilt_angle_radians',
            'tilt_angle_degrees',
            'line_count',
            'focal_length_mm',
        }
        assert record['tilt_angle_degrees'] == pytest.approx(math.degrees(record['tilt_angle_radians']))

    def test_accepts_zoom_level_instance(self):
        """A ZoomLevel may be passed instead of a number."""
        assert analyze(ZoomLevel(4), 25) == analyze(4, 25)

    def test_focal_length_clamped_above_max_zoom(self):
        """Zoom beyond the hardware maximum keeps the maximum focal length."""
        assert analyze(40, 10).focal_length_mm == DEFAULT_CAMERA.focal_length_max
        assert analyze(40, 10).distance_meters == analyze(25, 10).distance_meters

    def test_deterministic(self):
        """Identical inputs give identical results."""
        assert analyze(7, 33) == analyze(7, 33)


class TestOverrides:
    """Tests for per-call camera height and marker gap."""

    def test_higher_camera_sees_farther(self):
        """Doubling the height spreads the markings apart in the image."""
        assert analyze(5, 10, camera_height=40).distance_meters > analyze(5, 10).distance_meters

    def test_marker_gap_override(self):
        """Line count follows the overridden spacing."""
        result = analyze(5, 10, marker_gap=1.0)
        assert result.distance_meters == result.line_count * 1.0

    def test_overrides_do_not_mutate_shared_config(self):
        """The shared configuration stays untouched."""
        camera = resolve_camera(DEFAULT_CAMERA, camera_height=35.0)

        assert camera.height == 35.0
        assert DEFAULT_CAMERA.height == 20.0

    def test_custom_camera(self):
        """A different sensor resolution moves the boundary cases."""
        camera = CameraConfiguration(resolution_y=1080)
        assert analyze(1, 1080, camera=camera).line_count == 1
        assert analyze(1, 1440, camera=camera, strict=False).line_count == 0


class TestValidation:
    """Tests for input validation."""

    @pytest.mark.parametrize("zoom", [0, 0.5, -3])
    def test_zoom_below_one(self, zoom):
        """Zoom levels below 1 are rejected."""
        with pytest.raises(InvalidZoomLevelError) as exc_info:
            analyze(zoom, 10)
        assert exc_info.value.zoom_level == zoom

    @pytest.mark.parametrize("gap", [-1, -0.001, float('nan')])
    def test_invalid_gap(self, gap):
        """Negative or NaN gaps are rejected."""
        with pytest.raises(ValidationError):
            analyze(1, gap)

    def test_non_numeric_gap(self):
        """Gaps must be numbers."""
        with pytest.raises(ValidationError):
            analyze(1, "10")

    @pytest.mark.parametrize("kwargs", [{'camera_height': 0}, {'camera_height': -5}, {'marker_gap': 0}])
    def test_non_positive_overrides(self, kwargs):
        """Height and marker gap overrides must be positive."""
        with pytest.raises(ValidationError):
            analyze(1, 10, **kwargs)

    def test_zero_gap_diverges(self):
        """A zero gap admits every distance, so the search gives up."""
        settings = SolverSettings(max_bound_doublings=3)
        with pytest.raises(SearchDivergedError):
            analyze(5, 0, settings=settings)
        with pytest.raises(SearchDivergedError):
            compute_max_distance(5, 0, settings=settings)

    def test_validation_errors_are_value_errors(self):
        """Callers catching ValueError also see validation failures."""
        with pytest.raises(ValueError):
            analyze(0, 10)


class TestComputeMaxDistance:
    """Tests for the distance-only convenience wrapper."""

    def test_boundaries(self):
        """Impossible gaps give 0, full-frame gaps give one marking."""
        assert compute_max_distance(1, 2000) == 0
        assert compute_max_distance(1, 1440) == 2
        assert compute_max_distance(25, 2000) == 0
        assert compute_max_distance(25, 1440) == 2

    def test_matches_analyze(self):
        """The wrapper returns the analysed distance."""
        assert compute_max_distance(6, 18) == analyze(6, 18).distance_meters
