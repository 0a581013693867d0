"""
Tests for the value objects.
"""

import dataclasses

import pytest
import numpy as np

from camera_assessment.config import CameraConfiguration
from camera_assessment.errors import InvalidZoomLevelError
from camera_assessment.models import Angle, ZoomLevel, CameraViewAnalysis


class TestAngle:
    """Tests for the canonical-radians angle."""

    def test_from_degrees(self):
        assert Angle.from_degrees(180).radians == pytest.approx(np.pi)
        assert Angle.from_degrees(-90).radians == pytest.approx(-np.pi / 2)

    def test_from_radians(self):
        assert Angle.from_radians(np.pi / 2).degrees == pytest.approx(90)

    def test_round_trip(self):
        """Degrees and radians describe the same angle."""
        angle = Angle.from_degrees(33.3)
        assert angle.degrees == pytest.approx(33.3, rel=1e-12)

    def test_zero(self):
        assert Angle(0.0).degrees == 0.0

    def test_immutable(self):
        """Angles cannot be changed after construction."""
        angle = Angle(1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            angle.radians = 2.0

    def test_equality(self):
        assert Angle(0.25) == Angle.from_radians(0.25)


class TestZoomLevel:
    """Tests for zoom level validation and focal length mapping."""

    def test_level_one_is_base_focal_length(self):
        assert ZoomLevel(1).focal_length() == pytest.approx(4.8)

    def test_linear_mapping(self):
        assert ZoomLevel(2.5).focal_length() == pytest.approx(12.0)
        assert ZoomLevel(10).focal_length() == pytest.approx(48.0)

    def test_clamped_at_hardware_maximum(self):
        """Levels beyond the maximum keep the maximum focal length."""
        assert ZoomLevel(30).focal_length() == 120.0
        assert ZoomLevel(1000).focal_length() == 120.0

    def test_uses_camera_bounds(self):
        camera = CameraConfiguration(focal_length_min=6.0, focal_length_max=30.0)
        assert ZoomLevel(2).focal_length(camera) == pytest.approx(12.0)
        assert ZoomLevel(10).focal_length(camera) == 30.0

    @pytest.mark.parametrize("level", [0, 0.99, -1, float('nan')])
    def test_rejects_levels_below_one(self, level):
        with pytest.raises(InvalidZoomLevelError):
            ZoomLevel(level)

    def test_error_message(self):
        with pytest.raises(InvalidZoomLevelError, match="Zoom level must be at least 1, got: 0.5"):
            ZoomLevel(0.5)


class TestCameraViewAnalysis:
    """Tests for the analysis record."""

    def test_angle_accessors(self):
        analysis = CameraViewAnalysis(
            distance_meters=100.0,
            tilt_angle=Angle.from_degrees(10),
            line_count=50,
            focal_length_mm=4.8,
        )

        assert analysis.tilt_angle_degrees == pytest.approx(10)
        assert analysis.tilt_angle_radians == pytest.approx(np.radians(10))
        assert analysis.to_dict()['line_count'] == 50
