"""Custom exceptions for camera assessment."""


class CameraAssessmentError(Exception):
    """Base camera assessment error."""
    pass


class ValidationError(CameraAssessmentError, ValueError):
    """Invalid input values (zoom level, pixel gap, configuration)."""
    pass


class InvalidZoomLevelError(ValidationError):
    """Zoom level below 1."""

    def __init__(self, zoom_level: float):
        super().__init__(f"Zoom level must be at least 1, got: {zoom_level}")
        self.zoom_level = zoom_level


class ZoomRangeError(ValidationError):
    """Malformed zoom range string."""
    pass


class ImpossibleConstraintError(CameraAssessmentError):
    """Requested pixel gap cannot fit on the sensor."""

    def __init__(self, min_pixel_gap: float, resolution: int):
        super().__init__(
            f"Impossible constraint: minimum pixel gap ({min_pixel_gap}) "
            f"exceeds sensor height ({resolution})"
        )
        self.min_pixel_gap = min_pixel_gap
        self.resolution = resolution


class BehindCameraError(CameraAssessmentError):
    """
    Ground point does not lie in front of the lens.

    Raised by the projection and absorbed by the solvers, which treat the
    probe as infeasible.
    """

    def __init__(self, distance: float, depth: float):
        super().__init__(f"Point behind the camera: distance={distance}, depth={depth}")
        self.distance = distance
        self.depth = depth


class SearchDivergedError(CameraAssessmentError, RuntimeError):
    """Distance search exhausted its bound expansion budget."""
    pass
