"""
Failures that end a load attempt.

None of them is fatal to the process: the orchestrator logs the error and the
viewer keeps rendering whatever the scene already holds.
"""


class ViewerError(Exception):
    """Base class for viewer errors."""


class LoadFailure(ViewerError):
    """A material or mesh file could not be read or decoded."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class DegenerateGeometry(ViewerError):
    """The mesh has no extent, so there is nothing to scale."""


class InvalidCameraConfig(ViewerError, ValueError):
    """Camera parameters that cannot produce a finite viewport."""
