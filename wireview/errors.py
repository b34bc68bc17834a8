"""Exceptions raised by the viewing pipeline and the scene loader."""


class WireviewError(Exception):
    """Base class for every error raised by wireview."""


class InvalidViewConfiguration(WireviewError, ValueError):
    """
    The view parameters cannot produce a camera basis or a clip volume.

    Raised by ViewParameters.validate(); the transform builders assume
    their inputs already passed that check.
    """


class DegenerateClip(WireviewError, ArithmeticError):
    """
    Clipping a segment produced an undefined (NaN) intersection parameter, or
    failed to settle within the per-face bound.

    The pipeline driver logs this and drops the segment.
    """


class SceneFormatError(WireviewError, ValueError):
    """A scene description is missing keys or carries malformed values."""
