"""Error types raised while resolving bundle containers.

Every failure of a container resolution surfaces as a single
:class:`TargetResolutionError` carrying a human-readable message and an
:class:`ErrorKind`. Cancellation is never an error: a cancelled resolution
returns an empty result instead.
"""

from enum import Enum

__all__ = [
    "ErrorKind",
    "TargetResolutionError",
    "NotFoundError",
    "InvalidLocationError",
    "InvalidDescriptorError",
    "TargetDefinitionError",
]


class ErrorKind(str, Enum):
    """Category of a resolution failure."""

    NOT_FOUND = "not-found"
    INVALID_LOCATION = "invalid-location"
    INVALID_DESCRIPTOR = "invalid-descriptor"


class TargetResolutionError(Exception):
    """Raised when a bundle container cannot be resolved."""

    kind: ErrorKind = ErrorKind.NOT_FOUND

    def __init__(self, message: str, kind: ErrorKind | None = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind


class NotFoundError(TargetResolutionError):
    """No feature directory, no matching version, or no plugins directory."""

    kind = ErrorKind.NOT_FOUND


class InvalidLocationError(TargetResolutionError):
    """A location template could not be expanded."""

    kind = ErrorKind.INVALID_LOCATION


class InvalidDescriptorError(TargetResolutionError):
    """A feature descriptor is missing or cannot be parsed."""

    kind = ErrorKind.INVALID_DESCRIPTOR


class TargetDefinitionError(Exception):
    """Raised when a target definition file is unreadable or malformed."""

    pass
