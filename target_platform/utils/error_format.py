"""Safe error message formatting utilities.

Ensures exceptions always have useful display messages, even when their str()
representation is empty (e.g., KeyboardInterrupt, a bare TimeoutError).
"""

from __future__ import annotations

from rich.markup import escape as _escape_markup

from target_platform.errors import ErrorKind
from target_platform.errors import TargetResolutionError

# Friendly messages for exception types known to have empty str()
FRIENDLY_MESSAGES: dict[type, str] = {
    TimeoutError: "Operation timed out.",
    KeyboardInterrupt: "Operation interrupted by user.",
    PermissionError: "Permission denied.",
}

KIND_LABELS: dict[ErrorKind, str] = {
    ErrorKind.NOT_FOUND: "Not found",
    ErrorKind.INVALID_LOCATION: "Invalid location",
    ErrorKind.INVALID_DESCRIPTOR: "Invalid feature descriptor",
}


def format_error_message(e: BaseException, *, include_type: bool = True) -> str:
    """Format an exception into a useful display message.

    Resolution errors are labelled by their kind rather than their class name.

    Examples:
        >>> format_error_message(ValueError("invalid input"))
        'ValueError: invalid input'

        >>> format_error_message(NotFoundError("Feature 'x' not found in /opt"))
        "Not found: Feature 'x' not found in /opt"
    """
    error_str = str(e)
    if isinstance(e, TargetResolutionError):
        error_type = KIND_LABELS.get(e.kind, type(e).__name__)
    else:
        error_type = type(e).__name__

    if error_str:
        if include_type and error_type not in error_str:
            return f"{error_type}: {error_str}"
        return error_str

    for exc_type, friendly_msg in FRIENDLY_MESSAGES.items():
        if isinstance(e, exc_type):
            return f"{error_type}: {friendly_msg}"

    return f"{error_type}: (no additional details)"


def escape_markup(value: object) -> str:
    """Escape a value for safe interpolation into Rich markup strings.

    Paths and error messages may contain brackets that Rich would otherwise
    parse as markup tags.
    """
    return _escape_markup(str(value))
