"""
Error types raised by the psstyle analysis core.
"""


class PsStyleError(Exception):
    """Base class for all psstyle errors."""


class InvalidArgumentError(PsStyleError, ValueError):
    """A required input was None, absent or empty."""


class TreeFormatError(PsStyleError, ValueError):
    """A syntax tree document could not be turned into nodes."""


def require_text(value, name: str) -> str:
    """
    Return ``value`` if it is a non-empty string.

    Raises:
        InvalidArgumentError: If ``value`` is None or empty
    """
    if value is None:
        raise InvalidArgumentError(f"{name} must not be None")
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{name} must be a string, got {type(value).__name__}")
    if not value:
        raise InvalidArgumentError(f"{name} must not be empty")
    return value
