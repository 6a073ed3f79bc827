"""
Input validation helpers for SoundCue.

Used by the command surface, where bad input is reported back to the
user. The event pipeline never validates strictly; it falls back to
defaults instead.
"""

from typing import Any, Iterable, List, Optional


class ValidationError(Exception):
    """Raised when validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(f"{field}: {message}" if field else message)


def validate_range(value: float, min_val: float, max_val: float,
                   field: str = "value") -> float:
    """
    Validate that a value is within a range.

    Args:
        value: Value to validate
        min_val: Minimum allowed value (inclusive)
        max_val: Maximum allowed value (inclusive)
        field: Field name for error messages

    Returns:
        The validated value

    Raises:
        ValidationError: If value is outside range
    """
    if not min_val <= value <= max_val:
        raise ValidationError(
            f"must be between {min_val} and {max_val}, got {value}",
            field
        )
    return value


def validate_volume(value: Any, field: str = "volume") -> float:
    """
    Validate a playback volume (0.0 to 1.0).

    Accepts numeric strings so CLI arguments can be passed straight in.

    Raises:
        ValidationError: If value is not a number or is out of range
    """
    if isinstance(value, bool):
        raise ValidationError(f"must be a number, got {value!r}", field)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"must be a number, got {value!r}", field)
    return validate_range(number, 0.0, 1.0, field)


def validate_choice(value: str, choices: Iterable[str], field: str = "value") -> str:
    """
    Validate that a value is one of a set of allowed names.

    Raises:
        ValidationError: If value is not among the choices
    """
    allowed: List[str] = list(choices)
    if value not in allowed:
        raise ValidationError(
            f"unknown value {value!r}, expected one of: {', '.join(allowed)}",
            field
        )
    return value


def clamp(value: float, min_val: float, max_val: float) -> float:
    """
    Constrain a value to a range.

    Example:
        >>> clamp(1.5, 0.0, 1.0)
        1.0
    """
    return max(min_val, min(max_val, value))
