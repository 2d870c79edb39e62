"""Shared helpers for reading raw form values."""

from typing import Any


def form_text(value: Any) -> str:
    """Coerce a raw form value to a stripped string; missing values become "".

    Examples:
        >>> form_text("  Анна ")
        'Анна'
        >>> form_text(None)
        ''
    """
    if value is None:
        return ""
    return str(value).strip()


def form_int(value: Any, default: int) -> int:
    """Coerce a raw form value to int, falling back to ``default`` when blank or invalid.

    Examples:
        >>> form_int("3", 1)
        3
        >>> form_int("", 1)
        1
        >>> form_int("abc", 0)
        0
    """
    text = form_text(value)
    if not text:
        return default
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        return default


def form_checked(value: Any) -> bool:
    """Interpret a checkbox value the way HTML forms submit it ("on")."""
    if isinstance(value, bool):
        return value
    return form_text(value).lower() in ("on", "true", "1", "yes")
