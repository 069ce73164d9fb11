"""
Validation utilities for input validation and error handling.
"""
import time
from typing import Any, Iterable

from .error_handlers import ValidationError


def validate_string_field(
    value: Any,
    field_name: str,
    min_length: int = 1,
    max_length: int = 1000,
    required: bool = True,
) -> str | None:
    """Validate a string field with common rules."""
    if value is None:
        if required:
            raise ValidationError(f"{field_name} is required", details={"field": field_name})
        return None

    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string", details={"field": field_name})

    stripped = value.strip()

    if required and not stripped:
        raise ValidationError(f"{field_name} cannot be empty", details={"field": field_name})

    if stripped and len(stripped) < min_length:
        raise ValidationError(
            f"{field_name} must be at least {min_length} characters",
            details={"field": field_name},
        )

    if len(value) > max_length:
        raise ValidationError(
            f"{field_name} must not exceed {max_length} characters",
            details={"field": field_name},
        )

    return value


def validate_choice(value: Any, field_name: str, choices: Iterable[str]) -> str:
    """Validate that `value` is one of `choices` (case-insensitive); returns the lowercase form."""
    allowed = tuple(choices)
    if not isinstance(value, str) or value.strip().lower() not in allowed:
        raise ValidationError(
            f"Invalid {field_name}. Must be one of: {', '.join(allowed)}",
            details={"field": field_name},
        )
    return value.strip().lower()


def validate_string_list(value: Any, field_name: str) -> list[str]:
    """One bullet per entry; blank entries are dropped, order is kept."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(f"{field_name} must be a list", details={"field": field_name})
    return [str(x) for x in value if str(x).strip()]


def clean_filename(filename: str | None) -> str:
    """Strip path parts and control bytes from a client filename; never empty."""
    name = (filename or "").replace("\\", "/").rsplit("/", 1)[-1]
    name = name.replace("\x00", "").strip()
    if len(name) > 255:
        name = name[-255:]
    return name or f"upload-{int(time.time() * 1000)}"
