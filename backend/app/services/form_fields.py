"""
Job application form schema.

A job's `formFields` list is a runtime schema for its application form. Each
field `type` belongs to one of a small closed set of kinds; the kind decides how
a definition is checked and how a submitted value is stored.
"""
import logging
from typing import Any

from ..utils.error_handlers import ValidationError
from ..utils.sanitize import strip_embedded_markup

logger = logging.getLogger(__name__)


class FieldKind:
    name = "text"
    types: frozenset[str] = frozenset()

    def check_definition(self, field: dict) -> None:
        """Raise ValidationError for an unusable definition."""

    def coerce(self, value: Any) -> str | bool:
        # Strings are sanitized; anything else is stored as its truthiness.
        if isinstance(value, str):
            return strip_embedded_markup(value)
        return bool(value)


class TextKind(FieldKind):
    name = "text"
    types = frozenset({"text", "email", "textarea", "url", "date", "phone"})


class ChoiceKind(FieldKind):
    name = "choice"
    types = frozenset({"select", "radio"})

    def check_definition(self, field: dict) -> None:
        options = field.get("options")
        if options is not None and not isinstance(options, list):
            raise ValidationError(f"Options for field '{field.get('name')}' must be a list")
        if not options:
            # Not rejected: the form just renders without choices.
            logger.warning("Choice field %r has no options", field.get("name"))


class BooleanKind(FieldKind):
    name = "boolean"
    types = frozenset({"checkbox"})


class FileKind(FieldKind):
    name = "file"
    types = frozenset({"file"})


KINDS: tuple[FieldKind, ...] = (TextKind(), ChoiceKind(), BooleanKind(), FileKind())
FIELD_TYPES = frozenset().union(*(k.types for k in KINDS))
_KIND_BY_TYPE = {t: k for k in KINDS for t in k.types}


def kind_for(field_type: str | None) -> FieldKind | None:
    return _KIND_BY_TYPE.get((field_type or "").strip().lower())


def normalize_form_fields(raw: Any) -> list[dict]:
    """
    Check a `formFields` list and fill defaults, keeping order and every given property.

    Raises ValidationError when the list is not a list of objects, a field has no
    name, an unknown type, or a name that repeats within the form.
    """
    if not isinstance(raw, list):
        raise ValidationError("formFields must be a list")

    seen: set[str] = set()
    out: list[dict] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ValidationError(f"formFields[{index}] must be an object")
        field = dict(item)

        name = field.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ValidationError(f"formFields[{index}] requires a name")
        if name in seen:
            raise ValidationError(f"Duplicate form field name: {name}")
        seen.add(name)

        if field.get("type") in (None, ""):
            field["type"] = "text"
        kind = kind_for(field.get("type"))
        if kind is None:
            raise ValidationError(
                f"Invalid type for field '{name}'. Must be one of: {', '.join(sorted(FIELD_TYPES))}"
            )
        kind.check_definition(field)

        field.setdefault("id", name)
        field.setdefault("label", name)
        field["required"] = bool(field.get("required", False))
        out.append(field)
    return out


def required_names(form_fields: list[dict]) -> list[str]:
    return [f.get("name") for f in (form_fields or []) if f.get("required")]


def coerce_value(field_type: str | None, value: Any) -> str | bool:
    return (kind_for(field_type) or KINDS[0]).coerce(value)
