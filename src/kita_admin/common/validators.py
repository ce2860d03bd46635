from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Optional, Type, TypeVar

from ..core.exceptions import ValidationError

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

E = TypeVar("E", bound=Enum)


def clean(value: Optional[str]) -> str:
    return (value or "").strip()


def optional(value: Optional[str]) -> Optional[str]:
    """Blank form values are stored as NULL."""
    value = clean(value)
    return value or None


def require_fields(entity: str, message: str, /, **fields: Optional[str]) -> dict:
    """Strip every field and fail with one message if any of them is blank."""
    cleaned = {name: clean(value) for name, value in fields.items()}
    if not all(cleaned.values()):
        raise ValidationError(f"{entity}: {message}", entity=entity)
    return cleaned


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name}: mindestens {min_len} Zeichen")
    return value


def require_iso_date(value: str, field_name: str, *, entity: Optional[str] = None) -> str:
    """Zero-padded YYYY-MM-DD only; stored dates are compared as strings."""
    try:
        if not _DATE_RE.match(value):
            raise ValueError(value)
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise ValidationError(f"{field_name} ist kein gültiges Datum (JJJJ-MM-TT)", entity=entity)
    return value


def require_hhmm(value: str, field_name: str, *, entity: Optional[str] = None) -> str:
    if not _TIME_RE.match(value):
        raise ValidationError(f"{field_name} ist keine gültige Uhrzeit (HH:MM)", entity=entity)
    return value


def parse_enum(enum_cls: Type[E], value: Optional[str], error: Type[ValidationError], message: str) -> E:
    try:
        return enum_cls(clean(value))
    except ValueError:
        raise error(message)
