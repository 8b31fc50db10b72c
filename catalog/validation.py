"""
Field-level validation for video create/update payloads.

Checks run in a fixed field order and stop at the first violation, which is
reported as a ValidationError naming the field and the rule that failed.
Nothing here touches the store.
"""

import re
from typing import Any, Callable, Literal, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field

from catalog.errors import ValidationError
from data.schema import VIDEO_STATUSES

DURATION_RE = re.compile(r"\d{2}:[0-5]\d:[0-5]\d", re.ASCII)
URL_SCHEMES = ("http", "https")

TITLE_MAX = 255
URL_MAX = 500
TYPE_MAX = 100
RESOLUTION_MAX = 50
CATEGORY_MAX = 255

# Largest value SQLite can bind as INTEGER
SQLITE_INT_MAX = 2**63 - 1

Status = Literal["active", "inactive", "archived"]


class VideoCreate(BaseModel):
    """Validated create payload."""
    title: str = Field(min_length=1, max_length=TITLE_MAX)
    description: Optional[str] = None
    src: str = Field(max_length=URL_MAX)
    type: str = Field(min_length=1, max_length=TYPE_MAX)
    poster: Optional[str] = Field(None, max_length=URL_MAX)
    duration: Optional[str] = Field(None, max_length=8)
    resolution: Optional[str] = Field(None, max_length=RESOLUTION_MAX)
    size: Optional[int] = Field(None, ge=0, le=SQLITE_INT_MAX)
    status: Status = "active"
    category: Optional[str] = Field(None, max_length=CATEGORY_MAX)
    uploaded_by: Optional[int] = Field(None, ge=1, le=SQLITE_INT_MAX)


class VideoUpdate(BaseModel):
    """Validated partial update. Only keys in model_fields_set were supplied."""
    title: Optional[str] = Field(None, min_length=1, max_length=TITLE_MAX)
    description: Optional[str] = None
    src: Optional[str] = Field(None, max_length=URL_MAX)
    type: Optional[str] = Field(None, min_length=1, max_length=TYPE_MAX)
    poster: Optional[str] = Field(None, max_length=URL_MAX)
    duration: Optional[str] = Field(None, max_length=8)
    resolution: Optional[str] = Field(None, max_length=RESOLUTION_MAX)
    size: Optional[int] = Field(None, ge=0, le=SQLITE_INT_MAX)
    status: Optional[Status] = None
    category: Optional[str] = Field(None, max_length=CATEGORY_MAX)
    uploaded_by: Optional[int] = Field(None, ge=1, le=SQLITE_INT_MAX)

    def present_fields(self) -> list[str]:
        """Supplied field names, in declaration order."""
        return [name for name in type(self).model_fields if name in self.model_fields_set]


# --- Per-field rules ---

def _text(field: str, value: Any, max_length: Optional[int] = None,
          allow_blank: bool = True) -> str:
    if not isinstance(value, str):
        raise ValidationError("must be a string", field=field)
    if not allow_blank and not value.strip():
        raise ValidationError("must not be empty", field=field)
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"must be at most {max_length} characters", field=field)
    return value


def _url(field: str, value: Any) -> str:
    value = _text(field, value, URL_MAX, allow_blank=False)
    parsed = urlparse(value.strip())
    if parsed.scheme not in URL_SCHEMES or not parsed.netloc:
        raise ValidationError("must be an absolute http(s) URL", field=field)
    return value.strip()


def _duration(field: str, value: Any) -> str:
    value = _text(field, value)
    if not DURATION_RE.fullmatch(value):
        raise ValidationError("must be formatted HH:MM:SS", field=field)
    return value


def _non_negative_int(field: str, value: Any) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("must be an integer", field=field)
    if value < 0:
        raise ValidationError("must not be negative", field=field)
    if value > SQLITE_INT_MAX:
        raise ValidationError(f"must be at most {SQLITE_INT_MAX}", field=field)
    return value


def _positive_int(field: str, value: Any) -> int:
    value = _non_negative_int(field, value)
    if value < 1:
        raise ValidationError("must be a positive integer", field=field)
    return value


def _status(field: str, value: Any) -> str:
    if value not in VIDEO_STATUSES:
        raise ValidationError(f"must be one of {', '.join(VIDEO_STATUSES)}", field=field)
    return value


def _category(field: str, value: Any) -> str:
    return _text(field, value, CATEGORY_MAX).strip()


_RULES: dict[str, Callable[[str, Any], Any]] = {
    "title": lambda f, v: _text(f, v, TITLE_MAX, allow_blank=False),
    "description": _text,
    "src": _url,
    "type": lambda f, v: _text(f, v, TYPE_MAX, allow_blank=False),
    "poster": _url,
    "duration": _duration,
    "resolution": lambda f, v: _text(f, v, RESOLUTION_MAX),
    "size": _non_negative_int,
    "status": _status,
    "category": _category,
    "uploaded_by": _positive_int,
}

REQUIRED_FIELDS = ("title", "src", "type")


def _require_object(payload: Any) -> dict:
    if not isinstance(payload, dict):
        raise ValidationError("payload must be a JSON object")
    return payload


def _clean_fields(payload: dict) -> dict:
    """Apply field rules to every recognized, non-null key.

    Null values are treated as absent, and so is a category name that is
    empty after trimming.
    """
    cleaned = {}
    for field, rule in _RULES.items():
        value = payload.get(field)
        if value is None:
            continue
        value = rule(field, value)
        if field == "category" and not value:
            continue
        cleaned[field] = value
    return cleaned


def validate_create(payload: Any) -> VideoCreate:
    """Validate a create payload. Raises ValidationError on the first violation."""
    payload = _require_object(payload)
    for field in REQUIRED_FIELDS:
        value = payload.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError("is required", field=field)
    return VideoCreate(**_clean_fields(payload))


def validate_update(payload: Any) -> VideoUpdate:
    """Validate a partial update. At least one recognized field must be present."""
    payload = _require_object(payload)
    cleaned = _clean_fields(payload)
    if not cleaned:
        raise ValidationError("no fields to update")
    return VideoUpdate(**cleaned)


def validate_category_name(name: Any) -> str:
    """Trim and check an explicit category name."""
    if name is None:
        raise ValidationError("is required", field="name")
    name = _text("name", name, CATEGORY_MAX).strip()
    if not name:
        raise ValidationError("must not be empty", field="name")
    return name


def parse_positive_int(field: str, raw: Any, default: Optional[int] = None) -> int:
    """Parse a query/path value that must be an integer >= 1.

    A missing or blank value yields ``default`` when one is given.
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        if default is None:
            raise ValidationError("is required", field=field)
        return default
    if isinstance(raw, bool):
        raise ValidationError("must be a positive integer", field=field)
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if not (text.isascii() and text.isdigit()):
            raise ValidationError("must be a positive integer", field=field)
        if len(text.lstrip("0")) > len(str(SQLITE_INT_MAX)):
            raise ValidationError(f"must be at most {SQLITE_INT_MAX}", field=field)
        value = int(text)
    if value < 1:
        raise ValidationError("must be a positive integer", field=field)
    if value > SQLITE_INT_MAX:
        raise ValidationError(f"must be at most {SQLITE_INT_MAX}", field=field)
    return value
