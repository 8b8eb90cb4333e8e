"""Strict front-matter schema and translation of validation failures to SchemaErrors"""

import re
from datetime import date, datetime
from typing import Any, Optional

from pydantic import (
    BaseModel, ConfigDict, Field, StrictBool, StrictStr, ValidationError, ValidationInfo, field_validator,
)

from mdcorpus.core.errors import SchemaError


ISO_DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')


class FrontMatter(BaseModel):
    """Every recognized front-matter key, by its on-disk name."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    title:        StrictStr
    published_at: date = Field(alias="publishedAt")
    updated_at:   Optional[date] = Field(default=None, alias="updatedAt")
    summary:      StrictStr
    tags:         tuple[StrictStr, ...] = ()
    image:        Optional[StrictStr] = None
    draft:        Optional[StrictBool] = None

    @field_validator("title", "summary")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("published_at", "updated_at", mode="before")
    @classmethod
    def _iso_date(cls, v: Any) -> Any:
        if v is None:
            return v
        if isinstance(v, datetime):
            raise ValueError("expected a date (YYYY-MM-DD), got a date and time")
        if isinstance(v, date):
            return v
        if isinstance(v, str) and ISO_DATE_RE.match(v.strip()):
            try:
                return date.fromisoformat(v.strip())
            except ValueError:
                raise ValueError(f"'{v}' is not a valid calendar date") from None
        raise ValueError(f"expected an ISO 8601 date (YYYY-MM-DD), got {v!r}")

    @field_validator("updated_at")
    @classmethod
    def _not_before_published(cls, v: Optional[date], info: ValidationInfo) -> Optional[date]:
        published = info.data.get("published_at")
        if v is not None and published is not None and v < published:
            raise ValueError(f"{v.isoformat()} is earlier than publishedAt {published.isoformat()}")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        return () if v is None else v

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        tags = tuple(t.strip() for t in v)
        if not all(tags):
            raise ValueError("tags must not be blank")
        return tuple(dict.fromkeys(tags))


KNOWN_KEYS = tuple(
    f.alias or name for name, f in FrontMatter.model_fields.items()
)


def _fold(key: str) -> str:
    """Case- and separator-insensitive form of a key, for near-miss detection."""
    return re.sub(r'[_\-\s]', '', key).lower()


_FOLDED = {_fold(k): k for k in KNOWN_KEYS}


def _unknown_key_errors(raw: dict, slug: str, path: str) -> list[SchemaError]:
    errors = []
    for key in raw:
        key = str(key)
        if key in KNOWN_KEYS:
            continue
        suggestion = _FOLDED.get(_fold(key))
        reason = f"unknown field; did you mean '{suggestion}'?" if suggestion else "unknown field"
        errors.append(SchemaError(slug, key, reason, path))
    return errors


def _reason(err: dict) -> str:
    if err["type"] == "missing":
        return "required field is missing"
    if err["type"] == "value_error":
        return str(err["ctx"]["error"])
    return err["msg"]


def validate_frontmatter(
    raw: dict[str, Any],
    slug: str,
    path: str,
    ) -> tuple[Optional[FrontMatter], list[SchemaError]]:
    """Validate a raw front-matter mapping.

    Returns (FrontMatter, []) on success or (None, errors) listing every offending field.
    """
    errors = _unknown_key_errors(raw, slug, path)
    known = {str(k): v for k, v in raw.items() if str(k) in KNOWN_KEYS}
    try:
        fm = FrontMatter.model_validate(known)
    except ValidationError as e:
        errors += [
            SchemaError(slug, str(err["loc"][0]) if err["loc"] else "frontmatter", _reason(err), path)
            for err in e.errors()
        ]
        return None, errors
    if errors:
        return None, errors
    return fm, []
