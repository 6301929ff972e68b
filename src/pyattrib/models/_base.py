"""Base model and enum for attribution SDK callback payloads.

Every inbound payload model inherits from :class:`AttribBaseModel` which
provides:

* ``extra="ignore"`` so SDK fields we do not consume are tolerated.
* A ``model_validator(mode="before")`` that strips SDK placeholder values
  (``""``, ``"null"``, ``None``) so the field default is used.
* A ``raw`` dict that captures the original payload.

String enums inherit from :class:`AttribEnum` which resolves values
case-insensitively and falls back to its ``UNKNOWN`` member for anything
without a mapped member.
"""

from __future__ import annotations

import enum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

# Placeholder strings attribution SDKs use for "not available".
_SENTINELS = frozenset({"", "null", "none", "undefined"})


class AttribEnum(enum.StrEnum):
    """Base for SDK status enums.

    Every subclass **must** define ``UNKNOWN``.
    """

    @classmethod
    def _missing_(cls, value: object) -> AttribEnum:
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        unknown: AttribEnum = cls.UNKNOWN  # type: ignore[attr-defined]
        return unknown


class AttribBaseModel(BaseModel):
    """Base for attribution SDK payload models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)
    """Original callback dict."""

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and value.strip().lower() in _SENTINELS:
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _clean_sdk_values(cls, values: Any) -> Any:
        """Strip SDK placeholders and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        original = dict(values)
        cleaned = AttribBaseModel._clean_dict(original)
        if "raw" not in values:
            cleaned["raw"] = original
        return cleaned


def lenient_enum(enum_cls: type[AttribEnum]) -> BeforeValidator:
    """Coerce raw SDK strings through *enum_cls* so unknown values map to ``UNKNOWN``."""

    def _coerce(value: Any) -> Any:
        if isinstance(value, str):
            return enum_cls(value)
        return value

    return BeforeValidator(_coerce)


def coerce_sdk_str(value: Any) -> str | None:
    """Coerce scalar SDK values to strings; drop nested structures."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return None


SdkStr = Annotated[str | None, BeforeValidator(coerce_sdk_str)]
"""Optional string field that tolerates numbers and booleans from the SDK."""
