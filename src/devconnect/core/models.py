"""Enums and pydantic models for the DevConnect sanitization layer."""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, Field, field_validator


class ValidatorKind(str, Enum):
    ANY = "any"
    URL = "url"
    INT = "int"
    BOOL = "bool"
    CLASS_NAME = "class"
    STYLE = "style"
    PREDICATE = "predicate"


class TokenKind(str, Enum):
    TEXT = "text"
    TAG = "tag"


class TagState(str, Enum):
    OPENING = "opening"
    CLOSING = "closing"
    MALFORMED = "malformed"


class DropReason(str, Enum):
    """Why a piece of markup was omitted from sanitized output."""

    MALFORMED_MARKUP = "malformed_markup"
    DISALLOWED_TAG = "disallowed_tag"
    DISALLOWED_ATTRIBUTE = "disallowed_attribute"
    INVALID_ATTRIBUTE_VALUE = "invalid_attribute_value"
    INVALID_PROTOCOL = "invalid_protocol"


# --- Config models ---

# attribute name -> validator spec ("any", "url", ..., or true)
AttributeSpec = dict[str, Union[bool, str]]
ProfileSpec = dict[str, AttributeSpec]


class KsesConfig(BaseModel):
    protocols: list[str] = Field(default_factory=list)
    default_profile: str = "post"
    profiles: dict[str, ProfileSpec] = Field(default_factory=dict)

    @field_validator("protocols", mode="before")
    @classmethod
    def _coerce_protocols(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            return [p.strip() for p in value.split(",") if p.strip()]
        return value

    @field_validator("profiles", mode="before")
    @classmethod
    def _lowercase_profile_names(cls, value: object) -> object:
        if value is None:
            return {}
        if isinstance(value, dict):
            # bare "br:" entries in YAML come through as None
            return {
                str(name).strip().lower(): (
                    {tag: attrs or {} for tag, attrs in tags.items()}
                    if isinstance(tags, dict) else tags or {}
                )
                for name, tags in value.items()
            }
        return value

    @field_validator("default_profile")
    @classmethod
    def _normalize_profile(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("default_profile must not be empty")
        return value


class AppConfig(BaseModel):
    kses: KsesConfig = Field(default_factory=KsesConfig)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return value
