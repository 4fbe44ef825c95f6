"""Value types shared by the kses engine.

Everything here is immutable once built. An ``AllowList`` or ``ProtocolSet``
is constructed at startup and handed to every ``sanitize`` call by
reference; nothing in the engine writes to them.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterator, Optional

from devconnect.core.models import TokenKind, ValidatorKind

_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.\-]*$")

# Spellings accepted when an allow-list is written as plain data (YAML, dicts).
_KIND_ALIASES: dict[str, ValidatorKind] = {
    "any": ValidatorKind.ANY,
    "*": ValidatorKind.ANY,
    "url": ValidatorKind.URL,
    "int": ValidatorKind.INT,
    "bool": ValidatorKind.BOOL,
    "class": ValidatorKind.CLASS_NAME,
    "classname": ValidatorKind.CLASS_NAME,
    "style": ValidatorKind.STYLE,
}


@dataclass(frozen=True)
class Validator:
    """Rule an attribute value must satisfy.

    ``check`` is only set for ``ValidatorKind.PREDICATE``.
    """

    kind: ValidatorKind
    check: Optional[Callable[[str], bool]] = None

    def __post_init__(self) -> None:
        if self.kind is ValidatorKind.PREDICATE and self.check is None:
            raise ValueError("Predicate validators need a callable")
        if self.kind is not ValidatorKind.PREDICATE and self.check is not None:
            raise ValueError(f"{self.kind.value} validators take no callable")

    @classmethod
    def predicate(cls, fn: Callable[[str], bool]) -> "Validator":
        return cls(ValidatorKind.PREDICATE, fn)

    @classmethod
    def coerce(cls, value: object) -> "Validator":
        """Build a validator from ``True``, a kind name, or a callable."""
        if isinstance(value, Validator):
            return value
        if value is True:
            return ANY
        if isinstance(value, ValidatorKind) and value is not ValidatorKind.PREDICATE:
            return cls(value)
        if isinstance(value, str):
            kind = _KIND_ALIASES.get(value.strip().lower())
            if kind is None:
                raise ValueError(f"Unknown attribute validator: {value!r}")
            return cls(kind)
        if callable(value):
            return cls.predicate(value)
        raise ValueError(f"Unknown attribute validator: {value!r}")


ANY = Validator(ValidatorKind.ANY)
URL = Validator(ValidatorKind.URL)
INT = Validator(ValidatorKind.INT)
BOOL = Validator(ValidatorKind.BOOL)
CLASS_NAME = Validator(ValidatorKind.CLASS_NAME)
STYLE = Validator(ValidatorKind.STYLE)


def _lowercase_keys(data: Mapping, what: str) -> dict:
    """Lower-case mapping keys, refusing keys that collide afterwards."""
    out: dict = {}
    for key, value in data.items():
        lowered = str(key).strip().lower()
        if not lowered:
            raise ValueError(f"Empty {what} name in allow-list")
        if lowered in out:
            raise ValueError(f"Duplicate {what} in allow-list: {lowered!r}")
        out[lowered] = value
    return out


class AllowList(Mapping):
    """Read-only ``tag -> {attribute -> Validator}`` mapping.

    A tag missing from the mapping is disallowed entirely. A tag mapped to an
    empty attribute table is allowed but always loses its attributes.
    """

    def __init__(self, rules: Optional[Mapping] = None) -> None:
        tags: dict[str, Mapping[str, Validator]] = {}
        for tag, attrs in _lowercase_keys(rules or {}, "tag").items():
            if attrs is None:
                attrs = {}
            if not isinstance(attrs, Mapping):
                raise ValueError(f"Attributes for <{tag}> must be a mapping")
            table = {
                name: Validator.coerce(value)
                for name, value in _lowercase_keys(attrs, "attribute").items()
            }
            tags[tag] = MappingProxyType(table)
        self._tags = MappingProxyType(tags)

    def __getitem__(self, tag: str) -> Mapping[str, Validator]:
        return self._tags[tag]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __repr__(self) -> str:
        return f"AllowList({sorted(self._tags)!r})"

    def allows(self, tag: str) -> bool:
        return tag in self._tags

    def attributes_for(self, tag: str) -> Mapping[str, Validator]:
        return self._tags.get(tag, MappingProxyType({}))

    def to_dict(self) -> dict[str, dict[str, str]]:
        """Plain-data view, predicates shown by kind only."""
        return {
            tag: {name: v.kind.value for name, v in attrs.items()}
            for tag, attrs in self._tags.items()
        }


class ProtocolSet(frozenset):
    """Non-empty set of lower-case URI schemes."""

    def __new__(cls, schemes=()):
        cleaned = set()
        for scheme in schemes:
            scheme = str(scheme).strip().lower()
            if not _SCHEME_RE.match(scheme):
                raise ValueError(f"Invalid URI scheme: {scheme!r}")
            cleaned.add(scheme)
        if not cleaned:
            raise ValueError("A protocol set needs at least one scheme")
        return super().__new__(cls, cleaned)

    def __repr__(self) -> str:
        return f"ProtocolSet({sorted(self)!r})"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str

    @classmethod
    def text_run(cls, text: str) -> "Token":
        return cls(TokenKind.TEXT, text)

    @classmethod
    def tag(cls, text: str) -> "Token":
        return cls(TokenKind.TAG, text)


@dataclass(frozen=True)
class ParsedTag:
    name: str
    is_closing: bool
    attrs: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class KsesPolicy:
    """An allow-list and protocol set bundled for repeated use."""

    allowed_html: AllowList
    protocols: ProtocolSet

    def sanitize(self, html: Optional[str]) -> str:
        from devconnect.kses.sanitizer import sanitize

        return sanitize(html, self.allowed_html, self.protocols)
