"""Attribute extraction and per-attribute value checks."""

from __future__ import annotations

import logging
import re
from typing import Callable
from urllib.parse import urlsplit

from devconnect.core.models import DropReason, ValidatorKind
from devconnect.kses.allowed import DEFAULT_PROTOCOLS
from devconnect.kses.entities import decode_entities
from devconnect.kses.protocols import strip_bad_protocols
from devconnect.kses.types import AllowList, ProtocolSet, Validator

logger = logging.getLogger(__name__)

# A name may only start where no other name character precedes it, so a
# long run of name characters is scanned once, not once per position.
_ATTR_RE = re.compile(
    r"""(?<![-A-Za-z0-9_:.])([A-Za-z_:][-A-Za-z0-9_:.]*)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s>]+))"""
)

_URL_CHARS_RE = re.compile(r"^[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]+$")
_INT_RE = re.compile(r"^[+-]?[0-9]+$")
_CLASS_RE = re.compile(r"^[A-Za-z0-9 _-]+$")
_CSS_RE = re.compile(r"^[A-Za-z0-9\s:;#%.,()-]+$")
_BOOL_VALUES = frozenset({"true", "false", "1", "0"})


def parse_attributes(tag_text: str) -> list[tuple[str, str]]:
    """Pull ``name=value`` pairs out of a tag, in order.

    Values may be double-quoted, single-quoted or bare. Names are lower-cased.
    Anything that does not look like a pair is skipped.
    """
    attrs: list[tuple[str, str]] = []
    for match in _ATTR_RE.finditer(tag_text):
        name = match.group(1).lower()
        value = next((g for g in match.groups()[1:] if g is not None), "")
        attrs.append((name, value))
    return attrs


def validate_css(css: str) -> bool:
    """Character-class check for inline styles. Not a CSS parser."""
    return bool(_CSS_RE.match(css))


def _is_url(value: str) -> bool:
    if not _URL_CHARS_RE.match(value):
        return False
    try:
        parts = urlsplit(value)
        parts.port  # raises on a non-numeric port
    except ValueError:
        return False
    if parts.scheme and value[len(parts.scheme) + 1:].startswith("//"):
        return bool(parts.netloc)
    return True


_KIND_CHECKS: dict[ValidatorKind, Callable[[str], bool]] = {
    ValidatorKind.ANY: lambda value: True,
    ValidatorKind.URL: _is_url,
    ValidatorKind.INT: lambda value: bool(_INT_RE.match(value)),
    ValidatorKind.BOOL: lambda value: value.lower() in _BOOL_VALUES,
    ValidatorKind.CLASS_NAME: lambda value: bool(_CLASS_RE.match(value)),
    ValidatorKind.STYLE: validate_css,
}


def check_attribute_value(value: str, validator: Validator) -> bool:
    """Run the check for ``validator.kind`` against ``value``.

    A predicate that raises counts as a failed check.
    """
    if validator.kind is ValidatorKind.PREDICATE:
        try:
            return bool(validator.check(value))
        except Exception:
            logger.warning("Attribute predicate raised; rejecting value", exc_info=True)
            return False
    check = _KIND_CHECKS.get(validator.kind)
    if check is None:
        return False
    return check(value)


def sanitize_attributes(
    tag_name: str,
    attrs: list[tuple[str, str]],
    allowed_html: AllowList,
    protocols: ProtocolSet = DEFAULT_PROTOCOLS,
) -> list[tuple[str, str]]:
    """Keep the attributes ``allowed_html`` permits on ``tag_name`` whose values pass.

    Values come back decoded and with bad protocols stripped. A name appears
    at most once: its first occurrence that passes.
    """
    if not allowed_html.allows(tag_name):
        return []

    allowed_attrs = allowed_html.attributes_for(tag_name)
    kept: list[tuple[str, str]] = []
    seen: set[str] = set()

    for name, raw_value in attrs:
        if name in seen:
            continue
        validator = allowed_attrs.get(name)
        if validator is None:
            logger.debug("%s: <%s %s>", DropReason.DISALLOWED_ATTRIBUTE.value, tag_name, name)
            continue

        value = strip_bad_protocols(decode_entities(raw_value), protocols)
        if not check_attribute_value(value, validator):
            logger.debug(
                "%s: <%s %s=%r> failed %s check",
                DropReason.INVALID_ATTRIBUTE_VALUE.value, tag_name, name, value,
                validator.kind.value,
            )
            continue

        seen.add(name)
        kept.append((name, value))

    return kept
