"""Single-tag sanitizer.

Each tag token is classified as opening, closing or malformed and rebuilt
from scratch, so nothing from the input tag reaches the output unless it was
explicitly allowed. There is no open-element stack: a closing tag for an
allowed name is emitted whether or not a matching opener was seen.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from devconnect.core.models import DropReason, TagState
from devconnect.kses.allowed import DEFAULT_PROTOCOLS
from devconnect.kses.attributes import parse_attributes, sanitize_attributes
from devconnect.kses.types import AllowList, ParsedTag, ProtocolSet
from devconnect.utils.escaping import esc_html

logger = logging.getLogger(__name__)

# < /? name attrs* >; the attribute part must start with whitespace or '/'.
# Each run of whitespace has exactly one place it can be consumed.
_TAG_RE = re.compile(
    r"^<\s*(?:(/)\s*)?([A-Za-z][A-Za-z0-9]*)((?:[\s/][^>]*)?)>$",
    re.DOTALL,
)


def parse_tag(tag_text: str) -> Optional[ParsedTag]:
    """Parse a ``<...>`` token, or return None if it does not fit the tag grammar."""
    match = _TAG_RE.match(tag_text)
    if match is None:
        return None
    return ParsedTag(
        name=match.group(2).lower(),
        is_closing=match.group(1) is not None,
        attrs=tuple(parse_attributes(match.group(3))),
    )


def classify_tag(tag: Optional[ParsedTag]) -> TagState:
    if tag is None:
        return TagState.MALFORMED
    return TagState.CLOSING if tag.is_closing else TagState.OPENING


def sanitize_tag(
    tag_text: str,
    allowed_html: AllowList,
    protocols: ProtocolSet = DEFAULT_PROTOCOLS,
) -> str:
    """Rebuild one tag token against ``allowed_html``; ``""`` when it is dropped."""
    tag = parse_tag(tag_text)
    state = classify_tag(tag)

    if state is TagState.MALFORMED:
        logger.debug("%s: %r", DropReason.MALFORMED_MARKUP.value, tag_text[:80])
        return ""

    if not allowed_html.allows(tag.name):
        logger.debug("%s: <%s%s>", DropReason.DISALLOWED_TAG.value,
                     "/" if tag.is_closing else "", tag.name)
        return ""

    if state is TagState.CLOSING:
        return f"</{tag.name}>"

    attrs = sanitize_attributes(tag.name, list(tag.attrs), allowed_html, protocols)
    attr_str = "".join(f' {name}="{esc_html(value)}"' for name, value in attrs)
    return f"<{tag.name}{attr_str}>"
