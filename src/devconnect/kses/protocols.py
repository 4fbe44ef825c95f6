"""URI scheme checks: allow-list validation, bad-protocol stripping, URL cleaning."""

from __future__ import annotations

import logging
import re

from devconnect.core.models import DropReason
from devconnect.kses.allowed import DEFAULT_PROTOCOLS
from devconnect.kses.entities import decode_entities
from devconnect.kses.types import ProtocolSet

logger = logging.getLogger(__name__)

# matched at an offset, so no ^ anchor
_LEADING_PROTOCOL_RE = re.compile(r"([^:]+):")
_URL_JUNK_RE = re.compile(r"[^A-Za-z0-9\-~+_.?#=&;,/:%@!*()\[\]]")


def validate_protocol(url: str, protocols: ProtocolSet = DEFAULT_PROTOCOLS) -> bool:
    """True if ``url`` is relative or its scheme is in ``protocols``."""
    url = url.lower()
    if ":" not in url:
        return True
    return url.split(":", 1)[0] in protocols


def strip_bad_protocols(text: str, protocols: ProtocolSet = DEFAULT_PROTOCOLS) -> str:
    """Remove leading ``scheme:`` prefixes until the first one left is allowed.

    ``javascript:javascript:x`` loses both prefixes. Every removal shortens
    the string by at least two characters, so ``len(text) + 1`` passes is
    always enough; the loop is capped there.
    """
    pos = 0
    for _ in range(len(text) + 1):
        match = _LEADING_PROTOCOL_RE.match(text, pos)
        if match is None or match.group(1).lower() in protocols:
            break
        logger.debug("%s: stripped %r", DropReason.INVALID_PROTOCOL.value, match.group(0))
        pos = match.end()
    return text[pos:]


def clean_url(url: str, protocols: ProtocolSet = DEFAULT_PROTOCOLS) -> str:
    """Decode, strip unsafe characters and check the scheme; ``""`` if rejected."""
    url = decode_entities(url.strip())
    url = _URL_JUNK_RE.sub("", url)
    if not validate_protocol(url, protocols):
        logger.debug("%s: rejected url %r", DropReason.INVALID_PROTOCOL.value, url)
        return ""
    return url
