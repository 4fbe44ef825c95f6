"""kses entry point: strip untrusted HTML down to an allow-list.

The input is cut into tag strings and text runs rather than parsed into a
tree. Tags go through ``sanitize_tag``; text runs are entity-decoded and
otherwise passed through. Element bodies are not removed:
``<script>x</script>`` with ``script`` disallowed leaves ``x``.

``sanitize`` never raises on string input and is idempotent:
``sanitize(sanitize(s)) == sanitize(s)``.
"""

from __future__ import annotations

import re
from typing import Optional

from devconnect.core.models import TokenKind
from devconnect.kses.allowed import DEFAULT_PROTOCOLS
from devconnect.kses.entities import decode_text_entities, normalize_entities
from devconnect.kses.tags import sanitize_tag
from devconnect.kses.types import AllowList, ProtocolSet, Token


def split_html(html: str) -> list[Token]:
    """Cut ``html`` into tag and text tokens, in order, covering every character.

    Same tokens as matching ``<[^>]*>|<|[^<]+`` left to right: a tag runs from
    ``<`` to the next ``>``, a ``<`` with no ``>`` after it stands alone, and
    text runs up to the next ``<``. Done with ``str.find`` so a long run of
    unclosed ``<`` stays linear.
    """
    tokens: list[Token] = []
    last_close = html.rfind(">")
    pos = 0
    end = len(html)

    while pos < end:
        if html[pos] == "<":
            if pos < last_close:
                close = html.index(">", pos)
                tokens.append(Token.tag(html[pos:close + 1]))
                pos = close + 1
            else:
                tokens.append(Token.tag("<"))
                pos += 1
        else:
            nxt = html.find("<", pos)
            if nxt == -1:
                nxt = end
            tokens.append(Token.text_run(html[pos:nxt]))
            pos = nxt

    return tokens


def sanitize(
    html: Optional[str],
    allowed_html: AllowList,
    protocols: ProtocolSet = DEFAULT_PROTOCOLS,
) -> str:
    """Return ``html`` with every tag and attribute not in ``allowed_html`` removed."""
    if not html:
        return ""

    out: list[str] = []
    for token in split_html(normalize_entities(html)):
        if token.kind is TokenKind.TAG:
            out.append(sanitize_tag(token.text, allowed_html, protocols))
        else:
            out.append(decode_text_entities(token.text))
    return "".join(out)


_XSS_BLOCK_NAMES = ("script", "style")
_XSS_CLOSE_RES = {
    name: re.compile(rf"</{name}>", re.IGNORECASE) for name in _XSS_BLOCK_NAMES
}
_XSS_HANDLER_RES = (
    re.compile(r'\bon\w+="[^"]*"', re.IGNORECASE),
    re.compile(r"\bon\w+='[^']*'", re.IGNORECASE),
    re.compile(r"\bon\w+=\w+", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
)


def _block_opener(names) -> re.Pattern:
    return re.compile(rf"<({'|'.join(names)})[^>]*>", re.IGNORECASE)


def remove_xss(text: str) -> str:
    """Blunt blacklist scrub for strings that never go through ``sanitize``.

    Drops whole ``<script>``/``<style>`` blocks (an opener with no closer
    after it is left alone), quoted or bare ``on*=`` handlers, and every
    ``javascript:``. Not a substitute for allow-listing.
    """
    names = list(_XSS_BLOCK_NAMES)
    opener = _block_opener(names)
    # an opener needs a '>' after it
    end = text.rfind(">") + 1
    out: list[str] = []
    copied = search_from = 0

    while names:
        match = opener.search(text, search_from, end)
        if match is None:
            break
        name = match.group(1).lower()
        close = _XSS_CLOSE_RES[name].search(text, match.end())
        if close is None:
            # no later opener of this name can find a closer either
            names.remove(name)
            opener = _block_opener(names)
            search_from = match.start() + 1
            continue
        out.append(text[copied:match.start()])
        copied = search_from = close.end()

    out.append(text[copied:])
    text = "".join(out)
    for pattern in _XSS_HANDLER_RES:
        text = pattern.sub("", text)
    return text
