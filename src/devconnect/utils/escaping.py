"""Output escaping for HTML, attributes, XML, JavaScript strings and URLs.

All helpers are total ``str -> str`` functions with fixed tables.
"""

from __future__ import annotations

import re
from typing import Optional

_HTML_TABLE = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
}
_XML_TABLE = {**_HTML_TABLE, "'": "&apos;"}

_HTML_CHARS_RE = re.compile(r"""[&<>"']""")
# An '&' that does not already start an entity reference.
_BARE_AMP_RE = re.compile(r"&(?!#[0-9]+;|#[xX][0-9a-fA-F]+;|[A-Za-z][A-Za-z0-9]*;)")
_BARE_XML_AMP_RE = re.compile(r"&(?!#[0-9]+;|#[xX][0-9a-fA-F]+;|(?:amp|lt|gt|quot|apos);)")
_QUOTE_TAG_RE = re.compile(r"""[<>"']""")

_JS_TABLE = {
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
}
_JS_RE = re.compile(r"""\\|'|"|\n|\r|</""")

_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")


def _escape(text: str, table: dict[str, str], double_encode: bool, bare_amp: re.Pattern) -> str:
    if double_encode:
        return _HTML_CHARS_RE.sub(lambda m: table[m.group(0)], text)
    text = bare_amp.sub("&amp;", text)
    return _QUOTE_TAG_RE.sub(lambda m: table[m.group(0)], text)


def esc_html(text: str, double_encode: bool = True) -> str:
    """``& < > " '`` -> ``&amp; &lt; &gt; &quot; &#039;``."""
    return _escape(text, _HTML_TABLE, double_encode, _BARE_AMP_RE)


def esc_attr(text: str) -> str:
    """Like :func:`esc_html` but leaves existing entity references alone."""
    return esc_html(text, double_encode=False)


def esc_textarea(text: str) -> str:
    return esc_html(text)


def esc_xml(text: str, double_encode: bool = False) -> str:
    """XML escaping; only the five predefined XML entities survive un-encoded."""
    return _escape(text, _XML_TABLE, double_encode, _BARE_XML_AMP_RE)


def esc_js(text: str) -> str:
    """Escape text for a quoted JavaScript string literal inside HTML."""
    return _JS_RE.sub(lambda m: "<\\/" if m.group(0) == "</" else _JS_TABLE[m.group(0)], text)


def esc_url_raw(url: str, protocols: Optional[frozenset] = None) -> str:
    """Clean a URL for storage: strip controls, decode, drop bad schemes."""
    from devconnect.kses.allowed import DEFAULT_PROTOCOLS
    from devconnect.kses.protocols import clean_url

    url = _CONTROL_RE.sub("", url.strip())
    return clean_url(url, protocols or DEFAULT_PROTOCOLS)


def esc_url(url: str, protocols: Optional[frozenset] = None) -> str:
    """Clean a URL and escape it for an HTML attribute; ``""`` if rejected."""
    return esc_html(esc_url_raw(url, protocols))
