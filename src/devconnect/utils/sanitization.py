"""Field sanitizers for user input: names, keys, titles, colours, URLs."""

from __future__ import annotations

import re
import unicodedata
from typing import Optional

from devconnect.kses.allowed import TEXTAREA_ALLOWED_HTML
from devconnect.kses.sanitizer import sanitize
from devconnect.utils.escaping import esc_url

_TAG_RE = re.compile(r"<[^>]+>")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")
_HEX_NO_HASH_RE = re.compile(r"^[0-9a-fA-F]{6}$")
_EMAIL_JUNK_RE = re.compile(r"[^A-Za-z0-9!#$%&'*+\-=?^_`{|}~@.\[\]]")


def remove_accents(text: str) -> str:
    """Fold accented Latin letters to their ASCII base (é -> e)."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def sanitize_text_field(text: str) -> str:
    """Strip all tags and control characters, then trim."""
    text = _TAG_RE.sub("", text)
    text = _CONTROL_RE.sub("", text)
    return text.strip()


def sanitize_textarea_field(text: str) -> str:
    """Allow only ``<br>``, ``<em>`` and ``<strong>`` in multi-line input."""
    return sanitize(text, TEXTAREA_ALLOWED_HTML)


def sanitize_key(key: str) -> str:
    return re.sub(r"[^a-z0-9_\-]", "", key.lower())


def sanitize_user(username: str, strict: bool = False) -> str:
    """Strip tags and accents from a login name.

    Spaces, ``_ . - @`` survive unless ``strict``, which keeps ASCII letters
    and digits only.
    """
    username = remove_accents(_TAG_RE.sub("", username))
    if strict:
        return re.sub(r"[^A-Za-z0-9]", "", username)
    return re.sub(r"[^A-Za-z0-9 _.\-@]", "", username)


def sanitize_html_class(value: str, fallback: str = "") -> str:
    value = re.sub(r"[^A-Za-z0-9_\-]", "", value)
    if not value and fallback:
        return sanitize_html_class(fallback)
    return value


def sanitize_title(title: str, fallback_title: str = "") -> str:
    """Lower-case, dash-separated slug; falls back when nothing is left."""
    text = remove_accents(_TAG_RE.sub("", title)).lower()
    text = re.sub(r"[^a-z0-9\s\-]", "", text)
    text = re.sub(r"[\s\-]+", "-", text).strip("-")
    if not text and fallback_title:
        return sanitize_title(fallback_title)
    return text


def sanitize_title_for_query(title: str) -> str:
    return sanitize_title(title)


def sanitize_title_with_dashes(title: str) -> str:
    return sanitize_title(title)


def sanitize_locale_name(locale_name: str) -> str:
    """``en_US`` -> ``en_us``; anything but ``[a-z0-9_-]`` is removed."""
    return re.sub(r"[^a-z0-9_\-]", "", locale_name.lower())


def sanitize_sql_orderby(orderby: str) -> str:
    """Keep only identifier characters, commas, dots, backticks and whitespace."""
    return re.sub(r"[^A-Za-z0-9_,\s.`]", "", orderby)


def sanitize_email(email: str) -> str:
    """Remove characters that cannot appear in an email address."""
    return _EMAIL_JUNK_RE.sub("", email)


def sanitize_mime_type(mime_type: str) -> str:
    return re.sub(r"[^A-Za-z0-9.+\-/]", "", mime_type)


def sanitize_hex_color(color: str) -> Optional[str]:
    """``ff0000`` or ``#ff0000`` -> ``#ff0000``; None if not a 6-digit hex colour."""
    if not color.startswith("#"):
        color = "#" + color
    return color if _HEX_COLOR_RE.match(color) else None


def sanitize_hex_color_no_hash(color: str) -> Optional[str]:
    color = color.lstrip("#")
    return color if _HEX_NO_HASH_RE.match(color) else None


def sanitize_url(url: str, protocols: Optional[frozenset] = None) -> str:
    return esc_url(url, protocols)


def sanitize_trackback_urls(to_ping: str) -> str:
    """Clean a newline-separated URL list, dropping lines that come out empty."""
    urls = (sanitize_url(url) for url in re.split(r"[\r\n]+", to_ping))
    return "\n".join(url for url in urls if url)
