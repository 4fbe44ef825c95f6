"""HTML entity decoding, normalization and encoding."""

from __future__ import annotations

import re
from html.entities import codepoint2name, html5

# Longest decimal/hex run worth parsing; anything longer is past U+10FFFF.
_MAX_DIGITS = 8

_ENTITY_RE = re.compile(
    r"&#(?:[xX](?P<hex>[0-9a-fA-F]+)|(?P<dec>[0-9]+));|&(?P<name>[A-Za-z][A-Za-z0-9]*);"
)
_HEX_REF_RE = re.compile(r"&#[xX]([0-9a-fA-F]+);?")
_DEC_REF_RE = re.compile(r"&#([0-9]+);?")

_MARKUP_CHARS = {"&": "&amp;", "<": "&lt;", ">": "&gt;"}
_MARKUP_RE = re.compile(r"[&<>]")

_ENCODE_TABLE: dict[int, str] = {cp: f"&{name};" for cp, name in codepoint2name.items()}
_ENCODE_TABLE[ord("'")] = "&#039;"


def _codepoint(digits: str, base: int) -> str:
    if len(digits.lstrip("0")) > _MAX_DIGITS:
        return ""
    code = int(digits, base)
    if code == 0 or code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
        return ""
    return chr(code)


def _replace_entity(match: re.Match) -> str:
    if match.group("hex") is not None:
        return _codepoint(match.group("hex"), 16)
    if match.group("dec") is not None:
        return _codepoint(match.group("dec"), 10)
    name = match.group("name")
    return html5.get(f"{name};", match.group(0))


def decode_entities(text: str) -> str:
    """Decode numeric and named entity references in one pass.

    Invalid numeric references are dropped. Unknown names are left as written.
    Replacement text is never rescanned, so ``&amp;lt;`` becomes ``&lt;``.
    """
    return _ENTITY_RE.sub(_replace_entity, text)


def decode_text_entities(text: str) -> str:
    """Decode a text run, keeping ``&``, ``<`` and ``>`` escaped."""
    decoded = decode_entities(text)
    return _MARKUP_RE.sub(lambda m: _MARKUP_CHARS[m.group(0)], decoded)


def normalize_entities(text: str) -> str:
    """Give numeric references a trailing semicolon; ``&#106`` -> ``&#106;``."""
    text = _HEX_REF_RE.sub(r"&#x\1;", text)
    return _DEC_REF_RE.sub(r"&#\1;", text)


def encode_entities(text: str) -> str:
    """Encode every character that has a named entity, plus quotes."""
    return "".join(_ENCODE_TABLE.get(ord(ch), ch) for ch in text)
