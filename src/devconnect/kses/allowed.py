"""Built-in allow-lists and the default protocol set.

Profiles are written as plain data (``"url"``, ``"class"``, ``True`` ...) and
turned into immutable ``AllowList`` values once, at import.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from devconnect.kses.types import AllowList, ProtocolSet

DEFAULT_PROTOCOLS = ProtocolSet([
    "http", "https", "ftp", "ftps", "mailto", "news", "irc", "ircs", "irc6",
    "gopher", "nntp", "feed", "telnet", "mms", "rtsp", "rtmp", "svn", "tel",
    "fax", "xmpp", "webcal", "urn", "cid", "mid", "sms", "smsto", "sip",
    "sips", "tftp", "ssh", "sftp", "ldap", "ldaps", "steam", "bitcoin",
    "magnet", "geo", "skype", "viber", "whatsapp", "matrix", "ed2k", "notes",
    "dat", "ipfs", "ipns", "dweb", "datashare", "snews", "itms", "market",
])

# Shared attribute groups
_GLOBAL = {"class": "class", "style": "style", "id": True, "title": True}
_CELL_ALIGN = {"align": True, "char": True, "charoff": True, "valign": True}
_SVG_PAINT = {"stroke": True, "fill": True, "style": "style", "class": "class", "id": True}

_LINK = {
    "href": "url",
    "title": True,
    "rel": True,
    "target": True,
    "download": True,
    "hreflang": True,
    "type": True,
    "name": True,
}

_TABLE_CELL = {
    **_CELL_ALIGN,
    "abbr": True,
    "axis": True,
    "bgcolor": True,
    "colspan": "int",
    "rowspan": "int",
    "headers": True,
    "height": True,
    "width": True,
    "nowrap": True,
    "scope": True,
    **_GLOBAL,
}

POST_SPEC: dict[str, dict] = {
    # Text-level semantics
    "a": _LINK,
    "abbr": {"title": True},
    "b": {},
    "bdi": {"dir": True},
    "bdo": {"dir": True},
    "br": {},
    "cite": {},
    "code": {},
    "data": {"value": True},
    "dfn": {"title": True},
    "em": {},
    "i": {},
    "kbd": {},
    "mark": {},
    "q": {"cite": "url"},
    "rp": {},
    "rt": {},
    "rtc": {},
    "ruby": {},
    "s": {},
    "samp": {},
    "small": {},
    "span": _GLOBAL,
    "strong": {},
    "sub": {},
    "sup": {},
    "time": {"datetime": True},
    "u": {},
    "var": {},
    "wbr": {},
    # Content sectioning
    "address": {},
    "article": _GLOBAL,
    "aside": _GLOBAL,
    "footer": _GLOBAL,
    "header": _GLOBAL,
    "h1": _GLOBAL,
    "h2": _GLOBAL,
    "h3": _GLOBAL,
    "h4": _GLOBAL,
    "h5": _GLOBAL,
    "h6": _GLOBAL,
    "hgroup": {},
    "main": {},
    "nav": {},
    "section": _GLOBAL,
    # Text content
    "blockquote": {"cite": "url", **_GLOBAL},
    "dd": {},
    "div": _GLOBAL,
    "dl": {},
    "dt": {},
    "figcaption": {},
    "figure": _GLOBAL,
    "hr": {},
    "li": {"value": "int"},
    "ol": {"reversed": True, "start": "int", "type": True},
    "p": {"class": "class", "style": "style"},
    "pre": {},
    "ul": {},
    # Table content
    "table": {
        "border": True,
        "cellpadding": True,
        "cellspacing": True,
        "summary": True,
        "width": True,
        **_GLOBAL,
    },
    "caption": {},
    "col": {**_CELL_ALIGN, "span": "int", "width": True},
    "colgroup": {**_CELL_ALIGN, "span": "int", "width": True},
    "tbody": _CELL_ALIGN,
    "thead": _CELL_ALIGN,
    "tfoot": _CELL_ALIGN,
    "tr": {**_CELL_ALIGN, "bgcolor": True},
    "td": _TABLE_CELL,
    "th": _TABLE_CELL,
    # Embedded content
    "img": {
        "alt": True,
        "crossorigin": True,
        "height": True,
        "ismap": True,
        "longdesc": "url",
        "referrerpolicy": True,
        "sizes": True,
        "src": "url",
        "srcset": True,
        "usemap": True,
        "width": True,
    },
    "audio": {
        "autoplay": True,
        "controls": True,
        "loop": True,
        "muted": True,
        "preload": True,
        "src": "url",
    },
    "video": {
        "autoplay": True,
        "controls": True,
        "height": True,
        "loop": True,
        "muted": True,
        "poster": "url",
        "preload": True,
        "src": "url",
        "width": True,
    },
    "source": {"media": True, "src": "url", "type": True, "sizes": True, "srcset": True},
    "track": {"default": True, "kind": True, "label": True, "src": "url", "srclang": True},
    "map": {"name": True},
    "area": {
        "alt": True,
        "coords": True,
        "href": "url",
        "shape": True,
        "target": True,
        "download": True,
        "rel": True,
        "hreflang": True,
        "type": True,
    },
    # Edits
    "del": {"cite": "url", "datetime": True},
    "ins": {"cite": "url", "datetime": True},
    # Progress indicators
    "meter": {"value": True, "min": True, "max": True, "low": True, "high": True, "optimum": True},
    "progress": {"max": True, "value": True},
    # SVG
    "svg": {
        "width": True,
        "height": True,
        "viewBox": True,
        "xmlns": "url",
        "version": True,
        "preserveAspectRatio": True,
        **_SVG_PAINT,
    },
    "g": {"transform": True, **_SVG_PAINT},
    "path": {"d": True, "pathLength": True, "transform": True, **_SVG_PAINT},
    "circle": {"cx": True, "cy": True, "r": True, **_SVG_PAINT},
    "ellipse": {"cx": True, "cy": True, "rx": True, "ry": True, **_SVG_PAINT},
    "rect": {"x": True, "y": True, "width": True, "height": True, "rx": True, "ry": True, **_SVG_PAINT},
    "line": {"x1": True, "y1": True, "x2": True, "y2": True, **_SVG_PAINT},
    "polygon": {"points": True, **_SVG_PAINT},
    "polyline": {"points": True, **_SVG_PAINT},
    "text": {
        "x": True,
        "y": True,
        "dx": True,
        "dy": True,
        "textLength": True,
        "lengthAdjust": True,
        "font-family": True,
        "font-size": True,
        **_SVG_PAINT,
    },
}

COMMENT_SPEC: dict[str, dict] = {
    "a": {"href": "url", "title": True, "rel": True},
    "abbr": {"title": True},
    "b": {},
    "blockquote": {"cite": "url"},
    "br": {},
    "cite": {},
    "code": {},
    "del": {"datetime": True},
    "em": {},
    "i": {},
    "li": {},
    "ol": {},
    "p": {},
    "pre": {},
    "q": {"cite": "url"},
    "s": {},
    "strike": {},
    "strong": {},
    "u": {},
    "ul": {},
}

TEXTAREA_SPEC: dict[str, dict] = {
    "br": {},
    "em": {},
    "strong": {},
}

POST_ALLOWED_HTML = AllowList(POST_SPEC)
COMMENT_ALLOWED_HTML = AllowList(COMMENT_SPEC)
TEXTAREA_ALLOWED_HTML = AllowList(TEXTAREA_SPEC)
EMPTY_ALLOWED_HTML = AllowList()

PROFILES: Mapping[str, AllowList] = MappingProxyType({
    "post": POST_ALLOWED_HTML,
    "comment": COMMENT_ALLOWED_HTML,
    "textarea": TEXTAREA_ALLOWED_HTML,
    "strip": EMPTY_ALLOWED_HTML,
})
