import pytest

from devconnect.kses.allowed import DEFAULT_PROTOCOLS
from devconnect.kses.protocols import clean_url, strip_bad_protocols, validate_protocol
from devconnect.kses.types import ProtocolSet


@pytest.mark.parametrize("scheme", sorted(DEFAULT_PROTOCOLS))
def test_every_listed_protocol_validates(scheme):
    assert validate_protocol(f"{scheme}://x") is True


@pytest.mark.parametrize(
    "url", ["javascript://x", "JAVASCRIPT:alert(1)", "vbscript:x", "data:text/html,x", ":nothing"]
)
def test_unlisted_protocols_fail(url):
    assert validate_protocol(url) is False


@pytest.mark.parametrize("url", ["/relative/path", "page.html?x=1", "#top", ""])
def test_relative_urls_are_allowed(url):
    assert validate_protocol(url) is True


def test_validate_protocol_is_case_insensitive():
    assert validate_protocol("HTTPS://Example.com") is True


def test_validate_protocol_uses_given_set(web_protocols):
    assert validate_protocol("ftp://x", web_protocols) is False
    assert validate_protocol("mailto:a@b.c", web_protocols) is True


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("javascript:alert(1)", "alert(1)"),
        ("javascript:javascript:alert(1)", "alert(1)"),
        ("vbscript:javascript:http://x", "http://x"),
        ("jav\tascript:x", "x"),
        ("http://example.com", "http://example.com"),
        ("HTTP://example.com", "HTTP://example.com"),
        ("no colon here", "no colon here"),
        ("", ""),
    ],
)
def test_strip_bad_protocols(raw, expected):
    assert strip_bad_protocols(raw) == expected


def test_strip_bad_protocols_terminates_on_long_chains():
    assert strip_bad_protocols("a:" * 5000 + "tail") == "tail"
    assert strip_bad_protocols(":" * 5000) == ":" * 5000


def test_strip_bad_protocols_respects_custom_set():
    only_https = ProtocolSet(["https"])
    assert strip_bad_protocols("http://x", only_https) == "//x"
    assert strip_bad_protocols("https://x", only_https) == "https://x"


@pytest.mark.parametrize(
    "raw",
    [
        "javascript:alert(1)",
        "&#106;avascript:alert(1)",
        "&#x6A;avascript:alert(1)",
        "java script:alert(1)",
        " JaVaScRiPt:alert(1) ",
        "&amp;#106;avascript:x",
    ],
)
def test_clean_url_rejects_bad_schemes(raw):
    assert clean_url(raw) == ""


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  http://example.com/a b  ", "http://example.com/ab"),
        ("/path/to?q=1&x=[2]", "/path/to?q=1&x=[2]"),
        ("http://x.com/<script>", "http://x.com/script"),
        ("https://x.com/?a=1&amp;b=2", "https://x.com/?a=1&b=2"),
        ("mailto:someone@example.com", "mailto:someone@example.com"),
    ],
)
def test_clean_url_keeps_safe_urls(raw, expected):
    assert clean_url(raw) == expected
