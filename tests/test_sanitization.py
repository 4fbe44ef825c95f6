import pytest

from devconnect.utils.sanitization import (
    remove_accents,
    sanitize_email,
    sanitize_hex_color,
    sanitize_hex_color_no_hash,
    sanitize_html_class,
    sanitize_key,
    sanitize_locale_name,
    sanitize_mime_type,
    sanitize_sql_orderby,
    sanitize_text_field,
    sanitize_textarea_field,
    sanitize_title,
    sanitize_title_for_query,
    sanitize_title_with_dashes,
    sanitize_trackback_urls,
    sanitize_url,
    sanitize_user,
)


def test_remove_accents():
    assert remove_accents("Crème Brûlée") == "Creme Brulee"


def test_sanitize_text_field():
    assert sanitize_text_field("  <b>Hello</b> world\x00 ") == "Hello world"


def test_sanitize_textarea_field():
    html = "<p>Hi<br/><em>there</em><script>x</script></p>"
    assert sanitize_textarea_field(html) == "Hi<br><em>there</em>x"


def test_sanitize_key():
    assert sanitize_key("My-Key_1!") == "my-key_1"


def test_sanitize_html_class():
    assert sanitize_html_class("btn primary!") == "btnprimary"
    assert sanitize_html_class("!!!", "fallback") == "fallback"
    assert sanitize_html_class("") == ""


@pytest.mark.parametrize(
    "title, expected",
    [
        ("Hello, World! <b>Now</b>", "hello-world-now"),
        ("Crème Brûlée", "creme-brulee"),
        ("  --a--b  ", "a-b"),
    ],
)
def test_sanitize_title(title, expected):
    assert sanitize_title(title) == expected


def test_sanitize_title_fallback():
    assert sanitize_title("!!!", "untitled") == "untitled"
    assert sanitize_title("!!!") == ""


def test_sanitize_email():
    assert sanitize_email("john doe@exa<m>ple.com") == "johndoe@example.com"


def test_sanitize_mime_type():
    assert sanitize_mime_type("image/svg+xml") == "image/svg+xml"
    assert sanitize_mime_type("text/<b>plain") == "text/bplain"


def test_sanitize_hex_color():
    assert sanitize_hex_color("#FF0000") == "#FF0000"
    assert sanitize_hex_color("ff0000") == "#ff0000"
    assert sanitize_hex_color("#fff") is None
    assert sanitize_hex_color("zzzzzz") is None


def test_sanitize_hex_color_no_hash():
    assert sanitize_hex_color_no_hash("#abcdef") == "abcdef"
    assert sanitize_hex_color_no_hash("abc") is None


def test_sanitize_url():
    assert sanitize_url("javascript:x") == ""
    assert sanitize_url("https://x.com/a&b") == "https://x.com/a&amp;b"


def test_sanitize_user():
    assert sanitize_user("<b>José</b> O'Brien!") == "Jose OBrien"
    assert sanitize_user("john.doe-1@example.com") == "john.doe-1@example.com"


def test_sanitize_user_strict():
    assert sanitize_user("<b>José</b> O'Brien!", strict=True) == "JoseOBrien"
    assert sanitize_user("john.doe@example.com", strict=True) == "johndoeexamplecom"


def test_title_variants_match_sanitize_title():
    assert sanitize_title_for_query("Hello World") == "hello-world"
    assert sanitize_title_with_dashes("Crème  Brûlée!") == "creme-brulee"


def test_sanitize_locale_name():
    assert sanitize_locale_name("en_US") == "en_us"
    assert sanitize_locale_name("pt-BR; drop") == "pt-brdrop"


def test_sanitize_sql_orderby():
    raw = "post_date DESC, `title` ASC; DROP TABLE x--"
    assert sanitize_sql_orderby(raw) == "post_date DESC, `title` ASC DROP TABLE x"


def test_sanitize_trackback_urls():
    raw = "http://a.com/x\r\n\njavascript:alert(1)\nhttps://b.com/?a=1&b=2\n"
    assert sanitize_trackback_urls(raw) == "http://a.com/x\nhttps://b.com/?a=1&amp;b=2"
    assert sanitize_trackback_urls("") == ""
