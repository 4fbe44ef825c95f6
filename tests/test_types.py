import dataclasses

import pytest

from devconnect.core.models import ValidatorKind
from devconnect.kses.allowed import PROFILES
from devconnect.kses.types import ANY, URL, AllowList, ProtocolSet, Validator


@pytest.mark.parametrize(
    "value, kind",
    [
        (True, ValidatorKind.ANY),
        ("any", ValidatorKind.ANY),
        ("*", ValidatorKind.ANY),
        (" URL ", ValidatorKind.URL),
        ("int", ValidatorKind.INT),
        ("bool", ValidatorKind.BOOL),
        ("classname", ValidatorKind.CLASS_NAME),
        ("class", ValidatorKind.CLASS_NAME),
        ("style", ValidatorKind.STYLE),
        (ValidatorKind.URL, ValidatorKind.URL),
        (str.isdigit, ValidatorKind.PREDICATE),
    ],
)
def test_validator_coerce(value, kind):
    assert Validator.coerce(value).kind is kind


@pytest.mark.parametrize("value", ["nope", False, 3, None, ValidatorKind.PREDICATE])
def test_validator_from_bad_value(value):
    with pytest.raises(ValueError):
        Validator.coerce(value)


def test_validator_callable_only_for_predicates():
    with pytest.raises(ValueError):
        Validator(ValidatorKind.PREDICATE)
    with pytest.raises(ValueError):
        Validator(ValidatorKind.URL, str.isdigit)


def test_validator_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        URL.kind = ValidatorKind.ANY


def test_allow_list_lowercases_and_converts():
    allow = AllowList({"A": {"HREF": "url", "Title": True}, "BR": None})
    assert set(allow) == {"a", "br"}
    assert allow["a"]["href"] == URL
    assert allow["a"]["title"] == ANY
    assert dict(allow["br"]) == {}


def test_allow_list_lookups():
    allow = AllowList({"b": {}})
    assert allow.allows("b")
    assert not allow.allows("i")
    assert dict(allow.attributes_for("i")) == {}
    assert len(allow) == 1


def test_allow_list_is_read_only():
    allow = AllowList({"a": {"href": "url"}})
    with pytest.raises(TypeError):
        allow["a"]["onclick"] = ANY
    with pytest.raises(TypeError):
        allow["script"] = {}


@pytest.mark.parametrize(
    "value",
    [
        {"a": {}, "A": {}},
        {"a": {"href": "url", "HREF": "any"}},
        {"": {}},
        {"a": ["href"]},
        {"a": {"href": "javascript"}},
    ],
)
def test_allow_list_rejects_bad_rules(value):
    with pytest.raises(ValueError):
        AllowList(value)


def test_allow_list_to_dict():
    allow = AllowList({"a": {"href": "url", "x": str.isdigit}})
    assert allow.to_dict() == {"a": {"href": "url", "x": "predicate"}}


def test_protocol_set():
    protocols = ProtocolSet([" HTTPS ", "mailto", "svn+ssh"])
    assert protocols == {"https", "mailto", "svn+ssh"}
    assert "https" in protocols


@pytest.mark.parametrize("schemes", [[], ["java script"], ["1http"], [""]])
def test_protocol_set_rejects_bad_schemes(schemes):
    with pytest.raises(ValueError):
        ProtocolSet(schemes)


def test_builtin_profiles():
    assert set(PROFILES) == {"post", "comment", "textarea", "strip"}
    assert len(PROFILES["strip"]) == 0
    post = PROFILES["post"]
    for tag in ("script", "style", "iframe", "object", "embed", "form", "input"):
        assert not post.allows(tag)
    assert post["a"]["href"] == URL
    assert set(PROFILES["textarea"]) == {"br", "em", "strong"}
