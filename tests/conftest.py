# tests/conftest.py
import pytest

from devconnect.kses.types import AllowList, ProtocolSet


_ENV_VARS = (
    "DEVCONNECT_CONFIG",
    "DEVCONNECT_ALLOWED_PROTOCOLS",
    "DEVCONNECT_KSES_PROFILE",
    "DEVCONNECT_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run from a directory with no pyproject.toml, config/ or .env."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def link_allow_list():
    return AllowList({
        "a": {"href": "url", "title": True, "rel": True},
        "b": {},
        "div": {"class": "class", "style": "style"},
        "span": {"title": True, "data-count": "int"},
    })


@pytest.fixture
def web_protocols():
    return ProtocolSet(["http", "https", "mailto"])
