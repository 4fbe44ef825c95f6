"""Sanitizer settings: YAML + .env + DEVCONNECT_* variables, turned into kses values."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

from devconnect.core.models import AppConfig, KsesConfig
from devconnect.kses.allowed import DEFAULT_PROTOCOLS, PROFILES
from devconnect.kses.types import AllowList, KsesPolicy, ProtocolSet

logger = logging.getLogger(__name__)


def _find_project_root() -> Path:
    """Walk up from cwd to find a directory containing pyproject.toml."""
    cwd = Path.cwd()
    for p in [cwd, *cwd.parents]:
        if (p / "pyproject.toml").exists():
            return p
    return cwd


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Read `config/default.yaml` (or `config_path`) and apply env overrides.

    `DEVCONNECT_*` variables win over `.env`, which wins over the YAML file.
    An explicit path that does not exist raises FileNotFoundError.
    """
    root = _find_project_root()
    load_dotenv(root / ".env")

    config_path = config_path or os.getenv("DEVCONNECT_CONFIG")
    yaml_path = Path(config_path) if config_path else root / "config" / "default.yaml"
    yaml_data: dict = {}
    if yaml_path.exists():
        with open(yaml_path) as f:
            yaml_data = yaml.safe_load(f) or {}
    elif config_path:
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    if not isinstance(yaml_data, dict):
        raise ValueError(f"Config file must hold a mapping: {yaml_path}")

    # kses config with env overrides
    kses_data = yaml_data.get("kses") or {}
    if not isinstance(kses_data, dict):
        raise ValueError("'kses' config section must be a mapping")
    kses_data = dict(kses_data)
    env_protocols = os.getenv("DEVCONNECT_ALLOWED_PROTOCOLS")
    if env_protocols:
        kses_data["protocols"] = env_protocols
    env_profile = os.getenv("DEVCONNECT_KSES_PROFILE")
    if env_profile:
        kses_data["default_profile"] = env_profile
    kses = KsesConfig(**kses_data)

    log_level = os.getenv("DEVCONNECT_LOG_LEVEL", yaml_data.get("log_level", "WARNING"))

    return AppConfig(kses=kses, log_level=log_level)


def build_protocols(config: AppConfig) -> ProtocolSet:
    """Configured protocol set, or the built-in one when none is configured."""
    if not config.kses.protocols:
        return DEFAULT_PROTOCOLS
    return ProtocolSet(config.kses.protocols)


def build_allow_list(config: AppConfig, profile: Optional[str] = None) -> AllowList:
    """Allow-list for ``profile``; configured profiles replace built-ins of the same name."""
    name = (profile or config.kses.default_profile).strip().lower()
    if name in config.kses.profiles:
        return AllowList(config.kses.profiles[name])
    if name in PROFILES:
        return PROFILES[name]
    known = sorted({*PROFILES, *config.kses.profiles})
    raise ValueError(f"Unknown kses profile {name!r}; expected one of {', '.join(known)}")


def build_policy(config: AppConfig, profile: Optional[str] = None) -> KsesPolicy:
    """Build the immutable policy handed to request handlers at startup."""
    policy = KsesPolicy(
        allowed_html=build_allow_list(config, profile),
        protocols=build_protocols(config),
    )
    logger.info(
        "kses policy ready: profile=%s tags=%d protocols=%d",
        profile or config.kses.default_profile,
        len(policy.allowed_html),
        len(policy.protocols),
    )
    return policy


def list_profiles(config: AppConfig) -> list[str]:
    return sorted({*PROFILES, *config.kses.profiles})
