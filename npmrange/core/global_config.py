# npmrange/core/global_config.py

import os
from pathlib import Path
from typing import Optional, Any

import yaml

from npmrange.core.settings import (
    INCLUDE_PRERELEASE_KEY,
    MAX_STEPS_KEY,
    Settings,
    coerce_bool,
    coerce_positive_int,
)
from npmrange.npm.options import NpmParseOptions

ENV_INCLUDE_PRERELEASE = "NPMRANGE_INCLUDE_PRERELEASE"


def global_config_path() -> Path:
    return Path.home() / ".npmrange" / "config.yaml"


def load_global_config() -> Optional[dict]:
    """Load config from ~/.npmrange/config.yaml"""
    config_path = global_config_path()

    if not config_path.exists():
        return None

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        return None
    return data if isinstance(data, dict) else None


def set_global(key: str, value: Any):
    """Set global configuration key in ~/.npmrange/config.yaml"""
    config_path = global_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    config = load_global_config() or {}
    config[key] = value

    config_path.write_text(yaml.dump(config, default_flow_style=False), encoding="utf-8")


def get_global(key: str, default: Any = None) -> Any:
    config = load_global_config()
    if config and key in config:
        return config[key]
    return default


def get_default_parse_options(project_path: Optional[Path] = None) -> NpmParseOptions:
    """
    Resolve the parse options to use when none are given explicitly.

    Each value is taken from, in order:
    1. Environment variable NPMRANGE_INCLUDE_PRERELEASE (include-prerelease only)
    2. Project settings .npmrange/settings.yaml
    3. Global config ~/.npmrange/config.yaml
    4. NpmParseOptions defaults
    """
    settings = Settings(project_path if project_path is not None else Path.cwd())
    values = {}

    # 1. Env var (highest priority)
    if (env_value := os.getenv(ENV_INCLUDE_PRERELEASE)) is not None:
        values["include_prerelease"] = coerce_bool(ENV_INCLUDE_PRERELEASE, env_value)

    # 2. Project settings, 3. global config
    if "include_prerelease" not in values:
        include_prerelease = settings.get_include_prerelease()
        if include_prerelease is None:
            raw = get_global(INCLUDE_PRERELEASE_KEY)
            include_prerelease = None if raw is None else coerce_bool(INCLUDE_PRERELEASE_KEY, raw)
        if include_prerelease is not None:
            values["include_prerelease"] = include_prerelease

    max_steps = settings.get_max_steps()
    if max_steps is None:
        raw = get_global(MAX_STEPS_KEY)
        max_steps = None if raw is None else coerce_positive_int(MAX_STEPS_KEY, raw)
    if max_steps is not None:
        values["max_steps"] = max_steps

    # 4. Defaults
    return NpmParseOptions(**values)

