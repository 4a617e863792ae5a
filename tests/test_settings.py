# tests/test_settings.py

from pathlib import Path

import pytest
import yaml

from npmrange.core.exceptions import SettingsError
from npmrange.core.global_config import (
    ENV_INCLUDE_PRERELEASE,
    get_default_parse_options,
    get_global,
    global_config_path,
    set_global,
)
from npmrange.core.settings import SETTINGS_FILE, Settings, coerce_bool, coerce_positive_int


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> Path:
    """Point the global config at a temporary home and clear the env override."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.delenv(ENV_INCLUDE_PRERELEASE, raising=False)
    return home


@pytest.fixture
def project(tmp_path: Path) -> Path:
    d = tmp_path / "project"
    d.mkdir()
    return d


def write_settings(project: Path, data: dict):
    settings_file = project / SETTINGS_FILE
    settings_file.parent.mkdir(parents=True, exist_ok=True)
    settings_file.write_text(yaml.dump(data), encoding="utf-8")

# --- Settings ---

def test_missing_settings_file_is_empty(project: Path):
    settings = Settings(project)
    assert settings.get_settings() == {}
    assert settings.get_include_prerelease() is None
    assert settings.get_max_steps() is None


def test_settings_round_trip(project: Path):
    settings = Settings(project)
    settings.set_include_prerelease(True)
    settings.set_max_steps(500)

    data = yaml.safe_load((project / SETTINGS_FILE).read_text(encoding="utf-8"))
    assert data == {"include-prerelease": True, "max-steps": 500}

    reloaded = Settings(project)
    assert reloaded.get_include_prerelease() is True
    assert reloaded.get_max_steps() == 500


def test_unchanged_value_is_not_written(project: Path):
    settings = Settings(project)
    settings.set_include_prerelease(False)
    settings_file = project / SETTINGS_FILE
    settings_file.write_text("include-prerelease: false\n# keep me\n", encoding="utf-8")

    settings = Settings(project)
    settings.set_include_prerelease(False)
    assert "# keep me" in settings_file.read_text(encoding="utf-8")


def test_malformed_settings_file_is_empty(project: Path):
    settings_file = project / SETTINGS_FILE
    settings_file.parent.mkdir(parents=True)
    settings_file.write_text("include-prerelease: [unclosed", encoding="utf-8")
    assert Settings(project).get_settings() == {}


def test_invalid_setting_value_raises(project: Path):
    write_settings(project, {"max-steps": "many"})
    with pytest.raises(SettingsError) as exc:
        Settings(project).get_max_steps()
    assert exc.value.key == "max-steps"


@pytest.mark.parametrize("value, expected", [
    (True, True),
    (False, False),
    ("1", True),
    ("yes", True),
    ("TRUE", True),
    (" on ", True),
    ("0", False),
    ("no", False),
    ("False", False),
    ("off", False),
])
def test_coerce_bool(value, expected):
    assert coerce_bool("key", value) is expected


@pytest.mark.parametrize("value", ["maybe", "", 2, None])
def test_coerce_bool_rejects(value):
    with pytest.raises(SettingsError):
        coerce_bool("key", value)


@pytest.mark.parametrize("value, expected", [(1, 1), ("250", 250), (10_000, 10_000)])
def test_coerce_positive_int(value, expected):
    assert coerce_positive_int("key", value) == expected


@pytest.mark.parametrize("value", [0, -5, "abc", None, True, "1.5"])
def test_coerce_positive_int_rejects(value):
    with pytest.raises(SettingsError):
        coerce_positive_int("key", value)

# --- Global config ---

def test_global_config_round_trip(isolated_home: Path):
    assert get_global("include-prerelease") is None
    set_global("include-prerelease", True)

    assert global_config_path() == isolated_home / ".npmrange" / "config.yaml"
    assert global_config_path().exists()
    assert get_global("include-prerelease") is True
    assert get_global("missing", "fallback") == "fallback"

# --- Resolution order ---

def test_defaults_without_any_configuration(project: Path):
    options = get_default_parse_options(project)
    assert options.include_prerelease is False
    assert options.max_steps == 100_000
    assert options.max_length == 4096


def test_global_config_is_used(project: Path):
    set_global("include-prerelease", True)
    set_global("max-steps", 42)
    options = get_default_parse_options(project)
    assert options.include_prerelease is True
    assert options.max_steps == 42


def test_project_settings_override_global(project: Path):
    set_global("include-prerelease", True)
    set_global("max-steps", 42)
    write_settings(project, {"include-prerelease": False, "max-steps": 7})

    options = get_default_parse_options(project)
    assert options.include_prerelease is False
    assert options.max_steps == 7


def test_env_var_overrides_everything(project: Path, monkeypatch):
    set_global("include-prerelease", False)
    write_settings(project, {"include-prerelease": False})
    monkeypatch.setenv(ENV_INCLUDE_PRERELEASE, "1")

    assert get_default_parse_options(project).include_prerelease is True


def test_invalid_env_var_raises(project: Path, monkeypatch):
    monkeypatch.setenv(ENV_INCLUDE_PRERELEASE, "sometimes")
    with pytest.raises(SettingsError) as exc:
        get_default_parse_options(project)
    assert exc.value.key == ENV_INCLUDE_PRERELEASE
