# topmark:header:start
#
#   project      : ECResolve
#   file         : test_settings.py
#   file_relpath : tests/config/test_settings.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for resolver settings and their environment overrides."""

from __future__ import annotations

import dataclasses

import pytest

from ecresolve.config.settings import ResolverSettings
from ecresolve.constants import ENV_CONFIG_FILENAME, ENV_ENCODING, ENV_ROOT_KEY


def test_defaults() -> None:
    """Defaults target `.editorconfig` files in UTF-8 with a `root` key."""
    settings = ResolverSettings()
    assert settings.config_filename == ".editorconfig"
    assert settings.root_key == "root"
    assert settings.encoding == "utf-8"


def test_settings_are_frozen() -> None:
    """Settings cannot be mutated after construction."""
    settings = ResolverSettings()
    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.root_key = "top"  # type: ignore[misc]


def test_from_env_mapping() -> None:
    """Explicit environment mappings override each field."""
    settings = ResolverSettings.from_env(
        {ENV_CONFIG_FILENAME: ".styleconfig", ENV_ROOT_KEY: "top", ENV_ENCODING: "latin-1"}
    )
    assert settings == ResolverSettings(".styleconfig", "top", "latin-1")


def test_from_env_blank_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    """Blank variables keep the defaults; the process environment is the default source."""
    monkeypatch.setenv(ENV_CONFIG_FILENAME, "   ")
    monkeypatch.setenv(ENV_ROOT_KEY, "boundary")
    settings = ResolverSettings.from_env()
    assert settings.config_filename == ".editorconfig"
    assert settings.root_key == "boundary"


@pytest.mark.parametrize("name", ["", "sub/.editorconfig"])
def test_invalid_config_filename(name: str) -> None:
    """The config file name must be a bare, non-empty file name."""
    with pytest.raises(ValueError):
        ResolverSettings(config_filename=name)
