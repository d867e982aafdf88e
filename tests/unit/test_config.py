r"""Unit tests for the connection settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from airtablex.config import (
    DEFAULT_ENDPOINT_URL,
    DEFAULT_TIMEOUT,
    Configuration,
    base_from_env,
    read_properties,
    resolve_setting,
)

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def credentials_file(tmp_path: Path) -> Path:
    path = tmp_path / "credentials.properties"
    path.write_text(
        "# Airtable credentials\n"
        "! legacy comment\n"
        "\n"
        "AIRTABLE_API_KEY=file-key\n"
        "AIRTABLE_BASE : appFromFile\n"
        "EMPTY\n",
        encoding="utf-8",
    )
    return path


#####################################
#     Tests for read_properties     #
#####################################


def test_read_properties(credentials_file: Path) -> None:
    """Test that keys and values are read and comments skipped."""
    assert read_properties(credentials_file) == {
        "AIRTABLE_API_KEY": "file-key",
        "AIRTABLE_BASE": "appFromFile",
        "EMPTY": "",
    }


def test_read_properties_value_with_separator(tmp_path: Path) -> None:
    """Test that only the first separator splits key and value."""
    path = tmp_path / "endpoint.properties"
    path.write_text("AIRTABLE_ENDPOINT_URL=https://proxy.test:8443/v0\n", encoding="utf-8")
    assert read_properties(path) == {"AIRTABLE_ENDPOINT_URL": "https://proxy.test:8443/v0"}


def test_read_properties_missing_file(tmp_path: Path) -> None:
    """Test that a missing file gives an empty dict."""
    assert read_properties(tmp_path / "missing.properties") == {}


#####################################
#     Tests for resolve_setting     #
#####################################


def test_resolve_setting_environment_first(credentials_file: Path) -> None:
    """Test that the environment takes precedence over the file."""
    environ = {"AIRTABLE_API_KEY": "env-key"}
    assert resolve_setting("AIRTABLE_API_KEY", environ, credentials_file) == "env-key"


def test_resolve_setting_file_fallback(credentials_file: Path) -> None:
    """Test that the file is used when the environment has no value."""
    assert resolve_setting("AIRTABLE_BASE", {}, credentials_file) == "appFromFile"


def test_resolve_setting_missing() -> None:
    """Test that an undefined setting gives None."""
    assert resolve_setting("AIRTABLE_BASE", {}) is None


def test_resolve_setting_os_environ(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that os.environ is read by default."""
    monkeypatch.setenv("AIRTABLE_BASE", "appFromEnv")
    assert resolve_setting("AIRTABLE_BASE") == "appFromEnv"


###################################
#     Tests for Configuration     #
###################################


def test_configuration_defaults() -> None:
    """Test Configuration default attributes."""
    config = Configuration(api_key="key123")
    assert config.endpoint_url == DEFAULT_ENDPOINT_URL
    assert config.timeout == DEFAULT_TIMEOUT
    assert config.proxy is None


def test_configuration_strips_trailing_slash() -> None:
    """Test that the endpoint URL is stored without trailing slash."""
    config = Configuration(api_key="key123", endpoint_url="https://api.airtable.test/v0/")
    assert config.endpoint_url == "https://api.airtable.test/v0"


def test_configuration_httpx_timeout() -> None:
    """Test that an httpx.Timeout is accepted."""
    timeout = httpx.Timeout(5.0, connect=1.0)
    assert Configuration(api_key="key123", timeout=timeout).timeout is timeout


@pytest.mark.parametrize(
    ("kwargs", "match"),
    [
        ({"api_key": ""}, r"Missing Airtable API key"),
        ({"api_key": "key", "endpoint_url": ""}, r"Missing Airtable endpoint URL"),
        ({"api_key": "key", "timeout": 0}, r"timeout must be > 0"),
    ],
)
def test_configuration_invalid(kwargs: dict, match: str) -> None:
    """Test that invalid settings raise ValueError."""
    with pytest.raises(ValueError, match=match):
        Configuration(**kwargs)


def test_configuration_repr_masks_api_key() -> None:
    """Test that the API key does not appear in the representation."""
    text = repr(Configuration(api_key="secret-key"))
    assert "secret-key" not in text
    assert "api_key='***'" in text


def test_configuration_from_env() -> None:
    """Test building a configuration from the environment."""
    config = Configuration.from_env(
        environ={"AIRTABLE_API_KEY": "env-key", "AIRTABLE_ENDPOINT_URL": "https://proxy.test/v0/"},
        timeout=3.0,
        proxy="http://localhost:3128",
    )
    assert config.api_key == "env-key"
    assert config.endpoint_url == "https://proxy.test/v0"
    assert config.timeout == 3.0
    assert config.proxy == "http://localhost:3128"


def test_configuration_from_env_credentials_file(credentials_file: Path) -> None:
    """Test building a configuration from a properties file."""
    config = Configuration.from_env(environ={}, credentials_file=credentials_file)
    assert config.api_key == "file-key"
    assert config.endpoint_url == DEFAULT_ENDPOINT_URL


def test_configuration_from_env_missing_key(tmp_path: Path) -> None:
    """Test that a missing API key raises ValueError."""
    with pytest.raises(ValueError, match=r"Missing Airtable API key"):
        Configuration.from_env(environ={}, credentials_file=tmp_path / "missing.properties")


###################################
#     Tests for base_from_env     #
###################################


def test_base_from_env_environment() -> None:
    """Test that the base id is read from the environment."""
    assert base_from_env({"AIRTABLE_BASE": "app1"}) == "app1"


def test_base_from_env_credentials_file(credentials_file: Path) -> None:
    """Test that the base id is read from the properties file."""
    assert base_from_env({}, credentials_file) == "appFromFile"


def test_base_from_env_missing() -> None:
    """Test that a missing base id raises ValueError."""
    with pytest.raises(ValueError, match=r"Missing Airtable base id"):
        base_from_env({}, credentials_file=None)


def test_configuration_from_env_default_credentials_file(
    credentials_file: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that credentials.properties in the working directory is used
    by default."""
    monkeypatch.chdir(credentials_file.parent)
    assert Configuration.from_env(environ={}).api_key == "file-key"
    assert base_from_env({}) == "appFromFile"


def test_configuration_from_env_default_credentials_file_missing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that a missing default credentials file is ignored."""
    monkeypatch.chdir(tmp_path)
    assert Configuration.from_env(environ={"AIRTABLE_API_KEY": "env-key"}).api_key == "env-key"


def test_configuration_from_env_credentials_file_disabled(
    credentials_file: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that credentials_file=None disables the file lookup."""
    monkeypatch.chdir(credentials_file.parent)
    with pytest.raises(ValueError, match=r"Missing Airtable API key"):
        Configuration.from_env(environ={}, credentials_file=None)
