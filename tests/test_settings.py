from __future__ import annotations

import pytest
from pydantic import ValidationError

from facility_topology.config.settings import Settings
from facility_topology.errors import ConfigurationError


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("TOPOLOGY_MANAGEMENT_API_URL", "https://twins.example.test/management")
    monkeypatch.setenv("TOPOLOGY_ACCESS_TOKEN", "token-123")
    monkeypatch.setenv("TOPOLOGY_OUTPUT_DIR", str(tmp_path / "out"))

    settings = Settings(_env_file=None)

    assert settings.management_api_url == "https://twins.example.test/management/"
    kwargs = settings.client_kwargs()
    assert kwargs["access_token"] == "token-123"
    assert "basic_auth" not in kwargs
    settings.ensure_directories()
    assert (tmp_path / "out").exists()


def test_settings_fall_back_to_basic_auth(tmp_path) -> None:
    settings = Settings(
        _env_file=None,
        management_api_url="https://twins.example.test/",
        username="manager",
        password="secret",
        space_filter="?maxLevel=5",
        log_dir=tmp_path / "logs",
    )

    kwargs = settings.client_kwargs()

    assert kwargs["basic_auth"] == ("manager", "secret")
    assert kwargs["space_filter"] == "maxLevel=5"


def test_client_kwargs_require_api_url() -> None:
    settings = Settings(_env_file=None, management_api_url="")

    with pytest.raises(ConfigurationError):
        settings.client_kwargs()


def test_settings_reject_non_positive_timeout() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, http_timeout_s=0)
