"""Settings validation and the shared HTTP client factory."""

import pytest
from pydantic import ValidationError

from site_content.core.config import Settings
from site_content.infrastructure.http import build_http_client


def test_defaults(monkeypatch) -> None:
    monkeypatch.delenv("HOME_SLUG", raising=False)
    settings = Settings(_env_file=None)
    assert settings.home_slug == "inicio"
    assert settings.content_api_base_url.startswith("http")


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("CONTENT_API_BASE_URL", "https://cms.example.com/api")
    monkeypatch.setenv("HOME_SLUG", "portada")
    settings = Settings(_env_file=None)
    assert settings.content_api_base_url == "https://cms.example.com/api"
    assert settings.home_slug == "portada"


def test_rejects_non_http_backend_url() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, content_api_base_url="ftp://cms")


def test_rejects_blank_home_slug() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, home_slug="  ")


async def test_http_client_carries_base_url_timeout_and_token() -> None:
    settings = Settings(
        _env_file=None,
        content_api_base_url="https://cms.example.com/api/",
        content_api_token="secret",
        content_api_timeout_seconds=3.0,
    )
    client = build_http_client(settings)
    try:
        assert str(client.base_url) == "https://cms.example.com/api/"
        assert client.headers["Authorization"] == "Bearer secret"
        assert client.timeout.read == 3.0
    finally:
        await client.aclose()


async def test_http_client_without_token_sends_no_auth() -> None:
    client = build_http_client(Settings(_env_file=None, content_api_token=None))
    try:
        assert "Authorization" not in client.headers
    finally:
        await client.aclose()


def test_admin_secret_is_optional(monkeypatch) -> None:
    monkeypatch.delenv("ADMIN_API_SECRET", raising=False)
    assert Settings(_env_file=None).admin_api_secret is None
    monkeypatch.setenv("ADMIN_API_SECRET", "s3cret")
    assert Settings(_env_file=None).admin_api_secret.get_secret_value() == "s3cret"
