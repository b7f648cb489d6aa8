from __future__ import annotations

import json

import pytest

from render_gateway.shared.config import AppConfig


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in (
        "APP_ENV",
        "ADMIN_USERNAME",
        "ADMIN_PASSWORD",
        "RENDER_ACCOUNTS",
        "SESSION_NAMESPACE",
        "SESSION_TTL",
        "DATABASE_URL",
        "RENDER_API_BASE_URL",
        "RENDER_API_TIMEOUT",
        "COOKIE_SECURE",
        "ALLOWED_ORIGINS",
        "ENABLE_HSTS",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    config = AppConfig()

    assert config.admin_username == "admin"
    assert config.admin_password.get_secret_value() == ""
    assert config.render_accounts == []
    assert config.session_namespace == "session"
    assert config.session_ttl == 86400
    assert config.database.url == "sqlite:///gateway.db"
    assert config.upstream.base_url == "https://api.render.com/v1"
    assert config.security.allowed_origins == ["*"]


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    accounts = [
        {"id": "acct-1", "name": "Production", "apiKey": "rnd_prod"},
        {"id": "acct-2", "name": "Staging", "apiKey": "rnd_staging"},
    ]
    monkeypatch.setenv("ADMIN_USERNAME", "ops")
    monkeypatch.setenv("ADMIN_PASSWORD", "hunter2")
    monkeypatch.setenv("RENDER_ACCOUNTS", json.dumps(accounts))
    monkeypatch.setenv("SESSION_NAMESPACE", "gw")
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("RENDER_API_TIMEOUT", "12.5")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("COOKIE_SECURE", "yes")

    config = AppConfig()

    assert config.admin_username == "ops"
    assert config.admin_password.get_secret_value() == "hunter2"
    assert [account.id for account in config.render_accounts] == ["acct-1", "acct-2"]
    assert config.render_accounts[0].api_key.get_secret_value() == "rnd_prod"
    assert "rnd_prod" not in repr(config)
    assert config.session_namespace == "gw"
    assert config.database.url == "sqlite://"
    assert config.upstream.timeout == 12.5
    assert config.security.allowed_origins == ["https://a.example", "https://b.example"]
    assert config.security.cookie_secure is True


def test_production_requires_password(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "production")

    with pytest.raises(SystemExit):
        AppConfig()


def test_production_with_password_starts(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("ADMIN_PASSWORD", "hunter2")

    assert AppConfig().is_production()
