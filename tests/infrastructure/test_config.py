"""Application Configuration — verifies defaults and environment overrides."""

import pytest
from pydantic import ValidationError

from customer_api.config import Settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("ENVIRONMENT", "DATABASE_URL", "PORT", "DATABASE_CREATE_SCHEMA"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings(_env_file=None)
    assert settings.environment == "development"
    assert not settings.is_production
    assert settings.port == 5000
    assert settings.database_url == "sqlite+aiosqlite:///./customer_management.db"
    assert settings.database_create_schema is True


def test_environment_mode_from_env(clean_env):
    clean_env.setenv("ENVIRONMENT", " Production ")
    assert Settings(_env_file=None).is_production


def test_unknown_environment_rejected(clean_env):
    clean_env.setenv("ENVIRONMENT", "staging")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_port_from_env(clean_env):
    clean_env.setenv("PORT", "8080")
    assert Settings(_env_file=None).port == 8080


def test_postgres_url_uses_asyncpg(clean_env):
    clean_env.setenv("DATABASE_URL", "postgresql://user:pw@db:5432/customers")
    assert Settings(_env_file=None).database_url == (
        "postgresql+asyncpg://user:pw@db:5432/customers"
    )
