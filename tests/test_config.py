"""Settings tests — env loading and the production secret guard."""

import pytest
from pydantic import ValidationError

from journalgql.config import DEV_JWT_SECRET, Settings


def test_defaults_are_development(monkeypatch):
    monkeypatch.delenv("JOURNAL_ENVIRONMENT", raising=False)
    monkeypatch.delenv("JOURNAL_JWT_SECRET", raising=False)
    settings = Settings(_env_file=None)
    assert settings.environment == "development"
    assert settings.jwt_secret == DEV_JWT_SECRET
    assert settings.token_expire_days == 7
    assert settings.bcrypt_rounds == 10


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("JOURNAL_DATABASE_URL", "sqlite+aiosqlite:///./journal.db")
    monkeypatch.setenv("JOURNAL_PORT", "9000")
    settings = Settings(_env_file=None)
    assert settings.database_url == "sqlite+aiosqlite:///./journal.db"
    assert settings.port == 9000


def test_production_requires_real_secret(monkeypatch):
    monkeypatch.delenv("JOURNAL_JWT_SECRET", raising=False)
    with pytest.raises(ValidationError, match="JOURNAL_JWT_SECRET"):
        Settings(_env_file=None, environment="production")


def test_production_with_secret_is_fine():
    settings = Settings(_env_file=None, environment="production", jwt_secret="s3cr3t-value")
    assert settings.environment == "production"
