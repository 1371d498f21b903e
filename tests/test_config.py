"""
Tests for settings loading and database URL handling.
"""

import pytest
from pydantic import ValidationError

from practicedesk.core.config import Settings
from practicedesk.database import build_database_url

REQUIRED = {
    "DATABASE_URL": "sqlite://",
    "JWT_SECRET_KEY": "k" * 32,
    "JWT_ISSUER": "issuer",
    "JWT_AUDIENCE": "audience",
}


@pytest.fixture
def clean_env(monkeypatch):
    for name in REQUIRED:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    def test_loads_from_env(self, clean_env):
        for name, value in REQUIRED.items():
            clean_env.setenv(name, value)

        settings = Settings(_env_file=None)

        assert settings.JWT_ISSUER == "issuer"
        assert settings.JWT_ALGORITHM == "HS256"
        assert settings.JWT_EXPIRE_HOURS == 24
        assert settings.API_PREFIX == "/api"

    @pytest.mark.parametrize("missing", ["JWT_SECRET_KEY", "JWT_ISSUER", "JWT_AUDIENCE"])
    def test_missing_jwt_setting_is_fatal(self, clean_env, missing):
        for name, value in REQUIRED.items():
            if name != missing:
                clean_env.setenv(name, value)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_short_secret_rejected(self, clean_env):
        for name, value in REQUIRED.items():
            clean_env.setenv(name, value)
        clean_env.setenv("JWT_SECRET_KEY", "short")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_blank_issuer_rejected(self, clean_env):
        for name, value in REQUIRED.items():
            clean_env.setenv(name, value)
        clean_env.setenv("JWT_ISSUER", "   ")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestDatabaseUrl:
    def test_postgres_gets_sslmode(self):
        url = build_database_url("postgresql://u:p@db/app", ssl_required=True)
        assert url == "postgresql://u:p@db/app?sslmode=require"

    def test_existing_query_string(self):
        url = build_database_url("postgresql://u:p@db/app?connect_timeout=5", True)
        assert url.endswith("?connect_timeout=5&sslmode=require")

    def test_explicit_sslmode_kept(self):
        url = "postgresql://u:p@db/app?sslmode=disable"
        assert build_database_url(url, True) == url

    def test_ssl_not_required(self):
        url = "postgresql://u:p@db/app"
        assert build_database_url(url, False) == url

    def test_sqlite_untouched(self):
        assert build_database_url("sqlite://", True) == "sqlite://"
