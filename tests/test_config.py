"""Tests for application settings."""
import pytest

from sitebuilder.config import Settings, get_db_components


def _settings(**overrides):
    """Settings from explicit values only, ignoring any local .env."""
    return Settings(_env_file=None, **overrides)


class TestSettings:
    """Test derived settings."""

    def test_defaults(self):
        settings = _settings()
        assert settings.API_PORT == 5000
        assert settings.GEMINI_MODEL == "gemini-1.5-flash"
        assert settings.SESSION_MAX_AGE == 7 * 24 * 60 * 60

    @pytest.mark.parametrize("key,valid", [
        ("", False),
        ("dummy_key", False),
        ("your_gemini_api_key_here", False),
        ("AIzaRealLookingKey", True),
    ])
    def test_has_valid_ai_key(self, key, valid):
        assert _settings(GEMINI_API_KEY=key).has_valid_ai_key is valid

    @pytest.mark.parametrize("storage_type,url,environment,expected", [
        ("auto", None, "production", False),
        ("auto", "postgresql://db/site", "production", True),
        ("auto", "postgresql://db/site", "development", False),
        ("memory", "postgresql://db/site", "production", False),
        ("database", None, "development", True),
    ])
    def test_use_database(self, storage_type, url, environment, expected):
        settings = _settings(STORAGE_TYPE=storage_type, DATABASE_URL=url, ENVIRONMENT=environment)
        assert settings.use_database is expected

    def test_local_auth_in_development(self):
        settings = _settings(ENVIRONMENT="development", AUTH_DOMAINS="app.example", OIDC_CLIENT_ID="abc")
        assert settings.is_local_auth is True

    @pytest.mark.parametrize("domains,client_id,expected", [
        ("app.example", "abc", False),
        ("", "abc", True),
        ("app.example", "", True),
        ("app.example", "dummy_client_id", True),
    ])
    def test_local_auth_in_production(self, domains, client_id, expected):
        settings = _settings(ENVIRONMENT="production", AUTH_DOMAINS=domains, OIDC_CLIENT_ID=client_id)
        assert settings.is_local_auth is expected

    def test_auth_domains_split(self):
        assert _settings(AUTH_DOMAINS=" a.example , b.example,").auth_domains == ["a.example", "b.example"]


class TestDbComponents:
    """Test DATABASE_URL parsing."""

    def test_components(self):
        parts = get_db_components("postgresql+psycopg2://user:pw@localhost:5432/sitebuilder")

        assert parts["db_name"] == "sitebuilder"
        assert parts["db_url"] == "postgresql+psycopg2://user:pw@localhost:5432/sitebuilder"
        assert parts["db_url_without_name"] == "postgresql://user:pw@localhost:5432/postgres"

    @pytest.mark.parametrize("url", ["postgresql://localhost:5432", 'postgresql://localhost/bad"name'])
    def test_invalid_urls(self, url):
        with pytest.raises(ValueError):
            get_db_components(url)
