"""Tests for configuration lookup and the application secret."""

import pytest

from storefront.helpers import app_secret
from storefront.support import Config, EnvHelper


class TestConfig:

    def test_module_values(self):
        assert Config.get("session.COOKIE_NAME") == "sessionId"
        assert Config.get("session.VERIFY_MAX_ATTEMPTS") == 10
        assert Config.get("security.CORS_MAX_AGE") == 86400

    def test_lookup_is_case_insensitive(self):
        assert Config.get("SESSION.cookie_name") == Config.get("session.COOKIE_NAME")

    def test_missing_key_returns_default(self):
        assert Config.get("session.NOPE", "fallback") == "fallback"
        assert Config.get("nonexistent_module.KEY", 3) == 3
        assert not Config.has("session.NOPE")

    def test_runtime_override(self):
        Config.set("session.VERIFY_INITIAL_DELAY", 0.25)
        assert Config.get("session.verify_initial_delay") == 0.25

        Config.clear_runtime_overrides()
        assert Config.get("session.VERIFY_INITIAL_DELAY") == pytest.approx(0.1)

    def test_whole_module(self):
        assert Config.all("session").DRIVER == "database"

    def test_env_list(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://a.example, https://b.example")
        assert EnvHelper.get_list("CORS_ALLOWED_ORIGINS") == ["https://a.example", "https://b.example"]


class TestAppSecret:

    def test_configured_secret(self):
        Config.set("app.APP_SECRET_KEY", "configured")
        assert app_secret() == "configured"

    def test_generated_in_development_and_kept(self):
        Config.set("app.APP_SECRET_KEY", None)

        secret = app_secret()

        assert len(secret) == 64
        assert app_secret() == secret

    def test_required_in_production(self):
        Config.set("app.APP_SECRET_KEY", None)
        Config.set("app.APP_ENV", "production")

        with pytest.raises(ValueError, match="SESSION_SECRET"):
            app_secret()
