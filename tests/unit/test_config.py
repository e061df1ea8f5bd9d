"""
Unit tests for the settings module.
"""
import os
import subprocess
import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

import mercure_client
from mercure_client.client import Client
from mercure_client.config import Environment, Settings, get_settings

ENV_VARS = [
    "MERCURE_CLIENT_ENVIRONMENT",
    "MERCURE_CLIENT_LOGGING_LEVEL",
    "MERCURE_CLIENT_HUB_URL",
    "MERCURE_CLIENT_HTTP_TIMEOUT_SECONDS",
    "MERCURE_CLIENT_PUBLISHER_JWT_SECRET",
    "MERCURE_CLIENT_PUBLISHER_TOPIC_SELECTORS",
    "MERCURE_CLIENT_SUBSCRIBER_JWT_SECRET",
    "MERCURE_CLIENT_SUBSCRIBER_JWT_MAX_AGE_SECONDS",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.ENVIRONMENT == Environment.DEVELOPMENT
        assert settings.LOGGING_LEVEL == "INFO"
        assert settings.HUB_URL == "https://localhost/.well-known/mercure"
        assert settings.HTTP_TIMEOUT_SECONDS == 10.0
        assert settings.PUBLISHER_JWT_SECRET is None
        assert settings.PUBLISHER_TOPIC_SELECTORS == ["*"]
        assert settings.SUBSCRIBER_JWT_SECRET is None
        assert settings.SUBSCRIBER_JWT_MAX_AGE_SECONDS == 3600
        assert settings.is_development()

    def test_reads_prefixed_environment(self, clean_env):
        clean_env.setenv("MERCURE_CLIENT_ENVIRONMENT", "production")
        clean_env.setenv("MERCURE_CLIENT_LOGGING_LEVEL", "debug")
        clean_env.setenv(
            "MERCURE_CLIENT_PUBLISHER_TOPIC_SELECTORS",
            '["https://example.com/books/{book_id}"]',
        )
        clean_env.setenv("MERCURE_CLIENT_SUBSCRIBER_JWT_MAX_AGE_SECONDS", "60")

        settings = Settings(_env_file=None)

        assert settings.is_production()
        assert settings.LOGGING_LEVEL == "DEBUG"
        assert settings.PUBLISHER_TOPIC_SELECTORS == ["https://example.com/books/{book_id}"]
        assert settings.SUBSCRIBER_JWT_MAX_AGE_SECONDS == 60

    def test_null_max_age_disables_expiry(self, clean_env):
        clean_env.setenv("MERCURE_CLIENT_SUBSCRIBER_JWT_MAX_AGE_SECONDS", "null")

        assert Settings(_env_file=None).SUBSCRIBER_JWT_MAX_AGE_SECONDS is None

    @pytest.mark.parametrize("value", ["-1", "34560001"])
    def test_rejects_out_of_range_max_age(self, clean_env, value):
        clean_env.setenv("MERCURE_CLIENT_SUBSCRIBER_JWT_MAX_AGE_SECONDS", value)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_rejects_unknown_logging_level(self, clean_env):
        clean_env.setenv("MERCURE_CLIENT_LOGGING_LEVEL", "verbose")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_secrets_are_masked(self, clean_env):
        clean_env.setenv("MERCURE_CLIENT_PUBLISHER_JWT_SECRET", "super-secret-value")

        settings = Settings(_env_file=None)

        assert settings.PUBLISHER_JWT_SECRET.get_secret_value() == "super-secret-value"
        assert "super-secret-value" not in repr(settings)
        assert "super-secret-value" not in settings.model_dump_json()


@pytest.fixture
def fresh_settings_cache(clean_env, tmp_path):
    clean_env.chdir(tmp_path)
    get_settings.cache_clear()
    yield clean_env
    get_settings.cache_clear()


class TestGetSettings:
    def test_is_cached(self, fresh_settings_cache):
        assert get_settings() is get_settings()

    def test_invalid_environment_only_fails_when_settings_are_read(self, fresh_settings_cache):
        fresh_settings_cache.setenv("MERCURE_CLIENT_LOGGING_LEVEL", "verbose")

        with pytest.raises(ValidationError):
            get_settings()

    def test_client_from_settings_reads_environment_lazily(self, fresh_settings_cache):
        fresh_settings_cache.setenv("MERCURE_CLIENT_PUBLISHER_JWT_SECRET", "x" * 64)
        fresh_settings_cache.setenv(
            "MERCURE_CLIENT_HUB_URL", "https://hub.example.com/.well-known/mercure"
        )

        client = Client.from_settings()

        assert str(client.hub_url) == "https://hub.example.com/.well-known/mercure"


class TestImport:
    """Importing the package must not read the environment or a .env file."""

    def test_import_succeeds_with_invalid_configuration(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text(
            "MERCURE_CLIENT_SUBSCRIBER_JWT_MAX_AGE_SECONDS=99999999999\n"
        )
        env = dict(os.environ)
        env["MERCURE_CLIENT_LOGGING_LEVEL"] = "verbose"
        env["PYTHONPATH"] = os.pathsep.join(
            [str(Path(mercure_client.__file__).resolve().parents[1]), env.get("PYTHONPATH", "")]
        )
        code = (
            "from mercure_client import Topic, TopicSelector, issue_publisher_token\n"
            "issue_publisher_token(b'x' * 64, [TopicSelector.WILDCARD])\n"
            "Topic('https://example.com/books/1')\n"
        )

        result = subprocess.run(
            [sys.executable, "-c", code],
            cwd=tmp_path,
            env=env,
            capture_output=True,
            text=True,
        )

        assert result.returncode == 0, result.stderr
