"""
Tests for settings, log masking and secret bootstrap
"""
import json
import logging
import os

import pytest
from pydantic import ValidationError

from finbuddy.infrastructure.config import Settings
from finbuddy.infrastructure.logging_config import JSONFormatter, SensitiveDataFilter
from finbuddy.infrastructure.secrets.secrets_manager_adapter import (
    SecretsManagerAdapter,
    bootstrap_secrets,
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "NEWS_API_KEY",
        "FINNHUB_API_KEY",
        "DATABASE_URL",
        "MAX_STORED_NEWS",
        "LOG_FORMAT",
        "FINBUDDY_SECRET_ARN",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_settings_defaults(clean_env):
    settings = Settings()
    assert settings.news_api_key is None
    assert settings.max_stored_news == 10
    assert settings.max_context_news == 3
    assert settings.news_requests_per_hour == 200
    assert settings.generation_timeout == 25.0
    assert settings.log_format == "text"


def test_settings_from_environment(clean_env):
    clean_env.setenv("NEWS_API_KEY", "nd-key")
    clean_env.setenv("FINNHUB_API_KEY", "   ")
    clean_env.setenv("MAX_STORED_NEWS", "25")
    clean_env.setenv("LOG_FORMAT", "JSON")
    clean_env.setenv("FINBUDDY_SECRET_ARN", "arn:aws:secretsmanager:us-east-1:1:secret:finbuddy")

    settings = Settings()
    assert settings.news_api_key == "nd-key"
    assert settings.finnhub_api_key is None
    assert settings.max_stored_news == 25
    assert settings.log_format == "json"
    assert settings.secret_arn.endswith("secret:finbuddy")


def test_settings_rejects_unknown_log_format(clean_env):
    clean_env.setenv("LOG_FORMAT", "xml")
    with pytest.raises(ValidationError):
        Settings()


def _record(msg, *args):
    return logging.LogRecord("finbuddy", logging.INFO, __file__, 1, msg, args, None)


def test_sensitive_data_filter_masks_keys():
    record = _record(
        "GET https://newsdata.io/api/1/news?apikey=abc123&country=in with %s",
        "Authorization: Bearer eyJhbGciOi",
    )
    assert SensitiveDataFilter().filter(record) is True

    message = record.getMessage()
    assert "abc123" not in message
    assert "apikey=***" in message
    assert "eyJhbGciOi" not in message
    assert "Bearer ***" in message


def test_json_formatter():
    payload = json.loads(JSONFormatter().format(_record("refreshed %d", 5)))
    assert payload["message"] == "refreshed 5"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "finbuddy"


class FakeSecretsClient:
    def __init__(self, secret):
        self.secret = secret
        self.requested = []

    def get_secret_value(self, SecretId):
        self.requested.append(SecretId)
        return {"SecretString": json.dumps(self.secret)}


def test_secret_loaded_into_environment(clean_env):
    clean_env.setenv("NEWS_API_KEY", "placeholder")
    client = FakeSecretsClient({"NEWS_API_KEY": "from-secret", "MAX_STORED_NEWS": 15})

    SecretsManagerAdapter(client=client).load_into_env("finbuddy/prod")

    assert client.requested == ["finbuddy/prod"]
    assert os.environ["NEWS_API_KEY"] == "from-secret"
    assert os.environ["MAX_STORED_NEWS"] == "15"
    assert Settings().max_stored_news == 15


def test_bootstrap_without_arn_is_a_no_op(clean_env):
    bootstrap_secrets()
    assert "NEWS_API_KEY" not in os.environ
