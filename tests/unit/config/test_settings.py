"""
Module: test_settings.py
Description: Unit tests for client settings.

Tests defaults, validation, immutability and loading from QUEUED_*
environment variables, including the log level.
"""

import pytest
from pydantic import ValidationError

from queued_client.config import LoggingSettings, QueuedSettings, TlsSettings


class TestQueuedSettings:
    """Test cases for QueuedSettings."""

    def test_defaults(self):
        settings = QueuedSettings(endpoint="https://queued.test")

        assert settings.api_key is None
        assert settings.max_retries == 1
        assert settings.timeout_secs is None
        assert settings.tls == TlsSettings()
        assert settings.tls.verify is True

    def test_endpoint_trailing_slash_stripped(self):
        settings = QueuedSettings(endpoint="  https://queued.test:3333/  ")

        assert settings.endpoint == "https://queued.test:3333"

    def test_endpoint_required(self):
        with pytest.raises(ValidationError):
            QueuedSettings()

    def test_blank_endpoint_rejected(self):
        with pytest.raises(ValidationError):
            QueuedSettings(endpoint="   ")

    @pytest.mark.parametrize("max_retries", [0, -1])
    def test_max_retries_must_be_positive(self, max_retries):
        with pytest.raises(ValidationError):
            QueuedSettings(endpoint="https://queued.test", max_retries=max_retries)

    def test_settings_are_frozen(self):
        settings = QueuedSettings(endpoint="https://queued.test")

        with pytest.raises(ValidationError):
            settings.api_key = "changed"

    def test_load_from_environment(self, monkeypatch):
        monkeypatch.setenv("QUEUED_ENDPOINT", "http://localhost:3333")
        monkeypatch.setenv("QUEUED_API_KEY", "Bearer env-key")
        monkeypatch.setenv("QUEUED_MAX_RETRIES", "5")
        monkeypatch.setenv("QUEUED_TLS__VERIFY", "false")
        monkeypatch.setenv("QUEUED_TLS__SERVERNAME", "queued.internal")

        settings = QueuedSettings()

        assert settings.endpoint == "http://localhost:3333"
        assert settings.api_key == "Bearer env-key"
        assert settings.max_retries == 5
        assert settings.tls.verify is False
        assert settings.tls.servername == "queued.internal"

    def test_explicit_values_override_environment(self, monkeypatch):
        monkeypatch.setenv("QUEUED_ENDPOINT", "http://localhost:3333")

        settings = QueuedSettings(endpoint="https://queued.test")

        assert settings.endpoint == "https://queued.test"


class TestTlsSettings:
    """Test cases for TlsSettings."""

    def test_key_requires_cert(self):
        with pytest.raises(ValidationError):
            TlsSettings(key="/etc/queued/client.key")

    def test_cert_and_key(self):
        tls = TlsSettings(key="/etc/queued/client.key", cert="/etc/queued/client.pem")

        assert tls.key == "/etc/queued/client.key"
        assert tls.cert == "/etc/queued/client.pem"


class TestLoggingSettings:
    """Test cases for LoggingSettings."""

    def test_default_level(self):
        assert LoggingSettings().log_level == "INFO"

    def test_level_is_upper_cased(self):
        assert LoggingSettings(log_level="debug").log_level == "DEBUG"

    def test_invalid_level_rejected(self):
        with pytest.raises(ValidationError, match="log_level must be one of"):
            LoggingSettings(log_level="verbose")

    def test_load_from_environment(self, monkeypatch):
        monkeypatch.setenv("QUEUED_LOG_LEVEL", "warning")

        assert LoggingSettings().log_level == "WARNING"

    def test_invalid_environment_level_rejected(self, monkeypatch):
        monkeypatch.setenv("QUEUED_LOG_LEVEL", "loud")

        with pytest.raises(ValidationError):
            LoggingSettings()
