"""
Module: settings.py
Description: Client configuration using pydantic-settings.

Holds the endpoint, credentials, retry policy and TLS options of a
client. Values can be passed directly or loaded from QUEUED_* environment
variables (nested TLS options use a double underscore, e.g. QUEUED_TLS__CA).
Client settings are frozen once constructed. The log level is kept in its
own LoggingSettings, read once when logging is configured.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TlsSettings(BaseModel):
    """
    TLS options passed through to the transport.

    Attributes:
        key: Path to the client private key (PEM)
        cert: Path to the client certificate chain (PEM)
        ca: Path to a CA bundle trusted for the server certificate
        servername: Expected server name for SNI and certificate matching
        verify: Whether to verify the server certificate
    """

    model_config = ConfigDict(frozen=True)

    key: Optional[str] = Field(default=None, description="Client private key file")
    cert: Optional[str] = Field(default=None, description="Client certificate file")
    ca: Optional[str] = Field(default=None, description="Trusted CA bundle file")
    servername: Optional[str] = Field(default=None, description="Expected server name")
    verify: bool = Field(default=True, description="Verify the server certificate")

    @model_validator(mode="after")
    def validate_key_pair(self) -> "TlsSettings":
        if self.key and not self.cert:
            raise ValueError("tls.key requires tls.cert")
        return self


class QueuedSettings(BaseSettings):
    """Connection settings for a queued server."""

    model_config = SettingsConfigDict(
        env_prefix="QUEUED_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    endpoint: str = Field(
        ...,
        description="Base URL of the queued server, e.g. https://queued.local:3333"
    )
    api_key: Optional[str] = Field(
        default=None,
        description="Value sent verbatim as the Authorization header"
    )
    # Most operations mutate queue state (push, poll), so retrying can duplicate effects.
    max_retries: int = Field(
        default=1,
        ge=1,
        description="Maximum attempts per request, including the first"
    )
    timeout_secs: Optional[float] = Field(
        default=None,
        gt=0,
        description="Per-attempt HTTP timeout; None leaves requests unbounded"
    )
    tls: TlsSettings = Field(
        default_factory=TlsSettings,
        description="TLS options for https endpoints"
    )

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Strip whitespace and a trailing slash so paths can be appended."""
        v = v.strip()
        if not v:
            raise ValueError("endpoint must be a non-empty string")
        return v.rstrip("/")


class LoggingSettings(BaseSettings):
    """Logging options, loaded from QUEUED_LOG_LEVEL."""

    model_config = SettingsConfigDict(
        env_prefix="QUEUED_",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()
