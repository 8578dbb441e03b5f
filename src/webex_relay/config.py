from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from webex_relay.schemas.connector import ConnectorConfig, ConnectorsFile
from webex_relay.utils.exceptions import ConfigError

RESOURCES_DIR = Path(__file__).parent / "resources"
DEFAULT_CARD_TEMPLATE = RESOURCES_DIR / "default-message-card.json.j2"
DEFAULT_REQUEST_TEMPLATE = RESOURCES_DIR / "webex-teams-request.json.j2"
DEFAULT_CARD_SCHEMA = RESOURCES_DIR / "adaptive-card-schema.json"

_REQUIRED_CONNECTOR_FIELDS = ("webhook_url", "access_token", "room_id", "template_file")


class Settings(BaseSettings):
    """Application settings loaded from environment variables or CLI flags."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # HTTP server
    http_host: str = Field(default="0.0.0.0")
    http_port: int = Field(default=2000)

    # Default connector, used when no config file is given
    request_uri: str = Field(default="alertmanager")
    teams_webhook_url: str = Field(default="https://webexapis.com/v1/messages")
    teams_access_token: str = Field(default="")
    teams_room_id: str = Field(default="")
    template_file: str = Field(default=str(DEFAULT_CARD_TEMPLATE))
    request_template_file: str | None = Field(default=None)
    escape_underscores: bool = False

    # Connectors file
    config_file: str | None = Field(default=None)

    # Card validation
    card_schema_file: str = Field(default=str(DEFAULT_CARD_SCHEMA))

    # Outbound HTTP client
    idle_conn_timeout: float = Field(default=90.0, gt=0)
    tls_handshake_timeout: float = Field(default=30.0, gt=0)
    max_idle_conns: int = Field(default=100, ge=1)

    # Logging
    debug: bool = True
    log_level: str = Field(default="INFO")
    log_format: Literal["json", "console"] = "json"

    @property
    def effective_log_level(self) -> str:
        """Log level to configure; debug mode always logs at DEBUG."""
        return "DEBUG" if self.debug else self.log_level


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def parse_connectors_file(path: str | Path) -> list[ConnectorConfig]:
    """
    Read connectors from a YAML file.

    Args:
        path: File holding a top-level ``connectors`` list

    Returns:
        Parsed connector configurations

    Raises:
        ConfigError: If the file cannot be read or does not match the format
    """
    try:
        raw = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"failed to read config file {str(path)!r}: {exc}") from exc

    try:
        return ConnectorsFile.model_validate(raw or {}).connectors
    except ValidationError as exc:
        raise ConfigError(f"invalid config file {str(path)!r}: {exc}") from exc


def load_connectors(settings: Settings) -> list[ConnectorConfig]:
    """Connectors from the config file, or a single one built from settings."""
    if settings.config_file:
        return parse_connectors_file(settings.config_file)

    return [
        ConnectorConfig(
            request_path=settings.request_uri,
            webhook_url=settings.teams_webhook_url,
            access_token=settings.teams_access_token,
            room_id=settings.teams_room_id,
            template_file=settings.template_file,
            request_template_file=settings.request_template_file,
            escape_underscores=settings.escape_underscores,
        )
    ]


def check_connectors(connectors: list[ConnectorConfig]) -> None:
    """
    Ensure every connector has all required fields.

    Raises:
        ConfigError: On the first incomplete connector
    """
    if not connectors:
        raise ConfigError("no connectors configured")

    for connector in connectors:
        if not connector.request_path:
            raise ConfigError("one of the connectors is missing a 'request_path'")
        for field in _REQUIRED_CONNECTOR_FIELDS:
            if not getattr(connector, field):
                raise ConfigError(
                    f"The {field} is required for request_path "
                    f"'{connector.request_path}'"
                )
