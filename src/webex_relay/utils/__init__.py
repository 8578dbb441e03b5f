from __future__ import annotations

from webex_relay.utils.exceptions import (
    ConfigError,
    DecodeError,
    DeliveryError,
    RelayError,
    RelayException,
    RenderError,
    RequestTemplateError,
    TemplateParseError,
)
from webex_relay.utils.logging import get_logger, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "RelayException",
    "ConfigError",
    "TemplateParseError",
    "DecodeError",
    "RelayError",
    "RenderError",
    "RequestTemplateError",
    "DeliveryError",
]
