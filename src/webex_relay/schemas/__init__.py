from __future__ import annotations

from webex_relay.schemas.alertmanager import Alert, WebhookMessage
from webex_relay.schemas.connector import ConnectorConfig, ConnectorsFile
from webex_relay.schemas.response import PostResponse

__all__ = [
    # Alertmanager
    "Alert",
    "WebhookMessage",
    # Connectors
    "ConnectorConfig",
    "ConnectorsFile",
    # Responses
    "PostResponse",
]
