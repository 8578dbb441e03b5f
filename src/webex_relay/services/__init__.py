from __future__ import annotations

from webex_relay.services.connector_service import ConnectorService, SimpleConnectorService
from webex_relay.services.delivery import DeliveryClient, build_http_client
from webex_relay.services.logging import LoggingConnectorService

__all__ = [
    "ConnectorService",
    "SimpleConnectorService",
    "LoggingConnectorService",
    "DeliveryClient",
    "build_http_client",
]
