from __future__ import annotations

from webex_relay.schemas.alertmanager import WebhookMessage
from webex_relay.schemas.response import PostResponse
from webex_relay.services.connector_service import ConnectorService
from webex_relay.utils.exceptions import RelayError
from webex_relay.utils.logging import get_logger


class LoggingConnectorService(ConnectorService):
    """Logs the outcome of every post made by the wrapped service."""

    def __init__(self, next_service: ConnectorService, logger=None):
        self.next_service = next_service
        self.logger = logger or get_logger(__name__)

    async def post(self, message: WebhookMessage) -> PostResponse:
        try:
            response = await self.next_service.post(message)
        except RelayError as exc:
            self._log(exc.response, error=str(exc))
            raise

        self._log(response, error=None)
        return response

    def _log(self, response: PostResponse, error: str | None) -> None:
        self.logger.debug(
            "connector_post",
            response_message=response.message,
            response_status=response.status,
            webhook_url=response.webhook_url,
            error=error,
        )
