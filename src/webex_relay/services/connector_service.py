from __future__ import annotations

from abc import ABC, abstractmethod

from webex_relay.card.base import CardConverter
from webex_relay.card.request import RequestTemplate
from webex_relay.schemas.alertmanager import WebhookMessage
from webex_relay.schemas.response import PostResponse
from webex_relay.services.delivery import DeliveryClient
from webex_relay.utils.exceptions import RenderError, RequestTemplateError


class ConnectorService(ABC):
    """Abstract base class for relaying Alertmanager messages to Webex."""

    @abstractmethod
    async def post(self, message: WebhookMessage) -> PostResponse:
        """
        Relay one notification.

        Args:
            message: Alertmanager notification

        Returns:
            Destination status and response body

        Raises:
            RelayError: With the partial response still owed to the caller
        """
        pass


class SimpleConnectorService(ConnectorService):
    """Renders, wraps and delivers a card in a single attempt."""

    def __init__(
        self,
        converter: CardConverter,
        request_template: RequestTemplate,
        delivery: DeliveryClient,
        webhook_url: str,
        access_token: str,
        room_id: str,
    ):
        self.converter = converter
        self.request_template = request_template
        self.delivery = delivery
        self.webhook_url = webhook_url
        self.access_token = access_token
        self.room_id = room_id

    async def post(self, message: WebhookMessage) -> PostResponse:
        try:
            card = self.converter.convert(message)
        except RenderError:
            raise
        except Exception as exc:
            raise RenderError(f"failed to parse webhook message: {exc}") from exc

        try:
            body = self.request_template.build(self.room_id, card)
        except RequestTemplateError as exc:
            exc.response = PostResponse(webhook_url=self.webhook_url)
            raise

        # DeliveryError already carries status 0 and the error text
        status, text = await self.delivery.send(body, self.webhook_url, self.access_token)

        return PostResponse(webhook_url=self.webhook_url, status=status, message=text)
