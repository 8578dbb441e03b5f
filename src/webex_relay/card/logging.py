from __future__ import annotations

import time

from webex_relay.card.base import CardConverter
from webex_relay.card.schema import CardSchemaValidator
from webex_relay.schemas.alertmanager import WebhookMessage
from webex_relay.utils.logging import get_logger


class LoggingCardConverter(CardConverter):
    """Logs every conversion and checks the result against the card schema."""

    def __init__(
        self,
        next_converter: CardConverter,
        validator: CardSchemaValidator,
        logger=None,
    ):
        self.next_converter = next_converter
        self.validator = validator
        self.logger = logger or get_logger(__name__)

    def convert(self, message: WebhookMessage) -> str:
        start_time = time.perf_counter()
        card = ""
        try:
            card = self.next_converter.convert(message)
            return card
        finally:
            self._validate(card)
            self.logger.debug(
                "card_rendered",
                alert=message.model_dump(mode="json", by_alias=True),
                took_ms=round((time.perf_counter() - start_time) * 1000, 3),
            )

    def _validate(self, card: str) -> None:
        # Advisory only; never affects the returned card
        errors = self.validator.validate(card)
        if not errors:
            self.logger.debug("card_schema_valid", card=card)
            return

        for error in errors:
            self.logger.warning("card_schema_invalid", error=error)
