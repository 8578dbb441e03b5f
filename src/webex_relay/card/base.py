from __future__ import annotations

from abc import ABC, abstractmethod

from webex_relay.schemas.alertmanager import WebhookMessage


class CardConverter(ABC):
    """Abstract base class for turning an Alertmanager message into a card."""

    @abstractmethod
    def convert(self, message: WebhookMessage) -> str:
        """
        Render a message card.

        Args:
            message: Alertmanager notification

        Returns:
            Serialized card document

        Raises:
            RenderError: If the card cannot be produced
        """
        pass
