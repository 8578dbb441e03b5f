from __future__ import annotations

from webex_relay.schemas.response import PostResponse


class RelayException(Exception):
    """Base exception for the webex relay."""

    pass


class ConfigError(RelayException):
    """Raised when the connector configuration is unusable."""

    pass


class TemplateParseError(RelayException):
    """Raised when a template file cannot be loaded or parsed."""

    def __init__(self, template_file: str, reason: str):
        self.template_file = template_file
        self.reason = reason
        super().__init__(f"Failed to parse template {template_file!r}: {reason}")


class DecodeError(RelayException):
    """Raised when an inbound request body is not an Alertmanager message."""

    pass


class RelayError(RelayException):
    """
    Per-request failure inside a connector.

    Carries the (possibly partial) response that is still returned to the
    caller.
    """

    def __init__(self, reason: str, response: PostResponse | None = None):
        self.reason = reason
        self.response = response if response is not None else PostResponse()
        super().__init__(reason)


class RenderError(RelayError):
    """Raised when the card template fails to render."""

    pass


class RequestTemplateError(RelayError):
    """Raised when the request envelope template fails to render."""

    pass


class DeliveryError(RelayError):
    """Raised when the destination webhook cannot be reached."""

    def __init__(self, webhook_url: str, reason: str, status: int = 0):
        self.webhook_url = webhook_url
        super().__init__(
            reason,
            response=PostResponse(webhook_url=webhook_url, status=status, message=reason),
        )
