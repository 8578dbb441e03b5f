from __future__ import annotations

import httpx
import structlog

from webex_relay.config import Settings
from webex_relay.utils.exceptions import DeliveryError

logger = structlog.get_logger(__name__)


def _describe(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """
    Build the pooled client shared by every connector.

    Only connection setup is bounded; reads and writes wait on the
    destination.
    """
    return httpx.AsyncClient(
        limits=httpx.Limits(
            max_keepalive_connections=settings.max_idle_conns,
            keepalive_expiry=settings.idle_conn_timeout,
        ),
        timeout=httpx.Timeout(None, connect=settings.tls_handshake_timeout),
        trust_env=True,
    )


class DeliveryClient:
    """Posts request bodies to Webex webhook endpoints."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def send(self, body: str, url: str, token: str) -> tuple[int, str]:
        """
        Send one POST to the destination.

        Args:
            body: Serialized request body
            url: Destination webhook URL
            token: Bearer token for the Authorization header

        Returns:
            HTTP status code and response text, whatever the status

        Raises:
            DeliveryError: On transport failures (DNS, refused, timeout). A body
                read failure keeps the status code already received.
        """
        try:
            async with self.client.stream(
                "POST",
                url,
                content=body.encode("utf-8"),
                headers={
                    "Authorization": f"Bearer {token}",
                    "Content-Type": "application/json",
                },
            ) as response:
                try:
                    await response.aread()
                except httpx.HTTPError as exc:
                    reason = f"failed to read response body: {_describe(exc)}"
                    logger.warning(
                        "delivery_failed",
                        webhook_url=url,
                        status_code=response.status_code,
                        error=reason,
                    )
                    raise DeliveryError(url, reason, status=response.status_code) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            reason = f"http client failed: {_describe(exc)}"
            logger.warning("delivery_failed", webhook_url=url, error=reason)
            raise DeliveryError(url, reason) from exc

        logger.debug(
            "delivery_complete",
            webhook_url=url,
            status_code=response.status_code,
        )
        return response.status_code, response.text

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self.client.aclose()
