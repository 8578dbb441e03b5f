"""Inbound Alertmanager endpoints, one per connector."""
from __future__ import annotations

from dataclasses import dataclass

import structlog
from fastapi import APIRouter, HTTPException, Request, status
from pydantic import ValidationError

from webex_relay.schemas.alertmanager import WebhookMessage
from webex_relay.schemas.response import PostResponse
from webex_relay.services.connector_service import ConnectorService
from webex_relay.utils.exceptions import ConfigError, DecodeError, RelayError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Route:
    """Binds an inbound request path to a connector service."""

    request_path: str
    service: ConnectorService


def normalize_request_path(request_path: str) -> str:
    """Prefix the path with a slash when it lacks one."""
    return request_path if request_path.startswith("/") else f"/{request_path}"


def check_duplicate_request_path(routes: list[Route]) -> None:
    """
    Reject route sets that reuse a request path.

    Raises:
        ConfigError: On the first duplicate
    """
    seen: set[str] = set()
    for route in routes:
        path = normalize_request_path(route.request_path)
        if path in seen:
            raise ConfigError(f"found duplicate use of request path '{path}'")
        seen.add(path)


def decode_message(body: bytes) -> WebhookMessage:
    """
    Parse a raw request body.

    Raises:
        DecodeError: If the body is not JSON or not an Alertmanager message
    """
    try:
        return WebhookMessage.model_validate_json(body)
    except ValidationError as exc:
        raise DecodeError(f"invalid alertmanager message: {exc}") from exc


def _make_endpoint(route: Route):
    request_path = normalize_request_path(route.request_path)

    async def relay_alert(request: Request) -> PostResponse:
        """Relay an Alertmanager notification to Webex."""
        try:
            message = decode_message(await request.body())
        except DecodeError as exc:
            logger.warning("webhook_decode_failed", request_path=request_path, error=str(exc))
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(exc),
            ) from exc

        try:
            return await route.service.post(message)
        except RelayError as exc:
            # Failures are reported in the body; the outer status stays 200
            logger.error(
                "connector_post_failed",
                request_path=request_path,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return exc.response

    return relay_alert


def build_router(routes: list[Route]) -> APIRouter:
    """
    Build a router with one POST endpoint per route.

    Raises:
        ConfigError: If two routes share a request path
    """
    check_duplicate_request_path(routes)

    router = APIRouter()
    for route in routes:
        path = normalize_request_path(route.request_path)
        router.add_api_route(
            path,
            _make_endpoint(route),
            methods=["POST"],
            response_model=PostResponse,
            name=f"relay_alert{path.replace('/', '_')}",
        )
        logger.debug("route_registered", request_path=path)

    return router
