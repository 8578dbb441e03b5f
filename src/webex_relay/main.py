from __future__ import annotations

import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

import httpx
import uvicorn
from fastapi import FastAPI

from webex_relay import __version__
from webex_relay.api.v1.connectors import build_router
from webex_relay.card.schema import CardSchemaValidator
from webex_relay.config import Settings, check_connectors, get_settings, load_connectors
from webex_relay.dependencies import build_routes
from webex_relay.schemas.connector import ConnectorConfig
from webex_relay.services.delivery import DeliveryClient, build_http_client
from webex_relay.utils.exceptions import ConfigError, TemplateParseError
from webex_relay.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    connectors: list[ConnectorConfig] | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """
    Build the relay application.

    Every template and the card schema are loaded here, so configuration
    problems surface before the server starts listening.

    Args:
        settings: Application settings (cached environment settings by default)
        connectors: Connector list (loaded from settings by default)
        http_client: Outbound client (a pooled client from settings by default)

    Raises:
        ConfigError: If the connectors or card schema are invalid
        TemplateParseError: If a connector template cannot be parsed
    """
    settings = settings or get_settings()
    if connectors is None:
        connectors = load_connectors(settings)
    check_connectors(connectors)

    validator = CardSchemaValidator.from_file(settings.card_schema_file)
    delivery = DeliveryClient(http_client or build_http_client(settings))
    routes = build_routes(connectors, delivery, validator)
    router = build_router(routes)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Close the shared connection pool on shutdown."""
        logger.info("application_startup", connectors=len(routes))

        yield

        await delivery.aclose()
        logger.info("application_shutdown")

    app = FastAPI(
        title="Webex Relay",
        description="Relays Prometheus Alertmanager notifications to Webex Teams",
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/config")
    async def get_config() -> list[dict[str, Any]]:
        """Active connectors, with access tokens masked."""
        return [connector.public_view() for connector in connectors]

    return app


def run() -> None:
    """Console entrypoint: parse settings, build the app and serve it."""
    settings = Settings(_cli_parse_args=True, _cli_prog_name="webex-relay")
    setup_logging(settings.effective_log_level, settings.log_format)

    try:
        app = create_app(settings)
    except (ConfigError, TemplateParseError) as exc:
        logger.error("startup_failed", error=str(exc))
        sys.exit(1)

    logger.info(
        "listen_http_addr",
        host=settings.http_host,
        port=settings.http_port,
        version=__version__,
    )
    uvicorn.run(
        app,
        host=settings.http_host,
        port=settings.http_port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
