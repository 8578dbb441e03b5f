"""
Pytest configuration and shared fixtures.

Outbound HTTP goes through ``httpx.MockTransport``; no Webex endpoint or
network access is needed.
"""
from __future__ import annotations

from pathlib import Path
from typing import Callable

import httpx
import pytest

from webex_relay.card.request import RequestTemplate
from webex_relay.card.schema import CardSchemaValidator
from webex_relay.card.templated import parse_template_file
from webex_relay.config import (
    DEFAULT_CARD_SCHEMA,
    DEFAULT_CARD_TEMPLATE,
    DEFAULT_REQUEST_TEMPLATE,
)
from webex_relay.schemas.alertmanager import WebhookMessage
from webex_relay.schemas.connector import ConnectorConfig

FIXTURES_DIR = Path(__file__).parent / "fixtures"
WEBHOOK_URL = "https://webex.example.com/v1/messages"


@pytest.fixture
def fire_request_body() -> bytes:
    """Raw Alertmanager payload with two firing alerts."""
    return (FIXTURES_DIR / "prometheus_fire_request.json").read_bytes()


@pytest.fixture
def webhook_message(fire_request_body: bytes) -> WebhookMessage:
    return WebhookMessage.model_validate_json(fire_request_body)


@pytest.fixture
def card_template():
    return parse_template_file(DEFAULT_CARD_TEMPLATE)


@pytest.fixture
def request_template() -> RequestTemplate:
    return RequestTemplate.from_file(DEFAULT_REQUEST_TEMPLATE)


@pytest.fixture
def card_validator() -> CardSchemaValidator:
    return CardSchemaValidator.from_file(DEFAULT_CARD_SCHEMA)


@pytest.fixture
def connector() -> ConnectorConfig:
    return ConnectorConfig(
        request_path="/alertmanager",
        webhook_url=WEBHOOK_URL,
        access_token="secret-token",
        room_id="room-1234",
        template_file=str(DEFAULT_CARD_TEMPLATE),
    )


# ── Mock Webex endpoint ───────────────────────────────────────────────────────
@pytest.fixture
def webex_requests() -> list[httpx.Request]:
    """Requests received by the mock Webex endpoint."""
    return []


@pytest.fixture
def mock_webex(
    webex_requests: list[httpx.Request],
) -> Callable[..., httpx.AsyncClient]:
    """Factory for clients whose transport answers like a Webex endpoint."""
    def _make(status_code: int = 200, text: str = "12345", raise_exc=None):
        def handler(request: httpx.Request) -> httpx.Response:
            webex_requests.append(request)
            if raise_exc is not None:
                raise raise_exc
            return httpx.Response(status_code, text=text)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make
