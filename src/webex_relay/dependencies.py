from __future__ import annotations

from webex_relay.api.v1.connectors import Route
from webex_relay.card.base import CardConverter
from webex_relay.card.logging import LoggingCardConverter
from webex_relay.card.request import RequestTemplate
from webex_relay.card.schema import CardSchemaValidator
from webex_relay.card.templated import TemplatedCardConverter, parse_template_file
from webex_relay.config import DEFAULT_REQUEST_TEMPLATE
from webex_relay.schemas.connector import ConnectorConfig
from webex_relay.services.connector_service import ConnectorService, SimpleConnectorService
from webex_relay.services.delivery import DeliveryClient
from webex_relay.services.logging import LoggingConnectorService
from webex_relay.utils.logging import get_logger


def build_connector_service(
    connector: ConnectorConfig,
    delivery: DeliveryClient,
    validator: CardSchemaValidator,
) -> ConnectorService:
    """
    Assemble the logging-wrapped pipeline for one connector.

    Raises:
        TemplateParseError: If either template cannot be parsed
    """
    converter: CardConverter = TemplatedCardConverter(
        parse_template_file(connector.template_file),
        connector.escape_underscores,
    )
    converter = LoggingCardConverter(
        converter,
        validator,
        get_logger(
            "webex_relay.card",
            template_file=connector.template_file,
            escape_underscores=connector.escape_underscores,
        ),
    )

    request_template = RequestTemplate.from_file(
        connector.request_template_file or DEFAULT_REQUEST_TEMPLATE
    )

    service: ConnectorService = SimpleConnectorService(
        converter=converter,
        request_template=request_template,
        delivery=delivery,
        webhook_url=connector.webhook_url,
        access_token=connector.access_token,
        room_id=connector.room_id,
    )
    return LoggingConnectorService(
        service,
        get_logger("webex_relay.services", request_path=connector.request_path),
    )


def build_routes(
    connectors: list[ConnectorConfig],
    delivery: DeliveryClient,
    validator: CardSchemaValidator,
) -> list[Route]:
    """One route per connector, sharing the delivery client and validator."""
    return [
        Route(
            request_path=connector.request_path,
            service=build_connector_service(connector, delivery, validator),
        )
        for connector in connectors
    ]
