from __future__ import annotations

from webex_relay.card.base import CardConverter
from webex_relay.card.logging import LoggingCardConverter
from webex_relay.card.request import RequestTemplate
from webex_relay.card.schema import CardSchemaValidator
from webex_relay.card.templated import (
    TemplatedCardConverter,
    escape_underscores,
    parse_template_file,
)

__all__ = [
    "CardConverter",
    "TemplatedCardConverter",
    "LoggingCardConverter",
    "CardSchemaValidator",
    "RequestTemplate",
    "parse_template_file",
    "escape_underscores",
]
