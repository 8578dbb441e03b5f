"""Jinja2-backed card rendering."""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

import jinja2

from webex_relay.card.base import CardConverter
from webex_relay.schemas.alertmanager import WebhookMessage
from webex_relay.utils.exceptions import RenderError, TemplateParseError

# Free-text maps whose values get markdown-escaped
_MESSAGE_TEXT_FIELDS = ("group_labels", "common_labels", "common_annotations")
_ALERT_TEXT_FIELDS = ("labels", "annotations")


def _tojson(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def _timestamp(value: datetime | None, fmt: str = "%Y-%m-%d %H:%M:%S %Z") -> str:
    if value is None:
        return ""
    return value.strftime(fmt).strip()


def _build_environment() -> jinja2.Environment:
    environment = jinja2.Environment(
        undefined=jinja2.StrictUndefined,
        autoescape=False,
    )
    environment.filters["tojson"] = _tojson
    environment.filters["timestamp"] = _timestamp
    return environment


# Shared read-only after import
environment = _build_environment()


def parse_template_file(path: str | Path) -> jinja2.Template:
    """
    Load and compile a template file.

    Raises:
        TemplateParseError: If the file is missing or not valid Jinja2
    """
    try:
        source = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise TemplateParseError(str(path), str(exc)) from exc

    try:
        return environment.from_string(source)
    except jinja2.TemplateSyntaxError as exc:
        raise TemplateParseError(str(path), f"line {exc.lineno}: {exc.message}") from exc


def _escape_mapping(mapping: dict[str, str]) -> dict[str, str]:
    return {key: value.replace("_", "\\_") for key, value in mapping.items()}


def escape_underscores(context: dict[str, Any]) -> dict[str, Any]:
    """
    Escape underscores in the free-text values of a dumped message.

    Webex markdown treats a bare ``_`` as an emphasis delimiter. Only label and
    annotation values are touched; keys stay intact so templates can look
    them up.
    """
    escaped = dict(context)
    for field in _MESSAGE_TEXT_FIELDS:
        escaped[field] = _escape_mapping(context[field])

    escaped["alerts"] = [
        {
            **alert,
            **{field: _escape_mapping(alert[field]) for field in _ALERT_TEXT_FIELDS},
        }
        for alert in context["alerts"]
    ]
    return escaped


class TemplatedCardConverter(CardConverter):
    """Render cards from a pre-parsed Jinja2 template."""

    def __init__(self, template: jinja2.Template, escape_underscores: bool = False):
        self.template = template
        self.escape_underscores = escape_underscores

    def convert(self, message: WebhookMessage) -> str:
        context = message.model_dump()
        if self.escape_underscores:
            context = escape_underscores(context)

        try:
            return self.template.render(context)
        except (jinja2.TemplateError, TypeError, ValueError) as exc:
            raise RenderError(f"failed to render card template: {exc}") from exc
