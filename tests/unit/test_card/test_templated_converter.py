"""Unit tests for Jinja2 card rendering."""
from __future__ import annotations

import json

import pytest

from webex_relay.card.templated import (
    TemplatedCardConverter,
    escape_underscores,
    parse_template_file,
)
from webex_relay.schemas.alertmanager import WebhookMessage
from webex_relay.utils.exceptions import RenderError, TemplateParseError


def _json_fragment(value: str) -> str:
    """How a string appears inside a rendered JSON document."""
    return json.dumps(value, ensure_ascii=False)[1:-1]


@pytest.mark.unit
def test_default_template_renders_valid_json(card_template, webhook_message) -> None:
    card = TemplatedCardConverter(card_template).convert(webhook_message)
    doc = json.loads(card)

    assert doc["type"] == "AdaptiveCard"
    assert doc["body"][0]["text"] == "[FIRING:2] high_memory_load"
    assert doc["body"][0]["color"] == "Attention"
    # title + common summary + one container per alert
    assert len(doc["body"]) == 4
    assert doc["actions"][0]["url"].startswith("http://docker.for.mac.host.internal:9090")


@pytest.mark.unit
def test_default_template_lists_labels_sorted(card_template, webhook_message) -> None:
    doc = json.loads(TemplatedCardConverter(card_template).convert(webhook_message))
    facts = doc["body"][2]["items"][2]["facts"]
    titles = [fact["title"] for fact in facts]

    assert titles[:2] == ["Status", "Started"]
    assert titles[2:] == sorted(webhook_message.alerts[0].labels)
    assert facts[1]["value"].startswith("2018-03-07 06:33:21")


@pytest.mark.unit
def test_resolved_message_uses_good_color(card_template) -> None:
    message = WebhookMessage(
        status="resolved",
        receiver="webex",
        common_labels={"alertname": "disk_full"},
    )
    doc = json.loads(TemplatedCardConverter(card_template).convert(message))

    assert doc["body"][0]["text"] == "[RESOLVED] disk_full"
    assert doc["body"][0]["color"] == "Good"
    assert "actions" not in doc


@pytest.mark.unit
def test_rendering_is_deterministic(card_template, fire_request_body) -> None:
    converter = TemplatedCardConverter(card_template, escape_underscores=True)
    first = converter.convert(WebhookMessage.model_validate_json(fire_request_body))
    second = converter.convert(WebhookMessage.model_validate_json(fire_request_body))
    assert first == second


@pytest.mark.unit
def test_escape_underscores_prefixes_backslash(card_template, webhook_message) -> None:
    card = TemplatedCardConverter(card_template, escape_underscores=True).convert(
        webhook_message
    )

    for alert in webhook_message.alerts:
        for value in alert.labels.values():
            if "_" in value:
                assert _json_fragment(value.replace("_", "\\_")) in card
    assert json.loads(card)["body"][0]["text"] == "[FIRING:2] high\\_memory\\_load"


@pytest.mark.unit
def test_no_escaping_matches_plain_render(card_template, webhook_message) -> None:
    card = TemplatedCardConverter(card_template, escape_underscores=False).convert(
        webhook_message
    )
    assert card == card_template.render(webhook_message.model_dump())
    assert "\\\\_" not in card


@pytest.mark.unit
def test_escape_leaves_keys_and_urls_alone(webhook_message) -> None:
    context = escape_underscores(webhook_message.model_dump())

    assert "alertname" in context["common_labels"]
    assert context["common_labels"]["alertname"] == "high\\_memory\\_load"
    assert context["receiver"] == "webex_teams"
    assert context["alerts"][0]["generator_url"] == webhook_message.alerts[0].generator_url
    assert context["alerts"][0]["labels"]["job"] == "docker\\_nodes"
    # The source message is not modified
    assert webhook_message.alerts[0].labels["job"] == "docker_nodes"


@pytest.mark.unit
def test_undefined_variable_raises_render_error(tmp_path, webhook_message) -> None:
    path = tmp_path / "card.j2"
    path.write_text('{"text": {{ no_such_field | tojson }}}')
    converter = TemplatedCardConverter(parse_template_file(path))

    with pytest.raises(RenderError) as exc_info:
        converter.convert(webhook_message)
    assert exc_info.value.response.status == 0
    assert exc_info.value.response.webhook_url == ""


@pytest.mark.unit
def test_parse_missing_template_file(tmp_path) -> None:
    with pytest.raises(TemplateParseError) as exc_info:
        parse_template_file(tmp_path / "missing.j2")
    assert "missing.j2" in str(exc_info.value)


@pytest.mark.unit
def test_parse_malformed_template(tmp_path) -> None:
    path = tmp_path / "broken.j2"
    path.write_text("{% for alert in alerts %}{{ alert.status }}")

    with pytest.raises(TemplateParseError) as exc_info:
        parse_template_file(path)
    assert exc_info.value.template_file == str(path)
