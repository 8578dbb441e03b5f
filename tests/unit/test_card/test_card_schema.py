"""Unit tests for the Adaptive Card schema validator."""
from __future__ import annotations

import json

import pytest

from webex_relay.card.schema import CardSchemaValidator
from webex_relay.utils.exceptions import ConfigError


def _card(**overrides) -> str:
    card = {
        "type": "AdaptiveCard",
        "version": "1.2",
        "body": [{"type": "TextBlock", "text": "hello"}],
    }
    card.update(overrides)
    return json.dumps(card)


@pytest.mark.unit
def test_valid_card(card_validator) -> None:
    assert card_validator.validate(_card()) == []


@pytest.mark.unit
def test_wrong_card_type(card_validator) -> None:
    errors = card_validator.validate(_card(type="MessageCard"))
    assert len(errors) == 1
    assert errors[0].startswith("type:")


@pytest.mark.unit
def test_missing_body(card_validator) -> None:
    errors = card_validator.validate(json.dumps({"type": "AdaptiveCard", "version": "1.2"}))
    assert any("'body' is a required property" in e for e in errors)


@pytest.mark.unit
def test_text_block_requires_text(card_validator) -> None:
    errors = card_validator.validate(_card(body=[{"type": "TextBlock"}]))
    assert any("'text' is a required property" in e for e in errors)


@pytest.mark.unit
def test_fact_values_must_be_strings(card_validator) -> None:
    body = [{"type": "FactSet", "facts": [{"title": "count", "value": 3}]}]
    errors = card_validator.validate(_card(body=body))
    assert errors == ["body/0/facts/0/value: 3 is not of type 'string'"]


@pytest.mark.unit
def test_not_json(card_validator) -> None:
    errors = card_validator.validate("{not json")
    assert len(errors) == 1
    assert errors[0].startswith("document is not valid JSON")


@pytest.mark.unit
def test_empty_document(card_validator) -> None:
    assert card_validator.validate("") != []


@pytest.mark.unit
def test_missing_schema_file(tmp_path) -> None:
    with pytest.raises(ConfigError):
        CardSchemaValidator.from_file(tmp_path / "nope.json")


@pytest.mark.unit
def test_invalid_schema() -> None:
    with pytest.raises(ConfigError):
        CardSchemaValidator({"type": 12})
