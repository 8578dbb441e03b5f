from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError

from webex_relay.utils.exceptions import ConfigError


class CardSchemaValidator:
    """Checks rendered cards against the Adaptive Card JSON schema."""

    def __init__(self, schema: dict[str, Any]):
        try:
            Draft7Validator.check_schema(schema)
        except SchemaError as exc:
            raise ConfigError(f"invalid card schema: {exc.message}") from exc
        self._validator = Draft7Validator(schema)

    @classmethod
    def from_file(cls, path: str | Path) -> CardSchemaValidator:
        """
        Load a schema document from disk.

        Raises:
            ConfigError: If the file is unreadable or not a valid schema
        """
        try:
            schema = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ConfigError(f"failed to load card schema {str(path)!r}: {exc}") from exc
        return cls(schema)

    def validate(self, document: str) -> list[str]:
        """
        Validate a serialized card.

        Args:
            document: Rendered card

        Returns:
            Error descriptions, empty when the card is valid
        """
        try:
            instance = json.loads(document)
        except ValueError as exc:
            return [f"document is not valid JSON: {exc}"]

        errors = sorted(
            self._validator.iter_errors(instance),
            key=lambda error: list(error.absolute_path),
        )
        return [
            f"{'/'.join(str(p) for p in error.absolute_path) or '(root)'}: {error.message}"
            for error in errors
        ]
