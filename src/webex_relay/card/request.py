from __future__ import annotations

from pathlib import Path

import jinja2

from webex_relay.card.templated import parse_template_file
from webex_relay.utils.exceptions import RequestTemplateError


class RequestTemplate:
    """Wraps a rendered card into the Webex messages API request body."""

    def __init__(self, template: jinja2.Template, template_file: str = "<string>"):
        self.template = template
        self.template_file = template_file

    @classmethod
    def from_file(cls, path: str | Path) -> RequestTemplate:
        """Parse the envelope template at ``path``."""
        return cls(parse_template_file(path), str(path))

    def build(self, room_id: str, card: str) -> str:
        """
        Render the outbound request body.

        Args:
            room_id: Destination Webex room
            card: Serialized card document, embedded verbatim

        Returns:
            Request body ready to post

        Raises:
            RequestTemplateError: If the template fails to execute
        """
        try:
            return self.template.render(room_id=room_id, card=card)
        except (jinja2.TemplateError, TypeError, ValueError) as exc:
            raise RequestTemplateError(
                f"execute request template {self.template_file!r} failed: {exc}"
            ) from exc
