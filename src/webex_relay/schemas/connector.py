from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

MASKED_VALUE = "********"


class ConnectorConfig(BaseModel):
    """One inbound path bound to one Webex destination."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    request_path: str = ""
    webhook_url: str = ""
    access_token: str = ""
    room_id: str = ""
    template_file: str = ""
    request_template_file: str | None = None
    escape_underscores: bool = False

    def public_view(self) -> dict[str, Any]:
        """Connector settings with the access token masked."""
        data = self.model_dump()
        if data["access_token"]:
            data["access_token"] = MASKED_VALUE
        return data


class ConnectorsFile(BaseModel):
    """Top level of the YAML connectors file."""

    connectors: list[ConnectorConfig] = Field(default_factory=list)
