from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Alertmanager sends nanosecond timestamps; datetime holds microseconds
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")
# Go's zero time marks an unset end
_ZERO_TIME_PREFIX = "0001-01-01T00:00:00"


class Alert(BaseModel):
    """A single alert inside an Alertmanager notification."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    status: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    starts_at: datetime | None = Field(default=None, alias="startsAt")
    ends_at: datetime | None = Field(default=None, alias="endsAt")
    generator_url: str = Field(default="", alias="generatorURL")
    fingerprint: str = ""

    @field_validator("starts_at", "ends_at", mode="before")
    @classmethod
    def parse_go_timestamp(cls, v: Any) -> Any:
        """Drop sub-microsecond digits and map Go's zero time to None."""
        if isinstance(v, str):
            if v.startswith(_ZERO_TIME_PREFIX):
                return None
            return _FRACTION_RE.sub(r"\1", v)
        return v


class WebhookMessage(BaseModel):
    """Alertmanager webhook payload (version 4)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    version: str = ""
    group_key: str = Field(default="", alias="groupKey")
    truncated_alerts: int = Field(default=0, alias="truncatedAlerts")
    status: str = ""
    receiver: str = ""
    group_labels: dict[str, str] = Field(default_factory=dict, alias="groupLabels")
    common_labels: dict[str, str] = Field(default_factory=dict, alias="commonLabels")
    common_annotations: dict[str, str] = Field(
        default_factory=dict, alias="commonAnnotations"
    )
    external_url: str = Field(default="", alias="externalURL")
    alerts: list[Alert] = Field(default_factory=list)
