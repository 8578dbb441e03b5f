from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PostResponse(BaseModel):
    """Outcome of one delivery attempt, returned to the Alertmanager."""

    model_config = ConfigDict(frozen=True)

    webhook_url: str = ""
    status: int = 0
    message: str = ""
