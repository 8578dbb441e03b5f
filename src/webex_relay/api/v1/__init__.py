from __future__ import annotations

from webex_relay.api.v1 import connectors

__all__ = [
    "connectors",
]
