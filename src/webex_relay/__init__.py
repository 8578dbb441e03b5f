"""Relay Prometheus Alertmanager notifications to Webex Teams rooms."""
from __future__ import annotations

__version__ = "1.0.0"
