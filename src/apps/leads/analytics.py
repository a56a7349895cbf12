"""
Named product analytics events for the apply flow.

Events are written to the ``leads.analytics`` logger, and only when
``LEADS_ANALYTICS_ENABLED`` is set. No PII (name, email, or anything the
user typed) is ever put in event properties.
"""

import logging
from typing import Any

from django.conf import settings

logger = logging.getLogger("leads.analytics")


def is_enabled() -> bool:
    return bool(getattr(settings, "LEADS_ANALYTICS_ENABLED", False))


def capture(event: str, properties: dict[str, Any] | None = None) -> None:
    """Emit one event. No-op when analytics are disabled."""
    if not is_enabled():
        return
    logger.info("%s %s", event, properties or {}, extra={"event": event, "properties": properties or {}})


def track_apply_started() -> None:
    capture("apply_started", {"source": "apply"})


def track_apply_step_viewed(step: int) -> None:
    capture("apply_step_viewed", {"step": step})


def track_apply_step_completed(step: int) -> None:
    capture("apply_step_completed", {"step": step})


def track_apply_validation_error(step: int, fields: list[str]) -> None:
    """Only field names are sent, never the values that failed."""
    capture("apply_validation_error", {"step": step, "fields": sorted(fields)})


def track_apply_recommendation_shown(context: str, package: str | None = None) -> None:
    props: dict[str, Any] = {"context": context}
    if package:
        props["package"] = str(package)
    capture("apply_recommendation_shown", props)


def track_apply_submitted_success(package: str | None = None) -> None:
    capture("apply_submitted_success", {"package": str(package)} if package else None)


def track_apply_submitted_error(error_type: str | None = None) -> None:
    capture("apply_submitted_error", {"error_type": error_type or "unknown"})
