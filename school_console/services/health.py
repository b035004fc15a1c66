"""Backend connectivity probes.

Each probe reports a :class:`HealthResult` instead of raising, so a status
screen can render all of them side by side.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..base.errors import error_message
from ..base.logging import LogContext, get_logger, log_event
from . import endpoints
from .api_client import ApiClient

logger = get_logger(__name__)


def count_items(data: Any) -> int:
    """Length of a list payload or of its ``data`` envelope; 0 otherwise."""
    if isinstance(data, dict):
        data = data.get("data")
    return len(data) if isinstance(data, list) else 0


@dataclass
class HealthResult:
    success: bool
    message: str
    count: Optional[int] = None
    data: Any = None
    error: Optional[str] = None


async def _probe(
    client: ApiClient,
    endpoint: str,
    label: str,
    *,
    requires_auth: bool = True,
    counted: bool = False,
    params: Optional[Dict[str, Any]] = None,
) -> HealthResult:
    try:
        data = await client.get(endpoint, requires_auth=requires_auth, params=params)
    except Exception as exc:  # reported, not raised
        return HealthResult(success=False, message=f"{label} failed", error=error_message(exc))
    return HealthResult(
        success=True,
        message=f"{label} successful",
        count=count_items(data) if counted else None,
        data=data,
    )


async def check_connection(client: ApiClient) -> HealthResult:
    return await _probe(client, client.settings.health_path, "API connection", requires_auth=False)


async def check_authentication(client: ApiClient) -> HealthResult:
    return await _probe(client, endpoints.AUTH_PROFILE, "Authentication")


async def check_classes(client: ApiClient) -> HealthResult:
    return await _probe(client, endpoints.CLASSES, "Classes API", counted=True)


async def check_sections(client: ApiClient, class_id: Optional[int] = None) -> HealthResult:
    return await _probe(client, endpoints.SECTIONS, "Sections API", counted=True, params={"class_id": class_id})


async def run_health_check(client: ApiClient) -> Dict[str, HealthResult]:
    """Run every probe in order and log one summary event."""
    results = {
        "connection": await check_connection(client),
        "authentication": await check_authentication(client),
        "classes": await check_classes(client),
        "sections": await check_sections(client),
    }
    all_passed = all(r.success for r in results.values())
    log_event(
        logger,
        "health.result",
        LogContext(unit="health"),
        level=logging.INFO if all_passed else logging.WARNING,
        passed=all_passed,
        failed=[name for name, r in results.items() if not r.success] or None,
    )
    return results


__all__ = [
    "HealthResult",
    "check_connection",
    "check_authentication",
    "check_classes",
    "check_sections",
    "run_health_check",
]
