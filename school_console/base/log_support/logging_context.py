"""Structured logging context carried by the data units.

``LogContext`` names the unit kind (``fetch``, ``mutation``...), the request
identity and the operation being run, plus free-form extras. ``to_dict``
merges the extras and prunes ``None`` values.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for data-layer logging events."""

    unit: Optional[str] = None
    request_id: Optional[int] = None
    operation: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
