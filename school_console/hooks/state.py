"""Result state shared by the data units."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ResultState:
    """``{data, loading, error}`` snapshot of a unit.

    ``error`` holds the human-readable message of the last failure, never the
    exception object itself. A settled call sets exactly one of ``data`` or
    ``error``.
    """

    data: Any = None
    loading: bool = False
    error: Optional[str] = None


@dataclass(frozen=True)
class MutationStatus:
    """``{loading, error}`` snapshot used by units that do not keep a payload."""

    loading: bool = False
    error: Optional[str] = None


__all__ = ["ResultState", "MutationStatus"]
