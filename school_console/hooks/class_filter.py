"""Client-side filtering of class records by type and search term."""
from __future__ import annotations

from typing import Any, Iterable, List, Mapping

ALL_TYPES = "ALL"


class ClassFilter:
    """Filters ``{"name": ..., "class_type": ...}`` records.

    The type filter matches ``class_type`` exactly unless it is ``"ALL"``; the
    search term matches name or type case-insensitively.
    """

    def __init__(self, classes: Iterable[Mapping[str, Any]] = (), initial_filter: str = ALL_TYPES) -> None:
        self._classes: List[Mapping[str, Any]] = list(classes)
        self.class_type_filter = initial_filter
        self.search_term = ""

    def set_classes(self, classes: Iterable[Mapping[str, Any]]) -> None:
        self._classes = list(classes)

    @property
    def filtered(self) -> List[Mapping[str, Any]]:
        result = self._classes
        if self.class_type_filter != ALL_TYPES:
            result = [c for c in result if c.get("class_type") == self.class_type_filter]
        if self.search_term:
            term = self.search_term.lower()
            result = [
                c
                for c in result
                if term in str(c.get("name", "")).lower() or term in str(c.get("class_type", "")).lower()
            ]
        return list(result)

    @property
    def has_active_filters(self) -> bool:
        return self.class_type_filter != ALL_TYPES or self.search_term != ""

    def reset_filters(self) -> None:
        self.class_type_filter = ALL_TYPES
        self.search_term = ""


__all__ = ["ClassFilter", "ALL_TYPES"]
