"""Student records: read and write operations for the data units."""
from __future__ import annotations

from typing import Any, Mapping, Optional

from ..base.cancellation import CancellationToken
from . import endpoints
from .api_client import ApiClient

LIST_FILTERS = ("class_id", "section_id", "is_active", "is_expelled", "search", "page", "limit")


class StudentService:
    """Student endpoints; read methods accept the fetch unit's token."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def list(self, filters: Optional[Mapping[str, Any]] = None, *, token: Optional[CancellationToken] = None) -> Any:
        params = {k: v for k, v in (filters or {}).items() if k in LIST_FILTERS}
        return await self.client.get(endpoints.STUDENTS, params=params, token=token)

    async def get(self, student_id: int | str, *, token: Optional[CancellationToken] = None) -> Any:
        return await self.client.get(endpoints.student_detail(student_id), token=token)

    async def create(self, student: Mapping[str, Any]) -> Any:
        return await self.client.post(endpoints.STUDENTS, dict(student))

    async def update(self, student_id: int | str, student: Mapping[str, Any]) -> Any:
        return await self.client.put(endpoints.student_detail(student_id), dict(student))

    async def enroll(self, student_id: int | str, class_id: int, section_id: int, start_date: str) -> Any:
        return await self.client.post(
            endpoints.student_action(student_id, "enroll"),
            {"class_id": class_id, "section_id": section_id, "start_date": start_date},
        )

    async def withdraw(self, student_id: int | str, end_date: str) -> Any:
        return await self.client.post(endpoints.student_action(student_id, "withdraw"), {"end_date": end_date})

    async def activate(self, student_id: int | str) -> Any:
        return await self.client.post(endpoints.student_action(student_id, "activate"))

    async def deactivate(self, student_id: int | str) -> Any:
        return await self.client.post(endpoints.student_action(student_id, "deactivate"))


__all__ = ["StudentService", "LIST_FILTERS"]
