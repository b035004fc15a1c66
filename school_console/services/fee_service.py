"""Fee vouchers and payments.

Voucher amounts are computed by the backend; these calls only move records.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from ..base.cancellation import CancellationToken
from . import endpoints
from .api_client import ApiClient

VOUCHER_FILTERS = (
    "student_id",
    "class_id",
    "section_id",
    "status",
    "month",
    "year",
    "from_date",
    "to_date",
    "page",
    "limit",
)


class FeeVoucherService:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def list(self, filters: Optional[Mapping[str, Any]] = None, *, token: Optional[CancellationToken] = None) -> Any:
        params = {k: v for k, v in (filters or {}).items() if k in VOUCHER_FILTERS}
        return await self.client.get(endpoints.FEE_VOUCHERS, params=params, token=token)

    async def get(self, voucher_id: int | str, *, token: Optional[CancellationToken] = None) -> Any:
        return await self.client.get(endpoints.fee_voucher_detail(voucher_id), token=token)

    async def generate(self, voucher: Mapping[str, Any]) -> Any:
        """Body: ``{student_id, month, custom_items?}``."""
        return await self.client.post(endpoints.FEE_VOUCHER_GENERATE, dict(voucher))

    async def bulk_generate(self, request: Mapping[str, Any]) -> Any:
        """Body: ``{class_id, section_id?, month}``."""
        return await self.client.post(endpoints.FEE_VOUCHER_BULK_GENERATE, dict(request))

    async def delete(self, voucher_id: int | str) -> Any:
        return await self.client.delete(endpoints.fee_voucher_detail(voucher_id))


class FeePaymentService:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def record(self, payment: Mapping[str, Any]) -> Any:
        return await self.client.post(endpoints.FEE_PAYMENT_RECORD, dict(payment))

    async def defaulters(self, filters: Optional[Mapping[str, Any]] = None, *, token: Optional[CancellationToken] = None) -> Any:
        return await self.client.get(endpoints.FEE_DEFAULTERS, params=dict(filters or {}), token=token)


__all__ = ["FeeVoucherService", "FeePaymentService", "VOUCHER_FILTERS"]
