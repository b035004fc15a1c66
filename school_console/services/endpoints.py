"""Backend endpoint paths and HTTP status constants."""
from __future__ import annotations

from enum import IntEnum


class HttpStatus(IntEnum):
    OK = 200
    CREATED = 201
    NO_CONTENT = 204
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    CONFLICT = 409
    TOO_MANY_REQUESTS = 429
    INTERNAL_SERVER_ERROR = 500


# Auth
AUTH_PROFILE = "/api/auth/profile"

# Students
STUDENTS = "/api/students"


def student_detail(student_id: int | str) -> str:
    return f"{STUDENTS}/{student_id}"


def student_action(student_id: int | str, action: str) -> str:
    """``/api/students/<id>/<action>`` for enroll, withdraw, activate, ..."""
    return f"{STUDENTS}/{student_id}/{action}"


# Classes & sections
CLASSES = "/api/classes"
SECTIONS = "/api/sections"


def class_detail(class_id: int | str) -> str:
    return f"{CLASSES}/{class_id}"


# Fee vouchers
FEE_VOUCHERS = "/api/fee-vouchers"
FEE_VOUCHER_GENERATE = "/api/fee-vouchers/generate"
FEE_VOUCHER_BULK_GENERATE = "/api/fee-vouchers/bulk-generate"


def fee_voucher_detail(voucher_id: int | str) -> str:
    return f"{FEE_VOUCHERS}/{voucher_id}"


# Fee payments
FEE_PAYMENTS = "/api/fee-payments"
FEE_PAYMENT_RECORD = "/api/fee-payments/record"
FEE_DEFAULTERS = "/api/fee-payments/defaulters"

