"""Backend collaborators: REST client and the services built on it.

These supply the read/write operations the data units run; the backend
itself lives elsewhere.
"""

from .api_client import ApiClient
from .fee_service import FeePaymentService, FeeVoucherService
from .health import HealthResult, run_health_check
from .student_service import StudentService

__all__ = [
    "ApiClient",
    "FeePaymentService",
    "FeeVoucherService",
    "HealthResult",
    "StudentService",
    "run_health_check",
]
