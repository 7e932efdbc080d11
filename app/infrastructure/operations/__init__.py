"""Operation result types and status enums.

Standardized result values returned by fallible units of work, so callers
branch on a tagged status and error code instead of on exception types.
"""

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
]
