"""Operation status enumeration.

Status codes for operation results, used to classify outcomes of operations
for appropriate error handling and retries.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Error that may succeed on retry (network, timeout)
        PERMANENT_ERROR: Error that will not succeed on retry
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
