"""Infrastructure modules for the billing application.

Centralized infrastructure components:
- configuration: Settings management (settings, BillingSettings)
- logging: Structured logging setup and run context binding
- operations: Operation results used as tagged success/error values
- resilience: Bounded retry with exponential backoff and full jitter
"""

# Configuration
from infrastructure.configuration import settings

# Logging
from infrastructure.logging import get_module_logger

# Operations
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    # Configuration
    "settings",
    # Logging
    "get_module_logger",
    # Operations
    "OperationResult",
    "OperationStatus",
]
