"""Structured logging infrastructure.

This package provides centralized logging configuration and utilities
for the billing application using structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_module_logger(): Get a logger for the calling module
    - bind_run_context(): Context manager for run-scoped logging
    - get_run_id(): Get current run id from context

Example:
    from infrastructure.logging import (
        configure_logging,
        get_module_logger,
        bind_run_context,
    )

    # At application startup
    configure_logging()

    # In a module
    logger = get_module_logger()

    # Around a billing run
    with bind_run_context(trigger="scheduler"):
        logger.info("billing_run_started")
"""

from infrastructure.logging.setup import (
    configure_logging,
    get_module_logger,
)

from infrastructure.logging.context import (
    bind_run_context,
    get_run_id,
)

__all__ = [
    # Setup
    "configure_logging",
    "get_module_logger",
    # Context
    "bind_run_context",
    "get_run_id",
]
