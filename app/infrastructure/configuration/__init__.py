"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the billing
application using Pydantic BaseSettings with domain-based organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    BillingSettings: Billing run settings class (for testing)

Example:
    ```python
    from infrastructure.configuration import settings

    chunks = settings.billing.concurrent_chunks
    max_retries = settings.billing.max_retries

    if settings.is_production:
        # Production-specific logic...
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.features.billing import BillingSettings

__all__ = ["Settings", "settings", "BillingSettings"]
