import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_log_context():
    """Keep contextvars bound by one test from leaking into the next."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
