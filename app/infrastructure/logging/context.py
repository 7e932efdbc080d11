"""Run context binding for structured logging.

Binds billing-run scoped metadata (a run id, the trigger) to every log entry
emitted inside the block through structlog's context variables.

Usage:
    from infrastructure.logging import bind_run_context

    with bind_run_context(trigger="scheduler") as run_id:
        logger.info("billing_run_started")

Note:
    Context variables do not flow into ThreadPoolExecutor workers on their
    own. Submit work through ``contextvars.copy_context().run`` to carry the
    bound run id into worker threads.
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_run_context(
    run_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind run-scoped context to all logs within the context manager.

    Nested blocks join the enclosing run: without an explicit run_id they
    reuse the one already bound. On exit the previous bindings are restored.

    Args:
        run_id: Run identifier. Defaults to the bound one, else a new uuid.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The run id bound for the duration of the block.
    """
    run_id = run_id or get_run_id() or str(uuid.uuid4())

    tokens = structlog.contextvars.bind_contextvars(run_id=run_id, **extra_context)
    try:
        yield run_id
    finally:
        structlog.contextvars.reset_contextvars(**tokens)


def get_run_id() -> Optional[str]:
    """Get the current run id from the logging context.

    Returns:
        The run id if bound, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("run_id")
