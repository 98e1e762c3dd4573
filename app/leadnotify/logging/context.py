"""Notification context binding for structured logging.

Binds routing metadata (correlation id, tenant, lead, channel type) to
every log entry emitted while a notification is being routed.

Usage:
    from leadnotify.logging import bind_notification_context

    with bind_notification_context(tenant_id="dealer-1", lead_id="lead-42"):
        logger.info("routing_notification")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Optional, Any, Generator
import structlog


@contextmanager
def bind_notification_context(
    correlation_id: Optional[str] = None,
    tenant_id: Optional[str] = None,
    lead_id: Optional[str] = None,
    channel_type: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind notification-scoped context to all logs within the block.

    A correlation id already bound by an outer block is reused, so nested
    routing calls share one id.

    Args:
        correlation_id: Unique routing identifier. Reused from the current
            context or auto-generated if not provided.
        tenant_id: Tenant (dealer) the notification belongs to.
        lead_id: Lead the notification is addressed to.
        channel_type: Requested channel type value (e.g. "sms").
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The correlation id bound for the block.
    """
    outer = structlog.contextvars.get_contextvars()
    context: dict[str, Any] = {
        "correlation_id": correlation_id
        or outer.get("correlation_id")
        or str(uuid.uuid4())
    }

    if tenant_id is not None:
        context["tenant_id"] = tenant_id

    if lead_id is not None:
        context["lead_id"] = lead_id

    if channel_type is not None:
        context["channel_type"] = channel_type

    context.update(extra_context)

    previous = {key: outer[key] for key in context if key in outer}
    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())
        if previous:
            structlog.contextvars.bind_contextvars(**previous)


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context.

    Returns:
        The correlation ID if set, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")


def clear_notification_context() -> None:
    """Clear all notification-scoped context from the logging context."""
    structlog.contextvars.clear_contextvars()
