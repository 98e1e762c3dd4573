"""Structured logging infrastructure.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_module_logger(): Get a logger for the calling module
    - bind_notification_context(): Context manager for routing-scoped logging
    - get_correlation_id(): Get current correlation ID from context
    - clear_notification_context(): Clear all bound context

Processors:
    - mask_sensitive_data(): Redact destinations, tokens and secrets

Example:
    from leadnotify.logging import configure_logging, get_module_logger

    configure_logging()

    logger = get_module_logger()
    logger.info("module_initialized")
"""

from leadnotify.logging.setup import (
    configure_logging,
    get_module_logger,
)

from leadnotify.logging.context import (
    bind_notification_context,
    get_correlation_id,
    clear_notification_context,
)

from leadnotify.logging.formatters import (
    mask_sensitive_data,
    SENSITIVE_PATTERNS,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_notification_context",
    "get_correlation_id",
    "clear_notification_context",
    "mask_sensitive_data",
    "SENSITIVE_PATTERNS",
]
