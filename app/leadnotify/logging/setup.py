"""Structlog configuration for the notification stack.

Development runs render colored console lines, production runs render JSON
with recipient details masked. Under pytest nothing is emitted.

Usage:
    from leadnotify.logging import configure_logging, get_module_logger

    configure_logging()              # once, at process start
    logger = get_module_logger()     # per module
    logger.info("circuit_breaker_opened", name="notification_sms")

Dependencies:
    - leadnotify.services.providers.get_settings
"""

import inspect
import logging
import sys
from typing import List, Optional, TYPE_CHECKING

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

from leadnotify.logging.formatters import mask_sensitive_data

if TYPE_CHECKING:
    from leadnotify.configuration import Settings

SILENT = logging.CRITICAL + 1


def _is_test_environment() -> bool:
    """True when running under pytest."""
    return "pytest" in sys.modules


def _processors(json_output: bool) -> List[Processor]:
    chain: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        mask_sensitive_data(),
    ]
    chain.append(
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    return chain


def _apply(processors: List[Processor]) -> BoundLogger:
    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    return structlog.stdlib.get_logger()


def configure_logging(
    settings: Optional["Settings"] = None,
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog and the stdlib root logger.

    Args:
        settings: Settings to read LOG_LEVEL and the production flag from.
            Loaded through the provider when omitted.
        log_level: Overrides settings.LOG_LEVEL.
        is_production: Overrides settings.is_production; selects JSON output.

    Returns:
        A logger bound to the new configuration.
    """
    if _is_test_environment():
        logging.basicConfig(format="%(message)s", level=SILENT, force=True)
        # Bound loggers keep working; the root level drops every record
        return _apply(
            [
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ]
        )

    if settings is None:
        from leadnotify.services.providers import get_settings

        settings = get_settings()

    json_output = settings.is_production if is_production is None else is_production
    level_name = (log_level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level_name, logging.INFO),
    )
    return _apply(_processors(json_output))


logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Logger bound with the caller's module name.

    Example:
        # in leadnotify/resilience/circuit_breaker.py
        logger = get_module_logger()
        # binds component="circuit_breaker",
        #       module_path="leadnotify.resilience.circuit_breaker"
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None
    if module is None:
        return logger.bind(component="unknown")

    return logger.bind(
        component=module.__name__.rsplit(".", 1)[-1],
        module_path=module.__name__,
    )
