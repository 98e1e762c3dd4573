"""Structlog processors used by the notification log pipeline.

Usage:
    from leadnotify.logging.formatters import mask_sensitive_data

Dependencies:
    - structlog processors
"""

from typing import Any, Callable, Optional


# Key fragments whose values must never reach the logs. Destinations are
# recipient phone numbers, email addresses and device tokens.
SENSITIVE_PATTERNS = frozenset(
    {
        "password",
        "secret",
        "token",
        "api_key",
        "authorization",
        "credential",
        "destination",
        "phone_number",
    }
)

Processor = Callable[[Any, str, dict], dict]


def mask_sensitive_data(
    mask_value: str = "***REDACTED***",
    additional_patterns: Optional[frozenset] = None,
) -> Processor:
    """Build a processor that redacts recipient details and credentials.

    A key is redacted when its lowercased name contains any pattern; None
    values are left as they are.

    Args:
        mask_value: Replacement for redacted values.
        additional_patterns: Extra key fragments to redact.

    Example:
        # also hide message bodies, e.g. for tenants with PII in templates
        mask_sensitive_data(additional_patterns=frozenset({"body", "subject"}))

        logger.info("sms_sent", lead_id="lead-42", destination="+14155550123")
        # -> lead_id="lead-42" destination="***REDACTED***"
    """
    patterns = SENSITIVE_PATTERNS | (additional_patterns or frozenset())

    def _redact(key: str, value: Any) -> Any:
        if value is None:
            return value
        lowered = key.lower()
        return mask_value if any(p in lowered for p in patterns) else value

    def processor(logger: Any, method_name: str, event_dict: dict) -> dict:
        return {key: _redact(key, value) for key, value in event_dict.items()}

    return processor
