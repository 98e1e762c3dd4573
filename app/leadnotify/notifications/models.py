"""Notification delivery core models.

Immutable value objects passed between the router and its channels.

Uses Pydantic BaseModel for:
- Runtime validation of required identifiers (blank values rejected)
- Whitespace normalization on construction
- Frozen instances (requests and outcomes are never mutated)
"""

from typing import Optional
from enum import Enum
from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class ChannelType(Enum):
    """Delivery mechanism a notification is addressed for.

    Used only for capability matching between requests and channels.
    """

    EMAIL = "email"
    SMS = "sms"
    PUSH = "push"


class DeliveryStatus(Enum):
    """Outcome of a single delivery attempt."""

    SENT = "sent"
    FAILED = "failed"


class NotificationRequest(BaseModel):
    """A single notification to route to one recipient.

    Created per send attempt by the caller, never mutated, discarded once
    routing completes. ``tenant_id`` and ``lead_id`` together scope the
    daily rate limit.

    Attributes:
        tenant_id: Tenant (dealer) owning the lead
        org_id: Organization within the tenant
        site_id: Site within the organization
        lead_id: Recipient lead identifier
        channel_type: Requested ChannelType
        subject: Optional subject line (email); None for SMS/push
        body: Message body (required)
        destination: Phone number (E.164), email address or device token

    Example:
        request = NotificationRequest.sms(
            tenant_id="dealer-1",
            org_id="tenant-1",
            site_id="site-1",
            lead_id="lead-42",
            body="Your test drive is confirmed",
            phone_number="+14155550123",
        )
    """

    model_config = ConfigDict(frozen=True)

    tenant_id: str
    org_id: str
    site_id: str
    lead_id: str
    channel_type: ChannelType
    subject: Optional[str] = None
    body: str
    destination: str

    @field_validator(
        "tenant_id", "org_id", "site_id", "lead_id", "body", "destination"
    )
    @classmethod
    def validate_not_blank(cls, v: str, info) -> str:
        """Trim required text fields and reject blank values."""
        if not v.strip():
            raise ValueError(f"{info.field_name} cannot be blank")
        return v.strip()

    @field_validator("subject")
    @classmethod
    def normalize_subject(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else None

    @classmethod
    def sms(
        cls,
        tenant_id: str,
        org_id: str,
        site_id: str,
        lead_id: str,
        body: str,
        phone_number: str,
    ) -> "NotificationRequest":
        """Build an SMS request (no subject)."""
        return cls(
            tenant_id=tenant_id,
            org_id=org_id,
            site_id=site_id,
            lead_id=lead_id,
            channel_type=ChannelType.SMS,
            body=body,
            destination=phone_number,
        )

    @classmethod
    def email(
        cls,
        tenant_id: str,
        org_id: str,
        site_id: str,
        lead_id: str,
        subject: Optional[str],
        body: str,
        email: str,
    ) -> "NotificationRequest":
        """Build an email request."""
        return cls(
            tenant_id=tenant_id,
            org_id=org_id,
            site_id=site_id,
            lead_id=lead_id,
            channel_type=ChannelType.EMAIL,
            subject=subject,
            body=body,
            destination=email,
        )


class DeliveryOutcome(BaseModel):
    """Result of one delivery attempt.

    Returned by channels, the circuit guard and the router. Exactly one of
    ``tracking_id`` (on success) or ``error`` (on failure) is set.

    Attributes:
        status: DeliveryStatus.SENT or DeliveryStatus.FAILED
        vendor: Identity of the channel, guard or router that produced it
        tracking_id: Vendor message id (success only)
        error: Human-readable failure description (failure only)

    Example:
        outcome = DeliveryOutcome.success("sms-adapter", "sms-1234")
        if not outcome.is_success:
            logger.warning("delivery_failed", error=outcome.error)
    """

    model_config = ConfigDict(frozen=True)

    status: DeliveryStatus
    vendor: str
    tracking_id: Optional[str] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def validate_exclusive_fields(self) -> "DeliveryOutcome":
        if self.status == DeliveryStatus.SENT:
            if not self.tracking_id or self.error is not None:
                raise ValueError(
                    "successful outcome requires tracking_id and no error"
                )
        elif not self.error or self.tracking_id is not None:
            raise ValueError("failed outcome requires error and no tracking_id")
        return self

    @property
    def is_success(self) -> bool:
        """Check if delivery was successful."""
        return self.status == DeliveryStatus.SENT

    @classmethod
    def success(cls, vendor: str, tracking_id: str) -> "DeliveryOutcome":
        return cls(status=DeliveryStatus.SENT, vendor=vendor, tracking_id=tracking_id)

    @classmethod
    def failure(cls, vendor: str, error: str) -> "DeliveryOutcome":
        return cls(status=DeliveryStatus.FAILED, vendor=vendor, error=error)
