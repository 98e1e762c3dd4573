"""Demo entry point.

Wires the notification service from settings and routes a handful of
sample notifications, logging each outcome. Set
NOTIFICATION_SMS_SIMULATE_FAILURE=true to watch SMS fail over to email and
the SMS circuit open.

Usage:
    python -m leadnotify.main
"""

from typing import List, Tuple

from leadnotify.logging import configure_logging
from leadnotify.notifications import (
    ChannelType,
    DeliveryOutcome,
    NotificationRequest,
)
from leadnotify.services import (
    get_notification_service,
    get_resilience_service,
    get_settings,
)


def build_demo_requests() -> List[NotificationRequest]:
    """Sample traffic for two tenants.

    The fourth SMS to lead-1 exceeds the default daily limit and the push
    request has no capable channel.
    """
    requests = [
        NotificationRequest.sms(
            tenant_id="dealer-1",
            org_id="tenant-1",
            site_id="site-1",
            lead_id="lead-1",
            body=f"Reminder {n}: your test drive is booked",
            phone_number="+14155550123",
        )
        for n in range(1, 5)
    ]
    requests.append(
        NotificationRequest.email(
            tenant_id="dealer-2",
            org_id="tenant-2",
            site_id="site-2",
            lead_id="lead-3",
            subject="Your trade-in estimate",
            body="Your trade-in estimate is ready",
            email="alice@dealer2.example.com",
        )
    )
    requests.append(
        NotificationRequest(
            tenant_id="dealer-2",
            org_id="tenant-2",
            site_id="site-2",
            lead_id="lead-4",
            channel_type=ChannelType.PUSH,
            body="A new offer is waiting in the app",
            destination="device-token-abc123",
        )
    )
    return requests


def run_demo() -> List[Tuple[NotificationRequest, DeliveryOutcome]]:
    """Route every demo request and return the request/outcome pairs."""
    logger = configure_logging(settings=get_settings())
    service = get_notification_service()

    results = []
    for request in build_demo_requests():
        outcome = service.route(request)
        logger.info(
            "demo_notification_routed",
            tenant_id=request.tenant_id,
            lead_id=request.lead_id,
            channel_type=request.channel_type.value,
            success=outcome.is_success,
            vendor=outcome.vendor,
            tracking_id=outcome.tracking_id,
            error=outcome.error,
        )
        results.append((request, outcome))

    logger.info(
        "demo_completed",
        circuit_states=service.get_circuit_states(),
        open_circuits=get_resilience_service().get_open_circuit_breakers(),
    )
    return results


def main() -> None:
    run_demo()


if __name__ == "__main__":
    main()
