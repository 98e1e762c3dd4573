"""Test fixtures for notification delivery tests."""

import pytest
from typing import Iterable, Optional
from unittest.mock import MagicMock

from leadnotify.notifications.channels.base import NotificationChannel
from leadnotify.notifications.models import (
    ChannelType,
    DeliveryOutcome,
    NotificationRequest,
)


@pytest.fixture
def request_factory():
    """Factory for creating NotificationRequest instances.

    Example:
        request = request_factory(lead_id="lead-7")
        email = request_factory(channel_type=ChannelType.EMAIL, subject="Hi")
    """

    def _factory(
        tenant_id: str = "dealer-1",
        org_id: str = "tenant-1",
        site_id: str = "site-1",
        lead_id: str = "lead-1",
        channel_type: ChannelType = ChannelType.SMS,
        subject: Optional[str] = None,
        body: str = "Your test drive is confirmed",
        destination: str = "+14155550123",
    ) -> NotificationRequest:
        return NotificationRequest(
            tenant_id=tenant_id,
            org_id=org_id,
            site_id=site_id,
            lead_id=lead_id,
            channel_type=channel_type,
            subject=subject,
            body=body,
            destination=destination,
        )

    return _factory


@pytest.fixture
def channel_factory():
    """Factory for mock NotificationChannel instances.

    The mock supports the given types and returns a success (or failure)
    outcome whose vendor is the channel name.

    Example:
        failing = channel_factory("sms", succeed=False)
        email = channel_factory("email", types=[ChannelType.EMAIL, ChannelType.SMS])
    """

    def _factory(
        name: str = "mock",
        succeed: bool = True,
        types: Iterable[ChannelType] = (ChannelType.SMS,),
    ) -> MagicMock:
        supported = set(types)
        channel = MagicMock(spec=NotificationChannel)
        channel.channel_name = name
        channel.supports.side_effect = lambda channel_type: channel_type in supported
        if succeed:
            channel.send.return_value = DeliveryOutcome.success(name, f"{name}-msg-1")
        else:
            channel.send.return_value = DeliveryOutcome.failure(
                name, f"{name} vendor unavailable"
            )
        return channel

    return _factory
