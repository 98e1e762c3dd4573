"""Notification channels."""

from leadnotify.notifications.channels.base import NotificationChannel
from leadnotify.notifications.channels.email import EmailChannel
from leadnotify.notifications.channels.sms import SMSChannel

__all__ = ["NotificationChannel", "EmailChannel", "SMSChannel"]
