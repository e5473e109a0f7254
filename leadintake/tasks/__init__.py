# Tasks package
from .notification_tasks import send_email_notification

__all__ = [
    "send_email_notification",
]
