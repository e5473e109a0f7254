import logging

from leadintake.tasks.notification_tasks import send_email_notification

logger = logging.getLogger(__name__)


class QueuedNotifier:
    """Hands emails to the Celery worker. Never raises into the caller."""

    def notify(self, to: str, subject: str, html: str) -> None:
        try:
            send_email_notification.apply_async(args=[to, subject, html])
        except Exception as e:
            # Broker down or misconfigured; the submission is already stored
            logger.warning(f"⚠️ Could not queue email to {to}: {e}")
