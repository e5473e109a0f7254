import logging
from typing import Dict, Any

from leadintake.core.celery_app import celery_app
from leadintake.core.exceptions import NotificationError
from leadintake.services.email_service import EmailService

logger = logging.getLogger(__name__)

MAX_RETRIES = 3
RETRY_BASE_SECONDS = 30


def deliver_email(email_service: EmailService, to: str, subject: str, html: str) -> Dict[str, Any]:
    """Send one email. Unconfigured email is skipped, not an error."""
    if not email_service.is_configured:
        logger.warning("⚠️ Email not configured (skipping send).")
        return {"status": "skipped", "email": to}
    email_service.send(to, subject, html)
    logger.info(f"📧 Email sent to {to}: {subject}")
    return {"status": "sent", "email": to, "subject": subject}


@celery_app.task(bind=True, max_retries=MAX_RETRIES)
def send_email_notification(self, email: str, subject: str, html: str):
    """Send a notification email using Resend, retrying with backoff."""
    try:
        return deliver_email(EmailService(), email, subject, html)
    except NotificationError as e:
        if self.request.retries < self.max_retries:
            countdown = RETRY_BASE_SECONDS * (2 ** self.request.retries)
            logger.warning(f"⚠️ Email send to {email} failed ({e.details}); retrying in {countdown}s")
            raise self.retry(exc=e, countdown=countdown)
        logger.error(f"❌ Failed to send email to {email}: {e.details or e.message}")
        return {"status": "failed", "email": email, "error": e.message}
