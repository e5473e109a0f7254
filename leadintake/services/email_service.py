import logging

import resend

from leadintake.core.config import settings
from leadintake.core.exceptions import NotificationError

logger = logging.getLogger(__name__)


class EmailService:
    def __init__(self, api_key: str = None, sender: str = None):
        self.api_key = settings.RESEND_API_KEY if api_key is None else api_key
        self.sender = settings.EMAIL_FROM if sender is None else sender

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.sender)

    def send(self, to: str, subject: str, html: str) -> None:
        """Send one email through Resend. Raises NotificationError on failure."""
        if not self.is_configured:
            raise NotificationError("Email not configured")
        resend.api_key = self.api_key
        try:
            resend.Emails.send({
                "from": self.sender,
                "to": [to],
                "subject": subject,
                "html": html,
            })
        except Exception as e:
            raise NotificationError("Email send failed", details=str(e))
