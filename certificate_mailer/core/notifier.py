"""Sends the templated email for a notification variant."""

from typing import Sequence

from certificate_mailer import config
from certificate_mailer.core.models import Attachment, NotificationVariant
from certificate_mailer.core.templates import render_email
from certificate_mailer.services.gmail_api import GmailService
from certificate_mailer.utils.logger import get_logger
from certificate_mailer.utils.error_handler import APIError

logger = get_logger()

class Notifier:
    """Renders one template and hands it to Gmail. Failures are logged, never raised."""

    def __init__(self, gmail_service: GmailService, sender: str = config.SENDER):
        self.gmail_service = gmail_service
        self.sender = sender

    def notify(
        self,
        variant: NotificationVariant,
        name: str,
        email: str,
        attachments: Sequence[Attachment]
    ) -> bool:
        """Sends one email. Returns True if Gmail accepted it."""
        rendered = render_email(variant, name)
        try:
            self.gmail_service.send_email(
                email,
                rendered.subject,
                rendered.plain_body,
                rendered.html_body,
                attachments,
                sender=self.sender,
            )
        except (APIError, ValueError) as e:
            logger.error(f"Error sending email to {email}: {e}")
            return False
        logger.info(f"Email sent successfully to {email} ({variant.value}, {len(attachments)} attachments)")
        return True
