"""Wrapper for Gmail API interactions."""

import base64
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Any, Dict, Sequence

from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError
from google.oauth2.credentials import Credentials

from certificate_mailer import config
from certificate_mailer.core.models import Attachment
from certificate_mailer.utils.logger import get_logger
from certificate_mailer.utils.error_handler import APIError
from certificate_mailer.api_clients import build_service

logger = get_logger()

def create_message(
    to: str,
    subject: str,
    plain_body: str,
    html_body: str,
    attachments: Sequence[Attachment] = ()
) -> Dict[str, str]:
    """Creates a MIME message for the Gmail API.

    The message is multipart/mixed: a multipart/alternative part holding the
    plain and HTML bodies, followed by one part per attachment, in order.

    Returns:
        A dictionary containing the base64url encoded raw message string.
    """
    message = MIMEMultipart('mixed')
    message['to'] = to
    # Gmail fills in the sender for userId "me"
    message['subject'] = subject

    body = MIMEMultipart('alternative')
    body.attach(MIMEText(plain_body, 'plain', 'utf-8'))
    body.attach(MIMEText(html_body, 'html', 'utf-8'))
    message.attach(body)

    for attachment in attachments:
        maintype, _, subtype = attachment.content_type.partition('/')
        if maintype == 'application' and subtype:
            part = MIMEApplication(attachment.content, _subtype=subtype)
        else:
            part = MIMEApplication(attachment.content)
            part.replace_header('Content-Type', attachment.content_type)
        part.add_header('Content-Disposition', 'attachment', filename=attachment.filename)
        message.attach(part)

    raw_message = base64.urlsafe_b64encode(message.as_bytes()).decode()
    return {'raw': raw_message}

class GmailService:
    """Provides methods to interact with the Gmail API."""

    SERVICE_NAME = 'gmail'
    VERSION = 'v1'

    def __init__(self, credentials: Credentials):
        """Initializes the GmailService.

        Args:
            credentials: Valid Google OAuth 2.0 credentials.

        Raises:
            AuthenticationError: If credentials are invalid.
            APIError: If the Gmail service cannot be built.
        """
        logger.debug("Initializing GmailService...")
        self.service: Resource = build_service(self.SERVICE_NAME, self.VERSION, credentials)
        logger.debug("GmailService initialized successfully.")

    def send_email(
        self,
        to_email: str,
        subject: str,
        plain_body: str,
        html_body: str,
        attachments: Sequence[Attachment] = (),
        sender: str = "me"
    ) -> Dict[str, Any]:
        """Sends an email with plain and HTML bodies and attachments.

        Args:
            to_email: The recipient's email address.
            subject: The email subject.
            plain_body: The plain text body.
            html_body: The HTML body.
            attachments: Files to attach, in order.
            sender: The sender's user ID (defaults to "me").

        Returns:
            The response from the Gmail API's send method (contains message ID).

        Raises:
            APIError: If the API call fails.
            ValueError: If the recipient address is invalid.
        """
        if not to_email or '@' not in to_email:
            raise ValueError(f"Invalid recipient email address: {to_email}")

        logger.info(f"Preparing to send email to <{to_email}> with subject: '{subject}' ({len(attachments)} attachments)")

        try:
            message_body = create_message(to_email, subject, plain_body, html_body, attachments)
            sent_message = self.service.users().messages().send(
                userId=sender,
                body=message_body
            ).execute()
        except HttpError as e:
            logger.error(f"Failed to send email to <{to_email}>: {e.resp.status} {e.content}", exc_info=config.DEBUG)
            if e.resp.status == 400:
                raise APIError(
                    f"Failed to send email due to bad request (400). Check parameters. Error: {e.content}",
                    status_code=400, service=self.SERVICE_NAME
                ) from e
            if e.resp.status == 403:
                raise APIError(
                    f"Permission denied (403) sending email from {sender}. Check Gmail API permissions.",
                    status_code=403, service=self.SERVICE_NAME
                ) from e
            raise APIError(
                f"Failed to send email to <{to_email}>: {e.resp.status}",
                status_code=e.resp.status,
                service=self.SERVICE_NAME
            ) from e
        except Exception as e:
            logger.error(f"Unexpected error sending email to <{to_email}>: {e}", exc_info=config.DEBUG)
            raise APIError(f"Unexpected error sending email: {e}", service=self.SERVICE_NAME) from e

        logger.debug(f"Gmail accepted message for <{to_email}>. Message ID: {sent_message.get('id')}")
        return sent_message
