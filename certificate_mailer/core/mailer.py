"""Core loop: one feedback document, certificates and email per roster row."""

from typing import Any, Iterable, List, Mapping, Optional

from certificate_mailer import config
from certificate_mailer.core.certificates import CertificateResolver
from certificate_mailer.core.classifier import classify
from certificate_mailer.core.feedback import FeedbackBuilder
from certificate_mailer.core.models import Attachment, RosterRow, RunSummary
from certificate_mailer.core.notifier import Notifier
from certificate_mailer.utils.logger import get_logger
from certificate_mailer.utils.error_handler import DocumentError
from certificate_mailer.utils.throttle import Throttle

logger = get_logger()

class CertificateMailer:
    """Walks the roster in order and notifies every row that has an email address."""

    def __init__(
        self,
        feedback_builder: FeedbackBuilder,
        certificate_resolver: CertificateResolver,
        notifier: Notifier,
        throttle: Optional[Throttle] = None,
        stop_on_document_error: bool = config.STOP_ON_DOCUMENT_ERROR
    ):
        """Initializes the mailer with its collaborators.

        Args:
            feedback_builder: Renders the feedback PDF.
            certificate_resolver: Fetches certificate files from Drive.
            notifier: Sends the templated email.
            throttle: Pause applied after every processed row. Defaults to
                `config.SEND_DELAY_SECONDS`.
            stop_on_document_error: Re-raise a feedback document failure and
                end the run instead of skipping the row.
        """
        self.feedback_builder = feedback_builder
        self.certificate_resolver = certificate_resolver
        self.notifier = notifier
        self.throttle = throttle if throttle is not None else Throttle(config.SEND_DELAY_SECONDS)
        self.stop_on_document_error = stop_on_document_error

    def build_attachments(self, row: RosterRow) -> List[Attachment]:
        """Feedback first, then whichever certificates could be fetched."""
        attachments = [self.feedback_builder.build_attachment(row.name, row.scores)]
        attachments.extend(self.certificate_resolver.resolve_row(row))
        return attachments

    def process_row(self, row: RosterRow) -> bool:
        """Builds attachments for one row and sends its email.

        Returns:
            True if the email was sent.

        Raises:
            DocumentError: If the feedback document fails and
                `stop_on_document_error` is set.
        """
        try:
            attachments = self.build_attachments(row)
        except DocumentError as e:
            if self.stop_on_document_error:
                raise
            logger.error(f"Skipping {row.email}: feedback document could not be built: {e}")
            return False

        variant = classify(row.has_attendance_cert, row.has_proficiency_cert)
        logger.debug(f"{row.email} classified as {variant.value}")
        return self.notifier.notify(variant, row.name, row.email, attachments)

    def run(self, records: Iterable[Mapping[str, Any]]) -> RunSummary:
        """Processes roster records in order.

        Args:
            records: Data rows keyed by column header, header row excluded.

        Returns:
            Counters for sent, failed and skipped rows.
        """
        summary = RunSummary()
        for position, record in enumerate(records, start=1):
            row = RosterRow.from_record(record)
            if not row.has_email:
                logger.debug(f"Row {position}: no email address, skipping.")
                summary.skipped += 1
                continue

            logger.info(f"Row {position}: processing {row.name or '(no name)'} <{row.email}>")
            summary.processed += 1
            if self.process_row(row):
                summary.sent += 1
            else:
                summary.failed += 1

            self.throttle.pause()

        logger.info(
            f"Finished roster. Sent: {summary.sent}, Failed: {summary.failed}, "
            f"Skipped (no email): {summary.skipped}."
        )
        return summary
