"""Resolves certificate reference cells into attachment content."""

import mimetypes
import re
from typing import List, Optional

from certificate_mailer import config
from certificate_mailer.core.models import Attachment, RosterRow, PDF_CONTENT_TYPE
from certificate_mailer.services.drive_api import DriveService
from certificate_mailer.utils.logger import get_logger
from certificate_mailer.utils.error_handler import APIError, CertificateResolutionError

logger = get_logger()

# Drive file ids are long runs of ASCII word characters and hyphens
FILE_ID_PATTERN = re.compile(r'[-\w]{25,}', re.ASCII)

ATTENDANCE_CERT_LABEL = "Attendance Certificate"
PROFICIENCY_CERT_LABEL = "Proficiency Certificate"

def extract_file_id(reference: Optional[str]) -> Optional[str]:
    """Returns the first Drive file id embedded in a reference string, or None."""
    if not reference:
        return None
    match = FILE_ID_PATTERN.search(reference)
    return match.group(0) if match else None

def certificate_filename(name: str, label: str, content_type: str = PDF_CONTENT_TYPE) -> str:
    extension = ".pdf"
    if content_type != PDF_CONTENT_TYPE:
        extension = mimetypes.guess_extension(content_type) or extension
    return f"{name} - Data School Program {label}{extension}"

class CertificateResolver:
    """Fetches the certificate files a roster row points at."""

    def __init__(self, drive_service: DriveService):
        self.drive_service = drive_service

    def fetch(self, reference: str) -> tuple[str, bytes]:
        """Fetches the file behind a reference string.

        Raises:
            CertificateResolutionError: If no file id can be found in the
                reference or the file cannot be retrieved.
        """
        file_id = extract_file_id(reference)
        if not file_id:
            raise CertificateResolutionError(f"No file ID found in reference: {reference!r}", reference=reference)
        try:
            return self.drive_service.download_file_content(file_id)
        except APIError as e:
            raise CertificateResolutionError(f"Could not fetch file {file_id}: {e}", reference=reference) from e

    def resolve(self, name: str, reference: str, label: str) -> Optional[Attachment]:
        """Returns the certificate as an attachment, or None if it is unavailable.

        Resolution failures are logged and swallowed so one bad link never
        stops the row.
        """
        try:
            content_type, content = self.fetch(reference)
        except CertificateResolutionError as e:
            logger.warning(f"{label} for {name} unavailable: {e}", exc_info=config.DEBUG)
            return None
        return Attachment(
            filename=certificate_filename(name, label, content_type),
            content=content,
            content_type=content_type,
        )

    def resolve_row(self, row: RosterRow) -> List[Attachment]:
        """Returns the row's available certificates, attendance first."""
        attachments: List[Attachment] = []
        if row.has_attendance_cert:
            attendance = self.resolve(row.name, row.attendance_cert_ref, ATTENDANCE_CERT_LABEL)
            if attendance:
                attachments.append(attendance)
        if row.has_proficiency_cert:
            proficiency = self.resolve(row.name, row.proficiency_cert_ref, PROFICIENCY_CERT_LABEL)
            if proficiency:
                attachments.append(proficiency)
        return attachments
