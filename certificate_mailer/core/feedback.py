"""Builds the per-student feedback PDF from roster scores."""

import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, List, Optional

from certificate_mailer import config
from certificate_mailer.core.document_writer import (
    Block, DocumentWriter, HorizontalRule, Paragraph, Table, temporary_document,
)
from certificate_mailer.core.models import Attachment, Scores, PDF_CONTENT_TYPE
from certificate_mailer.services.docs_api import DocsService
from certificate_mailer.services.drive_api import DriveService
from certificate_mailer.utils.logger import get_logger
from certificate_mailer.utils.error_handler import APIError, DocumentError

logger = get_logger()

NOT_AVAILABLE = "N/A"

EXCELLENT_REMARK = (
    "You have demonstrated excellent performance throughout the program. Your strong engagement, "
    "quality submissions, and collaborative efforts have been exemplary."
)
VERY_GOOD_REMARK = (
    "You have shown very good performance throughout the program. Your consistent engagement and "
    "quality work have been noted."
)
PERFORMED_WELL_REMARK = (
    "You have performed well throughout the program. With additional practice and engagement, "
    "you can further enhance your skills."
)
DEFAULT_REMARK = (
    "Thank you for your participation in the program. We recommend continued practice and "
    "engagement with the material to strengthen your skills."
)

# (minimum percentage, remark), highest first
REMARK_THRESHOLDS = (
    (80, EXCELLENT_REMARK),
    (70, VERY_GOOD_REMARK),
    (60, PERFORMED_WELL_REMARK),
)

RECOMMENDATIONS = (
    "\nRecommendations for further growth:",
    "1. Continue to apply the data analysis techniques learned in real-world scenarios",
    "2. Join industry communities to stay updated with the latest trends",
    "3. Consider pursuing advanced certifications to build on your current knowledge",
)

SIGNATURE = "The Data School Program Team\nMay 2025 Cohort"
SCORE_COLUMN_WIDTHS = (200, 100)


def parse_number(value: Any) -> Optional[float]:
    """Reads a score cell as a float. Accepts '85', '85.5%', '1,200'; None if unreadable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().rstrip('%').replace(',', '').strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    return number if math.isfinite(number) else None


def format_score(value: Any) -> str:
    if value is None or str(value).strip() == "":
        return NOT_AVAILABLE
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_percentage(value: Any) -> str:
    number = parse_number(value)
    if number is None:
        return NOT_AVAILABLE
    # Exact ties round away from zero; precision covers every finite float
    with localcontext() as ctx:
        ctx.prec = 400
        rounded = Decimal(number).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{rounded}%"


def select_remark(percentage: Any) -> str:
    """Picks the summary remark; a missing percentage gets the default one."""
    number = parse_number(percentage)
    for minimum, remark in REMARK_THRESHOLDS:
        if number is not None and number >= minimum:
            return remark
    return DEFAULT_REMARK


def feedback_title(name: str) -> str:
    return f"{name} - Data School Program Feedback"


def feedback_filename(name: str) -> str:
    return f"{feedback_title(name)}.pdf"


def build_feedback_content(name: str, scores: Scores, date_text: str = config.FEEDBACK_DATE) -> List[Block]:
    """Lays out the feedback document for one student.

    Pure function of its inputs; the same student and scores always give the
    same blocks.
    """
    score_rows = (
        ("Metric", "Score"),
        ("Attendance", format_score(scores.attendance)),
        ("Punctuality", format_score(scores.punctuality)),
        ("Assessment Score", format_score(scores.assessment)),
        ("Individual Classwork", format_score(scores.individual_classwork)),
        ("Presentation Score", format_score(scores.presentation)),
        ("Overall Percentage", format_percentage(scores.percentage)),
    )

    blocks: List[Block] = [
        Paragraph("DATA SCHOOL PROGRAM - STUDENT FEEDBACK", "HEADING_1"),
        Paragraph(f"Name: {name}", "HEADING_2"),
        Paragraph(f"Date: {date_text}"),
        HorizontalRule(),
        Paragraph("PERFORMANCE METRICS", "HEADING_2"),
        Table(rows=score_rows, column_widths=SCORE_COLUMN_WIDTHS),
        HorizontalRule(),
        Paragraph("FEEDBACK SUMMARY", "HEADING_2"),
        Paragraph(select_remark(scores.percentage)),
    ]
    blocks.extend(Paragraph(line) for line in RECOMMENDATIONS)
    blocks.append(HorizontalRule())
    blocks.append(Paragraph(SIGNATURE))
    return blocks


class FeedbackBuilder:
    """Renders feedback content through a temporary Google Doc and exports it as PDF."""

    def __init__(self, docs_service: DocsService, drive_service: DriveService, date_text: str = config.FEEDBACK_DATE):
        self.docs_service = docs_service
        self.drive_service = drive_service
        self.date_text = date_text

    def render(self, name: str, scores: Scores) -> bytes:
        """Returns the feedback PDF for one student.

        The backing document is trashed whether or not the export succeeds.

        Raises:
            DocumentError: If the document cannot be created, written or exported.
        """
        title = feedback_title(name)
        blocks = build_feedback_content(name, scores, self.date_text)
        try:
            with temporary_document(self.docs_service, self.drive_service, title) as document_id:
                DocumentWriter(self.docs_service, document_id).write(blocks)
                pdf = self.drive_service.export_pdf(document_id)
        except APIError as e:
            raise DocumentError(f"Failed to build feedback document '{title}': {e}") from e

        logger.debug(f"Rendered feedback for {name} ({len(pdf)} bytes)")
        return pdf

    def build_attachment(self, name: str, scores: Scores) -> Attachment:
        return Attachment(
            filename=feedback_filename(name),
            content=self.render(name, scores),
            content_type=PDF_CONTENT_TYPE,
        )
