"""Unit tests for the feedback document builder."""

import pytest

from conftest import FakeDocsService
from certificate_mailer.core.document_writer import HorizontalRule, Paragraph, Table
from certificate_mailer.core.feedback import (
    DEFAULT_REMARK, EXCELLENT_REMARK, PERFORMED_WELL_REMARK, VERY_GOOD_REMARK,
    FeedbackBuilder, build_feedback_content, feedback_filename, format_percentage,
    format_score, parse_number, select_remark,
)
from certificate_mailer.core.models import Scores
from certificate_mailer.utils.error_handler import APIError, DocumentError


@pytest.mark.parametrize("percentage, remark", [
    (85, EXCELLENT_REMARK),
    (80, EXCELLENT_REMARK),
    (75, VERY_GOOD_REMARK),
    (79.99, VERY_GOOD_REMARK),
    (65, PERFORMED_WELL_REMARK),
    (60, PERFORMED_WELL_REMARK),
    (50, DEFAULT_REMARK),
    (None, DEFAULT_REMARK),
    ("72.5%", VERY_GOOD_REMARK),
    ("not a number", DEFAULT_REMARK),
])
def test_select_remark(percentage, remark):
    assert select_remark(percentage) == remark


def test_parse_number():
    assert parse_number(85) == 85.0
    assert parse_number("85.5%") == 85.5
    assert parse_number(" 1,200 ") == 1200.0
    assert parse_number("") is None
    assert parse_number(None) is None
    assert parse_number("abc") is None


def test_format_score():
    assert format_score(None) == "N/A"
    assert format_score("") == "N/A"
    assert format_score(90) == "90"
    assert format_score(90.0) == "90"
    assert format_score(87.5) == "87.5"
    assert format_score(0) == "0"
    assert format_score("Excellent") == "Excellent"


def test_format_percentage():
    assert format_percentage(85) == "85.0%"
    assert format_percentage(72.456) == "72.5%"
    assert format_percentage("66") == "66.0%"
    assert format_percentage(None) == "N/A"


def test_format_percentage_rounds_ties_up():
    assert format_percentage(84.25) == "84.3%"
    assert format_percentage(72.25) == "72.3%"
    assert format_percentage(-84.25) == "-84.3%"
    assert format_percentage("66.65") == "66.7%"


def test_non_finite_percentage_is_unavailable():
    assert parse_number("nan") is None
    assert parse_number(float("inf")) is None
    assert format_percentage("inf") == "N/A"
    assert select_remark(float("inf")) == DEFAULT_REMARK


def test_content_layout():
    scores = Scores(attendance=95, punctuality=None, assessment=80,
                    individual_classwork=85, presentation=88, percentage=85)
    blocks = build_feedback_content("Ada", scores, date_text="July 27, 2025")

    assert blocks[0] == Paragraph("DATA SCHOOL PROGRAM - STUDENT FEEDBACK", "HEADING_1")
    assert blocks[1] == Paragraph("Name: Ada", "HEADING_2")
    assert blocks[2] == Paragraph("Date: July 27, 2025")
    assert isinstance(blocks[3], HorizontalRule)

    table = next(b for b in blocks if isinstance(b, Table))
    assert table.rows == (
        ("Metric", "Score"),
        ("Attendance", "95"),
        ("Punctuality", "N/A"),
        ("Assessment Score", "80"),
        ("Individual Classwork", "85"),
        ("Presentation Score", "88"),
        ("Overall Percentage", "85.0%"),
    )
    assert table.column_widths == (200, 100)

    texts = [b.text for b in blocks if isinstance(b, Paragraph)]
    assert texts.count(EXCELLENT_REMARK) == 1
    assert DEFAULT_REMARK not in texts
    assert texts[-1] == "The Data School Program Team\nMay 2025 Cohort"


def test_content_all_missing_scores():
    blocks = build_feedback_content("Ada", Scores())
    table = next(b for b in blocks if isinstance(b, Table))
    assert [value for _, value in table.rows[1:]] == ["N/A"] * 6
    assert Paragraph(DEFAULT_REMARK) in blocks


def test_content_is_deterministic():
    scores = Scores(attendance=95, percentage=71)
    assert build_feedback_content("Ada", scores) == build_feedback_content("Ada", scores)


def test_render_exports_and_trashes(docs_service, drive_service):
    builder = FeedbackBuilder(docs_service, drive_service, date_text="July 27, 2025")

    pdf = builder.render("Ada", Scores(percentage=85))

    assert pdf == b"%PDF-feedback"
    assert docs_service.created == ["Ada - Data School Program Feedback"]
    drive_service.export_pdf.assert_called_once_with("doc-1")
    drive_service.trash_file.assert_called_once_with("doc-1")


def test_render_twice_gives_identical_requests(drive_service):
    first, second = FakeDocsService(), FakeDocsService()
    FeedbackBuilder(first, drive_service).render("Ada", Scores(percentage=64))
    FeedbackBuilder(second, drive_service).render("Ada", Scores(percentage=64))

    assert first.requests == second.requests


def test_export_failure_raises_document_error_and_trashes(docs_service, drive_service):
    drive_service.export_pdf.side_effect = APIError("export failed", status_code=500, service="drive")
    builder = FeedbackBuilder(docs_service, drive_service)

    with pytest.raises(DocumentError):
        builder.render("Ada", Scores())

    drive_service.trash_file.assert_called_once_with("doc-1")


def test_build_attachment(docs_service, drive_service):
    attachment = FeedbackBuilder(docs_service, drive_service).build_attachment("Ada", Scores())
    assert attachment.filename == feedback_filename("Ada") == "Ada - Data School Program Feedback.pdf"
    assert attachment.content == b"%PDF-feedback"
    assert attachment.content_type == "application/pdf"
