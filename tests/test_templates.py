"""Unit tests for the email templates."""

import pytest

from certificate_mailer.core.models import NotificationVariant
from certificate_mailer.core.templates import TEMPLATES, render_email


@pytest.mark.parametrize("variant, subject", [
    (NotificationVariant.BOTH_CERTS, "Congratulations on Completing the Data School Program - Your Certificates"),
    (NotificationVariant.ATTENDANCE_ONLY, "Your Data School Program Attendance Certificate and Feedback"),
    (NotificationVariant.PROFICIENCY_ONLY, "Congratulations on Your Data School Program Proficiency Achievement"),
    (NotificationVariant.FEEDBACK_ONLY, "Your Data School Program Feedback"),
])
def test_subjects(variant, subject):
    assert render_email(variant, "Ada").subject == subject


def test_every_variant_has_a_template():
    assert set(TEMPLATES) == set(NotificationVariant)


def test_plain_body_layout():
    body = render_email(NotificationVariant.FEEDBACK_ONLY, "Ada").plain_body

    assert body.startswith("Dear Ada,\n\nThank you for your participation in the May 2025 Data School Program.\n\n")
    assert body.endswith("Best regards,\nThe Data School Program Team")


def test_html_body_layout():
    body = render_email(NotificationVariant.ATTENDANCE_ONLY, "Ada").html_body

    assert '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">' in body
    assert "<p>Dear Ada,</p>" in body
    assert "Certificate of Attendance" in body
    assert "Best regards,<br>" in body
    assert body.rstrip().endswith("</div>")


def test_name_is_escaped_in_html_only():
    rendered = render_email(NotificationVariant.BOTH_CERTS, "Tom & <Jerry>")

    assert "Dear Tom &amp; &lt;Jerry&gt;," in rendered.html_body
    assert "Dear Tom & <Jerry>," in rendered.plain_body


def test_bodies_mention_the_right_certificates():
    both = render_email(NotificationVariant.BOTH_CERTS, "Ada").plain_body
    proficiency = render_email(NotificationVariant.PROFICIENCY_ONLY, "Ada").plain_body
    feedback = render_email(NotificationVariant.FEEDBACK_ONLY, "Ada").plain_body

    assert "Certificate of Attendance and Certificate of Proficiency" in both
    assert "Certificate of Proficiency" in proficiency
    assert "Certificate of Attendance" not in proficiency
    assert "Certificate" not in feedback
