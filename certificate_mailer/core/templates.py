"""Email templates, one per notification variant."""

import html
from dataclasses import dataclass
from typing import Dict

from certificate_mailer.core.models import NotificationVariant, RenderedEmail

_HTML_WRAPPER = """
  <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
{paragraphs}
  </div>"""

_SIGN_OFF = ("Best regards,", "The Data School Program Team")


@dataclass(frozen=True)
class EmailTemplate:
    """Subject plus body paragraphs; only the greeting depends on the recipient."""
    subject: str
    paragraphs: tuple

    def html_body(self, name: str) -> str:
        greeting = f"Dear {html.escape(name)},"
        blocks = [greeting, *self.paragraphs, "<br>\n    ".join(_SIGN_OFF)]
        paragraphs = "\n    \n".join(f"    <p>{block}</p>" for block in blocks)
        return _HTML_WRAPPER.format(paragraphs=paragraphs)

    def plain_body(self, name: str) -> str:
        blocks = [f"Dear {name},", *self.paragraphs, "\n".join(_SIGN_OFF)]
        return "\n\n".join(blocks)

    def render(self, name: str) -> RenderedEmail:
        return RenderedEmail(subject=self.subject, html_body=self.html_body(name), plain_body=self.plain_body(name))


_FEEDBACK_INCLUDED = (
    "Additionally, we've included your personalized feedback document, which provides insights into your "
    "performance metrics and areas where you've excelled, as well as recommendations for future growth."
)

TEMPLATES: Dict[NotificationVariant, EmailTemplate] = {
    NotificationVariant.ATTENDANCE_ONLY: EmailTemplate(
        subject="Your Data School Program Attendance Certificate and Feedback",
        paragraphs=(
            "Thank you for your participation in the May 2025 Data School Program! We appreciate your dedication "
            "and engagement throughout the program.",
            "We are pleased to provide you with your Certificate of Attendance, recognizing your commitment to "
            "professional development and active participation in the program.",
            _FEEDBACK_INCLUDED,
            "Your certificate and feedback are attached to this email. We encourage you to share your certificate "
            "on your professional profiles.",
            "We hope the insights and knowledge you've gained during the program will be valuable in your "
            "professional journey.",
        ),
    ),
    NotificationVariant.PROFICIENCY_ONLY: EmailTemplate(
        subject="Congratulations on Your Data School Program Proficiency Achievement",
        paragraphs=(
            "Congratulations on achieving proficiency in the May 2025 Data School Program! Your performance has "
            "been exceptional.",
            "We are pleased to provide you with your Certificate of Proficiency, which recognizes your mastery of "
            "the program content and successful demonstration of the required skills.",
            _FEEDBACK_INCLUDED,
            "Your certificate and feedback are attached to this email. We encourage you to showcase your "
            "certificate on your professional profiles as a testament to your expertise.",
            "We hope the specialized skills you've developed will enhance your professional capabilities and open "
            "new opportunities for you.",
        ),
    ),
    NotificationVariant.BOTH_CERTS: EmailTemplate(
        subject="Congratulations on Completing the Data School Program - Your Certificates",
        paragraphs=(
            "Congratulations on your outstanding achievement in the May 2025 Data School Program! We are thrilled "
            "to recognize your commitment and excellence throughout the program.",
            "We are pleased to provide you with both your Certificate of Attendance and Certificate of Proficiency, "
            "which recognize your full participation and mastery of the program content. These certificates "
            "reflect your dedication to professional growth and the skills you've developed during the program.",
            _FEEDBACK_INCLUDED,
            "Your certificates and feedback are attached to this email. Feel free to share your certificates on "
            "your professional profiles and with your network.",
            "Thank you for your active participation and remarkable performance. We hope the knowledge and skills "
            "you've gained will contribute significantly to your professional journey.",
        ),
    ),
    NotificationVariant.FEEDBACK_ONLY: EmailTemplate(
        subject="Your Data School Program Feedback",
        paragraphs=(
            "Thank you for your participation in the May 2025 Data School Program.",
            "We've prepared a personalized feedback document for you, which provides insights into your "
            "performance metrics throughout the program, as well as recommendations for future growth.",
            "Your feedback document is attached to this email. We hope you find the assessment helpful as you "
            "continue your professional development journey.",
            "We appreciate your engagement with the program and wish you success in your future endeavors.",
        ),
    ),
}


def render_email(variant: NotificationVariant, name: str) -> RenderedEmail:
    """Renders the subject and both bodies for a recipient."""
    return TEMPLATES[variant].render(name)
