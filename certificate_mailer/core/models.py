"""Data types for roster rows, attachments and notification variants."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

# --- Roster column headers ---
NAME_COLUMN = "NAME"
EMAIL_COLUMN = "EMAIL ADDRESS"
ATTENDANCE_CERT_COLUMN = "Certificate of Attendance"
PROFICIENCY_CERT_COLUMN = "Certificate of Proficiency"
ATTENDANCE_SCORE_COLUMN = "Attendance Score"
PUNCTUALITY_SCORE_COLUMN = "Punctuality Score"
ASSESSMENT_SCORE_COLUMN = "Assessment Score"
INDIVIDUAL_CLASSWORK_COLUMN = "Individual Classwork"
PRESENTATION_SCORE_COLUMN = "Presentation Score"
PERCENTAGE_COLUMN = "Percentage %"

PDF_CONTENT_TYPE = "application/pdf"


class NotificationVariant(Enum):
    """The four email/attachment profiles a recipient can receive."""
    BOTH_CERTS = "both_certs"
    ATTENDANCE_ONLY = "attendance_only"
    PROFICIENCY_ONLY = "proficiency_only"
    FEEDBACK_ONLY = "feedback_only"


def _is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _score(value: Any) -> Any:
    return None if _is_blank(value) else value


@dataclass(frozen=True)
class Scores:
    """Raw score cells for one student. None means the cell was empty."""
    attendance: Any = None
    punctuality: Any = None
    assessment: Any = None
    individual_classwork: Any = None
    presentation: Any = None
    percentage: Any = None


@dataclass(frozen=True)
class RosterRow:
    """One student's record from the roster sheet."""
    name: str
    email: str
    attendance_cert_ref: str = ""
    proficiency_cert_ref: str = ""
    scores: Scores = field(default_factory=Scores)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "RosterRow":
        """Builds a row from a header -> value mapping. Missing columns read as empty."""
        return cls(
            name=_text(record.get(NAME_COLUMN)),
            email=_text(record.get(EMAIL_COLUMN)),
            attendance_cert_ref=_text(record.get(ATTENDANCE_CERT_COLUMN)),
            proficiency_cert_ref=_text(record.get(PROFICIENCY_CERT_COLUMN)),
            scores=Scores(
                attendance=_score(record.get(ATTENDANCE_SCORE_COLUMN)),
                punctuality=_score(record.get(PUNCTUALITY_SCORE_COLUMN)),
                assessment=_score(record.get(ASSESSMENT_SCORE_COLUMN)),
                individual_classwork=_score(record.get(INDIVIDUAL_CLASSWORK_COLUMN)),
                presentation=_score(record.get(PRESENTATION_SCORE_COLUMN)),
                percentage=_score(record.get(PERCENTAGE_COLUMN)),
            ),
        )

    @property
    def has_email(self) -> bool:
        return bool(self.email)

    @property
    def has_attendance_cert(self) -> bool:
        return bool(self.attendance_cert_ref)

    @property
    def has_proficiency_cert(self) -> bool:
        return bool(self.proficiency_cert_ref)


@dataclass(frozen=True)
class Attachment:
    """A file to attach to an outgoing email."""
    filename: str
    content: bytes
    content_type: str = PDF_CONTENT_TYPE


@dataclass
class RunSummary:
    """Counters for one pass over the roster."""
    processed: int = 0
    sent: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.processed + self.skipped


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html_body: str
    plain_body: str
