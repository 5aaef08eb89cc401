"""Maps certificate eligibility to a notification variant."""

from certificate_mailer.core.models import NotificationVariant

_VARIANTS = {
    (True, True): NotificationVariant.BOTH_CERTS,
    (True, False): NotificationVariant.ATTENDANCE_ONLY,
    (False, True): NotificationVariant.PROFICIENCY_ONLY,
    (False, False): NotificationVariant.FEEDBACK_ONLY,
}

def classify(has_attendance: bool, has_proficiency: bool) -> NotificationVariant:
    """Returns the variant for a pair of certificate presence flags."""
    return _VARIANTS[(bool(has_attendance), bool(has_proficiency))]
