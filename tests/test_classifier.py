"""Unit tests for the notification variant classifier."""

import pytest

from certificate_mailer.core.classifier import classify
from certificate_mailer.core.models import NotificationVariant


@pytest.mark.parametrize("has_attendance, has_proficiency, expected", [
    (True, True, NotificationVariant.BOTH_CERTS),
    (True, False, NotificationVariant.ATTENDANCE_ONLY),
    (False, True, NotificationVariant.PROFICIENCY_ONLY),
    (False, False, NotificationVariant.FEEDBACK_ONLY),
])
def test_classify(has_attendance, has_proficiency, expected):
    assert classify(has_attendance, has_proficiency) is expected


def test_every_variant_is_reachable():
    results = {classify(a, p) for a in (True, False) for p in (True, False)}
    assert results == set(NotificationVariant)
