"""Shared fixtures and fakes for the test suite."""

import os

# Keep test runs from writing log files; must happen before config is imported
os.environ["MAILER_LOG_FILE"] = ""

from unittest import mock

import httplib2
import pytest
from googleapiclient.errors import HttpError

from certificate_mailer.core.models import (
    NAME_COLUMN, EMAIL_COLUMN, ATTENDANCE_CERT_COLUMN, PROFICIENCY_CERT_COLUMN,
    ATTENDANCE_SCORE_COLUMN, PUNCTUALITY_SCORE_COLUMN, ASSESSMENT_SCORE_COLUMN,
    INDIVIDUAL_CLASSWORK_COLUMN, PRESENTATION_SCORE_COLUMN, PERCENTAGE_COLUMN,
)

ATTENDANCE_FILE_ID = "A" * 27
PROFICIENCY_FILE_ID = "P" * 27


def http_error(status: int, content: bytes = b"error") -> HttpError:
    return HttpError(httplib2.Response({"status": status}), content)


def make_record(name="Ada Lovelace", email="ada@example.com", attendance="", proficiency="", percentage=85):
    return {
        NAME_COLUMN: name,
        EMAIL_COLUMN: email,
        ATTENDANCE_CERT_COLUMN: attendance,
        PROFICIENCY_CERT_COLUMN: proficiency,
        ATTENDANCE_SCORE_COLUMN: 95,
        PUNCTUALITY_SCORE_COLUMN: 90,
        ASSESSMENT_SCORE_COLUMN: 80,
        INDIVIDUAL_CLASSWORK_COLUMN: 85,
        PRESENTATION_SCORE_COLUMN: 88,
        PERCENTAGE_COLUMN: percentage,
    }


def drive_link(file_id: str) -> str:
    return f"https://drive.example/d/{file_id}/view"


def fake_table_document(start: int, rows: int, columns: int) -> dict:
    """Mimics the body of a document holding one freshly inserted empty table."""
    row_size = 2 * columns + 1
    table_rows = []
    for r in range(rows):
        row_start = start + 1 + r * row_size
        cells = [{"content": [{"startIndex": row_start + 2 + 2 * c}]} for c in range(columns)]
        table_rows.append({"tableCells": cells})
    end = start + 1 + rows * row_size
    return {"body": {"content": [
        {"startIndex": 0, "endIndex": 1, "sectionBreak": {}},
        {"startIndex": start, "endIndex": end, "table": {"tableRows": table_rows}},
    ]}}


class FakeDocsService:
    """Records Docs calls and answers get_document with the last inserted table."""

    def __init__(self):
        self.created = []
        self.updates = []
        self._table = None
        self._table_start = None

    def create_document(self, title):
        self.created.append(title)
        return f"doc-{len(self.created)}"

    def batch_update(self, document_id, requests):
        self.updates.append((document_id, list(requests)))
        for request in requests:
            if "insertTable" in request:
                self._table = request["insertTable"]
                self._table_start = self._table["location"]["index"] + 1
            elif "deleteContentRange" in request and self._table_start is not None:
                deleted = request["deleteContentRange"]["range"]
                if deleted["endIndex"] <= self._table_start:
                    self._table_start -= deleted["endIndex"] - deleted["startIndex"]
        return {}

    def get_document(self, document_id):
        return fake_table_document(
            self._table_start,
            self._table["rows"],
            self._table["columns"],
        )

    @property
    def requests(self):
        return [request for _, batch in self.updates for request in batch]


@pytest.fixture
def docs_service():
    return FakeDocsService()


@pytest.fixture
def drive_service():
    drive = mock.MagicMock()
    drive.export_pdf.return_value = b"%PDF-feedback"
    drive.download_file_content.return_value = ("application/pdf", b"%PDF-certificate")
    return drive


@pytest.fixture
def gmail_service():
    gmail = mock.MagicMock()
    gmail.send_email.return_value = {"id": "msg-1"}
    return gmail
