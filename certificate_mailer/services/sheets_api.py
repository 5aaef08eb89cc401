"""Wrapper for Google Sheets API interactions."""

from typing import Any, Dict, List, Optional

from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError
from google.oauth2.credentials import Credentials

from certificate_mailer import config
from certificate_mailer.utils.logger import get_logger
from certificate_mailer.utils.error_handler import APIError
from certificate_mailer.api_clients import build_service

logger = get_logger()

# A row as read from the sheet: header name -> cell value
SheetRecord = Dict[str, Any]

def rows_to_records(values: List[List[Any]]) -> List[SheetRecord]:
    """Turns a header row plus data rows into a list of dictionaries.

    The Sheets API drops trailing empty cells, so short rows are padded with
    empty strings. When a header repeats, the first column with that name wins.
    """
    if not values:
        return []

    headers = [str(h) for h in values[0]]
    records: List[SheetRecord] = []
    for row in values[1:]:
        record: SheetRecord = {}
        for index, header in enumerate(headers):
            if header in record:
                continue
            record[header] = row[index] if index < len(row) else ""
        records.append(record)
    return records

class SheetsService:
    """Provides methods to read a roster from the Google Sheets API."""

    SERVICE_NAME = 'sheets'
    VERSION = 'v4'

    def __init__(self, credentials: Credentials):
        """Initializes the SheetsService.

        Args:
            credentials: Valid Google OAuth 2.0 credentials.

        Raises:
            AuthenticationError: If credentials are invalid.
            APIError: If the Sheets service cannot be built.
        """
        logger.debug("Initializing SheetsService...")
        self.service: Resource = build_service(self.SERVICE_NAME, self.VERSION, credentials)
        logger.debug("SheetsService initialized successfully.")

    def get_first_sheet_title(self, spreadsheet_id: str) -> str:
        """Returns the title of the first worksheet in a spreadsheet."""
        try:
            spreadsheet = self.service.spreadsheets().get(
                spreadsheetId=spreadsheet_id,
                fields="sheets.properties.title"
            ).execute()
        except HttpError as e:
            logger.error(f"Failed to get spreadsheet {spreadsheet_id}: {e.resp.status} {e.content}", exc_info=config.DEBUG)
            if e.resp.status == 404:
                raise APIError(
                    f"Spreadsheet not found (404) with ID: {spreadsheet_id}",
                    status_code=404, service=self.SERVICE_NAME
                ) from e
            raise APIError(
                f"Failed to get spreadsheet {spreadsheet_id}: {e.resp.status}",
                status_code=e.resp.status, service=self.SERVICE_NAME
            ) from e

        sheets = spreadsheet.get('sheets', [])
        if not sheets:
            raise APIError(f"Spreadsheet {spreadsheet_id} has no worksheets.", service=self.SERVICE_NAME)
        return sheets[0]['properties']['title']

    def read_all_rows(self, spreadsheet_id: str, sheet_name: Optional[str] = None) -> List[SheetRecord]:
        """Reads every data row of a worksheet, keyed by the header row.

        Values are read unformatted so numeric scores arrive as numbers.

        Args:
            spreadsheet_id: The ID of the spreadsheet.
            sheet_name: Worksheet title. Defaults to the first worksheet.

        Returns:
            The data rows in sheet order, each a dict of header -> value.

        Raises:
            APIError: If the spreadsheet cannot be read.
        """
        if sheet_name is None:
            sheet_name = self.get_first_sheet_title(spreadsheet_id)

        # Quote the title so names with spaces or punctuation form a valid A1 range
        range_name = "'{}'".format(sheet_name.replace("'", "''"))
        logger.info(f"Reading roster from sheet '{sheet_name}' of spreadsheet {spreadsheet_id}...")
        try:
            result = self.service.spreadsheets().values().get(
                spreadsheetId=spreadsheet_id,
                range=range_name,
                valueRenderOption='UNFORMATTED_VALUE',
                dateTimeRenderOption='FORMATTED_STRING'
            ).execute()
        except HttpError as e:
            logger.error(f"Failed to read sheet '{sheet_name}': {e.resp.status} {e.content}", exc_info=config.DEBUG)
            raise APIError(
                f"Failed to read sheet '{sheet_name}' of spreadsheet {spreadsheet_id}: {e.resp.status}",
                status_code=e.resp.status, service=self.SERVICE_NAME
            ) from e
        except Exception as e:
            logger.error(f"Unexpected error reading sheet '{sheet_name}': {e}", exc_info=config.DEBUG)
            raise APIError(f"Unexpected error reading sheet: {e}", service=self.SERVICE_NAME) from e

        records = rows_to_records(result.get('values', []))
        logger.info(f"Read {len(records)} roster rows from '{sheet_name}'.")
        return records
