"""Wrapper for Google Drive API interactions."""

import io
from typing import Any, Dict, Tuple

from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseDownload
from google.oauth2.credentials import Credentials

from certificate_mailer import config
from certificate_mailer.utils.logger import get_logger
from certificate_mailer.utils.error_handler import APIError
from certificate_mailer.api_clients import build_service

logger = get_logger()

PDF_MIME_TYPE = "application/pdf"
GOOGLE_APPS_MIME_PREFIX = "application/vnd.google-apps"

class DriveService:
    """Provides methods to interact with the Google Drive API."""

    SERVICE_NAME = 'drive'
    VERSION = 'v3'

    def __init__(self, credentials: Credentials):
        """Initializes the DriveService.

        Args:
            credentials: Valid Google OAuth 2.0 credentials.

        Raises:
            AuthenticationError: If credentials are invalid.
            APIError: If the Drive service cannot be built.
        """
        logger.debug("Initializing DriveService...")
        self.service: Resource = build_service(self.SERVICE_NAME, self.VERSION, credentials)
        logger.debug("DriveService initialized successfully.")

    def _api_error(self, action: str, file_id: str, e: HttpError) -> APIError:
        logger.error(f"Failed to {action} file {file_id}: {e.resp.status} {e.content}", exc_info=config.DEBUG)
        if e.resp.status == 404:
            return APIError(f"File not found (404) with ID: {file_id}", status_code=404, service=self.SERVICE_NAME)
        if e.resp.status == 403:
            logger.warning(f"Permission denied (403) for file {file_id}. Check file access permissions.")
            return APIError(f"Permission denied (403) for file {file_id}.", status_code=403, service=self.SERVICE_NAME)
        return APIError(
            f"Failed to {action} file {file_id}: {e.resp.status}",
            status_code=e.resp.status,
            service=self.SERVICE_NAME
        )

    def _download(self, request: Any) -> bytes:
        fh = io.BytesIO()
        downloader = MediaIoBaseDownload(fh, request)
        done = False
        while not done:
            status, done = downloader.next_chunk()
            if config.DEBUG and status:
                logger.debug(f"Download progress: {int(status.progress() * 100)}%")
        return fh.getvalue()

    def get_file_metadata(self, file_id: str, fields: str = "id, name, mimeType") -> Dict[str, Any]:
        """Gets metadata for a specific file.

        Raises:
            APIError: If the API call fails, including 404 Not Found.
        """
        logger.debug(f"Getting metadata for file ID: {file_id} with fields: {fields}")
        try:
            return self.service.files().get(
                fileId=file_id,
                fields=fields,
                supportsAllDrives=True
            ).execute()
        except HttpError as e:
            raise self._api_error("get metadata for", file_id, e) from e
        except Exception as e:
            logger.error(f"Unexpected error getting metadata for file {file_id}: {e}", exc_info=config.DEBUG)
            raise APIError(f"Unexpected error getting file metadata: {e}", service=self.SERVICE_NAME) from e

    def download_file_content(self, file_id: str) -> Tuple[str, bytes]:
        """Downloads a file, exporting Google Workspace files as PDF.

        Args:
            file_id: The ID of the file.

        Returns:
            A tuple of the content MIME type and the content bytes.

        Raises:
            APIError: If the file is missing, inaccessible or the download fails.
        """
        metadata = self.get_file_metadata(file_id)
        mime_type = metadata.get('mimeType') or PDF_MIME_TYPE
        file_name = metadata.get('name', 'unknown_file')
        logger.debug(f"File '{file_name}' has MIME type: {mime_type}")

        try:
            if mime_type.startswith(GOOGLE_APPS_MIME_PREFIX):
                request = self.service.files().export_media(fileId=file_id, mimeType=PDF_MIME_TYPE)
                mime_type = PDF_MIME_TYPE
            else:
                request = self.service.files().get_media(fileId=file_id, supportsAllDrives=True)
            content = self._download(request)
        except HttpError as e:
            raise self._api_error("download", file_id, e) from e
        except Exception as e:
            logger.error(f"Unexpected error downloading file {file_id}: {e}", exc_info=config.DEBUG)
            raise APIError(f"Unexpected error downloading file {file_id}: {e}", service=self.SERVICE_NAME) from e

        logger.info(f"Downloaded {len(content)} bytes for file '{file_name}' ({file_id}) as {mime_type}.")
        return mime_type, content

    def export_pdf(self, file_id: str) -> bytes:
        """Exports a Google Workspace file (e.g. a Doc) as PDF bytes."""
        logger.debug(f"Exporting file {file_id} as PDF...")
        try:
            return self._download(self.service.files().export_media(fileId=file_id, mimeType=PDF_MIME_TYPE))
        except HttpError as e:
            raise self._api_error("export", file_id, e) from e
        except Exception as e:
            logger.error(f"Unexpected error exporting file {file_id}: {e}", exc_info=config.DEBUG)
            raise APIError(f"Unexpected error exporting file {file_id}: {e}", service=self.SERVICE_NAME) from e

    def trash_file(self, file_id: str) -> None:
        """Moves a file to the trash."""
        logger.debug(f"Trashing file {file_id}...")
        try:
            self.service.files().update(
                fileId=file_id,
                body={'trashed': True},
                supportsAllDrives=True
            ).execute()
        except HttpError as e:
            raise self._api_error("trash", file_id, e) from e
        except Exception as e:
            logger.error(f"Unexpected error trashing file {file_id}: {e}", exc_info=config.DEBUG)
            raise APIError(f"Unexpected error trashing file {file_id}: {e}", service=self.SERVICE_NAME) from e
