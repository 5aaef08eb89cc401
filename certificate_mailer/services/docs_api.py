"""Wrapper for Google Docs API interactions."""

from typing import Any, Dict, List

from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError
from google.oauth2.credentials import Credentials

from certificate_mailer import config
from certificate_mailer.utils.logger import get_logger
from certificate_mailer.utils.error_handler import APIError
from certificate_mailer.api_clients import build_service

logger = get_logger()

class DocsService:
    """Provides methods to create and edit Google Documents."""

    SERVICE_NAME = 'docs'
    VERSION = 'v1'

    def __init__(self, credentials: Credentials):
        """Initializes the DocsService.

        Args:
            credentials: Valid Google OAuth 2.0 credentials.

        Raises:
            AuthenticationError: If credentials are invalid.
            APIError: If the Docs service cannot be built.
        """
        logger.debug("Initializing DocsService...")
        self.service: Resource = build_service(self.SERVICE_NAME, self.VERSION, credentials)
        logger.debug("DocsService initialized successfully.")

    def create_document(self, title: str) -> str:
        """Creates an empty Google Document and returns its ID."""
        logger.debug(f"Creating document '{title}'...")
        try:
            document = self.service.documents().create(body={'title': title}).execute()
        except HttpError as e:
            logger.error(f"Failed to create document '{title}': {e.resp.status} {e.content}", exc_info=config.DEBUG)
            raise APIError(
                f"Failed to create document '{title}': {e.resp.status}",
                status_code=e.resp.status, service=self.SERVICE_NAME
            ) from e
        except Exception as e:
            logger.error(f"Unexpected error creating document '{title}': {e}", exc_info=config.DEBUG)
            raise APIError(f"Unexpected error creating document: {e}", service=self.SERVICE_NAME) from e

        document_id = document['documentId']
        logger.debug(f"Created document '{title}' with ID: {document_id}")
        return document_id

    def get_document(self, document_id: str) -> Dict[str, Any]:
        """Retrieves the full document resource, including body structure and indices."""
        try:
            return self.service.documents().get(documentId=document_id).execute()
        except HttpError as e:
            logger.error(f"Failed to get document {document_id}: {e.resp.status} {e.content}", exc_info=config.DEBUG)
            if e.resp.status == 404:
                raise APIError(
                    f"Google Document not found (404) with ID: {document_id}",
                    status_code=404, service=self.SERVICE_NAME
                ) from e
            raise APIError(
                f"Failed to get document {document_id}: {e.resp.status}",
                status_code=e.resp.status, service=self.SERVICE_NAME
            ) from e
        except Exception as e:
            logger.error(f"Unexpected error getting document {document_id}: {e}", exc_info=config.DEBUG)
            raise APIError(f"Unexpected error getting document {document_id}: {e}", service=self.SERVICE_NAME) from e

    def batch_update(self, document_id: str, requests: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Applies a list of Docs API update requests in one call."""
        if not requests:
            return {}
        logger.debug(f"Applying {len(requests)} update requests to document {document_id}")
        try:
            return self.service.documents().batchUpdate(
                documentId=document_id,
                body={'requests': requests}
            ).execute()
        except HttpError as e:
            logger.error(f"Failed to update document {document_id}: {e.resp.status} {e.content}", exc_info=config.DEBUG)
            raise APIError(
                f"Failed to update document {document_id}: {e.resp.status}",
                status_code=e.resp.status, service=self.SERVICE_NAME
            ) from e
        except Exception as e:
            logger.error(f"Unexpected error updating document {document_id}: {e}", exc_info=config.DEBUG)
            raise APIError(f"Unexpected error updating document {document_id}: {e}", service=self.SERVICE_NAME) from e
