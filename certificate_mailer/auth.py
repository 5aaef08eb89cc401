"""Handles OAuth 2.0 authentication for Google APIs."""

import os
from typing import Optional

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from google.auth.exceptions import RefreshError, TransportError

from certificate_mailer import config
from certificate_mailer.utils.logger import get_logger
from certificate_mailer.utils.error_handler import AuthenticationError

logger = get_logger()

def _save_token(creds: Credentials) -> None:
    try:
        with open(config.TOKEN_FILE, "w") as token_file:
            token_file.write(creds.to_json())
        logger.debug(f"Token saved to {config.TOKEN_FILE}")
    except IOError as e:
        logger.warning(f"Failed to save token to {config.TOKEN_FILE}: {e}")

def _discard_token() -> None:
    if os.path.exists(config.TOKEN_FILE):
        os.remove(config.TOKEN_FILE)

def get_credentials() -> Credentials:
    """Gets valid Google API credentials using the OAuth 2.0 flow.

    Checks for a cached token, refreshes it if necessary, or runs the
    authorization flow if no valid token is found.

    Returns:
        Credentials: Valid Google OAuth 2.0 credentials.

    Raises:
        AuthenticationError: If authentication fails or is cancelled.
        FileNotFoundError: If the client secrets file is needed but missing.
    """
    creds: Optional[Credentials] = None

    # --- 1. Check for existing token file ---
    if os.path.exists(config.TOKEN_FILE):
        try:
            creds = Credentials.from_authorized_user_file(config.TOKEN_FILE, config.SCOPES)
            logger.debug(f"Loaded credentials from {config.TOKEN_FILE}")
        except ValueError as e:
            logger.warning(f"Error loading token file {config.TOKEN_FILE}: {e}. Proceeding with re-authentication.")
            creds = None

    # --- 2. Use or refresh cached credentials ---
    if creds and creds.valid:
        logger.info("Credentials are valid. Using cached token.")
        return creds
    if creds and creds.expired and creds.refresh_token:
        logger.info("Credentials expired, attempting refresh...")
        try:
            creds.refresh(Request())
        except (RefreshError, TransportError) as e:
            logger.error(f"Credentials refresh failed: {e}", exc_info=config.DEBUG)
            _discard_token()
            raise AuthenticationError("Failed to refresh token. Please re-authenticate.") from e
        logger.info("Credentials refreshed successfully.")
        _save_token(creds)
        return creds

    # --- 3. Run authorization flow ---
    if creds and creds.expired and not creds.refresh_token:
        logger.warning("Credentials expired and no refresh token available. Need to re-authenticate.")

    if not os.path.exists(config.CLIENT_SECRETS_FILE):
        logger.critical(f"{config.CLIENT_SECRETS_FILE} not found. Cannot initiate OAuth flow.")
        raise FileNotFoundError(f"{config.CLIENT_SECRETS_FILE} not found.")

    logger.info("No valid credentials found. Starting OAuth flow...")
    try:
        flow = InstalledAppFlow.from_client_secrets_file(config.CLIENT_SECRETS_FILE, config.SCOPES)
        logger.info(f"Running local server for OAuth on port {config.OAUTH_PORT}...")
        creds = flow.run_local_server(port=config.OAUTH_PORT)
    except Exception as e:
        logger.error(f"OAuth flow failed unexpectedly: {e}", exc_info=config.DEBUG)
        raise AuthenticationError(f"OAuth flow failed: {e}") from e

    if not creds:
        raise AuthenticationError("OAuth flow completed but no credentials were obtained.")

    logger.info("Authentication successful.")
    _save_token(creds)
    return creds
