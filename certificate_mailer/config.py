"""Configuration settings for the Certificate Mailer."""

import os
import logging
from typing import Final, List, Optional


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


# Debug flag: 1 = debug mode (verbose logging, tracebacks), 0 = production mode
DEBUG: Final[int] = int(os.environ.get("MAILER_DEBUG", "0"))

# --- Google API Settings ---

# Scopes required for Google APIs
# Ensure these match the scopes requested during the OAuth flow and enabled in GCP.
SCOPES: Final[List[str]] = [
    "https://www.googleapis.com/auth/spreadsheets.readonly",
    "https://www.googleapis.com/auth/documents", # Create the temporary feedback doc
    "https://www.googleapis.com/auth/drive", # Read certificates, export and trash the feedback doc
    "https://www.googleapis.com/auth/gmail.send",
]

# --- File Paths ---
CLIENT_SECRETS_FILE: Final[str] = os.environ.get("CLIENT_SECRETS_PATH", "client_secrets.json")
# Token file lives next to the secrets file, or in the working directory
_token_dir = os.path.dirname(CLIENT_SECRETS_FILE) if os.path.dirname(CLIENT_SECRETS_FILE) else '.'
TOKEN_FILE: Final[str] = os.path.join(_token_dir, "token.json")
OAUTH_PORT: Final[int] = int(os.environ.get("OAUTH_PORT", "8081"))
# Empty string disables file logging
LOG_FILE: Final[str] = os.environ.get("MAILER_LOG_FILE", os.path.join("logs", "certificate_mailer.log"))

# --- Roster Settings ---

ROSTER_SPREADSHEET_ID: Final[Optional[str]] = os.environ.get("ROSTER_SPREADSHEET_ID")
# None means the first sheet in the spreadsheet
ROSTER_SHEET_NAME: Final[Optional[str]] = os.environ.get("ROSTER_SHEET_NAME") or None

# --- Application Settings ---

# Pause between recipients, keeps us under the Gmail/Docs quotas
SEND_DELAY_SECONDS: Final[float] = float(os.environ.get("MAILER_SEND_DELAY", "1.0"))
SENDER: Final[str] = os.environ.get("MAILER_SENDER", "me")
FEEDBACK_DATE: Final[str] = os.environ.get("FEEDBACK_DATE", "July 27, 2025")
# When set, a failure while building one feedback document ends the whole run
STOP_ON_DOCUMENT_ERROR: Final[bool] = _env_flag("MAILER_STOP_ON_DOCUMENT_ERROR")

# --- Logging Configuration ---
LOG_LEVEL = logging.DEBUG if DEBUG else logging.INFO
# Structured log format: timestamp, level, logger, module.function:line, message
LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(module)s.%(funcName)s:%(lineno)d | %(message)s'
