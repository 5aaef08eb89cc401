"""Main execution script for the Certificate Mailer."""

from dotenv import load_dotenv

# Environment must be loaded before config is imported
load_dotenv()

from certificate_mailer import config, auth
from certificate_mailer.utils.logger import setup_logger
from certificate_mailer.utils.error_handler import AuthenticationError, APIError, ConfigError, DocumentError
from certificate_mailer.utils.throttle import Throttle
from certificate_mailer.services.sheets_api import SheetsService
from certificate_mailer.services.drive_api import DriveService
from certificate_mailer.services.docs_api import DocsService
from certificate_mailer.services.gmail_api import GmailService
from certificate_mailer.core.certificates import CertificateResolver
from certificate_mailer.core.feedback import FeedbackBuilder
from certificate_mailer.core.mailer import CertificateMailer
from certificate_mailer.core.notifier import Notifier
from certificate_mailer.ui import cli

logger = setup_logger()

def main() -> int:
    """Runs one mailing pass over the roster. Returns the process exit code."""
    logger.info("Starting Certificate Mailer run.")
    cli.display_welcome()

    try:
        if not config.ROSTER_SPREADSHEET_ID:
            raise ConfigError("Missing required environment variable: ROSTER_SPREADSHEET_ID")

        # --- Step 1: Authentication ---
        cli.display_step(1, "Authenticating with Google...")
        credentials = auth.get_credentials()
        cli.display_success("Authentication successful.")

        # --- Step 2: Initialize Services ---
        cli.display_step(2, "Initializing API Services...")
        sheets_service = SheetsService(credentials)
        drive_service = DriveService(credentials)
        docs_service = DocsService(credentials)
        gmail_service = GmailService(credentials)

        mailer = CertificateMailer(
            feedback_builder=FeedbackBuilder(docs_service, drive_service),
            certificate_resolver=CertificateResolver(drive_service),
            notifier=Notifier(gmail_service, sender=config.SENDER),
            throttle=Throttle(config.SEND_DELAY_SECONDS),
            stop_on_document_error=config.STOP_ON_DOCUMENT_ERROR,
        )
        cli.display_success("All required services initialized.")

        # --- Step 3: Read Roster ---
        cli.display_step(3, "Reading the roster...")
        records = sheets_service.read_all_rows(config.ROSTER_SPREADSHEET_ID, config.ROSTER_SHEET_NAME)
        if not records:
            cli.display_warning("The roster has no data rows. Nothing to send.")
            return 0

        # --- Step 4: Send ---
        cli.display_step(4, f"Sending emails to {len(records)} roster rows...")
        summary = mailer.run(records)
        cli.display_summary(summary)
        return 0

    except FileNotFoundError as e:
        logger.critical(f"Required file not found: {e}. Please ensure client_secrets.json is present.")
        cli.display_error(f"Missing required file: {e}")
    except (AuthenticationError, ConfigError) as e:
        logger.critical(f"Setup or Authentication Error: {e}", exc_info=config.DEBUG)
        cli.display_error(f"Setup Error: {e}")
    except APIError as e:
        logger.error(f"Google API Error: {e}", exc_info=config.DEBUG)
        cli.display_error(f"API Error ({e.service or 'Unknown'}): {e}")
    except DocumentError as e:
        logger.critical(f"Run stopped on feedback document failure: {e}", exc_info=config.DEBUG)
        cli.display_error(f"Feedback document failed: {e}")
    except KeyboardInterrupt:
        logger.info("Run interrupted by user (Ctrl+C).")
        cli.display_warning("Run interrupted.")
    finally:
        cli.display_farewell()
    return 1

if __name__ == "__main__":
    raise SystemExit(main())
