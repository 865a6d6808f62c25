"""
Monthly transaction extractor — entry point.

Meant to be scheduled on the 1st of every month (cron, Task Scheduler, …).
Reads last month's card notification emails from Gmail, extracts the
transaction details and appends them to a Google Sheet in Drive:
search → resolve spreadsheet → extract → append row → label email.

Emails already labelled as processed are skipped, so re-running is safe.
"""

from config import load_settings
from google_services.auth import get_credentials
from google_services.drive_client import DriveClient
from google_services.gmail_client import GmailClient
from google_services.sheets_client import SheetsClient
from transactions.pipeline import TransactionPipeline
from utils.logger import get_logger, setup_logging


def main() -> None:
    # ── 1. Load config from .env ─────────────────────────────────────────────
    settings = load_settings()
    setup_logging(log_level=settings.log_level, log_file=settings.log_file or "")
    logger = get_logger(__name__)
    logger.info("Monthly transaction extractor starting…")

    # ── 2. Authenticate with Google (opens browser on first run) ─────────────
    try:
        credentials = get_credentials(
            credentials_path=settings.google_credentials_file,
            token_path=settings.google_token_file,
        )
    except Exception as e:
        logger.error(f"Could not load Google credentials: {e}", exc_info=True)
        return

    # ── 3. Build Google service clients ──────────────────────────────────────
    pipeline = TransactionPipeline(
        gmail=GmailClient(credentials=credentials),
        drive=DriveClient(credentials=credentials),
        sheets=SheetsClient(credentials=credentials),
        config=settings.pipeline,
    )

    # ── 4. Run ───────────────────────────────────────────────────────────────
    written = pipeline.run_safely()
    logger.info(f"Done. Transactions written: {written}")


if __name__ == "__main__":
    main()
