import json
from datetime import date
from typing import Optional

from config import PipelineConfig
from email_reader.search import find_unprocessed_threads
from google_services.drive_client import DriveClient
from google_services.gmail_client import GmailClient
from google_services.sheets_client import SheetsClient
from transactions.date_range import previous_month_range
from transactions.destination import DestinationError, DestinationResolver
from transactions.extractor import extract_transaction
from utils.logger import get_logger

logger = get_logger(__name__)


class TransactionPipeline:
    """Runs one monthly extraction:

    1. Work out last month's date range
    2. Make sure the "processed" label exists
    3. Find unlabelled notification threads from the sender
    4. Find or create the destination spreadsheet
    5. For each thread: extract fields, append a row, label the thread
    """

    def __init__(
        self,
        gmail: GmailClient,
        drive: DriveClient,
        sheets: SheetsClient,
        config: PipelineConfig,
    ):
        self.gmail = gmail
        self.sheets = sheets
        self.config = config
        self.destination = DestinationResolver(drive=drive, sheets=sheets)

    def run(self, today: Optional[date] = None) -> int:
        """Process last month's notifications. Returns the number of rows written.

        Raises whatever the Gmail/Sheets clients raise while searching or
        writing; a destination failure is logged and ends the run with 0.
        """
        date_range = previous_month_range(today)
        label = self.gmail.ensure_label(self.config.label_name)

        threads = find_unprocessed_threads(self.gmail, self.config, date_range, label)
        if not threads:
            logger.info("No new notification emails for this period")
            return 0

        try:
            worksheet = self.destination.resolve(
                self.config.folder_path, self.config.spreadsheet_name
            )
        except DestinationError as e:
            logger.error(f"Destination unavailable — nothing written: {e}")
            return 0

        written = 0
        for thread in threads:
            message = thread.latest_message
            transaction = extract_transaction(message.body_html)
            if not transaction.amount_found:
                logger.warning(
                    f"No amount found in '{message.subject}' — writing 0.00"
                )

            row = transaction.to_row()
            self.sheets.append_row(worksheet, row)
            self.gmail.add_label(thread, label)
            written += 1

            logger.info(
                f"Logged (Subject: {message.subject}) → "
                f"{json.dumps(row, ensure_ascii=False)}"
            )

        logger.info(f"Wrote {written} row(s) to sheet '{worksheet.title}'")
        return written

    def run_safely(self, today: Optional[date] = None) -> int:
        """Entry point for the scheduler: never raises."""
        try:
            return self.run(today)
        except Exception as e:
            logger.error(f"Unhandled error during monthly run: {e}", exc_info=True)
            return 0
