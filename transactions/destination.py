from google_services.drive_client import ROOT_FOLDER_ID, DriveClient
from google_services.sheets_client import SheetsClient
from models.data_models import HEADER_ROW, Worksheet
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SHEET_TITLE = "Transacciones"


class DestinationError(Exception):
    """The target folder, spreadsheet or sheet could not be found or created."""


class DestinationResolver:
    """Finds (or builds) the spreadsheet that rows are appended to:

    1. Walk the folder path from "My Drive", creating missing folders
    2. Open the spreadsheet inside the last folder, or create and move it there
    3. Pick the first sheet, adding one if the spreadsheet has none
    4. Write the header row on an empty sheet
    """

    def __init__(self, drive: DriveClient, sheets: SheetsClient):
        self.drive = drive
        self.sheets = sheets

    def resolve(self, folder_path: list[str], spreadsheet_name: str) -> Worksheet:
        try:
            folder_id = self.ensure_folder_path(folder_path)
            spreadsheet_id = self.ensure_file_in_container(spreadsheet_name, folder_id)
            worksheet = self._first_sheet(spreadsheet_id)
            self._ensure_header(worksheet)
        except Exception as e:
            raise DestinationError(
                f"Could not prepare spreadsheet '{spreadsheet_name}' in "
                f"'{'/'.join(folder_path)}': {e}"
            ) from e
        return worksheet

    def ensure_folder_path(self, folder_path: list[str]) -> str:
        """Return the id of the last folder in the path, creating any that are missing."""
        current = ROOT_FOLDER_ID
        for name in folder_path:
            child = self.drive.find_folder(current, name)
            if child is None:
                child = self.drive.create_folder(current, name)
            current = child
        logger.info(f"Destination folder: 'My Drive/{'/'.join(folder_path)}' ({current})")
        return current

    def ensure_file_in_container(self, name: str, folder_id: str) -> str:
        """Return the id of spreadsheet `name` inside `folder_id`.

        New spreadsheets are always created in the Drive root, so a missing
        one is created first and then moved into the folder.
        """
        existing = self.drive.find_spreadsheets(folder_id, name)
        if existing:
            logger.info(f"Spreadsheet '{name}' found ({existing[0]})")
            return existing[0]

        logger.info(f"Spreadsheet '{name}' not found in destination folder, creating it…")
        spreadsheet_id = self.sheets.create_spreadsheet(name)
        self.drive.move_file(spreadsheet_id, folder_id)
        logger.info(f"Spreadsheet '{name}' moved into destination folder")
        return spreadsheet_id

    def _first_sheet(self, spreadsheet_id: str) -> Worksheet:
        titles = self.sheets.sheet_titles(spreadsheet_id)
        if titles:
            return Worksheet(spreadsheet_id=spreadsheet_id, title=titles[0])
        return self.sheets.add_sheet(spreadsheet_id, DEFAULT_SHEET_TITLE)

    def _ensure_header(self, worksheet: Worksheet) -> None:
        if self.sheets.last_row_index(worksheet) == 0:
            self.sheets.append_row(worksheet, HEADER_ROW)
            logger.info(f"Header row written to sheet '{worksheet.title}'")
