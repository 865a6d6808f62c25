from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from google_services.retry import execute
from models.data_models import Worksheet
from utils.logger import get_logger

logger = get_logger(__name__)

LAST_COLUMN = "E"


def _a1_range(sheet_title: str) -> str:
    """Range like 'My Sheet'!A:E. Quotes inside the title are doubled."""
    escaped = sheet_title.replace("'", "''")
    return f"'{escaped}'!A:{LAST_COLUMN}"


class SheetsClient:
    """Creates spreadsheets and appends rows to them."""

    def __init__(self, credentials: Credentials):
        self.service = build("sheets", "v4", credentials=credentials)

    def create_spreadsheet(self, title: str) -> str:
        """Create a spreadsheet and return its id.

        Google places new spreadsheets in the root of "My Drive"; moving it
        elsewhere is the Drive client's job.
        """
        spreadsheet = execute(self.service.spreadsheets().create(
            body={"properties": {"title": title}},
            fields="spreadsheetId",
        ))
        logger.info(f"Spreadsheet '{title}' created ({spreadsheet['spreadsheetId']})")
        return spreadsheet["spreadsheetId"]

    def sheet_titles(self, spreadsheet_id: str) -> list[str]:
        """Sheet (tab) titles in display order."""
        spreadsheet = execute(self.service.spreadsheets().get(
            spreadsheetId=spreadsheet_id,
            fields="sheets.properties(title,index)",
        ))
        sheets = sorted(
            spreadsheet.get("sheets", []),
            key=lambda s: s["properties"].get("index", 0),
        )
        return [s["properties"]["title"] for s in sheets]

    def add_sheet(self, spreadsheet_id: str, title: str) -> Worksheet:
        execute(self.service.spreadsheets().batchUpdate(
            spreadsheetId=spreadsheet_id,
            body={"requests": [{"addSheet": {"properties": {"title": title}}}]},
        ))
        logger.info(f"Sheet '{title}' added")
        return Worksheet(spreadsheet_id=spreadsheet_id, title=title)

    def last_row_index(self, worksheet: Worksheet) -> int:
        """1-based index of the last row with data; 0 for an empty sheet."""
        response = execute(self.service.spreadsheets().values().get(
            spreadsheetId=worksheet.spreadsheet_id,
            range=_a1_range(worksheet.title),
        ))
        return len(response.get("values", []))

    def append_row(self, worksheet: Worksheet, values: list) -> None:
        """Add one row to the bottom of the sheet."""
        execute(self.service.spreadsheets().values().append(
            spreadsheetId=worksheet.spreadsheet_id,
            range=_a1_range(worksheet.title),
            valueInputOption="USER_ENTERED",
            insertDataOption="INSERT_ROWS",
            body={"values": [values]},
        ))
