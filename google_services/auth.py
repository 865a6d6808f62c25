from pathlib import Path

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from utils.logger import get_logger

logger = get_logger(__name__)

# Gmail (search + labels), Drive (find/create folders, move the sheet file),
# Sheets (create spreadsheet, append rows).
# Full "drive" is needed because the target folders may have been created by
# hand; drive.file only sees files this app created.
SCOPES = [
    "https://www.googleapis.com/auth/gmail.modify",
    "https://www.googleapis.com/auth/drive",
    "https://www.googleapis.com/auth/spreadsheets",
]


def get_credentials(credentials_path: str, token_path: str) -> Credentials:
    """Load saved Google credentials, refreshing or re-authorising as needed.

    First run:
        Opens a browser window to log in and grant access, then saves the
        token so the monthly job can run unattended afterwards.

    Subsequent runs:
        Reads the saved token and refreshes it when expired.

    Args:
        credentials_path: OAuth client file downloaded from Google Cloud Console.
        token_path:       Where the authorised user token is stored.
    """
    creds = None
    token_file = Path(token_path)

    if token_file.exists():
        creds = Credentials.from_authorized_user_file(str(token_file), SCOPES)

    if not creds or not creds.valid:
        if creds and creds.expired and creds.refresh_token:
            logger.info("Refreshing expired Google token…")
            creds.refresh(Request())
        else:
            logger.info("Opening browser for Google authorisation…")
            flow = InstalledAppFlow.from_client_secrets_file(
                credentials_path, SCOPES
            )
            creds = flow.run_local_server(port=0)

        token_file.parent.mkdir(parents=True, exist_ok=True)
        token_file.write_text(creds.to_json())
        logger.info(f"Google token saved to {token_file}")

    return creds
