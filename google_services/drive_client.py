from typing import Optional

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from google_services.retry import execute
from utils.logger import get_logger

logger = get_logger(__name__)

ROOT_FOLDER_ID = "root"   # Drive alias for "My Drive"
FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
SPREADSHEET_MIME_TYPE = "application/vnd.google-apps.spreadsheet"


def _quote(value: str) -> str:
    """Escape a string for use inside a Drive `q` expression."""
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


class DriveClient:
    """Finds, creates and moves folders and files in Google Drive."""

    def __init__(self, credentials: Credentials):
        self.service = build("drive", "v3", credentials=credentials)

    def _list(self, parent_id: str, name: str, mime_type: str) -> list[dict]:
        query = (
            f"{_quote(parent_id)} in parents and name = {_quote(name)} "
            f"and mimeType = {_quote(mime_type)} and trashed = false"
        )
        files: list[dict] = []
        page_token = None
        while True:
            response = execute(self.service.files().list(
                q=query,
                spaces="drive",
                fields="nextPageToken, files(id, name, parents)",
                pageToken=page_token,
            ))
            files.extend(response.get("files", []))
            page_token = response.get("nextPageToken")
            if not page_token:
                return files

    def find_folder(self, parent_id: str, name: str) -> Optional[str]:
        """Return the id of the child folder called `name`, or None."""
        folders = self._list(parent_id, name, FOLDER_MIME_TYPE)
        return folders[0]["id"] if folders else None

    def create_folder(self, parent_id: str, name: str) -> str:
        folder = execute(self.service.files().create(
            body={"name": name, "mimeType": FOLDER_MIME_TYPE, "parents": [parent_id]},
            fields="id",
        ))
        logger.info(f"Folder '{name}' created ({folder['id']})")
        return folder["id"]

    def find_spreadsheets(self, folder_id: str, name: str) -> list[str]:
        """Ids of the spreadsheets called `name` directly inside `folder_id`."""
        return [f["id"] for f in self._list(folder_id, name, SPREADSHEET_MIME_TYPE)]

    def move_file(self, file_id: str, folder_id: str) -> None:
        """Detach the file from its current folders and put it in `folder_id`."""
        current = execute(self.service.files().get(fileId=file_id, fields="parents"))
        previous_parents = ",".join(current.get("parents", []))

        execute(self.service.files().update(
            fileId=file_id,
            addParents=folder_id,
            removeParents=previous_parents,
            fields="id, parents",
        ))
        logger.debug(f"Moved file {file_id} into folder {folder_id}")
