import itertools
from datetime import date
from typing import Optional

import pytest

from config import PipelineConfig
from google_services.drive_client import FOLDER_MIME_TYPE, ROOT_FOLDER_ID, SPREADSHEET_MIME_TYPE
from models.data_models import EmailMessage, Label, Thread, Worksheet


def notification_html(
    merchant: Optional[str] = "Tienda XYZ",
    location: Optional[str] = "SAN JOSE, Costa Rica",
    when: Optional[str] = "Feb 14, 2025, 19:02",
    transaction_type: Optional[str] = "COMPRA",
    amount_cell: Optional[str] = "<p>CRC 1.234,56</p>",
    entities: bool = True,
) -> str:
    """A bank notification body shaped like the real ones. Pass None to leave a row out."""
    pais = "pa&iacute;s" if entities else "país"
    transaccion = "Transacci&oacute;n" if entities else "Transacción"
    rows = []
    if merchant is not None:
        rows.append(f'<tr><td class="label"><p>Comercio:</p></td>\n<td class="value"><p>{merchant}</p></td></tr>')
    if location is not None:
        rows.append(f'<tr><td class="label"><p>Ciudad y {pais}:</p></td>\n<td class="value"><p>{location}</p></td></tr>')
    if when is not None:
        rows.append(f'<tr><td class="label"><p>Fecha:</p></td>\n<td class="value"><p>{when}</p></td></tr>')
    if transaction_type is not None:
        rows.append(f'<tr><td class="label"><p>Tipo de {transaccion}:</p></td>\n<td class="value"><p>{transaction_type}</p></td></tr>')
    if amount_cell is not None:
        rows.append(f'<tr><td class="label"><p>Monto:</p></td>\n<td class="value">{amount_cell}</td></tr>')
    return "<html><body><table>\n" + "\n".join(rows) + "\n</table></body></html>"


def make_thread(thread_id: str, body_html: str, subject: str = "Notificación de transacción") -> Thread:
    return Thread(
        thread_id=thread_id,
        latest_message=EmailMessage(
            message_id=f"msg-{thread_id}",
            thread_id=thread_id,
            from_address="notificacion@notificacionesbaccr.com",
            subject=subject,
            date=date(2025, 2, 14),
            body_html=body_html,
            body_text="",
        ),
    )


class FakeGmail:
    """In-memory stand-in for GmailClient. Honours -label: in queries."""

    def __init__(self, threads: Optional[list[Thread]] = None):
        self.labels: dict[str, Label] = {}
        self.threads = list(threads or [])
        self.thread_labels: dict[str, set[str]] = {t.thread_id: set() for t in self.threads}
        self.queries: list[str] = []
        self.labels_created = 0

    def ensure_label(self, name: str) -> Label:
        if name not in self.labels:
            self.labels[name] = Label(id=f"Label_{len(self.labels) + 1}", name=name)
            self.labels_created += 1
        return self.labels[name]

    def search_threads(self, query: str) -> list[Thread]:
        self.queries.append(query)
        excluded = {
            label.id for label in self.labels.values()
            if f"-label:{label.name.replace(' ', '-').replace('/', '-')}" in query
        }
        return [t for t in self.threads if not self.thread_labels[t.thread_id] & excluded]

    def add_label(self, thread: Thread, label: Label) -> None:
        self.thread_labels[thread.thread_id].add(label.id)


class FakeDrive:
    """In-memory stand-in for DriveClient."""

    def __init__(self):
        self._ids = itertools.count(1)
        # id -> {"name", "mimeType", "parents"}
        self.files: dict[str, dict] = {}

    def new_id(self, prefix: str) -> str:
        return f"{prefix}{next(self._ids)}"

    def _children(self, parent_id: str, name: str, mime_type: str) -> list[str]:
        return [
            file_id for file_id, f in self.files.items()
            if parent_id in f["parents"] and f["name"] == name and f["mimeType"] == mime_type
        ]

    def find_folder(self, parent_id: str, name: str) -> Optional[str]:
        matches = self._children(parent_id, name, FOLDER_MIME_TYPE)
        return matches[0] if matches else None

    def create_folder(self, parent_id: str, name: str) -> str:
        folder_id = self.new_id("folder-")
        self.files[folder_id] = {"name": name, "mimeType": FOLDER_MIME_TYPE, "parents": [parent_id]}
        return folder_id

    def find_spreadsheets(self, folder_id: str, name: str) -> list[str]:
        return self._children(folder_id, name, SPREADSHEET_MIME_TYPE)

    def move_file(self, file_id: str, folder_id: str) -> None:
        self.files[file_id]["parents"] = [folder_id]

    def folders(self) -> list[dict]:
        return [f for f in self.files.values() if f["mimeType"] == FOLDER_MIME_TYPE]

    def spreadsheets(self) -> list[dict]:
        return [f for f in self.files.values() if f["mimeType"] == SPREADSHEET_MIME_TYPE]


class FakeSheets:
    """In-memory stand-in for SheetsClient. New spreadsheets land in the Drive root."""

    def __init__(self, drive: FakeDrive):
        self.drive = drive
        # spreadsheet id -> {sheet title -> rows}, insertion ordered
        self.books: dict[str, dict[str, list[list]]] = {}

    def create_spreadsheet(self, title: str) -> str:
        spreadsheet_id = self.drive.new_id("sheet-")
        self.drive.files[spreadsheet_id] = {
            "name": title, "mimeType": SPREADSHEET_MIME_TYPE, "parents": [ROOT_FOLDER_ID],
        }
        self.books[spreadsheet_id] = {"Sheet1": []}
        return spreadsheet_id

    def sheet_titles(self, spreadsheet_id: str) -> list[str]:
        return list(self.books[spreadsheet_id])

    def add_sheet(self, spreadsheet_id: str, title: str) -> Worksheet:
        self.books[spreadsheet_id][title] = []
        return Worksheet(spreadsheet_id=spreadsheet_id, title=title)

    def last_row_index(self, worksheet: Worksheet) -> int:
        return len(self.books[worksheet.spreadsheet_id][worksheet.title])

    def append_row(self, worksheet: Worksheet, values: list) -> None:
        self.books[worksheet.spreadsheet_id][worksheet.title].append(list(values))

    def rows(self, spreadsheet_id: str, title: str = "Sheet1") -> list[list]:
        return self.books[spreadsheet_id][title]


@pytest.fixture
def pipeline_config() -> PipelineConfig:
    return PipelineConfig(
        sender_address="notificacion@notificacionesbaccr.com",
        spreadsheet_name="Finanzas",
        label_name="Finanzas_Procesado",
        folder_path=["Proyectos Personales", "Finanzas Personales"],
    )


@pytest.fixture
def drive() -> FakeDrive:
    return FakeDrive()


@pytest.fixture
def sheets(drive: FakeDrive) -> FakeSheets:
    return FakeSheets(drive)
