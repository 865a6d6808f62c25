from dataclasses import dataclass
from datetime import date

NOT_AVAILABLE = "N/A"

# Columns (in order): Merchant | City and Country | Date | Transaction Type | Amount
HEADER_ROW = ["Merchant", "City and Country", "Date", "Transaction Type", "Amount"]


@dataclass
class Label:
    """A Gmail user label. Marks conversations that were already extracted."""
    id: str
    name: str


@dataclass
class EmailMessage:
    """Parsed representation of a Gmail API message."""
    message_id: str
    thread_id: str
    from_address: str
    subject: str
    date: date
    body_html: str
    body_text: str


@dataclass
class Thread:
    """A Gmail conversation. Only its latest message is inspected."""
    thread_id: str
    latest_message: EmailMessage


@dataclass
class ExtractedTransaction:
    """The five fields pulled out of one notification email.

    Text fields default to "N/A" and the amount to 0.00 when their pattern
    does not match. amount_found tells a real 0.00 apart from a missing one.
    """
    merchant: str
    location: str
    date: str             # free text, e.g. "Mar 4, 2025 14:32"
    transaction_type: str
    amount: float
    amount_found: bool = True

    def to_row(self) -> list:
        return [self.merchant, self.location, self.date, self.transaction_type, self.amount]


@dataclass
class Worksheet:
    """The first sheet of the destination spreadsheet."""
    spreadsheet_id: str
    title: str
