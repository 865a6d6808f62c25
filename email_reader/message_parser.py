import base64
from datetime import date, datetime
from email.utils import parsedate_to_datetime

from models.data_models import EmailMessage
from utils.logger import get_logger

logger = get_logger(__name__)


def parse_gmail_message(message: dict) -> EmailMessage:
    """Turn a Gmail API message resource (format="full") into an EmailMessage.

    Extracts:
    - message id, thread id, From, Subject and Date headers
    - HTML body (preferred) and plain-text body
    """
    payload = message.get("payload", {})
    headers = {h["name"].lower(): h["value"] for h in payload.get("headers", [])}

    bodies: dict[str, str] = {}
    _collect_bodies(payload, bodies)

    subject = headers.get("subject", "(no subject)").strip()
    from_address = headers.get("from", "").strip()

    logger.debug(f"Parsed message: subject='{subject}' from='{from_address}'")

    return EmailMessage(
        message_id=message.get("id", ""),
        thread_id=message.get("threadId", ""),
        from_address=from_address,
        subject=subject,
        date=_parse_date(headers.get("date", "")),
        body_html=bodies.get("text/html", ""),
        body_text=bodies.get("text/plain", ""),
    )


def _collect_bodies(part: dict, bodies: dict[str, str]) -> None:
    """Depth-first walk of the MIME tree keeping the first html/plain part."""
    mime_type = part.get("mimeType", "")
    data = part.get("body", {}).get("data")

    if data and mime_type in ("text/html", "text/plain") and mime_type not in bodies:
        bodies[mime_type] = _decode(data)

    for child in part.get("parts", []) or []:
        _collect_bodies(child, bodies)


def _decode(data: str) -> str:
    # Gmail strips the base64url padding
    padded = data + "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(padded).decode("utf-8", errors="replace")


def _parse_date(date_str: str) -> date:
    """Parse the Date header into a Python date.
    Falls back to today if unparseable."""
    if not date_str:
        return datetime.today().date()
    try:
        return parsedate_to_datetime(date_str).date()
    except (TypeError, ValueError):
        return datetime.today().date()
