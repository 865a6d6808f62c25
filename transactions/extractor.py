import re
from typing import Optional

from models.data_models import NOT_AVAILABLE, ExtractedTransaction
from utils.logger import get_logger

logger = get_logger(__name__)

# Each notification is an HTML table: a label cell ("Comercio", "Fecha:", …)
# followed by a data cell whose value sits in a <p>. Labels with accents show
# up either as HTML entities or as literal characters.
_VALUE_CELL = r"(?:[\s\S]*?)<td[^>]*>[\s\S]*?<p>([\s\S]*?)</p>[\s\S]*?</td>"

MERCHANT_PATTERN = re.compile(r"Comercio" + _VALUE_CELL)
LOCATION_PATTERN = re.compile(r"Ciudad y pa(?:&iacute;|í)s:" + _VALUE_CELL)
DATE_PATTERN = re.compile(r"Fecha:" + _VALUE_CELL)
TRANSACTION_TYPE_PATTERN = re.compile(r"Tipo de Transacci(?:&oacute;|ó)n:" + _VALUE_CELL)

# The amount cell can hold nested markup, so take the whole cell first and
# look for the currency-prefixed number inside it.
AMOUNT_CELL_PATTERN = re.compile(r"Monto\s*:(?:[\s\S]*?)<td[^>]*>([\s\S]*?)</td>")
AMOUNT_NUMBER_PATTERN = re.compile(r"CRC\s*([\d.,]+)")

_PARAGRAPH_TAG = re.compile(r"</?p>")
_LINE_BREAK = re.compile(r"\r?\n")
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def _clean(text: str) -> str:
    return _LINE_BREAK.sub("", _PARAGRAPH_TAG.sub("", text)).strip()


def _extract_field(html: str, pattern: re.Pattern) -> str:
    match = pattern.search(html)
    if match and match.group(1):
        return _clean(match.group(1))
    return NOT_AVAILABLE


def extract_merchant(html: str) -> str:
    return _extract_field(html, MERCHANT_PATTERN)


def extract_location(html: str) -> str:
    """City and country, e.g. "SAN JOSE, Costa Rica"."""
    return _extract_field(html, LOCATION_PATTERN)


def extract_date(html: str) -> str:
    """Transaction date exactly as the bank prints it (not parsed)."""
    return _extract_field(html, DATE_PATTERN)


def extract_transaction_type(html: str) -> str:
    return _extract_field(html, TRANSACTION_TYPE_PATTERN)


def find_amount_text(html: str) -> Optional[str]:
    """Raw numeral from the amount cell, e.g. "1.234,56", or None."""
    cell = AMOUNT_CELL_PATTERN.search(html)
    content = _clean(cell.group(1)) if cell and cell.group(1) else ""
    number = AMOUNT_NUMBER_PATTERN.search(content)
    return number.group(1).strip() if number else None


def normalize_amount(raw: str) -> Optional[float]:
    """Convert "1.234,56" (dot thousands, comma decimals) to 1234.56.

    Only the leading number counts, so trailing separators are ignored
    ("5.000,00," gives 5000.0). Returns None when there is no number at all.
    """
    standard = raw.replace(".", "").replace(",", ".")
    number = _LEADING_NUMBER.match(standard)
    if not number:
        return None
    return float(number.group(0))


def extract_amount(html: str) -> tuple[float, bool]:
    """Return (amount, found). A missing or unreadable amount is (0.0, False)."""
    raw = find_amount_text(html)
    amount = normalize_amount(raw) if raw else None
    if amount is None:
        return 0.0, False
    return amount, True


def extract_transaction(html: str) -> ExtractedTransaction:
    """Pull all five fields out of a notification body.

    Never raises: each field falls back to its default on its own, so one
    missing field does not affect the others.
    """
    amount, amount_found = extract_amount(html)
    return ExtractedTransaction(
        merchant=extract_merchant(html),
        location=extract_location(html),
        date=extract_date(html),
        transaction_type=extract_transaction_type(html),
        amount=amount,
        amount_found=amount_found,
    )
