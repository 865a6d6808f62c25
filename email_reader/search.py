from config import PipelineConfig
from google_services.gmail_client import GmailClient
from models.data_models import Label, Thread
from transactions.date_range import DateRange, format_query_date
from utils.logger import get_logger

logger = get_logger(__name__)


def label_search_term(label_name: str) -> str:
    """Gmail's search syntax writes spaces and slashes in label names as "-"."""
    return label_name.replace(" ", "-").replace("/", "-")


def build_search_query(sender_address: str, date_range: DateRange, label_name: str) -> str:
    """e.g. from:bank@example.com after:2025/02/01 before:2025/03/01 -label:Done"""
    return (
        f"from:{sender_address} "
        f"after:{format_query_date(date_range.start)} "
        f"before:{format_query_date(date_range.end)} "
        f"-label:{label_search_term(label_name)}"
    )


def find_unprocessed_threads(
    gmail: GmailClient,
    config: PipelineConfig,
    date_range: DateRange,
    label: Label,
) -> list[Thread]:
    """Conversations from the configured sender inside `date_range` that do
    not carry `label` yet. Order is whatever Gmail returns."""
    query = build_search_query(config.sender_address, date_range, label.name)
    logger.info(f"Searching Gmail with query: \"{query}\"")

    threads = gmail.search_threads(query)
    logger.info(
        f"Found {len(threads)} unprocessed thread(s) from '{config.sender_address}' "
        f"between {format_query_date(date_range.start)} and {format_query_date(date_range.end)}"
    )
    return threads
