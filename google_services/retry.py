import logging

from googleapiclient.errors import HttpError
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from utils.logger import get_logger

logger = get_logger(__name__)

TRANSIENT_STATUS_CODES = {429, 500, 502, 503, 504}

# A POST that fails with a 5xx may still have been committed; sending it
# again would duplicate the folder, spreadsheet or row.
IDEMPOTENT_METHODS = {"GET", "PUT", "PATCH", "DELETE"}


def is_transient(error: BaseException) -> bool:
    """Rate limits and server-side hiccups are worth another try; anything
    else (bad request, permission denied, not found) is not."""
    if not isinstance(error, HttpError):
        return False
    return error.resp.status in TRANSIENT_STATUS_CODES


@retry(
    retry=retry_if_exception(is_transient),
    stop=stop_after_attempt(5),
    wait=wait_exponential(multiplier=2, min=4, max=60),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
def _execute_with_retry(request):
    return request.execute()


def execute(request):
    """Run a googleapiclient request.

    Reads and other idempotent calls back off on transient errors; writes
    that create something are sent once.
    """
    if request.method in IDEMPOTENT_METHODS:
        return _execute_with_retry(request)
    return request.execute()
