import logging
import os
import sys


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Usage in any module:
        from utils.logger import get_logger
        logger = get_logger(__name__)
        logger.info("Found 3 unprocessed thread(s)")
    """
    return logging.getLogger(name)


def setup_logging(log_level: str = "INFO", log_file: str = "") -> None:
    """Call once at startup from main.py to configure logging globally.

    The scheduled run has no console attached, so pass log_file to keep a
    record of each month's run next to stdout.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    for h in handlers:
        h.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    # googleapiclient warns about its discovery cache on every build()
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)
