"""
Logging Configuration

Console logging goes to stderr so stdout stays clean for the JSON draft.
An optional log file keeps a timestamped record of an import run.
"""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "vendor_onboarding"

# HTTP and SDK loggers that are noisy at INFO
THIRD_PARTY_LOGGERS = ("urllib3", "httpx", "google_genai")

CONSOLE_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the importer.

    Args:
        verbose: If True, set level to DEBUG (third-party loggers included)
        quiet: If True, set level to WARNING
        log_file: Also append records to this file at the same level
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
