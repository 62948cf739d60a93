"""
Logging configuration.

Installs one stdout handler on the root logger. Calling it again replaces
the handler instead of stacking a second one.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Provider SDKs and the database driver log every request at INFO/DEBUG
NOISY_LOGGERS = ("botocore", "boto3", "urllib3", "httpx", "openai", "aiosqlite", "asyncpg")


def configure_logging(level: str | int = "INFO") -> None:
    """
    Configure the root logger for the ingestion and retrieval services.

    Args:
        level: Root level, as a name (``"debug"`` is accepted) or a number
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(handler)
    root_logger.setLevel(level.upper() if isinstance(level, str) else level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
