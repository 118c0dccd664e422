"""
Logging configuration.

Standard library logging; modules obtain loggers with logging.getLogger(__name__).
"""

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger.

    Should be called once at application startup.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...).
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, datefmt="%H:%M:%S")
    logging.getLogger().setLevel(level.upper())

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def mask_url(url: str) -> str:
    """Hide the password part of a database URL for log output."""
    if "://" not in url or "@" not in url:
        return url
    scheme, rest = url.split("://", 1)
    credentials, host = rest.rsplit("@", 1)
    user = credentials.split(":", 1)[0]
    return f"{scheme}://{user}:***@{host}"
