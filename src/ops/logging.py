"""
Logging setup.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable

# Request lines from these loggers carry the provider api_key in the query string.
HTTP_CLIENT_LOGGERS = ("httpx", "httpcore")


def setup_logging(
    log_path: str,
    log_level: str,
    quiet_loggers: Iterable[str] = HTTP_CLIENT_LOGGERS,
) -> None:
    """
    Configure root logging to a file and stderr.

    Loggers named in `quiet_loggers` are capped at WARNING regardless of
    `log_level`.
    """
    log_dir = os.path.dirname(log_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.FileHandler(log_path),
            logging.StreamHandler(),
        ],
    )
    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)
