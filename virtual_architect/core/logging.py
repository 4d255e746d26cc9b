"""
Logging setup shared by the API server and the terminal session.

Every module logs through ``logging.getLogger(__name__)``; this only decides
where records go and how loud the third-party HTTP and SDK loggers are.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Per-request INFO/DEBUG chatter from these drowns out session output.
_NOISY_LOGGERS = ("httpx", "httpcore", "google", "urllib3")


def configure_logging(level: str = "INFO") -> None:
    """Route records to stdout at ``level``; noisy libraries stay at WARNING or above."""
    root_level = logging.getLevelName(level.upper())
    if not isinstance(root_level, int):
        root_level = logging.INFO
    logging.basicConfig(level=root_level, format=LOG_FORMAT, stream=sys.stdout)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, root_level))


__all__ = ["LOG_FORMAT", "configure_logging"]
