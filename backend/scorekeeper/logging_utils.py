import logging
from typing import Optional

from .config import LOG_LEVEL, _canon_log_level

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once, using ``SCOREKEEPER_LOG_LEVEL`` by default.

    An explicit ``level`` is normalised the same way as the environment
    value; unknown names fall back to the default level.
    """
    resolved = LOG_LEVEL if level is None else _canon_log_level(level)
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
