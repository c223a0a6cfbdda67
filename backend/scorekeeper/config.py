import logging
import os

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
DEFAULT_LOG_LEVEL = "WARNING"


def _canon_log_level(val):
    """
    Normalize a log level name:
      - defaults to 'WARNING' when unset/empty
      - upper-cases and strips surrounding whitespace
      - falls back to the default for unknown names
    """
    val = (val or DEFAULT_LOG_LEVEL).strip().upper()
    if val not in _LOG_LEVELS:
        logger.warning(
            "SCOREKEEPER_LOG_LEVEL %r is not a valid level; defaulting to %s",
            val,
            DEFAULT_LOG_LEVEL,
        )
        return DEFAULT_LOG_LEVEL
    return val

LOG_LEVEL = _canon_log_level(os.getenv("SCOREKEEPER_LOG_LEVEL"))

# Match format is fixed: best of three, advantage games, 7 point tiebreak at 6-6.
SETS_IN_MATCH = 3
SETS_TO_WIN = 2
GAMES_TO_WIN_SET = 6
TIEBREAK_POINTS_TO_WIN = 7
WIN_MARGIN = 2
