# src/pnl_cards/utils/log_config.py

import sys

from loguru import logger as log

LOG_FORMAT = (
    "<dim>{time:YYYY-MM-DDTHH:mm:ss.SSSZ}</dim> "
    "<level>{level: <8}</level> "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO") -> int:
    """Replaces loguru's default sink with a single stderr sink at `level`."""
    log.remove()
    return log.add(sys.stderr, level=level.upper(), format=LOG_FORMAT, backtrace=False, diagnose=False)
