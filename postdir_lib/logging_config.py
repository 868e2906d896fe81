from __future__ import annotations
import logging
from typing import Optional

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s]: %(message)s'


def configure_logging(log_level: Optional[str] = None) -> logging.Logger:
    """Configure root logging for the application.

    `log_level` is the level name from the server config; unknown or
    missing names fall back to WARNING. Returns a module logger for the
    caller.
    """
    DEFAULT_LOG_LEVEL = logging.WARNING
    if log_level:
        _numeric = getattr(logging, str(log_level).upper(), None)
        if isinstance(_numeric, int):
            DEFAULT_LOG_LEVEL = _numeric

    # Reconfigure root handlers to use the selected level and format
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=DEFAULT_LOG_LEVEL, format=LOG_FORMAT)
    logging.log(100, f'[postdir]: Log level set to: {logging.getLevelName(DEFAULT_LOG_LEVEL)}')
    logger = logging.getLogger(__name__)

    # Keep known noisy libraries quiet by default
    logging.getLogger('pymongo').setLevel(logging.WARNING)
    logger.info("Starting Post Directory Server")

    return logger
