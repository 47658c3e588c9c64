import logging
import sys

from todo_app.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Attach a stdout handler to the ``todo_app`` logger tree.

    Safe to call more than once; the handler is only added the first time.
    """
    logger = logging.getLogger("todo_app")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
