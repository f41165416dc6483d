"""Process-wide logging setup."""

import logging
import sys

from app.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the API process."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper()),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # SQL echo is controlled by app_debug, keep the engine logger quiet otherwise
    if not settings.app_debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
