# grant_review/core/logging_config.py
import logging

from grant_review.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once for the whole process."""
    level_name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=level_name, format=LOG_FORMAT)
    # SQL echo stays off unless explicitly asked for
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
