"""
Logging setup for the attendance tracker
"""
import logging
import sys
from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# Local runs also show where a record was logged from
LOCAL_LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"

# Third-party loggers and the level they are capped at
THIRD_PARTY_LEVELS = {
    "uvicorn": logging.INFO,
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "alembic": logging.INFO,
}


def setup_logging() -> None:
    """
    Configure the root logger once for the process

    Level comes from settings.LOG_LEVEL; output goes to stdout so container
    logs pick it up. Attendance transitions log at INFO, rejected ones at
    WARNING.
    """
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format=LOCAL_LOG_FORMAT if settings.APP_ENV == "local" else LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for name, level in THIRD_PARTY_LEVELS.items():
        logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: level=%s env=%s office_tz=%s",
        settings.LOG_LEVEL, settings.APP_ENV, settings.OFFICE_TZ,
    )
