import logging
import sys
from logging.handlers import RotatingFileHandler

from cost_parser.core.config import settings

LOG_FILE_NAME = "cost_parser.log"


def setup_logging() -> None:
    """Configure root logging: console plus a rotating file under ``settings.log_dir``."""

    log_dir = settings.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME
    level = getattr(logging, settings.log_level, logging.INFO)

    # time | level | module:line | message
    log_format = logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s")

    # 5 MB per file, 5 backups
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(log_format)
    file_handler.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_format)
    console_handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Drop handlers from earlier calls to avoid duplicate lines.
    root_logger.handlers = []
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # Route uvicorn request logs to the same handlers.
    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        logger = logging.getLogger(logger_name)
        logger.handlers = [file_handler, console_handler]
        logger.propagate = False

    logging.info("Logging initialized. Logs will be written to: %s", log_file.absolute())
