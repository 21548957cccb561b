import logging
import logging.handlers
from pathlib import Path

from src.data_pipeline.config import LOGS_DIR

LOG_FILENAME = "stats_dashboard.log"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _has_report_handler(logger: logging.Logger, log_file: Path) -> bool:
    return any(
        isinstance(h, logging.handlers.RotatingFileHandler)
        and Path(h.baseFilename) == log_file
        for h in logger.handlers
    )


def setup_logging(log_level: str = "INFO", log_dir: Path | None = None) -> Path:
    """Send report logs to the console and a rotating file under *log_dir*.

    The file always records DEBUG, so per-row contract and tier warnings
    are kept even when the console runs at INFO. Calling this again for
    the same directory does not add handlers.

    Returns:
        Path of the log file.
    """
    log_dir = Path(log_dir) if log_dir is not None else LOGS_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = (log_dir / LOG_FILENAME).resolve()

    root_logger = logging.getLogger()
    if _has_report_handler(root_logger, log_file):
        return log_file

    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.getLogger(__name__).info(
        "Logging initialized (console=%s, file=%s)", log_level, log_file
    )
    return log_file
