"""
Logging setup shared by the API process and scripts.
Logs go to the console and to a rotating file (logs/app.log).
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
LOG_FILE = LOG_DIR / "app.log"
MAX_BYTES = 5 * 1024 * 1024  # 5 MB
BACKUP_COUNT = 5

FORMAT_CONSOLE = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
FORMAT_FILE = "%(asctime)s | %(levelname)-7s | %(name)s | %(filename)s:%(lineno)d | %(message)s"
DATE_FMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger with console and rotating file handlers."""
    level_value = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level_value)

    # already configured (reload, or a test runner installed its own handlers)
    if root.handlers:
        return

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level_value)
    console.setFormatter(logging.Formatter(FORMAT_CONSOLE, datefmt=DATE_FMT))
    root.addHandler(console)

    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            LOG_FILE,
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(level_value)
        file_handler.setFormatter(logging.Formatter(FORMAT_FILE, datefmt=DATE_FMT))
        root.addHandler(file_handler)
    except OSError:
        root.warning("Could not create log file %s; file logging disabled", LOG_FILE)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
