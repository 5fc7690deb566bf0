import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from twoam.config import LOGS_DIR

LOG_FORMAT = '[%(asctime)s] [%(levelname)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(logs_dir: Optional[Path] = None, level: int = logging.INFO):
    """
    Log to the console and to `<logs_dir>/chime.log`, rotated at midnight
    with 30 days kept. Safe to call more than once.
    """
    root = logging.getLogger()
    root.setLevel(level)
    if any(isinstance(h, logging.handlers.TimedRotatingFileHandler) for h in root.handlers):
        return

    logs_dir = Path(logs_dir or LOGS_DIR)
    logs_dir.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=logs_dir / "chime.log",
        when="midnight",
        backupCount=30,
        encoding="utf-8",
    )
    console_handler = logging.StreamHandler()
    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    # py-cord's gateway chatter stays out of the chime log
    logging.getLogger("discord").setLevel(logging.WARNING)
    logging.info(f"Logging to {logs_dir}")
