# gym_classes/core/logging_config.py
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from gym_classes.core.config import settings


def setup_logging(log_dir: str = "logs") -> None:
    """
    - Console + file (logs/gym_classes.log)
    - Rotate to avoid infinite growth
    """
    level = settings.LOG_LEVEL.upper()

    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    root = logging.getLogger()
    root.setLevel(level)

    # Prevent duplicate handlers
    if root.handlers:
        return

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
    root.addHandler(console)

    path = Path(log_dir)
    path.mkdir(exist_ok=True)
    file_handler = RotatingFileHandler(
        path / "gym_classes.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
    root.addHandler(file_handler)
