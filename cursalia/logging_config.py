import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path


def setup_logging(level="INFO", log_dir="logs"):
    """
    - Console + file (<log_dir>/cursalia.log), file skipped when log_dir is None
    - Rotate to avoid infinite growth
    """
    level = (level or "INFO").upper()

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

    if log_dir:
        path = Path(log_dir)
        path.mkdir(exist_ok=True)
        file_handler = RotatingFileHandler(
            path / "cursalia.log",
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
        root.addHandler(file_handler)
