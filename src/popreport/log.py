import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None) -> logging.Logger:
    """Configure the ``popreport`` logger with a stderr handler and an optional file handler.

    Later calls reuse the existing handlers: the console handler takes the new
    level and the current ``sys.stderr``, and a file handler is added if
    ``log_dir`` is given and none exists yet.
    """
    logger = logging.getLogger("popreport")
    logger.setLevel(logging.DEBUG)

    file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
    # The previous stderr may already be closed, so replace rather than flush it.
    for h in logger.handlers[:]:
        if h not in file_handlers:
            logger.removeHandler(h)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(FORMAT))
    logger.addHandler(console_handler)

    if log_dir and not file_handlers:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        file_handler = logging.FileHandler(path / f"popreport_{timestamp}.log")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FORMAT))
        logger.addHandler(file_handler)

    return logger
