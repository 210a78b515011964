"""Logging setup."""

import logging
import os
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_dir: Optional[Path] = None, level: Optional[str] = None) -> logging.Logger:
    """Send runner logs to ``runner.log`` (everything) and the console.

    The console level comes from ``level``, then ``ELECTRON_RUNNER_LOG_LEVEL``,
    then INFO. Calling this twice does not duplicate handlers.
    """
    log_dir = log_dir or Path.home() / ".cache" / "electron_runner"
    log_dir.mkdir(parents=True, exist_ok=True)
    level = (level or os.environ.get("ELECTRON_RUNNER_LOG_LEVEL") or "INFO").upper()

    logger = logging.getLogger("electron_runner")
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_dir / "runner.log", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)
    return logger
