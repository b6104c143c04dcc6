# wikitags/logging/logger.py

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

LOG_DIR = Path(os.getenv("WIKITAGS_LOG_DIR", "logs"))
LOG_DIR.mkdir(parents=True, exist_ok=True)
LOG_FILE = LOG_DIR / "wikitags.log"

BASE_FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

RESET = "\033[0m"
COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[41m",
}
MAGENTA = "\033[35m"


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        orig_levelname = record.levelname
        orig_name = record.name
        try:
            color = COLORS.get(record.levelno, RESET)
            record.levelname = f"{color}{orig_levelname}{RESET}"
            record.name = f"{MAGENTA}{orig_name}{RESET}"
            return super().format(record)
        finally:
            record.levelname = orig_levelname
            record.name = orig_name


def _resolve_log_level(default: int = logging.INFO) -> int:
    level = os.getenv("WIKITAGS_LOG_LEVEL") or os.getenv("LOG_LEVEL")
    if not level:
        return default
    return getattr(logging, level.upper(), default)


def _use_color(stream) -> bool:
    if os.getenv("NO_COLOR"):
        return False
    return hasattr(stream, "isatty") and stream.isatty()


def setup_logger(
    name: str,
    level: int | None = None,
) -> logging.Logger:
    # env default → explicit arg override
    level = level if level is not None else _resolve_log_level()

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    # console on stderr; stdout carries the user-facing notifications
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    if _use_color(sys.stderr):
        console.setFormatter(ColorFormatter(BASE_FMT))
    else:
        console.setFormatter(logging.Formatter(BASE_FMT))

    # file (plain)
    file_handler = RotatingFileHandler(
        LOG_FILE,
        maxBytes=2_000_000,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(BASE_FMT))

    logger.addHandler(console)
    logger.addHandler(file_handler)
    logger.propagate = False

    return logger
