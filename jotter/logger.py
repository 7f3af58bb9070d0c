"""Application logging to a rotating file; the terminal itself belongs to curses."""
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path


def configure_logging(level: str, path: Path) -> logging.Logger:
    logger = logging.getLogger("jotter")
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path,
        maxBytes=1_048_576,
        backupCount=5,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(handler)
    logger.info("Logging to %s", handler.baseFilename)
    return logger
