"""
Logging setup for the client process.

Warnings and errors go to the console. Everything from INFO up also goes to a
dated file that players can send along with bug reports.
"""

from __future__ import annotations
from datetime import date
import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def start_logger(directory: str | Path = ".") -> Path | None:
    """
    Install the console and file handlers on the root logger.

    Returns the log file path, or None if the file couldn't be opened (the
    console handler is installed either way).
    """
    root = logging.getLogger()
    root.setLevel(logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    console.setFormatter(formatter)
    root.addHandler(console)

    path = Path(directory) / "log" / date.today().strftime("archipelago-%Y-%m-%d.log")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    except OSError as e:
        logging.getLogger(__name__).warning("Couldn't open log file %s: %s", path, e)
        return None

    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)
    logging.getLogger(__name__).info("Logger initialized.")
    return path
