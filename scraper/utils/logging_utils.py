# scraper/utils/logging_utils.py

from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

Logger = Callable[[str], None]

DEBUG_PREFIX = "· "


def _log(logger: Optional[Logger], msg: str) -> None:
    """Helper: wenn kein logger übergeben wird -> print()."""
    if logger is not None:
        logger(msg)
    else:
        print(msg)


def make_logger(
    log_file: Optional[Union[str, Path]] = None,
    level: str = "INFO",
) -> Logger:
    """
    Logger that prints and, if `log_file` is set, appends a timestamped copy
    of every line to it. Lines starting with DEBUG_PREFIX are dropped unless
    `level` is DEBUG.
    """
    show_debug = level.upper() == "DEBUG"
    path = Path(log_file) if log_file else None
    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)

    def logger(msg: str) -> None:
        if msg.startswith(DEBUG_PREFIX) and not show_debug:
            return
        print(msg)
        if path is not None:
            with path.open("a", encoding="utf-8") as fh:
                fh.write(f"{datetime.now().isoformat(timespec='seconds')} {msg}\n")

    return logger


def debug(logger: Optional[Logger], msg: str) -> None:
    # no print() fallback for debug lines
    if logger is not None:
        logger(DEBUG_PREFIX + msg)
