"""Console logging for the rimpub CLI."""

import logging
import os
import sys
from typing import Optional, TextIO


class ColoredFormatter(logging.Formatter):
    """Prefix each message with its level, colored when writing to a terminal."""

    cyan = "\x1b[36m"
    green = "\x1b[32m"
    yellow = "\x1b[33m"
    red = "\x1b[31m"
    bold_red = "\x1b[31;1m"
    reset = "\x1b[0m"

    COLORS = {
        logging.DEBUG: cyan,
        logging.INFO: green,
        logging.WARNING: yellow,
        logging.ERROR: red,
        logging.CRITICAL: bold_red,
    }

    def __init__(self, use_color: bool = True) -> None:
        super().__init__("%(message)s")
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        label = f"[{record.levelname}]"
        color = self.COLORS.get(record.levelno)
        if self.use_color and color:
            label = f"{color}{label}{self.reset}"
        return f"{label} {message}"


def setup_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> logging.Logger:
    """Install the console handler on the ``rimpub`` logger.

    Existing handlers are replaced so calling this more than once doesn't duplicate output.
    Color is used only when the stream is a terminal and NO_COLOR is unset.
    """
    stream = stream if stream is not None else sys.stderr
    logger = logging.getLogger("rimpub")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    use_color = hasattr(stream, "isatty") and stream.isatty() and "NO_COLOR" not in os.environ
    handler = logging.StreamHandler(stream)
    handler.setFormatter(ColoredFormatter(use_color=use_color))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
