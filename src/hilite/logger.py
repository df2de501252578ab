import logging
import sys
from typing import Optional, TextIO


def setup_logging(debug: bool = False, stream: Optional[TextIO] = None) -> logging.Logger:
    logger = logging.getLogger("hilite")
    level = logging.DEBUG if debug else logging.WARNING
    logger.setLevel(level)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger
