import os
import sys
from typing import List, Optional, Sequence, TextIO, Tuple

FOREGROUND_COLORS = [
    "\x1b[31m",  # Red
    "\x1b[32m",  # Green
    "\x1b[33m",  # Yellow
    "\x1b[34m",  # Blue
    "\x1b[35m",  # Magenta
    "\x1b[36m",  # Cyan
]

BACKGROUND_COLORS = [
    "\x1b[41m",  # Red
    "\x1b[44m",  # Blue
    "\x1b[45m",  # Magenta
    "\x1b[42m",  # Green
    "\x1b[43m",  # Yellow
    "\x1b[46m",  # Cyan
]

RESET_FOREGROUND = "\x1b[0m"
RESET_BACKGROUND = "\x1b[49m"

Palette = List[Tuple[str, str]]


class Colors:
    """ANSI color codes for the tool's own messages."""
    RESET = '\033[0m'
    RED = '\033[91m'


def use_color(stream: Optional[TextIO] = None) -> bool:
    """True if `stream` is a TTY and NO_COLOR is not set."""
    stream = stream or sys.stdout
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty()) and not os.environ.get("NO_COLOR")


def colorize(text: str, color: str, stream: Optional[TextIO] = None) -> str:
    """Apply ANSI color if `stream` (stdout by default) wants color."""
    return f"{color}{text}{Colors.RESET}" if use_color(stream) else text


def build_palette(no_highlight: bool = False, only_highlight: bool = False,
                  foreground: Optional[Sequence[str]] = None,
                  background: Optional[Sequence[str]] = None,
                  reset_foreground: str = RESET_FOREGROUND,
                  reset_background: str = RESET_BACKGROUND) -> Palette:
    """
    Builds the list of (start, reset) escape pairs cycled through by color id.

    Foreground colors come first unless `only_highlight` is set; background
    colors follow unless `no_highlight` is set.
    """
    if no_highlight and only_highlight:
        raise ValueError("no_highlight and only_highlight are mutually exclusive")
    palette: Palette = []
    if not only_highlight:
        palette.extend((c, reset_foreground) for c in (foreground or FOREGROUND_COLORS))
    if not no_highlight:
        palette.extend((c, reset_background) for c in (background or BACKGROUND_COLORS))
    return palette
