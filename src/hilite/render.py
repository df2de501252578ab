from typing import Iterable, List

from .ranges import ColoredRange
from .utils import Palette


def render_line(line: str, ranges: Iterable[ColoredRange], palette: Palette) -> str:
    """Wraps every range of `line` in the start/reset codes of its color."""
    if not palette:
        return line
    out: List[str] = []
    pos = 0
    for r in ranges:
        start_code, reset_code = palette[r.color_id % len(palette)]
        out.append(line[pos:r.start])
        out.append(start_code)
        out.append(line[r.start:r.end])
        out.append(reset_code)
        pos = r.end
    out.append(line[pos:])
    return "".join(out)
