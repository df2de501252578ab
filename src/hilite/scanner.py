import logging
import re
from typing import Iterator, List, Optional, Sequence

from .errors import PatternError
from .ranges import RangeSet

logger = logging.getLogger(__name__)


class Pattern:
    """A compiled user pattern together with its position on the command line."""

    def __init__(self, source: str, index: int, ignore_case: bool = False):
        self.source = source
        self.index = index
        flags = re.IGNORECASE if ignore_case else 0
        try:
            self._regex = re.compile(source, flags)
        except re.error as e:
            raise PatternError(source, f"Invalid pattern {source!r}") from e
        logger.debug("Pattern %d: %r, %d group(s)", index, source, self._regex.groups)

    @property
    def groups(self) -> int:
        """Number of capturing groups, not counting the whole match."""
        return self._regex.groups

    def finditer(self, line: str) -> Iterator[re.Match]:
        return self._regex.finditer(line)

    def __repr__(self) -> str:
        return f"Pattern({self.source!r}, index={self.index})"


class PatternSet:
    """
    Patterns in the order the user gave them.

    The pattern listed last has the highest precedence. `by_precedence()`
    yields the patterns highest precedence first, which is the order their
    ranges must be inserted into a `RangeSet` so that they win overlaps.
    """

    def __init__(self, sources: Sequence[str], ignore_case: bool = False):
        self.patterns: List[Pattern] = [
            Pattern(source, i, ignore_case) for i, source in enumerate(sources)
        ]
        logger.debug("Compiled %d pattern(s), ignore_case=%s", len(self.patterns), ignore_case)

    def by_precedence(self) -> List[Pattern]:
        return list(reversed(self.patterns))

    def __len__(self) -> int:
        return len(self.patterns)

    def __iter__(self) -> Iterator[Pattern]:
        return iter(self.patterns)


def match_line(line: str, patterns: PatternSet, vary_group_colors: bool = False,
               full_match_highlight: bool = False) -> RangeSet:
    """
    Collects the colored ranges of every pattern occurrence in `line`.

    Each pattern colors its whole match when it has no capturing groups or
    when `full_match_highlight` is set, otherwise each of its groups 1..n.
    With `vary_group_colors` every group gets its own color id, the last
    group taking the pattern's base id. Groups of one occurrence are added
    last group first so inner groups stay visible inside outer ones.
    """
    ranges = RangeSet()
    color_idx = 0
    for pattern in patterns.by_precedence():
        if full_match_highlight or not pattern.groups:
            groups = [0]
        else:
            groups = list(range(1, pattern.groups + 1))
        count = len(groups)

        for match in pattern.finditer(line):
            for i in reversed(range(count)):
                start, end = match.span(groups[i])
                # Non-participating groups report (-1, -1); empty matches add nothing.
                if start < 0 or start == end:
                    continue
                color = color_idx + (count - 1 - i) if vary_group_colors else color_idx
                ranges.add(start, end, color)

        color_idx += count if vary_group_colors else 1
    return ranges


class Scanner:
    """Applies a fixed pattern set and coloring options to successive lines."""

    def __init__(self, patterns: PatternSet, vary_group_colors: Optional[bool] = None,
                 full_match_highlight: bool = False):
        self.patterns = patterns
        if vary_group_colors is None:
            vary_group_colors = len(patterns) == 1
        self.vary_group_colors = vary_group_colors
        self.full_match_highlight = full_match_highlight

    def scan(self, line: str) -> RangeSet:
        return match_line(line, self.patterns, self.vary_group_colors, self.full_match_highlight)
