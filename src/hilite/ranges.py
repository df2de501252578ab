from dataclasses import dataclass
from typing import Iterator, List, Tuple


@dataclass(frozen=True)
class ColoredRange:
    """Half-open span [start, end) of a line tagged with a palette index."""
    start: int
    end: int
    color_id: int

    def __len__(self) -> int:
        return self.end - self.start


def add_range(ranges: List[ColoredRange], new: ColoredRange) -> None:
    """
    Inserts the unclaimed parts of `new` into the sorted, non-overlapping list `ranges`.

    Ranges already in the list are never altered or removed: `new` is clipped
    around them and each uncovered slice is inserted at its sorted position
    with `new`'s color. The list is modified in place.
    """
    start, end, color = new.start, new.end, new.color_id
    was_empty = not ranges
    placed = False
    i = 0
    while i < len(ranges):
        existing = ranges[i]
        if end <= existing.start:
            if not placed:
                ranges.insert(i, ColoredRange(start, end, color))
                placed = True
            break
        if start >= existing.end:
            i += 1
            continue

        if not placed and start < existing.start:
            ranges.insert(i, ColoredRange(start, existing.start, color))
            i += 1
        if end > existing.end:
            # Remainder continues past this range and may fill a later gap.
            start = existing.end
            placed = False
            i += 1
        else:
            start = end
            placed = True
            break

    if not placed and (start < end or was_empty):
        ranges.append(ColoredRange(start, end, color))


class RangeSet:
    """
    Ordered, non-overlapping collection of colored ranges for one line.

    Insertion order defines precedence: whatever a range claims first can not
    be taken by a range added later.
    """

    def __init__(self) -> None:
        self._ranges: List[ColoredRange] = []

    def add(self, start: int, end: int, color_id: int) -> None:
        add_range(self._ranges, ColoredRange(start, end, color_id))

    def spans(self) -> List[Tuple[int, int, int]]:
        return [(r.start, r.end, r.color_id) for r in self._ranges]

    def __iter__(self) -> Iterator[ColoredRange]:
        return iter(self._ranges)

    def __len__(self) -> int:
        return len(self._ranges)

    def __repr__(self) -> str:
        return f"RangeSet({self.spans()!r})"
