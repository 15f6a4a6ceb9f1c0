"""Detection of unbounded self-reference while expanding schemas or payloads."""

from contextlib import contextmanager
from typing import Iterator, List, Sequence, Union

from .navigator import Segment, join_path, parse_path

Chain = Union[str, Sequence[Segment]]


def is_cyclic(chain: Chain, max_repeats: int) -> bool:
    """Check whether any contiguous unit of the chain repeats more than ``max_repeats`` times in a row.

    Direct self-reference (``a#a#a``) and indirect cycles (``a#b#c#a#b#c``)
    are both caught because every unit length that could still exceed the
    threshold is scanned.

    Args:
        chain: Visited segments, as a sequence or a ``#``-joined string
        max_repeats: Consecutive repeats tolerated; ``<= 0`` disables detection

    Returns:
        True if the chain contains a unit repeated more than ``max_repeats`` times
    """
    if max_repeats <= 0:
        return False

    segments = [str(segment) for segment in parse_path(chain)]
    size = len(segments)
    needed = max_repeats + 1

    for unit in range(1, size // needed + 1):
        for start in range(size - unit * needed + 1):
            pattern = segments[start:start + unit]
            repeats = 1
            position = start + unit
            while position + unit <= size and segments[position:position + unit] == pattern:
                repeats += 1
                if repeats > max_repeats:
                    return True
                position += unit
    return False


class VisitChain:
    """Segments visited so far during one generation pass.

    ``enter`` pushes a segment for the duration of a ``with`` block, which
    suits recursive walks. ``child`` returns an independent longer chain for
    callers that keep branches around.
    """

    def __init__(self, max_repeats: int, segments: Sequence[Segment] = ()):
        self.max_repeats = max_repeats
        self._segments: List[Segment] = list(segments)

    @contextmanager
    def enter(self, segment: Segment) -> Iterator["VisitChain"]:
        self._segments.append(segment)
        try:
            yield self
        finally:
            self._segments.pop()

    def child(self, segment: Segment) -> "VisitChain":
        return VisitChain(self.max_repeats, self._segments + [segment])

    @property
    def segments(self) -> List[Segment]:
        return list(self._segments)

    @property
    def path(self) -> str:
        return join_path(self._segments)

    def is_cyclic(self) -> bool:
        return is_cyclic(self._segments, self.max_repeats)

    def __len__(self) -> int:
        return len(self._segments)

    def __repr__(self) -> str:
        return f"VisitChain({self.path!r}, max_repeats={self.max_repeats})"
