"""Unordered set of index pairs that share a factor in a scheme."""

from __future__ import annotations


class FlipSet:
    """Pairs of rank-one term indices; removal moves the last pair into the gap."""

    __slots__ = ("_pairs",)

    def __init__(self) -> None:
        self._pairs: list[tuple[int, int]] = []

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self):
        return iter(self._pairs)

    def add(self, index1: int, index2: int) -> None:
        """Append the pair ``(index1, index2)``."""
        self._pairs.append((index1, index2))

    def _take(self, position: int) -> None:
        last = self._pairs.pop()
        if position < len(self._pairs):
            self._pairs[position] = last

    def remove(self, index1: int, index2: int) -> None:
        """Remove the first pair made of these two indices, in either order."""
        wanted = {(index1, index2), (index2, index1)}
        for position, pair in enumerate(self._pairs):
            if pair in wanted:
                self._take(position)
                return

    def remove_index(self, index: int) -> None:
        """Remove every pair that involves ``index``."""
        position = 0
        while position < len(self._pairs):
            if index in self._pairs[position]:
                self._take(position)
            else:
                position += 1

    def contains(self, index1: int, index2: int) -> bool:
        """Whether the pair is present in either order."""
        return (index1, index2) in self._pairs or (index2, index1) in self._pairs

    def clear(self) -> None:
        self._pairs.clear()

    def index1(self, i: int) -> int:
        """First index of the ``i``-th pair."""
        return self._pairs[i][0]

    def index2(self, i: int) -> int:
        """Second index of the ``i``-th pair."""
        return self._pairs[i][1]