"""Vectors over the integers modulo 3, packed into two bit masks."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


def _add_planes(low1: int, high1: int, low2: int, high2: int) -> tuple[int, int]:
    mask = (low1 | low2) & (high1 | high2)
    low = (low1 ^ low2) ^ (high1 & high2) ^ mask
    high = (high1 ^ high2) ^ (low1 & low2) ^ mask
    return low, high


class Mod3Vector:
    """Coefficients in {0, 1, 2}: bit ``i`` of ``low`` means 1, of ``high`` means 2."""

    __slots__ = ("n", "low", "high")
    __hash__ = None  # mutable

    def __init__(self, n: int = 0) -> None:
        self.n = n
        self.low = 0
        self.high = 0

    @classmethod
    def unit(cls, n: int, index: int) -> Mod3Vector:
        """Vector of length ``n`` with a single one at ``index``."""
        vector = cls(n)
        vector.low = 1 << index
        return vector

    @classmethod
    def from_values(cls, values: Iterable[int]) -> Mod3Vector:
        """Build a vector from integers, each reduced modulo 3."""
        values = list(values)
        vector = cls(len(values))
        for index, value in enumerate(values):
            vector.set(index, value)
        return vector

    def _with_planes(self, low: int, high: int) -> Mod3Vector:
        result = Mod3Vector(self.n)
        result.low = low
        result.high = high
        return result

    def set(self, index: int, value: int) -> None:
        """Store ``value`` modulo 3 at ``index``."""
        mask = 1 << index
        value %= 3

        if value & 1:
            self.low |= mask
        else:
            self.low &= ~mask

        if value & 2:
            self.high |= mask
        else:
            self.high &= ~mask

    def inverse(self) -> None:
        """Negate the vector in place."""
        self.low, self.high = self.high, self.low

    def __len__(self) -> int:
        return self.n

    def __getitem__(self, index: int) -> int:
        if not 0 <= index < self.n:
            raise IndexError(f"index {index} out of range for length {self.n}")
        mask = 1 << index
        return (1 if self.low & mask else 0) + (2 if self.high & mask else 0)

    def __iter__(self) -> Iterator[int]:
        return (self[index] for index in range(self.n))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mod3Vector):
            return NotImplemented
        return self.low == other.low and self.high == other.high

    def __add__(self, other: Mod3Vector) -> Mod3Vector:
        return self._with_planes(*_add_planes(self.low, self.high, other.low, other.high))

    def __sub__(self, other: Mod3Vector) -> Mod3Vector:
        return self._with_planes(*_add_planes(self.low, self.high, other.high, other.low))

    def __neg__(self) -> Mod3Vector:
        return self._with_planes(self.high, self.low)

    def __iadd__(self, other: Mod3Vector) -> Mod3Vector:
        self.low, self.high = _add_planes(self.low, self.high, other.low, other.high)
        return self

    def __isub__(self, other: Mod3Vector) -> Mod3Vector:
        self.low, self.high = _add_planes(self.low, self.high, other.high, other.low)
        return self

    def __bool__(self) -> bool:
        return bool(self.low | self.high)

    def non_zero_count(self) -> int:
        return bin(self.low | self.high).count("1")

    def __str__(self) -> str:
        return ", ".join(str(value) for value in self)

    def __repr__(self) -> str:
        return f"Mod3Vector([{self}])"