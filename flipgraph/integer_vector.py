"""Small integer vectors with coefficients bounded to a fixed range."""

from __future__ import annotations

import logging
from collections.abc import Iterable

MIN_VALUE = -3
MAX_VALUE = 3

_log = logging.getLogger(__name__)


def _in_range(value: int) -> bool:
    return MIN_VALUE <= value <= MAX_VALUE


class IntegerVector:
    """A vector of integers; ``valid`` turns False once a value leaves the range."""

    __slots__ = ("values", "valid")
    __hash__ = None  # mutable

    def __init__(self, n: int = 0) -> None:
        self.values: list[int] = [0] * n
        self.valid = True

    @classmethod
    def unit(cls, n: int, index: int) -> IntegerVector:
        """Vector of length ``n`` with a single one at ``index``."""
        vector = cls(n)
        vector.values[index] = 1
        return vector

    @classmethod
    def from_values(cls, values: Iterable[int]) -> IntegerVector:
        """Build a vector, marking it invalid if any value is out of range."""
        values = list(values)
        vector = cls(len(values))
        for index, value in enumerate(values):
            vector.set(index, value)
        return vector

    @classmethod
    def _from_raw(cls, values: list[int]) -> IntegerVector:
        vector = cls()
        vector.values = values
        vector.valid = all(_in_range(value) for value in values)
        return vector

    @property
    def n(self) -> int:
        return len(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def set(self, index: int, value: int) -> None:
        """Store ``value`` if it is within range, else mark the vector invalid."""
        if _in_range(value):
            self.values[index] = value
        else:
            self.valid = False
            _log.warning("invalid set (%d, %d)", index, value)

    def inverse(self) -> None:
        """Negate the vector in place."""
        self.values = [-value for value in self.values]

    def compare(self, other: IntegerVector) -> int:
        """1 if equal to ``other``, -1 if equal to its negation, else 0."""
        if self.values == other.values:
            return 1
        if all(a == -b for a, b in zip(self.values, other.values)):
            return -1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntegerVector):
            return NotImplemented
        return self.values == other.values

    def __getitem__(self, index: int) -> int:
        return self.values[index]

    def __iter__(self):
        return iter(self.values)

    def __add__(self, other: IntegerVector) -> IntegerVector:
        return self._from_raw([a + b for a, b in zip(self.values, other.values)])

    def __sub__(self, other: IntegerVector) -> IntegerVector:
        return self._from_raw([a - b for a, b in zip(self.values, other.values)])

    def __neg__(self) -> IntegerVector:
        return self._from_raw([-a for a in self.values])

    def __iadd__(self, other: IntegerVector) -> IntegerVector:
        self.values = [a + b for a, b in zip(self.values, other.values)]
        if not all(_in_range(value) for value in self.values):
            self.valid = False
        return self

    def __isub__(self, other: IntegerVector) -> IntegerVector:
        self.values = [a - b for a, b in zip(self.values, other.values)]
        if not all(_in_range(value) for value in self.values):
            self.valid = False
        return self

    def __bool__(self) -> bool:
        return any(self.values)

    def __str__(self) -> str:
        return ", ".join(str(value) for value in self.values)

    def __repr__(self) -> str:
        return f"IntegerVector([{self}])"

    @staticmethod
    def _first_non_zero(values: Iterable[int]) -> int:
        return next((value for value in values if value != 0), 0)

    def limit(self, check_first_non_zero: bool) -> bool:
        """Valid, and (optionally) the first non-zero value is positive."""
        if not self.valid:
            return False
        if check_first_non_zero:
            return self.positive_first_non_zero()
        return True

    def _limit_values(self, values: list[int], check_first_non_zero: bool) -> bool:
        if not all(_in_range(value) for value in values):
            return False
        return not check_first_non_zero or self._first_non_zero(values) > 0

    def limit_sum(self, other: IntegerVector, check_first_non_zero: bool) -> bool:
        """Whether ``self + other`` stays in range (and starts positive if checked)."""
        return self._limit_values([a + b for a, b in zip(self.values, other.values)], check_first_non_zero)

    def limit_sub(self, other: IntegerVector, check_first_non_zero: bool) -> bool:
        """Whether ``self - other`` stays in range (and starts positive if checked)."""
        return self._limit_values([a - b for a, b in zip(self.values, other.values)], check_first_non_zero)

    def positive_first_non_zero(self) -> bool:
        """The first non-zero value is positive; True for the zero vector."""
        return self._first_non_zero(self.values) >= 0

    def positive_first_non_zero_sub(self, other: IntegerVector) -> bool:
        """The first non-zero value of ``self - other`` is positive; True if equal."""
        return self._first_non_zero(a - b for a, b in zip(self.values, other.values)) >= 0

    def non_zero_count(self) -> int:
        return sum(1 for value in self.values if value != 0)