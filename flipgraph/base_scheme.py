"""State shared by every kind of matrix multiplication scheme."""

from __future__ import annotations

from .flip_set import FlipSet


class SchemeError(ValueError):
    """Raised when a scheme has impossible sizes or contents."""


class BaseScheme:
    """Sizes, rank and flip candidates of a scheme for an n1 x n2 x n3 product."""

    max_elements = 64

    def __init__(self) -> None:
        self.dimension: list[int] = [0, 0, 0]
        self.elements: list[int] = [0, 0, 0]
        self.rank = 0
        self.flips: tuple[FlipSet, FlipSet, FlipSet] = (FlipSet(), FlipSet(), FlipSet())

    def dimension_of(self, index: int) -> int:
        """Size along axis ``index`` (0, 1 or 2)."""
        return self.dimension[index]

    def dimension_label(self) -> str:
        """Sizes written as ``n1xn2xn3``."""
        return "x".join(str(size) for size in self.dimension)

    def available_flips(self) -> int:
        """Total number of flip candidates over the three factor matrices."""
        return sum(len(flips) for flips in self.flips)

    def _update_elements(self) -> None:
        self.elements = [self.dimension[i] * self.dimension[(i + 1) % 3] for i in range(3)]

    def _check_dimensions(self) -> None:
        max_size = self.max_elements

        for size, count in zip(self.dimension, self.elements):
            if not 1 <= size <= max_size:
                raise SchemeError(f'Invalid dimension "{size}". Possible dimensions are 1 .. {max_size}')
            if not 1 <= count <= max_size:
                raise SchemeError(
                    f'Invalid matrix elements count "{count}". Possible counts are 1 .. {max_size}'
                )

        if self.rank < 1:
            raise SchemeError(f'Invalid rank "{self.rank}"')