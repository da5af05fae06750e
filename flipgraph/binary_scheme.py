"""Matrix multiplication schemes over Z2 and the flip-graph moves on them."""

from __future__ import annotations

import random
from collections.abc import Iterable, Iterator
from os import PathLike
from typing import TextIO, Union

from .base_scheme import SchemeError
from .binary_resize import BinaryResizing

Source = Union[str, TextIO, Iterable[str]]


def _tokens(stream: Source) -> Iterator[str]:
    """Whitespace separated tokens of a string or a text stream.

    An iterator of tokens is used as is, so several schemes can be read
    one after another from the same iterator.
    """
    if isinstance(stream, str):
        return iter(stream.split())
    if hasattr(stream, "read"):
        return iter(stream.read().split())
    return iter(stream)


def _next_int(tokens: Iterator[str]) -> int:
    try:
        token = next(tokens)
    except StopIteration:
        raise SchemeError("unexpected end of scheme data") from None
    try:
        return int(token)
    except ValueError:
        raise SchemeError(f'invalid integer "{token}" in scheme data') from None


def _bits(vector: int, size: int) -> list[int]:
    return [(vector >> j) & 1 for j in range(size)]


class BinaryScheme(BinaryResizing):
    """A scheme whose coefficients live in Z2, with flip, plus, split and reduce moves."""

    def initialize_naive(self, n1: int, n2: int, n3: int) -> None:
        """Set up the naive scheme with n1*n2*n3 terms."""
        self._initialize_naive(n1, n2, n3)

    def read(self, stream: Source) -> None:
        """Read ``n1 n2 n3 rank`` followed by the u, v and w coefficients."""
        tokens = _tokens(stream)
        self.dimension = [_next_int(tokens) for _ in range(3)]
        self.rank = _next_int(tokens)
        self._update_elements()
        self._check_dimensions()

        uvw: tuple[list[int], list[int], list[int]] = ([], [], [])
        for vectors, size in zip(uvw, self.elements):
            for _ in range(self.rank):
                vector = 0
                for j in range(size):
                    vector |= (abs(_next_int(tokens)) % 2) << j
                vectors.append(vector)

        self.uvw = uvw
        if not self._validate():
            raise SchemeError("scheme does not compute the matrix product")
        self._init_flips()

    def read_file(self, path: str | PathLike[str]) -> None:
        """Read a scheme from a text file."""
        with open(path, encoding="utf-8") as f:
            try:
                self.read(f)
            except SchemeError as error:
                raise SchemeError(f'Invalid scheme in the file "{path}": {error}') from error

    def complexity(self) -> int:
        """Number of additions the scheme needs."""
        count = sum(bin(vector).count("1") for vectors in self.uvw for vector in vectors)
        return count - 2 * self.rank - self.elements[2]

    def ring(self) -> str:
        return "Z2"

    def scheme_hash(self) -> str:
        """A string that does not depend on the order of the terms."""
        lines = sorted(
            "".join(
                "".join(str(bit) for bit in _bits(vector, size))
                for vector, size in zip(term, self.elements)
            )
            for term in zip(*self.uvw)
        )
        return "".join(lines)

    # random moves

    def try_flip(self, generator: random.Random) -> bool:
        """Apply a random flip; False if no flip is available."""
        size = self.available_flips()
        if not size:
            return False

        index = generator.randrange(size)
        sizes = [len(flips) for flips in self.flips]

        if index < sizes[0]:
            i, j, k = 0, 1, 2
        elif index < sizes[0] + sizes[1]:
            i, j, k = 1, 0, 2
            index -= sizes[0]
        else:
            i, j, k = 2, 0, 1
            index -= sizes[0] + sizes[1]

        index1 = self.flips[i].index1(index)
        index2 = self.flips[i].index2(index)

        if generator.getrandbits(1):
            j, k = k, j
        if generator.getrandbits(1):
            index1, index2 = index2, index1

        self._flip(i, j, k, index1, index2)
        return True

    def try_plus(self, generator: random.Random) -> bool:
        """Split two terms with no common factor into three."""
        u, v, w = self.uvw
        while True:
            index1 = generator.randrange(self.rank)
            index2 = generator.randrange(self.rank)
            if (
                index1 != index2
                and u[index1] != u[index2]
                and v[index1] != v[index2]
                and w[index1] != w[index2]
            ):
                break

        permutation = [0, 1, 2]
        generator.shuffle(permutation)
        self._plus(*permutation, index1, index2, generator.randrange(3))
        return True

    def try_split(self, generator: random.Random) -> bool:
        """Split one term into two, increasing the rank."""
        while True:
            index1 = generator.randrange(self.rank)
            index2 = generator.randrange(self.rank)
            i = generator.randrange(3)
            if index1 != index2 and self.uvw[i][index1] != self.uvw[i][index2]:
                break

        self._split(i, (i + 1) % 3, (i + 2) % 3, index1, index2)
        return True

    def try_expand(self, generator: random.Random) -> bool:
        """Apply a plus or a split unless the rank is already naive."""
        n1, n2, n3 = self.dimension
        if self.rank >= n1 * n2 * n3:
            return False
        if generator.getrandbits(1):
            return self.try_plus(generator)
        return self.try_split(generator)

    def try_reduce(self) -> bool:
        """Merge two terms sharing two factors; False if there are none."""
        return self._reduce_pairs()

    # output

    def _matrix_json(self, name: str, vectors: list[int], size: int) -> list[str]:
        lines = [f'    "{name}": [']
        last = len(vectors) - 1
        for index, vector in enumerate(vectors):
            row = ", ".join(str(bit) for bit in _bits(vector, size))
            lines.append(f"        [{row}]" + ("," if index < last else ""))
        lines.append("    ]")
        return lines

    def save_json(self, path: str | PathLike[str]) -> None:
        """Write the scheme as JSON."""
        n1, n2, n3 = self.dimension
        lines = [
            "{",
            f'    "n": [{n1}, {n2}, {n3}],',
            f'    "m": {self.rank},',
            '    "z2": true,',
            f'    "complexity": {self.complexity()},',
        ]
        blocks = [
            "\n".join(self._matrix_json(name, vectors, size))
            for name, vectors, size in zip("uvw", self.uvw, self.elements)
        ]
        text = "\n".join(lines) + "\n" + ",\n".join(blocks) + "\n}\n"
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)

    def save_txt(self, path: str | PathLike[str]) -> None:
        """Write the scheme in the plain text format that ``read`` accepts."""
        n1, n2, n3 = self.dimension
        lines = [f"{n1} {n2} {n3} {self.rank}"]
        for vectors, size in zip(self.uvw, self.elements):
            lines.append(
                "".join(f"{bit} " for vector in vectors for bit in _bits(vector, size))
            )
        with open(path, "w", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")

    # copying and checking

    def copy_from(self, scheme: BinaryResizing) -> None:
        """Make this scheme an independent copy of ``scheme``."""
        self.rank = scheme.rank
        self.dimension = list(scheme.dimension)
        self.elements = list(scheme.elements)
        self.uvw = tuple(list(vectors) for vectors in scheme.uvw)  # type: ignore[assignment]
        self._init_flips()

    def clone(self) -> BinaryScheme:
        scheme = BinaryScheme()
        scheme.copy_from(self)
        return scheme

    def validate(self) -> bool:
        """Whether the scheme computes the matrix product."""
        return self._validate()

    # moves

    def _flip(self, i: int, j: int, k: int, index1: int, index2: int) -> None:
        uvw = self.uvw
        uvw[j][index1] ^= uvw[j][index2]
        uvw[k][index2] ^= uvw[k][index1]

        self.flips[j].remove_index(index1)
        self.flips[k].remove_index(index2)

        if not uvw[j][index1] or not uvw[k][index2]:
            self._remove_zeroes()
            self._init_flips()
            return

        for index in range(self.rank):
            if index != index1 and uvw[j][index] == uvw[j][index1]:
                if self._check_flip_reduce(i, k, index, index1):
                    return
                self.flips[j].add(index1, index)

            if index != index2 and uvw[k][index] == uvw[k][index2]:
                if self._check_flip_reduce(i, j, index, index2):
                    return
                self.flips[k].add(index2, index)

    def _check_flip_reduce(self, i: int, j: int, index1: int, index2: int) -> bool:
        if self.uvw[i][index1] == self.uvw[i][index2]:
            self._reduce(j, index1, index2)
            return True
        if self.uvw[j][index1] == self.uvw[j][index2]:
            self._reduce(i, index1, index2)
            return True
        return False

    def _plus(self, i: int, j: int, k: int, index1: int, index2: int, variant: int) -> None:
        uvw = self.uvw
        a1, b1, c1 = uvw[i][index1], uvw[j][index1], uvw[k][index1]
        a2, b2, c2 = uvw[i][index2], uvw[j][index2], uvw[k][index2]
        a, b, c = a1 ^ a2, b1 ^ b2, c1 ^ c2

        if variant == 0:
            uvw[j][index1] = b
            uvw[i][index2] = a
            self._add_triplet(i, j, k, a1, b2, c)
        elif variant == 1:
            uvw[k][index1] = c
            uvw[j][index2] = b
            self._add_triplet(i, j, k, a, b1, c2)
        else:
            uvw[i][index1] = a
            uvw[k][index2] = c
            self._add_triplet(i, j, k, a2, b, c1)

        if not a or not b or not c:
            self._remove_zeroes()
        self._init_flips()

    def _split(self, i: int, j: int, k: int, index1: int, index2: int) -> None:
        uvw = self.uvw
        u = uvw[i][index1] ^ uvw[i][index2]
        self._add_triplet(i, j, k, u, uvw[j][index1], uvw[k][index1])
        uvw[i][index1] = uvw[i][index2]

        self._remove_zeroes()
        self._init_flips()