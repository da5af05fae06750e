"""Storage of a scheme over Z2 and the operations that change its sizes."""

from __future__ import annotations

import random
from collections.abc import Iterator
from itertools import combinations

from .base_scheme import BaseScheme


def _set_bits(vector: int) -> Iterator[int]:
    position = 0
    while vector:
        if vector & 1:
            yield position
        vector >>= 1
        position += 1


def _move_bits(vector: int, moves: list[tuple[int, int]]) -> int:
    result = 0
    for old, new in moves:
        result |= ((vector >> old) & 1) << new
    return result


class BinaryResizing(BaseScheme):
    """A Z2 scheme held as three lists of bit masks (u, v, w), one mask per term."""

    def __init__(self) -> None:
        super().__init__()
        self.uvw: tuple[list[int], list[int], list[int]] = ([], [], [])

    # construction and bookkeeping

    def _initialize_naive(self, n1: int, n2: int, n3: int) -> None:
        self.dimension = [n1, n2, n3]
        self._update_elements()
        self.rank = n1 * n2 * n3
        self._check_dimensions()

        u: list[int] = []
        v: list[int] = []
        w: list[int] = []
        for i in range(n1):
            for j in range(n3):
                for k in range(n2):
                    u.append(1 << (i * n2 + k))
                    v.append(1 << (k * n3 + j))
                    w.append(1 << (j * n1 + i))

        self.uvw = (u, v, w)
        self._init_flips()

    def _init_flips(self) -> None:
        for flips, vectors in zip(self.flips, self.uvw):
            flips.clear()
            for (index1, vector1), (index2, vector2) in combinations(enumerate(vectors), 2):
                if vector1 == vector2:
                    flips.add(index1, index2)

    def _remove_at(self, index: int) -> None:
        for vectors in self.uvw:
            last = vectors.pop()
            if index < len(vectors):
                vectors[index] = last
        self.rank -= 1

    def _remove_zeroes(self) -> None:
        index = 0
        while index < self.rank:
            if all(vectors[index] for vectors in self.uvw):
                index += 1
            else:
                self._remove_at(index)

    def _add_triplet(self, i: int, j: int, k: int, u: int, v: int, w: int) -> None:
        self.uvw[i].append(u)
        self.uvw[j].append(v)
        self.uvw[k].append(w)
        self.rank += 1

    def _shape(self, matrix: int) -> tuple[int, int]:
        return self.dimension[matrix], self.dimension[(matrix + 1) % 3]

    def _remap(self, matrix: int, moves: list[tuple[int, int]]) -> None:
        self.uvw[matrix][:] = [_move_bits(vector, moves) for vector in self.uvw[matrix]]

    def _exclude_column(self, matrix: int, column: int) -> None:
        n1, n2 = self._shape(matrix)
        kept = [old for old in range(n2) if old != column]
        moves = [(i * n2 + old, i * (n2 - 1) + j) for i in range(n1) for j, old in enumerate(kept)]
        self._remap(matrix, moves)

    def _exclude_row(self, matrix: int, row: int) -> None:
        n1, n2 = self._shape(matrix)
        kept = [old for old in range(n1) if old != row]
        moves = [(old * n2 + j, i * n2 + j) for i, old in enumerate(kept) for j in range(n2)]
        self._remap(matrix, moves)

    def _add_column(self, matrix: int) -> None:
        n1, n2 = self._shape(matrix)
        moves = [(i * n2 + j, i * (n2 + 1) + j) for i in range(n1) for j in range(n2)]
        self._remap(matrix, moves)

    def _add_row(self, matrix: int) -> None:
        # An appended row leaves existing positions unchanged.
        n1, n2 = self._shape(matrix)
        mask = (1 << (n1 * n2)) - 1
        self.uvw[matrix][:] = [vector & mask for vector in self.uvw[matrix]]

    def _reduce(self, i: int, index1: int, index2: int) -> None:
        self.uvw[i][index1] ^= self.uvw[i][index2]
        is_zero = not self.uvw[i][index1]

        self._remove_at(index2)
        if is_zero:
            self._remove_zeroes()

        self._init_flips()

    def _reduce_pairs(self) -> bool:
        """Merge one pair of terms that share two factors; False if none does."""
        u, v, w = self.uvw

        for index1, index2 in self.flips[0]:
            if v[index1] == v[index2]:
                self._reduce(2, index1, index2)
                return True
            if w[index1] == w[index2]:
                self._reduce(1, index1, index2)
                return True

        for index1, index2 in self.flips[1]:
            if w[index1] == w[index2]:
                self._reduce(0, index1, index2)
                return True

        return False

    def _validate(self) -> bool:
        """Whether the terms sum to the matrix multiplication tensor over Z2."""
        n1, n2, n3 = self.dimension
        produced: set[tuple[int, int, int]] = set()

        for u, v, w in zip(*self.uvw):
            for i in _set_bits(u):
                for j in _set_bits(v):
                    for k in _set_bits(w):
                        produced ^= {(i, j, k)}

        target = {
            (a * n2 + b, b * n3 + c, c * n1 + a)
            for a in range(n1)
            for b in range(n2)
            for c in range(n3)
        }
        return produced == target

    # feasibility checks

    def _is_valid_project(self, p: int, min_n: int) -> bool:
        d = self.dimension
        return d[p] > min_n and d[(p + 1) % 3] >= min_n and d[(p + 2) % 3] >= min_n

    def _is_valid_extension(self, p: int, max_n: int, max_rank: int) -> bool:
        if self.rank + self.dimension[(p + 1) % 3] * self.dimension[(p + 2) % 3] > max_rank:
            return False

        new = list(self.dimension)
        new[p] += 1
        return all(
            new[i] * new[(i + 1) % 3] <= self.max_elements and new[i] <= max_n for i in range(3)
        )

    def _is_valid_product(self, scheme: BinaryResizing, max_n: int, max_rank: int) -> bool:
        if self.rank * scheme.rank > max_rank:
            return False

        new = [a * b for a, b in zip(self.dimension, scheme.dimension)]
        if any(size > max_n for size in new):
            return False

        return all(new[i] * new[(i + 1) % 3] <= self.max_elements for i in range(3))

    def _is_valid_merge(self, p: int, scheme: BinaryResizing, max_n: int, max_rank: int) -> bool:
        j = (p + 1) % 3
        k = (p + 2) % 3
        n = self.dimension[p] + scheme.dimension[p]

        return (
            n <= max_n
            and n * self.dimension[j] <= self.max_elements
            and n * self.dimension[k] <= self.max_elements
            and self.dimension[j] == scheme.dimension[j]
            and self.dimension[k] == scheme.dimension[k]
            and self.rank + scheme.rank <= max_rank
        )

    # size-changing operations

    def random_swap_sizes(self, generator: random.Random) -> None:
        """Swap two randomly chosen distinct axes."""
        p1, p2 = generator.sample(range(3), 2)
        self.swap_sizes(p1, p2)

    def swap_sizes(self, p1: int, p2: int) -> None:
        """Transform the scheme into one for the product with axes ``p1`` and ``p2`` swapped."""
        if p1 == p2:
            return

        p1, p2 = sorted((p1, p2))
        indices = [2, 0, 1]
        indices[p1], indices[p2] = indices[p2], indices[p1]
        new = [self.dimension[(indices[p] + 1) % 3] for p in range(3)]

        new_uvw = []
        for p in range(3):
            a, b = new[p], new[(p + 1) % 3]
            moves = [(j * a + i, i * b + j) for i in range(a) for j in range(b)]
            new_uvw.append([_move_bits(vector, moves) for vector in self.uvw[indices[p]]])

        self.uvw = (new_uvw[0], new_uvw[1], new_uvw[2])
        self.dimension = new
        self._update_elements()
        self._init_flips()

    def merge(self, scheme: BinaryResizing, p: int) -> None:
        """Append ``scheme`` as a block along axis ``p``."""
        other_dimension = list(scheme.dimension)
        other_uvw = [list(vectors) for vectors in scheme.uvw]

        new = [
            size + other if axis == p else size
            for axis, (size, other) in enumerate(zip(self.dimension, other_dimension))
        ]
        offset = [self.dimension[axis] if axis == p else 0 for axis in range(3)]

        for q in range(3):
            q1 = (q + 1) % 3
            a, b = self.dimension[q], self.dimension[q1]
            self._remap(q, [(i * b + j, i * new[q1] + j) for i in range(a) for j in range(b)])

        other_vectors = []
        for q in range(3):
            q1 = (q + 1) % 3
            a, b = other_dimension[q], other_dimension[q1]
            moves = [
                (i * b + j, (i + offset[q]) * new[q1] + j + offset[q1])
                for i in range(a)
                for j in range(b)
            ]
            other_vectors.append([_move_bits(vector, moves) for vector in other_uvw[q]])

        for u, v, w in zip(*other_vectors):
            self._add_triplet(0, 1, 2, u, v, w)

        self.dimension = new
        self._update_elements()
        self._init_flips()

    def project(self, p: int, q: int) -> None:
        """Drop index ``q`` along axis ``p`` and remove terms that vanish."""
        self._exclude_row(p, q)
        self._exclude_column((p + 2) % 3, q)
        self.dimension[p] -= 1
        self._update_elements()
        self._remove_zeroes()
        self._init_flips()

    def extend(self, p: int) -> None:
        """Grow axis ``p`` by one, adding naive terms for the new slice."""
        self._add_row(p)
        self._add_column((p + 2) % 3)
        n1, n2, n3 = self.dimension

        if p == 0:
            for i in range(n3):
                for j in range(n2):
                    self._add_triplet(
                        0, 1, 2,
                        1 << (n1 * n2 + j),
                        1 << (j * n3 + i),
                        1 << (i * (n1 + 1) + n1),
                    )
        elif p == 1:
            for i in range(n1):
                for j in range(n3):
                    self._add_triplet(
                        0, 1, 2,
                        1 << (i * (n2 + 1) + n2),
                        1 << (n2 * n3 + j),
                        1 << (j * n1 + i),
                    )
        else:
            for i in range(n1):
                for j in range(n2):
                    self._add_triplet(
                        0, 1, 2,
                        1 << (i * n2 + j),
                        1 << (j * (n3 + 1) + n3),
                        1 << (n3 * n1 + i),
                    )

        self.dimension[p] += 1
        self._update_elements()
        self._init_flips()

    def product(self, scheme: BinaryResizing) -> None:
        """Replace the scheme by its Kronecker product with ``scheme``."""
        dims1 = list(self.dimension)
        uvw1 = [list(vectors) for vectors in self.uvw]
        dims2 = list(scheme.dimension)
        uvw2 = [list(vectors) for vectors in scheme.uvw]

        self.dimension = [a * b for a, b in zip(dims1, dims2)]
        self._update_elements()

        def position(p: int, i: int, j: int) -> int:
            p1 = (p + 1) % 3
            row1, col1 = divmod(i, dims1[p1])
            row2, col2 = divmod(j, dims2[p1])
            row = row1 * dims2[p] + row2
            col = col1 * dims2[p1] + col2
            return row * self.dimension[p1] + col

        new_uvw: tuple[list[int], list[int], list[int]] = ([], [], [])
        for terms1 in zip(*uvw1):
            for terms2 in zip(*uvw2):
                for p, (a, b) in enumerate(zip(terms1, terms2)):
                    vector = 0
                    for i in _set_bits(a):
                        for j in _set_bits(b):
                            vector |= 1 << position(p, i, j)
                    new_uvw[p].append(vector)

        self.uvw = new_uvw
        self.rank = len(new_uvw[0])
        self._init_flips()

    def try_project(self, generator: random.Random, min_n: int) -> bool:
        """Project along a random feasible axis, then reduce as far as possible."""
        candidates = [p for p in range(3) if self._is_valid_project(p, min_n)]
        if not candidates:
            return False

        p = candidates[generator.randrange(len(candidates))]
        q = generator.randrange(self.dimension[p])
        self.project(p, q)

        while self._reduce_pairs():
            pass

        return True

    def try_extend(self, generator: random.Random, max_n: int, max_rank: int) -> bool:
        """Extend along a random feasible axis."""
        candidates = [p for p in range(3) if self._is_valid_extension(p, max_n, max_rank)]
        if not candidates:
            return False

        self.extend(candidates[generator.randrange(len(candidates))])
        return True

    def try_merge(self, scheme: BinaryResizing, generator: random.Random, max_n: int, max_rank: int) -> bool:
        """Merge with ``scheme`` along a random feasible axis."""
        candidates = [p for p in range(3) if self._is_valid_merge(p, scheme, max_n, max_rank)]
        if not candidates:
            return False

        self.merge(scheme, candidates[generator.randrange(len(candidates))])
        return True

    def try_product(self, scheme: BinaryResizing, max_n: int, max_rank: int) -> bool:
        """Take the product with ``scheme`` if the result fits the limits."""
        if not self._is_valid_product(scheme, max_n, max_rank):
            return False

        self.product(scheme)
        return True