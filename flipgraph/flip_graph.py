"""Random walks on the flip graph of matrix multiplication schemes."""

from __future__ import annotations

import os
import random
import time
from collections.abc import Callable
from os import PathLike
from typing import Any

from .base_scheme import SchemeError
from .binary_scheme import BinaryScheme
from .utils import pretty_int, pretty_time

_RULE = "+-----------------------------------------------------------------------------------+"
_HEAVY_RULE = "+===================================================================================+"
_TABLE_RULE = "+--------+------+------+------------+------------+---------+-----------+------------+"


class FlipGraph:
    """Runs many independent random walks and keeps the best schemes found."""

    def __init__(
        self,
        count: int,
        output_path: str | PathLike[str],
        threads: int,
        flip_iterations: int,
        min_plus_iterations: int,
        max_plus_iterations: int,
        reset_iterations: int,
        plus_diff: int,
        reduce_probability: float,
        seed: int,
        top_count: int,
        max_improvements: int,
        scheme_type: Callable[[], Any] = BinaryScheme,
    ) -> None:
        if count < 1:
            raise ValueError("count must be positive")
        if threads < 1:
            raise ValueError("threads must be positive")
        if max_improvements < 1:
            raise ValueError("max_improvements must be positive")
        if min_plus_iterations > max_plus_iterations:
            raise ValueError("min_plus_iterations must not exceed max_plus_iterations")

        self.count = count
        self.output_path = os.fspath(output_path)
        self.threads = min(threads, count)
        self.flip_iterations = flip_iterations
        self.min_plus_iterations = min_plus_iterations
        self.max_plus_iterations = max_plus_iterations
        self.reset_iterations = reset_iterations
        self.plus_diff = plus_diff
        self.reduce_probability = reduce_probability
        self.seed = seed
        self.top_count = min(top_count, count)
        self.max_improvements = max_improvements

        self.generators = [random.Random(seed + i) for i in range(threads)]

        self.schemes = [scheme_type() for _ in range(count)]
        self.schemes_best = [scheme_type() for _ in range(count)]
        self.best_ranks = [0] * count
        self.flips = [0] * count
        self.iterations = [0] * count
        self.plus_iterations = [0] * count
        self.indices = list(range(count))
        self.best_rank = 0

        self.improvements: list[Any] = []
        self._improvements_index = 0

    # initialization

    def initialize_naive(self, n1: int, n2: int, n3: int) -> None:
        """Start every runner from the naive scheme for an n1 x n2 x n3 product."""
        self.schemes[0].initialize_naive(n1, n2, n3)
        for scheme in self.schemes[1:]:
            scheme.copy_from(self.schemes[0])

        self._reset_improvements()
        self._add_improvement(self.schemes[0])

    def initialize_from_file(self, path: str | PathLike[str]) -> None:
        """Start the runners from the schemes stored in ``path``.

        The file holds the number of schemes followed by the schemes
        themselves; runners beyond that number reuse them cyclically.
        """
        with open(path, encoding="utf-8") as f:
            tokens = iter(f.read().split())

        try:
            schemes_count = int(next(tokens))
        except (StopIteration, ValueError):
            raise SchemeError(f'Invalid schemes count in the file "{path}"') from None
        if schemes_count < 1:
            raise SchemeError(f'Invalid schemes count "{schemes_count}" in the file "{path}"')

        loaded = min(schemes_count, self.count)
        print(f'Start reading {loaded} / {schemes_count} schemes from "{path}"')

        for scheme in self.schemes[:loaded]:
            scheme.read(tokens)

        self._reset_improvements()
        for scheme in self.schemes[:loaded]:
            if len(self.improvements) >= self.max_improvements:
                break
            self._add_improvement(scheme)

        for i in range(loaded, self.count):
            self.schemes[i].copy_from(self.schemes[i % schemes_count])

    # main loop

    def run(self, target_rank: int) -> None:
        """Walk until a scheme of rank ``target_rank`` or lower is found."""
        self._initialize()

        start_time = time.perf_counter()
        elapsed_times: list[float] = []
        iteration = 0

        while self.best_rank > target_rank:
            t1 = time.perf_counter()
            self._run_iteration()
            self._update_best(iteration)
            elapsed_times.append(time.perf_counter() - t1)

            self._report(iteration + 1, start_time, elapsed_times)
            iteration += 1

    # improvements ring buffer

    def _reset_improvements(self) -> None:
        self.improvements = []
        self._improvements_index = 0

    def _add_improvement(self, scheme: Any) -> None:
        if len(self.improvements) < self.max_improvements:
            self.improvements.append(scheme.clone())
            self._improvements_index = 0
        else:
            self.improvements[self._improvements_index].copy_from(scheme)
            self._improvements_index = (self._improvements_index + 1) % self.max_improvements

    # runners

    def _generator(self, runner: int) -> random.Random:
        return self.generators[runner % self.threads]

    def _draw_plus_iterations(self, generator: random.Random) -> int:
        return generator.randint(self.min_plus_iterations, self.max_plus_iterations)

    def _initialize(self) -> None:
        self.best_rank = min(scheme.rank for scheme in self.schemes)

        for i, scheme in enumerate(self.schemes):
            self.schemes_best[i].copy_from(scheme)
            self.best_ranks[i] = scheme.rank
            self.flips[i] = 0
            self.iterations[i] = 0
            self.plus_iterations[i] = self._draw_plus_iterations(self._generator(i))
            self.indices[i] = i

    def _run_iteration(self) -> None:
        for runner in range(self.count):
            self._random_walk(runner, self._generator(runner))

    def _random_walk(self, runner: int, generator: random.Random) -> None:
        scheme = self.schemes[runner]
        scheme_best = self.schemes_best[runner]
        flips = self.flips[runner]
        iterations = self.iterations[runner]
        plus_iterations = self.plus_iterations[runner]
        best_rank = self.best_ranks[runner]

        for _ in range(self.flip_iterations):
            prev_rank = scheme.rank

            if not scheme.try_flip(generator):
                if scheme.try_expand(generator):
                    flips = 0
                continue

            if generator.random() < self.reduce_probability and scheme.try_reduce():
                flips = 0

            rank = scheme.rank
            if rank < prev_rank:
                flips = 0

            flips += 1
            iterations += 1

            if rank < best_rank:
                scheme_best.copy_from(scheme)
                best_rank = rank
                iterations = 0

            if flips >= plus_iterations and rank < best_rank + self.plus_diff and scheme.try_expand(generator):
                flips = 0

            if iterations >= self.reset_iterations:
                initial = self.improvements[generator.randrange(len(self.improvements))]
                scheme.copy_from(initial)
                scheme_best.copy_from(initial)
                best_rank = initial.rank
                flips = 0
                iterations = 0
                plus_iterations = self._draw_plus_iterations(generator)

        self.flips[runner] = flips
        self.iterations[runner] = iterations
        self.plus_iterations[runner] = plus_iterations
        self.best_ranks[runner] = best_rank

    def _sort_key(self, runner: int) -> tuple[int, int, int, int]:
        scheme = self.schemes[runner]
        return (self.schemes_best[runner].rank, scheme.rank, scheme.complexity(), runner)

    def _update_best(self, iteration: int) -> None:
        self.indices.sort(key=self._sort_key)

        top = self.indices[0]
        if self.best_ranks[top] >= self.best_rank:
            return

        best = self.schemes_best[top]
        if not best.validate():
            print("Unable to save: scheme invalid")
            return

        path = self._save_path(best, iteration)
        os.makedirs(self.output_path, exist_ok=True)
        best.save_json(path + ".json")
        best.save_txt(path + ".txt")
        self._add_improvement(best)

        print(f'Rank was improved from {self.best_rank} to {self.best_ranks[top]}, scheme was saved to "{path}"')
        self.best_rank = self.best_ranks[top]

        for i, scheme in enumerate(self.schemes):
            if self._generator(i).random() > 0.5:
                continue
            scheme.copy_from(best)
            self.iterations[i] = 0

    def _save_path(self, scheme: Any, iteration: int) -> str:
        name = (
            f"{scheme.dimension_label()}_m{scheme.rank}_c{scheme.complexity()}"
            f"_iteration{iteration}_{scheme.ring()}"
        )
        return os.path.join(self.output_path, name)

    # reporting

    def _report(self, iteration: int, start_time: float, elapsed_times: list[float]) -> None:
        elapsed = time.perf_counter() - start_time
        last_time = elapsed_times[-1]
        min_time = min(elapsed_times)
        max_time = max(elapsed_times)
        mean_time = sum(elapsed_times) / len(elapsed_times)

        top_scheme = self.schemes[self.indices[0]]
        improvements = f"improvements: {len(self.improvements)} / {self.max_improvements}"

        lines = [
            _RULE,
            f"| dimension: {top_scheme.dimension_label():<14}   seed: {self.seed:<20}   "
            f"{'best rank: ' + str(self.best_rank):>24} |",
            f"| threads: {self.threads:<16}   flip iters: {pretty_int(self.flip_iterations):<14}   "
            f"{'iteration: ' + str(iteration):>24} |",
            f"| count: {self.count:<18}   reset iters: {pretty_int(self.reset_iterations):<13}   "
            f"{'elapsed: ' + pretty_time(elapsed):>24} |",
            f"| ring: {self.schemes[0].ring():<19}   plus diff: {self.plus_diff:<15}   "
            f"{improvements:>24} |",
            _HEAVY_RULE,
            "| runner | scheme rank |   naive    |            |        flips        |    plus    |",
            "|   id   | best | curr | complexity | iterations |  count  | available | iterations |",
            _TABLE_RULE,
        ]

        for runner in self.indices[: self.top_count]:
            scheme = self.schemes[runner]
            lines.append(
                f"| {runner:>6} | {self.schemes_best[runner].rank:>4} | {scheme.rank:>4} | "
                f"{scheme.complexity():>10} | {pretty_int(self.iterations[runner]):>10} | "
                f"{pretty_int(self.flips[runner]):>7} | {scheme.available_flips():>9} | "
                f"{pretty_int(self.plus_iterations[runner]):>10} |"
            )

        lines.append(_TABLE_RULE)
        lines.append(
            "- iteration time (last / min / max / mean): "
            f"{pretty_time(last_time)} / {pretty_time(min_time)} / "
            f"{pretty_time(max_time)} / {pretty_time(mean_time)}"
        )
        lines.append("")
        print("\n".join(lines))