# flipgraph

Search for matrix multiplication schemes of low rank over Z2 by random walks
on the flip graph.

A scheme for multiplying an `n1 x n2` matrix by an `n2 x n3` matrix is a set of
rank-one triplets `(u, v, w)` whose sum equals the matrix multiplication
tensor. The naive scheme has rank `n1 * n2 * n3`. Flips keep a scheme valid
while changing its terms; now and then a flip makes two triplets share two
factors, they are merged and the rank drops by one. Plus and split moves raise
the rank again so that a walk can leave a dead end.

The package has no dependencies beyond the standard library.

## What is inside

- `flipgraph.binary_scheme.BinaryScheme` holds a scheme over Z2, each
  coefficient vector packed into an integer bit mask. It has
  `initialize_naive(n1, n2, n3)`, `read(stream)`, `read_file(path)`,
  `try_flip`, `try_plus`, `try_split`, `try_expand`, `try_reduce`,
  `validate`, `complexity`, `ring` (always `"Z2"`), `scheme_hash`,
  `save_json`, `save_txt`, `copy_from` and `clone`. The random moves take a
  `random.Random` instance.
- `flipgraph.binary_resize.BinaryResizing` is the base of `BinaryScheme` and
  holds the moves that change a scheme's sizes: `project(p, q)`, `extend(p)`,
  `merge(scheme, p)`, `product(scheme)`, `swap_sizes(p1, p2)` and
  `random_swap_sizes(generator)`, plus the checked forms `try_project`,
  `try_extend`, `try_merge` and `try_product`, which return `False` when the
  result would exceed the given limits.
- `flipgraph.base_scheme.BaseScheme` keeps the sizes, the rank and the flip
  candidates, with `dimension_of`, `dimension_label` (for example `"2x3x4"`)
  and `available_flips`.
- `flipgraph.flip_graph.FlipGraph` runs a number of walkers, keeps the best
  scheme each one found, prints a progress table after every round and saves
  every rank improvement as `.json` and `.txt` files into an output directory,
  which it creates if needed.
- `flipgraph.integer_vector.IntegerVector` is a vector of small integers that
  marks itself invalid once a value leaves `-3 .. 3`;
  `flipgraph.mod3_vector.Mod3Vector` is a vector over Z3 packed into two bit
  masks.
- `flipgraph.flip_set.FlipSet` records the pairs of triplets that share a
  factor and can therefore be flipped.
- `flipgraph.arg_parser.ArgParser` parses arguments given as alternating
  names and values, with string, natural and real argument types; natural
  values may end in `K`, `M` or `B`.
- `flipgraph.utils` has `parse_natural` (`"100K"` gives `100000`),
  `pretty_int` and `pretty_time`.

## Walking by hand

```python
import random

from flipgraph.binary_scheme import BinaryScheme

scheme = BinaryScheme()
scheme.initialize_naive(2, 2, 2)
print(scheme.rank, scheme.complexity())

generator = random.Random(1)
for _ in range(10_000):
    if not scheme.try_flip(generator):
        scheme.try_expand(generator)
    scheme.try_reduce()

assert scheme.validate()
print(scheme.dimension_label(), scheme.rank)
scheme.save_txt("scheme.txt")
```

## Running a search

```python
from flipgraph.flip_graph import FlipGraph

graph = FlipGraph(
    count=4,
    output_path="schemes",
    threads=2,
    flip_iterations=1000,
    min_plus_iterations=500,
    max_plus_iterations=2000,
    reset_iterations=100_000,
    plus_diff=4,
    reduce_probability=0.0,
    seed=1,
    top_count=4,
    max_improvements=10,
)
graph.initialize_naive(2, 2, 2)
graph.run(7)
```

`run(target_rank)` keeps going until some walker reaches `target_rank` or
lower, so choose a target that can be reached. `initialize_from_file(path)`
starts the walkers from a file of schemes instead. The walkers run one after
another in the calling thread; `threads` sets how many random generators they
share, and `top_count` how many rows the progress table shows.

## File format

The text format starts with `n1 n2 n3 m`, followed by three lines holding the
coefficients of all `u`, all `v` and all `w` vectors, `m` vectors per line,
each row by row. When reading, every integer is taken modulo 2. A file for
`FlipGraph.initialize_from_file` begins with the number of schemes it holds,
followed by the schemes one after another; walkers beyond that number reuse
them in turn.

`save_json` writes the sizes as `"n"`, the rank as `"m"`, `"z2": true`, the
complexity and the `"u"`, `"v"` and `"w"` coefficient lists.

## Errors

Impossible sizes (any size or matrix over 64 entries), malformed input and
schemes that do not compute the matrix product raise
`flipgraph.base_scheme.SchemeError`. `FlipGraph` raises `ValueError` for a
non-positive `count`, `threads` or `max_improvements`, or when
`min_plus_iterations` exceeds `max_plus_iterations`. Bad arguments given to
`ArgParser.parse` raise `flipgraph.arg_parser.ArgParseError`.

## What it does not do

- There is no command to run: searches are started from Python as shown
  above. `ArgParser` is available for building one.
- Schemes exist over Z2 only. `IntegerVector` and `Mod3Vector` are coefficient
  vectors, but no scheme class is built on them, so there is no search over
  the integers or over Z3.
- Walkers do not run in parallel.