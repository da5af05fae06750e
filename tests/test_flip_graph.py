import pytest

from flipgraph.base_scheme import SchemeError
from flipgraph.binary_scheme import BinaryScheme
from flipgraph.flip_graph import FlipGraph

# Three identical terms of the 1x1x1 product: over Z2 they sum to the single
# product, and one flip removes two of them.
REDUNDANT_1X1X1 = "1 1 1 3\n1 1 1\n1 1 1\n1 1 1\n"


def make_graph(output_path, count=2, max_improvements=4, **overrides):
    params = dict(
        count=count,
        output_path=output_path,
        threads=2,
        flip_iterations=20,
        min_plus_iterations=5,
        max_plus_iterations=10,
        reset_iterations=1000,
        plus_diff=4,
        reduce_probability=0.0,
        seed=7,
        top_count=10,
        max_improvements=max_improvements,
    )
    params.update(overrides)
    return FlipGraph(**params)


def write_schemes(tmp_path, *schemes):
    path = tmp_path / "input.txt"
    path.write_text(f"{len(schemes)}\n" + "".join(schemes))
    return path


def test_run_reduces_rank_and_saves_valid_scheme(tmp_path, capsys):
    out = tmp_path / "out"
    graph = make_graph(out)
    graph.initialize_from_file(write_schemes(tmp_path, REDUNDANT_1X1X1))

    graph.run(1)

    assert graph.best_rank == 1
    saved = sorted(p.name for p in out.iterdir())
    assert saved == ["1x1x1_m1_c0_iteration0_Z2.json", "1x1x1_m1_c0_iteration0_Z2.txt"]

    scheme = BinaryScheme()
    scheme.read_file(out / "1x1x1_m1_c0_iteration0_Z2.txt")
    assert scheme.rank == 1
    assert scheme.validate()

    printed = capsys.readouterr().out
    assert "Rank was improved from 3 to 1" in printed
    assert "best rank: 1" in printed


def test_run_adds_improvement(tmp_path):
    graph = make_graph(tmp_path / "out")
    graph.initialize_from_file(write_schemes(tmp_path, REDUNDANT_1X1X1))
    assert len(graph.improvements) == 1

    graph.run(1)

    assert len(graph.improvements) == 2
    assert graph.improvements[-1].rank == 1


def test_run_does_nothing_when_target_already_met(tmp_path, capsys):
    out = tmp_path / "out"
    graph = make_graph(out)
    graph.initialize_naive(2, 2, 2)

    graph.run(8)

    assert graph.best_rank == 8
    assert not out.exists()
    assert capsys.readouterr().out == ""


def test_initialize_naive_copies_to_all_runners(tmp_path):
    graph = make_graph(tmp_path, count=3)
    graph.initialize_naive(2, 3, 1)

    assert [scheme.rank for scheme in graph.schemes] == [6, 6, 6]
    assert all(scheme.validate() for scheme in graph.schemes)
    assert len(graph.improvements) == 1


def test_initialize_naive_rejects_bad_dimensions(tmp_path):
    graph = make_graph(tmp_path)
    with pytest.raises(SchemeError):
        graph.initialize_naive(0, 2, 2)


def test_initialize_from_file_fills_runners_cyclically(tmp_path, capsys):
    graph = make_graph(tmp_path, count=3)
    graph.initialize_from_file(write_schemes(tmp_path, REDUNDANT_1X1X1))

    assert [scheme.rank for scheme in graph.schemes] == [3, 3, 3]
    assert all(scheme.validate() for scheme in graph.schemes)
    assert "Start reading 1 / 1 schemes" in capsys.readouterr().out


def test_initialize_from_file_limits_improvements(tmp_path):
    graph = make_graph(tmp_path, count=3, max_improvements=1)
    graph.initialize_from_file(write_schemes(tmp_path, REDUNDANT_1X1X1, REDUNDANT_1X1X1))

    assert len(graph.improvements) == 1
    assert [scheme.rank for scheme in graph.schemes] == [3, 3, 3]


def test_initialize_from_missing_file_raises(tmp_path):
    graph = make_graph(tmp_path)
    with pytest.raises(FileNotFoundError):
        graph.initialize_from_file(tmp_path / "missing.txt")


def test_initialize_from_file_with_wrong_scheme_raises(tmp_path):
    graph = make_graph(tmp_path)
    path = write_schemes(tmp_path, "1 1 1 2\n1 1\n1 1\n1 1\n")
    with pytest.raises(SchemeError):
        graph.initialize_from_file(path)


def test_initialize_from_file_with_bad_count_raises(tmp_path):
    graph = make_graph(tmp_path)
    path = tmp_path / "input.txt"
    path.write_text("zero\n")
    with pytest.raises(SchemeError):
        graph.initialize_from_file(path)


def test_plus_iteration_bounds_checked(tmp_path):
    with pytest.raises(ValueError):
        make_graph(tmp_path, min_plus_iterations=10, max_plus_iterations=5)


def test_top_count_and_threads_limited_by_count(tmp_path):
    graph = make_graph(tmp_path, count=2, threads=8, top_count=10)
    assert graph.top_count == 2
    assert graph.threads == 2