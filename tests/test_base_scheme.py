import pytest

from flipgraph.base_scheme import BaseScheme, SchemeError


def _scheme(dimension, rank=1):
    scheme = BaseScheme()
    scheme.dimension = list(dimension)
    scheme.rank = rank
    scheme._update_elements()
    return scheme


def test_new_scheme_is_empty():
    scheme = BaseScheme()
    assert scheme.rank == 0
    assert scheme.available_flips() == 0
    assert scheme.dimension == [0, 0, 0]


def test_dimension_label_and_lookup():
    scheme = _scheme([2, 3, 4])
    assert scheme.dimension_label() == "2x3x4"
    assert scheme.dimension_of(0) == 2
    assert scheme.dimension_of(2) == 4


def test_elements_are_products_of_neighbouring_sizes():
    scheme = _scheme([2, 3, 4])
    assert scheme.elements == [6, 12, 8]


def test_available_flips_sums_all_sets():
    scheme = BaseScheme()
    scheme.flips[0].add(0, 1)
    scheme.flips[2].add(1, 2)
    scheme.flips[2].add(0, 2)
    assert scheme.available_flips() == 3


def test_zero_dimension_is_rejected():
    with pytest.raises(SchemeError, match="Invalid dimension"):
        _scheme([0, 2, 2])._check_dimensions()


def test_too_many_elements_is_rejected():
    with pytest.raises(SchemeError, match="elements count"):
        _scheme([9, 8, 1])._check_dimensions()


def test_zero_rank_is_rejected():
    with pytest.raises(SchemeError, match="Invalid rank"):
        _scheme([2, 2, 2], rank=0)._check_dimensions()


def test_scheme_error_is_value_error():
    with pytest.raises(ValueError):
        _scheme([65, 1, 1])._check_dimensions()