import pytest

from flipgraph.mod3_vector import Mod3Vector

LEFT = [0, 0, 0, 1, 1, 1, 2, 2, 2]
RIGHT = [0, 1, 2, 0, 1, 2, 0, 1, 2]


@pytest.mark.parametrize("value", [-5, -4, -3, -2, -1, 0, 1, 2, 3, 4, 5, 7])
def test_set_reduces_modulo_three(value):
    vector = Mod3Vector(2)
    vector.set(1, value)
    assert vector[1] == value % 3
    assert vector[0] == 0


def test_set_overwrites_previous_value():
    vector = Mod3Vector.from_values([2, 1])
    vector.set(0, 1)
    vector.set(1, 0)
    assert list(vector) == [1, 0]


def test_from_values_round_trip():
    values = [0, 1, 2, 1, 0, 2]
    assert list(Mod3Vector.from_values(values)) == values


def test_unit_vector():
    assert list(Mod3Vector.unit(4, 2)) == [0, 0, 1, 0]


def test_addition_matches_modular_arithmetic():
    a = Mod3Vector.from_values(LEFT)
    b = Mod3Vector.from_values(RIGHT)
    assert list(a + b) == [(x + y) % 3 for x, y in zip(LEFT, RIGHT)]


def test_subtraction_matches_modular_arithmetic():
    a = Mod3Vector.from_values(LEFT)
    b = Mod3Vector.from_values(RIGHT)
    assert list(a - b) == [(x - y) % 3 for x, y in zip(LEFT, RIGHT)]


def test_negation_and_inverse_agree():
    a = Mod3Vector.from_values(LEFT)
    negated = -a
    a.inverse()
    assert a == negated
    assert list(negated) == [(-x) % 3 for x in LEFT]


def test_in_place_operations_match_binary_ones():
    a = Mod3Vector.from_values(LEFT)
    b = Mod3Vector.from_values(RIGHT)
    expected_sum = a + b
    expected_diff = a - b

    c = Mod3Vector.from_values(LEFT)
    c += b
    assert c == expected_sum

    d = Mod3Vector.from_values(LEFT)
    d -= b
    assert d == expected_diff


def test_sub_then_add_round_trip():
    a = Mod3Vector.from_values(LEFT)
    b = Mod3Vector.from_values(RIGHT)
    assert (a - b) + b == a


def test_vector_plus_negation_is_zero():
    a = Mod3Vector.from_values(LEFT)
    total = a + (-a)
    assert list(total) == [0] * len(LEFT)
    assert total.non_zero_count() == 0
    assert bool(total) is False


def test_truthiness_and_non_zero_count():
    assert not Mod3Vector(5)
    vector = Mod3Vector.from_values([0, 2, 0, 1])
    assert vector
    assert vector.non_zero_count() == 2


def test_equality():
    assert Mod3Vector.from_values([1, 2]) == Mod3Vector.from_values([1, 2])
    assert not Mod3Vector.from_values([1, 2]) == Mod3Vector.from_values([2, 1])


def test_str_format():
    assert str(Mod3Vector.from_values([1, 2, 0])) == "1, 2, 0"


def test_index_out_of_range():
    with pytest.raises(IndexError):
        Mod3Vector(3)[3]