import re

import pytest

from flipgraph.utils import parse_natural, pretty_int, pretty_time


def test_pretty_int_small_values_are_plain():
    assert pretty_int(0) == "0"
    assert pretty_int(999) == "999"


def test_pretty_int_thousands():
    assert pretty_int(1500) == "1.50K"


def test_pretty_int_millions():
    assert pretty_int(2_500_000) == "2.5M"


def test_pretty_int_suffix_boundaries():
    assert pretty_int(1000).endswith("K")
    assert pretty_int(999_999).endswith("K")
    assert pretty_int(1_000_000).endswith("M")


def test_pretty_time_short():
    assert pretty_time(3.14159) == "3.14"


@pytest.mark.parametrize("elapsed", [60.0, 61.4, 3599.6, 3661.0, 90061.2])
def test_pretty_time_long_round_trip(elapsed):
    text = pretty_time(elapsed)
    match = re.fullmatch(r"(\d{2,}):(\d{2}):(\d{2})", text)
    assert match is not None
    hours, minutes, seconds = (int(part) for part in match.groups())
    assert minutes < 60 and seconds < 60
    assert hours * 3600 + minutes * 60 + seconds == int(elapsed + 0.5)


def test_parse_natural_plain():
    assert parse_natural("42") == 42


def test_parse_natural_suffix_case_insensitive():
    assert parse_natural("5k") == parse_natural("5K")
    assert parse_natural("3m") == parse_natural("3M")
    assert parse_natural("7b") == parse_natural("7B")


def test_parse_natural_suffix_scales():
    assert parse_natural("2M") == parse_natural("2000K")
    assert parse_natural("1B") == parse_natural("1000M")
    assert parse_natural("1K") == parse_natural("1000")


@pytest.mark.parametrize("text", ["", "abc", "K", "1.5K", "-3"])
def test_parse_natural_rejects_invalid(text):
    with pytest.raises(ValueError):
        parse_natural(text)