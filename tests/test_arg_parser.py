import pytest

from flipgraph.arg_parser import ArgParseError, ArgParser, ArgType


@pytest.fixture
def parser():
    p = ArgParser("prog", "Find schemes")
    p.add("-n", ArgType.NATURAL, "INT", "size", "4")
    p.add("-o", ArgType.STRING, "PATH", "output directory", "schemes")
    p.add("--prob", ArgType.REAL, "REAL", "probability", "0")
    return p


def test_defaults_are_available(parser):
    assert parser.parse([]) is True
    assert parser.get("-n") == "4"
    assert parser.get("-o") == "schemes"


def test_values_override_defaults(parser):
    assert parser.parse(["-n", "5", "-o", "out"]) is True
    assert parser.get("-n") == "5"
    assert parser.get("-o") == "out"


def test_natural_suffix_accepted(parser):
    assert parser.parse(["-n", "10K"]) is True
    assert parser.get("-n") == "10K"


@pytest.mark.parametrize("value", ["0", "abc", "0K", "K", "-1"])
def test_natural_rejected(parser, value):
    with pytest.raises(ArgParseError, match="not natural"):
        parser.parse(["-n", value])


@pytest.mark.parametrize("value", ["-0.5", "0.25", "1", "-"])
def test_real_accepted(parser, value):
    assert parser.parse(["--prob", value]) is True
    assert parser.get("--prob") == value


@pytest.mark.parametrize("value", ["1.2.3", "x", "", "1e3"])
def test_real_rejected(parser, value):
    with pytest.raises(ArgParseError, match="not real"):
        parser.parse(["--prob", value])


def test_unknown_argument(parser):
    with pytest.raises(ArgParseError, match="unknown argument"):
        parser.parse(["--bogus", "1"])


def test_missing_value(parser):
    with pytest.raises(ArgParseError, match="no value for arg"):
        parser.parse(["-n"])


def test_required_argument_missing():
    p = ArgParser("prog")
    p.add("-i", ArgType.STRING, "PATH", "input")
    with pytest.raises(ArgParseError, match='"-i"'):
        p.parse([])


def test_required_argument_given():
    p = ArgParser("prog")
    p.add("-i", ArgType.STRING, "PATH", "input")
    assert p.parse(["-i", "file.txt"]) is True
    assert p.get("-i") == "file.txt"


def test_get_unknown_raises(parser):
    parser.parse([])
    with pytest.raises(ArgParseError):
        parser.get("--missing")


def test_help_prints_usage(parser, capsys):
    assert parser.parse(["--help"]) is False
    out = capsys.readouterr().out
    assert out.startswith("Find schemes\n")
    assert "Usage: ./prog [-n 4] [-o schemes] [--prob 0]" in out
    assert "-n: size (default: 4)" in out


def test_help_shows_required_meta(capsys):
    p = ArgParser("prog", "desc")
    p.add("-i", ArgType.STRING, "PATH", "input")
    p.help()
    out = capsys.readouterr().out
    assert "Usage: ./prog -i PATH" in out
    assert "-i: input\n" in out