"""A small command-line parser for ``name value`` style arguments."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass

_SUFFIXES = frozenset("KkMmBb")


class ArgType(enum.Enum):
    """Kind of value an argument accepts."""

    STRING = "string"
    NATURAL = "natural"
    REAL = "real"


@dataclass(frozen=True)
class Arg:
    """Description of one command-line argument."""

    name: str
    arg_type: ArgType
    meta: str
    description: str = ""
    value: str = ""

    @property
    def required(self) -> bool:
        return self.value == ""


class ArgParseError(ValueError):
    """Raised when the command line cannot be parsed."""


def _is_natural(value: str) -> bool:
    if not value:
        return False
    digits = value[:-1] if value[-1] in _SUFFIXES else value
    if not digits or not digits.isascii() or not digits.isdigit():
        return False
    return int(digits) > 0


def _is_real(value: str) -> bool:
    if not value:
        return False
    body = value[1:] if value[0] == "-" else value
    if body.count(".") > 1:
        return False
    return all(ch == "." or "0" <= ch <= "9" for ch in body)


class ArgParser:
    """Parses arguments given as alternating names and values."""

    def __init__(self, name: str, description: str = "") -> None:
        self.name = name
        self.description = description
        self._args: list[Arg] = []
        self._parsed: dict[str, str] = {}

    def add(self, name: str, arg_type: ArgType, meta: str, description: str = "", value: str = "") -> None:
        """Register an argument; an empty default value makes it required."""
        self._args.append(Arg(name, arg_type, meta, description, value))

    def parse(self, argv: list[str]) -> bool:
        """Parse ``argv`` (without the program name).

        Returns False when help was requested and printed, True otherwise.
        Raises ArgParseError on invalid input.
        """
        argv = list(argv)
        if argv == ["--help"]:
            self.help()
            return False

        known = {arg.name: arg for arg in self._args}
        self._parsed = {arg.name: arg.value for arg in self._args if not arg.required}

        names = argv[0::2]
        values = argv[1::2]
        for position, name in enumerate(names):
            if name not in known:
                raise ArgParseError(f'unknown argument "{name}"')
            if position >= len(values):
                raise ArgParseError(f'no value for arg "{name}"')
            value = values[position]
            self._parsed[name] = value
            self._validate(known[name], value)

        for arg in self._args:
            if arg.required and arg.name not in self._parsed:
                raise ArgParseError(f'no value for argument "{arg.name}"')

        return True

    def help(self) -> str:
        """Print the usage and the description of every argument; return the text."""
        usage = [f"Usage: ./{self.name}"]
        for arg in self._args:
            if arg.required:
                usage.append(f"{arg.name} {arg.meta}")
            else:
                usage.append(f"[{arg.name} {arg.value}]")

        lines = [self.description, " ".join(usage), "", "Arguments description:"]
        for arg in self._args:
            line = f"{arg.name}: {arg.description}"
            if not arg.required:
                line += f" (default: {arg.value})"
            lines.append(line)

        text = "\n".join(lines)
        sys.stdout.write(text + "\n")
        return text

    def get(self, name: str) -> str:
        """Return the parsed (or default) value of an argument."""
        try:
            return self._parsed[name]
        except KeyError:
            raise ArgParseError(f'no parsed value for argument "{name}"') from None

    @staticmethod
    def _validate(arg: Arg, value: str) -> None:
        if arg.arg_type is ArgType.NATURAL and not _is_natural(value):
            raise ArgParseError(f'value for arg "{arg.name}" is not natural ({value})')
        if arg.arg_type is ArgType.REAL and not _is_real(value):
            raise ArgParseError(f'value for arg "{arg.name}" is not real ({value})')