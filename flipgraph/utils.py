"""Formatting and parsing helpers for counts and durations."""

_MULTIPLIERS = {
    "k": 1_000,
    "m": 1_000_000,
    "b": 1_000_000_000,
}


def pretty_int(value: int) -> str:
    """Format a count compactly: plain below 1000, then K or M."""
    if value < 1000:
        return str(value)
    if value < 1_000_000:
        return f"{value / 1000.0:.2f}K"
    return f"{value / 1_000_000.0:.1f}M"


def pretty_time(elapsed: float) -> str:
    """Format seconds as ``S.SS`` below a minute, otherwise as ``HH:MM:SS``."""
    if elapsed < 60:
        return f"{elapsed:.2f}"

    seconds = int(elapsed + 0.5)
    hours, rest = divmod(seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def parse_natural(value: str) -> int:
    """Parse a non-negative integer with an optional K, M or B suffix."""
    if not value:
        raise ValueError("empty natural number")

    multiplier = _MULTIPLIERS.get(value[-1].lower(), 1)
    digits = value[:-1] if multiplier > 1 else value
    digits = digits.strip()

    if not digits.isascii() or not digits.isdigit():
        raise ValueError(f"invalid natural number: {value!r}")

    return int(digits) * multiplier