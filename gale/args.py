"""Command-line argument parsing."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from urllib.parse import SplitResult, urlsplit

NANOS_PER_SECOND = 1_000_000_000
UNITS = {
    "s": NANOS_PER_SECOND,
    "m": 60 * NANOS_PER_SECOND,
    "h": 3_600 * NANOS_PER_SECOND,
}
MAX_DURATION_VALUE = 999_999

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_ALIASES = {
    "--threads": "threads",
    "-t": "threads",
    "--connections": "connections",
    "-c": "connections",
    "--duration": "duration",
    "-d": "duration",
    "--url": "url",
    "-u": "url",
}


class UsageError(ValueError):
    """The command line is malformed; the usage text should be shown."""


@dataclass
class Arguments:
    """Parsed settings. ``duration`` is in nanoseconds; ``threads`` -1 means default."""

    threads: int = -1
    connections: int = 10
    duration: int = 10 * NANOS_PER_SECOND
    url: SplitResult | None = None
    url_str: str = ""


def _atoi(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise UsageError(f"invalid number: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise UsageError(f"number out of range: {text!r}")
    return value


def _positive(text: str) -> int:
    value = _atoi(text)
    if value < 1:
        raise UsageError(f"value must be at least 1: {text!r}")
    return value


def split_arg(arg: str) -> tuple[str, str]:
    """Split ``flag=value`` into its two parts."""
    tokens = arg.split("=")
    if len(tokens) != 2:
        raise UsageError(f"malformed argument: {arg!r}")
    return tokens[0], tokens[1]


def parse_url(raw: str) -> SplitResult:
    """Parse a URL, rejecting control characters and a missing scheme."""
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in raw):
        raise UsageError("invalid control character in URL")
    if raw.startswith(":"):
        raise UsageError("missing protocol scheme")
    try:
        parsed = urlsplit(raw)
        parsed.port  # noqa: B018 - validates the port
    except ValueError as exc:
        raise UsageError(str(exc)) from exc
    return parsed


def parse_duration_value(value: str) -> int:
    """Parse ``<n><unit>`` with unit s, m or h into nanoseconds; n is capped."""
    if not value:
        raise UsageError("empty duration")
    amount = min(_positive(value[:-1]), MAX_DURATION_VALUE)
    try:
        multiplier = UNITS[value[-1]]
    except KeyError:
        raise UsageError(f"unknown duration unit: {value[-1]!r}") from None
    return amount * multiplier


def parse_args(argv: list[str] | None = None) -> Arguments:
    """Parse flags of the form ``-x=value`` or ``--name=value``."""
    if argv is None:
        argv = sys.argv[1:]
    arguments = Arguments()
    seen: set[str] = set()

    for raw in argv:
        flag, value = split_arg(raw)
        name = _ALIASES.get(flag)
        if name is None:
            raise UsageError("Unknown flag?")
        if name in seen:
            raise UsageError("repeating arguments")
        seen.add(name)

        if name == "threads":
            arguments.threads = _positive(value)
        elif name == "connections":
            arguments.connections = _positive(value)
        elif name == "duration":
            arguments.duration = parse_duration_value(value)
        else:
            arguments.url_str = value
            arguments.url = parse_url(value)

    if not arguments.url_str:
        raise UsageError("a URL is required")
    return arguments