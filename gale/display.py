"""Console output: test parameters, usage text and the final report."""

from __future__ import annotations

import math
from decimal import Decimal

from rich.console import Console
from rich.text import Text

from gale.results import Report

TITLE = "bold #fbf1c7"
TITLE_NO_BOLD = "italic #fbf1c7"
TEXT = "#fbf1c7"
RED = "#fb4934"
YELLOW = "#fabd2f"
GREEN = "#b8bb26"
BLUE = "#83a598"

_USAGE = (
    "-USAGE-\n"
    "Flag Structure: -[flagletter]=[value] OR --[flagname]=[value]\n"
    "  --threads OR -t\t\tNumber of maximum threads to use. "
    "Default is No. of physical cores you have\n"
    "  --connections OR -c\t\tNumber of concurrent connections. Ex: -c=10\n"
    "  --duration OR -d\t\tTime to run the test. Ex: -d=10s (Units can be: s,m,h)\n"
    "  --url OR -u\t\t\tThe url of the server. Ex: http://localhost:3000 (REQUIRED)"
)


def _print(text: Text) -> None:
    Console(highlight=False).print(text)


def _fixed(value: int, precision: int) -> str:
    whole, frac = divmod(value, 10**precision)
    digits = f"{frac:0{precision}d}".rstrip("0")
    return f"{whole}.{digits}" if digits else str(whole)


def format_duration(nanos: int) -> str:
    """Render a nanosecond count such as ``1h2m3.5s`` or ``250µs``."""
    sign = "-" if nanos < 0 else ""
    value = abs(nanos)
    if value == 0:
        return "0s"
    for limit, precision, unit in ((1_000, 0, "ns"), (1_000_000, 3, "µs"), (1_000_000_000, 6, "ms")):
        if value < limit:
            return f"{sign}{_fixed(value, precision)}{unit}"
    seconds, frac = divmod(value, 1_000_000_000)
    hours, minutes = divmod(seconds // 60, 60)
    text = f"{_fixed((seconds % 60) * 1_000_000_000 + frac, 9)}s"
    if hours:
        text = f"{hours}h{minutes}m{text}"
    elif minutes:
        text = f"{minutes}m{text}"
    return sign + text


def _format_float(value: float) -> str:
    """Shortest round-trip form, with an exponent only for very large or tiny values."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    number = Decimal(repr(value))
    exponent = number.adjusted()
    if value and not -4 <= exponent < 21:
        return f"{number.scaleb(-exponent).normalize()}e{exponent:+03d}"
    text = format(number, "f")
    return text.rstrip("0").rstrip(".") if "." in text else text


def convert_bytes(size: int) -> str:
    """Size in decimal KB or MB; sizes of 1000 bytes or less come out as ``0``."""
    data, unit = 0, ""
    if size > 1_000:
        data, unit = size // 1_000, "KB"
    if size > 1_000_000:
        data, unit = size // 1_000_000, "MB"
    return f"{data}{unit}"


def render_report(report: Report) -> Text:
    """The styled text of a finished test's statistics."""
    text = Text()
    text.append("Stats:\n", style=TITLE)
    text.append(
        f"  Total Requests: {report.total_reqs}\n"
        f"  Total Data Read: {convert_bytes(report.total_bytes)}\n"
        "  Latency → Avg: ",
        style=TEXT,
    )
    for label, value, style in (
        (" | Std Dev: ", report.avg_latency, BLUE),
        (" | Max: ", report.std_dev, BLUE),
        (" | Min: ", report.max_latency, YELLOW),
        ("\n", report.min_latency, GREEN),
    ):
        text.append(format_duration(value), style=style)
        text.append(label, style=TEXT)

    p = report.percentiles
    text.append("\nLatency Distribution\n", style=TITLE)
    for label, value, style in (
        ("50th", p.p50, GREEN),
        ("75th", p.p75, YELLOW),
        ("90th", p.p90, YELLOW),
        ("99th", p.p99, RED),
    ):
        text.append(f"  {label}: {format_duration(value)}\n", style=style)

    text.append("\nStatus Codes [Code: Count]\n", style=TITLE)
    failures = 0
    for code, count in sorted(report.status_codes.items()):
        style = GREEN if code < 400 else YELLOW if code < 500 else RED
        text.append(f"  {code} : {count}\n", style=style)
        if code > 399:
            failures += count
    if failures > 0:
        text.append(f"\nNon 2XX or 3XX response count: {failures}\n", style=TITLE_NO_BOLD)

    text.append(
        f"\nRequests/sec: {_format_float(report.rps)}\n"
        f"Transfer/sec: {_format_float(report.tps)} MB",
        style=TEXT,
    )
    return text


def display_report(report: Report) -> None:
    """Print the report to standard output."""
    _print(render_report(report))


def render_test_parameters(duration: str, url: str, threads: int, connections: int) -> Text:
    """The styled banner shown before a test starts."""
    return Text(
        f"Running {duration} test on {url}\n"
        f"  {threads} threads with {connections} connections\n",
        style=TEXT,
    )


def display_test_parameters(duration: str, url: str, threads: int, connections: int) -> None:
    """Print the banner shown before a test starts."""
    _print(render_test_parameters(duration, url, threads, connections))


def usage_text() -> str:
    """The command-line help text."""
    return _USAGE


def show_usage() -> None:
    """Print the help text and exit with status 1."""
    _print(Text(_USAGE, style=TEXT))
    raise SystemExit(1)