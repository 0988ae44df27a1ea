import pytest

from gale.display import (
    convert_bytes,
    display_report,
    format_duration,
    render_report,
    render_test_parameters,
    show_usage,
    usage_text,
)
from gale.results import Result, generate_report

SECOND = 1_000_000_000


def _report(codes):
    result = Result(test_duration=SECOND)
    for code, count in codes.items():
        for latency in range(1, count + 1):
            result.record(latency * 1_000_000, 2_000, code)
    return generate_report(result)


def test_format_duration_zero():
    assert format_duration(0) == "0s"


def test_format_duration_fractional_seconds():
    assert format_duration(1_500_000_000) == "1.5s"


def test_format_duration_hours():
    assert format_duration(3_600 * SECOND) == "1h0m0s"


@pytest.mark.parametrize("nanos", [1, 999, 1_234, 999_999, 5_000_000, 61 * SECOND])
def test_format_duration_negative_mirrors_positive(nanos):
    assert format_duration(-nanos) == "-" + format_duration(nanos)


@pytest.mark.parametrize(
    "nanos, suffix",
    [(500, "ns"), (1_500, "µs"), (2_500_000, "ms"), (3 * SECOND, "s")],
)
def test_format_duration_unit_suffix(nanos, suffix):
    text = format_duration(nanos)
    assert text.endswith(suffix)
    assert text[: -len(suffix)].replace(".", "").isdigit()


def test_format_duration_minutes_and_hours_present():
    text = format_duration(2 * 3_600 * SECOND + 5 * 60 * SECOND)
    assert "h" in text and "m" in text and text.endswith("s")


def test_convert_bytes_units():
    assert convert_bytes(5_000).endswith("KB")
    assert convert_bytes(5_000_000).endswith("MB")
    assert not convert_bytes(1_000).endswith("KB")
    assert not convert_bytes(1_000_000).endswith("MB")


def test_render_report_sections():
    report = _report({200: 4})
    plain = render_report(report).plain
    assert plain.startswith("Stats:")
    assert f"Total Requests: {report.total_reqs}" in plain
    assert "Latency Distribution" in plain
    assert "Status Codes [Code: Count]" in plain
    assert "Non 2XX or 3XX response count" not in plain
    assert plain.rstrip().endswith("MB")


def test_render_report_counts_failures():
    codes = {200: 5, 404: 2, 500: 1}
    plain = render_report(_report(codes)).plain
    assert f"Non 2XX or 3XX response count: {codes[404] + codes[500]}" in plain
    assert plain.index("  200 : ") < plain.index("  404 : ") < plain.index("  500 : ")


def test_render_report_integral_rate_has_no_fraction():
    report = _report({200: 3})
    report.rps = 100.0
    assert "Requests/sec: 100\n" in render_report(report).plain


def test_display_report_prints(capsys):
    display_report(_report({200: 2}))
    assert "Stats:" in capsys.readouterr().out


def test_render_test_parameters():
    plain = render_test_parameters("10s", "http://localhost:3000", 4, 25).plain
    assert "Running 10s test on http://localhost:3000" in plain
    assert "4 threads with 25 connections" in plain


def test_usage_text_lists_flags():
    text = usage_text()
    assert text.startswith("-USAGE-")
    for flag in ("--threads OR -t", "--connections OR -c", "--duration OR -d", "--url OR -u"):
        assert flag in text


def test_show_usage_exits(capsys):
    with pytest.raises(SystemExit) as info:
        show_usage()
    assert info.value.code == 1
    assert "-USAGE-" in capsys.readouterr().out