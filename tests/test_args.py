import pytest

from gale.args import (
    MAX_DURATION_VALUE,
    UNITS,
    Arguments,
    UsageError,
    parse_args,
    parse_duration_value,
    parse_url,
    split_arg,
)


def test_defaults():
    args = parse_args(["-u=http://localhost:3000"])
    defaults = Arguments()
    assert args.threads == -1
    assert args.connections == 10
    assert args.duration == defaults.duration == 10 * UNITS["s"]
    assert args.url_str == "http://localhost:3000"
    assert args.url.netloc == "localhost:3000"
    assert args.url.scheme == "http"


def test_long_and_short_flags():
    args = parse_args(
        ["--threads=3", "-c=50", "--duration=2m", "--url=https://localhost/path"]
    )
    assert args.threads == 3
    assert args.connections == 50
    assert args.duration == 2 * UNITS["m"]
    assert args.url.path == "/path"


@pytest.mark.parametrize(
    "argv",
    [
        ["-t=2", "--threads=3", "-u=http://localhost"],
        ["-u=http://localhost", "--url=http://localhost"],
        ["-d=1s", "-d=2s", "-u=http://localhost"],
    ],
)
def test_repeated_flag_rejected(argv):
    with pytest.raises(UsageError, match="repeating"):
        parse_args(argv)


def test_unknown_flag_rejected():
    with pytest.raises(UsageError, match="Unknown flag"):
        parse_args(["--bogus=1", "-u=http://localhost"])


@pytest.mark.parametrize("argv", [[], ["-c=5"], ["-u="]])
def test_url_required(argv):
    with pytest.raises(UsageError):
        parse_args(argv)


@pytest.mark.parametrize("value", ["0", "-1", "abc", " 5", "1_0", ""])
def test_bad_counts_rejected(value):
    with pytest.raises(UsageError):
        parse_args([f"-c={value}", "-u=http://localhost"])
    with pytest.raises(UsageError):
        parse_args([f"-t={value}", "-u=http://localhost"])


def test_split_arg():
    assert split_arg("--url=http://localhost") == ("--url", "http://localhost")


@pytest.mark.parametrize("raw", ["--url", "a=b=c", "-u=http://x/?q=1"])
def test_split_arg_rejects_wrong_token_count(raw):
    with pytest.raises(UsageError):
        split_arg(raw)


@pytest.mark.parametrize("unit", sorted(UNITS))
def test_parse_duration_units(unit):
    assert parse_duration_value(f"7{unit}") == 7 * UNITS[unit]


def test_parse_duration_clamped():
    assert parse_duration_value("5000000s") == MAX_DURATION_VALUE * UNITS["s"]


def test_parse_duration_plus_sign():
    assert parse_duration_value("+5s") == parse_duration_value("5s")


@pytest.mark.parametrize("value", ["", "s", "0s", "-5s", "5x", "5", "x5s", "5.5s"])
def test_parse_duration_rejects(value):
    with pytest.raises(UsageError):
        parse_duration_value(value)


def test_parse_url_parts():
    parsed = parse_url("https://localhost:8443/api")
    assert (parsed.scheme, parsed.netloc, parsed.path) == ("https", "localhost:8443", "/api")


@pytest.mark.parametrize("raw", ["http://local\nhost", ":nothing", "http://[::1"])
def test_parse_url_rejects(raw):
    with pytest.raises(UsageError):
        parse_url(raw)