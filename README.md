# gale

`gale` is a small HTTP load generator. It opens a number of keep-alive
connections to a server and, on each one, sends the same `GET` request again
as soon as the previous response has been read, for a fixed time. It then
prints a report:

- total requests and total data read
- average, standard deviation, maximum and minimum latency
- the 50th, 75th, 90th and 99th latency percentiles
- a count of responses for each status code, and the number of responses
  with a status of 400 or above
- requests per second and transfer per second (in decimal megabytes)

Both `http` and `https` URLs work. HTTPS connections check certificates and
use SNI. Each connection runs in its own thread.

## Installation

```
pip install .
```

## Usage

Every flag is written as `-x=value` or `--name=value`:

```
gale --url=http://localhost:3000/ --connections=50 --duration=30s
```

| Flag | Short | Meaning | Default |
| --- | --- | --- | --- |
| `--url` | `-u` | URL of the server to test (required) | |
| `--connections` | `-c` | Number of concurrent connections | `10` |
| `--duration` | `-d` | How long to run, a number followed by `s`, `m` or `h`, e.g. `10s` | `10s` |
| `--threads` | `-t` | Thread count shown in the banner before the test | half the CPU count |

A flag given twice, an unknown flag, a value that is not a positive number,
a bad duration unit or a missing URL prints the usage text and exits with
status 1. Durations are capped at 999999 of their unit.

If a connection cannot be opened, `gale` prints `Could not connect: ...` to
standard error and exits with status 1; it does the same with an error
message if no request completed during the test.

The reported data size is an estimate of the bytes on the wire: status line,
headers and body. Totals of 1000 bytes or less are shown as `0`.

## Using it from Python

The pieces are available as a library too:

```python
from gale.results import Result, generate_report
from gale.display import display_report

result = Result(test_duration=1_000_000_000)  # one second, in nanoseconds
result.record(1_200_000, 512, 200)            # latency in nanoseconds, bytes, status
result.record(1_800_000, 512, 200)
result.record(2_500_000, 128, 404)

report = generate_report(result)
display_report(report)
```

- `gale.results` holds `Result` (thread-safe collection of measurements),
  `Report`, `Percentiles`, `generate_report`, and the helpers `average`,
  `standard_deviation` and `percentile`. `generate_report` raises
  `ValueError` when no requests were recorded or the duration is zero.
- `gale.display` renders output with `rich`: `render_report` and
  `render_test_parameters` return styled text, `display_report` and
  `display_test_parameters` print it, `usage_text` returns the help text,
  and `format_duration` / `convert_bytes` format durations and sizes.
- `gale.args.parse_args` parses a list of flags into `Arguments` and raises
  `gale.args.UsageError` on bad input.
- `gale.requester` builds the raw request (`build_request`), opens
  connections (`open_connection`) and runs one connection's request loop
  (`make_requests`) for a `RequestTarget`.
- `gale.cli.main` runs the whole test and returns the exit status.

## What it does not do

`gale` only sends plain `GET` requests to a single URL, with fixed headers
and no request body. It speaks HTTP/1.1 only, has no way to set custom
headers, rate limits or a warm-up period, and does not save results anywhere:
the report is printed to the terminal and nothing else.

## Running the tests

```
pip install .[test]
pytest
```