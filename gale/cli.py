"""Command entry point: parse arguments, run the load test, print the report."""

from __future__ import annotations

import os
import queue
import sys
import threading
import time
from urllib.parse import SplitResult, unquote

from gale.args import UsageError, parse_args
from gale.display import display_report, display_test_parameters, format_duration, show_usage
from gale.requester import RequestTarget, make_requests
from gale.results import Result, generate_report

_REPORTED_ERRORS = frozenset({"Unknown flag?", "repeating arguments"})


def resolve_url_port(url: SplitResult) -> tuple[str, str]:
    """Return the host and the ``host:port`` address to dial for ``url``."""
    host = url.netloc.rpartition("@")[2]
    if url.scheme == "http":
        return host, host if ":" in host else f"{host}:80"
    if url.scheme == "https":
        return host, f"{host}:443"
    return "", ""


def _run(result: Result, target: RequestTarget, connections: int) -> OSError | None:
    """Run the workers; return the first connection failure, which ends the wait."""
    failures: queue.SimpleQueue[OSError] = queue.SimpleQueue()

    def work() -> None:
        try:
            make_requests(result, target)
        except OSError as exc:
            failures.put(exc)

    workers = [threading.Thread(target=work, daemon=True) for _ in range(connections)]
    for worker in workers:
        worker.start()
    while failures.empty() and any(worker.is_alive() for worker in workers):
        time.sleep(0.05)
    return None if failures.empty() else failures.get()


def main(argv: list[str] | None = None) -> int:
    """Run a load test as described by the command line."""
    threads = max((os.cpu_count() or 1) // 2, 1)
    try:
        arguments = parse_args(argv)
    except UsageError as exc:
        if str(exc) in _REPORTED_ERRORS:
            print(f"ERROR: {exc}")
        show_usage()

    if arguments.threads != -1:
        threads = arguments.threads

    url = arguments.url
    host, address = resolve_url_port(url)
    target = RequestTarget(
        host=host,
        scheme=url.scheme,
        target=address,
        path=unquote(url.path),
        duration=arguments.duration,
    )

    display_test_parameters(
        format_duration(arguments.duration), arguments.url_str, threads, arguments.connections
    )

    result = Result(test_duration=arguments.duration)
    failure = _run(result, target, arguments.connections)
    if failure is not None:
        print(f"Could not connect: {failure}", file=sys.stderr)
        return 1

    try:
        report = generate_report(result)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    display_report(report)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())