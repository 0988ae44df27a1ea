"""Aggregation of load-test measurements into a summary report."""

from __future__ import annotations

import math
import threading
from dataclasses import dataclass, field

NANOS_PER_SECOND = 1_000_000_000
BYTES_PER_MB = 1_000_000


@dataclass(frozen=True)
class Percentiles:
    """Latency percentiles, in nanoseconds."""

    p50: int
    p75: int
    p90: int
    p99: int


@dataclass
class Result:
    """Raw measurements gathered by the request workers.

    Latencies and the test duration are in nanoseconds.
    """

    test_duration: int = 0
    reqs: int = 0
    resp_size: int = 0
    latencies: list[int] = field(default_factory=list)
    status_codes: dict[int, int] = field(default_factory=dict)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def record(self, latency: int, size: int, status: int) -> None:
        """Add one completed request; safe to call from several threads."""
        with self._lock:
            self.reqs += 1
            self.resp_size += size
            self.latencies.append(latency)
            self.status_codes[status] = self.status_codes.get(status, 0) + 1


@dataclass
class Report:
    """Summary statistics of a finished test. Durations are in nanoseconds."""

    avg_latency: int
    max_latency: int
    min_latency: int
    std_dev: int
    rps: float
    tps: float
    total_bytes: int
    total_reqs: int
    status_codes: dict[int, int]
    percentiles: Percentiles


def average(latencies: list[int]) -> int:
    """Mean latency, truncated to whole nanoseconds."""
    if not latencies:
        raise ValueError("cannot average an empty list of latencies")
    total = 0.0
    for latency in latencies:
        total += float(latency)
    return int(total / len(latencies))


def standard_deviation(latencies: list[int], mean: int, total: int) -> int:
    """Population standard deviation around ``mean``, dividing by ``total``."""
    if total == 0:
        raise ValueError("cannot compute deviation over zero requests")
    deviation_sum = 0.0
    for latency in latencies:
        deviation = float(latency) - float(mean)
        deviation_sum += deviation * deviation
    return int(math.sqrt(deviation_sum / total))


def percentile(latencies: list[int], p: float) -> int:
    """Percentile ``p`` (0..1) of an ascending list of latencies."""
    if not latencies:
        raise ValueError("cannot take a percentile of an empty list")
    total = len(latencies)
    if total < 2:
        return latencies[0]

    position = p * total
    if position == math.trunc(position):
        if math.ceil(position) >= total:
            position = total - 1
        return latencies[int(position)]

    if math.ceil(position) >= total:
        position = total - 1
    index = math.ceil(position)
    return (latencies[index] + latencies[index - 1]) // 2


def generate_report(result: Result) -> Report:
    """Build a :class:`Report` from the measurements in ``result``."""
    if not result.latencies:
        raise ValueError("no requests were completed")
    seconds = result.test_duration / NANOS_PER_SECOND
    if seconds == 0:
        raise ValueError("test duration must be positive")

    avg = average(result.latencies)
    ordered = sorted(result.latencies)
    return Report(
        avg_latency=avg,
        max_latency=ordered[-1],
        min_latency=ordered[0],
        std_dev=standard_deviation(result.latencies, avg, result.reqs),
        rps=result.reqs / seconds,
        tps=(result.resp_size / BYTES_PER_MB) / seconds,
        total_bytes=result.resp_size,
        total_reqs=result.reqs,
        status_codes=result.status_codes,
        percentiles=Percentiles(
            p50=percentile(ordered, 0.50),
            p75=percentile(ordered, 0.75),
            p90=percentile(ordered, 0.90),
            p99=percentile(ordered, 0.99),
        ),
    )