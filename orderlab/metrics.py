"""Request counters and duration histograms in the Prometheus text format."""

from __future__ import annotations

import math
import threading
from bisect import bisect_left
from dataclasses import dataclass, field
from itertools import accumulate

DEFAULT_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)
NAMESPACE = "app"
COUNTER_NAME = f"{NAMESPACE}_handler_request_total_counter"
COUNTER_HELP = "Total amount of request by handler"
HISTOGRAM_NAME = f"{NAMESPACE}_handler_duration_histogram"
HISTOGRAM_HELP = "Total duration of handler processing by request"


@dataclass
class _Histogram:
    counts: list[int]
    total: float = 0.0
    count: int = 0


def _fmt(value: float) -> str:
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


@dataclass
class Metrics:
    """Per-handler request counts and duration histograms."""

    buckets: tuple[float, ...] = DEFAULT_BUCKETS
    _requests: dict[str, int] = field(default_factory=dict, init=False, repr=False)
    _histograms: dict[str, _Histogram] = field(default_factory=dict, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        self.buckets = tuple(sorted(self.buckets))

    def inc_request_counter(self, handler: str) -> None:
        with self._lock:
            self._requests[handler] = self._requests.get(handler, 0) + 1

    def store_handler_duration(self, handler: str, seconds: float) -> None:
        with self._lock:
            hist = self._histograms.get(handler)
            if hist is None:
                hist = _Histogram(counts=[0] * (len(self.buckets) + 1))
                self._histograms[handler] = hist
            hist.counts[bisect_left(self.buckets, seconds)] += 1
            hist.total += seconds
            hist.count += 1

    def request_count(self, handler: str) -> int:
        with self._lock:
            return self._requests.get(handler, 0)

    def bucket_counts(self, handler: str) -> dict[float, int]:
        """Cumulative observation counts keyed by upper bound, ending with infinity."""
        bounds = (*self.buckets, math.inf)
        with self._lock:
            hist = self._histograms.get(handler)
            counts = hist.counts if hist else [0] * len(bounds)
            return dict(zip(bounds, accumulate(counts)))

    def render(self) -> str:
        """Return all metrics in the Prometheus text exposition format."""
        lines: list[str] = []
        with self._lock:
            requests = dict(self._requests)
            histograms = {
                name: _Histogram(list(h.counts), h.total, h.count)
                for name, h in self._histograms.items()
            }
        if requests:
            lines.append(f"# HELP {COUNTER_NAME} {COUNTER_HELP}")
            lines.append(f"# TYPE {COUNTER_NAME} counter")
            for handler in sorted(requests):
                lines.append(f'{COUNTER_NAME}{{handler="{handler}"}} {requests[handler]}')
        if histograms:
            lines.append(f"# HELP {HISTOGRAM_NAME} {HISTOGRAM_HELP}")
            lines.append(f"# TYPE {HISTOGRAM_NAME} histogram")
            bounds = (*self.buckets, math.inf)
            for handler in sorted(histograms):
                hist = histograms[handler]
                for bound, total in zip(bounds, accumulate(hist.counts)):
                    lines.append(
                        f'{HISTOGRAM_NAME}_bucket{{handler="{handler}",le="{_fmt(bound)}"}} {total}'
                    )
                lines.append(f'{HISTOGRAM_NAME}_sum{{handler="{handler}"}} {_fmt(hist.total)}')
                lines.append(f'{HISTOGRAM_NAME}_count{{handler="{handler}"}} {hist.count}')
        return "\n".join(lines) + "\n" if lines else ""