"""Explore search metrics.

Collects search latency and per-mirror race outcomes for ``GET /metrics``.
"""
import time
from collections import defaultdict
from contextlib import contextmanager
from urllib.parse import urlsplit

_search_timings_ms: list[float] = []
_mirror_wins: dict[str, int] = defaultdict(int)
_mirror_failures: dict[str, int] = defaultdict(int)
_upstream_outages: int = 0


def _host(url: str) -> str:
    return urlsplit(url).netloc or url


@contextmanager
def record_search_latency():
    start = time.perf_counter()
    try:
        yield
    finally:
        _search_timings_ms.append((time.perf_counter() - start) * 1000.0)


def record_mirror_win(url: str) -> None:
    _mirror_wins[_host(url)] += 1


def record_mirror_failure(url: str) -> None:
    _mirror_failures[_host(url)] += 1


def record_upstream_outage() -> None:
    global _upstream_outages
    _upstream_outages += 1


def _percentiles(values: list[float]) -> dict:
    if not values:
        return {"count": 0, "p95_ms": None, "p99_ms": None}
    vals = sorted(values)
    count = len(vals)

    def _p(p: float) -> float:
        idx = int(round(p * (count - 1)))
        return vals[idx]
    return {"count": count, "p95_ms": _p(0.95), "p99_ms": _p(0.99)}


def snapshot_metrics() -> dict:
    return {
        "search": _percentiles(_search_timings_ms),
        "mirrors": {
            "wins": dict(_mirror_wins),
            "failures": dict(_mirror_failures),
            "outages": _upstream_outages,
        },
    }


def reset_metrics() -> None:
    global _upstream_outages
    _search_timings_ms.clear()
    _mirror_wins.clear()
    _mirror_failures.clear()
    _upstream_outages = 0
