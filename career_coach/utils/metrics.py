"""
In-process generation metrics.

Counters:
    <provider>.generate.success / .error   one per provider call
    generation.fallback                    primary failed, secondary tried
    generation.failed                      both providers failed
    insights.cache_hit / .cache_miss       Insight cache decisions

Histograms:
    <provider>.generate.duration_ms

Snapshot is served at /metrics; provider calls also emit a `metrics.call`
log line.
"""

import time
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import Dict, Any, Optional

from career_coach.utils.logger import get_logger

logger = get_logger()

_counters: Dict[str, int] = defaultdict(int)
_histograms: Dict[str, list] = defaultdict(list)

MAX_HISTOGRAM_SAMPLES = 500  # Rolling window


def inc(name: str, value: int = 1) -> None:
    _counters[name] += value


def observe(name: str, value: float) -> None:
    samples = _histograms[name]
    samples.append(value)
    if len(samples) > MAX_HISTOGRAM_SAMPLES:
        del samples[:-MAX_HISTOGRAM_SAMPLES]


def _record_call(provider: str, operation: str, started: float, status: str) -> None:
    duration_ms = (time.monotonic() - started) * 1000
    observe(f"{provider}.{operation}.duration_ms", duration_ms)
    inc(f"{provider}.{operation}.{status}")

    log_fn = logger.info if status == "success" else logger.warning
    log_fn(
        "metrics.call",
        extra={
            "provider": provider,
            "operation": operation,
            "duration_ms": round(duration_ms, 1),
            "status": status,
        },
    )


@asynccontextmanager
async def track_duration(provider: str, operation: str = "generate"):
    """
    Time one provider call and count it as a success or an error.

    Usage:
        async with track_duration("gemini"):
            response = await model.generate_content_async(prompt)
    """
    started = time.monotonic()
    try:
        yield
    except Exception:
        _record_call(provider, operation, started, "error")
        raise
    _record_call(provider, operation, started, "success")


def get_counter(name: str) -> int:
    return _counters.get(name, 0)


def _ratio(numerator: int, denominator: int) -> Optional[float]:
    return round(numerator / denominator, 3) if denominator else None


def _summarize(samples: list) -> Dict[str, Any]:
    ordered = sorted(samples)
    last = len(ordered) - 1
    return {
        "count": len(ordered),
        "p50": round(ordered[int(len(ordered) * 0.5)], 1),
        "p95": round(ordered[min(int(len(ordered) * 0.95), last)], 1),
        "max": round(ordered[last], 1),
    }


def get_snapshot() -> Dict[str, Any]:
    """Counters, duration summaries and the two ratios worth alerting on."""
    hits = get_counter("insights.cache_hit")
    misses = get_counter("insights.cache_miss")
    fallbacks = get_counter("generation.fallback")
    primary_calls = sum(v for k, v in _counters.items() if k.startswith("gemini."))

    return {
        "counters": dict(_counters),
        "histograms": {name: _summarize(s) for name, s in _histograms.items() if s},
        "ratios": {
            "insights_cache_hit": _ratio(hits, hits + misses),
            "provider_fallback": _ratio(fallbacks, primary_calls),
        },
    }


def reset() -> None:
    """Clear everything (tests)."""
    _counters.clear()
    _histograms.clear()
