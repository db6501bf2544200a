"""Telemetry helpers for the routing and strategy engines."""

from __future__ import annotations

import os

from prometheus_client import CollectorRegistry, Counter, Histogram

from .config import get_settings

REGISTRY = CollectorRegistry()

_routing_counter = Counter(
    "navcaddy_routing_decisions_total",
    "Routing decisions by result variant",
    labelnames=("result",),
    registry=REGISTRY,
)

_navigation_counter = Counter(
    "navcaddy_navigation_actions_total",
    "Navigation actions produced by the executor",
    labelnames=("action",),
    registry=REGISTRY,
)

_strategy_counter = Counter(
    "navcaddy_strategy_total",
    "Hole strategies computed by dominant miss",
    labelnames=("dominant_miss",),
    registry=REGISTRY,
)

_strategy_histogram = Histogram(
    "navcaddy_strategy_latency_seconds",
    "Latency of hole strategy computation in seconds",
    registry=REGISTRY,
)

_fallback_counter = Counter(
    "navcaddy_provider_fallback_total",
    "Boundary calls that fell back to a default",
    labelnames=("source",),
    registry=REGISTRY,
)


def _enabled() -> bool:
    return get_settings().telemetry_enabled


def record_routing_decision(result: str) -> None:
    if _enabled():
        _routing_counter.labels(result=result).inc()


def record_navigation_action(action: str) -> None:
    if _enabled():
        _navigation_counter.labels(action=action).inc()


def record_strategy(*, dominant_miss: str, duration_s: float) -> None:
    """Publish Prometheus metrics for a computed strategy."""
    if not _enabled():
        return
    _strategy_counter.labels(dominant_miss=dominant_miss).inc()
    _strategy_histogram.observe(duration_s)


def record_fallback(source: str) -> None:
    if _enabled():
        _fallback_counter.labels(source=source).inc()


def build_log_payload(event: str, **fields: object) -> dict:
    """Build a structured log record for downstream sinks."""
    payload: dict = {"event": event, **fields}
    payload["build_version"] = os.getenv("BUILD_VERSION", "unknown")
    payload["git_sha"] = os.getenv("GIT_SHA", "unknown")
    return payload


__all__ = [
    "REGISTRY",
    "record_routing_decision",
    "record_navigation_action",
    "record_strategy",
    "record_fallback",
    "build_log_payload",
]
