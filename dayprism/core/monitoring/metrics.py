"""Prometheus metrics helpers for dayprism services."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

TRANSPORT_FAILURE = "transport_failure"


class MetricsCollector:
    """Collects and exposes Prometheus metrics for upstream fetches."""

    def __init__(self, *, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()
        self.upstream_latency_seconds = Histogram(
            "dayprism_upstream_latency_seconds",
            "Latency distribution for upstream intraday requests.",
            buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, float("inf")),
            registry=self.registry,
        )
        self.upstream_attempts_total = Counter(
            "dayprism_upstream_attempts_total",
            "Upstream requests grouped by tier and classified outcome.",
            ("tier", "outcome"),
            registry=self.registry,
        )
        self.tier_fallbacks_total = Counter(
            "dayprism_tier_fallbacks_total",
            "Requests that fell back from the premium to the free tier.",
            registry=self.registry,
        )
        self.aggregated_days_total = Counter(
            "dayprism_aggregated_days_total",
            "Day aggregates produced.",
            registry=self.registry,
        )

    def observe_attempt(self, tier: str, outcome: str | None, latency_seconds: float) -> None:
        """Record one upstream attempt; ``outcome`` is ``None`` for transport failures."""

        self.upstream_latency_seconds.observe(latency_seconds)
        self.upstream_attempts_total.labels(tier=tier, outcome=outcome or TRANSPORT_FAILURE).inc()

    def record_fallback(self) -> None:
        self.tier_fallbacks_total.inc()

    def record_days(self, count: int) -> None:
        if count > 0:
            self.aggregated_days_total.inc(count)

    def render(self) -> bytes:
        """Render metrics in Prometheus exposition format."""

        return generate_latest(self.registry)


_DEFAULT_COLLECTOR: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Return the global metrics collector instance."""

    global _DEFAULT_COLLECTOR
    if _DEFAULT_COLLECTOR is None:
        _DEFAULT_COLLECTOR = MetricsCollector()
    return _DEFAULT_COLLECTOR


def configure_metrics_collector(collector: MetricsCollector | None) -> None:
    """Override the global metrics collector for application wiring or tests."""

    global _DEFAULT_COLLECTOR
    _DEFAULT_COLLECTOR = collector
