"""Prometheus metrics for diagram rendering and the paper store."""

from prometheus_client import Counter, Histogram

# Diagram rendering metrics
diagram_render_latency_ms = Histogram(
    "diagram_render_latency_ms",
    "Diagram render latency in milliseconds",
    ["engine", "outcome"],
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 4000, 8000],
)

diagram_render_total = Counter(
    "diagram_render_total",
    "Total diagram render attempts",
    ["engine", "outcome"],
)

diagram_render_stale_total = Counter(
    "diagram_render_stale_total",
    "Diagram renders discarded because a newer render was issued for the slot",
)

# Paper lifecycle metrics
paper_generation_total = Counter(
    "paper_generation_total",
    "Total paper generation attempts",
    ["outcome"],
)

paper_versions_appended_total = Counter(
    "paper_versions_appended_total",
    "Total versions appended to existing papers",
)


class PrometheusRenderMetrics:
    """Prometheus-based diagram render metrics implementation."""

    def record_render(self, engine: str, outcome: str, latency_ms: float) -> None:
        """Record one render attempt and its latency."""
        diagram_render_latency_ms.labels(engine=engine, outcome=outcome).observe(latency_ms)
        diagram_render_total.labels(engine=engine, outcome=outcome).inc()

    def inc_stale(self) -> None:
        """Increment discarded stale render counter."""
        diagram_render_stale_total.inc()
