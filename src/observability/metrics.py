"""
Prometheus metrics for monitoring the extraction pipeline.

Defines and exposes metrics for:
- Documents processed per outcome
- Events extracted per type
- Stage latency (acquisition, extraction, persistence)
- Acquisition and persistence failures

Metrics are exposed via HTTP endpoint for Prometheus scraping.
"""

import logging

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    start_http_server,
)

from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# Buckets for latency histograms (in seconds)
LATENCY_BUCKETS = (0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)


class MetricsCollector:
    """
    Prometheus metrics collector for the almanac-events pipeline.

    Usage:
        metrics = MetricsCollector()
        metrics.start_server()

        metrics.record_document("success")
        metrics.record_stage_latency("extraction", 0.05)
    """

    def __init__(self, registry: CollectorRegistry = REGISTRY):
        """Initialize Prometheus metrics."""
        self._registry = registry

        self.documents_processed = Counter(
            "almanac_events_documents_processed_total",
            "Total number of documents processed",
            ["status"],  # status: success, insufficient_text, error
            registry=registry,
        )

        self.events_extracted = Counter(
            "almanac_events_events_extracted_total",
            "Total number of events extracted",
            ["event_type"],
            registry=registry,
        )

        self.acquisition_errors = Counter(
            "almanac_events_acquisition_errors_total",
            "Total text acquisition failures",
            ["error_type"],
            registry=registry,
        )

        self.files_saved = Counter(
            "almanac_events_files_saved_total",
            "Output files written, by format and result",
            ["format", "status"],
            registry=registry,
        )

        self.stage_latency = Histogram(
            "almanac_events_stage_latency_seconds",
            "Time spent in each pipeline stage",
            ["stage"],  # acquisition, extraction, persistence
            buckets=LATENCY_BUCKETS,
            registry=registry,
        )

        logger.info("Prometheus metrics initialized")

    def start_server(self, port: int | None = None) -> None:
        """
        Start Prometheus metrics HTTP server.

        Args:
            port: Port to expose metrics on (default from settings)
        """
        settings = get_settings()
        port = port or settings.metrics_port

        start_http_server(port, registry=self._registry)
        logger.info(f"Prometheus metrics server started on port {port}")

    # Convenience methods

    def record_document(self, status: str) -> None:
        self.documents_processed.labels(status=status).inc()

    def record_events(self, counts_by_type: dict[str, int]) -> None:
        """
        Record extracted events.

        Args:
            counts_by_type: Number of events per event type
        """
        for event_type, count in counts_by_type.items():
            self.events_extracted.labels(event_type=event_type).inc(count)

    def record_stage_latency(self, stage: str, latency: float) -> None:
        self.stage_latency.labels(stage=stage).observe(latency)

    def record_acquisition_error(self, error_type: str) -> None:
        self.acquisition_errors.labels(error_type=error_type).inc()

    def record_save(self, fmt: str, success: bool) -> None:
        self.files_saved.labels(
            format=fmt,
            status="success" if success else "error",
        ).inc()


# Global metrics instance
_metrics: MetricsCollector | None = None


def get_metrics() -> MetricsCollector:
    """Get global metrics collector instance."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics
