from __future__ import annotations

from prometheus_client import CollectorRegistry, Gauge, generate_latest

from shelter_pipeline.core.metrics import InMemoryIngestionMetricsCollector


class IngestionPrometheusExporter:
    def __init__(self) -> None:
        self._registry = CollectorRegistry()
        self._stage_duration = Gauge(
            "ingestion_stage_duration_ms",
            "Ingestion stage duration in milliseconds",
            labelnames=("stage",),
            registry=self._registry,
        )
        self._run_total = Gauge(
            "ingestion_run_total",
            "Ingestion runs grouped by status",
            labelnames=("status",),
            registry=self._registry,
        )
        self._source_failures_total = Gauge(
            "ingestion_source_failures_total",
            "Dataset source failures grouped by source",
            labelnames=("source",),
            registry=self._registry,
        )
        self._decode_fallback_total = Gauge(
            "ingestion_decode_fallback_total",
            "Payloads decoded lossily after every candidate encoding failed",
            registry=self._registry,
        )
        self._accepted_records = Gauge(
            "ingestion_shelter_records",
            "Shelter records in the latest successful ingestion",
            registry=self._registry,
        )
        self._dropped_rows = Gauge(
            "ingestion_dropped_rows_total",
            "Rows dropped for missing id, name or coordinates",
            registry=self._registry,
        )
        self._duration_seconds = Gauge(
            "ingestion_duration_seconds",
            "Duration of the latest ingestion run",
            registry=self._registry,
        )

    def render(self, metrics: InMemoryIngestionMetricsCollector) -> str:
        for stage, duration in metrics.stage_durations.items():
            self._stage_duration.labels(stage=stage).set(duration)
        for status, count in metrics.ingestion_run_total.items():
            self._run_total.labels(status=status).set(count)
        for source, count in metrics.source_failures_total.items():
            self._source_failures_total.labels(source=source).set(count)
        self._decode_fallback_total.set(metrics.decode_fallback_total)
        self._accepted_records.set(metrics.accepted_records)
        self._dropped_rows.set(metrics.dropped_rows)
        if metrics.ingestion_duration_seconds is not None:
            self._duration_seconds.set(metrics.ingestion_duration_seconds)
        return generate_latest(self._registry).decode("utf-8")
