from __future__ import annotations

from shelter_pipeline.core.metrics import InMemoryIngestionMetricsCollector
from shelter_pipeline.core.prometheus_exporter import IngestionPrometheusExporter

ingestion_metrics = InMemoryIngestionMetricsCollector()
ingestion_exporter = IngestionPrometheusExporter()
