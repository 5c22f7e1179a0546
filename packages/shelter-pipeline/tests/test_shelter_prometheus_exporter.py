from shelter_pipeline.core.metrics import InMemoryIngestionMetricsCollector
from shelter_pipeline.core.prometheus_exporter import IngestionPrometheusExporter


def test_ingestion_prometheus_exporter_renders_metrics() -> None:
    metrics = InMemoryIngestionMetricsCollector()
    metrics.observe_stage_duration("fetch", 120.5)
    metrics.observe_stage_duration("parse", 4.1)
    metrics.increment_run("success")
    metrics.increment_run("failed")
    metrics.increment_source_failure("https://primary.example.com/a.csv")
    metrics.increment_decode_fallback()
    metrics.set_accepted_records(6)
    metrics.add_dropped_rows(1)
    metrics.observe_ingestion_duration(0.25)

    output = IngestionPrometheusExporter().render(metrics)

    assert 'ingestion_stage_duration_ms{stage="fetch"} 120.5' in output
    assert 'ingestion_run_total{status="failed"} 1.0' in output
    assert 'source="https://primary.example.com/a.csv"' in output
    assert "ingestion_decode_fallback_total 1.0" in output
    assert "ingestion_shelter_records 6.0" in output
    assert "ingestion_dropped_rows_total 1.0" in output
    assert "ingestion_duration_seconds 0.25" in output


def test_dropped_rows_ignores_non_positive_counts() -> None:
    metrics = InMemoryIngestionMetricsCollector()
    metrics.add_dropped_rows(0)
    metrics.add_dropped_rows(-3)

    assert metrics.dropped_rows == 0


def test_stage_duration_keeps_latest_observation() -> None:
    metrics = InMemoryIngestionMetricsCollector()
    metrics.observe_stage_duration("fetch", 120.5)
    metrics.observe_stage_duration("fetch", 80.0)

    output = IngestionPrometheusExporter().render(metrics)

    assert metrics.stage_durations == {"fetch": 80.0}
    assert 'ingestion_stage_duration_ms{stage="fetch"} 80.0' in output
