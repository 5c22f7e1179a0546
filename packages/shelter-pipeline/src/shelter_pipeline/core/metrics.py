from __future__ import annotations

from collections import defaultdict


class InMemoryIngestionMetricsCollector:
    def __init__(self) -> None:
        self.stage_durations: dict[str, float] = {}
        self.ingestion_run_total: dict[str, int] = defaultdict(int)
        self.source_failures_total: dict[str, int] = defaultdict(int)
        self.decode_fallback_total = 0
        self.accepted_records = 0
        self.dropped_rows = 0
        self.ingestion_duration_seconds: float | None = None
        self.active_source: str | None = None

    def observe_stage_duration(self, stage: str, duration_ms: float) -> None:
        # latest value per stage
        self.stage_durations[stage] = duration_ms

    def increment_run(self, status: str) -> None:
        self.ingestion_run_total[status] += 1

    def increment_source_failure(self, source: str) -> None:
        self.source_failures_total[source] += 1

    def increment_decode_fallback(self) -> None:
        self.decode_fallback_total += 1

    def set_active_source(self, source: str) -> None:
        self.active_source = source

    def set_accepted_records(self, count: int) -> None:
        self.accepted_records = count

    def add_dropped_rows(self, count: int) -> None:
        if count <= 0:
            return
        self.dropped_rows += count

    def observe_ingestion_duration(self, duration_seconds: float) -> None:
        self.ingestion_duration_seconds = duration_seconds
