from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from time import perf_counter
from typing import Awaitable, Callable, TypeVar

from shared.cancellation import CancellationToken, QueryCancelledError

from shelter_pipeline.core.assembler import DEFAULT_MUNICIPALITY_NAME, assemble_shelters
from shelter_pipeline.core.exceptions import EmptyDatasetError, IngestionError
from shelter_pipeline.core.metrics import InMemoryIngestionMetricsCollector
from shelter_pipeline.core.models import FetchResult, IngestionResult
from shelter_pipeline.core.parser import parse_delimited_rows

R = TypeVar("R")
logger = logging.getLogger(__name__)


class DatasetFetcher(ABC):
    @abstractmethod
    async def fetch(self, token: CancellationToken | None = None) -> FetchResult:
        raise NotImplementedError


class IngestionPipeline:
    def __init__(
        self,
        fetcher: DatasetFetcher,
        metrics: InMemoryIngestionMetricsCollector | None = None,
        default_municipality_name: str = DEFAULT_MUNICIPALITY_NAME,
    ) -> None:
        self._fetcher = fetcher
        self._metrics = metrics
        self._default_municipality_name = default_municipality_name

    async def run(self, token: CancellationToken | None = None) -> IngestionResult:
        logger.info("ingestion_started", extra={"component": "shelter_pipeline"})
        total_started = perf_counter()
        try:
            result = await self._run_stages(token)
        except QueryCancelledError:
            self._increment_run("cancelled")
            raise
        except IngestionError as exc:
            self._increment_run("failed")
            logger.error(
                "ingestion_failed",
                extra={"component": "shelter_pipeline", "kind": exc.kind, "reason": str(exc)},
            )
            raise
        duration_seconds = perf_counter() - total_started
        self._observe("ingestion_total", duration_seconds * 1000.0)
        if self._metrics:
            self._metrics.increment_run("success")
            self._metrics.set_active_source(result.source)
            self._metrics.set_accepted_records(len(result.shelters))
            self._metrics.add_dropped_rows(result.dropped_rows)
            self._metrics.observe_ingestion_duration(duration_seconds)
        logger.info(
            "ingestion_completed",
            extra={
                "component": "shelter_pipeline",
                "source": result.source,
                "shelter_count": len(result.shelters),
                "dropped_rows": result.dropped_rows,
            },
        )
        return result

    async def _run_stages(self, token: CancellationToken | None) -> IngestionResult:
        fetched = await self._time_async("fetch", lambda: self._fetcher.fetch(token=token))
        rows = self._time_sync("parse", lambda: parse_delimited_rows(fetched.text))
        shelters = self._time_sync(
            "assemble",
            lambda: assemble_shelters(rows, default_municipality_name=self._default_municipality_name),
        )
        if not shelters:
            raise EmptyDatasetError(fetched.source)
        return IngestionResult(
            shelters=tuple(shelters),
            source=fetched.source,
            dropped_rows=len(rows) - len(shelters),
        )

    async def _time_async(self, stage: str, action: Callable[[], Awaitable[R]]) -> R:
        started = perf_counter()
        result = await action()
        self._observe(stage, (perf_counter() - started) * 1000.0)
        return result

    def _time_sync(self, stage: str, action: Callable[[], R]) -> R:
        started = perf_counter()
        result = action()
        self._observe(stage, (perf_counter() - started) * 1000.0)
        return result

    def _observe(self, stage: str, duration_ms: float) -> None:
        if self._metrics:
            self._metrics.observe_stage_duration(stage, duration_ms)

    def _increment_run(self, status: str) -> None:
        if self._metrics:
            self._metrics.increment_run(status)
