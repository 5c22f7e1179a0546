from __future__ import annotations

import logging
from dataclasses import dataclass, field

from geo_engine.models import GeoPoint
from geo_engine.nearest import NearestResult, find_nearest, rank_by_distance
from shared.cancellation import LatestRequestGuard, QueryCancelledError

from shelter_pipeline.core.exceptions import IngestionError
from shelter_pipeline.core.models import CoolingShelter
from shelter_pipeline.core.pipeline import IngestionPipeline

logger = logging.getLogger(__name__)

STATUS_READY = "ready"
STATUS_ERROR = "error"
STATUS_STALE = "stale"


@dataclass(frozen=True)
class RefreshResult:
    status: str
    source: str | None = None
    count: int = 0
    dropped_rows: int = 0
    error_kind: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class _CatalogSnapshot:
    shelters: tuple[CoolingShelter, ...] = ()
    by_id: dict[str, CoolingShelter] = field(default_factory=dict)
    source: str | None = None


class ShelterCatalog:
    """Holds the latest ingested shelters and answers geo queries against them.

    A refresh replaces the whole snapshot in one assignment, and only the most
    recently started refresh may commit. A failed refresh keeps the previous
    snapshot.
    """

    def __init__(self, pipeline: IngestionPipeline) -> None:
        self._pipeline = pipeline
        self._guard = LatestRequestGuard()
        self._snapshot = _CatalogSnapshot()

    @property
    def shelters(self) -> tuple[CoolingShelter, ...]:
        return self._snapshot.shelters

    @property
    def source(self) -> str | None:
        return self._snapshot.source

    @property
    def ready(self) -> bool:
        return bool(self._snapshot.shelters)

    async def refresh(self) -> RefreshResult:
        token = self._guard.issue()
        try:
            result = await self._pipeline.run(token=token)
        except QueryCancelledError:
            return RefreshResult(status=STATUS_STALE)
        except IngestionError as exc:
            if token.cancelled:
                return RefreshResult(status=STATUS_STALE)
            return RefreshResult(status=STATUS_ERROR, error_kind=exc.kind, error=str(exc))

        if token.cancelled:
            logger.info("catalog_refresh_discarded", extra={"source": result.source})
            return RefreshResult(status=STATUS_STALE, source=result.source, count=len(result.shelters))

        # last write wins for duplicated ids
        by_id = {shelter.shelter_id: shelter for shelter in result.shelters}
        self._snapshot = _CatalogSnapshot(shelters=result.shelters, by_id=by_id, source=result.source)
        logger.info(
            "catalog_refreshed",
            extra={"source": result.source, "shelter_count": len(result.shelters)},
        )
        return RefreshResult(
            status=STATUS_READY,
            source=result.source,
            count=len(result.shelters),
            dropped_rows=result.dropped_rows,
        )

    def get(self, shelter_id: str) -> CoolingShelter | None:
        return self._snapshot.by_id.get(shelter_id)

    def nearest(self, point: GeoPoint) -> NearestResult[CoolingShelter] | None:
        return find_nearest(self._snapshot.shelters, point)

    def ranked(self, point: GeoPoint, limit: int | None = None) -> list[NearestResult[CoolingShelter]]:
        return rank_by_distance(
            self._snapshot.shelters,
            point,
            tie_breaker=lambda shelter: shelter.name,
            limit=limit,
        )
