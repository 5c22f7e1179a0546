from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from geo_engine.formatting import format_distance, format_duration
from geo_engine.models import GeoPoint
from geo_engine.nearest import NearestResult
from geo_engine.routing import OsrmRouteClient, build_directions_url, plan_route
from geo_engine.travel import TravelMode, estimate_duration_seconds

from shelter_pipeline.config import IngestionSettings, load_settings
from shelter_pipeline.core.models import CoolingShelter
from shelter_pipeline.core.pipeline import IngestionPipeline
from shelter_pipeline.jobs.fetcher import DecodingFetcher
from shelter_pipeline.service.catalog import STATUS_ERROR, ShelterCatalog
from shelter_pipeline.service.errors import ApiError
from shelter_pipeline.service.response import error_response, success_response
from shelter_pipeline.service.schemas import (
    DailyWindowItem,
    RefreshResultItem,
    RoutePlanResult,
    ShelterDistanceItem,
    ShelterItem,
    ShelterRankingResult,
)
from shelter_pipeline.service.state import ingestion_exporter, ingestion_metrics


def build_catalog(settings: IngestionSettings) -> ShelterCatalog:
    fetcher = DecodingFetcher(config=settings.to_fetcher_config(), metrics=ingestion_metrics)
    return ShelterCatalog(IngestionPipeline(fetcher=fetcher, metrics=ingestion_metrics))


def _to_shelter_item(shelter: CoolingShelter) -> ShelterItem:
    return ShelterItem(
        shelter_id=shelter.shelter_id,
        municipality_code=shelter.municipality_code,
        municipality_name=shelter.municipality_name,
        name=shelter.name,
        address=shelter.address,
        latitude=shelter.latitude,
        longitude=shelter.longitude,
        openings=[
            DailyWindowItem(
                day_label=window.day_label,
                open_time=window.open_time,
                close_time=window.close_time,
                label=window.describe(),
            )
            for window in shelter.openings
        ],
        special_notes=shelter.special_notes,
        capacity=shelter.capacity,
        manager=shelter.manager,
        email=shelter.email,
        phone=shelter.phone,
        url=shelter.url,
        designation_date=shelter.designation_date,
        facility_type_category=shelter.facility_type_category,
        facility_ownership=shelter.facility_ownership,
    )


def _to_distance_item(result: NearestResult[CoolingShelter]) -> ShelterDistanceItem:
    walk_seconds = estimate_duration_seconds(result.distance_meters, TravelMode.WALK)
    return ShelterDistanceItem(
        shelter=_to_shelter_item(result.record),
        distance_meters=result.distance_meters,
        distance_label=format_distance(result.distance_meters),
        walk_duration_label=format_duration(walk_seconds),
    )


def create_service_app(
    catalog: ShelterCatalog | None = None,
    route_client: OsrmRouteClient | None = None,
    refresh_on_startup: bool = True,
) -> FastAPI:
    if catalog is None or route_client is None:
        settings = load_settings()
        catalog = catalog or build_catalog(settings)
        route_client = route_client or OsrmRouteClient(
            base_url=settings.COOLING_SHELTER_ROUTER_BASE_URL,
            timeout_seconds=settings.COOLING_SHELTER_HTTP_TIMEOUT_SECONDS,
        )

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if refresh_on_startup:
            await catalog.refresh()
        yield

    app = FastAPI(title="Cooling Shelter Service", version="0.1.0", lifespan=lifespan)
    app.state.catalog = catalog
    app.state.route_client = route_client

    def _require_ready() -> None:
        if not catalog.ready:
            raise ApiError("DATASET_NOT_READY", "Shelter dataset is not loaded", 503)

    @app.get("/healthz")
    async def healthz() -> dict:
        return success_response({"status": "ok"}, meta={})

    @app.get("/readyz")
    async def readyz() -> dict:
        _require_ready()
        return success_response(
            {"status": "ready", "source": catalog.source, "count": len(catalog.shelters)},
            meta={},
        )

    @app.get("/metrics")
    async def metrics() -> Response:
        body = ingestion_exporter.render(ingestion_metrics)
        return Response(content=body, media_type="text/plain; version=0.0.4")

    @app.post("/v1/shelters/refresh")
    async def refresh() -> dict:
        result = await catalog.refresh()
        if result.status == STATUS_ERROR:
            raise ApiError((result.error_kind or "ingestion_error").upper(), result.error or "", 502)
        item = RefreshResultItem(
            status=result.status,
            source=result.source,
            count=result.count,
            dropped_rows=result.dropped_rows,
        )
        return success_response(item.model_dump(), meta={})

    @app.get("/v1/shelters/nearest")
    async def nearest(
        lat: float = Query(..., ge=-90, le=90),
        lng: float = Query(..., ge=-180, le=180),
    ) -> dict:
        _require_ready()
        result = catalog.nearest(GeoPoint(lat=lat, lng=lng))
        if result is None:
            raise ApiError("SHELTER_NOT_FOUND", "No shelter available", 404)
        return success_response(_to_distance_item(result).model_dump(), meta={"source": catalog.source})

    @app.get("/v1/shelters/ranked")
    async def ranked(
        lat: float = Query(..., ge=-90, le=90),
        lng: float = Query(..., ge=-180, le=180),
        limit: int = Query(default=20, ge=1, le=500),
    ) -> dict:
        _require_ready()
        results = catalog.ranked(GeoPoint(lat=lat, lng=lng), limit=limit)
        payload = ShelterRankingResult(items=[_to_distance_item(result) for result in results])
        return success_response(payload.model_dump(), meta={"source": catalog.source, "total": len(catalog.shelters)})

    @app.get("/v1/shelters/{shelter_id}/route")
    async def route(
        shelter_id: str,
        lat: float = Query(..., ge=-90, le=90),
        lng: float = Query(..., ge=-180, le=180),
        mode: TravelMode = Query(default=TravelMode.WALK),
    ) -> dict:
        _require_ready()
        shelter = catalog.get(shelter_id)
        if shelter is None:
            raise ApiError("SHELTER_NOT_FOUND", f"Unknown shelter '{shelter_id}'", 404)
        plan = await plan_route(route_client, GeoPoint(lat=lat, lng=lng), shelter.location, mode)
        payload = RoutePlanResult(
            shelter_id=shelter.shelter_id,
            mode=plan.mode.value,
            estimated=plan.estimated,
            distance_meters=plan.distance_meters,
            distance_label=format_distance(plan.distance_meters),
            duration_seconds=plan.duration_seconds,
            duration_label=format_duration(plan.duration_seconds),
            coordinates=[(point.lat, point.lng) for point in plan.coordinates],
            directions_url=build_directions_url(shelter.location, plan.mode),
            reason=plan.reason,
        )
        return success_response(payload.model_dump(), meta={})

    @app.exception_handler(ApiError)
    async def handle_api_error(_: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=error_response(exc.code, exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        message = "; ".join(err["msg"] for err in exc.errors())
        return JSONResponse(
            status_code=422,
            content=error_response("VALIDATION_ERROR", message),
        )

    return app


app = create_service_app()
