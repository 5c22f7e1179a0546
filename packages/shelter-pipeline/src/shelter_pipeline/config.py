from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from geo_engine.routing import DEFAULT_OSRM_BASE_URL
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PRIMARY_URL = "https://opendata.pref.saitama.lg.jp/resource_download/7279"
DEFAULT_SAMPLE_PATH = Path(__file__).resolve().parent / "data" / "cooling-shelters.sample.csv"
DEFAULT_OUTPUT_DIR = "public/data"


@dataclass(frozen=True)
class FetcherConfig:
    sources: tuple[str, ...]
    encoding_override: str | None = None
    timeout_seconds: float = 10.0


class IngestionSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore", env_ignore_empty=True)

    COOLING_SHELTER_SOURCE_URL: str | None = None
    COOLING_SHELTER_PRIMARY_URL: str = DEFAULT_PRIMARY_URL
    COOLING_SHELTER_SAMPLE_PATH: str = str(DEFAULT_SAMPLE_PATH)
    COOLING_SHELTER_SOURCE_ENCODING: str | None = None
    COOLING_SHELTER_OUTPUT_DIR: str = DEFAULT_OUTPUT_DIR
    COOLING_SHELTER_HTTP_TIMEOUT_SECONDS: float = 10.0
    COOLING_SHELTER_ROUTER_BASE_URL: str = DEFAULT_OSRM_BASE_URL
    COOLING_SHELTER_LOG_LEVEL: str = "INFO"

    @model_validator(mode="after")
    def _blank_values_use_defaults(self) -> IngestionSettings:
        for name, field in type(self).model_fields.items():
            value = getattr(self, name)
            if not isinstance(value, str):
                continue
            stripped = value.strip()
            setattr(self, name, stripped if stripped else field.default)
        return self

    def to_fetcher_config(self) -> FetcherConfig:
        sources = (
            self.COOLING_SHELTER_SOURCE_URL,
            self.COOLING_SHELTER_PRIMARY_URL,
            self.COOLING_SHELTER_SAMPLE_PATH,
        )
        return FetcherConfig(
            sources=tuple(source for source in sources if source),
            encoding_override=self.COOLING_SHELTER_SOURCE_ENCODING,
            timeout_seconds=self.COOLING_SHELTER_HTTP_TIMEOUT_SECONDS,
        )

    def to_download_config(self) -> FetcherConfig:
        source = self.COOLING_SHELTER_SOURCE_URL or self.COOLING_SHELTER_PRIMARY_URL
        return FetcherConfig(
            sources=(source,),
            encoding_override=self.COOLING_SHELTER_SOURCE_ENCODING,
            timeout_seconds=self.COOLING_SHELTER_HTTP_TIMEOUT_SECONDS,
        )


def load_settings() -> IngestionSettings:
    return IngestionSettings()
