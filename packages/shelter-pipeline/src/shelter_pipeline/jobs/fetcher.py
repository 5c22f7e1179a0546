from __future__ import annotations

import codecs
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import httpx
from shared.cancellation import CancellationToken

from shelter_pipeline.config import FetcherConfig
from shelter_pipeline.core.exceptions import AllSourcesFailedError, SourceUnavailableError
from shelter_pipeline.core.metrics import InMemoryIngestionMetricsCollector
from shelter_pipeline.core.models import FetchResult, SourceFailure
from shelter_pipeline.core.pipeline import DatasetFetcher

logger = logging.getLogger(__name__)

FALLBACK_ENCODINGS: tuple[str, ...] = ("utf-8-sig", "shift_jis", "cp932")
LOSSY_ENCODING = "utf-8"
REQUEST_HEADERS = {
    "Accept": "text/csv,application/octet-stream;q=0.9",
    "User-Agent": "cooling-shelter-finder/0.1 (+https://example.com/support)",
}

_CHARSET_RE = re.compile(r"charset=([^;]+)", re.IGNORECASE)


@dataclass(frozen=True)
class DecodedText:
    text: str
    encoding: str
    lossy: bool = False


def parse_declared_encoding(content_type: str | None) -> str | None:
    if not content_type:
        return None
    match = _CHARSET_RE.search(content_type)
    if match is None:
        return None
    return match.group(1).strip().strip('"').lower() or None


def _canonical_codec(name: str) -> str | None:
    try:
        return codecs.lookup(name).name
    except LookupError:
        return None


def decode_payload(
    payload: bytes,
    declared_encoding: str | None = None,
    encoding_override: str | None = None,
) -> DecodedText:
    """Decode with the first candidate encoding that accepts the payload strictly.

    Candidates are the transport-declared charset, the configured override and
    then ``FALLBACK_ENCODINGS``. When none decodes cleanly the payload is decoded
    as UTF-8 with replacement characters and flagged as lossy.
    """
    tried: set[str] = set()
    for candidate in (declared_encoding, encoding_override, *FALLBACK_ENCODINGS):
        if not candidate:
            continue
        canonical = _canonical_codec(candidate)
        if canonical is None or canonical in tried:
            continue
        tried.add(canonical)
        try:
            text = payload.decode(canonical)
        except UnicodeDecodeError:
            continue
        return DecodedText(text=text.removeprefix("\ufeff"), encoding=canonical)
    text = payload.decode(LOSSY_ENCODING, errors="replace")
    return DecodedText(text=text.removeprefix("\ufeff"), encoding=LOSSY_ENCODING, lossy=True)


def _is_remote(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


class DecodingFetcher(DatasetFetcher):
    def __init__(
        self,
        config: FetcherConfig,
        metrics: InMemoryIngestionMetricsCollector | None = None,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        self._config = config
        self._metrics = metrics
        self._client_factory = client_factory

    async def fetch(self, token: CancellationToken | None = None) -> FetchResult:
        failures: list[SourceFailure] = []
        sources = [source.strip() for source in self._config.sources if source and source.strip()]
        factory = self._client_factory or (
            lambda: httpx.AsyncClient(timeout=self._config.timeout_seconds, follow_redirects=True)
        )
        async with factory() as client:
            for source in sources:
                if token is not None:
                    token.raise_if_cancelled()
                try:
                    payload, declared_encoding = await self._read_source(client, source)
                except SourceUnavailableError as exc:
                    failures.append(SourceFailure(source=source, reason=exc.reason))
                    self._on_source_failure(source, exc.reason)
                    continue

                decoded = decode_payload(payload, declared_encoding, self._config.encoding_override)
                if decoded.lossy:
                    self._on_decode_fallback(source)
                if token is not None:
                    token.raise_if_cancelled()
                logger.info(
                    "source_fetch_succeeded",
                    extra={"source": source, "encoding": decoded.encoding, "byte_count": len(payload)},
                )
                return FetchResult(
                    text=decoded.text,
                    source=source,
                    encoding=decoded.encoding,
                    lossy=decoded.lossy,
                )
        raise AllSourcesFailedError(failures)

    async def _read_source(self, client: httpx.AsyncClient, source: str) -> tuple[bytes, str | None]:
        if _is_remote(source):
            return await self._read_remote(client, source)
        return self._read_local(source), None

    async def _read_remote(self, client: httpx.AsyncClient, source: str) -> tuple[bytes, str | None]:
        try:
            response = await client.get(source, headers=REQUEST_HEADERS, follow_redirects=True)
        except httpx.TimeoutException as exc:
            raise SourceUnavailableError(source, "timeout") from exc
        except httpx.HTTPError as exc:
            raise SourceUnavailableError(source, f"transport error: {exc.__class__.__name__}") from exc
        if not response.is_success:
            raise SourceUnavailableError(source, f"HTTP {response.status_code} {response.reason_phrase}".strip())
        return response.content, parse_declared_encoding(response.headers.get("content-type"))

    def _read_local(self, source: str) -> bytes:
        path = Path(source.removeprefix("file://"))
        try:
            return path.read_bytes()
        except OSError as exc:
            raise SourceUnavailableError(source, f"unreadable file: {exc.strerror or exc.__class__.__name__}") from exc

    def _on_source_failure(self, source: str, reason: str) -> None:
        logger.warning("source_fetch_failed", extra={"source": source, "reason": reason})
        if self._metrics:
            self._metrics.increment_source_failure(source)

    def _on_decode_fallback(self, source: str) -> None:
        logger.warning("decode_fallback_used", extra={"source": source, "encoding": LOSSY_ENCODING})
        if self._metrics:
            self._metrics.increment_decode_fallback()
