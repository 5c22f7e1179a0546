from __future__ import annotations

import asyncio
import logging

from shelter_pipeline.config import load_settings
from shelter_pipeline.core.exceptions import IngestionError
from shelter_pipeline.jobs.download import run_download
from shelter_pipeline.jobs.fetcher import DecodingFetcher
from shelter_pipeline.jobs.store import CsvSnapshotStore

logger = logging.getLogger(__name__)


def main() -> None:
    settings = load_settings()
    logging.basicConfig(level=settings.COOLING_SHELTER_LOG_LEVEL.upper())
    fetcher = DecodingFetcher(config=settings.to_download_config())
    store = CsvSnapshotStore(output_dir=settings.COOLING_SHELTER_OUTPUT_DIR)
    try:
        asyncio.run(run_download(fetcher=fetcher, store=store))
    except IngestionError as exc:
        logger.error("dataset_download_failed", extra={"kind": exc.kind, "reason": str(exc)})
        raise SystemExit(1) from exc
    except OSError as exc:
        logger.error("dataset_download_failed", extra={"kind": "output_unwritable", "reason": str(exc)})
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
