from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from shelter_pipeline.core.assembler import assemble_shelters
from shelter_pipeline.core.parser import parse_delimited_rows
from shelter_pipeline.core.pipeline import DatasetFetcher
from shelter_pipeline.jobs.store import CsvSnapshotStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DownloadSummary:
    source: str
    output_path: Path
    encoding: str
    row_count: int
    shelter_count: int


async def run_download(fetcher: DatasetFetcher, store: CsvSnapshotStore) -> DownloadSummary:
    logger.info("dataset_download_started", extra={"output_path": str(store.path)})
    fetched = await fetcher.fetch()
    output_path = store.save(fetched.text)
    rows = parse_delimited_rows(fetched.text)
    shelters = assemble_shelters(rows)
    summary = DownloadSummary(
        source=fetched.source,
        output_path=output_path,
        encoding=fetched.encoding,
        row_count=len(rows),
        shelter_count=len(shelters),
    )
    logger.info(
        "dataset_download_completed",
        extra={
            "source": summary.source,
            "output_path": str(summary.output_path),
            "encoding": summary.encoding,
            "row_count": summary.row_count,
            "shelter_count": summary.shelter_count,
        },
    )
    return summary
