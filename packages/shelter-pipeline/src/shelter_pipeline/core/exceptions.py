from __future__ import annotations

from collections.abc import Sequence

from shelter_pipeline.core.models import SourceFailure


class IngestionError(Exception):
    """Base ingestion exception."""

    kind = "ingestion_error"


class SourceUnavailableError(IngestionError):
    """Raised when a single dataset source could not be fetched."""

    kind = "source_unavailable"

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class AllSourcesFailedError(IngestionError):
    """Raised when every dataset source candidate failed."""

    kind = "all_sources_failed"

    def __init__(self, failures: Sequence[SourceFailure]) -> None:
        self.failures = list(failures)
        if self.failures:
            detail = "\n".join(f"{failure.source}: {failure.reason}" for failure in self.failures)
        else:
            detail = "no dataset source configured"
        super().__init__(f"all dataset sources failed:\n{detail}")


class EmptyDatasetError(IngestionError):
    """Raised when a fetched dataset produced no usable records."""

    kind = "empty_dataset"

    def __init__(self, source: str) -> None:
        super().__init__(f"{source}: dataset contained no usable shelter records")
        self.source = source
