from __future__ import annotations

from pathlib import Path

import pytest

from shelter_pipeline.config import DEFAULT_SAMPLE_PATH


@pytest.fixture
def sample_text() -> str:
    return Path(DEFAULT_SAMPLE_PATH).read_text(encoding="utf-8")
