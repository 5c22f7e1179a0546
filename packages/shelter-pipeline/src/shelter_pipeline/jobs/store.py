from __future__ import annotations

from pathlib import Path

OUTPUT_FILENAME = "cooling-shelters.csv"


class CsvSnapshotStore:
    """Writes the decoded dataset text as UTF-8 so later runs can read it as a static source."""

    def __init__(self, output_dir: str, filename: str = OUTPUT_FILENAME) -> None:
        self._file = Path(output_dir) / filename

    @property
    def path(self) -> Path:
        return self._file

    def save(self, text: str) -> Path:
        self._file.parent.mkdir(parents=True, exist_ok=True)
        self._file.write_text(text, encoding="utf-8", newline="")
        return self._file
