from __future__ import annotations

import csv
import io
import logging

logger = logging.getLogger(__name__)

SNIFF_SAMPLE_SIZE = 65536
CANDIDATE_DELIMITERS = ",\t;"


def sniff_delimiter(text: str) -> str:
    try:
        dialect = csv.Sniffer().sniff(text[:SNIFF_SAMPLE_SIZE], delimiters=CANDIDATE_DELIMITERS)
    except csv.Error:
        return ","
    return dialect.delimiter


def parse_delimited_rows(text: str, delimiter: str | None = None) -> list[dict[str, str | None]]:
    """Parse header-bearing delimited text into rows keyed by the raw header labels.

    Overflow cells (more cells than headers) are discarded, missing cells are
    ``None`` and lines with only blank cells are skipped. A malformed record
    stops parsing; the rows read before it are kept.
    """
    reader = csv.DictReader(io.StringIO(text), delimiter=delimiter or sniff_delimiter(text))
    rows: list[dict[str, str | None]] = []
    try:
        for record in reader:
            row = {key: value for key, value in record.items() if isinstance(key, str)}
            if not any(value and value.strip() for value in row.values()):
                continue
            rows.append(row)
    except csv.Error as exc:
        logger.warning(
            "delimited_parse_failed",
            extra={"line_num": reader.line_num, "parsed_rows": len(rows), "reason": str(exc)},
        )
    return rows
