"""Parser for the daily and monthly history CSV exports."""

from __future__ import annotations

import csv
import io

from nexiawatch.domain.models import HistoricalRecord
from nexiawatch.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


def parse_history_csv(text: str) -> list[HistoricalRecord]:
    """Convert a CSV export into a list of header -> value rows.

    The first row is the header. Blank lines are skipped and missing trailing
    cells become empty strings. Cells beyond the header width are dropped
    with a warning.
    """

    reader = csv.reader(io.StringIO(text or ""))
    header: list[str] | None = None
    records: list[HistoricalRecord] = []
    for row in reader:
        if not row or all(not cell.strip() for cell in row):
            continue
        if header is None:
            header = [cell.strip() for cell in row]
            continue
        if len(row) > len(header):
            logger.warning(
                "History row %d has %d cells for %d columns; dropping %s",
                reader.line_num,
                len(row),
                len(header),
                row[len(header):],
            )
        cells = row + [""] * (len(header) - len(row))
        records.append(dict(zip(header, cells)))
    return records


__all__ = ["parse_history_csv"]
