"""CSV dataset loading for starglyph.

The first line is a header and is skipped.  Every following non-blank
line becomes one row of floats; rows may have different lengths.
"""

from __future__ import annotations

import csv
import io
import math
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

Row = tuple[float, ...]


def parse_rows(text: str, delimiter: str = ",") -> tuple[Row, ...]:
    """Parse CSV text into numeric rows.

    Args:
        text: CSV content including a header line.
        delimiter: Field separator.

    Returns:
        Tuple of rows, each a tuple of floats.

    Raises:
        ValueError: If a field is not numeric or not finite.
    """
    reader = csv.reader(io.StringIO(text), delimiter=delimiter)
    header = next(reader, None)
    if header is None:
        return ()

    rows: list[Row] = []
    for record in reader:
        fields = [f.strip() for f in record]
        if not any(fields):
            continue
        try:
            row = tuple(float(f) for f in fields)
        except ValueError:
            raise ValueError(
                f"Non-numeric field on line {reader.line_num}: {record!r}"
            ) from None
        if not all(math.isfinite(v) for v in row):
            raise ValueError(f"Non-finite field on line {reader.line_num}: {record!r}")
        rows.append(row)

    logger.debug("dataset_parsed", columns=len(header), rows=len(rows))
    return tuple(rows)


def load_rows(path: str | Path, delimiter: str = ",") -> tuple[Row, ...]:
    """Load numeric rows from a CSV file with a header line."""
    text = Path(path).read_text(encoding="utf-8")
    return parse_rows(text, delimiter)
