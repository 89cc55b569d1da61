"""Utility for splitting a customer CSV into self-contained batches."""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100


@dataclass
class CsvBatch:
    """A header line plus a contiguous slice of data rows."""

    index: int
    content: str
    row_count: int


def split_csv(csv_content: str, batch_size: int = DEFAULT_BATCH_SIZE) -> list[CsvBatch]:
    """Split CSV text into batches that each repeat the header line.

    A document with only a header (or nothing at all) yields no batches.

    Args:
        csv_content: Raw CSV text, header on the first line.
        batch_size: Maximum number of data rows per batch.

    Returns:
        Batches in input order.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    lines = csv_content.strip().split("\n")
    if len(lines) <= 1:
        return []

    header = lines[0]
    rows = lines[1:]

    batches: list[CsvBatch] = []
    for start in range(0, len(rows), batch_size):
        chunk = rows[start:start + batch_size]
        batches.append(
            CsvBatch(
                index=len(batches),
                content="\n".join([header, *chunk]),
                row_count=len(chunk),
            )
        )

    logger.debug("Split %d rows into %d batches of up to %d", len(rows), len(batches), batch_size)
    return batches
