"""Utilities package for CLV insights."""

from clv_insights.utils.csv_batches import CsvBatch, split_csv

__all__ = [
    "CsvBatch",
    "split_csv",
]
