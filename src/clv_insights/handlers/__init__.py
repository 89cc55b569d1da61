"""Handlers package for CLV insights."""

from clv_insights.handlers.customers import (
    complete_customer,
    ingest_customers,
    load_csv_content,
    recommend_actions,
)

__all__ = [
    "complete_customer",
    "ingest_customers",
    "load_csv_content",
    "recommend_actions",
]
