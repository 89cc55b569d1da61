"""Handlers for customer ingestion, completion and recommendations."""

import logging

from clv_insights.infrastructure.s3_client import S3Client
from clv_insights.models.llm_pipeline import LLMPipeline
from clv_insights.models.schemas import (
    Customer,
    IngestEvent,
    IngestionResult,
    MarketingAction,
    PartialCustomer,
)
from clv_insights.services.customer_completion import CustomerCompleter
from clv_insights.services.portfolio import summarize_portfolio
from clv_insights.services.recommendations import MarketingAdvisor

logger = logging.getLogger(__name__)


def load_csv_content(event: IngestEvent, s3_client: S3Client, default_bucket: str) -> str:
    """
    Resolve the CSV text of an ingest event.

    Args:
        event: Ingest event with inline content or an S3 location.
        s3_client: S3Client for reading uploaded files.
        default_bucket: Bucket used when the event only names a key.

    Returns:
        CSV text.

    Raises:
        FileNotFoundError: If the S3 object could not be read.
    """
    if event.csv_content is not None:
        return event.csv_content

    bucket = event.bucket or default_bucket
    if not bucket:
        raise ValueError("No bucket given and INPUT_BUCKET is not configured")

    content = s3_client.get_object_content(bucket, event.key)
    if content is None:
        raise FileNotFoundError(f"Could not read s3://{bucket}/{event.key}")
    return content


async def ingest_customers(pipeline: LLMPipeline, csv_content: str) -> IngestionResult:
    """
    Extract all customers from a CSV file and summarize the portfolio.

    Args:
        pipeline: Batch ingestion pipeline.
        csv_content: Raw CSV text.

    Returns:
        IngestionResult with customers in file order and their summary.
    """
    customers = await pipeline.run(csv_content)
    summary = summarize_portfolio(customers)
    logger.info(
        "Ingested %d customers, total predicted CLV %.2f",
        summary.total_customers,
        summary.total_predicted_clv,
    )
    return IngestionResult(customers=customers, summary=summary)


async def complete_customer(completer: CustomerCompleter, partial: PartialCustomer) -> Customer:
    """Complete one partially known customer."""
    return await completer.complete(partial)


async def recommend_actions(advisor: MarketingAdvisor, customer: Customer) -> list[MarketingAction]:
    """Get marketing recommendations for one customer."""
    return await advisor.recommend(customer)
