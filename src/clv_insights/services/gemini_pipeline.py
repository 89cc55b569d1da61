"""Gemini pipeline turning a customer CSV into validated customers."""

import asyncio
import logging

from clv_insights.exceptions import IngestionError, SchemaViolation
from clv_insights.infrastructure.gemini_client import GeminiClient
from clv_insights.models.llm_pipeline import LLMPipeline, PipelineState
from clv_insights.models.response_schemas import CUSTOMER_BATCH_SCHEMA
from clv_insights.models.schemas import Customer
from clv_insights.services.prompts import build_batch_prompt
from clv_insights.services.response_parser import parse_customers
from clv_insights.utils.csv_batches import DEFAULT_BATCH_SIZE, CsvBatch, split_csv

logger = logging.getLogger(__name__)

INGESTION_FAILURE_MESSAGE = (
    "Failed to process data with Gemini API. One or more batches failed."
)


class GeminiPipeline(LLMPipeline):
    """Splits a CSV into batches, extracts them concurrently, all or nothing."""

    def __init__(
        self,
        gemini_client: GeminiClient,
        model_name: str = "gemini-2.5-pro",
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        self._gemini_client = gemini_client
        self._model_name = model_name
        self._batch_size = batch_size

    def prepare_data(self, csv_content: str) -> list[CsvBatch]:
        """Split the document into header-prefixed batches."""
        batches = split_csv(csv_content, self._batch_size)
        total_rows = sum(b.row_count for b in batches)
        logger.info(f"Processing {total_rows} customers in {len(batches)} batches")
        return batches

    async def invoke(self, prepared_data: list[CsvBatch]) -> list[str | BaseException]:
        """Send every batch at once and wait for all of them.

        Results are positional: entry i belongs to batch i, whatever order
        the calls complete in. Failures come back as exception objects.
        """
        calls = [
            self._gemini_client.generate_json(
                model=self._model_name,
                prompt=build_batch_prompt(batch.content),
                response_schema=CUSTOMER_BATCH_SCHEMA,
            )
            for batch in prepared_data
        ]
        gathered = asyncio.gather(*calls, return_exceptions=True)
        logger.debug("Pipeline state: %s", PipelineState.AWAITING_ALL.value)
        return await gathered

    def post_process(
        self,
        llm_response: list[str | BaseException],
        prepared_data: list[CsvBatch],
    ) -> list[Customer]:
        """Validate each batch and concatenate in dispatch order."""
        customers: list[Customer] = []
        first_error: Exception | None = None

        for batch, result in zip(prepared_data, llm_response):
            if isinstance(result, BaseException) and not isinstance(result, Exception):
                raise result

            if isinstance(result, Exception):
                logger.error(f"Batch {batch.index} failed: {result}")
                first_error = first_error or result
                continue

            try:
                records = parse_customers(result)
            except SchemaViolation as e:
                logger.error(f"Batch {batch.index} returned invalid data: {e}")
                first_error = first_error or e
                continue

            if len(records) != batch.row_count:
                logger.warning(
                    f"Batch {batch.index}: {batch.row_count} rows sent, {len(records)} customers returned"
                )
            customers.extend(records)

        if first_error is not None:
            raise IngestionError(INGESTION_FAILURE_MESSAGE) from first_error

        return customers

    async def run(self, csv_content: str) -> list[Customer]:
        """Ingest a whole CSV document.

        Returns an empty list without calling Gemini when the document has no
        data rows. Raises IngestionError if any batch fails; partial results
        are discarded.
        """
        logger.debug("Pipeline state: %s", PipelineState.IDLE.value)
        batches = self.prepare_data(csv_content)
        if not batches:
            logger.info("No customer rows found, nothing to process")
            return []

        logger.debug("Pipeline state: %s", PipelineState.DISPATCHING.value)
        responses = await self.invoke(batches)

        try:
            customers = self.post_process(responses, batches)
        except IngestionError:
            logger.error("Pipeline state: %s", PipelineState.FAILED.value)
            raise

        logger.info(f"Successfully processed {len(customers)} customers")
        logger.debug("Pipeline state: %s", PipelineState.SUCCEEDED.value)
        return customers
