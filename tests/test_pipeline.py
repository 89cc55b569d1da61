"""Tests for the Gemini batch ingestion pipeline."""

import asyncio
import json
import logging
from unittest.mock import patch

import pytest

from clv_insights.exceptions import IngestionError, SchemaViolation, TransportFailure
from clv_insights.models.response_schemas import CUSTOMER_BATCH_SCHEMA
from clv_insights.services.gemini_pipeline import GeminiPipeline
from conftest import batch_response, make_csv, make_customer_dict


@pytest.fixture
def pipeline(mock_gemini_client):
    return GeminiPipeline(mock_gemini_client, model_name="test-model", batch_size=100)


@pytest.fixture(autouse=True)
def raw_prompts():
    """Send each batch's CSV as the prompt so fakes can read the rows back."""
    with patch(
        "clv_insights.services.gemini_pipeline.build_batch_prompt",
        side_effect=lambda csv_chunk: csv_chunk,
    ):
        yield


class TestGeminiPipeline:
    """Tests for GeminiPipeline."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "Customer,State"])
    async def test_no_rows_makes_no_calls(self, pipeline, mock_gemini_client, content):
        """Test header-only or empty input returns nothing without calling Gemini."""
        result = await pipeline.run(content)

        assert result == []
        mock_gemini_client.generate_json.assert_not_called()

    @pytest.mark.asyncio
    async def test_250_rows_three_calls_in_batch_order(self, pipeline, mock_gemini_client):
        """Test 250 rows are sent as three batches and merged in batch order."""
        mock_gemini_client.generate_json.side_effect = (
            lambda model, prompt, response_schema: batch_response(prompt)
        )

        customers = await pipeline.run(make_csv(250))

        assert mock_gemini_client.generate_json.call_count == 3
        assert [c.id for c in customers] == [f"C{i:04d}" for i in range(1, 251)]

        for call in mock_gemini_client.generate_json.call_args_list:
            assert call.kwargs["model"] == "test-model"
            assert call.kwargs["response_schema"] is CUSTOMER_BATCH_SCHEMA

    @pytest.mark.asyncio
    async def test_merge_order_ignores_completion_order(self, pipeline, mock_gemini_client):
        """Test the first batch's customers come first even when it finishes last."""
        pipeline = GeminiPipeline(mock_gemini_client, model_name="test-model", batch_size=2)
        finished = []

        async def slow_first(model, prompt, response_schema):
            first_id = prompt.split("\n")[1].split(",", 1)[0]
            await asyncio.sleep(0.05 if first_id == "C0001" else 0)
            finished.append(first_id)
            return batch_response(prompt)

        mock_gemini_client.generate_json.side_effect = slow_first

        customers = await pipeline.run(make_csv(6))

        assert finished[-1] == "C0001"
        assert [c.id for c in customers] == ["C0001", "C0002", "C0003", "C0004", "C0005", "C0006"]

    @pytest.mark.asyncio
    async def test_batches_run_concurrently(self, pipeline, mock_gemini_client):
        """Test every batch is in flight before any of them completes."""
        pipeline = GeminiPipeline(mock_gemini_client, model_name="test-model", batch_size=1)
        in_flight = 0
        peak = 0

        async def track(model, prompt, response_schema):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return batch_response(prompt)

        mock_gemini_client.generate_json.side_effect = track

        await pipeline.run(make_csv(4))

        assert peak == 4

    @pytest.mark.asyncio
    async def test_one_transport_failure_fails_everything(self, pipeline, mock_gemini_client):
        """Test a single failed batch discards the results of the others."""
        completed = []

        async def fail_second(model, prompt, response_schema):
            if prompt.split("\n")[1].startswith("C0101,"):
                raise TransportFailure("connection reset")
            await asyncio.sleep(0.01)
            completed.append(prompt)
            return batch_response(prompt)

        mock_gemini_client.generate_json.side_effect = fail_second

        with pytest.raises(IngestionError, match="One or more batches failed") as exc_info:
            await pipeline.run(make_csv(250))

        assert isinstance(exc_info.value.__cause__, TransportFailure)
        # Remaining batches still ran to completion
        assert len(completed) == 2

    @pytest.mark.asyncio
    async def test_invalid_json_fails_everything(self, pipeline, mock_gemini_client):
        """Test a batch returning malformed JSON fails the whole ingestion."""
        responses = iter([batch_response(make_csv(100)), "[{not json"])
        mock_gemini_client.generate_json.side_effect = (
            lambda model, prompt, response_schema: next(responses)
        )

        with pytest.raises(IngestionError) as exc_info:
            await pipeline.run(make_csv(150))

        assert isinstance(exc_info.value.__cause__, SchemaViolation)

    @pytest.mark.asyncio
    async def test_schema_violation_fails_everything(self, pipeline, mock_gemini_client):
        """Test a batch with an out-of-enum segment fails the whole ingestion."""
        bad = json.dumps([make_customer_dict(customer_id="C0001", segment="Whale")])
        mock_gemini_client.generate_json.return_value = bad

        with pytest.raises(IngestionError):
            await pipeline.run(make_csv(1))

    @pytest.mark.asyncio
    async def test_row_count_mismatch_only_warns(self, pipeline, mock_gemini_client, caplog):
        """Test fewer returned customers than sent rows is logged, not raised."""
        mock_gemini_client.generate_json.return_value = json.dumps(
            [make_customer_dict(customer_id="C0001")]
        )

        with caplog.at_level(logging.WARNING):
            customers = await pipeline.run(make_csv(3))

        assert [c.id for c in customers] == ["C0001"]
        assert "3 rows sent, 1 customers returned" in caplog.text

    def test_prepare_data_uses_batch_size(self, mock_gemini_client):
        """Test prepare_data honours the configured batch size."""
        pipeline = GeminiPipeline(mock_gemini_client, batch_size=40)

        batches = pipeline.prepare_data(make_csv(100))

        assert [b.row_count for b in batches] == [40, 40, 20]

    def test_post_process_reraises_cancellation(self, pipeline):
        """Test non-Exception results such as cancellation are not swallowed."""
        batches = pipeline.prepare_data(make_csv(1))

        with pytest.raises(asyncio.CancelledError):
            pipeline.post_process([asyncio.CancelledError()], batches)
