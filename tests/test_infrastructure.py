"""Tests for infrastructure layer."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from botocore.exceptions import ClientError
from dependency_injector import providers
from google.genai import types

from clv_insights.config import Config
from clv_insights.exceptions import SchemaViolation, TransportFailure
from clv_insights.infrastructure.dependency_injection import DependenciesContainer
from clv_insights.infrastructure.gemini_client import GeminiClient
from clv_insights.infrastructure.s3_client import S3Client
from clv_insights.models.response_schemas import CUSTOMER_BATCH_SCHEMA
from clv_insights.services.customer_completion import CustomerCompleter
from clv_insights.services.gemini_pipeline import GeminiPipeline
from clv_insights.services.recommendations import MarketingAdvisor


def _genai_client(response=None, error=None) -> MagicMock:
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=response, side_effect=error)
    return client


class TestGeminiClient:
    """Tests for GeminiClient."""

    @pytest.mark.asyncio
    async def test_generate_json_success(self):
        """Test generate_json returns the response text and requests JSON output."""
        genai_client = _genai_client(response=MagicMock(text='[{"id": "X1"}]'))
        client = GeminiClient(genai_client, temperature=0.2, max_tokens=1000)

        result = await client.generate_json("gemini-test", "prompt", CUSTOMER_BATCH_SCHEMA)

        assert result == '[{"id": "X1"}]'
        kwargs = genai_client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["contents"] == "prompt"
        config = kwargs["config"]
        assert isinstance(config, types.GenerateContentConfig)
        assert config.response_mime_type == "application/json"
        assert config.response_schema == CUSTOMER_BATCH_SCHEMA
        assert config.temperature == 0.2
        assert config.max_output_tokens == 1000

    @pytest.mark.asyncio
    async def test_generate_json_transport_failure(self):
        """Test SDK errors are raised as TransportFailure."""
        genai_client = _genai_client(error=ConnectionError("reset by peer"))
        client = GeminiClient(genai_client)

        with pytest.raises(TransportFailure, match="reset by peer") as exc_info:
            await client.generate_json("gemini-test", "prompt", CUSTOMER_BATCH_SCHEMA)

        assert isinstance(exc_info.value.__cause__, ConnectionError)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", [None, ""])
    async def test_generate_json_empty_response(self, text):
        """Test an empty response is a schema violation."""
        client = GeminiClient(_genai_client(response=MagicMock(text=text)))

        with pytest.raises(SchemaViolation):
            await client.generate_json("gemini-test", "prompt", CUSTOMER_BATCH_SCHEMA)


class TestS3Client:
    """Tests for S3Client."""

    def test_get_object_content_success(self):
        """Test get_object_content decodes the body."""
        mock_boto_client = MagicMock()
        body = MagicMock()
        body.read.return_value = "\ufeffCustomer,State\nX1,Oregon".encode("utf-8")
        mock_boto_client.get_object.return_value = {"Body": body}

        client = S3Client(mock_boto_client)
        result = client.get_object_content("uploads", "customers.csv")

        assert result == "Customer,State\nX1,Oregon"
        mock_boto_client.get_object.assert_called_once_with(
            Bucket="uploads", Key="customers.csv"
        )

    def test_get_object_content_failure(self):
        """Test get_object_content returns None on ClientError."""
        mock_boto_client = MagicMock()
        mock_boto_client.get_object.side_effect = ClientError(
            {"Error": {"Code": "NoSuchKey"}}, "GetObject"
        )

        client = S3Client(mock_boto_client)

        assert client.get_object_content("uploads", "missing.csv") is None


class TestDependenciesContainer:
    """Tests for DependenciesContainer wiring."""

    def test_services_share_configured_client(self):
        """Test services are built from the overridden configuration."""
        container = DependenciesContainer()
        container.config.override(
            providers.Object(
                Config(
                    google_api_key="test-key",
                    extraction_model="extract-model",
                    recommendation_model="advise-model",
                    batch_size=7,
                )
            )
        )

        pipeline = container.llm_pipeline()
        completer = container.customer_completer()
        advisor = container.marketing_advisor()

        assert isinstance(pipeline, GeminiPipeline)
        assert pipeline.prepare_data("h\n1\n2\n3\n4\n5\n6\n7\n8")[0].row_count == 7
        assert isinstance(completer, CustomerCompleter)
        assert isinstance(advisor, MarketingAdvisor)
        assert container.gemini_client() is container.gemini_client()
