"""Abstract LLM pipeline for customer data ingestion."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from clv_insights.models.schemas import Customer


class PipelineState(str, Enum):
    """Lifecycle of a single pipeline run."""

    IDLE = "idle"
    DISPATCHING = "dispatching"
    AWAITING_ALL = "awaiting_all"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class LLMPipeline(ABC):
    """Abstract pipeline for LLM-based customer data extraction."""

    @abstractmethod
    def prepare_data(self, csv_content: str) -> Any:
        """
        Prepare a raw CSV document for LLM processing.

        Args:
            csv_content: Raw CSV text with a header line.

        Returns:
            Prepared data in format suitable for invoke().
        """
        pass

    @abstractmethod
    async def invoke(self, prepared_data: Any) -> Any:
        """
        Invoke the LLM with prepared data.

        Args:
            prepared_data: Data from prepare_data().

        Returns:
            Response from LLM.
        """
        pass

    @abstractmethod
    def post_process(self, llm_response: Any, prepared_data: Any) -> list[Customer]:
        """
        Validate and merge the LLM response.

        Args:
            llm_response: Response from invoke().
            prepared_data: Data from prepare_data().

        Returns:
            Validated customers in input order.
        """
        pass

    @abstractmethod
    async def run(self, csv_content: str) -> list[Customer]:
        """Run all three stages on a CSV document."""
        pass
