"""Service for completing a single partially known customer."""

import logging

from clv_insights.exceptions import CompletionError, SchemaViolation, TransportFailure
from clv_insights.infrastructure.gemini_client import GeminiClient
from clv_insights.models.response_schemas import CUSTOMER_SCHEMA
from clv_insights.models.schemas import Customer, PartialCustomer
from clv_insights.services.prompts import build_completion_prompt
from clv_insights.services.response_parser import parse_customer

logger = logging.getLogger(__name__)


class CustomerCompleter:
    """Completes sparse customer attributes into a full CLV profile."""

    def __init__(self, gemini_client: GeminiClient, model_name: str):
        """
        Initialize customer completer.

        Args:
            gemini_client: GeminiClient instance.
            model_name: Gemini model to use.
        """
        self._gemini_client = gemini_client
        self._model_name = model_name

    async def complete(self, partial: PartialCustomer) -> Customer:
        """
        Complete one customer with a single Gemini call.

        Args:
            partial: Known attributes, at least the customer id.

        Returns:
            The completed customer, carrying the requested id.

        Raises:
            CompletionError: If the call failed or the response was invalid.
        """
        logger.info("Completing customer %s", partial.id)

        try:
            text = await self._gemini_client.generate_json(
                model=self._model_name,
                prompt=build_completion_prompt(partial),
                response_schema=CUSTOMER_SCHEMA,
            )
            customer = parse_customer(text)
            if customer.id != partial.id:
                raise SchemaViolation(
                    f"Expected customer id {partial.id!r}, got {customer.id!r}"
                )
        except (TransportFailure, SchemaViolation) as e:
            logger.error("Error processing customer %s: %s", partial.id, e)
            raise CompletionError("Failed to process new customer with Gemini API.") from e

        logger.info("Customer %s completed as segment %s", customer.id, customer.segment)
        return customer
