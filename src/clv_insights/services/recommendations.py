"""Service for marketing recommendations on a single customer."""

import logging

from clv_insights.exceptions import RecommendationError, SchemaViolation, TransportFailure
from clv_insights.infrastructure.gemini_client import GeminiClient
from clv_insights.models.response_schemas import MARKETING_ACTIONS_SCHEMA
from clv_insights.models.schemas import Customer, MarketingAction
from clv_insights.services.prompts import build_recommendation_prompt
from clv_insights.services.response_parser import parse_marketing_actions

logger = logging.getLogger(__name__)


class MarketingAdvisor:
    """Asks Gemini for retention and CLV growth actions."""

    def __init__(self, gemini_client: GeminiClient, model_name: str):
        self._gemini_client = gemini_client
        self._model_name = model_name

    async def recommend(self, customer: Customer) -> list[MarketingAction]:
        """Return an ordered, non-empty list of recommendations for the customer."""
        try:
            text = await self._gemini_client.generate_json(
                model=self._model_name,
                prompt=build_recommendation_prompt(customer),
                response_schema=MARKETING_ACTIONS_SCHEMA,
            )
            actions = parse_marketing_actions(text)
        except (TransportFailure, SchemaViolation) as e:
            logger.error("Error fetching recommendations for %s: %s", customer.id, e)
            raise RecommendationError("Failed to get recommendations from Gemini API.") from e

        logger.info("Got %d recommendations for %s", len(actions), customer.id)
        return actions
