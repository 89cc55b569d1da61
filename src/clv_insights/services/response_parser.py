"""Strict parsing of Gemini JSON responses into models."""

import logging
from typing import Annotated

from pydantic import Field, TypeAdapter, ValidationError

from clv_insights.exceptions import SchemaViolation
from clv_insights.models.schemas import Customer, MarketingAction

logger = logging.getLogger(__name__)

_customer_list = TypeAdapter(list[Customer])
_customer = TypeAdapter(Customer)
_marketing_actions = TypeAdapter(Annotated[list[MarketingAction], Field(min_length=1)])


def _validate(adapter: TypeAdapter, text: str, what: str):
    try:
        return adapter.validate_json(text)
    except ValidationError as e:
        logger.error("Invalid %s response: %d errors", what, e.error_count())
        raise SchemaViolation(f"Invalid {what} response: {e}") from e


def parse_customers(text: str) -> list[Customer]:
    """Parse a JSON array of customers."""
    return _validate(_customer_list, text, "customer batch")


def parse_customer(text: str) -> Customer:
    """Parse a single JSON customer object."""
    return _validate(_customer, text, "customer")


def parse_marketing_actions(text: str) -> list[MarketingAction]:
    """Parse a non-empty JSON array of marketing actions."""
    return _validate(_marketing_actions, text, "recommendations")
