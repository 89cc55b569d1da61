"""AWS Lambda handler for CLV insights.

Routes an event to one of three actions:
- ingest: turn a customer CSV (inline or in S3) into enriched customers
- complete: fill in a partially known customer
- recommend: marketing actions for one customer
"""

import asyncio
import json
import logging

from pydantic import TypeAdapter, ValidationError

from clv_insights.config import config
from clv_insights.exceptions import CompletionError, IngestionError, RecommendationError
from clv_insights.handlers.customers import (
    complete_customer,
    ingest_customers,
    load_csv_content,
    recommend_actions,
)
from clv_insights.infrastructure.dependency_injection import DependenciesContainer
from clv_insights.models.schemas import CompleteEvent, IngestEvent, LambdaEvent

# Configure root logger for Lambda (all modules will inherit this)
logging.getLogger().setLevel(logging.INFO)
logger = logging.getLogger(__name__)

_event_adapter = TypeAdapter(LambdaEvent)


def _response(status_code: int, body) -> dict:
    return {
        "statusCode": status_code,
        "body": json.dumps(body),
    }


def _handle(request, container: DependenciesContainer):
    """Run the requested action and return a JSON-ready body."""
    if isinstance(request, IngestEvent):
        csv_content = load_csv_content(request, container.s3_client(), config.input_bucket)
        result = asyncio.run(ingest_customers(container.llm_pipeline(), csv_content))
        return result.model_dump(mode="json", by_alias=True)

    if isinstance(request, CompleteEvent):
        customer = asyncio.run(
            complete_customer(container.customer_completer(), request.customer)
        )
        return customer.model_dump(mode="json", by_alias=True)

    actions = asyncio.run(recommend_actions(container.marketing_advisor(), request.customer))
    return [action.model_dump(mode="json", by_alias=True) for action in actions]


def lambda_handler(event: dict, context) -> dict:
    """
    Lambda handler function.

    Args:
        event: Event with an "action" key and its payload.
        context: Lambda context object.

    Returns:
        Response dict with statusCode and body.
    """
    logger.info("Received event with action: %s", event.get("action"))

    try:
        request = _event_adapter.validate_python(event)
    except ValidationError as e:
        logger.warning("Invalid event: %s", e)
        return _response(
            400,
            {"error": "Invalid event", "details": json.loads(e.json(include_url=False))},
        )

    try:
        # Validate configuration
        config.validate()

        # Initialize DI container
        container = DependenciesContainer()

        body = _handle(request, container)
        logger.info("Action %s completed", request.action)
        return _response(200, body)

    except FileNotFoundError as e:
        logger.error("Input not found: %s", e)
        return _response(404, {"error": str(e)})

    except (IngestionError, CompletionError, RecommendationError) as e:
        logger.error("Gemini processing failed: %s", e)
        return _response(502, {"error": str(e), "retryable": True})

    except Exception as e:
        logger.exception("Failed to handle %s: %s", request.action, e)
        return _response(500, {"error": str(e)})
