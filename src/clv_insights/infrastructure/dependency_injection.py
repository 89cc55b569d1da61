"""Dependency injection container for the application."""

import os

import boto3
from dependency_injector import providers
from dependency_injector.containers import DeclarativeContainer
from google import genai

from clv_insights.config import Config
from clv_insights.infrastructure.gemini_client import GeminiClient
from clv_insights.infrastructure.s3_client import S3Client
from clv_insights.models.llm_pipeline import LLMPipeline
from clv_insights.services.customer_completion import CustomerCompleter
from clv_insights.services.gemini_pipeline import GeminiPipeline
from clv_insights.services.recommendations import MarketingAdvisor


def _create_session(config: Config) -> boto3.Session:
    """Create boto3 session.

    In Lambda: Uses execution role automatically.
    Locally: Uses AWS_PROFILE_CLV from environment when set.
    """
    if os.getenv("AWS_LAMBDA_FUNCTION_NAME"):
        return boto3.Session(region_name=config.aws_region)

    profile = os.getenv("AWS_PROFILE_CLV")
    if profile:
        return boto3.Session(profile_name=profile, region_name=config.aws_region)
    return boto3.Session(region_name=config.aws_region)


def _create_genai_client(config: Config) -> genai.Client:
    """Create the google-genai client from the resolved API key."""
    return genai.Client(api_key=config.resolve_google_api_key())


def _create_gemini_pipeline(gemini_client: GeminiClient, config: Config) -> LLMPipeline:
    """Create Gemini batch ingestion pipeline."""
    return GeminiPipeline(
        gemini_client=gemini_client,
        model_name=config.extraction_model,
        batch_size=config.batch_size,
    )


class DependenciesContainer(DeclarativeContainer):
    """DI container for the application."""

    config = providers.Singleton(Config)

    # Session (Lambda execution role or local AWS profile)
    session = providers.Singleton(_create_session, config=config)

    # S3 dependency chain
    s3_boto_client = providers.Singleton(
        lambda session: session.client("s3"),
        session=session,
    )

    s3_client = providers.Singleton(
        S3Client,
        client=s3_boto_client,
    )

    # Gemini dependency chain
    genai_client = providers.Singleton(
        _create_genai_client,
        config=config,
    )

    gemini_client = providers.Singleton(
        lambda client, config: GeminiClient(
            client=client,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
        ),
        client=genai_client,
        config=config,
    )

    llm_pipeline = providers.Singleton(
        _create_gemini_pipeline,
        gemini_client=gemini_client,
        config=config,
    )

    customer_completer = providers.Singleton(
        lambda gemini_client, config: CustomerCompleter(
            gemini_client, config.extraction_model
        ),
        gemini_client=gemini_client,
        config=config,
    )

    marketing_advisor = providers.Singleton(
        lambda gemini_client, config: MarketingAdvisor(
            gemini_client, config.recommendation_model
        ),
        gemini_client=gemini_client,
        config=config,
    )
