"""Infrastructure package for CLV insights."""

from clv_insights.infrastructure.gemini_client import GeminiClient
from clv_insights.infrastructure.s3_client import S3Client

__all__ = [
    "GeminiClient",
    "S3Client",
]
