"""Configuration management for the CLV insights service."""

import json
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import boto3
from botocore.exceptions import ClientError
from dotenv import load_dotenv

# Load .env if exists (local dev only, no-op in Lambda)
load_dotenv()


@lru_cache(maxsize=8)
def _get_secret(secret_name: str, key: str, region: str = "us-east-1") -> str:
    """Retrieve a secret from AWS Secrets Manager. Cached to avoid repeated API calls."""
    client = boto3.client("secretsmanager", region_name=region)
    try:
        response = client.get_secret_value(SecretId=secret_name)
        secret_data = json.loads(response["SecretString"])
        return secret_data.get(key, "")
    except ClientError as e:
        # Missing secret falls through to "not configured"
        if e.response["Error"]["Code"] == "ResourceNotFoundException":
            return ""
        raise


def _load_json_config(filename: str) -> dict:
    """Load configuration from JSON file in .config directory."""
    config_path = Path(__file__).parent.parent.parent / ".config" / filename
    if config_path.exists():
        with open(config_path, "r") as f:
            return json.load(f)
    return {}


# Load config files
_config_dev = _load_json_config("config.dev.json")
_config_secrets = _load_json_config("config.secrets.dev.json")


def _get_config(key: str, default: str = "") -> str:
    """Get config value with priority: env var > json config > default."""
    env_value = os.getenv(key.upper())
    if env_value:  # Treat empty string as missing
        return env_value

    if key.lower() in _config_secrets:
        return str(_config_secrets[key.lower()])

    if key.lower() in _config_dev:
        return str(_config_dev[key.lower()])

    return default


@dataclass
class Config:
    """Service configuration loaded from env vars or JSON files."""

    # AWS
    aws_region: str = _get_config("AWS_REGION", "us-east-1")
    input_bucket: str = _get_config("INPUT_BUCKET", "")

    # Google Gemini
    google_api_key: str = _get_config("GOOGLE_API_KEY", "")
    google_api_key_secret: str = _get_config("GOOGLE_API_KEY_SECRET", "")
    extraction_model: str = _get_config("EXTRACTION_MODEL", "gemini-2.5-pro")
    recommendation_model: str = _get_config("RECOMMENDATION_MODEL", "gemini-2.5-flash")
    temperature: float = float(_get_config("TEMPERATURE", "0.4"))
    max_tokens: int = int(_get_config("MAX_TOKENS", "60000"))

    # Ingestion
    batch_size: int = int(_get_config("BATCH_SIZE", "100"))

    def resolve_google_api_key(self) -> str:
        """Return the Gemini API key, falling back to Secrets Manager when a secret is named."""
        if self.google_api_key:
            return self.google_api_key
        if self.google_api_key_secret:
            return _get_secret(self.google_api_key_secret, "GOOGLE_API_KEY", self.aws_region)
        return ""

    def validate(self) -> None:
        """Validate required configuration."""
        if self.batch_size < 1:
            raise ValueError("BATCH_SIZE must be a positive integer")

        if not self.resolve_google_api_key():
            raise ValueError(
                "GOOGLE_API_KEY environment variable (or GOOGLE_API_KEY_SECRET) is required"
            )


config = Config()
