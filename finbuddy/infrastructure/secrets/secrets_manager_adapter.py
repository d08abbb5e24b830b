"""
Infrastructure adapter: AWS Secrets Manager → ISecretStore.

load_into_env() runs once in each composition root, before get_settings() is
first called, so provider keys (NEWS_API_KEY, FINNHUB_API_KEY, LANGFUSE_*)
can live in a single JSON secret instead of the container environment.
"""

import json
import logging
import os
from typing import Any, Optional

import boto3

from finbuddy.domain.ports.secret_store_port import ISecretStore

logger = logging.getLogger(__name__)


class SecretsManagerAdapter(ISecretStore):
    """Fetches and deserializes secrets from AWS Secrets Manager."""

    def __init__(self, region: Optional[str] = None, client: Any = None) -> None:
        self._client = client or boto3.client(
            "secretsmanager",
            region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )

    def get_secret(self, secret_id: str) -> dict:
        """Fetch and deserialize a JSON secret by ARN or name."""
        response = self._client.get_secret_value(SecretId=secret_id)
        return json.loads(response["SecretString"])

    def load_into_env(self, secret_id: str) -> None:
        """Inject all key-value pairs of a JSON secret into os.environ."""
        secrets = self.get_secret(secret_id)
        for key, value in secrets.items():
            os.environ[key] = str(value)
        logger.info("Loaded %d configuration values from secret store", len(secrets))


def bootstrap_secrets() -> None:
    """Load FINBUDDY_SECRET_ARN into the environment when it is set."""
    secret_arn = os.environ.get("FINBUDDY_SECRET_ARN")
    if secret_arn:
        SecretsManagerAdapter().load_into_env(secret_arn)
