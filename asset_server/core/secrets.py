"""Database credentials fetched from AWS Secrets Manager and cached per process."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any

import boto3
from sqlalchemy.engine import make_url

from asset_server.core.config import Settings

logger = logging.getLogger(__name__)


@lru_cache()
def get_secret(secret_name: str, region_name: str) -> dict[str, Any]:
    """Return the JSON payload of a secret. Only the first call hits the network."""
    logger.info("Fetching secret %s", secret_name)
    client = boto3.client("secretsmanager", region_name=region_name)
    response = client.get_secret_value(SecretId=secret_name)
    raw = response.get("SecretString")
    if not raw:
        raise RuntimeError(f"Secret {secret_name} has no string value")
    return json.loads(raw)


def resolve_database_url(settings: Settings) -> str:
    """Return the configured database URL, with credentials taken from the secret if one is configured."""
    secret_name = settings.database.secret_name
    if not secret_name:
        return settings.database_url

    secret = get_secret(secret_name, settings.database.region)
    url = make_url(settings.database_url)
    port = secret.get("port") or url.port
    url = url.set(
        username=secret.get("username") or url.username,
        password=secret.get("password") or url.password,
        host=secret.get("host") or url.host,
        port=int(port) if port else None,
        database=secret.get("dbname") or secret.get("database") or url.database,
    )
    return url.render_as_string(hide_password=False)


__all__ = ["get_secret", "resolve_database_url"]
