from __future__ import annotations

from functools import lru_cache

import boto3
from botocore.config import Config

from ...settings import settings


@lru_cache(maxsize=1)
def botocore_config() -> Config:
    # SDK-level retries stay at botocore's standard policy; the relay itself
    # never retries, it only classifies the final failure.
    return Config(
        retries={"max_attempts": 3, "mode": "standard"},
        connect_timeout=2,
        read_timeout=10,
    )


@lru_cache(maxsize=1)
def dynamodb_client():
    kwargs: dict[str, object] = {
        "region_name": settings.aws_region,
        "config": botocore_config(),
    }
    if settings.ddb_endpoint_url:
        kwargs["endpoint_url"] = settings.ddb_endpoint_url
    return boto3.client("dynamodb", **kwargs)
