from __future__ import annotations

from fastapi import APIRouter

from .. import __version__
from ..settings import settings

router = APIRouter()


@router.get("/", tags=["health"])
def health():
    return {
        "message": "PartiQL Relay API",
        "version": __version__,
        "status": "running",
        "environment": settings.normalized_environment,
        "region": settings.aws_region,
        "endpoints": [
            "POST /submit-query",
        ],
    }
