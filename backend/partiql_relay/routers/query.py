from __future__ import annotations

import base64
from typing import Any

import orjson
from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel, Field

from ..services.query_relay import get_query_relay

router = APIRouter(tags=["query"])

QUERY_PAGES_HEADER = "X-Query-Pages"
QUERY_TRUNCATED_HEADER = "X-Query-Truncated"


def _json_default(obj: Any) -> Any:
    # Binary attributes (B / BS) come back from boto3 as bytes.
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


class RecordsResponse(ORJSONResponse):
    def render(self, content: Any) -> bytes:
        return orjson.dumps(content, default=_json_default)


class SubmitQueryRequest(BaseModel):
    query: str = Field(..., description="PartiQL statement, passed to DynamoDB as-is")
    # Number or numeric string; anything else falls back to the default bound.
    maxPageSize: Any = None


@router.post("/submit-query", response_class=RecordsResponse)
def submit_query(body: SubmitQueryRequest, request: Request):
    result = get_query_relay().run(body.query, body.maxPageSize)

    # Picked up by the request log line.
    request.state.query = {
        "pages": result.pages_fetched,
        "rows": len(result.items),
        "truncated": result.truncated,
    }
    return RecordsResponse(
        content=result.items,
        headers={
            QUERY_PAGES_HEADER: str(result.pages_fetched),
            QUERY_TRUNCATED_HEADER: "true" if result.truncated else "false",
        },
    )
