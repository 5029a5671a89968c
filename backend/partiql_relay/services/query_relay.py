from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from ..db.dynamodb.attributes import decode_items
from ..db.dynamodb.classify import map_dynamodb_error
from ..db.dynamodb.client import dynamodb_client
from ..observability.logging import get_logger
from ..settings import settings

OPERATION = "ExecuteStatement"

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def coerce_page_bound(value: Any, default: int | None = None) -> int:
    """
    Parse a caller-supplied page bound the lenient way form fields arrive:
    5, 5.9, "5" and " 5 pages" all give 5. Anything without a leading integer
    (None, "", "abc", booleans) gives `default`, which falls back to
    DEFAULT_MAX_PAGES from settings. Negative bounds clamp to 0, which still
    fetches exactly one page.
    """
    if default is None:
        default = settings.default_max_pages
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return max(0, value)
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return default
        return max(0, int(value))
    m = _INT_PREFIX.match(str(value))
    if not m:
        return default
    return max(0, int(m.group(1)))


@dataclass(slots=True)
class QueryResult:
    items: list[dict[str, Any]] = field(default_factory=list)
    pages_fetched: int = 0
    # Set when the page bound stopped the loop before the result set was exhausted.
    next_token: str | None = None

    @property
    def truncated(self) -> bool:
        return self.next_token is not None


class QueryRelay:
    """
    Runs one PartiQL statement to completion (or to the page bound) and returns
    the decoded rows of every page fetched, in fetch order.
    """

    def __init__(
        self,
        *,
        client: Any,
        log: Any,
        statement_limit: int | None = None,
        default_max_pages: int | None = None,
    ):
        self._client = client
        self._log = log
        self._statement_limit = statement_limit
        self._default_max_pages = default_max_pages

    def _execute(self, statement: str, next_token: str | None) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"Statement": statement}
        if self._statement_limit:
            kwargs["Limit"] = int(self._statement_limit)
        # Only pass NextToken when present; botocore rejects None.
        if next_token:
            kwargs["NextToken"] = next_token
        return self._client.execute_statement(**kwargs)

    def run(self, statement: str, max_pages: Any = None) -> QueryResult:
        bound = coerce_page_bound(max_pages, default=self._default_max_pages)
        result = QueryResult()
        next_token: str | None = None

        self._log.info("query_started", statement=statement, max_pages=bound)

        try:
            # At least one page is always fetched, whatever the bound.
            while True:
                resp = self._execute(statement, next_token)
                page = decode_items(resp.get("Items"))
                result.items.extend(page)

                next_token = resp.get("NextToken") or None
                result.pages_fetched += 1

                self._log.debug(
                    "query_page_fetched",
                    page=result.pages_fetched,
                    page_items=len(page),
                    has_next_token=next_token is not None,
                )

                if next_token is None or result.pages_fetched > bound:
                    break
        except Exception as e:  # noqa: BLE001
            mapped = map_dynamodb_error(operation=OPERATION, exc=e)
            self._log.error(
                "query_failed",
                message=mapped.message,
                code=mapped.code,
                error_type=type(mapped).__name__,
                aws_request_id=mapped.aws_request_id,
                pages_fetched=result.pages_fetched,
                discarded_items=len(result.items),
            )
            raise mapped from e

        result.next_token = next_token
        self._log.info(
            "query_completed",
            items=len(result.items),
            pages_fetched=result.pages_fetched,
            truncated=result.truncated,
        )
        return result


@lru_cache(maxsize=1)
def get_query_relay() -> QueryRelay:
    return QueryRelay(
        client=dynamodb_client(),
        log=get_logger("query_relay"),
        statement_limit=settings.ddb_statement_limit,
        default_max_pages=settings.default_max_pages,
    )
