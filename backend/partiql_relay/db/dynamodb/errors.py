from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class DdbError(Exception):
    """Base error for DynamoDB operations.

    `message` is the human-readable advice shown to the caller. These are caught
    by a FastAPI exception handler and rendered into problem-details responses.
    `retryable` is advisory only: nothing in this service retries on it.
    """

    message: str
    code: str | None = None
    operation: str | None = None
    aws_request_id: str | None = None
    retryable: bool = False
    cause: Exception | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class DdbThrottled(DdbError):
    pass


@dataclass(slots=True)
class DdbValidation(DdbError):
    pass


@dataclass(slots=True)
class DdbNotFound(DdbError):
    pass


@dataclass(slots=True)
class DdbConflict(DdbError):
    pass


@dataclass(slots=True)
class DdbCapacity(DdbError):
    pass


@dataclass(slots=True)
class DdbUnauthorized(DdbError):
    pass


@dataclass(slots=True)
class DdbUnavailable(DdbError):
    pass


@dataclass(slots=True)
class DdbInternal(DdbError):
    pass
