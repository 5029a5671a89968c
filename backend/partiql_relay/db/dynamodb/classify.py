from __future__ import annotations

from botocore.exceptions import BotoCoreError, ClientError, ParamValidationError

from .errors import (
    DdbCapacity,
    DdbConflict,
    DdbError,
    DdbInternal,
    DdbNotFound,
    DdbThrottled,
    DdbUnauthorized,
    DdbUnavailable,
    DdbValidation,
)

EMPTY_ERROR_ADVICE = "Encountered error object was empty"

_FALLBACK_ADVICE = "An exception occurred, investigate and configure retry strategy. Error: {message}"

_ADVICE_BY_CODE: dict[str, str] = {
    # ExecuteStatement-specific
    "ConditionalCheckFailedException": (
        "Condition check specified in the operation failed, review and update the condition check "
        "before retrying. Error: {message}"
    ),
    "TransactionConflictException": (
        "Operation was rejected because there is an ongoing transaction for the item, generally safe "
        "to retry with exponential back-off. Error: {message}"
    ),
    "ItemCollectionSizeLimitExceededException": (
        "An item collection is too large, you're using Local Secondary Index and exceeded size limit of "
        "items per partition key. Consider using Global Secondary Index instead. Error: {message}"
    ),
    # Common DynamoDB API errors
    "InternalServerError": (
        "Internal Server Error, generally safe to retry with exponential back-off. Error: {message}"
    ),
    "ProvisionedThroughputExceededException": (
        "Request rate is too high. If you're using a custom retry strategy make sure to retry with "
        "exponential back-off. Otherwise consider reducing frequency of requests or increasing "
        "provisioned capacity for your table or secondary index. Error: {message}"
    ),
    "ResourceNotFoundException": (
        "One of the tables was not found, verify table exists before retrying. Error: {message}"
    ),
    "ServiceUnavailable": (
        "Had trouble reaching DynamoDB. generally safe to retry with exponential back-off. Error: {message}"
    ),
    "ThrottlingException": (
        "Request denied due to throttling, generally safe to retry with exponential back-off. "
        "Error: {message}"
    ),
    "UnrecognizedClientException": (
        "The request signature is incorrect most likely due to an invalid AWS access key ID or secret "
        "key, fix before retrying. Error: {message}"
    ),
    "ValidationException": (
        "The input fails to satisfy the constraints specified by DynamoDB, fix input before retrying. "
        "Error: {message}"
    ),
    "RequestLimitExceeded": (
        "Throughput exceeds the current throughput limit for your account, increase account level "
        "throughput before retrying. Error: {message}"
    ),
}

_THROTTLED_CODES = {
    "ProvisionedThroughputExceededException",
    "ThrottlingException",
    "RequestLimitExceeded",
    "InternalServerError",
    "ServiceUnavailable",
    "TransactionConflictException",
}

_UNAUTHORIZED_CODES = {
    "UnrecognizedClientException",
    "InvalidSignatureException",
    "AccessDeniedException",
}


def advice_for_code(code: str | None, message: str) -> str:
    """Advisory text for a DynamoDB error code, with the vendor message embedded."""
    template = _ADVICE_BY_CODE.get(code or "", _FALLBACK_ADVICE)
    return template.format(message=message)


def _err_code_from_client_error(e: ClientError) -> str | None:
    return (e.response or {}).get("Error", {}).get("Code") or None


def _err_message_from_client_error(e: ClientError) -> str:
    msg = (e.response or {}).get("Error", {}).get("Message")
    return str(msg) if msg else str(e)


def _aws_request_id_from_client_error(e: ClientError) -> str | None:
    return (e.response or {}).get("ResponseMetadata", {}).get("RequestId") or None


def describe_error(exc: BaseException | None) -> str:
    """Human-readable advice for any exception raised by an ExecuteStatement call."""
    if exc is None:
        return EMPTY_ERROR_ADVICE
    if isinstance(exc, DdbError):
        return exc.message
    if isinstance(exc, ClientError):
        return advice_for_code(_err_code_from_client_error(exc), _err_message_from_client_error(exc))
    return _FALLBACK_ADVICE.format(message=f"{type(exc).__name__}: {exc}")


def map_dynamodb_error(*, operation: str, exc: BaseException) -> DdbError:
    if isinstance(exc, DdbError):
        return exc

    message = describe_error(exc)

    if isinstance(exc, ClientError):
        code = _err_code_from_client_error(exc) or ""
        aws_request_id = _aws_request_id_from_client_error(exc)
        kwargs = dict(
            message=message,
            code=code or None,
            operation=operation,
            aws_request_id=aws_request_id,
            cause=exc,
        )

        if code in _THROTTLED_CODES:
            return DdbThrottled(retryable=True, **kwargs)
        if code == "ValidationException":
            return DdbValidation(**kwargs)
        if code == "ResourceNotFoundException":
            return DdbNotFound(**kwargs)
        if code == "ConditionalCheckFailedException":
            return DdbConflict(**kwargs)
        if code == "ItemCollectionSizeLimitExceededException":
            return DdbCapacity(**kwargs)
        if code in _UNAUTHORIZED_CODES:
            return DdbUnauthorized(**kwargs)
        return DdbInternal(**kwargs)

    # Raised client-side before any request is sent (e.g. an empty Statement).
    if isinstance(exc, ParamValidationError):
        return DdbValidation(
            message=message,
            operation=operation,
            cause=exc,
        )

    if isinstance(exc, BotoCoreError):
        return DdbUnavailable(
            message=message,
            operation=operation,
            retryable=True,
            cause=exc,
        )

    return DdbInternal(
        message=message,
        operation=operation,
        cause=exc if isinstance(exc, Exception) else None,
    )
