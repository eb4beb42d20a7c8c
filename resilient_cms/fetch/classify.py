"""Mapping of HTTP statuses and exceptions to error kinds."""

import asyncio
import traceback

import httpx
from pydantic import ValidationError

from resilient_cms.fetch.constants import (
    HTTP_STATUS_FORBIDDEN,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
    HTTP_STATUS_SERVER_ERROR_MAX,
    HTTP_STATUS_SERVER_ERROR_MIN,
    HTTP_STATUS_UNAUTHORIZED,
)
from resilient_cms.fetch.models import FetchError, FetchErrorKind


def classify_status(
    status_code: int,
    endpoint: str,
    reason_phrase: str = "",
) -> FetchError | None:
    """Classify an HTTP status code.

    Args:
        status_code: HTTP status code.
        endpoint: Endpoint name, used in the message.
        reason_phrase: Reason phrase of the response, if any.

    Returns:
        FetchError if the status indicates failure, None otherwise.
    """
    if HTTP_STATUS_OK_MIN <= status_code < HTTP_STATUS_OK_MAX:
        return None

    if status_code == HTTP_STATUS_NOT_FOUND:
        kind = FetchErrorKind.NOT_FOUND
        message = f"Endpoint not found: {endpoint}"
    elif status_code == HTTP_STATUS_UNAUTHORIZED:
        kind = FetchErrorKind.UNAUTHENTICATED
        message = "Authentication required. Please check your API token."
    elif status_code == HTTP_STATUS_FORBIDDEN:
        kind = FetchErrorKind.FORBIDDEN
        message = (
            "Access forbidden. Your API token may not have the required permissions."
        )
    elif HTTP_STATUS_SERVER_ERROR_MIN <= status_code < HTTP_STATUS_SERVER_ERROR_MAX:
        kind = FetchErrorKind.SERVER_ERROR
        message = f"CMS server error ({status_code}). Please try again later."
    else:
        kind = FetchErrorKind.HTTP_ERROR
        reason = reason_phrase or "unexpected status"
        message = f"Failed to fetch {endpoint}: {status_code} {reason}"

    return FetchError(kind=kind, message=message, status_code=status_code)


def classify_exception(exc: BaseException, endpoint: str) -> FetchError:
    """Classify an exception raised while fetching or parsing.

    Args:
        exc: The exception.
        endpoint: Endpoint name, used in the message.

    Returns:
        FetchError carrying the formatted traceback as detail.
    """
    detail = "".join(traceback.format_exception(exc)).rstrip()

    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        kind = FetchErrorKind.NETWORK_TIMEOUT
        message = f"Request for {endpoint} timed out"
    elif isinstance(exc, httpx.TransportError):
        kind = FetchErrorKind.CONNECTION_ERROR
        message = f"Connection failed for {endpoint}: {exc}"
    elif isinstance(exc, (ValidationError, ValueError)):
        # json.JSONDecodeError is a ValueError
        kind = FetchErrorKind.PARSE_ERROR
        message = f"Malformed response from {endpoint}: {_first_line(exc)}"
    elif isinstance(exc, OSError):
        kind = FetchErrorKind.FILESYSTEM_ERROR
        message = f"Filesystem error for {endpoint}: {exc}"
    else:
        kind = FetchErrorKind.UNKNOWN
        message = f"Unexpected error for {endpoint}: {type(exc).__name__}: {exc}"

    return FetchError(kind=kind, message=message, detail=detail)


def _first_line(exc: BaseException) -> str:
    text = str(exc).strip()
    return text.splitlines()[0] if text else type(exc).__name__
