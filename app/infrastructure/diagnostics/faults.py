"""Typed views over provider exceptions.

Each parser looks through an exception (and its ``__cause__`` /
``__context__`` chain) for a recognisable provider error and returns a small
immutable fault record, or None when the failure is not a provider API error.

- parse_google_api_fault(): Google API errors -> GoogleAPIFault(code, message)
- parse_aws_service_fault(): AWS SDK errors -> AWSServiceFault(error_code, error_message)
"""

from dataclasses import dataclass
from typing import Any, Iterator, Optional

from botocore.exceptions import ClientError
from googleapiclient.errors import HttpError


@dataclass(frozen=True)
class GoogleAPIFault:
    """Google API error reduced to its status code and message."""

    code: int
    message: str


@dataclass(frozen=True)
class AWSServiceFault:
    """AWS SDK error reduced to its error code and message."""

    error_code: str
    error_message: str


def iter_error_chain(error: Any) -> Iterator[Any]:
    """Yield an error followed by its explicit and implicit causes."""
    seen = set()
    current = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = getattr(current, "__cause__", None) or getattr(
            current, "__context__", None
        )


def _as_text(value: Any) -> Optional[str]:
    if callable(value):
        try:
            value = value()
        except TypeError:
            return None
    return value if isinstance(value, str) else None


def _google_fault_from_http_error(error: HttpError) -> Optional[GoogleAPIFault]:
    resp = getattr(error, "resp", None)
    status = getattr(resp, "status", None) if resp is not None else None
    try:
        code = int(status)
    except (TypeError, ValueError):
        return None
    reason = getattr(error, "reason", None)
    return GoogleAPIFault(code=code, message=reason if isinstance(reason, str) else "")


def parse_google_api_fault(error: Any) -> Optional[GoogleAPIFault]:
    """Recover a Google API fault from an exception.

    Recognises googleapiclient HttpError and any error exposing an integer
    ``code`` together with a string ``message``.

    Args:
        error: The exception raised by the Google client (may be None)

    Returns:
        GoogleAPIFault when one is found in the error chain, None otherwise
    """
    for candidate in iter_error_chain(error):
        if isinstance(candidate, HttpError):
            fault = _google_fault_from_http_error(candidate)
            if fault is not None:
                return fault
            continue

        code = getattr(candidate, "code", None)
        message = getattr(candidate, "message", None)
        if (
            isinstance(code, int)
            and not isinstance(code, bool)
            and isinstance(message, str)
        ):
            return GoogleAPIFault(code=code, message=message)
    return None


def parse_aws_service_fault(error: Any) -> Optional[AWSServiceFault]:
    """Recover an AWS SDK fault from an exception.

    Recognises botocore ClientError and any error exposing ``error_code`` and
    ``error_message`` (as strings or zero-argument callables).

    Args:
        error: The exception raised by the AWS client (may be None)

    Returns:
        AWSServiceFault when one is found in the error chain, None otherwise
    """
    for candidate in iter_error_chain(error):
        if isinstance(candidate, ClientError):
            error_info = (getattr(candidate, "response", None) or {}).get("Error", {})
            return AWSServiceFault(
                error_code=str(error_info.get("Code", "Unknown")),
                error_message=str(error_info.get("Message", "")),
            )

        error_code = _as_text(getattr(candidate, "error_code", None))
        error_message = _as_text(getattr(candidate, "error_message", None))
        if error_code is not None and error_message is not None:
            return AWSServiceFault(error_code=error_code, error_message=error_message)
    return None
