"""Error classifiers for directory provider failures.

Converts the three failure shapes seen by the directory integrations into
APIError objects carrying a user message and remediation suggestions:

- classify_scim_error(): SCIM HTTP status codes -> APIError
- classify_google_api_error(): Google API errors ({code, message}) -> APIError
- classify_identity_store_error(): AWS SDK errors ({error code, message}) -> APIError

All classifiers are pure and total: any input, None included, yields a
populated APIError.

Usage:
    from infrastructure.diagnostics.classifiers import classify_identity_store_error

    try:
        client.create_group(IdentityStoreId=store_id, DisplayName=name)
    except ClientError as e:
        raise classify_identity_store_error("CreateGroup", e) from e
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from infrastructure.diagnostics.errors import APIError, ErrorKind, Service
from infrastructure.diagnostics.faults import (
    parse_aws_service_fault,
    parse_google_api_fault,
)


@dataclass(frozen=True)
class _Bucket:
    message: str
    suggestions: Tuple[str, ...]
    kind: ErrorKind


def _build(
    service: Service,
    operation: str,
    status_code: int,
    original_error: Any,
    bucket: _Bucket,
) -> APIError:
    return APIError(
        service=service,
        operation=operation,
        status_code=status_code,
        original_error=original_error,
        user_message=bucket.message,
        suggestions=list(bucket.suggestions),
        kind=bucket.kind,
    )


# SCIM (HTTP status codes)

_SCIM_SERVICE_UNAVAILABLE = _Bucket(
    "AWS SSO SCIM service is temporarily unavailable",
    (
        "This is likely a temporary service issue",
        "Wait a few minutes and retry the operation",
        "Check AWS Service Health Dashboard for any ongoing issues",
        "Implement retry logic with exponential backoff",
    ),
    ErrorKind.SERVICE_UNAVAILABLE,
)

SCIM_STATUS_BUCKETS: Dict[int, _Bucket] = {
    401: _Bucket(
        "Authentication failed - the SCIM access token is invalid or expired",
        (
            "Check that the SCIM access token is correct",
            "Verify the token hasn't expired (tokens expire after a period of inactivity)",
            "Generate a new SCIM access token in the AWS SSO console",
            "Ensure the token has the necessary permissions for SCIM operations",
        ),
        ErrorKind.AUTHENTICATION,
    ),
    403: _Bucket(
        "Access denied - insufficient permissions for SCIM operations",
        (
            "Verify the SCIM access token has the required permissions",
            "Check that SCIM provisioning is enabled in AWS SSO",
            "Ensure the identity source is configured for external identity provider",
            "Confirm the AWS SSO instance is properly configured",
        ),
        ErrorKind.AUTHORIZATION,
    ),
    404: _Bucket(
        "SCIM endpoint not found or resource doesn't exist",
        (
            "Verify the SCIM endpoint URL is correct",
            "Check that the AWS SSO instance exists and is active",
            "Ensure the identity store ID is valid",
            "Confirm the resource (user/group) exists before attempting operations",
        ),
        ErrorKind.NOT_FOUND,
    ),
    409: _Bucket(
        "Resource conflict - the resource already exists or is in an inconsistent state",
        (
            "Check if the user or group already exists",
            "Verify there are no duplicate email addresses or display names",
            "Try updating the existing resource instead of creating a new one",
            "Wait a moment and retry the operation",
        ),
        ErrorKind.CONFLICT,
    ),
    429: _Bucket(
        "Rate limit exceeded - too many requests to the SCIM API",
        (
            "Reduce the frequency of API calls",
            "Implement exponential backoff retry logic",
            "Consider batching operations if supported",
            "Wait before retrying the operation",
        ),
        ErrorKind.RATE_LIMITED,
    ),
    500: _Bucket(
        "Internal server error in AWS SSO SCIM service",
        (
            "This is likely a temporary issue with AWS SSO",
            "Wait a few minutes and retry the operation",
            "Check AWS Service Health Dashboard for any ongoing issues",
            "Contact AWS Support if the issue persists",
        ),
        ErrorKind.SERVER_ERROR,
    ),
    502: _SCIM_SERVICE_UNAVAILABLE,
    503: _SCIM_SERVICE_UNAVAILABLE,
    504: _SCIM_SERVICE_UNAVAILABLE,
}

SCIM_CLIENT_ERROR = _Bucket(
    "Client error - check your request parameters and authentication",
    (
        "Verify all required parameters are provided",
        "Check the request format and data types",
        "Ensure authentication credentials are valid",
        "Review the SCIM API documentation for correct usage",
    ),
    ErrorKind.UNKNOWN_CLIENT_ERROR,
)

SCIM_SERVER_ERROR = _Bucket(
    "Server error - AWS SSO SCIM service is experiencing issues",
    (
        "This is likely a temporary service issue",
        "Wait and retry the operation",
        "Check AWS Service Health Dashboard",
        "Contact AWS Support if the issue persists",
    ),
    ErrorKind.UNKNOWN_SERVER_ERROR,
)

_SCIM_UNEXPECTED_SUGGESTIONS = (
    "Check the AWS SSO SCIM API documentation",
    "Verify your request is properly formatted",
    "Contact AWS Support for assistance",
)


def classify_scim_error(
    operation: str, status_code: int, original_error: Any = None
) -> APIError:
    """Classify a SCIM HTTP failure by its status code.

    Status Code Mapping:
    - 401: Authentication failed
    - 403: Access denied
    - 404: Endpoint or resource not found
    - 409: Resource conflict
    - 429: Rate limited
    - 500: Internal server error
    - 502/503/504: Service unavailable
    - Other 4xx: Generic client error
    - Other 5xx and above: Generic server error
    - Anything else: Unexpected status code

    Args:
        operation: Name of the failing action
        status_code: HTTP status code returned by the SCIM endpoint
        original_error: The underlying exception, kept by reference

    Returns:
        APIError for the SCIM service
    """
    bucket = SCIM_STATUS_BUCKETS.get(status_code)
    if bucket is None:
        if 400 <= status_code < 500:
            bucket = SCIM_CLIENT_ERROR
        elif status_code >= 500:
            bucket = SCIM_SERVER_ERROR
        else:
            bucket = _Bucket(
                f"Unexpected HTTP status code: {status_code}",
                _SCIM_UNEXPECTED_SUGGESTIONS,
                ErrorKind.UNKNOWN_CLIENT_ERROR,
            )
    return _build(Service.SCIM, operation, status_code, original_error, bucket)


# Google Workspace (typed API errors)

GOOGLE_DELEGATION_MISCONFIGURED = _Bucket(
    "Domain-wide delegation not properly configured",
    (
        "Enable domain-wide delegation for the service account",
        "Add the required OAuth scopes in Google Admin Console",
        "Verify the admin email has super admin privileges",
        "Check that the service account is authorized for the domain",
    ),
    ErrorKind.AUTHORIZATION,
)

GOOGLE_QUOTA_EXCEEDED = _Bucket(
    "API quota or rate limit exceeded",
    (
        "Reduce the frequency of API calls",
        "Implement exponential backoff retry logic",
        "Check your Google Workspace API quotas",
        "Consider requesting quota increases if needed",
    ),
    ErrorKind.RATE_LIMITED,
)

GOOGLE_ACCESS_DENIED = _Bucket(
    "Access denied - insufficient permissions for Google Workspace operations",
    (
        "Verify the admin email has the required permissions",
        "Check that the service account has the necessary OAuth scopes",
        "Ensure domain-wide delegation is properly configured",
        "Confirm the Google Workspace domain settings allow API access",
    ),
    ErrorKind.AUTHORIZATION,
)

_GOOGLE_SERVICE_UNAVAILABLE = _Bucket(
    "Google Workspace API is temporarily unavailable",
    (
        "This is likely a temporary issue with Google's services",
        "Wait a few minutes and retry the operation",
        "Check Google Workspace Status page for any ongoing issues",
        "Implement retry logic with exponential backoff",
    ),
    ErrorKind.SERVICE_UNAVAILABLE,
)

GOOGLE_STATUS_BUCKETS: Dict[int, _Bucket] = {
    401: _Bucket(
        "Authentication failed - Google service account credentials are invalid",
        (
            "Verify the Google service account JSON credentials are correct",
            "Check that the service account has domain-wide delegation enabled",
            "Ensure the admin email address has the necessary permissions",
            "Confirm the service account key hasn't been revoked or expired",
        ),
        ErrorKind.AUTHENTICATION,
    ),
    404: _Bucket(
        "Resource not found in Google Workspace",
        (
            "Verify the user or group exists in Google Workspace",
            "Check that the domain name is correct",
            "Ensure the resource hasn't been deleted",
            "Confirm you're querying the correct organizational unit",
        ),
        ErrorKind.NOT_FOUND,
    ),
    409: _Bucket(
        "Resource conflict in Google Workspace",
        (
            "Check if the user or group already exists",
            "Verify there are no duplicate email addresses",
            "Wait a moment and retry the operation",
        ),
        ErrorKind.CONFLICT,
    ),
    429: _Bucket(
        "Rate limit exceeded for Google Workspace API",
        (
            "Implement exponential backoff retry logic",
            "Reduce the frequency of API calls",
            "Check your API usage against Google's quotas",
            "Consider spreading requests over a longer time period",
        ),
        ErrorKind.RATE_LIMITED,
    ),
    500: _Bucket(
        "Internal server error in Google Workspace API",
        (
            "This is likely a temporary issue with Google's services",
            "Wait a few minutes and retry the operation",
            "Check Google Workspace Status page for any ongoing issues",
            "Contact Google Support if the issue persists",
        ),
        ErrorKind.SERVER_ERROR,
    ),
    502: _GOOGLE_SERVICE_UNAVAILABLE,
    503: _GOOGLE_SERVICE_UNAVAILABLE,
    504: _GOOGLE_SERVICE_UNAVAILABLE,
}

_GOOGLE_GENERIC_SUGGESTIONS = (
    "Check the Google Workspace Admin SDK documentation",
    "Verify your API usage and permissions",
    "Review the error details for specific guidance",
)

GOOGLE_CONNECTIVITY_FAILURE = _Bucket(
    "Failed to communicate with Google Workspace API",
    (
        "Check your internet connectivity",
        "Verify the Google service account credentials",
        "Ensure the Google Workspace domain is accessible",
        "Review the error details for more information",
    ),
    ErrorKind.CONNECTIVITY_FAILURE,
)


def _google_forbidden_bucket(message: str) -> _Bucket:
    # Delegation must be checked before the quota/rate heuristics
    if "domain-wide delegation" in message:
        return GOOGLE_DELEGATION_MISCONFIGURED
    if "quota" in message or "rate" in message:
        return GOOGLE_QUOTA_EXCEEDED
    return GOOGLE_ACCESS_DENIED


def classify_google_api_error(operation: str, original_error: Any = None) -> APIError:
    """Classify a Google Workspace API failure.

    Code Mapping:
    - 401: Authentication failed
    - 403: Delegation misconfigured, quota exceeded or access denied,
      decided from the error message in that order
    - 404: Resource not found
    - 409: Resource conflict
    - 429: Rate limited
    - 500: Internal server error
    - 502/503/504: Service unavailable
    - Other codes: "Google API error: <message>"
    - Not a Google API error: connectivity failure

    Args:
        operation: Name of the failing action
        original_error: The exception raised by the Google client

    Returns:
        APIError for the Google Workspace service
    """
    fault = parse_google_api_fault(original_error)
    if fault is None:
        return _build(
            Service.WORKSPACE_DIRECTORY,
            operation,
            0,
            original_error,
            GOOGLE_CONNECTIVITY_FAILURE,
        )

    if fault.code == 403:
        bucket = _google_forbidden_bucket(fault.message)
    else:
        bucket = GOOGLE_STATUS_BUCKETS.get(fault.code)

    if bucket is None:
        bucket = _Bucket(
            f"Google API error: {fault.message}",
            _GOOGLE_GENERIC_SUGGESTIONS,
            (
                ErrorKind.UNKNOWN_SERVER_ERROR
                if fault.code >= 500
                else ErrorKind.UNKNOWN_CLIENT_ERROR
            ),
        )
    return _build(
        Service.WORKSPACE_DIRECTORY, operation, fault.code, original_error, bucket
    )


# AWS Identity Store (SDK error codes)

_IDENTITY_STORE_ACCESS_DENIED = _Bucket(
    "Access denied - insufficient IAM permissions for Identity Store operations",
    (
        "Verify the IAM role/user has the required Identity Store permissions",
        "Check that the following permissions are granted: identitystore:*",
        "Ensure the AWS credentials are valid and not expired",
        "Confirm the Identity Store ID is correct and accessible",
    ),
    ErrorKind.AUTHORIZATION,
)

_IDENTITY_STORE_NOT_FOUND = _Bucket(
    "Identity Store resource not found",
    (
        "Verify the Identity Store ID is correct",
        "Check that the user or group exists in the Identity Store",
        "Ensure you're using the correct AWS region",
        "Confirm the AWS SSO instance is properly configured",
    ),
    ErrorKind.NOT_FOUND,
)

IDENTITY_STORE_CODE_BUCKETS: Dict[str, _Bucket] = {
    "AccessDenied": _IDENTITY_STORE_ACCESS_DENIED,
    "AccessDeniedException": _IDENTITY_STORE_ACCESS_DENIED,
    "UnauthorizedOperation": _IDENTITY_STORE_ACCESS_DENIED,
    "ResourceNotFound": _IDENTITY_STORE_NOT_FOUND,
    "ResourceNotFoundException": _IDENTITY_STORE_NOT_FOUND,
    "ConflictException": _Bucket(
        "Resource conflict - the resource already exists or is in an inconsistent state",
        (
            "Check if the user or group already exists",
            "Verify there are no duplicate identifiers",
            "Try updating the existing resource instead of creating a new one",
            "Wait a moment and retry the operation",
        ),
        ErrorKind.CONFLICT,
    ),
    "ThrottlingException": _Bucket(
        "Rate limit exceeded for Identity Store API",
        (
            "Implement exponential backoff retry logic",
            "Reduce the frequency of API calls",
            "Wait before retrying the operation",
            "Consider batching operations if possible",
        ),
        ErrorKind.RATE_LIMITED,
    ),
    "ValidationException": _Bucket(
        "Invalid request parameters for Identity Store operation",
        (
            "Check that all required parameters are provided",
            "Verify parameter formats and data types",
            "Ensure string lengths are within allowed limits",
            "Review the Identity Store API documentation",
        ),
        ErrorKind.VALIDATION_FAILURE,
    ),
    "InternalServerException": _Bucket(
        "Internal server error in AWS Identity Store service",
        (
            "This is likely a temporary issue with AWS Identity Store",
            "Wait a few minutes and retry the operation",
            "Check AWS Service Health Dashboard for any ongoing issues",
            "Contact AWS Support if the issue persists",
        ),
        ErrorKind.SERVER_ERROR,
    ),
    "ServiceUnavailableException": _Bucket(
        "AWS Identity Store service is temporarily unavailable",
        (
            "This is likely a temporary service issue",
            "Wait a few minutes and retry the operation",
            "Check AWS Service Health Dashboard for any ongoing issues",
            "Implement retry logic with exponential backoff",
        ),
        ErrorKind.SERVICE_UNAVAILABLE,
    ),
}

_IDENTITY_STORE_GENERIC_SUGGESTIONS = (
    "Check the AWS Identity Store API documentation",
    "Verify your IAM permissions and AWS credentials",
    "Review the error details for specific guidance",
)

IDENTITY_STORE_CONNECTIVITY_FAILURE = _Bucket(
    "Failed to communicate with AWS Identity Store API",
    (
        "Check your internet connectivity and AWS region",
        "Verify AWS credentials are properly configured",
        "Ensure the Identity Store service is available in your region",
        "Review the error details for more information",
    ),
    ErrorKind.CONNECTIVITY_FAILURE,
)


def classify_identity_store_error(
    operation: str, original_error: Any = None
) -> APIError:
    """Classify an AWS Identity Store SDK failure by its error code.

    Error Code Mapping:
    - AccessDenied, AccessDeniedException, UnauthorizedOperation: Access denied
    - ResourceNotFound, ResourceNotFoundException: Not found
    - ConflictException: Conflict
    - ThrottlingException: Rate limited
    - ValidationException: Invalid parameters
    - InternalServerException: Internal server error
    - ServiceUnavailableException: Service unavailable
    - Other codes: "AWS Identity Store error: <message>"
    - Not an SDK error (e.g. BotoCoreError): connectivity failure

    SDK errors carry no HTTP status, so status_code is always 0.

    Args:
        operation: Name of the failing action
        original_error: The exception raised by the AWS client

    Returns:
        APIError for the Identity Store service
    """
    fault = parse_aws_service_fault(original_error)
    if fault is None:
        bucket = IDENTITY_STORE_CONNECTIVITY_FAILURE
    else:
        bucket = IDENTITY_STORE_CODE_BUCKETS.get(fault.error_code) or _Bucket(
            f"AWS Identity Store error: {fault.error_message}",
            _IDENTITY_STORE_GENERIC_SUGGESTIONS,
            ErrorKind.UNKNOWN_CLIENT_ERROR,
        )
    return _build(Service.IDENTITY_STORE, operation, 0, original_error, bucket)
