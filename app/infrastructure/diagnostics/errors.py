"""Structured API error types.

Uniform error raised by the directory integrations once a provider failure
has been classified. The original provider exception is kept untouched on
``original_error`` so callers can still inspect it.
"""

from enum import Enum
from typing import Any, List, Optional


class Service(str, Enum):
    """Upstream services whose failures are classified.

    The value is the display name used in user-facing messages.
    """

    SCIM = "AWS SSO SCIM"
    WORKSPACE_DIRECTORY = "Google Workspace"
    IDENTITY_STORE = "AWS Identity Store"


class ErrorKind(Enum):
    """Error taxonomy shared by every classifier.

    Attributes:
        AUTHENTICATION: Credentials are invalid or expired
        AUTHORIZATION: Caller is authenticated but not permitted
        NOT_FOUND: Endpoint or resource does not exist
        CONFLICT: Resource already exists or is in an inconsistent state
        RATE_LIMITED: Request rate or quota exceeded
        SERVER_ERROR: Provider reported an internal error
        SERVICE_UNAVAILABLE: Provider is temporarily unavailable
        VALIDATION_FAILURE: Request parameters were rejected
        CONNECTIVITY_FAILURE: Failure was not a provider API error at all
        CONTRACT_VIOLATION: Local data is malformed (never a remote failure)
        UNKNOWN_CLIENT_ERROR: Unrecognised client-side failure
        UNKNOWN_SERVER_ERROR: Unrecognised server-side failure
    """

    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    SERVICE_UNAVAILABLE = "service_unavailable"
    VALIDATION_FAILURE = "validation_failure"
    CONNECTIVITY_FAILURE = "connectivity_failure"
    CONTRACT_VIOLATION = "contract_violation"
    UNKNOWN_CLIENT_ERROR = "unknown_client_error"
    UNKNOWN_SERVER_ERROR = "unknown_server_error"


class APIError(Exception):
    """Provider failure enriched with user-facing guidance.

    Attributes:
        service: Service the failing call was made against
        operation: Name of the failing action (e.g. "CreateGroup")
        status_code: HTTP status code, or 0 when the provider reports none
        original_error: The exception handed to the classifier, unchanged
        user_message: Short explanation suitable for display
        suggestions: Ordered remediation steps
        kind: Taxonomy bucket of the failure
    """

    def __init__(
        self,
        service: Service,
        operation: str,
        status_code: int = 0,
        original_error: Optional[Any] = None,
        user_message: str = "",
        suggestions: Optional[List[str]] = None,
        kind: ErrorKind = ErrorKind.UNKNOWN_CLIENT_ERROR,
    ):
        self.service = service
        self.operation = operation
        self.status_code = status_code
        self.original_error = original_error
        self.user_message = user_message
        self.suggestions = list(suggestions) if suggestions else []
        self.kind = kind
        super().__init__(self._format())

    def _format(self) -> str:
        if self.user_message:
            return f"{self.service.value} {self.operation} failed: {self.user_message}"
        return (
            f"{self.service.value} {self.operation} failed with status "
            f"{self.status_code}: {self.original_error}"
        )

    def __str__(self) -> str:
        return self._format()


class ContractViolationError(Exception):
    """Raised when local data breaks an assumption the adapters rely on.

    Distinct from APIError so callers can tell "the server rejected this"
    apart from "our own data is malformed".
    """

    kind = ErrorKind.CONTRACT_VIOLATION

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value
