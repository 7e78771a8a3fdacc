"""API error diagnostics.

Classifies failures from the SCIM endpoint, the Google Workspace directory
API and the AWS Identity Store SDK into APIError objects with user-facing
messages and remediation suggestions, and logs them according to a
configurable policy.
"""

import logging

from core.config import Settings
from infrastructure.diagnostics.classifiers import (
    classify_google_api_error,
    classify_identity_store_error,
    classify_scim_error,
)
from infrastructure.diagnostics.errors import (
    APIError,
    ContractViolationError,
    ErrorKind,
    Service,
)
from infrastructure.diagnostics.policy import (
    DOCUMENTED_LOGGING_CONFIG,
    ErrorLoggingPolicy,
    LoggingConfig,
    get_logging_config,
    handle_google_api_error,
    handle_identity_store_error,
    handle_scim_error,
    log_enhanced_error,
    set_logging_config,
    wrap_google_api_error,
    wrap_identity_store_error,
    wrap_scim_error,
)


def configure_error_logging(settings: Settings) -> LoggingConfig:
    """Apply the error reporting settings to the process-wide policy."""
    config = LoggingConfig(
        log_suggestions=settings.errors.LOG_SUGGESTIONS,
        log_level=getattr(
            logging, settings.errors.ERROR_LOG_LEVEL.upper(), logging.ERROR
        ),
    )
    set_logging_config(config)
    return config


__all__ = [
    "APIError",
    "ContractViolationError",
    "DOCUMENTED_LOGGING_CONFIG",
    "ErrorKind",
    "ErrorLoggingPolicy",
    "LoggingConfig",
    "Service",
    "classify_google_api_error",
    "classify_identity_store_error",
    "classify_scim_error",
    "configure_error_logging",
    "get_logging_config",
    "handle_google_api_error",
    "handle_identity_store_error",
    "handle_scim_error",
    "log_enhanced_error",
    "set_logging_config",
    "wrap_google_api_error",
    "wrap_identity_store_error",
    "wrap_scim_error",
]
