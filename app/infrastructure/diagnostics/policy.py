"""Logging policy for classified API errors.

Controls whether enhanced errors are logged and whether their troubleshooting
suggestions are emitted. A process-wide default policy backs the module-level
helpers; components that want isolation take an ErrorLoggingPolicy instance
instead.

Usage:
    from infrastructure.diagnostics.policy import (
        LoggingConfig,
        handle_identity_store_error,
        set_logging_config,
    )

    set_logging_config(LoggingConfig(log_suggestions=True))

    try:
        client.delete_group(IdentityStoreId=store_id, GroupId=group_id)
    except ClientError as e:
        raise handle_identity_store_error("DeleteGroup", e) from e
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, Iterator, Optional

from structlog.stdlib import BoundLogger

from core.logging import get_module_logger
from infrastructure.diagnostics.classifiers import (
    classify_google_api_error,
    classify_identity_store_error,
    classify_scim_error,
)
from infrastructure.diagnostics.errors import APIError

logger = get_module_logger()


@dataclass
class LoggingConfig:
    """Error logging behaviour.

    Attributes:
        log_suggestions: Emit troubleshooting suggestions after the error entry
        log_level: Minimum stdlib logging level at which errors are reported
    """

    log_suggestions: bool = False
    log_level: int = logging.ERROR


# Suggestion visibility as described in the user documentation. It disagrees
# with LoggingConfig() and is kept separate until the intended default is
# settled.
DOCUMENTED_LOGGING_CONFIG = LoggingConfig(log_suggestions=True, log_level=logging.ERROR)


class ReadWriteLock:
    """Many concurrent readers or a single writer."""

    def __init__(self):
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._condition:
            while self._writing:
                self._condition.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._condition:
                self._readers -= 1
                if self._readers == 0:
                    self._condition.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._condition:
            while self._writing or self._readers:
                self._condition.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._condition:
                self._writing = False
                self._condition.notify_all()


class ErrorLoggingPolicy:
    """Owns a LoggingConfig and logs classified errors according to it."""

    def __init__(
        self,
        config: Optional[LoggingConfig] = None,
        log: Optional[BoundLogger] = None,
    ):
        self._config = replace(config) if config is not None else LoggingConfig()
        self._lock = ReadWriteLock()
        self._logger = log if log is not None else logger

    def set_config(self, config: LoggingConfig) -> None:
        """Replace the whole configuration record."""
        new_config = replace(config)
        with self._lock.write():
            self._config = new_config

    def get_config(self) -> LoggingConfig:
        """Return an independent copy of the current configuration."""
        with self._lock.read():
            return replace(self._config)

    def log_error(self, err: APIError) -> None:
        """Log an enhanced API error and, if enabled, its suggestions."""
        config = self.get_config()

        if not self._logger.isEnabledFor(config.log_level):
            return

        self._logger.error(
            str(err),
            service=err.service.value,
            operation=err.operation,
            status_code=err.status_code,
            error=str(err.original_error),
        )

        if config.log_suggestions and err.suggestions:
            self._logger.info("Troubleshooting suggestions:")
            for number, suggestion in enumerate(err.suggestions, start=1):
                self._logger.info(f"  {number}. {suggestion}")

    def handle_scim_error(
        self, operation: str, status_code: int, original_error: Any
    ) -> APIError:
        """Classify and log a SCIM failure in a single call."""
        err = classify_scim_error(operation, status_code, original_error)
        self.log_error(err)
        return err

    def handle_google_api_error(self, operation: str, original_error: Any) -> APIError:
        """Classify and log a Google Workspace failure in a single call."""
        err = classify_google_api_error(operation, original_error)
        self.log_error(err)
        return err

    def handle_identity_store_error(
        self, operation: str, original_error: Any
    ) -> APIError:
        """Classify and log an Identity Store failure in a single call."""
        err = classify_identity_store_error(operation, original_error)
        self.log_error(err)
        return err


default_policy = ErrorLoggingPolicy()


def get_logging_config() -> LoggingConfig:
    """Return a copy of the process-wide logging configuration."""
    return default_policy.get_config()


def set_logging_config(config: LoggingConfig) -> None:
    """Replace the process-wide logging configuration."""
    default_policy.set_config(config)


def log_enhanced_error(err: APIError) -> None:
    """Log an enhanced error with the process-wide policy."""
    default_policy.log_error(err)


def handle_scim_error(operation: str, status_code: int, original_error: Any) -> APIError:
    return default_policy.handle_scim_error(operation, status_code, original_error)


def handle_google_api_error(operation: str, original_error: Any) -> APIError:
    return default_policy.handle_google_api_error(operation, original_error)


def handle_identity_store_error(operation: str, original_error: Any) -> APIError:
    return default_policy.handle_identity_store_error(operation, original_error)


# Classification without logging


def wrap_scim_error(operation: str, status_code: int, original_error: Any) -> APIError:
    return classify_scim_error(operation, status_code, original_error)


def wrap_google_api_error(operation: str, original_error: Any) -> APIError:
    return classify_google_api_error(operation, original_error)


def wrap_identity_store_error(operation: str, original_error: Any) -> APIError:
    return classify_identity_store_error(operation, original_error)
