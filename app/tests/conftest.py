import sys
from pathlib import Path
from unittest.mock import MagicMock

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `core.config`) works during pytest collection.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest

from infrastructure.diagnostics.policy import ErrorLoggingPolicy, default_policy


@pytest.fixture(autouse=True)
def restore_default_logging_config():
    """Keep changes to the process-wide error logging config local to a test."""
    saved = default_policy.get_config()
    yield
    default_policy.set_config(saved)


@pytest.fixture
def mock_logger():
    """Logger double that reports every level as enabled."""
    log = MagicMock()
    log.isEnabledFor.return_value = True
    return log


@pytest.fixture
def quiet_policy():
    """Policy whose logger reports every level as disabled."""
    log = MagicMock()
    log.isEnabledFor.return_value = False
    return ErrorLoggingPolicy(log=log)
