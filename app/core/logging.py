"""Directory sync structured logging.

structlog is layered over the standard library so that ``logging`` levels
gate every entry, including the enhanced API error entries written by
``infrastructure.diagnostics``.
"""

import inspect
import logging
import sys
from typing import List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.types import Processor

from .config import settings

SILENT_LEVEL = logging.CRITICAL + 1


def _is_test_environment() -> bool:
    return "pytest" in sys.modules


def _processors(json_logs: bool) -> List[Processor]:
    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def configure_logging(
    log_level: Optional[str] = None, json_logs: Optional[bool] = None
) -> BoundLogger:
    """Configure structlog and the root logger.

    Args:
        log_level (str, optional): Root level name. Defaults to LOG_LEVEL.
        json_logs (bool, optional): Render JSON instead of console output.
            Defaults to True in production.

    Returns:
        BoundLogger: The application logger.
    """
    if _is_test_environment():
        # Nothing is emitted under pytest
        level = SILENT_LEVEL
        processors: List[Processor] = [
            structlog.stdlib.add_log_level,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ]
    else:
        level = getattr(
            logging, (log_level or settings.LOG_LEVEL).upper(), logging.INFO
        )
        processors = _processors(
            settings.is_production if json_logs is None else json_logs
        )

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=level, force=True)
    logging.root.setLevel(level)

    return structlog.stdlib.get_logger()


logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Get a logger bound to the calling module.

    Binds ``component`` (last dotted segment) and ``module_path`` (full module
    name) so entries can be filtered per integration.
    """
    current_frame = inspect.currentframe()
    if current_frame is None:
        return logger

    module = inspect.getmodule(current_frame.f_back)
    if module is None:
        return logger.bind(component="unknown")

    return logger.bind(
        component=module.__name__.rsplit(".", 1)[-1],
        module_path=module.__name__,
    )
