"""
structlog setup for the QuantBot service.

``configure_logging`` runs once at startup from the ``logging`` section of
the settings. Modules take their loggers from ``get_logger`` or
``get_state_logger``; both return lazy proxies, so a logger created at
import time still renders with whatever configuration is active when it
first emits.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger

from ..config.defaults import LoggingParams

STATE_MACHINE_CONTEXT = {"subsystem": "state_machine", "audit_trail": True}


def _shared_processors() -> list:
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(params: Optional[LoggingParams] = None) -> None:
    """
    Route structlog through stdlib logging on stdout.

    Args:
        params: Level and renderer choice; defaults to LoggingParams()
    """
    params = params or LoggingParams()
    log_level = logging.getLevelName(params.level.upper())

    logging.basicConfig(level=log_level, stream=sys.stdout, format="%(message)s")
    logging.getLogger().setLevel(log_level)

    renderer = (
        structlog.processors.JSONRenderer()
        if params.format_json
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )

    structlog.configure(
        processors=_shared_processors() + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """Lazy structlog logger for ``name``."""
    return structlog.get_logger(name)


def get_state_logger(name: str) -> FilteringBoundLogger:
    """
    Lazy logger carrying the state machine audit fields.

    The fields are passed as initial values instead of through ``bind`` so
    that no concrete logger is built before ``configure_logging`` runs.
    """
    return structlog.get_logger(name, **STATE_MACHINE_CONTEXT)


def log_state_transition(
    logger: FilteringBoundLogger,
    call_id: str,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log one conversation turn.

    A turn that leaves the state unchanged (a re-prompt) is logged at debug,
    a real transition at info.
    """
    bound_logger = logger.bind(
        call_id=call_id,
        from_state=from_state,
        to_state=to_state,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if from_state == to_state:
        bound_logger.debug("State unchanged")
    else:
        bound_logger.info("State transition")
