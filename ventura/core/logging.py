from __future__ import annotations

import logging
import sys

import structlog
from structlog.typing import EventDict, Processor

from ventura.core.config import settings


def _component(name: str) -> Processor:
    def add_component(logger: object, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("component", name)
        return event_dict

    return add_component


def configure_logging(level: str | None = None, *, component: str = "api") -> None:
    """Configure structured JSON logging.

    The API calls this from `create_app` and the pipeline client from
    `build_client`; `component` tells their lines apart when both write to
    the same stream. Request and actor ids come from contextvars bound by
    the middleware and are absent on the client side.
    """
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level_name, logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            _component(component),
            structlog.contextvars.merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
