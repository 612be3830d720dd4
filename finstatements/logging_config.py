"""
Structured logging setup.

Configures structlog on top of the standard library logger so that library
callers and the API share one JSON log stream.
"""
import logging
import sys

import structlog

from finstatements.config import get_settings
from finstatements.middleware.logging import add_correlation_id_processor


def configure_logging(log_level: str = None) -> None:
    """Configure structlog processors and the root log level."""
    level_name = (log_level or get_settings().log_level).upper()
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level_name, logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            add_correlation_id_processor,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
