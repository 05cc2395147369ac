import logging
import sys
from datetime import datetime
from typing import Optional

import structlog

from config import LoggingConfig, config

# Flag to ensure configuration happens only once
_is_configured = False

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"


def setup_logging(logging_config: Optional[LoggingConfig] = None):
    """
    Set up logging for the filler using the standard library and structlog.
    Idempotent: only the first call configures handlers.
    """
    global _is_configured
    if _is_configured:
        return

    settings = logging_config or config.logging
    log_level = settings.log_level.upper()
    numeric_level = getattr(logging, log_level, logging.INFO)

    formatter = logging.Formatter(LOG_FORMAT)
    handlers = []

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    handlers.append(stream_handler)

    if settings.log_file_path:
        log_path = settings.log_file_path
        log_path.parent.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        new_log_file = log_path.parent / f"{log_path.stem}_{timestamp}{log_path.suffix}"

        file_handler = logging.FileHandler(new_log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    # force=True drops handlers installed earlier by libraries or pytest
    logging.basicConfig(level=numeric_level, handlers=handlers, force=True)

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.stdlib.render_to_log_kwargs
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", utc=False, key="timestamp"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _is_configured = True


def get_structured_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger with the given name.

    Example:
        >>> logger = get_structured_logger(__name__)
        >>> logger.info("fill_pass_started", url="https://example.com")
    """
    return structlog.get_logger(name)


def bind_context(logger: structlog.stdlib.BoundLogger, **context) -> structlog.stdlib.BoundLogger:
    """
    Bind context data to a logger for all subsequent log entries.

    Example:
        >>> pass_logger = bind_context(get_structured_logger(__name__), pass_id="a1b2")
        >>> pass_logger.info("control_filled", kind="email")
    """
    return logger.bind(**context)
