"""Structured logging utilities."""
import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Dict, Any, Optional

from localfind.core.config import LOG_LEVEL


def setup_logging(level: str = LOG_LEVEL):
    """Setup structured JSON logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(message)s',
        handlers=[logging.StreamHandler()]
    )
    logging.getLogger("localfind").setLevel(level.upper())


def log_structured(level: str, message: str, **kwargs):
    """
    Log structured JSON message.

    Args:
        level: Log level (debug, info, warning, error)
        message: Log message
        **kwargs: Additional structured fields
    """
    log_entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": level.upper(),
        "message": message,
        **kwargs
    }

    logger = logging.getLogger("localfind")
    getattr(logger, level.lower(), logger.info)(json.dumps(log_entry, default=str))


def log_error(error: Exception, context: Optional[Dict[str, Any]] = None):
    """Log an exception with its type, traceback and caller context."""
    log_structured(
        "error",
        str(error),
        error_type=type(error).__name__,
        traceback=traceback.format_exception_only(type(error), error)[-1].strip(),
        **(context or {})
    )
