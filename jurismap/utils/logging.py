"""Structured logging utilities."""
import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Dict, Any, Optional


def setup_logging(level: str = "INFO"):
    """Setup structured JSON logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(message)s',
        handlers=[logging.StreamHandler()]
    )


def log_structured(level: str, message: str, **kwargs):
    """
    Log structured JSON message.

    Args:
        level: Log level (info, warning, error, etc.)
        message: Log message
        **kwargs: Additional structured fields
    """
    log_entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": level.upper(),
        "message": message,
        **kwargs
    }

    logger = logging.getLogger("jurismap")
    getattr(logger, level.lower(), logger.info)(json.dumps(log_entry, default=str))


def log_warning(message: str, **kwargs):
    """Log a structured warning."""
    log_structured("warning", message, **kwargs)


def log_error(error: Exception, context: Optional[Dict[str, Any]] = None):
    """
    Log an exception with its traceback and context, and forward it to Sentry.

    Args:
        error: The exception to log
        context: Extra fields (module, function, ids...)
    """
    context = context or {}
    log_structured(
        "error",
        str(error),
        error_type=type(error).__name__,
        traceback="".join(traceback.format_exception(type(error), error, error.__traceback__)),
        **context
    )

    from jurismap.utils.error_tracking import capture_exception
    capture_exception(error, context)
