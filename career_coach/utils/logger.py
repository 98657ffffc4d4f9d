import logging
import json
import os
import sys
from datetime import datetime, timezone

from career_coach.config import get_settings

# Extra fields lifted onto the log entry when passed via extra={...}
CONTEXT_FIELDS = (
    "method", "path", "status", "duration_ms", "client_ip",
    "error", "error_type", "provider", "operation", "industry",
)


class StructuredFormatter(logging.Formatter):
    """One JSON object per line, carrying the request's correlation ID"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        # Stamped by CorrelationIdFilter
        if getattr(record, "correlation_id", None):
            entry["correlation_id"] = record.correlation_id

        for key in CONTEXT_FIELDS:
            if hasattr(record, key):
                entry[key] = getattr(record, key)

        if record.levelno >= logging.WARNING:
            entry["source"] = f"{record.filename}:{record.lineno}"

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = {
                "type": type(record.exc_info[1]).__name__,
                "message": str(record.exc_info[1]),
            }

        return json.dumps(entry, default=str)


class SimpleFormatter(logging.Formatter):
    """Readable local format: time, level, short correlation ID, message, context"""

    def __init__(self):
        super().__init__('%(asctime)s - %(levelname)s - %(message)s', datefmt='%H:%M:%S')

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)

        cid = getattr(record, "correlation_id", None)
        if cid:
            line = f"[{cid[:8]}] {line}"

        context = " ".join(
            f"{key}={getattr(record, key)}" for key in CONTEXT_FIELDS if hasattr(record, key)
        )
        return f"{line} ({context})" if context else line


def setup_logger(name: str = "career_coach", level: str = None) -> logging.Logger:
    """
    JSON to stdout on Railway or with LOG_FORMAT=json (log drain ingestion),
    SimpleFormatter otherwise. Level comes from settings.log_level unless given.
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    settings = get_settings()
    level = level or settings.log_level
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    json_output = bool(os.getenv("RAILWAY_ENVIRONMENT")) or settings.log_format.lower() == "json"

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter() if json_output else SimpleFormatter())
    logger.addHandler(handler)
    return logger


logger = setup_logger()


def get_logger(name: str = None) -> logging.Logger:
    if name:
        return setup_logger(name)
    return logger
