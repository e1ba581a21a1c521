import logging
import os
from typing import Optional

# Map string log levels to logging constants
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Attributes every LogRecord carries; anything else came in through `extra`
RESERVED_RECORD_KEYS = frozenset(
    [
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "taskName",
    ]
)


class StructuredFormatter(logging.Formatter):
    """Human-readable formatter that appends `extra` fields as key=value pairs."""

    def _format_extra(self, key, value) -> Optional[str]:
        if key == "event_type":
            return f"type={value}"
        if key == "proposal_id":
            return f"proposal={value}"
        if isinstance(value, dict):
            if key == "request":
                method = value.get("method", "")
                path = value.get("path", value.get("endpoint", ""))
                if method and path:
                    return f"request={method} {path}"
                return None
            if key == "response":
                parts = []
                if value.get("status_code"):
                    parts.append(f"response={value['status_code']}")
                if value.get("process_time_ms"):
                    parts.append(f"time={value['process_time_ms']}ms")
                return " ".join(parts) or None
            return f"{key}={str(value)[:100]}"
        return f"{key}={value}"

    def format(self, record):
        timestamp = self.formatTime(record, self.datefmt or "%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)
        logger_name = record.name.split(".")[-1][:20].ljust(20)
        log_line = f"{timestamp} | {level} | {logger_name} | {record.getMessage()}"

        extras = []
        for key, value in record.__dict__.items():
            if key in RESERVED_RECORD_KEYS or value is None:
                continue
            rendered = self._format_extra(key, value)
            if rendered:
                extras.append(rendered)

        if extras:
            log_line += f" | {' '.join(extras)}"

        if record.exc_info:
            log_line += f"\n{self.formatException(record.exc_info)}"

        return log_line


def configure_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Configure and return a logger instance with consistent formatting and level.

    Args:
        name (Optional[str]): Logger name. If None, the module logger is returned

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name if name else __name__)

    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = LOG_LEVELS.get(log_level_str, logging.INFO)
    logger.setLevel(log_level)

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(StructuredFormatter())
        logger.addHandler(console_handler)

    return logger


def setup_uvicorn_logging():
    """Route uvicorn and fastapi log output through the structured formatter."""
    # Access lines come from LoggingMiddleware instead
    logging.getLogger("uvicorn.access").disabled = True

    structured_formatter = StructuredFormatter()
    for logger_name in ["uvicorn", "uvicorn.error", "fastapi", ""]:
        for handler in logging.getLogger(logger_name).handlers:
            handler.setFormatter(structured_formatter)
