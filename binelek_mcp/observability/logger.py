"""
Structured logging for the Binelek MCP server.

All output goes to stderr: stdout carries the MCP stdio transport and any
stray write there corrupts the protocol stream.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import structlog
from structlog.stdlib import LoggerFactory

from binelek_mcp.config import LoggingConfig

# Global logger configuration
_logger_configured = False
_current_config: Optional[Dict[str, Any]] = None

_SENSITIVE_KEYS = ("password", "token", "secret", "api_key", "apikey", "auth")


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class StructuredFormatter(logging.Formatter):
    """Human-readable structured formatter."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record in a structured but readable way."""
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

        log_parts = [
            f"[{timestamp}]",
            f"[{record.levelname:8}]",
            f"[{record.name}]",
            record.getMessage(),
        ]

        if record.exc_info:
            log_parts.append(f"\n{self.formatException(record.exc_info)}")

        return " ".join(log_parts)


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    """
    Configure structured logging for the server.

    Args:
        config: Logging configuration; defaults to INFO, structured output.
    """
    global _logger_configured, _current_config

    if config is None:
        config = LoggingConfig()

    logging_config = config.model_dump()

    # Don't reconfigure if already configured with the same settings
    if _logger_configured and _current_config == logging_config:
        return

    level = config.level
    format_type = config.format

    # Timestamp, level and logger name are written by the stdlib formatter.
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if format_type == "json":
        processors.append(structlog.processors.JSONRenderer())
        formatter = JSONFormatter()
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
        formatter = StructuredFormatter()

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(getattr(logging, level))
    root_logger.addHandler(console_handler)

    _logger_configured = True
    _current_config = logging_config


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically module name)

    Returns:
        Structured logger instance
    """
    if not _logger_configured:
        configure_logging()

    return structlog.get_logger(name)


def log_tool_execution(
    tool_name: str,
    parameters: Optional[Dict[str, Any]],
    duration_ms: Optional[float] = None,
    success: bool = True,
    error: Optional[str] = None,
    **metadata: Any
) -> None:
    """
    Log a tool call with structured data.

    Args:
        tool_name: Name of the tool
        parameters: Raw tool arguments, sanitized before logging
        duration_ms: Execution duration in milliseconds
        success: Whether execution succeeded
        error: Error message if execution failed
        **metadata: Additional metadata
    """
    logger = get_logger("tool_execution")

    log_data = {
        "tool": tool_name,
        "parameters": sanitize_log_data(parameters or {}),
        "success": success,
        **metadata
    }

    if duration_ms is not None:
        log_data["duration_ms"] = round(duration_ms, 2)

    if error:
        log_data["error"] = error

    if success:
        logger.info("Tool execution completed", **log_data)
    else:
        logger.error("Tool execution failed", **log_data)


def sanitize_log_data(data: Any, max_length: int = 1000) -> Any:
    """
    Sanitize data for logging by removing sensitive information and limiting size.

    Args:
        data: Data to sanitize
        max_length: Maximum string length

    Returns:
        Sanitized data
    """
    if data is None:
        return None

    if isinstance(data, str):
        if len(data) > max_length:
            return data[:max_length] + "..."
        return data

    if isinstance(data, dict):
        sanitized = {}
        for key, value in data.items():
            if any(sensitive in str(key).lower() for sensitive in _SENSITIVE_KEYS):
                sanitized[key] = "[REDACTED]"
            else:
                sanitized[key] = sanitize_log_data(value, max_length)
        return sanitized

    if isinstance(data, (list, tuple)):
        return [sanitize_log_data(item, max_length) for item in data[:10]]

    if isinstance(data, (int, float, bool)):
        return data

    str_data = str(data)
    if len(str_data) > max_length:
        return str_data[:max_length] + "..."
    return str_data
