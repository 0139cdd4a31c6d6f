"""Structured logging configuration for the chat relay."""
import logging
import sys
from pathlib import Path
from datetime import datetime, timezone
import json
from typing import Any, Dict, Optional

from .config import Config


class StructuredFormatter(logging.Formatter):
    """JSON formatter used for the log files."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_data"):
            log_data["data"] = record.extra_data

        return json.dumps(log_data, default=str)


class ColoredConsoleFormatter(logging.Formatter):
    """Formatter for colored console output."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'
    BOLD = '\033[1m'

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors for console."""
        color = self.COLORS.get(record.levelname, self.RESET)
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')

        log_parts = [
            f"{color}{self.BOLD}[{record.levelname}]{self.RESET}",
            timestamp,
            f"{color}{record.name}{self.RESET}",
            f"- {record.getMessage()}"
        ]

        if record.levelno >= logging.ERROR:
            log_parts.append(f"({record.filename}:{record.lineno})")

        if hasattr(record, "extra_data"):
            log_parts.append(json.dumps(record.extra_data, default=str))

        if record.exc_info:
            exc_text = self.formatException(record.exc_info)
            log_parts.append(f"\n  └─ Exception:\n{exc_text}")

        return " ".join(log_parts)


def setup_logging(
    log_level: str = "INFO",
    log_to_file: bool = True,
    log_to_console: bool = True,
    log_dir: Optional[Path] = None
) -> logging.Logger:
    """
    Configure the "gptchat" logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to write JSON lines to a dated file in log_dir
        log_to_console: Whether to log colored lines to stdout
        log_dir: Directory for the log file (default: LOG_DIR)

    Returns:
        Configured "gptchat" logger
    """
    logger = logging.getLogger("gptchat")
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(ColoredConsoleFormatter())
        logger.addHandler(console_handler)

    if log_to_file:
        logs_dir = Path(log_dir or Config.LOG_DIR)
        logs_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(logs_dir / f"gptchat_{datetime.now().strftime('%Y%m%d')}.log")
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "gptchat") -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Dotted logger name, normally under "gptchat."

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that merges per-call extra_data with the adapter's own."""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        """Process log message with extra context."""
        extra = kwargs.get("extra", {})
        if "extra_data" in extra:
            if self.extra and "extra_data" in self.extra:
                extra["extra_data"] = {**self.extra["extra_data"], **extra["extra_data"]}
        elif self.extra and "extra_data" in self.extra:
            extra["extra_data"] = self.extra["extra_data"]

        kwargs["extra"] = extra
        return msg, kwargs


setup_logging(Config.LOG_LEVEL, Config.LOG_TO_FILE, Config.LOG_TO_CONSOLE)
