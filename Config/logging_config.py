"""
Logging Configuration

This module provides centralized logging configuration with:
- Custom log levels for trade events (BUY, SELL, REALIZED_GAIN, ...)
- Colored console output
- JSON formatting for rotating log files
- Size-based log rotation (10MB max)
"""

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


# Custom log levels for trade events
TRADE_LOG_LEVELS = {
    'SELL': 19,
    'BUY': 21,
    'REALIZED_GAIN': 22,
    'INSUFFICIENT_SHARES': 31,
}

# Register custom log levels
for level_name, level_num in TRADE_LOG_LEVELS.items():
    logging.addLevelName(level_num, level_name)

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s (%(filename)s:%(lineno)d)'

# Attributes every LogRecord carries; anything else came in through `extra`
_RECORD_ATTRS = {
    'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname', 'levelno',
    'lineno', 'module', 'msecs', 'message', 'pathname', 'process', 'processName',
    'relativeCreated', 'thread', 'threadName', 'exc_info', 'exc_text', 'stack_info',
    'taskName', 'asctime',
}


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for log files.

    {
        "timestamp": "2025-02-01T10:30:45.123+00:00",
        "level": "REALIZED_GAIN",
        "logger": "fifo_logger",
        "message": "AAPL: sold 120 @ $160.00 ...",
        "extra": {...},
        "exc_info": "..."
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        extra_fields = {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}
        if extra_fields:
            log_data['extra'] = extra_fields

        if record.exc_info:
            log_data['exc_info'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ColoredConsoleFormatter(logging.Formatter):
    """Console formatter using ANSI color codes per level."""

    COLORS = {
        'DEBUG': '\x1b[38;21m',                # Grey
        'INFO': '\x1b[38;21m',                 # Grey
        'WARNING': '\x1b[38;5;214m',           # Orange
        'ERROR': '\x1b[31;21m',                # Red
        'CRITICAL': '\x1b[31;1m',              # Bold Red
        'BUY': '\x1b[34;21m',                  # Blue
        'SELL': '\x1b[32;21m',                 # Green
        'REALIZED_GAIN': '\x1b[32;21m',        # Green
        'INSUFFICIENT_SHARES': '\x1b[35;21m',  # Magenta
    }
    RESET = '\x1b[0m'

    def __init__(self, fmt: str = DEFAULT_FORMAT):
        super().__init__(fmt, datefmt='%Y-%m-%d %H:%M:%S')

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname)
        formatted = super().format(record)
        if color is None:
            return formatted
        return f"{color}{formatted}{self.RESET}"


class LoggingConfig:
    """
    Central logging configuration.

    Creates the console and rotating file handlers attached to each managed
    logger.
    """

    DEFAULT_LOG_DIR = 'logs'
    DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
    DEFAULT_BACKUP_COUNT = 3

    def __init__(
        self,
        log_dir: Optional[str] = None,
        console_level: str = 'INFO',
        file_level: str = 'DEBUG',
        log_to_file: bool = True,
        use_color: bool = True,
        max_bytes: int = DEFAULT_MAX_BYTES,
        backup_count: int = DEFAULT_BACKUP_COUNT,
    ):
        """
        Initialize logging configuration.

        Args:
            log_dir: Directory for log files (default: 'logs')
            console_level: Console log level (default: INFO, DEBUG with --verbose)
            file_level: File log level (default: DEBUG)
            log_to_file: Attach a rotating file handler
            use_color: ANSI colors on the console
            max_bytes: Max size per log file before rotation
            backup_count: Number of rotated files to keep
        """
        self.log_dir = Path(log_dir or self.DEFAULT_LOG_DIR)
        self.console_level = console_level.upper()
        self.file_level = file_level.upper()
        self.log_to_file = log_to_file
        self.use_color = use_color
        self.max_bytes = max_bytes
        self.backup_count = backup_count

        if self.log_to_file:
            self.log_dir.mkdir(parents=True, exist_ok=True)

    def get_console_formatter(self) -> logging.Formatter:
        if self.use_color:
            return ColoredConsoleFormatter()
        return logging.Formatter(DEFAULT_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    def create_console_handler(self) -> logging.StreamHandler:
        handler = logging.StreamHandler()
        handler.setLevel(logging.getLevelName(self.console_level))
        handler.setFormatter(self.get_console_formatter())
        return handler

    def create_file_handler(self, log_file: str) -> RotatingFileHandler:
        """
        Create configured rotating file handler.

        Args:
            log_file: Name of the log file (e.g., 'fifo_logger.log')
        """
        handler = RotatingFileHandler(
            self.log_dir / log_file,
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding='utf-8',
        )
        handler.setLevel(logging.getLevelName(self.file_level))
        handler.setFormatter(JSONFormatter())
        return handler

    def configure_logger(self, logger: logging.Logger, log_file: Optional[str] = None) -> logging.Logger:
        """
        Attach console and (optionally) file handlers to a logger.

        Args:
            logger: Logger to configure
            log_file: Log file name (default: {logger.name}.log)
        """
        logger.setLevel(logging.DEBUG)  # Capture all levels, handlers filter

        if logger.hasHandlers():
            logger.handlers.clear()

        logger.addHandler(self.create_console_handler())
        if self.log_to_file:
            logger.addHandler(self.create_file_handler(log_file or f"{logger.name}.log"))

        logger.propagate = False
        return logger
