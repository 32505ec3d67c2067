import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from Config.logging_config import TRADE_LOG_LEVELS, LoggingConfig


class CustomLogger(logging.Logger):
    # Custom trade levels (registered in Config.logging_config)
    SELL_LEVEL_NUM = TRADE_LOG_LEVELS['SELL']
    BUY_LEVEL_NUM = TRADE_LOG_LEVELS['BUY']
    REALIZED_GAIN_NUM = TRADE_LOG_LEVELS['REALIZED_GAIN']
    INSUFFICIENT_SHARES_NUM = TRADE_LOG_LEVELS['INSUFFICIENT_SHARES']

    def buy(self, message, *args, **kwargs):
        if self.isEnabledFor(self.BUY_LEVEL_NUM):
            self._log(self.BUY_LEVEL_NUM, f"BUY: {message}", args, **kwargs)

    def sell(self, message, *args, **kwargs):
        if self.isEnabledFor(self.SELL_LEVEL_NUM):
            self._log(self.SELL_LEVEL_NUM, f"SELL: {message}", args, **kwargs)

    def realized_gain(self, message, *args, **kwargs):
        if self.isEnabledFor(self.REALIZED_GAIN_NUM):
            self._log(self.REALIZED_GAIN_NUM, f"REALIZED: {message}", args, **kwargs)

    def insufficient_shares(self, message, *args, **kwargs):
        if self.isEnabledFor(self.INSUFFICIENT_SHARES_NUM):
            self._log(self.INSUFFICIENT_SHARES_NUM, f"INSUFFICIENT_SHARES: {message}", args, **kwargs)


class LogBufferHandler(logging.Handler):
    """Keeps every formatted record in memory so a run's log can be exported."""

    def __init__(self, level=logging.DEBUG):
        super().__init__(level)
        self.lines: List[str] = []
        self.setFormatter(logging.Formatter("%(levelname)-5s [%(asctime)s] %(message)s", "%Y-%m-%d %H:%M:%S"))

    def emit(self, record):
        try:
            self.lines.append(self.format(record))
        except Exception:
            self.handleError(record)

    def clear(self):
        self.lines.clear()


class LoggerManager:
    """
    Owns the application's named loggers.

    Every logger gets a console handler, a rotating JSON file handler (unless
    disabled) and the shared in-memory buffer.
    """

    LOGGER_NAMES = ('fifo_logger', 'report_logger')

    def __init__(self, config, log_dir=None):
        self._log_level = str(config.get('log_level', 'INFO')).upper()
        self.log_dir = Path(log_dir or config.get('log_dir') or "logs")
        self.loggers: Dict[str, CustomLogger] = {}
        self.buffer = LogBufferHandler()
        self.logging_config = LoggingConfig(
            log_dir=str(self.log_dir),
            console_level=self._log_level,
            log_to_file=config.get('log_to_file', True),
            use_color=config.get('use_color', True),
        )
        self.setup_logging()

    @property
    def log_level(self):
        return self._log_level

    def setup_logging(self):
        for name in self.LOGGER_NAMES:
            self.setup_logger(name)

    def setup_logger(self, logger_name):
        logger = CustomLogger(logger_name)
        self.logging_config.configure_logger(logger, f"{logger_name}.log")
        logger.addHandler(self.buffer)
        self.loggers[logger_name] = logger
        return logger

    def get_logger(self, logger_name) -> Optional[CustomLogger]:
        return self.loggers.get(logger_name)

    # =========================================================================
    # LOG BUFFER
    # =========================================================================

    def get_log(self) -> str:
        """Everything logged since start (or the last clear_log) as one string."""
        return "".join(line + "\n" for line in self.buffer.lines)

    def clear_log(self):
        self.buffer.clear()

    def export_log(self, file_path: Union[str, Path]) -> Path:
        """Write the buffered log to `file_path` and return the path."""
        path = Path(file_path)
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.get_log())
        return path

    def close(self):
        """Flush and close file handlers (rotating files stay on disk)."""
        for logger in self.loggers.values():
            for handler in list(logger.handlers):
                if handler is not self.buffer:
                    handler.close()
                    logger.removeHandler(handler)
