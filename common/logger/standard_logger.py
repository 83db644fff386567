# common/logger/standard_logger.py

"""
Logger backed by the standard logging module with coloured console output.
"""

import logging
import os
from typing import Any, Optional

from colorama import Fore, Style, init as colorama_init

from .logger_interface import LoggerInterface, LogLevel

colorama_init(autoreset=True)

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ColoredFormatter(logging.Formatter):
    """Formatter adding a colour per level for console handlers"""

    COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.MAGENTA + Style.BRIGHT,
    }

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = self.COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{Style.RESET_ALL}"


class StandardLogger(LoggerInterface):
    """Standard logging implementation with console and optional file handler"""

    def __init__(
        self,
        name: str,
        level: LogLevel = LogLevel.INFO,
        console_level: Optional[LogLevel] = None,
        file_level: Optional[LogLevel] = None,
        use_colors: bool = True,
        log_file: Optional[str] = None,
    ):
        """
        Initialize standard logger

        Args:
            name: Logger name
            level: Base logger level
            console_level: Level for the console handler (defaults to level)
            file_level: Level for the file handler (defaults to level)
            use_colors: Whether console output is coloured
            log_file: Optional path of a log file
        """
        super().__init__(name, level)
        self._logger = logging.getLogger(name)
        self._logger.propagate = False
        self._logger.handlers.clear()

        console_level = console_level or level
        file_level = file_level or level

        # Logger itself lets the most verbose handler decide
        lowest = min(
            logging.getLevelName(lvl.value) for lvl in (level, console_level, file_level)
        )
        self._logger.setLevel(lowest)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.getLevelName(console_level.value))
        formatter_cls = ColoredFormatter if use_colors else logging.Formatter
        console_handler.setFormatter(formatter_cls(_LOG_FORMAT))
        self._logger.addHandler(console_handler)

        if log_file:
            directory = os.path.dirname(log_file)
            if directory:
                os.makedirs(directory, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(logging.getLevelName(file_level.value))
            file_handler.setFormatter(logging.Formatter(_LOG_FORMAT))
            self._logger.addHandler(file_handler)

    @property
    def handlers(self):
        return self._logger.handlers

    def debug(self, message: Any, *args, **kwargs) -> None:
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: Any, *args, **kwargs) -> None:
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: Any, *args, **kwargs) -> None:
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: Any, *args, **kwargs) -> None:
        self._logger.error(message, *args, **kwargs)

    def critical(self, message: Any, *args, **kwargs) -> None:
        self._logger.critical(message, *args, **kwargs)

    def exception(self, message: Any, *args, **kwargs) -> None:
        self._logger.exception(message, *args, **kwargs)

    def set_level(self, level: LogLevel) -> None:
        self.level = level
        self._logger.setLevel(logging.getLevelName(level.value))
