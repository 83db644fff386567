# common/logger/print_logger.py

from datetime import datetime
from typing import Any

from .logger_interface import LoggerInterface, LogLevel

_LEVEL_ORDER = {
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.WARNING: 30,
    LogLevel.ERROR: 40,
    LogLevel.CRITICAL: 50,
}


class PrintLogger(LoggerInterface):
    """Minimal logger writing straight to stdout, handy for scripts and tests"""

    def _emit(self, level: LogLevel, message: Any) -> None:
        if _LEVEL_ORDER[level] < _LEVEL_ORDER[self.level]:
            return
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        print(f"{timestamp} - {self.name} - {level.value} - {message}")

    def debug(self, message: Any, *args, **kwargs) -> None:
        self._emit(LogLevel.DEBUG, message)

    def info(self, message: Any, *args, **kwargs) -> None:
        self._emit(LogLevel.INFO, message)

    def warning(self, message: Any, *args, **kwargs) -> None:
        self._emit(LogLevel.WARNING, message)

    def error(self, message: Any, *args, **kwargs) -> None:
        self._emit(LogLevel.ERROR, message)

    def critical(self, message: Any, *args, **kwargs) -> None:
        self._emit(LogLevel.CRITICAL, message)

    def set_level(self, level: LogLevel) -> None:
        self.level = level
