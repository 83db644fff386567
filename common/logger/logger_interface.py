# common/logger/logger_interface.py

"""
Logger interface shared by the service loggers.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any


class LogLevel(str, Enum):
    """Supported log levels"""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggerInterface(ABC):
    """Abstract logger used across services"""

    def __init__(self, name: str, level: LogLevel = LogLevel.INFO):
        self.name = name
        self.level = level

    @abstractmethod
    def debug(self, message: Any, *args, **kwargs) -> None:
        pass

    @abstractmethod
    def info(self, message: Any, *args, **kwargs) -> None:
        pass

    @abstractmethod
    def warning(self, message: Any, *args, **kwargs) -> None:
        pass

    @abstractmethod
    def error(self, message: Any, *args, **kwargs) -> None:
        pass

    @abstractmethod
    def critical(self, message: Any, *args, **kwargs) -> None:
        pass

    def exception(self, message: Any, *args, **kwargs) -> None:
        """Log an error together with the active exception"""
        self.error(message, *args, **kwargs)

    @abstractmethod
    def set_level(self, level: LogLevel) -> None:
        """Change the minimum level emitted by this logger"""
        pass
