# common/logger/logger_factory.py

from enum import Enum
from typing import Dict, Optional

from .logger_interface import LoggerInterface, LogLevel
from .print_logger import PrintLogger
from .standard_logger import StandardLogger


class LoggerType(Enum):
    """Available logger implementations"""

    STANDARD = "standard"
    PRINT = "print"


class LoggerFactory:
    """Factory returning named, cached logger instances"""

    _loggers: Dict[str, LoggerInterface] = {}

    @classmethod
    def get_logger(
        cls,
        name: str,
        logger_type: LoggerType = LoggerType.STANDARD,
        level: LogLevel = LogLevel.INFO,
        console_level: Optional[LogLevel] = None,
        file_level: Optional[LogLevel] = None,
        use_colors: bool = True,
        log_file: Optional[str] = None,
    ) -> LoggerInterface:
        """
        Get or create a logger

        Args:
            name: Logger name, also the cache key
            logger_type: Implementation to use
            level: Base log level
            console_level: Console handler level
            file_level: File handler level
            use_colors: Colour console output
            log_file: Optional log file path

        Returns:
            LoggerInterface instance
        """
        if name in cls._loggers:
            return cls._loggers[name]

        logger = cls.create_logger(
            name=name,
            logger_type=logger_type,
            level=level,
            console_level=console_level,
            file_level=file_level,
            use_colors=use_colors,
            log_file=log_file,
        )
        cls._loggers[name] = logger
        return logger

    @classmethod
    def create_logger(
        cls,
        name: str,
        logger_type: LoggerType = LoggerType.STANDARD,
        level: LogLevel = LogLevel.INFO,
        console_level: Optional[LogLevel] = None,
        file_level: Optional[LogLevel] = None,
        use_colors: bool = True,
        log_file: Optional[str] = None,
    ) -> LoggerInterface:
        """Create a new logger without caching it"""
        if logger_type == LoggerType.STANDARD:
            return StandardLogger(
                name=name,
                level=level,
                console_level=console_level,
                file_level=file_level,
                use_colors=use_colors,
                log_file=log_file,
            )
        if logger_type == LoggerType.PRINT:
            return PrintLogger(name=name, level=level)
        raise ValueError(f"Unknown logger type: {logger_type}")

    @classmethod
    def clear(cls) -> None:
        """Forget every cached logger"""
        cls._loggers.clear()
