"""
Centralized logging configuration for the application
"""

import logging
import sys
from typing import Optional
from datetime import datetime

from coachvision.config import settings


class ColoredFormatter(logging.Formatter):
    """Custom formatter with color support for different log levels"""
    
    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record):
        # Color a copy so file handlers sharing the record stay plain
        record = logging.makeLogRecord(record.__dict__)
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.COLORS['RESET']}"
        
        return super().format(record)


CONSOLE_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'
FILE_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get a configured logger instance
    
    Args:
        name: Logger name (usually __name__)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL), defaults to LOG_LEVEL
        
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    
    # Don't add handlers multiple times
    if logger.handlers:
        return logger
    
    logger.setLevel(getattr(logging, (level or settings.LOG_LEVEL).upper()))
    
    # Console handler with colors
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(ColoredFormatter(fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)
    
    # File handler (without colors)
    if settings.LOG_FILE:
        try:
            file_handler = logging.FileHandler(settings.LOG_FILE)
            file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT))
            logger.addHandler(file_handler)
        except OSError as e:
            # If file logging fails, just use console
            logger.warning(f"Could not create file handler: {e}")
    
    # Handlers are attached here, root handlers would print twice
    logger.propagate = False
    return logger


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """
    Setup global logging configuration
    
    Args:
        level: Default log level
        log_file: Optional log file path
    """
    # Root logger configuration
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    
    # Clear existing handlers
    root_logger.handlers.clear()
    
    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(ColoredFormatter(fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(console_handler)
    
    # File handler if specified
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT))
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(f"Could not create file handler for {log_file}: {e}")


class LoggerMixin:
    """Mixin class to add logging capabilities to any class"""
    
    @property
    def logger(self) -> logging.Logger:
        """Get logger for the current class"""
        return get_logger(f"{self.__class__.__module__}.{self.__class__.__name__}")


# Performance monitoring
class PerformanceLogger:
    """Logger for performance monitoring and metrics"""
    
    def __init__(self, name: str):
        self.logger = get_logger(f"perf.{name}")
        self.operation = None
        self.start_time = None
    
    def start(self, operation: str):
        """Start timing an operation"""
        self.operation = operation
        self.start_time = datetime.now()
        self.logger.info(f"Starting {operation}")
    
    def end(self, additional_info: Optional[str] = None) -> Optional[float]:
        """End timing, log the result and return the duration in seconds"""
        if self.start_time is None:
            self.logger.warning("end() called without start()")
            return None
        
        duration = (datetime.now() - self.start_time).total_seconds()
        info_str = f" - {additional_info}" if additional_info else ""
        self.logger.info(f"Completed {self.operation} in {duration:.3f}s{info_str}")
        self.start_time = None
        return duration
    
    def metric(self, name: str, value: float, unit: str = ""):
        """Log a performance metric"""
        unit_str = f" {unit}" if unit else ""
        self.logger.info(f"METRIC | {name}: {value}{unit_str}")
