import logging
import sys
from contextlib import contextmanager
from typing import Iterator, Optional, Union, Dict, Any
from pathlib import Path
import json
from datetime import datetime

DEFAULT_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s:%(funcName)s:%(lineno)d] %(message)s"
CHANGE_LOG_NAME = "leadmerge.changes"


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""
    
    def __init__(self, **kwargs):
        """Initialize formatter with optional fields."""
        self.extra_fields = kwargs
        super().__init__()
        
    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        data = {
            "timestamp": datetime.fromtimestamp(record.created).astimezone().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }
        
        # Add exception info if present
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
            
        # Add extra fields from record
        if hasattr(record, "extra_fields"):
            data.update(record.extra_fields)
            
        # Add configured extra fields
        data.update(self.extra_fields)
        
        return json.dumps(data, default=str)


class ChangeLogFormatter(logging.Formatter):
    """Formats change log lines as ``<ISO-8601 timestamp>: <message>``."""
    
    def __init__(self):
        super().__init__("%(asctime)s: %(message)s")
        
    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        created = datetime.fromtimestamp(record.created).astimezone()
        return created.isoformat(timespec="seconds")


def setup_logging(
    name: str,
    level: Union[str, int] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    json_format: bool = False,
    extra_fields: Optional[Dict[str, Any]] = None,
    propagate: bool = False,
    console: bool = True,
    formatter: Optional[logging.Formatter] = None,
    console_formatter: Optional[logging.Formatter] = None
) -> logging.Logger:
    """Set up logger with configurable handlers and formatters.
    
    Args:
        name: Logger name
        level: Logging level
        log_file: Optional file path for logging, opened in append mode
        json_format: Whether to use JSON formatting
        extra_fields: Optional extra fields to include in JSON logs
        propagate: Whether to propagate to parent loggers
        console: Whether to mirror records to stdout
        formatter: Optional formatter overriding the default text format
        console_formatter: Optional formatter for the stdout handler only
        
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = propagate
    
    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
        
    # Create formatters
    if json_format:
        formatter = JsonFormatter(**(extra_fields or {}))
    elif formatter is None:
        formatter = logging.Formatter(DEFAULT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        
    # Add console handler
    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(console_formatter or formatter)
        logger.addHandler(console_handler)
    
    # Add file handler if specified
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        
    return logger


def close_handlers(logger: logging.Logger) -> None:
    """Flush, close and detach every handler of a logger."""
    for handler in logger.handlers[:]:
        handler.flush()
        handler.close()
        logger.removeHandler(handler)


@contextmanager
def change_log(
    path: Optional[Union[str, Path]],
    name: str = CHANGE_LOG_NAME,
    level: Union[str, int] = logging.INFO,
    json_format: bool = False,
    console: bool = True
) -> Iterator[logging.Logger]:
    """Open the append-only change log for the duration of a run.
    
    Every merge decision logged through the yielded logger is written to
    ``path`` with a timestamp prefix and mirrored to stdout as the bare
    message. Handlers are
    closed when the block exits, whether or not it raised.
    
    Args:
        path: Change log file, or None to log to stdout only
        name: Logger name
        level: Logging level
        json_format: Whether to write JSON lines instead of text
        console: Whether to mirror records to stdout
    """
    logger = setup_logging(
        name,
        level=level,
        log_file=path,
        json_format=json_format,
        console=console,
        formatter=ChangeLogFormatter(),
        console_formatter=logging.Formatter("%(message)s")
    )
    try:
        yield logger
    finally:
        close_handlers(logger)
