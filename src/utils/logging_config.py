import logging
import sys
from pathlib import Path

import structlog

from src.config.config import config


class CustomFormatter(logging.Formatter):
    """Custom formatter that implements the required format: [yyyy-mm-dd hh:mm:ss] [log_type] [class_name]: {message}"""

    def format(self, record):
        # Extract class name from the logger name
        class_name = record.name.split('.')[-1] if '.' in record.name else record.name

        # Format timestamp as yyyy-mm-dd hh:mm:ss
        timestamp = self.formatTime(record, '%Y-%m-%d %H:%M:%S')

        formatted_message = f"[{timestamp}] [{record.levelname}] [{class_name}]: {record.getMessage()}"

        if record.exc_info:
            formatted_message += '\n' + self.formatException(record.exc_info)

        return formatted_message


def ensure_logs_directory():
    """Ensure the logs directory exists."""
    logs_dir = Path("logs")
    logs_dir.mkdir(exist_ok=True)
    return logs_dir


def get_log_file_path() -> Path:
    """Get the log file path based on environment."""
    logs_dir = ensure_logs_directory()
    log_filename = f"city_info_{config.environment}.log"
    return logs_dir / log_filename


_key_value_renderer = structlog.processors.KeyValueRenderer(key_order=["event"], drop_missing=True)


def render_for_stdlib(logger, method_name, event_dict):
    """Render event fields as key=value pairs and hand exc_info to the stdlib logger."""
    exc_info = event_dict.pop("exc_info", None)
    message = _key_value_renderer(logger, method_name, event_dict)
    return (message,), ({"exc_info": exc_info} if exc_info else {})


def configure_structlog():
    """
    Route structlog loggers through the standard library.

    The stdlib formatter then prints the rendered event as the message and
    the stack trace of any exc_info below it.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            render_for_stdlib,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def setup_logging():
    """
    Configure logging for the application.

    Sets up console and file logging with custom format:
    [yyyy-mm-dd hh:mm:ss] [log_type] [class_name]: {message}
    """
    log_file_path = get_log_file_path()
    level = getattr(logging, config.log_level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    formatter = CustomFormatter()

    file_handler = logging.FileHandler(log_file_path, encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    configure_structlog()

    logger = structlog.get_logger(__name__)
    logger.info("Logging configured", log_file=str(log_file_path))
