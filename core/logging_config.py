"""
Project Navigator Structured Logging Configuration

Provides:
- JSON structured logging for production / machine consumers
- Colorized console output for interactive use
- Performance logging decorator for engine calls

Usage:
    from core.logging_config import setup_logging, get_logger

    # At CLI startup
    setup_logging(level='INFO', json_format=False)

    # In modules
    logger = get_logger(__name__)
    logger.info('Message', extra={'visible_count': 12})
"""

import logging
import json
import os
import sys
import time
import traceback
from datetime import datetime, timezone
from functools import wraps


ROOT_LOGGER_NAME = 'navigator'

# Attributes present on every LogRecord; anything else came in through `extra`
_RESERVED_ATTRS = frozenset((
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'pathname', 'process', 'processName', 'relativeCreated',
    'stack_info', 'exc_info', 'exc_text', 'thread', 'threadName',
    'taskName', 'message',
))


# =============================================================================
# Custom Formatters
# =============================================================================

class JSONFormatter(logging.Formatter):
    """JSON structured log formatter for production."""

    def format(self, record):
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        # Add any extra attributes from the record
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key.startswith('_'):
                continue
            try:
                json.dumps(value)
            except (TypeError, ValueError):
                value = repr(value)
            log_entry[key] = value

        # Add exception info if present
        if record.exc_info:
            log_entry['exception'] = {
                'type': record.exc_info[0].__name__ if record.exc_info[0] else None,
                'message': str(record.exc_info[1]) if record.exc_info[1] else None,
                'traceback': traceback.format_exception(*record.exc_info)
            }

        return json.dumps(log_entry)


class ColoredFormatter(logging.Formatter):
    """Colorized console formatter for development."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_color=True):
        super().__init__()
        self.use_color = use_color

    def format(self, record):
        color = self.COLORS.get(record.levelname, '') if self.use_color else ''
        reset = self.RESET if self.use_color else ''

        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')

        parts = [
            f'{color}[{timestamp}]{reset}',
            f'{color}{record.levelname:8}{reset}',
            f'{record.name}:',
            record.getMessage()
        ]

        if hasattr(record, 'duration_ms'):
            parts.append(f'({record.duration_ms}ms)')

        message = ' '.join(parts)

        if record.exc_info:
            message += '\n' + ''.join(traceback.format_exception(*record.exc_info))

        return message


# =============================================================================
# Logger Setup
# =============================================================================

def setup_logging(level='INFO', json_format=None, stream=None):
    """
    Configure logging for the navigator package loggers.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON format (default: NAVIGATOR_ENV == 'production')
        stream: Output stream (default: stderr, keeps stdout clean for results)

    Returns:
        The configured package root logger
    """
    if json_format is None:
        json_format = os.getenv('NAVIGATOR_ENV', 'development') == 'production'

    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(numeric_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    output = stream or sys.stderr
    console_handler = logging.StreamHandler(output)
    console_handler.setLevel(numeric_level)

    if json_format:
        console_handler.setFormatter(JSONFormatter())
    else:
        is_tty = hasattr(output, 'isatty') and output.isatty()
        console_handler.setFormatter(ColoredFormatter(use_color=is_tty))

    root_logger.addHandler(console_handler)

    root_logger.debug('Logging configured', extra={
        'format': 'json' if json_format else 'colored',
        'log_level': logging.getLevelName(numeric_level)
    })

    return root_logger


def get_logger(name):
    """
    Get a logger under the navigator namespace.

    Module names from this repository (``navigator.filtering``, ``core.config``)
    are nested under the package root so ``setup_logging`` covers them.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')


# =============================================================================
# Performance Logging Decorator
# =============================================================================

def log_performance(logger_name=None):
    """
    Decorator to log function performance at DEBUG.

    Usage:
        @log_performance('navigator.filtering')
        def filter_projects_for_navigator(projects, filters):
            ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger(logger_name or func.__module__)
            start_time = time.perf_counter()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration_ms = round((time.perf_counter() - start_time) * 1000, 3)
                logger.error(
                    f'{func.__name__} failed: {e}',
                    extra={
                        'function': func.__name__,
                        'duration_ms': duration_ms,
                        'error_type': type(e).__name__,
                    }
                )
                raise

            duration_ms = round((time.perf_counter() - start_time) * 1000, 3)
            logger.debug(
                f'{func.__name__} completed',
                extra={
                    'function': func.__name__,
                    'duration_ms': duration_ms,
                }
            )
            return result

        return wrapper
    return decorator
