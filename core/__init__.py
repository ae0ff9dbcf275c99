"""
Core Infrastructure for the Project Navigator

This module provides:
- Error types: ingestion and configuration failures
- Configuration: YAML file + environment overrides
- Logging: JSON / colored formatters and a performance decorator

Usage:
    from core import get_config, setup_logging

    config = get_config()
    setup_logging(level=config.log_level, json_format=config.json_logs)
"""

from .errors import (
    NavigatorError,
    ValidationError,
    DuplicateTitleError,
    ContentNotFoundError,
    ConfigurationError,
)
from .config import NavigatorConfig, get_config, reset_config, load_config
from .logging_config import setup_logging, get_logger, log_performance

__all__ = [
    'NavigatorError',
    'ValidationError',
    'DuplicateTitleError',
    'ContentNotFoundError',
    'ConfigurationError',
    'NavigatorConfig',
    'get_config',
    'reset_config',
    'load_config',
    'setup_logging',
    'get_logger',
    'log_performance',
]
