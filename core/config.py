"""
Project Navigator Configuration

Resolution order (later wins):
1. NavigatorConfig defaults
2. YAML file (``navigator.yaml`` in the working directory, or NAVIGATOR_CONFIG)
3. Environment variables (a ``.env`` file is loaded first)

Example navigator.yaml:

    navigator:
      content_path: content/projects
      default_statuses: [active, maintenance]
      default_category: all
      strict_status: false
      log_level: INFO
      json_logs: false
      lang: en

Usage:
    from core.config import get_config

    config = get_config()
    projects = load_projects(config.content_path, lang=config.lang)
"""

import os
import threading
from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional

import yaml
from dotenv import load_dotenv

from navigator.models import CATEGORY_ALL, ProjectCategory, ProjectStatus, ProjectLang
from .errors import ConfigurationError
from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = 'navigator.yaml'

ENV_OVERRIDES = {
    'NAVIGATOR_CONTENT_PATH': 'content_path',
    'NAVIGATOR_LOG_LEVEL': 'log_level',
    'NAVIGATOR_JSON_LOGS': 'json_logs',
    'NAVIGATOR_STRICT_STATUS': 'strict_status',
    'NAVIGATOR_LANG': 'lang',
    'NAVIGATOR_DEFAULT_CATEGORY': 'default_category',
}

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off', ''}


def _all_statuses() -> FrozenSet[str]:
    return frozenset(status.value for status in ProjectStatus)


@dataclass
class NavigatorConfig:
    """Navigator configuration."""
    content_path: Optional[Path] = None
    default_statuses: FrozenSet[str] = field(default_factory=_all_statuses)
    default_category: str = CATEGORY_ALL
    strict_status: bool = False
    log_level: str = 'INFO'
    json_logs: bool = False
    lang: Optional[str] = None

    def __post_init__(self):
        if self.content_path is not None and not isinstance(self.content_path, Path):
            self.content_path = Path(self.content_path)
        if isinstance(self.default_statuses, str):
            self.default_statuses = [self.default_statuses]
        self.default_statuses = frozenset(self.default_statuses)
        self.strict_status = _coerce_bool('strict_status', self.strict_status)
        self.json_logs = _coerce_bool('json_logs', self.json_logs)
        self.log_level = str(self.log_level).upper()
        self.validate()

    def validate(self):
        """Raise ConfigurationError for values the engine cannot use."""
        unknown = self.default_statuses - _all_statuses()
        if unknown:
            raise ConfigurationError(
                "Unknown default statuses",
                statuses=sorted(unknown),
                allowed=sorted(_all_statuses()),
            )
        if not self.default_statuses:
            raise ConfigurationError("default_statuses must not be empty")

        categories = {CATEGORY_ALL} | {c.value for c in ProjectCategory}
        if self.default_category not in categories:
            raise ConfigurationError(
                "Unknown default category",
                category=self.default_category,
                allowed=sorted(categories),
            )

        langs = {lang.value for lang in ProjectLang}
        if self.lang is not None and self.lang not in langs:
            raise ConfigurationError("Unknown lang", lang=self.lang, allowed=sorted(langs))

        if self.log_level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ConfigurationError("Unknown log level", log_level=self.log_level)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['content_path'] = str(self.content_path) if self.content_path else None
        data['default_statuses'] = sorted(self.default_statuses)
        return data


def _coerce_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean for {name}", value=value)


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, encoding='utf-8') as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError("Config file is not valid YAML", path=str(config_path), reason=str(e))

    if not isinstance(raw, dict):
        raise ConfigurationError("Config file must contain a mapping", path=str(config_path))

    section = raw.get('navigator', raw)
    if not isinstance(section, dict):
        raise ConfigurationError("'navigator' section must be a mapping", path=str(config_path))

    known = {f.name for f in fields(NavigatorConfig)}
    unknown = sorted(set(section) - known)
    if unknown:
        logger.warning(f"Ignoring unknown config keys in {config_path}: {', '.join(unknown)}")

    return {key: value for key, value in section.items() if key in known}


def load_config(config_path: Optional[Path] = None, use_env: bool = True) -> NavigatorConfig:
    """
    Build a NavigatorConfig from file and environment.

    Args:
        config_path: Path to a YAML config (NAVIGATOR_CONFIG or ./navigator.yaml if None)
        use_env: Apply NAVIGATOR_* environment overrides

    Returns:
        Validated NavigatorConfig

    Raises:
        ConfigurationError: explicit config path missing, bad YAML, or bad values
    """
    if use_env:
        load_dotenv()

    values: Dict[str, Any] = {}

    explicit = config_path is not None or (use_env and os.getenv('NAVIGATOR_CONFIG'))
    if config_path is None:
        env_path = os.getenv('NAVIGATOR_CONFIG') if use_env else None
        config_path = Path(env_path) if env_path else Path(DEFAULT_CONFIG_FILE)
    config_path = Path(config_path)

    if config_path.exists():
        values.update(_read_yaml(config_path))
        logger.debug(f"Loaded config from {config_path}")
    elif explicit:
        raise ConfigurationError("Config file not found", path=str(config_path))

    if use_env:
        for env_name, attr in ENV_OVERRIDES.items():
            env_value = os.getenv(env_name)
            if env_value is not None:
                values[attr] = env_value

    return NavigatorConfig(**values)


# =============================================================================
# Global Config Instance
# =============================================================================

_config_instance: Optional[NavigatorConfig] = None
_config_lock = threading.Lock()


def get_config(config_path: Optional[Path] = None) -> NavigatorConfig:
    """
    Get the process-wide configuration, loading it on first use.

    Args:
        config_path: Config file used on the first call only

    Returns:
        NavigatorConfig singleton instance
    """
    global _config_instance

    with _config_lock:
        if _config_instance is None:
            _config_instance = load_config(config_path)
        return _config_instance


def reset_config():
    """Reset the global configuration instance."""
    global _config_instance
    with _config_lock:
        _config_instance = None
