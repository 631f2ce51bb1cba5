"""
Text Check Configuration Module
===============================
Centralized configuration for the checking orchestrator and its engines.

Configuration can be set via:
1. Environment variables (TEXTCHECK_SPELLING_LANGUAGE=en_GB)
2. Config file (textcheck_config.json, or the path in TEXTCHECK_CONFIG_FILE)
3. Direct API calls (config.set('grammar.enabled', False))

Later sources win over earlier ones.
"""

import os
import json
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field, asdict

from .errors import ConfigError

__version__ = "1.0.0"

# Default configuration path
CONFIG_FILE = Path(os.environ.get('TEXTCHECK_CONFIG_FILE', 'textcheck_config.json'))

DEFAULT_WORD_LIST = Path.home() / ".config" / "textcheck" / "learned_words.txt"


@dataclass
class SpellingConfig:
    """Spelling engine configuration."""
    language: str = "en_US"
    automatically_identifies_languages: bool = True
    personal_word_list: str = str(DEFAULT_WORD_LIST)


@dataclass
class GrammarConfig:
    """LanguageTool configuration."""
    enabled: bool = True
    remote_server: Optional[str] = None  # e.g. http://localhost:8081
    disabled_rules: list = field(default_factory=lambda: [
        "WHITESPACE_RULE",    # Too noisy
    ])
    disabled_categories: list = field(default_factory=list)


@dataclass
class LanguageIdConfig:
    """Language identification (langdetect) configuration."""
    min_probability: float = 0.5
    seed: int = 0


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "WARNING"
    format: str = "text"  # Options: json, text
    to_console: bool = True
    to_file: bool = False
    log_dir: str = "logs"


@dataclass
class TextCheckConfig:
    """Master configuration."""
    spelling: SpellingConfig = field(default_factory=SpellingConfig)
    grammar: GrammarConfig = field(default_factory=GrammarConfig)
    language_id: LanguageIdConfig = field(default_factory=LanguageIdConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Global configuration instance
_config: Optional[TextCheckConfig] = None


def get_config() -> TextCheckConfig:
    """Get the global configuration."""
    global _config
    if _config is None:
        _config = _load_config()
    return _config


def _load_config(path: Optional[Path] = None) -> TextCheckConfig:
    """Load configuration from file and environment."""
    config = TextCheckConfig()
    path = path or CONFIG_FILE

    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
            _apply_dict_to_config(config, file_config)
        except (json.JSONDecodeError, IOError) as e:
            _warn(config, f"Could not load config file {path}: {e}")

    _apply_env_to_config(config)

    return config


def _apply_dict_to_config(config: TextCheckConfig, data: Dict[str, Any]):
    """Apply dictionary values to config object."""
    for section_name, section_data in data.items():
        if hasattr(config, section_name) and isinstance(section_data, dict):
            section = getattr(config, section_name)
            for key, value in section_data.items():
                if hasattr(section, key):
                    setattr(section, key, value)


def _apply_env_to_config(config: TextCheckConfig):
    """Apply environment variables to config."""
    env_mappings = {
        'TEXTCHECK_SPELLING_LANGUAGE': ('spelling', 'language', str),
        'TEXTCHECK_AUTO_LANGUAGE': ('spelling', 'automatically_identifies_languages', _parse_bool),
        'TEXTCHECK_WORD_LIST': ('spelling', 'personal_word_list', str),
        'TEXTCHECK_GRAMMAR_ENABLED': ('grammar', 'enabled', _parse_bool),
        'TEXTCHECK_LANGUAGETOOL_SERVER': ('grammar', 'remote_server', str),
        'TEXTCHECK_LANGID_MIN_PROBABILITY': ('language_id', 'min_probability', float),
        'TEXTCHECK_LANGID_SEED': ('language_id', 'seed', int),
        'TEXTCHECK_LOG_LEVEL': ('logging', 'level', str),
        'TEXTCHECK_LOG_FORMAT': ('logging', 'format', str),
        'TEXTCHECK_LOG_TO_FILE': ('logging', 'to_file', _parse_bool),
        'TEXTCHECK_LOG_DIR': ('logging', 'log_dir', str),
    }

    for env_var, (section, key, converter) in env_mappings.items():
        value = os.environ.get(env_var)
        if value is not None:
            try:
                section_obj = getattr(config, section)
                setattr(section_obj, key, converter(value))
            except (ValueError, AttributeError) as e:
                _warn(config, f"Invalid env var {env_var}={value}: {e}")


def _parse_bool(value: str) -> bool:
    """Parse boolean from string."""
    return value.lower() in ('true', '1', 'yes', 'on')


def _warn(config: TextCheckConfig, message: str):
    # Imported here: logging_utils imports this module.
    from .logging_utils import get_logger
    get_logger("textcheck.config", config.logging).warning(message)


def get(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by dot-notation key.

    Example: get('spelling.language') -> 'en_US'
    """
    obj = get_config()
    for part in key.split('.'):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            return default

    return obj


def set(key: str, value: Any):
    """
    Set a configuration value by dot-notation key.

    Example: set('grammar.enabled', False)
    """
    config = get_config()
    parts = key.split('.')

    if len(parts) != 2:
        raise ConfigError(f"Key must be in format 'section.key': {key}", key=key)

    section_name, attr_name = parts

    if not hasattr(config, section_name):
        raise ConfigError(f"Unknown config section: {section_name}", key=key)

    section = getattr(config, section_name)
    if not hasattr(section, attr_name):
        raise ConfigError(f"Unknown config key: {attr_name}", key=key)
    setattr(section, attr_name, value)


def save_config(path: Optional[Path] = None):
    """Save current configuration to file."""
    path = Path(path) if path else CONFIG_FILE
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(asdict(get_config()), f, indent=2)


def load_config(path: Path) -> TextCheckConfig:
    """Replace the global configuration with one loaded from ``path``."""
    global _config
    _config = _load_config(Path(path))
    return _config


def reset_config():
    """Reset configuration to defaults."""
    global _config
    _config = TextCheckConfig()
