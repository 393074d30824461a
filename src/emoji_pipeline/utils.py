"""Utility modules: config and logging."""
import os
import logging
import sys
from typing import Dict, Any

from dotenv import load_dotenv

# Load .env file for local development
load_dotenv()

logger = logging.getLogger(__name__)

CDN_BASE_URL = 'https://cdn.jsdelivr.net/npm/@emoji-mart/data@latest'
DEFAULT_DATA_URL = CDN_BASE_URL + '/sets/{version}/{set}.json'
DEFAULT_I18N_URL = CDN_BASE_URL + '/i18n/{locale}.json'


# ============================================================================
# CONFIGURATION
# ============================================================================

class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""
    pass


def _parse_number(value: str):
    number = float(value)
    return int(number) if number.is_integer() else number


def validate_config() -> Dict[str, Any]:
    """
    Validate all configuration values from environment variables.

    Every variable has a default, so validation only rejects values that
    are present but unusable.

    Returns:
        Dictionary of validated configuration values

    Raises:
        ConfigError: If any configuration value is invalid
    """
    raw = {
        'data_url': os.getenv('EMOJI_DATA_URL', DEFAULT_DATA_URL).strip() or DEFAULT_DATA_URL,
        'i18n_url': os.getenv('EMOJI_I18N_URL', DEFAULT_I18N_URL).strip() or DEFAULT_I18N_URL,
        'fetch_timeout': os.getenv('EMOJI_FETCH_TIMEOUT', '30').strip(),
        'native_version': os.getenv('EMOJI_NATIVE_VERSION', '15').strip(),
        'no_country_flags': os.getenv('EMOJI_NO_COUNTRY_FLAGS', 'false').strip(),
        'frequent_store': os.getenv('EMOJI_FREQUENT_STORE', '').strip(),
        'log_level': os.getenv('LOG_LEVEL', 'INFO').strip() or 'INFO',
    }

    config = dict(raw)
    invalid = []

    for placeholder in ('{version}', '{set}'):
        if placeholder not in raw['data_url']:
            invalid.append(f"EMOJI_DATA_URL (missing {placeholder})")
    if '{locale}' not in raw['i18n_url']:
        invalid.append("EMOJI_I18N_URL (missing {locale})")

    try:
        config['fetch_timeout'] = float(raw['fetch_timeout'])
        if config['fetch_timeout'] <= 0:
            invalid.append('EMOJI_FETCH_TIMEOUT (must be positive)')
    except ValueError:
        invalid.append('EMOJI_FETCH_TIMEOUT (not a number)')

    try:
        config['native_version'] = _parse_number(raw['native_version'])
    except ValueError:
        invalid.append('EMOJI_NATIVE_VERSION (not a number)')

    config['no_country_flags'] = raw['no_country_flags'].lower() in ('true', '1', 'yes')
    config['frequent_store'] = raw['frequent_store'] or None

    if invalid:
        raise ConfigError(f"Invalid environment variables: {invalid}")

    logger.debug("Configuration validated successfully")
    return config


# ============================================================================
# LOGGING
# ============================================================================

def setup_logging(level: str = "INFO", structured: bool = True) -> None:
    """Configure logging for the application."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    if structured:
        formatter = logging.Formatter(
            '{"timestamp": "%(asctime)s", "name": "%(name)s", "level": "%(levelname)s", "message": "%(message)s"}',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # HTTP client chatter is only useful when debugging fetches
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('requests').setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given name."""
    return logging.getLogger(name)
