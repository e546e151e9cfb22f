import os
import shlex
import logging
import logging.handlers
import yaml
from copy import deepcopy
from typing import Dict, Any
from dotenv import load_dotenv


def load_config(config_path: str = 'release.yaml') -> Dict[str, Any]:
    """Load configuration from YAML file with environment variable overrides."""
    # Load environment variables
    load_dotenv()

    config = get_default_config()
    try:
        if os.path.exists(config_path):
            with open(config_path, 'r', encoding='utf-8') as f:
                file_config = yaml.safe_load(f) or {}
            if not isinstance(file_config, dict):
                raise ValueError("top level must be a mapping")
            config = merge_config(config, file_config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logging.warning(f"Could not load config from {config_path}: {e}")
        config = get_default_config()

    # Override with environment variables
    config = apply_env_overrides(config)

    return config


def get_default_config() -> Dict[str, Any]:
    """Get default configuration values."""
    return {
        'manifest': {
            'path': 'package.json'
        },
        'git': {
            'executable': 'git',
            'diff_base': 'HEAD^',
            'diff_head': 'HEAD',
            'commit_message': 'Increment version number to {version}',
            'timeout': 60
        },
        'compiler': {
            'command': ['java', '-jar', 'compiler.jar', '--version'],
            'timeout': 60
        },
        'registry': {
            'url': 'https://registry.npmjs.org',
            'package': 'google-closure-compiler',
            'timeout': 30,
            'user_agent': 'closure-release/1.0'
        },
        'tests': {
            'command': ['npm', 'test'],
            'timeout': None
        },
        'logging': {
            'level': 'INFO',
            'log_to_file': False,
            'log_filename': 'release.log',
            'rotate_logs': True,
            'logs_dir': 'logs'
        }
    }


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def _optional_float(value: str):
    return None if value.lower() in ('', 'none', 'null') else float(value)


def apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides to configuration."""
    env_mappings = {
        'MANIFEST_PATH': ('manifest', 'path', str),
        'COMPILER_COMMAND': ('compiler', 'command', shlex.split),
        'REGISTRY_URL': ('registry', 'url', str),
        'PACKAGE_NAME': ('registry', 'package', str),
        'REGISTRY_TIMEOUT': ('registry', 'timeout', _optional_float),
        'TEST_COMMAND': ('tests', 'command', shlex.split),
        'LOG_LEVEL': ('logging', 'level', str),
        'DEBUG_MODE': ('logging', 'level', lambda x: 'DEBUG' if x.lower() == 'true' else config['logging']['level'])
    }

    for env_var, (section, key, converter) in env_mappings.items():
        value = os.getenv(env_var)
        if value is not None:
            try:
                converted_value = converter(value)
                config.setdefault(section, {})[key] = converted_value
            except (ValueError, TypeError) as e:
                logging.warning(f"Invalid value for {env_var}: {value} - {e}")

    return config


def as_command(value) -> list:
    """Accept a command as a list or a shell-style string."""
    if isinstance(value, str):
        return shlex.split(value)
    return list(value)


def setup_logging(logging_config: Dict[str, Any]) -> logging.Logger:
    """Setup logging configuration."""
    # Configure logging
    logger = logging.getLogger()
    level = getattr(logging, str(logging_config.get('level', 'INFO')).upper(), logging.INFO)
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler
    if logging_config.get('log_to_file', False):
        logs_dir = logging_config.get('logs_dir', 'logs')
        os.makedirs(logs_dir, exist_ok=True)
        log_filename = os.path.join(logs_dir, logging_config.get('log_filename', 'release.log'))

        if logging_config.get('rotate_logs', True):
            # Rotating file handler
            file_handler = logging.handlers.RotatingFileHandler(
                log_filename,
                maxBytes=10*1024*1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
        else:
            # Regular file handler
            file_handler = logging.FileHandler(log_filename, encoding='utf-8')

        file_handler.setLevel(logging.DEBUG)  # File gets all logs
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
