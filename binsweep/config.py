"""
load the config from config.yaml and environment variables
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any


class Config:
    """Configuration loader that reads from config.yaml and environment variables."""

    # Environment variable mapping
    ENV_MAPPINGS = {
        'SWEEP_BASE_URL': ('sweep', 'base_url'),
        'SWEEP_ALPHABET': ('sweep', 'alphabet'),
        'SWEEP_LENGTH': ('sweep', 'length'),
        'FETCHER_TIMEOUT': ('fetcher', 'timeout'),
        'FETCHER_MAX_CONNECTIONS': ('fetcher', 'max_connections'),
        'FETCHER_USER_AGENT': ('fetcher', 'user_agent'),
        'FETCHER_ON_FAILURE': ('fetcher', 'on_failure'),
        'OUTPUT_PATH': ('output', 'path'),
        'OUTPUT_TEMPLATE': ('output', 'template'),
        'LOG_LEVEL': ('logging', 'level'),
    }

    # Kept as raw strings, "0123456789" must not become an int
    RAW_ENV_VARS = {
        'SWEEP_BASE_URL',
        'SWEEP_ALPHABET',
        'FETCHER_USER_AGENT',
        'OUTPUT_PATH',
        'OUTPUT_TEMPLATE',
    }

    def __init__(self, config_path: str = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to config.yaml file. If None, uses the config.yaml
                        shipped in the same directory as this module.
        """
        if config_path is None:
            config_path = Path(__file__).parent / "config.yaml"

        self.config_path = Path(config_path)
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file and override with environment variables."""
        try:
            with open(self.config_path, 'r') as f:
                config = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")

        return self._apply_env_overrides(config)

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        for env_var, config_path in self.ENV_MAPPINGS.items():
            env_value = os.getenv(env_var)
            if env_value is None:
                continue

            # Navigate to the nested config location
            current = config
            for key in config_path[:-1]:
                if not isinstance(current.get(key), dict):
                    current[key] = {}
                current = current[key]

            final_key = config_path[-1]
            if env_var in self.RAW_ENV_VARS:
                current[final_key] = env_value
            else:
                current[final_key] = self._convert_env_value(env_value)

        return config

    def _convert_env_value(self, value: str):
        """Convert environment variable string to appropriate Python type."""
        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'

        if value.lower() in ('null', 'none', ''):
            return None

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def get(self, *keys, default=None):
        """Get configuration value using dot notation.

        Args:
            *keys: Configuration keys (e.g., 'sweep', 'base_url')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        current = self._config
        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current

    @property
    def sweep(self) -> Dict[str, Any]:
        """Get enumeration configuration."""
        return self.get('sweep', default={})

    @property
    def fetcher(self) -> Dict[str, Any]:
        """Get HTTP fetcher configuration."""
        return self.get('fetcher', default={})

    @property
    def output(self) -> Dict[str, Any]:
        """Get results document configuration."""
        return self.get('output', default={})

    @property
    def logging(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self.get('logging', default={})
