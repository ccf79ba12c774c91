"""
Configuration management for the tennis tracker.
"""

import copy
import logging
import yaml
from typing import Dict, Any

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading and provides default values."""

    @staticmethod
    def load_config(config_file: str) -> Dict[str, Any]:
        """Load configuration from YAML file, merged over the defaults."""
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning(f"Configuration file '{config_file}' not found. Using default configuration.")
            return ConfigManager.get_default_config()
        except yaml.YAMLError as e:
            logger.warning(f"Error parsing configuration file: {e}. Using default configuration.")
            return ConfigManager.get_default_config()

        if not isinstance(loaded, dict):
            logger.warning(f"Configuration file '{config_file}' is not a mapping. Using default configuration.")
            return ConfigManager.get_default_config()

        return ConfigManager.merge(ConfigManager.get_default_config(), loaded)

    @staticmethod
    def merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge ``override`` into a copy of ``base``."""
        merged = copy.deepcopy(base)
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = ConfigManager.merge(merged[key], value)
            elif value is not None:
                merged[key] = value
        return merged

    @staticmethod
    def get_default_config() -> Dict[str, Any]:
        """Return default configuration if config file is not available."""
        return {
            'database_path': 'tennis_club.db',
            'fees': {
                'base_fee': 1500000,
                'bet_fee': 30000,
                'special_loss_fee': 60000,
                'special_loss_score': '6-0',
                'max_daily_fee': 100000
            },
            'matches': {
                'tie_break': 'side_a'
            },
            'reports': {
                'output_dir': 'reports'
            },
            'parser': {
                'url': 'http://localhost:54321/functions/v1/process-match-text',
                'timeout': 30
            }
        }
