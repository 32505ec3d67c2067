"""
Configuration package for the capital gains calculator.

Provides centralized access to constants and environment configuration.

Usage:
    from Config import constants_core as core
    print(core.CSV_COLUMNS)

    from Config.config_manager import load_app_config
    config = load_app_config()
"""

# Auto-load environment on package import
from Config.environment import env

from Config import constants_core
from Config.config_manager import AppConfig, load_app_config

__all__ = [
    'env',
    'constants_core',
    'AppConfig',
    'load_app_config',
]
