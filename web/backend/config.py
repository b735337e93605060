#!/usr/bin/env python3
"""
Configuration management for the SubsidyScout web application.
"""

import os
from pathlib import Path
from functools import lru_cache

from core.config_loader import AppConfig, load_config


def _apply_env_overrides(config: AppConfig) -> AppConfig:
    """Apply web server environment variable overrides to configuration."""
    if 'WEB_HOST' in os.environ:
        config.web.host = os.environ['WEB_HOST']

    if 'WEB_PORT' in os.environ:
        config.web.port = int(os.environ['WEB_PORT'])

    return config


@lru_cache()
def get_config() -> AppConfig:
    """
    Get application configuration with caching.

    Loads config.yaml from the project root and applies environment
    variable overrides (DATABASE_URL, CRON_SECRET, WEB_HOST, WEB_PORT).
    Result is cached for performance.

    Returns:
        AppConfig: The application configuration.
    """
    config_path = get_project_root() / 'config.yaml'
    return _apply_env_overrides(load_config(str(config_path)))


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent
