"""
Configuration management for SimpleOAuth

This module provides JSON-backed client configuration: consumer credentials
and signing defaults for each remote service.
"""

from .client_config import (
    ClientConfig,
    ClientConfigManager,
    ServiceConfig,
    LoggingConfig,
    CONFIG_ENV_VAR,
    load_client_config_from_json,
    load_client_config_from_file,
    load_default_client_config,
)

__all__ = [
    'ClientConfig',
    'ClientConfigManager',
    'ServiceConfig',
    'LoggingConfig',
    'CONFIG_ENV_VAR',
    'load_client_config_from_json',
    'load_client_config_from_file',
    'load_default_client_config',
]
