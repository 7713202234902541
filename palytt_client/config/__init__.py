"""Configuration module for palytt_client."""

from palytt_client.config.loader import load_config, save_config, get_config_path
from palytt_client.config.schema import ClientConfig, RetryConfig, ENVIRONMENT_URLS
from palytt_client.config.access import get_config, clear_config_cache

__all__ = [
    "ClientConfig",
    "RetryConfig",
    "ENVIRONMENT_URLS",
    "load_config",
    "save_config",
    "get_config_path",
    "get_config",
    "clear_config_cache",
]
