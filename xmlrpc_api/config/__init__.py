"""Configuration module for xmlrpc_api."""

from xmlrpc_api.config.loader import clear_config_cache, get_config, get_config_path, load_config, save_config
from xmlrpc_api.config.schema import Config

__all__ = ["Config", "load_config", "save_config", "get_config_path", "get_config", "clear_config_cache"]
