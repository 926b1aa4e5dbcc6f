"""Utility helpers shared by the package and the scripts."""

from .config import load_app_config, load_config_any, load_config_dict

__all__ = [
    "load_app_config",
    "load_config_any",
    "load_config_dict",
]
