"""
Storage Layer.

This package handles all data persistence: the configuration file and the
on-disk cache of the remote station and country datasets.
"""

from .config_manager import ConfigManager
from .dataset_cache import DatasetCache

__all__ = ["ConfigManager", "DatasetCache"]
