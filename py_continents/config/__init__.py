"""
Configuration modules for map generation.
"""

from .map_sizes import (
    MAP_SIZE_CONFIGS,
    MapSize,
    MapSizeConfig,
    get_map_size_config,
    list_map_sizes,
    resolve_map_size,
)
from .settings import Settings, get_settings

__all__ = ['MAP_SIZE_CONFIGS', 'MapSize', 'MapSizeConfig', 'get_map_size_config',
           'list_map_sizes', 'resolve_map_size', 'Settings', 'get_settings']
