"""
py_continents - Voronoi plate tectonics hex map generator.
"""

from .core import GeneratedMap, GeneratorOptions, MapGenerator, TerrainType, generate_map
from .config import MapSize, MapSizeConfig

__version__ = "0.1.0"

__all__ = ['GeneratedMap', 'GeneratorOptions', 'MapGenerator', 'TerrainType',
           'generate_map', 'MapSize', 'MapSizeConfig']
