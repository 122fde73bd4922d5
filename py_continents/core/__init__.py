"""
Core map generation functionality.
"""

from .alea_prng import AleaPRNG
from .sites import derive_site_count, generate_sites
from .tessellation import Bounds, Region, tessellate, nearest_site, nearest_sites
from .relaxation import relax_sites, cell_area_variance
from .plates import Plate, PlateOptions, simulate_plates
from .hex_grid import HexCell, TerrainType, get_neighbors, hex_to_map
from .rasterizer import TerrainOptions, rasterize
from .statistics import TerrainStatistics, summarize
from .generator import GeneratedMap, GeneratorOptions, MapGenerator, generate_map

__all__ = ['AleaPRNG', 'derive_site_count', 'generate_sites',
           'Bounds', 'Region', 'tessellate', 'nearest_site', 'nearest_sites',
           'relax_sites', 'cell_area_variance',
           'Plate', 'PlateOptions', 'simulate_plates',
           'HexCell', 'TerrainType', 'get_neighbors', 'hex_to_map',
           'TerrainOptions', 'rasterize', 'TerrainStatistics', 'summarize',
           'GeneratedMap', 'GeneratorOptions', 'MapGenerator', 'generate_map']
