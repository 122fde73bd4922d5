"""
Hex grid rasterization of classified plates.

Every hex is assigned to the region whose site is nearest to the hex centre
and then classified through layered rules:

1. Water plate, or a row inside the polar bands -> Water
2. Land plate -> Flat, maybe promoted to Rough, maybe to Mountainous
3. Coastal erosion may turn a land tile next to water back into Water
4. Island seeding may turn a plate-water tile next to land into Flat

Random draws happen only when their condition holds, and cells are visited
in row-major order (y outer, x inner). Both are part of what makes a seed
reproducible.
"""

from dataclasses import dataclass
from typing import List

import numpy as np
import structlog

from .alea_prng import AleaPRNG
from .hex_grid import HexCell, TerrainType, get_neighbors, hex_centers, in_grid
from .plates import Plate
from .tessellation import Region, nearest_sites

logger = structlog.get_logger()


@dataclass
class TerrainOptions:
    """Tile classification parameters."""

    polar_water_rows: int = 2  # Rows forced to water at the top and bottom
    hill_percent: float = 25.0  # Chance (%) a land tile becomes Rough
    mountain_percent: float = 30.0  # Chance (%) a tile on a mountainous plate becomes Mountainous
    erosion_percent: float = 2.5  # Chance (%) a coastal land tile erodes to Water
    island_rate_divisor: float = 1000.0  # Island chance = coastal islands / divisor

    def __post_init__(self):
        if self.polar_water_rows < 0:
            raise ValueError(f"polar_water_rows must be non-negative, got {self.polar_water_rows}")
        for name in ("hill_percent", "mountain_percent", "erosion_percent"):
            value = getattr(self, name)
            if not 0.0 <= value <= 100.0:
                raise ValueError(f"{name} must be within [0, 100], got {value}")
        if self.island_rate_divisor <= 0:
            raise ValueError(f"island_rate_divisor must be positive, got {self.island_rate_divisor}")

    def island_chance(self, coastal_islands: float) -> float:
        return min(1.0, coastal_islands / self.island_rate_divisor)


def assign_plates(width: int, height: int, regions: List[Region]) -> np.ndarray:
    """Owning region index of every hex, shape (height, width)."""
    sites = np.array([region.site for region in regions], dtype=np.float64).reshape(-1, 2)
    owners = nearest_sites(hex_centers(width, height), sites)
    return owners.reshape(height, width)


def in_polar_band(y: int, height: int, polar_rows: int) -> bool:
    return y < polar_rows or y >= height - polar_rows


def has_water_neighbor(x: int, y: int, land_mask: np.ndarray) -> bool:
    """Off-grid neighbours count as water."""
    height, width = land_mask.shape
    for nx, ny in get_neighbors(x, y):
        if not in_grid(nx, ny, width, height) or not land_mask[ny, nx]:
            return True
    return False


def has_land_neighbor(x: int, y: int, land_mask: np.ndarray) -> bool:
    """Off-grid neighbours are ignored."""
    height, width = land_mask.shape
    for nx, ny in get_neighbors(x, y):
        if in_grid(nx, ny, width, height) and land_mask[ny, nx]:
            return True
    return False


def rasterize(width: int, height: int, regions: List[Region], plates: List[Plate],
              prng: AleaPRNG, coastal_islands: float,
              options: TerrainOptions = None) -> List[HexCell]:
    """
    Build the terrain grid from classified plates.

    Args:
        width: Grid columns
        height: Grid rows
        regions: Final tessellation, used for the nearest-site lookup
        plates: Plate state indexed like ``regions``
        prng: Shared random stream
        coastal_islands: Island count of the map size, scales island seeding
        options: Classification parameters

    Returns:
        One cell per (x, y), in row-major order
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
    if len(plates) != len(regions):
        raise ValueError(f"Expected one plate per region, got {len(plates)} plates for {len(regions)} regions")
    if options is None:
        options = TerrainOptions()

    logger.info("Generating hex grid", width=width, height=height)

    owners = assign_plates(width, height, regions)
    land_plates = np.array([plate.is_land for plate in plates], dtype=bool)
    land_mask = land_plates[owners]

    hill_chance = options.hill_percent / 100.0
    mountain_chance = options.mountain_percent / 100.0
    erosion_chance = options.erosion_percent / 100.0
    island_chance = options.island_chance(coastal_islands)

    cells = []
    eroded = 0
    islands = 0

    for y in range(height):
        polar = in_polar_band(y, height, options.polar_water_rows)
        for x in range(width):
            plate_id = int(owners[y, x])
            plate = plates[plate_id]
            terrain = TerrainType.WATER

            if polar:
                # Hard override, no draws
                terrain = TerrainType.WATER
            elif plate.is_land:
                terrain = TerrainType.FLAT
                if prng.chance(hill_chance):
                    terrain = TerrainType.ROUGH
                if plate.is_mountainous and prng.chance(mountain_chance):
                    terrain = TerrainType.MOUNTAINOUS
                if has_water_neighbor(x, y, land_mask) and prng.chance(erosion_chance):
                    terrain = TerrainType.WATER
                    eroded += 1
            # Island draws happen on plate water only. Tiles eroded above stay
            # water and take no island draw, so erosion only ever removes land.
            elif has_land_neighbor(x, y, land_mask) and prng.chance(island_chance):
                terrain = TerrainType.FLAT
                islands += 1

            cells.append(HexCell(x=x, y=y, terrain=terrain, plate_id=plate_id))

    logger.info("Hex grid generation complete", cells=len(cells), eroded=eroded, islands=islands)
    return cells
