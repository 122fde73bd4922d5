"""
Voronoi plate map generator.

Runs the whole pipeline against one shared random stream:

    sites -> Lloyd relaxation -> tessellation -> plate simulation
          -> hex rasterization -> statistics

Each phase finishes before the next starts. A generator owns all of its
state, so several generators with different seeds can run side by side.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import numpy as np
import structlog

from ..config.map_sizes import MapSize, MapSizeConfig, get_map_size_config, resolve_map_size
from ..config.settings import get_settings
from .alea_prng import AleaPRNG, SeedType
from .hex_grid import HexCell
from .plates import Plate, PlateOptions, simulate_plates
from .rasterizer import TerrainOptions, rasterize
from .relaxation import relax_sites
from .sites import derive_site_count, generate_sites
from .statistics import TerrainStatistics, summarize
from .tessellation import Bounds, Region, tessellate

logger = structlog.get_logger()

# Mean water share across seeds is expected inside this band
TARGET_WATER_BAND = (60.0, 75.0)


@dataclass
class GeneratorOptions:
    """Pipeline parameters."""

    lloyd_iterations: int = 3
    site_count: Optional[int] = None  # None derives the count from the map area
    base_plate_count: int = 18
    plate_count_jitter: float = 6.0
    base_map_area: float = 4536.0  # Area of a STANDARD map
    plates: PlateOptions = field(default_factory=PlateOptions)
    terrain: TerrainOptions = field(default_factory=TerrainOptions)

    def __post_init__(self):
        if self.lloyd_iterations < 0:
            raise ValueError(f"lloyd_iterations must be non-negative, got {self.lloyd_iterations}")
        if self.site_count is not None and self.site_count < 1:
            raise ValueError(f"site_count must be at least 1, got {self.site_count}")
        if self.base_plate_count < 1:
            raise ValueError(f"base_plate_count must be at least 1, got {self.base_plate_count}")
        if self.plate_count_jitter < 0:
            raise ValueError(f"plate_count_jitter must be non-negative, got {self.plate_count_jitter}")
        if self.base_map_area <= 0:
            raise ValueError(f"base_map_area must be positive, got {self.base_map_area}")


@dataclass
class GeneratedMap:
    """Everything a renderer needs from one generation run."""

    map_size: Optional[MapSize]
    seed: SeedType
    width: int
    height: int
    sites: np.ndarray
    regions: List[Region]
    plates: List[Plate]
    cells: List[HexCell]
    statistics: TerrainStatistics

    def terrain_grid(self) -> np.ndarray:
        """Terrain codes as a (height, width) array."""
        grid = np.empty((self.height, self.width), dtype=np.int8)
        for cell in self.cells:
            grid[cell.y, cell.x] = int(cell.terrain)
        return grid

    def plate_grid(self) -> np.ndarray:
        """Owning plate ids as a (height, width) array."""
        grid = np.empty((self.height, self.width), dtype=np.int32)
        for cell in self.cells:
            grid[cell.y, cell.x] = cell.plate_id
        return grid

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation."""
        return {
            "map_size": self.map_size.value if self.map_size else None,
            "seed": self.seed,
            "width": self.width,
            "height": self.height,
            "plates": [
                {
                    "id": plate.id,
                    "site": [float(plate.site[0]), float(plate.site[1])],
                    "is_land": plate.is_land,
                    "size": plate.size,
                    "is_mountainous": plate.is_mountainous,
                }
                for plate in self.plates
            ],
            "cells": [cell.to_dict() for cell in self.cells],
            "statistics": self.statistics.model_dump(),
        }


class MapGenerator:
    """
    Generates a hex terrain map from Voronoi tectonic plates.

    Either a named size class or an explicit ``MapSizeConfig`` selects the
    grid; everything else comes from ``options``.
    """

    def __init__(
        self,
        map_size: Union[MapSize, str, None] = None,
        seed: Optional[SeedType] = None,
        options: Optional[GeneratorOptions] = None,
        config: Optional[MapSizeConfig] = None,
    ):
        """
        Initialize the generator.

        Args:
            map_size: Size class name; defaults to the configured default
            seed: Integer or string seed; defaults to the configured default
            options: Pipeline parameters
            config: Explicit size record, overrides ``map_size``
        """
        settings = get_settings()

        if config is None:
            self.map_size = resolve_map_size(map_size or settings.default_map_size)
            self.config = get_map_size_config(self.map_size)
        else:
            self.map_size = resolve_map_size(map_size) if map_size else None
            self.config = config

        if seed is None:
            seed = settings.default_seed if settings.default_seed is not None else "default"

        self.options = options or GeneratorOptions()
        self.width = self.config.width
        self.height = self.config.height
        self.bounds = Bounds.from_size(self.width, self.height)
        self.seed = seed
        self.prng = AleaPRNG(seed)

        self.sites: Optional[np.ndarray] = None
        self.regions: List[Region] = []
        self.plates: List[Plate] = []
        self.hex_grid: List[HexCell] = []

    def site_count(self) -> int:
        """Fixed count from options, or one drawn from the stream."""
        if self.options.site_count is not None:
            return self.options.site_count
        return derive_site_count(
            self.width,
            self.height,
            self.prng,
            base_count=self.options.base_plate_count,
            jitter=self.options.plate_count_jitter,
            base_area=self.options.base_map_area,
        )

    def init_voronoi(self) -> List[Region]:
        """Place, relax and tessellate the plate sites."""
        count = self.site_count()
        logger.info("Generating tectonic plates", count=count, seed=str(self.seed))

        sites = generate_sites(count, self.width, self.height, self.prng)
        self.sites = relax_sites(sites, self.bounds, self.options.lloyd_iterations)
        self.regions = tessellate(self.sites, self.bounds)

        logger.info("Voronoi cells created", cells=len(self.regions))
        return self.regions

    def simulate(self) -> List[Plate]:
        """Build the tessellation and classify its plates."""
        self.init_voronoi()
        self.plates = simulate_plates(
            self.regions, self.width, self.height, self.prng, self.options.plates
        )
        return self.plates

    def generate_hex_grid(self) -> List[HexCell]:
        """Rasterize the current plates; can be repeated without re-simulating."""
        if not self.plates:
            raise RuntimeError("Plates have not been simulated; call simulate() first")

        self.hex_grid = rasterize(
            self.width,
            self.height,
            self.regions,
            self.plates,
            self.prng,
            self.config.coastal_islands,
            self.options.terrain,
        )
        return self.hex_grid

    def get_statistics(self) -> TerrainStatistics:
        return summarize(self.hex_grid)

    def generate(self) -> GeneratedMap:
        """Run every phase and return the finished map."""
        self.simulate()
        self.generate_hex_grid()
        statistics = self.get_statistics()

        logger.info(
            "Map generated",
            width=self.width,
            height=self.height,
            water_percent=statistics.water_percent,
            land_percent=statistics.land_percent,
        )

        return GeneratedMap(
            map_size=self.map_size,
            seed=self.seed,
            width=self.width,
            height=self.height,
            sites=self.sites.copy(),
            regions=self.regions,
            plates=self.plates,
            cells=self.hex_grid,
            statistics=statistics,
        )


def generate_map(map_size: Union[MapSize, str, None] = None, seed: Optional[SeedType] = None,
                 options: Optional[GeneratorOptions] = None) -> GeneratedMap:
    """Convenience wrapper around ``MapGenerator(...).generate()``."""
    return MapGenerator(map_size, seed, options).generate()
