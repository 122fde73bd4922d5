"""
Tectonic plate simulation.

Decides which regions become land and how large and mountainous each land
plate is. Plates are created once from the final tessellation and are not
modified after ``simulate_plates`` returns; later coastline changes only
touch hex tiles.
"""

from dataclasses import dataclass
from typing import List

import numpy as np
import structlog

from .alea_prng import AleaPRNG
from .tessellation import Region

logger = structlog.get_logger()


@dataclass
class PlateOptions:
    """Plate simulation parameters."""

    land_fraction: float = 0.35  # Share of plates (by count) that become land
    variance: float = 5.0  # Spread of initial size and total growth
    growth_iterations: int = 5  # Rounds of plate expansion
    mountain_percent: float = 12.0  # Chance (%) a land plate is mountainous

    def __post_init__(self):
        if not 0.0 <= self.land_fraction <= 1.0:
            raise ValueError(f"land_fraction must be within [0, 1], got {self.land_fraction}")
        if self.variance < 0:
            raise ValueError(f"variance must be non-negative, got {self.variance}")
        if self.growth_iterations < 1:
            raise ValueError(f"growth_iterations must be at least 1, got {self.growth_iterations}")
        if not 0.0 <= self.mountain_percent <= 100.0:
            raise ValueError(f"mountain_percent must be within [0, 100], got {self.mountain_percent}")


@dataclass
class Plate:
    """Simulation state attached to one region."""

    id: int
    site: np.ndarray
    edge_score: float
    is_land: bool = False
    size: float = 0.0
    growth: float = 0.0
    is_mountainous: bool = False


def edge_score(x: float, y: float, width: float, height: float) -> float:
    """Distance from a point to the nearest map edge or pole."""
    dist_from_pole = min(y, height - y)
    dist_from_edge = min(x, width - x)
    return min(dist_from_edge, dist_from_pole)


def create_plates(regions: List[Region], width: float, height: float) -> List[Plate]:
    """One water plate per region, scored by distance to the map border."""
    return [
        Plate(
            id=region.index,
            site=region.site,
            edge_score=edge_score(region.site[0], region.site[1], width, height),
        )
        for region in regions
    ]


def rank_plates(plates: List[Plate]) -> List[Plate]:
    """Plates by edge score, highest first; ties keep region order."""
    return sorted(plates, key=lambda plate: -plate.edge_score)


def select_land(ranked: List[Plate], prng: AleaPRNG, options: PlateOptions) -> int:
    """Mark the best scored plates as land and give them an initial size."""
    target = int(np.floor(len(ranked) * options.land_fraction))
    for plate in ranked[:target]:
        plate.is_land = True
        plate.size = 1.0 + prng.random() * options.variance
    return target


def grow_plates(ranked: List[Plate], prng: AleaPRNG, options: PlateOptions) -> None:
    """Accumulate random growth on land plates; water plates never grow."""
    step = options.variance / options.growth_iterations
    for _ in range(options.growth_iterations):
        for plate in ranked:
            if plate.is_land:
                plate.growth += prng.random() * step
                plate.size += plate.growth


def mark_mountains(plates: List[Plate], prng: AleaPRNG, options: PlateOptions) -> None:
    """One draw per land plate in region order."""
    probability = options.mountain_percent / 100.0
    for plate in plates:
        if plate.is_land and prng.chance(probability):
            plate.is_mountainous = True


def simulate_plates(regions: List[Region], width: float, height: float,
                    prng: AleaPRNG, options: PlateOptions = None) -> List[Plate]:
    """
    Run the plate simulation over the final regions.

    Steps, in draw order: score every region, select land plates in rank
    order (one draw each), grow land plates in rank order (one draw per
    plate per iteration), then mark mountains in region order (one draw
    per land plate).

    Args:
        regions: Final tessellation
        width: Map width
        height: Map height
        prng: Shared random stream
        options: Simulation parameters

    Returns:
        Plates indexed like ``regions``
    """
    if options is None:
        options = PlateOptions()

    plates = create_plates(regions, width, height)
    ranked = rank_plates(plates)

    land_count = select_land(ranked, prng, options)
    grow_plates(ranked, prng, options)
    mark_mountains(plates, prng, options)

    mountainous = sum(1 for plate in plates if plate.is_mountainous)
    logger.info(
        "Plate simulation complete",
        plates=len(plates),
        land_plates=land_count,
        mountainous_plates=mountainous,
    )
    return plates
