"""Terrain grid statistics."""

from typing import Dict, Iterable

from pydantic import BaseModel, Field

from .hex_grid import HexCell, TerrainType

# Every terrain type must land in exactly one bucket
TERRAIN_BUCKETS: Dict[TerrainType, str] = {
    TerrainType.WATER: "water",
    TerrainType.FLAT: "flat",
    TerrainType.ROUGH: "rough",
    TerrainType.MOUNTAINOUS: "mountain",
    TerrainType.VOLCANO: "mountain",
}


def validate_buckets(buckets: Dict[TerrainType, str]) -> None:
    unbucketed = sorted(terrain.name for terrain in TerrainType if terrain not in buckets)
    if unbucketed:
        raise ValueError(f"Terrain types without a statistics bucket: {', '.join(unbucketed)}")


validate_buckets(TERRAIN_BUCKETS)


class TerrainStatistics(BaseModel):
    """Summary of a generated terrain grid."""

    total: int = Field(..., ge=0, description="Number of tiles")
    water: int = Field(0, ge=0, description="Water tiles")
    flat: int = Field(0, ge=0, description="Flat land tiles")
    rough: int = Field(0, ge=0, description="Hill tiles")
    mountain: int = Field(0, ge=0, description="Mountain and volcano tiles")
    water_percent: float = Field(0.0, description="Water share, one decimal")
    land_percent: float = Field(0.0, description="Land share, one decimal")

    @property
    def land(self) -> int:
        return self.total - self.water


def summarize(cells: Iterable[HexCell]) -> TerrainStatistics:
    """Count tiles per terrain bucket in a single pass."""
    counts = {"water": 0, "flat": 0, "rough": 0, "mountain": 0}
    total = 0
    for cell in cells:
        counts[TERRAIN_BUCKETS[cell.terrain]] += 1
        total += 1

    if total:
        water_percent = round(counts["water"] / total * 100, 1)
        land_percent = round((total - counts["water"]) / total * 100, 1)
    else:
        water_percent = land_percent = 0.0

    return TerrainStatistics(
        total=total,
        water_percent=water_percent,
        land_percent=land_percent,
        **counts,
    )
