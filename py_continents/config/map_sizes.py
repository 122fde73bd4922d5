"""
Map size classes.

Each size class resolves to an immutable record; the table is validated
when the module is imported.
"""

from enum import Enum
from typing import Dict, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MapSize(str, Enum):
    """Named map size classes."""

    TINY = "TINY"
    SMALL = "SMALL"
    STANDARD = "STANDARD"
    LARGE = "LARGE"
    HUGE = "HUGE"


class MapSizeConfig(BaseModel):
    """Grid dimensions and landmass targets for one size class."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., gt=0, description="Grid columns")
    height: int = Field(..., gt=0, description="Grid rows")
    total_landmass_size: float = Field(..., gt=0, description="Target total landmass magnitude")
    min_landmass_size: float = Field(..., gt=0, description="Minimum landmass magnitude")
    coastal_islands: int = Field(..., ge=0, description="Coastal island count, scales island seeding")
    island_total_size: float = Field(..., ge=0, description="Total size of mid-ocean islands")

    @model_validator(mode="after")
    def check_landmass(self) -> "MapSizeConfig":
        if self.min_landmass_size > self.total_landmass_size:
            raise ValueError(
                f"min_landmass_size {self.min_landmass_size} exceeds "
                f"total_landmass_size {self.total_landmass_size}"
            )
        return self

    @property
    def area(self) -> int:
        return self.width * self.height


MAP_SIZE_CONFIGS: Dict[MapSize, MapSizeConfig] = {
    MapSize.TINY: MapSizeConfig(
        width=52, height=34, total_landmass_size=30, min_landmass_size=12,
        coastal_islands=6, island_total_size=3.5,
    ),
    MapSize.SMALL: MapSizeConfig(
        width=64, height=42, total_landmass_size=36, min_landmass_size=14,
        coastal_islands=9, island_total_size=4.5,
    ),
    MapSize.STANDARD: MapSizeConfig(
        width=84, height=54, total_landmass_size=42, min_landmass_size=16,
        coastal_islands=12, island_total_size=5.5,
    ),
    MapSize.LARGE: MapSizeConfig(
        width=104, height=64, total_landmass_size=48, min_landmass_size=18,
        coastal_islands=15, island_total_size=6.5,
    ),
    MapSize.HUGE: MapSizeConfig(
        width=128, height=80, total_landmass_size=54, min_landmass_size=20,
        coastal_islands=18, island_total_size=7.5,
    ),
}


def validate_map_size_table(configs: Dict[MapSize, MapSizeConfig]) -> None:
    """Every size class needs exactly one record."""
    missing = [size.value for size in MapSize if size not in configs]
    if missing:
        raise ValueError(f"Map size table is missing: {', '.join(missing)}")


validate_map_size_table(MAP_SIZE_CONFIGS)


def resolve_map_size(size: Union[MapSize, str]) -> MapSize:
    """Turn a size name (any case) into a MapSize member."""
    if isinstance(size, MapSize):
        return size
    try:
        return MapSize(str(size).strip().upper())
    except ValueError:
        valid = ", ".join(member.value for member in MapSize)
        raise ValueError(f"Invalid map size: {size!r}. Valid sizes: {valid}") from None


def get_map_size_config(size: Union[MapSize, str]) -> MapSizeConfig:
    return MAP_SIZE_CONFIGS[resolve_map_size(size)]


def list_map_sizes():
    return [member.value for member in MapSize]
