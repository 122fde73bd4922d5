"""
Hex tile grid: terrain types, cells and offset-coordinate geometry.

The grid uses "even-r" offset coordinates: even rows are shoved right by
half a hex and rows overlap by a quarter of a hex height.
"""

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple

import numpy as np

SQRT3 = math.sqrt(3)

EVEN_ROW_OFFSETS = ((-1, 0), (1, 0), (0, -1), (1, -1), (0, 1), (1, 1))
ODD_ROW_OFFSETS = ((-1, 0), (1, 0), (-1, -1), (0, -1), (-1, 1), (0, 1))


class TerrainType(IntEnum):
    """Tile terrain classes. VOLCANO is reserved and never generated."""

    FLAT = 0
    ROUGH = 1
    MOUNTAINOUS = 2
    VOLCANO = 3
    WATER = 4

    @property
    def is_land(self) -> bool:
        return self is not TerrainType.WATER


@dataclass(frozen=True)
class HexCell:
    """One tile of the output grid."""

    x: int
    y: int
    terrain: TerrainType
    plate_id: int

    def to_dict(self):
        return {
            "x": self.x,
            "y": self.y,
            "terrain": self.terrain.name.lower(),
            "plate_id": self.plate_id,
        }


def get_neighbors(x: int, y: int) -> List[Tuple[int, int]]:
    """The six adjacent hexes, possibly outside the grid."""
    offsets = EVEN_ROW_OFFSETS if y % 2 == 0 else ODD_ROW_OFFSETS
    return [(x + dx, y + dy) for dx, dy in offsets]


def in_grid(x: int, y: int, width: int, height: int) -> bool:
    return 0 <= x < width and 0 <= y < height


def hex_to_layout(x: int, y: int) -> Tuple[float, float]:
    """Centre of hex (x, y) in a unit-radius pointy-top layout."""
    x_offset = 0.5 if y % 2 == 0 else 0.0
    return SQRT3 * (x + 0.5 + x_offset), 1.5 * y + 1.0


def hex_to_map(x: int, y: int, width: int, height: int) -> Tuple[float, float]:
    """
    Centre of hex (x, y) in map space.

    In a unit-radius layout the centre sits at
    (sqrt(3) * (x + 0.5 + 0.5 * even), 1.5 * y + 1) and the whole grid spans
    sqrt(3) * (width + 0.5) by 1.5 * height + 0.5. Both axes are rescaled
    onto [0, width) x [0, height), which keeps every centre strictly inside
    the tessellated rectangle.
    """
    layout_x, layout_y = hex_to_layout(x, y)

    layout_width = SQRT3 * (width + 0.5)
    layout_height = 1.5 * height + 0.5

    return layout_x * width / layout_width, layout_y * height / layout_height


def hex_centers(width: int, height: int) -> np.ndarray:
    """Map-space centres of every hex in row-major order, shape (w*h, 2)."""
    centers = np.empty((width * height, 2), dtype=np.float64)
    for y in range(height):
        for x in range(width):
            centers[y * width + x] = hex_to_map(x, y, width, height)
    return centers
