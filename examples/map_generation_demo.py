#!/usr/bin/env python3
"""
Demo script generating a map for every size class and printing its statistics.
"""

from py_continents import MapGenerator, MapSize
from py_continents.config import Settings
from py_continents.utils import configure_logging


def main():
    """Generate one map per size class."""
    configure_logging(Settings(log_level="WARNING", log_format="console"))

    print("Py-Continents Map Generation Demo")
    print("=" * 40)

    seed = 12345
    for size in MapSize:
        generator = MapGenerator(size, seed=seed)
        result = generator.generate()
        stats = result.statistics

        print(f"\n{size.value} ({result.width}x{result.height}, {len(result.plates)} plates)")
        print("-" * 30)
        print(f"  Total tiles: {stats.total}")
        print(f"  Water: {stats.water} ({stats.water_percent}%)")
        print(f"  Land: {stats.land} ({stats.land_percent}%)")
        print(f"    - Flat: {stats.flat}")
        print(f"    - Hills: {stats.rough}")
        print(f"    - Mountains: {stats.mountain}")

    print("\nTerrain rows of the last map (~ water, . flat, n hills, ^ mountains):")
    symbols = {0: ".", 1: "n", 2: "^", 3: "^", 4: "~"}
    for row in result.terrain_grid():
        print("".join(symbols[int(value)] for value in row))


if __name__ == "__main__":
    main()
