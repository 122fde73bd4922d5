"""Tests for terrain statistics."""

import pytest
from py_continents.core.hex_grid import HexCell, TerrainType
from py_continents.core.statistics import TERRAIN_BUCKETS, TerrainStatistics, summarize, validate_buckets


def make_cells(terrains):
    return [HexCell(x=i, y=0, terrain=terrain, plate_id=0) for i, terrain in enumerate(terrains)]


class TestSummarize:
    """Test the single pass reduction."""

    def test_counts(self):
        """Each terrain lands in its bucket."""
        cells = make_cells([
            TerrainType.WATER, TerrainType.WATER, TerrainType.WATER,
            TerrainType.FLAT, TerrainType.ROUGH, TerrainType.MOUNTAINOUS,
        ])
        stats = summarize(cells)

        assert stats.total == 6
        assert stats.water == 3
        assert stats.flat == 1
        assert stats.rough == 1
        assert stats.mountain == 1
        assert stats.land == 3

    def test_volcano_counts_as_mountain(self):
        """The reserved volcano type is reported with mountains."""
        stats = summarize(make_cells([TerrainType.VOLCANO, TerrainType.MOUNTAINOUS]))

        assert stats.mountain == 2

    def test_percentages(self):
        """Percentages are rounded to one decimal and add up."""
        cells = make_cells([TerrainType.WATER, TerrainType.WATER, TerrainType.FLAT])
        stats = summarize(cells)

        assert stats.water_percent == 66.7
        assert stats.land_percent == 33.3

    def test_empty(self):
        """An empty grid summarises to zeros."""
        stats = summarize([])

        assert stats.total == 0
        assert stats.water_percent == 0.0
        assert stats.land_percent == 0.0

    def test_accepts_iterators(self):
        """Cells can be streamed through a generator."""
        cells = make_cells([TerrainType.FLAT] * 4)
        stats = summarize(cell for cell in cells)

        assert stats.total == 4
        assert stats.land_percent == 100.0

    def test_every_terrain_bucketed(self):
        """No terrain type falls through."""
        assert set(TERRAIN_BUCKETS) == set(TerrainType)

    def test_missing_bucket_rejected(self):
        """A bucket table missing a terrain type is rejected."""
        buckets = dict(TERRAIN_BUCKETS)
        del buckets[TerrainType.VOLCANO]

        with pytest.raises(ValueError, match="VOLCANO"):
            validate_buckets(buckets)

    def test_serialisable(self):
        """Statistics dump to plain data."""
        stats = summarize(make_cells([TerrainType.FLAT, TerrainType.WATER]))
        data = stats.model_dump()

        assert data["total"] == 2
        assert data["water_percent"] == 50.0
        assert TerrainStatistics(**data) == stats
