"""Tests for terrain classification functions."""

import numpy as np
import pytest

from roadworld.terrain.classification import classify_terrain, classify_tile
from roadworld.terrain.config import TerrainThresholds
from roadworld.terrain_types import TileType, tile_type_from_code


class TestClassifyTile:
    """Tests for single-tile classification."""

    @pytest.mark.parametrize(
        "elevation,moisture,expected",
        [
            (0.10, 0.9, TileType.DEEP_WATER),
            (0.30, 0.5, TileType.SHALLOW_WATER),  # band edges are exclusive
            (0.35, 0.5, TileType.SHALLOW_WATER),
            (0.40, 0.5, TileType.COAST),
            (0.42, 0.5, TileType.PLAINS),
            (0.43, 0.70, TileType.FOREST),
            (0.43, 0.60, TileType.PLAINS),
            (0.50, 0.80, TileType.FOREST),
            (0.50, 0.50, TileType.PLAINS),
            (0.70, 0.30, TileType.HILLS),
            (0.70, 0.60, TileType.FOREST),
            (0.90, 0.50, TileType.MOUNTAINS),
            (0.90, 0.80, TileType.FOREST),  # too wet for mountains
        ],
    )
    def test_bands(self, elevation: float, moisture: float, expected: TileType) -> None:
        assert classify_tile(elevation, moisture) == expected

    def test_never_river(self) -> None:
        """Rivers are carved later, never classified."""
        for elevation in np.linspace(0, 1, 21):
            for moisture in np.linspace(0, 1, 21):
                assert classify_tile(elevation, moisture) != TileType.RIVER

    def test_custom_thresholds(self) -> None:
        thresholds = TerrainThresholds(
            deep_water_level=0.1, shallow_water_level=0.2, coast_level=0.3
        )
        assert classify_tile(0.25, 0.5, thresholds) == TileType.COAST


class TestClassifyTerrain:
    """Tests for whole-grid classification."""

    def test_output_dtype_and_shape(self) -> None:
        elevation = np.random.rand(12, 20)
        moisture = np.random.rand(12, 20)
        result = classify_terrain(elevation, moisture)
        assert result.shape == (12, 20)
        assert result.dtype == np.uint8

    def test_matches_classify_tile(self) -> None:
        """Vectorized and scalar classification agree on every cell."""
        rng = np.random.default_rng(3)
        elevation = rng.random((30, 30)).astype(np.float32)
        moisture = rng.random((30, 30)).astype(np.float32)

        result = classify_terrain(elevation, moisture)

        for y in range(30):
            for x in range(30):
                expected = classify_tile(float(elevation[y, x]), float(moisture[y, x]))
                assert tile_type_from_code(result[y, x]) == expected
