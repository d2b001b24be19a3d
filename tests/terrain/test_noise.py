"""Tests for noise fields and shaping functions."""

import numpy as np
import pytest

from roadworld.rng import Rng
from roadworld.terrain.noise import (
    NOISE_SEED_MAX,
    NoiseField,
    continent_mask,
    make_noise_fields,
    smoothstep,
)


class TestNoiseField:
    """Tests for NoiseField."""

    def test_sample_in_unit_range(self) -> None:
        field = NoiseField(seed=123)
        for i in range(50):
            value = field.sample(i * 0.37, i * 0.19)
            assert 0.0 <= value <= 1.0

    def test_grid_shape(self) -> None:
        """Rows follow ys, columns follow xs."""
        field = NoiseField(seed=1)
        grid = field.sample_grid(np.arange(7) * 0.1, np.arange(3) * 0.1)
        assert grid.shape == (3, 7)

    def test_grid_matches_point_samples(self) -> None:
        field = NoiseField(seed=9)
        xs = np.array([0.0, 0.5, 1.25])
        ys = np.array([0.0, 2.0])
        grid = field.sample_grid(xs, ys)
        assert grid[1, 2] == pytest.approx(field.sample(1.25, 2.0))

    def test_same_seed_same_values(self) -> None:
        xs = np.linspace(0, 3, 16)
        a = NoiseField(seed=77).sample_grid(xs, xs)
        b = NoiseField(seed=77).sample_grid(xs, xs)
        np.testing.assert_array_equal(a, b)

    def test_different_seeds_differ(self) -> None:
        xs = np.linspace(0, 3, 16)
        a = NoiseField(seed=1).sample_grid(xs, xs)
        b = NoiseField(seed=2).sample_grid(xs, xs)
        assert not np.array_equal(a, b)


class TestMakeNoiseFields:
    """Tests for make_noise_fields."""

    def test_deterministic_seeds(self) -> None:
        elev_a, moist_a = make_noise_fields(Rng(5))
        elev_b, moist_b = make_noise_fields(Rng(5))
        assert (elev_a.seed, moist_a.seed) == (elev_b.seed, moist_b.seed)

    def test_elevation_seeded_first(self) -> None:
        rng = Rng(5)
        expected_elevation = rng.rand_int(0, NOISE_SEED_MAX)
        expected_moisture = rng.rand_int(0, NOISE_SEED_MAX)

        elevation, moisture = make_noise_fields(Rng(5))
        assert elevation.seed == expected_elevation
        assert moisture.seed == expected_moisture


class TestShaping:
    """Tests for smoothstep and the continent mask."""

    def test_smoothstep_edges(self) -> None:
        x = np.array([-1.0, 0.0, 0.5, 1.0, 2.0])
        result = smoothstep(0.0, 1.0, x)
        np.testing.assert_allclose(result, [0.0, 0.0, 0.5, 1.0, 1.0])

    def test_continent_mask_shape(self) -> None:
        assert continent_mask(40, 20, 0.9, 1.4).shape == (20, 40)

    def test_continent_mask_center_and_corner(self) -> None:
        mask = continent_mask(100, 50, 0.9, 1.4)
        assert mask[25, 50] == pytest.approx(1.0)
        # Corner is at normalized distance sqrt(2) > outer radius
        assert mask[0, 0] == pytest.approx(0.0)

    def test_continent_mask_range(self) -> None:
        mask = continent_mask(64, 64, 0.5, 1.0)
        assert mask.min() >= 0.0
        assert mask.max() <= 1.0
