"""Coherent noise fields and shaping functions for terrain generation.

Noise is OpenSimplex sampled at tile coordinates scaled by a frequency
constant, remapped from [-1, 1] to [0, 1].
"""

import numpy as np
from numpy.typing import NDArray
from opensimplex import OpenSimplex

from ..rng import Rng

# Upper bound (inclusive) for seeds handed to the simplex generators
NOISE_SEED_MAX = 2**31 - 1


class NoiseField:
    """A single 2D coherent-noise function with values in [0, 1]."""

    def __init__(self, seed: int):
        self.seed = seed
        self._simplex = OpenSimplex(seed=seed)

    def sample(self, x: float, y: float) -> float:
        """Sample the field at a single point."""
        return self._simplex.noise2(x, y) * 0.5 + 0.5

    def sample_grid(
        self,
        xs: NDArray[np.float64],
        ys: NDArray[np.float64],
    ) -> NDArray[np.float64]:
        """Sample every combination of xs and ys.

        Args:
            xs: Sample x coordinates (columns).
            ys: Sample y coordinates (rows).

        Returns:
            Array of shape (len(ys), len(xs)).
        """
        return self._simplex.noise2array(xs, ys) * 0.5 + 0.5


def make_noise_fields(rng: Rng) -> tuple[NoiseField, NoiseField]:
    """Derive the elevation and moisture fields from one stream.

    The elevation field is seeded first and the moisture field second; this
    ordering is part of seed compatibility.

    Returns:
        Tuple of (elevation_noise, moisture_noise).
    """
    elevation_noise = NoiseField(rng.rand_int(0, NOISE_SEED_MAX))
    moisture_noise = NoiseField(rng.rand_int(0, NOISE_SEED_MAX))
    return elevation_noise, moisture_noise


def smoothstep(edge0: float, edge1: float, x: NDArray[np.float64]) -> NDArray[np.float64]:
    """Smooth Hermite interpolation between 0 and 1.

    Args:
        edge0: Lower edge of transition.
        edge1: Upper edge of transition.
        x: Input values.

    Returns:
        Smoothly interpolated values in [0, 1].
    """
    t = np.clip((x - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


def continent_mask(
    width: int,
    height: int,
    inner_radius: float,
    outer_radius: float,
) -> NDArray[np.float64]:
    """Radial mask: 1 near the center, falling to 0 beyond outer_radius.

    Distances are measured on coordinates normalized to [-1, 1] on each axis,
    so corners sit at roughly 1.41.

    Returns:
        Array of shape (height, width).
    """
    nx = np.arange(width, dtype=np.float64) / width * 2.0 - 1.0
    ny = np.arange(height, dtype=np.float64) / height * 2.0 - 1.0
    xx, yy = np.meshgrid(nx, ny)

    distance = np.sqrt(xx**2 + yy**2)
    return 1.0 - smoothstep(inner_radius, outer_radius, distance)
