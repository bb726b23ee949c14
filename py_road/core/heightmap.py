"""
Heightmap oracles.

The road search never computes elevation itself. It is handed an object with
a single ``height(x, z)`` method and calls it for every grid cell it needs to
cost. This module defines that interface and a few adapters:

- FunctionHeightmap: wraps any ``f(x, z) -> elevation`` callable
- FlatHeightmap: constant elevation
- GridNoiseHeightmap: wraps a noise function sampled on its own lattice
- SampledHeightmap: bilinear lookup into a NumPy elevation array
"""

from typing import Callable, Optional, Protocol, Sequence, Union, runtime_checkable

import numpy as np

from ..config import settings
from .grid import WorldPoint


@runtime_checkable
class HeightmapOracle(Protocol):
    """Anything that can report terrain elevation at a horizontal world position."""

    def height(self, x: float, z: float) -> float:
        ...


class FunctionHeightmap:
    """Adapts a plain ``f(x, z)`` callable to the oracle interface."""

    def __init__(self, func: Callable[[float, float], float]):
        if not callable(func):
            raise TypeError(f"Expected a callable, got {type(func).__name__}")
        self.func = func

    def height(self, x: float, z: float) -> float:
        return self.func(x, z)

    def __repr__(self) -> str:
        return f"FunctionHeightmap({getattr(self.func, '__name__', self.func)!r})"


class FlatHeightmap:
    """Terrain at a single constant elevation."""

    def __init__(self, elevation: float = 0.0):
        self.elevation = float(elevation)

    def height(self, x: float, z: float) -> float:
        return self.elevation


class GridNoiseHeightmap:
    """
    Wraps a noise function that is indexed by lattice coordinates.

    The noise is called as ``noise(i, j)`` where ``i`` runs along world z and
    ``j`` along world x, both divided by ``sample_scale``. This is the form
    procedural noise snippets are usually written in (row, column), so they
    can be plugged in without rescaling by hand.
    """

    def __init__(
        self,
        noise: Callable[[float, float], float],
        sample_scale: Optional[float] = None,
    ):
        if not callable(noise):
            raise TypeError(f"Expected a callable, got {type(noise).__name__}")
        self.noise = noise
        self.sample_scale = (
            sample_scale if sample_scale is not None else settings.noise_sample_scale
        )
        if self.sample_scale <= 0:
            raise ValueError(f"sample_scale must be positive, got {self.sample_scale}")

    def height(self, x: float, z: float) -> float:
        j = x / self.sample_scale
        i = z / self.sample_scale
        return self.noise(i, j)


class SampledHeightmap:
    """
    Elevation stored as a 2D NumPy array.

    ``heights[row, col]`` is the elevation at world position
    ``(origin_x + col * cell_size, origin_z + row * cell_size)``. Positions
    between samples are bilinearly interpolated; positions outside the array
    are clamped to the nearest edge sample.
    """

    def __init__(
        self,
        heights: np.ndarray,
        cell_size: float = 1.0,
        origin: Sequence[float] = (0.0, 0.0),
    ):
        heights = np.asarray(heights, dtype=np.float64)
        if heights.ndim != 2:
            raise ValueError(f"heights must be a 2D array, got shape {heights.shape}")
        if heights.shape[0] < 1 or heights.shape[1] < 1:
            raise ValueError("heights must contain at least one sample")
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")

        self.heights = heights
        self.cell_size = float(cell_size)
        self.origin_x = float(origin[0])
        self.origin_z = float(origin[1])

    @property
    def shape(self):
        return self.heights.shape

    def height(self, x: float, z: float) -> float:
        rows, cols = self.heights.shape

        # Fractional sample coordinates, clamped to the array
        col = np.clip((x - self.origin_x) / self.cell_size, 0, cols - 1)
        row = np.clip((z - self.origin_z) / self.cell_size, 0, rows - 1)

        c0 = int(np.floor(col))
        r0 = int(np.floor(row))
        c1 = min(c0 + 1, cols - 1)
        r1 = min(r0 + 1, rows - 1)
        tc = col - c0
        tr = row - r0

        top = self.heights[r0, c0] * (1 - tc) + self.heights[r0, c1] * tc
        bottom = self.heights[r1, c0] * (1 - tc) + self.heights[r1, c1] * tc
        return float(top * (1 - tr) + bottom * tr)


HeightmapLike = Union[HeightmapOracle, Callable[[float, float], float]]


def as_oracle(heightmap: HeightmapLike) -> HeightmapOracle:
    """Return ``heightmap`` as an oracle, wrapping bare callables in FunctionHeightmap."""
    if isinstance(heightmap, HeightmapOracle):
        return heightmap
    if callable(heightmap):
        return FunctionHeightmap(heightmap)
    raise TypeError(
        f"Heightmap must expose height(x, z) or be callable, got {type(heightmap).__name__}"
    )


def lift(oracle: HeightmapOracle, point: Sequence[float]) -> WorldPoint:
    """Place a world point on the terrain surface (its y becomes the elevation)."""
    x, z = float(point[0]), float(point[2])
    return WorldPoint(x, float(oracle.height(x, z)), z)
