"""
Edge cost and heuristic for the road search.

A step between two grid cells costs its lateral (top-down) distance plus the
squared elevation change divided by ``0.05 * scale``. The squared term grows
much faster than distance, so the search prefers long winding routes that
follow contour lines over short steep ones.

The heuristic is the lateral distance alone. Every step costs at least its
lateral distance, so the heuristic never overestimates, and by the triangle
inequality it is also consistent: a cell is final the first time it is popped.
"""

import math
from typing import Sequence

from .grid import GridCell
from .heightmap import HeightmapOracle

# Divisor applied (times scale) to the squared elevation change
ELEVATION_PENALTY_FACTOR = 0.05


def lateral_distance(a: GridCell, b: GridCell, scale: float) -> float:
    """Top-down Euclidean distance between two cells in world units."""
    return math.hypot(a.x * scale - b.x * scale, a.z * scale - b.z * scale)


def height_at(cell: GridCell, scale: float, oracle: HeightmapOracle) -> float:
    """Terrain elevation at a cell's world position."""
    elevation = float(oracle.height(cell.x * scale, cell.z * scale))
    if not math.isfinite(elevation):
        raise ValueError(
            f"Heightmap returned non-finite elevation {elevation} at cell {tuple(cell)}"
        )
    return elevation


def elevation_penalty(delta: float, scale: float) -> float:
    """Cost contribution of an elevation change of ``delta`` over one step."""
    return (delta * delta) / (ELEVATION_PENALTY_FACTOR * scale)


def step_cost(
    prev: GridCell,
    nxt: GridCell,
    prev_height: float,
    next_height: float,
    scale: float,
) -> float:
    """Edge cost from already-known elevations."""
    return lateral_distance(prev, nxt, scale) + elevation_penalty(
        next_height - prev_height, scale
    )


def edge_cost(
    prev: GridCell, nxt: GridCell, scale: float, oracle: HeightmapOracle
) -> float:
    """
    Cost of moving from ``prev`` to ``nxt``.

    Symmetric: swapping the cells only flips the sign of the elevation
    change, which is squared.
    """
    return step_cost(
        prev,
        nxt,
        height_at(prev, scale, oracle),
        height_at(nxt, scale, oracle),
        scale,
    )


def heuristic(cell: GridCell, goal: GridCell, scale: float) -> float:
    """Optimistic remaining cost: lateral distance to the goal, elevation ignored."""
    return lateral_distance(cell, goal, scale)


def path_cost(cells: Sequence[GridCell], scale: float, oracle: HeightmapOracle) -> float:
    """Total edge cost along a sequence of adjacent cells."""
    return sum(
        (edge_cost(prev, nxt, scale, oracle) for prev, nxt in zip(cells, cells[1:])),
        0.0,
    )
