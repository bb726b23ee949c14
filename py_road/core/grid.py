"""
Grid quantization for the road search.

Continuous world positions are snapped to integer grid cells before they are
used as search vertices, so two positions that should be the same vertex
always compare equal. The vertical component of a cell is always 0; elevation
is looked up from the heightmap on demand.

Known edge case: ``to_grid(to_world(cell, scale), scale) == cell`` is
guaranteed for power-of-two scales. Other scales may floor into the previous
cell at boundaries, when ``cell * scale`` lands a rounding error below the
boundary. Search results are never fed back through ``to_grid``, so this only
matters to callers doing their own conversions.
"""

import math
from typing import List, NamedTuple, Sequence

from .errors import InvalidScaleError


class GridCell(NamedTuple):
    """Integer grid cell. ``y`` is always 0 for cells produced by ``to_grid``."""
    x: int
    y: int
    z: int


class WorldPoint(NamedTuple):
    """Point in world space."""
    x: float
    y: float
    z: float


# 8-directional lateral moves, clockwise starting at +z
NEIGHBOR_OFFSETS = (
    (0, 0, 1),
    (1, 0, 1),
    (1, 0, 0),
    (1, 0, -1),
    (0, 0, -1),
    (-1, 0, -1),
    (-1, 0, 0),
    (-1, 0, 1),
)


def validate_scale(scale) -> float:
    """Return ``scale`` as a float, raising InvalidScaleError unless it is finite and positive."""
    if isinstance(scale, bool):
        raise InvalidScaleError(scale)
    try:
        value = float(scale)
    except (TypeError, ValueError):
        raise InvalidScaleError(scale) from None
    if not math.isfinite(value) or value <= 0:
        raise InvalidScaleError(scale)
    return value


def to_grid(point: Sequence[float], scale: float) -> GridCell:
    """
    Snap a world position to its grid cell.

    Uses floor rather than truncation so that negative coordinates quantize
    consistently (-0.01 lands in cell -1, not 0).

    Args:
        point: World position as (x, y, z); y is ignored
        scale: World size of one grid cell

    Returns:
        GridCell with y forced to 0
    """
    return GridCell(
        int(math.floor(point[0] / scale)),
        0,
        int(math.floor(point[2] / scale)),
    )


def to_world(cell: Sequence[int], scale: float) -> WorldPoint:
    """Map a grid cell back to world space."""
    return WorldPoint(cell[0] * scale, cell[1] * scale, cell[2] * scale)


def neighbors(cell: GridCell) -> List[GridCell]:
    """Return the 8 lateral neighbors of a cell."""
    return [
        GridCell(cell.x + dx, cell.y + dy, cell.z + dz)
        for dx, dy, dz in NEIGHBOR_OFFSETS
    ]
