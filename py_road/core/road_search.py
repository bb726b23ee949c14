"""
A* road search over a heightmap.

Start and goal are snapped to an integer grid, then the search expands cells
in 8 directions, costing each step with the elevation-aware cost model and
ordering the frontier by cost so far plus lateral distance to the goal.

Each search owns all of its state (frontier, cost and predecessor maps,
memoized elevations). Nothing is shared between searches, so independent
searches can run concurrently against the same side-effect-free heightmap.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple, Union

import numpy as np
import structlog

from ..config import settings
from .cost_model import heuristic, height_at, step_cost
from .errors import PathNotFoundError
from .frontier import Frontier
from .grid import GridCell, WorldPoint, neighbors, to_grid, to_world, validate_scale
from .heightmap import HeightmapLike, as_oracle

logger = structlog.get_logger()

# Default for max_expansions: read the cap from settings.max_expanded_cells
CAP_FROM_SETTINGS = object()


class SearchStatus(str, Enum):
    """Lifecycle of a road search."""

    RUNNING = "running"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


@dataclass
class SearchState:
    """
    Mutable state of a single search.

    A cell is a key of ``came_from`` and ``cost_so_far`` iff it has been
    discovered. The start cell maps to ``None`` in ``came_from``, which is
    different from being absent (undiscovered).
    """
    start: GridCell
    goal: GridCell
    came_from: Dict[GridCell, Optional[GridCell]] = field(default_factory=dict)
    cost_so_far: Dict[GridCell, float] = field(default_factory=dict)
    frontier: Frontier = field(default_factory=Frontier)
    closed: Set[GridCell] = field(default_factory=set)
    elevations: Dict[GridCell, float] = field(default_factory=dict)
    expanded: int = 0


@dataclass
class RoadPath:
    """A found road: grid cells and their world positions, start to goal inclusive."""
    cells: List[GridCell]
    points: List[WorldPoint]
    cost: float
    scale: float

    @property
    def start(self) -> WorldPoint:
        return self.points[0]

    @property
    def goal(self) -> WorldPoint:
        return self.points[-1]

    def as_array(self) -> np.ndarray:
        """World points as an (N, 3) float array."""
        return np.array(self.points, dtype=np.float64).reshape(-1, 3)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[WorldPoint]:
        return iter(self.points)


@dataclass
class SearchResult:
    """Outcome of a finished search. ``path`` is None unless the goal was reached."""
    status: SearchStatus
    start: GridCell
    goal: GridCell
    expanded: int
    path: Optional[RoadPath] = None
    capped: bool = False

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.SUCCEEDED

    def unwrap(self) -> RoadPath:
        """Return the path, or raise PathNotFoundError if there is none."""
        if self.path is None:
            raise PathNotFoundError(self.start, self.goal, self.expanded, self.capped)
        return self.path


def reconstruct_path(
    came_from: Dict[GridCell, Optional[GridCell]], goal: GridCell, scale: float
) -> Tuple[List[GridCell], List[WorldPoint]]:
    """
    Follow predecessor links back from ``goal`` and return the forward path.

    Args:
        came_from: Predecessor map; the start cell maps to None
        goal: Cell to walk back from
        scale: Grid scale for the world-space conversion

    Returns:
        Tuple of (cells, world points), both ordered start to goal
    """
    if goal not in came_from:
        raise ValueError(f"Goal cell {tuple(goal)} was never discovered")

    cells = []
    cell: Optional[GridCell] = goal
    while cell is not None:
        cells.append(cell)
        cell = came_from[cell]
    cells.reverse()

    return cells, [to_world(c, scale) for c in cells]


class RoadSearch:
    """
    Step-wise A* search for a road between two world points.

    Call ``run()`` to search to completion, or ``step()`` repeatedly to
    advance one frontier pop at a time.
    """

    def __init__(
        self,
        heightmap: HeightmapLike,
        scale: float,
        start: Sequence[float],
        goal: Sequence[float],
        max_expansions: Union[int, None, object] = CAP_FROM_SETTINGS,
    ):
        """
        Initialize the search.

        Args:
            heightmap: Oracle with ``height(x, z)``, or a plain ``f(x, z)`` callable
            scale: World size of one grid cell
            start: Start position in world space (x, y, z); y is ignored
            goal: Goal position in world space (x, y, z); y is ignored
            max_expansions: Give up after expanding this many cells. None means
                unbounded. When omitted, ``settings.max_expanded_cells`` is used.
        """
        self.scale = validate_scale(scale)
        self.oracle = as_oracle(heightmap)

        if max_expansions is CAP_FROM_SETTINGS:
            max_expansions = settings.max_expanded_cells
        if max_expansions is not None and max_expansions <= 0:
            raise ValueError(f"max_expansions must be positive, got {max_expansions}")
        self.max_expansions = max_expansions

        self.state = SearchState(
            start=to_grid(start, self.scale), goal=to_grid(goal, self.scale)
        )
        self.state.came_from[self.state.start] = None
        self.state.cost_so_far[self.state.start] = 0.0
        self.state.frontier.insert_or_update(self.state.start, 0.0)

        self._status = SearchStatus.RUNNING
        self._capped = False

    @property
    def status(self) -> SearchStatus:
        return self._status

    @property
    def capped(self) -> bool:
        return self._capped

    def _height(self, cell: GridCell) -> float:
        """Elevation of a cell, asking the oracle at most once per cell."""
        elevation = self.state.elevations.get(cell)
        if elevation is None:
            try:
                elevation = height_at(cell, self.scale, self.oracle)
            except Exception as e:
                logger.warning(
                    "Heightmap oracle failed, aborting road search",
                    cell=tuple(cell),
                    error=str(e),
                )
                raise
            self.state.elevations[cell] = elevation
        return elevation

    def _pop_open(self) -> Optional[GridCell]:
        """Pop the best cell that has not been expanded yet, skipping stale entries."""
        frontier = self.state.frontier
        while not frontier.is_empty():
            cell = frontier.pop_min()
            if cell not in self.state.closed:
                return cell
        return None

    def step(self) -> SearchStatus:
        """Pop one cell and expand it. Returns the status afterwards."""
        if self._status is not SearchStatus.RUNNING:
            return self._status

        state = self.state
        current = self._pop_open()

        if current is None:
            self._status = SearchStatus.EXHAUSTED
            logger.warning(
                "Road search exhausted frontier without reaching goal",
                start=tuple(state.start),
                goal=tuple(state.goal),
                expanded=state.expanded,
            )
            return self._status

        if current == state.goal:
            self._status = SearchStatus.SUCCEEDED
            return self._status

        if self.max_expansions is not None and state.expanded >= self.max_expansions:
            self._status = SearchStatus.EXHAUSTED
            self._capped = True
            logger.warning(
                "Road search expansion cap reached",
                start=tuple(state.start),
                goal=tuple(state.goal),
                max_expansions=self.max_expansions,
            )
            return self._status

        state.closed.add(current)
        state.expanded += 1

        current_cost = state.cost_so_far[current]
        current_height = self._height(current)

        for n in neighbors(current):
            if n in state.closed:
                continue

            tentative = current_cost + step_cost(
                current, n, current_height, self._height(n), self.scale
            )

            if n not in state.cost_so_far or tentative < state.cost_so_far[n]:
                state.cost_so_far[n] = tentative
                state.came_from[n] = current
                state.frontier.insert_or_update(
                    n, tentative + heuristic(n, state.goal, self.scale)
                )

        if state.expanded % settings.progress_interval == 0:
            logger.debug(
                "Road search progress",
                expanded=state.expanded,
                frontier=len(state.frontier),
                best_cost=current_cost,
                best_priority=(
                    None if state.frontier.is_empty() else state.frontier.peek_priority()
                ),
            )

        return self._status

    def run(self) -> SearchResult:
        """Search until the goal is reached or the frontier is exhausted."""
        logger.info(
            "Starting road search",
            start=tuple(self.state.start),
            goal=tuple(self.state.goal),
            scale=self.scale,
        )

        while self._status is SearchStatus.RUNNING:
            self.step()

        return self.result()

    def result(self) -> SearchResult:
        """Package the outcome of a finished search."""
        if self._status is SearchStatus.RUNNING:
            raise RuntimeError("Road search is still running")

        state = self.state
        result = SearchResult(
            status=self._status,
            start=state.start,
            goal=state.goal,
            expanded=state.expanded,
            capped=self._capped,
        )

        if self._status is SearchStatus.SUCCEEDED:
            cells, points = reconstruct_path(state.came_from, state.goal, self.scale)
            result.path = RoadPath(
                cells=cells,
                points=points,
                cost=state.cost_so_far[state.goal],
                scale=self.scale,
            )
            logger.info(
                "Road search complete",
                expanded=state.expanded,
                path_cells=len(cells),
                cost=result.path.cost,
            )

        return result


def find_road(
    heightmap: HeightmapLike,
    scale: float,
    start: Sequence[float],
    goal: Sequence[float],
    max_expansions: Union[int, None, object] = CAP_FROM_SETTINGS,
) -> RoadPath:
    """
    Find the cheapest road between two world points.

    Raises:
        InvalidScaleError: If scale is not a finite positive number
        PathNotFoundError: If the goal could not be reached
    """
    return RoadSearch(heightmap, scale, start, goal, max_expansions).run().unwrap()
