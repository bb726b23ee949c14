"""Errors raised by the road search."""


class RoadSearchError(Exception):
    """Base class for road search errors."""


class InvalidScaleError(RoadSearchError, ValueError):
    """Raised when the grid scale is not a finite positive number."""

    def __init__(self, scale):
        self.scale = scale
        super().__init__(f"Grid scale must be a finite positive number, got {scale!r}")


class PathNotFoundError(RoadSearchError, LookupError):
    """Raised when the frontier empties (or the expansion cap is hit) before the goal is reached."""

    def __init__(self, start, goal, expanded: int, capped: bool = False):
        self.start = start
        self.goal = goal
        self.expanded = expanded
        self.capped = capped
        reason = "expansion cap reached" if capped else "frontier exhausted"
        super().__init__(
            f"No road found from {tuple(start)} to {tuple(goal)} "
            f"({reason} after {expanded} cells)"
        )
