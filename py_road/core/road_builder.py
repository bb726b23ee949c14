"""
Road geometry built from a search result.

The search produces a flat polyline (y = 0). RoadBuilder places it on the
terrain, pairs consecutive vertices into edges and adds a marker at each
endpoint, which is everything a mesh emitter needs to draw the road.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import structlog

from ..config import settings
from .grid import WorldPoint, validate_scale
from .heightmap import HeightmapLike, as_oracle, lift
from .road_search import CAP_FROM_SETTINGS, RoadPath, RoadSearch

logger = structlog.get_logger()

DEFAULT_SOURCE = WorldPoint(0.1, 0.1, 0.1)
DEFAULT_DESTINATION = WorldPoint(0.9, 0.9, 0.9)


@dataclass
class EndpointMarker:
    """Cube marking one end of the road."""
    center: WorldPoint
    size: float


@dataclass
class RoadPolyline:
    """Road vertices on the terrain surface, as an (N, 3) array."""
    vertices: np.ndarray

    def __len__(self) -> int:
        return len(self.vertices)

    def segments(self) -> List[Tuple[WorldPoint, WorldPoint]]:
        """Consecutive vertex pairs, one per road edge."""
        points = [WorldPoint(*map(float, v)) for v in self.vertices]
        return list(zip(points, points[1:]))

    def length(self) -> float:
        """Total 3D length of the road."""
        if len(self.vertices) < 2:
            return 0.0
        return float(np.linalg.norm(np.diff(self.vertices, axis=0), axis=1).sum())


@dataclass
class RoadGeometry:
    """Everything produced for one road."""
    path: RoadPath
    polyline: RoadPolyline
    markers: List[EndpointMarker]


class RoadBuilder:
    """Searches for a road and lays it onto the terrain."""

    def __init__(
        self,
        heightmap: HeightmapLike,
        scale: Optional[float] = None,
        marker_size: Optional[float] = None,
        max_expansions: Union[int, None, object] = CAP_FROM_SETTINGS,
    ):
        self.oracle = as_oracle(heightmap)
        self.scale = validate_scale(scale if scale is not None else settings.default_scale)
        self.marker_size = marker_size if marker_size is not None else settings.marker_size
        self.max_expansions = max_expansions

    def lift_path(self, path: RoadPath) -> RoadPolyline:
        """Place every path point on the terrain surface."""
        vertices = np.array(
            [lift(self.oracle, p) for p in path.points], dtype=np.float64
        ).reshape(-1, 3)
        return RoadPolyline(vertices)

    def build(
        self,
        src: Sequence[float] = DEFAULT_SOURCE,
        dst: Sequence[float] = DEFAULT_DESTINATION,
    ) -> RoadGeometry:
        """
        Build the road between two world points.

        Args:
            src: Road start in world space; y is ignored
            dst: Road end in world space; y is ignored

        Returns:
            RoadGeometry with the path, the lifted polyline and endpoint markers

        Raises:
            PathNotFoundError: If no road could be found
        """
        path = RoadSearch(
            self.oracle, self.scale, src, dst, self.max_expansions
        ).run().unwrap()

        polyline = self.lift_path(path)
        markers = [
            EndpointMarker(lift(self.oracle, src), self.marker_size),
            EndpointMarker(lift(self.oracle, dst), self.marker_size),
        ]

        logger.info(
            "Road geometry built",
            vertices=len(polyline),
            segments=max(len(polyline) - 1, 0),
            length=polyline.length(),
        )
        return RoadGeometry(path=path, polyline=polyline, markers=markers)
