"""
Core road search functionality.
"""

from .errors import RoadSearchError, InvalidScaleError, PathNotFoundError
from .grid import GridCell, WorldPoint, to_grid, to_world, neighbors, validate_scale
from .heightmap import (HeightmapOracle, FunctionHeightmap, FlatHeightmap,
                        GridNoiseHeightmap, SampledHeightmap, as_oracle, lift)
from .cost_model import edge_cost, heuristic, height_at, path_cost
from .frontier import Frontier
from .road_search import (RoadSearch, SearchResult, SearchState, SearchStatus,
                          RoadPath, reconstruct_path, find_road,
                          CAP_FROM_SETTINGS)
from .road_builder import RoadBuilder, RoadGeometry, RoadPolyline, EndpointMarker

__all__ = ['RoadSearchError', 'InvalidScaleError', 'PathNotFoundError',
           'GridCell', 'WorldPoint', 'to_grid', 'to_world', 'neighbors', 'validate_scale',
           'HeightmapOracle', 'FunctionHeightmap', 'FlatHeightmap',
           'GridNoiseHeightmap', 'SampledHeightmap', 'as_oracle', 'lift',
           'edge_cost', 'heuristic', 'height_at', 'path_cost', 'Frontier',
           'RoadSearch', 'SearchResult', 'SearchState', 'SearchStatus',
           'RoadPath', 'reconstruct_path', 'find_road', 'CAP_FROM_SETTINGS',
           'RoadBuilder', 'RoadGeometry', 'RoadPolyline', 'EndpointMarker']
