"""Tests for road geometry construction."""

import math

import numpy as np
import pytest
from py_road.config import settings
from py_road.core.errors import PathNotFoundError
from py_road.core.grid import GridCell, WorldPoint
from py_road.core.heightmap import FlatHeightmap, FunctionHeightmap
from py_road.core.road_builder import RoadBuilder, RoadPolyline


class TestRoadBuilder:
    """Test building roads on terrain."""

    def test_polyline_on_flat_plateau(self):
        """Test lifting a straight road onto constant elevation."""
        builder = RoadBuilder(FlatHeightmap(0.3), scale=0.125)
        geometry = builder.build((0, 0, 0), (0.5, 0, 0))

        np.testing.assert_allclose(geometry.polyline.vertices[:, 1], 0.3)
        np.testing.assert_allclose(geometry.polyline.vertices[:, 0], [0, 0.125, 0.25, 0.375, 0.5])
        assert len(geometry.polyline.segments()) == 4
        assert geometry.polyline.length() == pytest.approx(0.5)

    def test_markers(self):
        """Test endpoint markers sit on the terrain at the given points."""
        builder = RoadBuilder(FlatHeightmap(0.3), scale=0.125, marker_size=0.2)
        geometry = builder.build((0, 0, 0), (0.5, 0, 0))

        assert [m.center for m in geometry.markers] == [
            WorldPoint(0.0, 0.3, 0.0), WorldPoint(0.5, 0.3, 0.0)
        ]
        assert all(m.size == 0.2 for m in geometry.markers)

    def test_defaults(self):
        """Test default scale, marker size and endpoints."""
        builder = RoadBuilder(FlatHeightmap())
        geometry = builder.build()

        assert builder.scale == settings.default_scale
        assert geometry.markers[0].size == settings.marker_size
        # (0.1, 0.9) at scale 0.125 is cells 0 to 7 on both axes
        assert geometry.path.cells[0] == GridCell(0, 0, 0)
        assert geometry.path.cells[-1] == GridCell(7, 0, 7)
        assert len(geometry.polyline) == 8

    def test_vertices_follow_terrain(self):
        """Test that each vertex takes the elevation under it."""
        slope = FunctionHeightmap(lambda x, z: 0.1 * x)
        geometry = RoadBuilder(slope, scale=0.25).build((0, 0, 0), (1.0, 0, 0))

        vertices = geometry.polyline.vertices
        np.testing.assert_allclose(vertices[:, 1], 0.1 * vertices[:, 0])
        assert geometry.polyline.length() > 1.0

    def test_explicit_none_cap_is_unbounded(self, monkeypatch):
        """Test that max_expansions=None ignores a configured cap."""
        monkeypatch.setattr(settings, "max_expanded_cells", 2)

        geometry = RoadBuilder(FlatHeightmap(), scale=0.125, max_expansions=None).build(
            (0, 0, 0), (1, 0, 1)
        )

        assert geometry.path.cells[-1] == GridCell(8, 0, 8)

    def test_configured_cap_applies_by_default(self, monkeypatch):
        """Test that the settings cap is used when none is passed."""
        monkeypatch.setattr(settings, "max_expanded_cells", 2)

        with pytest.raises(PathNotFoundError):
            RoadBuilder(FlatHeightmap(), scale=0.125).build((0, 0, 0), (1, 0, 1))

    def test_not_found_raises(self):
        """Test that an unreachable goal surfaces as PathNotFoundError."""
        builder = RoadBuilder(FlatHeightmap(), scale=0.125, max_expansions=2)
        with pytest.raises(PathNotFoundError):
            builder.build((0, 0, 0), (5, 0, 5))


class TestRoadPolyline:
    """Test polyline helpers."""

    def test_single_vertex(self):
        """Test a one-point road has no segments and no length."""
        polyline = RoadPolyline(np.array([[1.0, 2.0, 3.0]]))

        assert polyline.segments() == []
        assert polyline.length() == 0.0

    def test_segments_and_length(self):
        """Test 3D length over two segments."""
        polyline = RoadPolyline(np.array([[0.0, 0.0, 0.0], [3.0, 4.0, 0.0], [3.0, 4.0, 1.0]]))

        segments = polyline.segments()
        assert segments[0] == (WorldPoint(0.0, 0.0, 0.0), WorldPoint(3.0, 4.0, 0.0))
        assert polyline.length() == pytest.approx(6.0)
