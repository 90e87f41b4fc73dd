"""Tests for candidate lane triangulation."""

import numpy as np
import pytest
from py_galaxy.core.geometry import make_edge, segment_clearances, segment_is_clear
from py_galaxy.core.triangulation import (
    TriangulationError, all_pairs_edges, edges_from_triangles, triangulate
)


class FailingTriangulator:
    def triangles(self, points):
        raise TriangulationError("backend unavailable")


class FixedTriangulator:
    def __init__(self, triangles):
        self._triangles = np.asarray(triangles)

    def triangles(self, points):
        return self._triangles


class TestGeometry:
    """Test edge and clearance helpers."""

    def test_make_edge_canonical(self):
        """Edges are stored with u < v and their length."""
        points = np.array([[0.0, 0.0], [3.0, 4.0]])
        edge = make_edge(points, 1, 0)
        assert (edge.u, edge.v) == (0, 1)
        assert edge.length == pytest.approx(5.0)

    def test_clearance_projects_onto_segment(self):
        """Distances use the projection clamped to the segment."""
        points = np.array([[0.0, 0.0], [100.0, 0.0], [50.0, 10.0], [-30.0, 40.0]])
        distances = segment_clearances(points, 0, 1)

        assert distances[2] == pytest.approx(10.0)
        # Beyond the endpoint, distance is to the endpoint itself
        assert distances[3] == pytest.approx(50.0)

    def test_segment_is_clear(self):
        """Clearance depends on the threshold."""
        points = np.array([[0.0, 0.0], [100.0, 0.0], [50.0, 10.0]])
        assert not segment_is_clear(points, 0, 1, clearance=25)
        assert segment_is_clear(points, 0, 1, clearance=5)

    def test_endpoints_do_not_block(self):
        """A lane's own endpoints never block it."""
        points = np.array([[0.0, 0.0], [100.0, 0.0], [500.0, 500.0]])
        assert segment_is_clear(points, 0, 1, clearance=25)

    def test_zero_clearance_always_clear(self):
        """Zero clearance accepts every lane."""
        points = np.array([[0.0, 0.0], [100.0, 0.0], [50.0, 0.0]])
        assert segment_is_clear(points, 0, 1, clearance=0)


class TestTriangulate:
    """Test triangulation and its fallbacks."""

    def test_quadrilateral(self):
        """Four stars give five unique lanes."""
        points = np.array([[0.0, 0.0], [100.0, 0.0], [100.0, 100.0], [0.0, 110.0]])
        edges = triangulate(points)

        assert len(edges) == 5
        assert all(edge.u < edge.v for edge in edges)
        assert len({(edge.u, edge.v) for edge in edges}) == 5

    def test_lengths(self):
        """Lanes carry their Euclidean lengths."""
        points = np.array([[0.0, 0.0], [30.0, 0.0], [0.0, 40.0]])
        lengths = sorted(edge.length for edge in triangulate(points))
        assert lengths == pytest.approx([30.0, 40.0, 50.0])

    def test_two_points(self):
        """Two stars fall back to their single pair."""
        edges = triangulate(np.array([[0.0, 0.0], [10.0, 0.0]]))
        assert [(e.u, e.v) for e in edges] == [(0, 1)]

    def test_empty_and_single(self):
        """Fewer than two stars give no lanes."""
        assert triangulate(np.zeros((0, 2))) == []
        assert triangulate(np.array([[1.0, 1.0]])) == []

    def test_collinear_falls_back_to_all_pairs(self):
        """Collinear stars fall back to every pair."""
        points = np.array([[0.0, 0.0], [10.0, 0.0], [20.0, 0.0], [30.0, 0.0]])
        edges = triangulate(points)
        assert len(edges) == 6

    def test_backend_failure_falls_back_to_all_pairs(self):
        """A failing backend falls back to every pair."""
        points = np.array([[0.0, 0.0], [100.0, 0.0], [100.0, 100.0], [0.0, 110.0]])
        edges = triangulate(points, FailingTriangulator())
        assert [(e.u, e.v) for e in edges] == [(e.u, e.v) for e in all_pairs_edges(points)]

    def test_custom_backend(self):
        """A custom backend's triangles are used as given."""
        points = np.array([[0.0, 0.0], [100.0, 0.0], [100.0, 100.0], [0.0, 110.0]])
        edges = triangulate(points, FixedTriangulator([[0, 1, 2], [0, 2, 3]]))
        assert [(e.u, e.v) for e in edges] == [(0, 1), (1, 2), (0, 2), (2, 3), (0, 3)]

    def test_shared_edges_deduplicated(self):
        """Edges shared by triangles appear once."""
        points = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])
        edges = edges_from_triangles(points, np.array([[0, 1, 2], [2, 1, 0]]))
        assert len(edges) == 3

    def test_random_cloud_is_planar_sized(self):
        """A Delaunay triangulation has at most 3n - 6 edges."""
        points = np.random.default_rng(3).uniform(0, 1000, size=(60, 2))
        edges = triangulate(points)
        assert 60 - 1 <= len(edges) <= 3 * 60 - 6
