"""Tests for map dimensions and territory records."""

import numpy as np
import pytest
from py_galaxy.core.alea_prng import AleaPRNG
from py_galaxy.core.territories import Territory, build_territories, calculate_map_dimensions


class TestMapDimensions:
    """Test sizing and centering."""

    def test_bounding_box_plus_margin(self):
        """Map size is the bounding box plus the margin on each side."""
        points = np.array([[100.0, 100.0], [300.0, 200.0]])
        dims = calculate_map_dimensions(points, margin=200)

        assert dims.width == pytest.approx(600)
        assert dims.height == pytest.approx(500)
        assert (dims.offset_x, dims.offset_y) == pytest.approx((100, 100))
        np.testing.assert_allclose(points, [[200.0, 200.0], [400.0, 300.0]])

    def test_centered(self):
        """Stars are shifted so their bounding box is centered."""
        points = np.random.default_rng(2).uniform(-500, 3000, size=(40, 2))
        dims = calculate_map_dimensions(points)

        center = (points.min(axis=0) + points.max(axis=0)) / 2
        assert center == pytest.approx([dims.width / 2, dims.height / 2])
        assert points.min() >= 200 - 1e-9

    def test_single_point(self):
        """A single star sits at the margin."""
        points = np.array([[1234.0, 567.0]])
        dims = calculate_map_dimensions(points)

        assert (dims.width, dims.height) == (400.0, 400.0)
        np.testing.assert_allclose(points, [[200.0, 200.0]])

    def test_empty(self):
        """An empty map has the default size."""
        dims = calculate_map_dimensions(np.zeros((0, 2)))
        assert (dims.width, dims.height) == (2000.0, 1500.0)


class TestBuildTerritories:
    """Test territory construction."""

    def test_neighbors_cleaned(self):
        """Neighbor lists are deduplicated, sorted and loop-free."""
        points = np.array([[0.0, 0.0], [10.0, 0.0], [20.0, 0.0]])
        adjacency = [[1, 1, 0], [0, 0], []]

        territories = build_territories(points, adjacency, AleaPRNG("t"))

        assert [t.neighbors for t in territories] == [[1], [0], []]

    def test_defaults(self):
        """Territories start neutral with a small garrison."""
        points = np.array([[5.0, 6.0], [7.0, 8.0]])
        territories = build_territories(points, [[1], [0]], AleaPRNG("t"))

        for i, territory in enumerate(territories):
            assert territory.id == i
            assert territory.radius == 20
            assert territory.owner_id is None
            assert territory.is_neutral
            assert territory.is_colonizable
            assert 1 <= territory.army_size <= 10
        assert (territories[0].x, territories[0].y) == (5.0, 6.0)

    def test_army_range(self):
        """Garrisons stay inside the configured range."""
        points = np.zeros((50, 2))
        territories = build_territories(points, [[] for _ in range(50)], AleaPRNG("armies"),
                                        min_army=3, max_army=4)
        assert {t.army_size for t in territories} <= {3, 4}

    def test_json_aliases(self):
        """Territories dump with camelCase keys."""
        territory = Territory(id=0, x=1.0, y=2.0, neighbors=[1], army_size=5)
        data = territory.model_dump(by_alias=True)

        assert data["ownerId"] is None
        assert data["armySize"] == 5
        assert data["isColonizable"] is True

    def test_populate_by_alias(self):
        """Territories load from camelCase keys."""
        territory = Territory.model_validate(
            {"id": 3, "x": 0, "y": 0, "ownerId": "player-1", "armySize": 2}
        )
        assert territory.owner_id == "player-1"
        assert not territory.is_neutral

    def test_negative_army_rejected(self):
        """Negative garrisons are rejected."""
        with pytest.raises(ValueError):
            Territory(id=0, x=0, y=0, army_size=-1)
