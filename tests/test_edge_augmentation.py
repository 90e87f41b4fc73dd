"""Tests for extra lane augmentation."""

import numpy as np
from py_galaxy.core.edge_augmentation import augment_edges
from py_galaxy.core.geometry import make_edge
from py_galaxy.core.spanning_tree import build_mst
from py_galaxy.core.triangulation import triangulate

SQUARE = np.array([[0.0, 0.0], [100.0, 0.0], [100.0, 100.0], [0.0, 100.0]])


def square_candidates():
    pairs = [(0, 1), (1, 2), (2, 3), (0, 3), (0, 2)]
    return [make_edge(SQUARE, a, b) for a, b in pairs]


def chain_adjacency():
    return [[1], [0, 2], [1, 3], [2]]


class TestAugmentEdges:
    """Test extra lane selection."""

    def test_adds_shortest_unused_lane(self):
        """The shortest unused candidate is added to both endpoints."""
        adjacency = chain_adjacency()
        added = augment_edges(SQUARE, adjacency, square_candidates(), fraction=0.25)

        assert added == 1
        assert 3 in adjacency[0]
        assert 0 in adjacency[3]

    def test_respects_max_length(self):
        """Candidates longer than the limit are skipped."""
        adjacency = chain_adjacency()
        added = augment_edges(SQUARE, adjacency, square_candidates(), fraction=0.5,
                              max_length=120)

        # The diagonal is 141 long, so only the closing side qualifies
        assert added == 1
        assert 2 not in adjacency[0]

    def test_limit_by_fraction(self):
        """At most floor(n * fraction) lanes are added."""
        adjacency = chain_adjacency()
        added = augment_edges(SQUARE, adjacency, square_candidates(), fraction=0.5,
                              max_length=200)
        assert added == 2

    def test_fraction_below_one_lane(self):
        """A fraction too small for one lane adds nothing."""
        adjacency = chain_adjacency()
        assert augment_edges(SQUARE, adjacency, square_candidates(), fraction=0.12) == 0
        assert adjacency == chain_adjacency()

    def test_rejects_collisions(self):
        """Candidates passing too close to a star are skipped."""
        points = np.array([[0.0, 0.0], [100.0, 0.0], [50.0, 5.0], [50.0, 200.0]])
        adjacency = [[2], [2], [0, 1, 3], [2]]
        candidates = [make_edge(points, 0, 1)]

        added = augment_edges(points, adjacency, candidates, fraction=1.0, clearance=20)
        assert added == 0

    def test_never_duplicates_existing_lanes(self):
        """Augmented lanes stay unique, symmetric and loop-free."""
        points = np.random.default_rng(9).uniform(0, 1500, size=(80, 2))
        candidates = triangulate(points)
        adjacency, _ = build_mst(points, candidates)

        added = augment_edges(points, adjacency, candidates)

        assert added <= int(80 * 0.12)
        for a, neighbors in enumerate(adjacency):
            assert len(neighbors) == len(set(neighbors))
            assert a not in neighbors
            for b in neighbors:
                assert a in adjacency[b]
