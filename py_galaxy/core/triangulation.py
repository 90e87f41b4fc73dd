"""
Delaunay triangulation of star positions into candidate lanes.

The triangulation primitive is pluggable: anything with a
``triangles(points) -> int array of shape (k, 3)`` method will do. The
default wraps ``scipy.spatial.Delaunay``. When the primitive cannot run
(fewer than 3 stars, collinear input, backend errors) every pair of stars
becomes a candidate instead, so later stages always have something to work
with.
"""

from itertools import combinations
from typing import List, Optional, Protocol, Set, Tuple

import numpy as np
import structlog
from scipy.spatial import Delaunay, QhullError

from .geometry import Edge, make_edge

logger = structlog.get_logger()


class TriangulationError(Exception):
    """Raised by triangulation backends that cannot triangulate their input."""


class Triangulator(Protocol):
    """Anything that turns a point set into triangle index triples."""

    def triangles(self, points: np.ndarray) -> np.ndarray:
        ...


class ScipyDelaunayTriangulator:
    """Qhull-backed Delaunay triangulation."""

    def triangles(self, points: np.ndarray) -> np.ndarray:
        return Delaunay(points).simplices


def edges_from_triangles(points: np.ndarray, triangles: np.ndarray) -> List[Edge]:
    """
    Extract the unique undirected edges of a triangle list.

    Edges come out in first-seen order, each with its Euclidean length.
    """
    seen: Set[Tuple[int, int]] = set()
    edges = []
    for triangle in triangles:
        for i in range(3):
            a, b = int(triangle[i]), int(triangle[(i + 1) % 3])
            key = (min(a, b), max(a, b))
            if key in seen or a == b:
                continue
            seen.add(key)
            edges.append(make_edge(points, *key))
    return edges


def all_pairs_edges(points: np.ndarray) -> List[Edge]:
    """Every pair of points as a candidate edge."""
    return [make_edge(points, a, b) for a, b in combinations(range(len(points)), 2)]


def triangulate(points: np.ndarray,
                triangulator: Optional[Triangulator] = None) -> List[Edge]:
    """
    Compute candidate lanes for a star set.

    Args:
        points: Array of [x, y] coordinates
        triangulator: Triangulation backend (scipy Delaunay by default)

    Returns:
        List of unique edges with lengths
    """
    if len(points) < 3:
        logger.warning("Not enough points for triangulation, using all pairs",
                       points=len(points))
        return all_pairs_edges(points)

    triangulator = triangulator or ScipyDelaunayTriangulator()
    try:
        triangles = triangulator.triangles(points)
    except (QhullError, ValueError, TriangulationError) as e:
        logger.warning("Triangulation failed, using all pairs",
                       points=len(points), error=str(e))
        return all_pairs_edges(points)

    edges = edges_from_triangles(points, triangles)
    logger.info("Triangulation complete", triangles=len(triangles), edges=len(edges))
    return edges
