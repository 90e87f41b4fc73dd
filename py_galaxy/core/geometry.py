"""Shared geometry helpers for lane construction."""

from typing import NamedTuple

import numpy as np


class Edge(NamedTuple):
    """Undirected candidate lane, canonicalised so that ``u < v``."""
    u: int
    v: int
    length: float


def make_edge(points: np.ndarray, a: int, b: int) -> Edge:
    """Build a canonical edge between two point indices."""
    u, v = (a, b) if a < b else (b, a)
    length = float(np.hypot(*(points[u] - points[v])))
    return Edge(u, v, length)


def segment_clearances(points: np.ndarray, u: int, v: int) -> np.ndarray:
    """
    Distance from every point to the segment ``points[u] -> points[v]``.

    Each point is projected onto the segment with the projection parameter
    clamped to [0, 1]. Endpoints are included (their distance is 0).
    """
    a = points[u]
    ab = points[v] - a
    length_sq = float(ab @ ab)
    if length_sq == 0.0:
        offsets = points - a
        return np.hypot(offsets[:, 0], offsets[:, 1])

    t = np.clip((points - a) @ ab / length_sq, 0.0, 1.0)
    closest = a + t[:, np.newaxis] * ab
    offsets = points - closest
    return np.hypot(offsets[:, 0], offsets[:, 1])


def segment_is_clear(points: np.ndarray, u: int, v: int, clearance: float) -> bool:
    """
    True when no third point lies within ``clearance`` of the segment u-v.

    A lane that passes closer than ``clearance`` to an unrelated star would
    appear to run through it.
    """
    if clearance <= 0 or len(points) <= 2:
        return True
    if np.array_equal(points[u], points[v]):
        return True

    offsets = segment_clearances(points, u, v)
    offsets[[u, v]] = np.inf
    return bool(np.all(offsets * offsets >= clearance * clearance))
