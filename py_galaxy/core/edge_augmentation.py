"""Extra short lanes on top of the spanning tree for strategic redundancy."""

import math
from typing import Sequence

import numpy as np
import structlog

from .geometry import Edge, segment_is_clear
from .spanning_tree import AdjacencyList

logger = structlog.get_logger()

EXTRA_EDGE_FRACTION = 0.12
MAX_EXTRA_EDGE_LENGTH = 200.0
EXTRA_EDGE_CLEARANCE = 20.0


def augment_edges(points: np.ndarray, adjacency: AdjacencyList, edges: Sequence[Edge],
                  fraction: float = EXTRA_EDGE_FRACTION,
                  max_length: float = MAX_EXTRA_EDGE_LENGTH,
                  clearance: float = EXTRA_EDGE_CLEARANCE) -> int:
    """
    Add up to ``floor(n * fraction)`` unused candidate lanes, shortest first.

    Args:
        points: Array of [x, y] coordinates
        adjacency: Adjacency list, extended in place
        edges: Candidate edges from triangulation
        fraction: Extra lanes allowed per star
        max_length: Longer candidates are never added
        clearance: Minimum distance between a lane and any third star

    Returns:
        Number of lanes added
    """
    limit = math.floor(len(points) * fraction)
    if limit <= 0:
        return 0

    used = {
        (min(a, b), max(a, b))
        for a, neighbors in enumerate(adjacency)
        for b in neighbors
    }

    added = 0
    for edge in sorted(edges, key=lambda e: e.length):
        if added >= limit:
            break
        if (edge.u, edge.v) in used or edge.length > max_length:
            continue
        if not segment_is_clear(points, edge.u, edge.v, clearance):
            continue

        adjacency[edge.u].append(edge.v)
        adjacency[edge.v].append(edge.u)
        used.add((edge.u, edge.v))
        added += 1

    logger.info("Extra lanes added", added=added, limit=limit)
    return added
