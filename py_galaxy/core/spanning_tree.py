"""
Minimum spanning tree backbone with collision rejection.

Kruskal's algorithm over the candidate lanes: shortest first, skipping
lanes that would close a cycle or pass too close to an unrelated star.
"""

from typing import List, Sequence, Tuple

import numpy as np
import structlog

from .geometry import Edge, segment_is_clear

logger = structlog.get_logger()

AdjacencyList = List[List[int]]

MST_CLEARANCE = 25.0


class UnionFind:
    """Disjoint sets over node indices with path compression and union by rank."""

    def __init__(self, n: int):
        self.parent = list(range(n))
        self.rank = np.zeros(n, dtype=np.uint8)

    def find(self, x: int) -> int:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]

        # Compress the walked path onto the root
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]

        return root

    def union(self, x: int, y: int) -> bool:
        """Merge the sets holding x and y. Returns False if already joined."""
        root_x = self.find(x)
        root_y = self.find(y)
        if root_x == root_y:
            return False

        if self.rank[root_x] < self.rank[root_y]:
            self.parent[root_x] = root_y
        elif self.rank[root_x] > self.rank[root_y]:
            self.parent[root_y] = root_x
        else:
            self.parent[root_y] = root_x
            self.rank[root_x] += 1

        return True


def build_mst(points: np.ndarray, edges: Sequence[Edge],
              clearance: float = MST_CLEARANCE) -> Tuple[AdjacencyList, int]:
    """
    Build the spanning-tree backbone.

    Args:
        points: Array of [x, y] coordinates
        edges: Candidate edges (left unmodified)
        clearance: Minimum distance between a lane and any third star

    Returns:
        Tuple of (adjacency list, number of accepted edges). Fewer than
        n - 1 edges are accepted when collisions reject every lane into
        part of the map; connectivity repair joins the pieces later.
    """
    n = len(points)
    adjacency: AdjacencyList = [[] for _ in range(n)]
    union_find = UnionFind(n)
    target = max(n - 1, 0)

    # sorted() is stable, so equal lengths keep enumeration order
    candidates = sorted(edges, key=lambda edge: edge.length)

    accepted = 0
    rejected = 0
    for edge in candidates:
        if accepted >= target:
            break
        if union_find.find(edge.u) == union_find.find(edge.v):
            continue
        if not segment_is_clear(points, edge.u, edge.v, clearance):
            rejected += 1
            continue

        union_find.union(edge.u, edge.v)
        adjacency[edge.u].append(edge.v)
        adjacency[edge.v].append(edge.u)
        accepted += 1

    logger.info("Spanning tree built", nodes=n, candidates=len(candidates),
                accepted=accepted, collisions=rejected)
    return adjacency, accepted
