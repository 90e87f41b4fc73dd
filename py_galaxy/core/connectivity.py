"""
Connectivity repair.

Every territory must be reachable from every other one. Components left
disconnected by collision rejection are bridged to the main component by
their closest pair of stars.
"""

from collections import deque
from typing import List, Optional, Tuple

import numpy as np
import structlog

from .geometry import segment_is_clear
from .spanning_tree import AdjacencyList

logger = structlog.get_logger()


class ConnectivityError(RuntimeError):
    """The lane graph still has several components after repair."""


def find_components(adjacency: AdjacencyList) -> List[List[int]]:
    """
    Partition nodes into connected components with BFS.

    Components are returned in discovery order, so the component holding
    node 0 comes first.
    """
    visited = [False] * len(adjacency)
    components = []

    for start in range(len(adjacency)):
        if visited[start]:
            continue

        component = []
        queue = deque([start])
        visited[start] = True
        while queue:
            current = queue.popleft()
            component.append(current)
            for neighbor in adjacency[current]:
                if not visited[neighbor]:
                    visited[neighbor] = True
                    queue.append(neighbor)

        components.append(component)

    return components


def count_connected_components(adjacency: AdjacencyList) -> int:
    """Count components with an iterative DFS."""
    visited = [False] * len(adjacency)
    count = 0

    for start in range(len(adjacency)):
        if visited[start]:
            continue
        count += 1
        stack = [start]
        while stack:
            current = stack.pop()
            if visited[current]:
                continue
            visited[current] = True
            stack.extend(n for n in adjacency[current] if not visited[n])

    return count


def closest_pair(points: np.ndarray, main: List[int], other: List[int],
                 clearance: Optional[float] = None) -> Tuple[int, int, float]:
    """
    Pick the bridge between two components.

    Without ``clearance`` this is the closest pair (a in main, b in other).
    With it, the closest pair whose segment keeps ``clearance`` from every
    unrelated star wins; if no pair is clear the closest pair is used anyway.

    Returns:
        Tuple of (a, b, distance)
    """
    main_idx = np.asarray(main)
    other_idx = np.asarray(other)
    diff = points[main_idx][:, np.newaxis, :] - points[other_idx][np.newaxis, :, :]
    distances = np.hypot(diff[..., 0], diff[..., 1])

    # Stable sort keeps main-then-other enumeration order between ties
    order = np.argsort(distances, axis=None, kind="stable")
    best = np.unravel_index(order[0], distances.shape)

    if clearance:
        for flat in order:
            i, j = np.unravel_index(flat, distances.shape)
            if segment_is_clear(points, int(main_idx[i]), int(other_idx[j]), clearance):
                best = (i, j)
                break
        else:
            logger.warning("No clear bridge between components, using closest pair",
                           main_size=len(main), other_size=len(other))

    i, j = best
    return int(main_idx[i]), int(other_idx[j]), float(distances[i, j])


def repair_connectivity(points: np.ndarray, adjacency: AdjacencyList,
                        clearance: Optional[float] = None) -> int:
    """
    Bridge every component into the main one.

    Args:
        points: Array of [x, y] coordinates
        adjacency: Adjacency list, extended in place
        clearance: Optional lane clearance preferred for bridges

    Returns:
        Number of bridge lanes added

    Raises:
        ConnectivityError: If the graph is still split after repair
    """
    components = find_components(adjacency)
    logger.info("Checking galaxy connectivity", components=len(components))

    bridges = 0
    if len(components) > 1:
        main = list(components[0])
        for other in components[1:]:
            a, b, distance = closest_pair(points, main, other, clearance)
            adjacency[a].append(b)
            adjacency[b].append(a)
            main.extend(other)
            bridges += 1
            logger.info("Bridged component", u=a, v=b, distance=round(distance, 1),
                        component_size=len(other))

    remaining = count_connected_components(adjacency)
    if remaining > 1:
        logger.error("Galaxy still disconnected after repair", components=remaining)
        raise ConnectivityError(
            f"{remaining} disconnected components remain after connectivity repair"
        )

    return bridges
