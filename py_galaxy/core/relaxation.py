"""
Force-directed relaxation of star positions.

Every pair of stars repels with an inverse-square force. A few damped,
clamped iterations break up clumps left by sampling without changing the
overall galaxy shape. The all-pairs step is O(n^2) per iteration, which is
the scaling limit for very large maps.
"""

from typing import Optional, Tuple

import numpy as np
import structlog

from .point_sampling import Layout

logger = structlog.get_logger()

REPULSION_STRENGTH = 2000.0
DAMPING = 0.8
MAX_STEP = 15.0
MIN_PAIR_DISTANCE = 0.1
BOUNDARY_MARGIN = 50.0
MIN_SEPARATION = 1.0
SEPARATION_STEP = 2.0


def relaxation_iterations(layout: Layout) -> int:
    """Organic galaxies get a few extra passes."""
    return 8 if Layout.parse(layout) is Layout.ORGANIC else 5


def repulsion_forces(points: np.ndarray, strength: float = REPULSION_STRENGTH,
                     min_distance: float = MIN_PAIR_DISTANCE) -> np.ndarray:
    """
    Net repulsive force on every point.

    Each pair contributes ``strength / d^2`` along the line joining them;
    pairs closer than ``min_distance`` are ignored.

    Args:
        points: Array of [x, y] coordinates, shape (n, 2)

    Returns:
        Array of [fx, fy] forces, shape (n, 2)
    """
    diff = points[:, np.newaxis, :] - points[np.newaxis, :, :]
    distance = np.hypot(diff[..., 0], diff[..., 1])

    # Pairs below min_distance, including each point with itself, contribute nothing
    usable = distance >= min_distance
    scale = np.zeros_like(distance)
    scale[usable] = strength / distance[usable] ** 3

    return (diff * scale[..., np.newaxis]).sum(axis=1)


def separate_coincident(points: np.ndarray, x_bounds: Tuple[float, float],
                        y_bounds: Tuple[float, float],
                        min_distance: float = MIN_SEPARATION,
                        step: float = SEPARATION_STEP) -> int:
    """
    Nudge stars that sit almost on top of another star, in place.

    Repulsion ignores pairs closer than ``MIN_PAIR_DISTANCE``, so stars clamped
    onto the same spot would otherwise never part. The later star of each such pair
    moves towards the canvas center by ``step`` per axis, scaled by its rank
    among the moved stars so that several stacked stars fan out.

    Returns:
        Number of stars moved
    """
    diff = points[:, np.newaxis, :] - points[np.newaxis, :, :]
    distance = np.hypot(diff[..., 0], diff[..., 1])
    close = np.triu(distance < min_distance, k=1)
    movers = np.unique(np.nonzero(close)[1])
    if len(movers) == 0:
        return 0

    center = np.array([sum(x_bounds) / 2, sum(y_bounds) / 2])
    for rank, index in enumerate(movers, start=1):
        direction = np.where(points[index] <= center, 1.0, -1.0)
        points[index] += direction * step * rank

    np.clip(points[:, 0], *x_bounds, out=points[:, 0])
    np.clip(points[:, 1], *y_bounds, out=points[:, 1])
    return len(movers)


def relax_points(points: np.ndarray, layout: Layout, width: float, height: float,
                 iterations: Optional[int] = None, strength: float = REPULSION_STRENGTH,
                 damping: float = DAMPING, max_step: float = MAX_STEP,
                 margin: float = BOUNDARY_MARGIN) -> np.ndarray:
    """
    Spread stars apart in place.

    Args:
        points: Array of [x, y] coordinates, modified in place
        layout: Galaxy layout (selects the iteration count)
        width: Sampling canvas width
        height: Sampling canvas height
        iterations: Override the layout's iteration count
        strength: Repulsion constant
        damping: Multiplier applied to the net force
        max_step: Per-axis clamp on each move
        margin: Distance kept from the canvas edges

    Returns:
        The same array, for chaining
    """
    if iterations is None:
        iterations = relaxation_iterations(layout)
    if len(points) < 2:
        return points

    x_bounds = (min(margin, width / 2), max(width - margin, width / 2))
    y_bounds = (min(margin, height / 2), max(height - margin, height / 2))

    separated = 0
    for _ in range(iterations):
        step = np.clip(repulsion_forces(points, strength) * damping, -max_step, max_step)
        points += step
        np.clip(points[:, 0], *x_bounds, out=points[:, 0])
        np.clip(points[:, 1], *y_bounds, out=points[:, 1])
        separated += separate_coincident(points, x_bounds, y_bounds)

    logger.debug("Relaxation complete", points=len(points), iterations=iterations,
                 separated=separated)
    return points
