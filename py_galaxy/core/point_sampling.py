"""
Initial star placement for each galaxy layout.

Every layout is an independent sampling strategy sharing one signature:

    sampler(count, width, height, num_players, prng) -> list of (x, y)

``sample_points`` looks the strategy up in ``LAYOUT_SAMPLERS`` and returns a
float64 array of shape (n, 2). All randomness comes from the injected PRNG.
"""

import math
from enum import Enum
from typing import Callable, Dict, List, Tuple

import numpy as np
import structlog

from .alea_prng import AleaPRNG

logger = structlog.get_logger()

PointList = List[Tuple[float, float]]

# Canvas sizing: a reference map of 80 territories is sampled on 2400x1800
BASE_CANVAS_WIDTH = 2400.0
BASE_CANVAS_HEIGHT = 1800.0
REFERENCE_MAP_SIZE = 80

ORGANIC_SPACING_FACTOR = 0.4
ORGANIC_MAX_ATTEMPTS = 50
ORGANIC_BACKFILL_SPACING = 0.7


class Layout(str, Enum):
    """Named galaxy shapes."""

    ORGANIC = "organic"
    CLUSTERS = "clusters"
    SPIRAL = "spiral"
    CORE = "core"
    RINGS = "rings"
    BINARY = "binary"

    @classmethod
    def parse(cls, value) -> "Layout":
        """Accept a Layout or its (case-insensitive) string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            valid = ", ".join(layout.value for layout in cls)
            raise ValueError(
                f"Unknown layout {value!r}, expected one of: {valid}"
            ) from None


def get_canvas_size(
    map_size: int,
    base_width: float = BASE_CANVAS_WIDTH,
    base_height: float = BASE_CANVAS_HEIGHT,
    reference_size: int = REFERENCE_MAP_SIZE,
) -> Tuple[float, float]:
    """Scale the sampling canvas so star density stays constant with map size."""
    scale = math.sqrt(max(map_size, 0) / reference_size)
    return base_width * scale, base_height * scale


def sample_clusters(
    count: int, width: float, height: float, num_players: int, prng: AleaPRNG
) -> PointList:
    """Stellar clusters, one per player plus two, kept apart from each other."""
    num_clusters = max(3, min(num_players + 2, 8))
    min_separation = min(width, height) * 0.3
    centers: PointList = []

    for _ in range(num_clusters):
        for _attempt in range(20):
            center = (
                prng.random() * width * 0.7 + width * 0.15,
                prng.random() * height * 0.7 + height * 0.15,
            )
            if all(
                math.hypot(cx - center[0], cy - center[1]) >= min_separation
                for cx, cy in centers
            ):
                break
        centers.append(center)

    points = []
    for i in range(count):
        cx, cy = centers[i % num_clusters]
        angle = prng.angle()
        distance = math.sqrt(prng.random()) * 250 + 50
        points.append((cx + distance * math.cos(angle), cy + distance * math.sin(angle)))

    return points


def sample_spiral(
    count: int, width: float, height: float, num_players: int, prng: AleaPRNG
) -> PointList:
    """Four arms winding three full turns out from the center."""
    arms = 4
    center_x, center_y = width / 2, height / 2
    max_radius = min(width, height) * 0.4

    points = []
    for i in range(count):
        arm = i % arms
        progress = i / count
        angle = arm * 2 * math.pi / arms + progress * 6 * math.pi
        radius = 80 + progress * max_radius

        radius += prng.uniform(-30, 30)
        angle += prng.uniform(-0.25, 0.25)

        points.append(
            (center_x + radius * math.cos(angle), center_y + radius * math.sin(angle))
        )

    return points


def sample_core(
    count: int, width: float, height: float, num_players: int, prng: AleaPRNG
) -> PointList:
    """Dense core thinning towards the rim."""
    center_x, center_y = width / 2, height / 2
    max_radius = min(width, height) * 0.45

    points = []
    for _ in range(count):
        radius = math.pow(prng.random(), 0.6) * max_radius
        angle = prng.angle()
        points.append(
            (center_x + radius * math.cos(angle), center_y + radius * math.sin(angle))
        )

    return points


def ring_count(count: int) -> int:
    """Number of concentric rings used for ``count`` stars."""
    return max(4, math.ceil(count / 20))


def sample_rings(
    count: int, width: float, height: float, num_players: int, prng: AleaPRNG
) -> PointList:
    """Concentric rings, stars dealt round-robin with +-20 radial jitter."""
    center_x, center_y = width / 2, height / 2
    rings = ring_count(count)
    max_radius = min(width, height) * 0.45

    points = []
    for i in range(count):
        ring = i % rings
        radius = (ring + 1) * (max_radius / rings) + prng.uniform(-20, 20)
        angle = prng.angle()
        points.append(
            (center_x + radius * math.cos(angle), center_y + radius * math.sin(angle))
        )

    return points


def sample_binary(
    count: int, width: float, height: float, num_players: int, prng: AleaPRNG
) -> PointList:
    """Two large systems either side of the map center."""
    separation = width * 0.4
    centers = [
        (width / 2 - separation, height / 2),
        (width / 2 + separation, height / 2),
    ]

    points = []
    for i in range(count):
        cx, cy = centers[i % 2]
        angle = prng.angle()
        radius = math.sqrt(prng.random()) * 300 + 80
        points.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))

    return points


def organic_min_distance(
    width: float, height: float, count: int, spacing: float = ORGANIC_SPACING_FACTOR
) -> float:
    """Target spacing between stars in the organic layout."""
    return math.sqrt((width * height) / count) * spacing


class OrganicSampler:
    """
    Poisson-disk style growth inside an irregular galaxy outline.

    Stars grow outwards from a seed near the center using an active list
    (Bridson). Whatever the active list cannot place is backfilled by
    density-weighted rejection sampling, then by plain random placement.
    One instance serves a single sampling run.
    """

    def __init__(self, count: int, width: float, height: float, prng: AleaPRNG,
                 spacing: float = ORGANIC_SPACING_FACTOR,
                 max_attempts: int = ORGANIC_MAX_ATTEMPTS):
        self.count = count
        self.width = width
        self.height = height
        self.prng = prng
        self.max_attempts = max_attempts
        self.center_x = width / 2
        self.center_y = height / 2
        self.base_radius = min(width, height) * 0.42
        self.min_distance = organic_min_distance(width, height, count, spacing)

    def sample(self) -> PointList:
        prng = self.prng
        points: PointList = [
            (
                self.center_x + (prng.random() - 0.5) * 100,
                self.center_y + (prng.random() - 0.5) * 100,
            )
        ]
        density_clusters = self._density_clusters()

        self._grow(points)
        grown = len(points)

        self._backfill_by_density(points, density_clusters)
        backfilled = len(points) - grown

        self._backfill_random(points)

        logger.debug(
            "Organic sampling complete",
            grown=grown,
            backfilled=backfilled,
            random=len(points) - grown - backfilled,
            min_distance=round(self.min_distance, 2),
        )
        return points

    def boundary_radius(self, angle: float) -> float:
        """Galaxy edge distance for a polar angle."""
        roughness = (
            math.sin(angle * 3) * 0.15
            + math.sin(angle * 7) * 0.08
            + math.sin(angle * 13) * 0.05
            + math.sin(angle * 19) * 0.03
        )
        return self.base_radius * (1 + roughness)

    def within_galaxy(self, x: float, y: float) -> bool:
        dx = x - self.center_x
        dy = y - self.center_y
        fuzziness = self.prng.uniform(-0.05, 0.05)
        return math.hypot(dx, dy) <= self.boundary_radius(math.atan2(dy, dx)) * (1 + fuzziness)

    def _density_clusters(self) -> List[dict]:
        clusters = []
        for _ in range(self.count // 15 + 3):
            angle = self.prng.angle()
            distance = self.prng.random() * min(self.width, self.height) * 0.3
            x = self.center_x + distance * math.cos(angle)
            y = self.center_y + distance * math.sin(angle)
            if self.within_galaxy(x, y):
                clusters.append({
                    "x": x,
                    "y": y,
                    "strength": 0.3 + self.prng.random() * 0.4,
                    "radius": 100 + self.prng.random() * 150,
                })
        return clusters

    @staticmethod
    def _far_enough(points: PointList, x: float, y: float, distance: float) -> bool:
        return all(math.hypot(px - x, py - y) >= distance for px, py in points)

    def _random_canvas_point(self) -> Tuple[float, float]:
        return (
            self.center_x + (self.prng.random() - 0.5) * self.width * 0.8,
            self.center_y + (self.prng.random() - 0.5) * self.height * 0.8,
        )

    def _grow(self, points: PointList) -> None:
        prng = self.prng
        active = [0]

        while active and len(points) < self.count:
            slot = int(prng.random() * len(active))
            ax, ay = points[active[slot]]

            for _ in range(self.max_attempts):
                angle = prng.angle()
                radius = self.min_distance * (1 + prng.random())
                x = ax + radius * math.cos(angle)
                y = ay + radius * math.sin(angle)

                if not self.within_galaxy(x, y):
                    continue
                if self._far_enough(points, x, y, self.min_distance):
                    points.append((x, y))
                    active.append(len(points) - 1)
                    break
            else:
                active.pop(slot)

    def _backfill_by_density(self, points: PointList, clusters: List[dict]) -> None:
        prng = self.prng
        spacing = self.min_distance * ORGANIC_BACKFILL_SPACING
        core_scale = min(self.width, self.height) * 0.2

        attempts = 0
        while len(points) < self.count and attempts < self.count * 10:
            attempts += 1
            x, y = self._random_canvas_point()

            if not self.within_galaxy(x, y):
                continue

            probability = 0.3
            for cluster in clusters:
                d = math.hypot(x - cluster["x"], y - cluster["y"])
                if d < cluster["radius"]:
                    probability += cluster["strength"] * math.exp(-d / cluster["radius"])

            d_center = math.hypot(x - self.center_x, y - self.center_y)
            probability += math.exp(-d_center / core_scale) * 0.4

            if prng.random() > probability:
                continue
            if self._far_enough(points, x, y, spacing):
                points.append((x, y))

    def _backfill_random(self, points: PointList) -> None:
        attempts = 0
        while len(points) < self.count and attempts < self.count * 10:
            attempts += 1
            x, y = self._random_canvas_point()
            if self.within_galaxy(x, y):
                points.append((x, y))


def sample_organic(
    count: int, width: float, height: float, num_players: int, prng: AleaPRNG,
    spacing: float = ORGANIC_SPACING_FACTOR,
) -> PointList:
    """Irregular, evenly spaced galaxy grown from its center."""
    return OrganicSampler(count, width, height, prng, spacing=spacing).sample()


Sampler = Callable[[int, float, float, int, AleaPRNG], PointList]

LAYOUT_SAMPLERS: Dict[Layout, Sampler] = {
    Layout.ORGANIC: sample_organic,
    Layout.CLUSTERS: sample_clusters,
    Layout.SPIRAL: sample_spiral,
    Layout.CORE: sample_core,
    Layout.RINGS: sample_rings,
    Layout.BINARY: sample_binary,
}


def sample_points(
    count: int,
    layout: Layout,
    width: float,
    height: float,
    num_players: int,
    prng: AleaPRNG,
    organic_spacing: float = ORGANIC_SPACING_FACTOR,
) -> np.ndarray:
    """
    Place ``count`` stars for the given layout.

    Args:
        count: Requested number of stars
        layout: Galaxy layout
        width: Sampling canvas width
        height: Sampling canvas height
        num_players: Player count (drives the number of clusters)
        prng: Run PRNG
        organic_spacing: Spacing factor for the organic layout

    Returns:
        Array of [x, y] coordinates. The organic layout may return fewer
        than ``count`` rows when its attempt budget runs out.
    """
    layout = Layout.parse(layout)
    if count <= 0:
        return np.zeros((0, 2), dtype=np.float64)

    if layout is Layout.ORGANIC:
        points = sample_organic(count, width, height, num_players, prng,
                                spacing=organic_spacing)
    else:
        points = LAYOUT_SAMPLERS[layout](count, width, height, num_players, prng)

    if len(points) < count:
        logger.warning(
            "Sampling fell short of requested star count",
            layout=layout.value,
            requested=count,
            placed=len(points),
        )

    return np.array(points, dtype=np.float64).reshape(-1, 2)
