"""
Final map assembly: map dimensions, centering, and territory records.
"""

from typing import List, NamedTuple, Optional

import numpy as np
import structlog
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .alea_prng import AleaPRNG
from .spanning_tree import AdjacencyList

logger = structlog.get_logger()

MAP_MARGIN = 200.0
EMPTY_MAP_WIDTH = 2000.0
EMPTY_MAP_HEIGHT = 1500.0
TERRITORY_RADIUS = 20.0


class MapDimensions(NamedTuple):
    """Map size and the offset applied to center the stars."""
    width: float
    height: float
    offset_x: float
    offset_y: float


class Territory(BaseModel):
    """A star system: the unit of ownership in a match.

    The topology fields are fixed at generation time. Game code only ever
    changes ``owner_id`` and ``army_size``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int = Field(description="Territory id, equal to its index in the map")
    x: float = Field(description="Centered x coordinate")
    y: float = Field(description="Centered y coordinate")
    radius: float = Field(default=TERRITORY_RADIUS, description="Display radius")
    neighbors: List[int] = Field(
        default_factory=list, description="Ids of territories joined by a warp lane"
    )
    owner_id: Optional[str] = Field(default=None, description="Owning player, None if neutral")
    army_size: int = Field(default=0, ge=0, description="Garrison strength")
    is_colonizable: bool = Field(
        default=True, description="Neutral star that must be colonized by probe"
    )

    @property
    def is_neutral(self) -> bool:
        return self.owner_id is None


def calculate_map_dimensions(points: np.ndarray, margin: float = MAP_MARGIN) -> MapDimensions:
    """
    Size the map around the stars and center them, in place.

    The map is the bounding box plus ``margin`` on every side; stars are
    shifted so the bounding-box center lands on the map center.

    Args:
        points: Array of [x, y] coordinates, shifted in place
        margin: Empty border around the outermost stars

    Returns:
        MapDimensions with the applied offset
    """
    if len(points) == 0:
        return MapDimensions(EMPTY_MAP_WIDTH, EMPTY_MAP_HEIGHT, 0.0, 0.0)

    min_x, min_y = points.min(axis=0)
    max_x, max_y = points.max(axis=0)

    width = float(max_x - min_x + margin * 2)
    height = float(max_y - min_y + margin * 2)

    offset_x = float(width / 2 - (min_x + max_x) / 2)
    offset_y = float(height / 2 - (min_y + max_y) / 2)
    points += (offset_x, offset_y)

    logger.info("Map dimensions calculated", width=round(width, 1), height=round(height, 1),
                offset_x=round(offset_x, 1), offset_y=round(offset_y, 1))
    return MapDimensions(width, height, offset_x, offset_y)


def build_territories(points: np.ndarray, adjacency: AdjacencyList, prng: AleaPRNG,
                      radius: float = TERRITORY_RADIUS, min_army: int = 1,
                      max_army: int = 10) -> List[Territory]:
    """
    Materialise territory records from centered points and lanes.

    Neighbor lists are deduplicated, sorted, and stripped of self-loops.
    Every territory starts neutral with a random garrison in
    [min_army, max_army].
    """
    territories = []
    for i, (x, y) in enumerate(points):
        neighbors = sorted({n for n in adjacency[i] if n != i})
        territories.append(
            Territory(
                id=i,
                x=float(x),
                y=float(y),
                radius=radius,
                neighbors=neighbors,
                army_size=prng.randint(min_army, max_army),
            )
        )
    return territories
