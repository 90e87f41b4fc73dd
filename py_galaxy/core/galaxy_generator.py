"""
Galaxy map generation pipeline.

Stages, in order:

1. Sample initial star positions for the chosen layout
2. Relax them with pairwise repulsion
3. Delaunay-triangulate into candidate lanes
4. Keep a minimum spanning tree of lanes that do not clip other stars
5. Add a few extra short lanes
6. Bridge any disconnected components
7. Size the map and center the stars
8. Emit territory records

Each call owns its PRNG and data. Nothing is stored at module level, so
independent maps can be generated concurrently.
"""

from typing import List, NamedTuple, Optional, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from ..utils.random import Seed, create_prng
from .connectivity import repair_connectivity
from .edge_augmentation import augment_edges
from .point_sampling import Layout, get_canvas_size, sample_points
from .relaxation import relax_points
from .spanning_tree import build_mst
from .territories import Territory, build_territories, calculate_map_dimensions
from .triangulation import Triangulator, triangulate

logger = structlog.get_logger()


class GalaxyConfig(NamedTuple):
    """What to generate."""
    map_size: int
    layout: Layout = Layout.ORGANIC
    num_players: int = 1


class GeneratorOptions(BaseModel):
    """Tunable constants of the generation pipeline."""

    # Sampling canvas
    base_canvas_width: float = Field(
        default=2400.0, gt=0, description="Canvas width for the reference map size"
    )
    base_canvas_height: float = Field(
        default=1800.0, gt=0, description="Canvas height for the reference map size"
    )
    reference_map_size: int = Field(
        default=80, ge=1, description="Territory count the base canvas is sized for"
    )
    organic_spacing: float = Field(
        default=0.4, gt=0, le=2.0,
        description="Organic min distance as a fraction of sqrt(area / count)",
    )

    # Relaxation
    repulsion_strength: float = Field(default=2000.0, ge=0, description="Repulsion constant k in k/d^2")
    relaxation_damping: float = Field(default=0.8, ge=0, le=1, description="Force damping factor")
    max_relaxation_step: float = Field(default=15.0, ge=0, description="Per-axis move clamp")
    relaxation_margin: float = Field(default=50.0, ge=0, description="Distance kept from canvas edges")

    # Lanes
    mst_clearance: float = Field(
        default=25.0, ge=0, description="Clearance between backbone lanes and other stars"
    )
    extra_edge_fraction: float = Field(
        default=0.12, ge=0, le=0.15, description="Extra lanes allowed per territory"
    )
    max_extra_edge_length: float = Field(
        default=200.0, gt=0, description="Longest extra lane"
    )
    extra_edge_clearance: float = Field(
        default=20.0, ge=0, description="Clearance between extra lanes and other stars"
    )
    repair_clearance: Optional[float] = Field(
        default=20.0, ge=0,
        description="Preferred clearance for bridge lanes; None bridges by distance only",
    )

    # Assembly
    map_margin: float = Field(default=200.0, ge=0, description="Border around the outermost stars")
    territory_radius: float = Field(default=20.0, gt=0, description="Territory display radius")
    min_army: int = Field(default=1, ge=0, description="Smallest neutral garrison")
    max_army: int = Field(default=10, ge=0, description="Largest neutral garrison")

    @model_validator(mode="after")
    def _check_army_range(self) -> "GeneratorOptions":
        if self.max_army < self.min_army:
            raise ValueError("max_army must be at least min_army")
        return self


class GalaxyMap(BaseModel):
    """A generated map: territories plus the dimensions they were centered in."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    seed: Union[int, str] = Field(description="Seed that reproduces this map")
    layout: Layout
    requested_size: int = Field(description="Territory count asked for")
    width: float = Field(description="Map width")
    height: float = Field(description="Map height")
    territories: List[Territory] = Field(default_factory=list)
    backbone_edges: int = Field(default=0, description="Lanes from the spanning tree")
    extra_edges: int = Field(default=0, description="Lanes added for redundancy")
    bridge_edges: int = Field(default=0, description="Lanes added by connectivity repair")

    @property
    def lane_count(self) -> int:
        return sum(len(t.neighbors) for t in self.territories) // 2

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Encode the map with camelCase keys for clients."""
        return self.model_dump_json(by_alias=True, indent=indent)


def generate_galaxy(config: GalaxyConfig, seed: Optional[Seed] = None,
                    options: Optional[GeneratorOptions] = None,
                    triangulator: Optional[Triangulator] = None) -> GalaxyMap:
    """
    Generate a connected galaxy map.

    Args:
        config: Map size, layout and player count
        seed: Random seed; None picks a fresh one (recorded on the result)
        options: Pipeline constants
        triangulator: Triangulation backend (scipy Delaunay by default)

    Returns:
        GalaxyMap with territories and map dimensions

    Raises:
        ValueError: On a negative map size, fewer than one player, or an
            unknown layout
        ConnectivityError: If repair leaves the map split (never expected)
    """
    layout = Layout.parse(config.layout)
    if config.map_size < 0:
        raise ValueError(f"map_size must be non-negative, got {config.map_size}")
    if config.num_players < 1:
        raise ValueError(f"num_players must be at least 1, got {config.num_players}")
    options = options or GeneratorOptions()

    prng, seed = create_prng(seed)
    log = logger.bind(seed=seed, layout=layout.value)
    log.info("Generating galaxy", map_size=config.map_size, num_players=config.num_players)

    width, height = get_canvas_size(
        config.map_size,
        options.base_canvas_width,
        options.base_canvas_height,
        options.reference_map_size,
    )

    points = sample_points(config.map_size, layout, width, height, config.num_players,
                           prng, organic_spacing=options.organic_spacing)
    log.info("Stars placed", count=len(points), canvas_width=round(width, 1),
             canvas_height=round(height, 1))

    relax_points(
        points, layout, width, height,
        strength=options.repulsion_strength,
        damping=options.relaxation_damping,
        max_step=options.max_relaxation_step,
        margin=options.relaxation_margin,
    )

    edges = triangulate(points, triangulator)
    adjacency, backbone = build_mst(points, edges, options.mst_clearance)
    extra = augment_edges(
        points, adjacency, edges,
        fraction=options.extra_edge_fraction,
        max_length=options.max_extra_edge_length,
        clearance=options.extra_edge_clearance,
    )
    bridges = repair_connectivity(points, adjacency, options.repair_clearance)

    dimensions = calculate_map_dimensions(points, options.map_margin)
    territories = build_territories(
        points, adjacency, prng,
        radius=options.territory_radius,
        min_army=options.min_army,
        max_army=options.max_army,
    )

    galaxy = GalaxyMap(
        seed=seed,
        layout=layout,
        requested_size=config.map_size,
        width=dimensions.width,
        height=dimensions.height,
        territories=territories,
        backbone_edges=backbone,
        extra_edges=extra,
        bridge_edges=bridges,
    )
    log.info("Galaxy generated", territories=len(territories), lanes=galaxy.lane_count,
             backbone=backbone, extra=extra, bridges=bridges)
    return galaxy


def generate(map_size: int, layout: Union[Layout, str] = Layout.ORGANIC,
             num_players: int = 1, seed: Optional[Seed] = None,
             options: Optional[GeneratorOptions] = None,
             triangulator: Optional[Triangulator] = None) -> GalaxyMap:
    """Convenience wrapper around ``generate_galaxy``."""
    return generate_galaxy(GalaxyConfig(map_size, layout, num_players), seed=seed,
                           options=options, triangulator=triangulator)
