"""Debug preview of a generated galaxy as a PNG image."""

from pathlib import Path
from typing import Union

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
import structlog

from .core.galaxy_generator import GalaxyMap

logger = structlog.get_logger()


def plot_galaxy(galaxy: GalaxyMap, output_path: Union[str, Path], dpi: int = 100) -> Path:
    """
    Draw territories and warp lanes.

    Args:
        galaxy: Generated map
        output_path: Where to write the PNG
        dpi: Image resolution

    Returns:
        Path of the written image
    """
    output_path = Path(output_path)
    by_id = {t.id: t for t in galaxy.territories}

    segments = [
        [(t.x, t.y), (by_id[n].x, by_id[n].y)]
        for t in galaxy.territories
        for n in t.neighbors
        if t.id < n and n in by_id
    ]

    fig, ax = plt.subplots(figsize=(12, 12 * galaxy.height / max(galaxy.width, 1.0)))
    ax.set_facecolor("black")
    ax.add_collection(LineCollection(segments, colors="#4a7fb5", linewidths=1.0, alpha=0.8))

    if galaxy.territories:
        ax.scatter(
            [t.x for t in galaxy.territories],
            [t.y for t in galaxy.territories],
            c=[t.army_size for t in galaxy.territories],
            cmap="plasma",
            s=40,
            zorder=3,
        )

    ax.set_xlim(0, galaxy.width)
    ax.set_ylim(galaxy.height, 0)  # screen coordinates, y grows downwards
    ax.set_aspect("equal")
    ax.set_title(
        f"{galaxy.layout.value} galaxy: {len(galaxy.territories)} territories, "
        f"{galaxy.lane_count} lanes (seed {galaxy.seed})"
    )

    fig.savefig(output_path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)

    logger.info("Galaxy preview saved", path=str(output_path))
    return output_path
