"""
Random number generation utilities.

Generation never touches Python's ``random`` module or NumPy's global state:
each run creates its own Alea PRNG here and threads it through every stage.
"""

import secrets
from typing import Optional, Tuple, Union

from ..core.alea_prng import AleaPRNG

Seed = Union[int, str]


def new_seed() -> int:
    """Draw a fresh seed that survives a round trip through a JSON number."""
    return secrets.randbits(53)


def create_prng(seed: Optional[Seed] = None) -> Tuple[AleaPRNG, Seed]:
    """
    Create an independent PRNG for one generation run.

    Args:
        seed: Seed to use. ``None`` draws a fresh seed, so the output is not
            reproducible unless the returned seed is recorded.

    Returns:
        Tuple of (prng, seed actually used)
    """
    if seed is None:
        seed = new_seed()
    return AleaPRNG(seed), seed
