"""Procedural galaxy topology generator for Star Throne matches."""

from .core import (GalaxyConfig, GalaxyMap, GeneratorOptions, Layout, Territory,
                   generate, generate_galaxy, validate_territories)

__version__ = "0.1.0"

__all__ = ['GalaxyConfig', 'GalaxyMap', 'GeneratorOptions', 'Layout', 'Territory',
           'generate', 'generate_galaxy', 'validate_territories']
