"""
Core galaxy generation functionality.
"""

from .point_sampling import Layout, sample_points
from .triangulation import ScipyDelaunayTriangulator, TriangulationError, triangulate
from .connectivity import ConnectivityError
from .territories import Territory, MapDimensions
from .validation import ValidationReport, validate_territories
from .galaxy_generator import (GalaxyConfig, GalaxyMap, GeneratorOptions,
                               generate, generate_galaxy)

__all__ = ['Layout', 'sample_points', 'ScipyDelaunayTriangulator', 'TriangulationError',
           'triangulate', 'ConnectivityError', 'Territory', 'MapDimensions',
           'ValidationReport', 'validate_territories', 'GalaxyConfig', 'GalaxyMap',
           'GeneratorOptions', 'generate', 'generate_galaxy']
