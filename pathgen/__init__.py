"""Procedural grid path generator.

Lays out one or more paths through a rectangular grid from a start cell to a
target row and/or column using a randomized depth-first search with
backtracking.
"""

from .domain.errors import ConfigurationError, PathGenError, WorldInvariantError
from .domain.generator import PathGenerator, generate_paths
from .domain.path import Path, PathNode
from .domain.types import Direction, GenerationResult, PathFindingOptions, PathResult, Role
from .domain.world import World
from .utils.rng import SeededRNG

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "Direction",
    "GenerationResult",
    "Path",
    "PathFindingOptions",
    "PathGenError",
    "PathGenerator",
    "PathNode",
    "PathResult",
    "Role",
    "SeededRNG",
    "World",
    "WorldInvariantError",
    "generate_paths",
]
