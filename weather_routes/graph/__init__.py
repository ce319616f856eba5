"""Graph-related utilities for representing the route network.

This subpackage contains the weather-indexed graph store and the
Floyd-Warshall routines that run on its adjacency matrices.
"""

from .floyd import NO_SUCCESSOR, center_index, floyd_warshall, reconstruct_path
from .store import INFINITY, WeatherGraph

__all__ = [
    "INFINITY",
    "NO_SUCCESSOR",
    "WeatherGraph",
    "floyd_warshall",
    "reconstruct_path",
    "center_index",
]
