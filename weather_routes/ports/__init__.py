"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the application core and external
adapters. They enable dependency injection and make the system testable.
"""

from .cache import CachePort
from .graph import EdgeRepositoryPort, RouteSolverPort, ShortestPathsPort

__all__ = [
    # Graph
    "EdgeRepositoryPort",
    "RouteSolverPort",
    "ShortestPathsPort",
    # Cache
    "CachePort",
]
