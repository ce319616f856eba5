"""Graph ports - Abstractions for edge storage and route solving.

These protocols define the contracts for graph operations, including
loading and saving the edge list and computing all-pairs shortest paths.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional, Protocol, Union

if TYPE_CHECKING:
    from ..domain.models import CenterPolicy, LoadReport, Regime, RouteResult
    from ..graph.store import WeatherGraph


class EdgeRepositoryPort(Protocol):
    """Port for loading and saving the edge list.

    Implementation: adapters/graph/text_repository.py
    """

    def exists(self, path: Optional[Union[str, Path]] = None) -> bool:
        """Check whether the edge file exists."""
        ...

    def load(self, path: Optional[Union[str, Path]] = None) -> WeatherGraph:
        """Build a new graph from persistent storage.

        Args:
            path: Source file; the configured edge file when omitted.

        Returns:
            The loaded graph.
        """
        ...

    def save(
        self, graph: WeatherGraph, path: Optional[Union[str, Path]] = None
    ) -> Path:
        """Write every edge of the graph.

        Args:
            graph: The graph to persist.
            path: Target file; the configured snapshot file when omitted.

        Returns:
            The path that was written.
        """
        ...

    def write_sample(self, path: Optional[Union[str, Path]] = None) -> Path:
        """Write the bundled sample edge list.

        Returns:
            The path that was written.
        """
        ...

    @property
    def last_report(self) -> Optional[LoadReport]:
        """Report of the most recent load, if any."""
        ...


class ShortestPathsPort(Protocol):
    """Queries answered by a solved all-pairs instance."""

    regime: Regime
    graph_version: int

    def distance(self, origin: str, destination: str) -> float: ...

    def path(self, origin: str, destination: str) -> List[str]: ...

    def reachable(self, origin: str, destination: str) -> bool: ...

    def distances_from(self, origin: str) -> Dict[str, float]: ...

    def center(self, policy: Optional[CenterPolicy] = None) -> Optional[str]: ...

    def route(self, origin: str, destination: str) -> RouteResult: ...

    def is_stale(self, graph: WeatherGraph) -> bool: ...


class RouteSolverPort(Protocol):
    """Port for route computation.

    Implementation: adapters/graph/floyd_solver.py
    """

    def solve(self, graph: WeatherGraph, regime: Regime) -> ShortestPathsPort:
        """Compute all-pairs shortest paths under a weather regime.

        Args:
            graph: The route network.
            regime: Which of the four travel times to use.

        Returns:
            A solution that stays valid until the graph is mutated.
        """
        ...
