"""Route network service - Main orchestrator.

This service owns the graph for a session and wires the edge
repository, the solver and the solution cache together. Every mutation
bumps the graph version and clears the cache, so the next query is
answered by a fresh solve.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import numpy as np

from ..domain.errors import UnknownRegimeError
from ..domain.models import CenterPolicy, Regime, RouteResult
from ..graph.store import WeatherGraph
from ..ports.cache import CachePort
from ..ports.graph import EdgeRepositoryPort, RouteSolverPort, ShortestPathsPort

RegimeLike = Union[Regime, int, str]


@dataclass
class RouteNetworkService:
    """Main service for querying and editing the route network.

    Attributes:
        repository: Loads and saves the edge list
        solver: Computes all-pairs shortest paths
        cache: Holds solutions keyed by regime and graph version
        regime: Regime used by queries that do not name one
        graph: The session's graph (empty until ``load``)
    """

    repository: EdgeRepositoryPort
    solver: RouteSolverPort
    cache: CachePort
    regime: Regime = Regime.NORMAL
    graph: WeatherGraph = field(default_factory=WeatherGraph)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load(
        self, path: Optional[Union[str, Path]] = None, create_sample: bool = False
    ) -> WeatherGraph:
        """Replace the current graph with the contents of an edge file.

        Args:
            path: Edge file; the configured one when omitted.
            create_sample: Write the sample network first if the file
                does not exist.

        Raises:
            GraphError: If the file cannot be read or written.
        """
        if create_sample and not self.repository.exists(path):
            self.repository.write_sample(path)

        self.graph = self.repository.load(path)
        self.cache.clear()
        return self.graph

    def save(self, path: Optional[Union[str, Path]] = None) -> Path:
        """Write the current graph; the configured snapshot file by default."""
        return self.repository.save(self.graph, path)

    def set_regime(self, regime: RegimeLike) -> Regime:
        """Change the regime used by subsequent queries.

        Raises:
            UnknownRegimeError: If ``regime`` does not name a regime.
        """
        parsed = Regime.parse(regime)
        if parsed is None:
            raise UnknownRegimeError(f"Unknown weather regime: {regime!r}", value=regime)
        self.regime = parsed
        self._logger.info("Regime changed", extra={"regime": parsed.value})
        return parsed

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def solution(self, regime: Optional[RegimeLike] = None) -> ShortestPathsPort:
        """Solved network for ``regime`` (the active one by default)."""
        parsed = self.regime if regime is None else Regime.parse(regime)
        if parsed is None:
            raise UnknownRegimeError(f"Unknown weather regime: {regime!r}", value=regime)

        key = f"{parsed.value}@{self.graph.version}"
        return self.cache.get_or_compute(key, lambda: self.solver.solve(self.graph, parsed))

    def shortest_route(
        self, origin: str, destination: str, regime: Optional[RegimeLike] = None
    ) -> RouteResult:
        """Shortest route between two cities.

        Raises:
            CityNotFoundError: If either city is unknown.
            NoRouteFoundError: If no route exists.
        """
        route = self.solution(regime).route(origin, destination)
        self._logger.info(
            "Route computed",
            extra={
                "origin": origin,
                "destination": destination,
                "stops": route.num_stops,
                "total_time": route.total_time,
            },
        )
        return route

    def distance(
        self, origin: str, destination: str, regime: Optional[RegimeLike] = None
    ) -> float:
        return self.solution(regime).distance(origin, destination)

    def path(
        self, origin: str, destination: str, regime: Optional[RegimeLike] = None
    ) -> List[str]:
        return self.solution(regime).path(origin, destination)

    def distances_from(
        self, origin: str, regime: Optional[RegimeLike] = None
    ) -> Dict[str, float]:
        return self.solution(regime).distances_from(origin)

    def center(
        self,
        regime: Optional[RegimeLike] = None,
        policy: Optional[CenterPolicy] = None,
    ) -> Optional[str]:
        return self.solution(regime).center(policy)

    def adjacency_matrix(self, regime: Optional[RegimeLike] = None) -> np.ndarray:
        parsed = self.regime if regime is None else Regime.parse(regime)
        if parsed is None:
            raise UnknownRegimeError(f"Unknown weather regime: {regime!r}", value=regime)
        return self.graph.adjacency(parsed)

    def distance_matrix(self, regime: Optional[RegimeLike] = None) -> np.ndarray:
        """Return an independent copy of the shortest-time matrix."""
        return self.solution(regime).distances.copy()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def interrupt(self, origin: str, destination: str) -> bool:
        """Sever ``origin -> destination``.

        Returns False (and changes nothing) if either city is unknown or
        both name the same city.
        """
        if (
            origin == destination
            or origin not in self.graph
            or destination not in self.graph
        ):
            return False
        self.graph.remove_edge(origin, destination)
        self._invalidate("interrupt", origin, destination)
        return True

    def connect(
        self,
        origin: str,
        destination: str,
        normal: float,
        rain: float,
        snow: float,
        storm: float,
    ) -> None:
        """Insert or overwrite an edge, creating unknown cities.

        Raises:
            InvalidNameError: If either name is invalid.
            InvalidWeightError: If any weight is negative or non-finite.
        """
        self.graph.add_edge(origin, destination, normal, rain, snow, storm)
        self._invalidate("connect", origin, destination)

    def update_weather(
        self, origin: str, destination: str, regime: RegimeLike, weight: float
    ) -> bool:
        """Set one regime's travel time of an existing city pair.

        Returns False (and changes nothing) if either city is unknown, both
        name the same city, or ``regime`` does not name a regime.

        Raises:
            InvalidWeightError: If the weight is negative or non-finite.
        """
        if (
            origin == destination
            or origin not in self.graph
            or destination not in self.graph
            or Regime.parse(regime) is None
        ):
            return False
        self.graph.update_regime(origin, destination, regime, weight)
        self._invalidate("update_weather", origin, destination)
        return True

    def _invalidate(self, action: str, origin: str, destination: str) -> None:
        cleared = self.cache.clear()
        self._logger.info(
            "Graph mutated",
            extra={
                "action": action,
                "origin": origin,
                "destination": destination,
                "graph_version": self.graph.version,
                "solutions_dropped": cleared,
            },
        )
