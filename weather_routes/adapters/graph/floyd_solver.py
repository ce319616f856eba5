"""Floyd-Warshall route solver adapter.

This adapter wraps graph/floyd.py and adds:
- Name resolution against a snapshot of the city list
- Domain model output (RouteResult)
- Center computation under a configurable policy
- Logging
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

import numpy as np

from ...config import get_config
from ...domain.errors import CityNotFoundError, NoRouteFoundError, UnknownRegimeError
from ...domain.models import CenterPolicy, Regime, RouteResult
from ...graph.floyd import center_index, eccentricities, floyd_warshall, reconstruct_path
from ...graph.store import INFINITY, WeatherGraph


@dataclass
class AllPairsSolution:
    """Distance and successor matrices of one solve.

    The matrices and the city list are copies taken at solve time, so a
    solution keeps answering (with stale data) after the graph changes;
    use ``is_stale`` to detect that. Cities added after the solve are
    unknown to it.

    Attributes:
        regime: Weather regime the weights were taken from
        cities: City names in index order at solve time
        distances: ``N x N`` shortest travel times (``inf`` = unreachable)
        successors: ``N x N`` next hops (``-1`` = none)
        graph_version: ``WeatherGraph.version`` at solve time
        center_policy: Default policy used by ``center()``
    """

    regime: Regime
    cities: Tuple[str, ...]
    distances: np.ndarray = field(repr=False)
    successors: np.ndarray = field(repr=False)
    graph_version: int = 0
    center_policy: CenterPolicy = CenterPolicy.STRICT

    _index: Dict[str, int] = field(init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._index = {name: i for i, name in enumerate(self.cities)}
        self._logger = logging.getLogger(__name__)

    def __len__(self) -> int:
        return len(self.cities)

    def index_of(self, name: str) -> Optional[int]:
        return self._index.get(name)

    def is_stale(self, graph: WeatherGraph) -> bool:
        """True if ``graph`` was mutated after this solution was computed."""
        return graph.version != self.graph_version

    def distance(self, origin: str, destination: str) -> float:
        """Shortest travel time, or infinity if unknown or unreachable."""
        i = self.index_of(origin)
        j = self.index_of(destination)
        if i is None or j is None:
            return INFINITY
        return float(self.distances[i, j])

    def reachable(self, origin: str, destination: str) -> bool:
        return bool(np.isfinite(self.distance(origin, destination)))

    def path(self, origin: str, destination: str) -> List[str]:
        """Cities on a shortest route, both ends included.

        Returns ``[origin]`` for a city to itself and an empty list when
        either city is unknown or no route exists.
        """
        i = self.index_of(origin)
        j = self.index_of(destination)
        if i is None or j is None or not np.isfinite(self.distances[i, j]):
            return []

        indices = reconstruct_path(self.successors, i, j)
        if not indices:
            self._logger.warning(
                "Successor matrix did not lead to destination",
                extra={"origin": origin, "destination": destination},
            )
            return []
        return [self.cities[k] for k in indices]

    def distances_from(self, origin: str) -> Dict[str, float]:
        """Shortest travel time from ``origin`` to every reachable peer.

        The origin itself and unreachable cities are omitted; an unknown
        origin yields an empty mapping.
        """
        i = self.index_of(origin)
        if i is None:
            return {}
        row = self.distances[i]
        return {
            name: float(row[j])
            for j, name in enumerate(self.cities)
            if j != i and np.isfinite(row[j])
        }

    def eccentricity(self, city: str) -> Optional[float]:
        """Largest finite travel time from ``city`` to another city."""
        i = self.index_of(city)
        if i is None:
            return None
        return float(eccentricities(self.distances)[i])

    def center(self, policy: Optional[CenterPolicy] = None) -> Optional[str]:
        """City minimising its worst-case travel time to the others.

        Ties go to the earliest inserted city. See ``CenterPolicy`` for
        how cities that cannot reach everyone are treated.
        """
        index = center_index(self.distances, policy or self.center_policy)
        if index is None:
            return None
        return self.cities[index]

    def route(self, origin: str, destination: str) -> RouteResult:
        """Find the shortest route between two cities.

        Raises:
            CityNotFoundError: If either city is unknown.
            NoRouteFoundError: If no route exists.
        """
        for city in (origin, destination):
            if self.index_of(city) is None:
                raise CityNotFoundError(f"Unknown city: {city}", city=city)

        path = self.path(origin, destination)
        if not path:
            raise NoRouteFoundError(
                f"No route from {origin} to {destination}",
                origin=origin,
                destination=destination,
            )

        return RouteResult(
            path=tuple(path),
            total_time=self.distance(origin, destination),
            regime=self.regime,
        )


@dataclass
class FloydWarshallSolver:
    """Route solver using the Floyd-Warshall all-pairs algorithm.

    This adapter implements RouteSolverPort.

    Attributes:
        center_policy: Default center policy of the produced solutions
    """

    center_policy: CenterPolicy = field(
        default_factory=lambda: get_config().solver.center_policy
    )
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def solve(
        self, graph: WeatherGraph, regime: Union[Regime, int, str] = Regime.NORMAL
    ) -> AllPairsSolution:
        """Compute all-pairs shortest paths under a weather regime.

        Args:
            graph: The route network.
            regime: A Regime, its ordinal or its name.

        Returns:
            AllPairsSolution with independent copies of the matrices.

        Raises:
            UnknownRegimeError: If ``regime`` does not name a regime.
        """
        parsed = Regime.parse(regime)
        if parsed is None:
            raise UnknownRegimeError(f"Unknown weather regime: {regime!r}", value=regime)

        self._logger.debug(
            "Solving all pairs",
            extra={"cities": len(graph), "regime": parsed.value},
        )

        distances, successors = floyd_warshall(graph.adjacency(parsed))
        solution = AllPairsSolution(
            regime=parsed,
            cities=tuple(graph.cities()),
            distances=distances,
            successors=successors,
            graph_version=graph.version,
            center_policy=self.center_policy,
        )

        self._logger.info(
            "All pairs solved",
            extra={
                "cities": len(solution),
                "regime": parsed.value,
                "graph_version": graph.version,
            },
        )
        return solution
