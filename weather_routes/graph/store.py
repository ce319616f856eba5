"""Weather-indexed directed graph store.

Cities are assigned dense indices in insertion order. Travel times live
in a single contiguous ``(capacity, capacity, 4)`` numpy array indexed
by ``[origin, destination, regime.index]``; the array doubles when a new
city does not fit, and indices never change.
"""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Dict, Iterator, List, Optional, Union

import numpy as np

from ..domain.errors import InvalidNameError, InvalidWeightError
from ..domain.models import REGIMES, Edge, Regime

INFINITY = float("inf")
NUM_REGIMES = len(REGIMES)

RegimeLike = Union[Regime, int, str]

logger = logging.getLogger(__name__)


def validate_name(name: object) -> str:
    """Return ``name`` if it can identify a city, else raise InvalidNameError."""
    if (
        not isinstance(name, str)
        or not name
        or any(ch.isspace() for ch in name)
        or not name.isprintable()
    ):
        raise InvalidNameError(f"Invalid city name: {name!r}", name=name)
    return name


def validate_weight(weight: object, origin: str = "", destination: str = "") -> float:
    """Return ``weight`` as a float if it is a finite non-negative number."""
    if isinstance(weight, bool) or not isinstance(weight, Real):
        raise InvalidWeightError(
            f"Travel time must be a number, got {weight!r}",
            origin=origin,
            destination=destination,
            weight=weight,
        )
    value = float(weight)
    if not math.isfinite(value) or value < 0:
        raise InvalidWeightError(
            f"Travel time must be finite and non-negative, got {value}",
            origin=origin,
            destination=destination,
            weight=weight,
        )
    return value


def _allocate(capacity: int) -> np.ndarray:
    weights = np.full((capacity, capacity, NUM_REGIMES), INFINITY, dtype=np.float64)
    diagonal = np.arange(capacity)
    weights[diagonal, diagonal, :] = 0.0
    return weights


class WeatherGraph:
    """Directed graph of named cities with four travel times per edge.

    Inserting an edge sets all four regime weights for the ordered pair
    and overwrites any previous ones. Removing it sets them back to
    infinity. Diagonal entries are always zero.
    """

    def __init__(self, initial_capacity: int = 16) -> None:
        self._index: Dict[str, int] = {}
        self._names: List[str] = []
        self._weights = _allocate(max(1, int(initial_capacity)))
        self._version = 0

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __repr__(self) -> str:
        return f"WeatherGraph(cities={len(self)}, version={self._version})"

    @property
    def version(self) -> int:
        """Counter bumped by every mutation."""
        return self._version

    @property
    def capacity(self) -> int:
        return self._weights.shape[0]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_city(self, name: str) -> int:
        """Return the index of ``name``, assigning the next one if new.

        Raises:
            InvalidNameError: If the name is empty or contains whitespace.
        """
        existing = self._index.get(name) if isinstance(name, str) else None
        if existing is not None:
            return existing

        validate_name(name)
        index = len(self._names)
        if index >= self.capacity:
            self._grow(index + 1)

        self._index[name] = index
        self._names.append(name)
        self._version += 1
        return index

    def add_edge(
        self,
        origin: str,
        destination: str,
        normal: float,
        rain: float,
        snow: float,
        storm: float,
    ) -> None:
        """Insert or overwrite the directed edge ``origin -> destination``.

        Both endpoints are created if unknown. A self-loop only creates
        the city; its diagonal stays zero.

        Raises:
            InvalidNameError: If either name is invalid.
            InvalidWeightError: If any weight is negative or non-finite.
        """
        validate_name(origin)
        validate_name(destination)
        weights = [
            validate_weight(w, origin, destination) for w in (normal, rain, snow, storm)
        ]

        i = self.add_city(origin)
        j = self.add_city(destination)
        if i == j:
            logger.debug("Ignoring self-loop weights", extra={"city": origin})
            return

        self._weights[i, j, :] = weights
        self._version += 1

    def remove_edge(self, origin: str, destination: str) -> None:
        """Sever ``origin -> destination`` in every regime.

        No-op if either city is unknown.
        """
        i = self.index_of(origin)
        j = self.index_of(destination)
        if i is None or j is None or i == j:
            return
        self._weights[i, j, :] = INFINITY
        self._version += 1

    def update_regime(
        self, origin: str, destination: str, regime: RegimeLike, weight: float
    ) -> None:
        """Set a single regime weight of an ordered pair.

        No-op if either city is unknown or ``regime`` does not name one
        of the four regimes.

        Raises:
            InvalidWeightError: If the weight is negative or non-finite.
        """
        i = self.index_of(origin)
        j = self.index_of(destination)
        parsed = Regime.parse(regime)
        if i is None or j is None or parsed is None or i == j:
            logger.debug(
                "Ignoring regime update",
                extra={"origin": origin, "destination": destination, "regime": regime},
            )
            return

        self._weights[i, j, parsed.index] = validate_weight(weight, origin, destination)
        self._version += 1

    def _grow(self, required: int) -> None:
        capacity = self.capacity
        while capacity < required:
            capacity *= 2

        n = len(self._names)
        grown = _allocate(capacity)
        grown[:n, :n, :] = self._weights[:n, :n, :]
        self._weights = grown
        logger.debug("Weight tensor grown", extra={"capacity": capacity})

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def adjacency(self, regime: Regime = Regime.NORMAL) -> np.ndarray:
        """Return an independent ``N x N`` copy of the weights for ``regime``."""
        n = len(self._names)
        return self._weights[:n, :n, regime.index].copy()

    def has_edge(self, origin: str, destination: str, regime: Regime = Regime.NORMAL) -> bool:
        i = self.index_of(origin)
        j = self.index_of(destination)
        if i is None or j is None or i == j:
            return False
        return bool(np.isfinite(self._weights[i, j, regime.index]))

    def weight(self, origin: str, destination: str, regime: Regime = Regime.NORMAL) -> float:
        """Direct travel time, or infinity if there is no such edge."""
        i = self.index_of(origin)
        j = self.index_of(destination)
        if i is None or j is None:
            return INFINITY
        return float(self._weights[i, j, regime.index])

    def weights(self, origin: str, destination: str) -> tuple[float, float, float, float]:
        """All four regime weights of an ordered pair."""
        a, b, c, d = (self.weight(origin, destination, regime) for regime in REGIMES)
        return a, b, c, d

    def edges(self, regime: Regime = Regime.NORMAL) -> Iterator[Edge]:
        """Yield every off-diagonal pair with a finite weight under ``regime``."""
        n = len(self._names)
        rows, cols = np.nonzero(np.isfinite(self._weights[:n, :n, regime.index]))
        for i, j in zip(rows.tolist(), cols.tolist()):
            if i == j:
                continue
            a, b, c, d = self._weights[i, j, :].tolist()
            yield Edge(self._names[i], self._names[j], (a, b, c, d))

    def cities(self) -> List[str]:
        """City names in index order."""
        return list(self._names)

    def count(self) -> int:
        return len(self._names)

    def name_of(self, index: int) -> Optional[str]:
        if 0 <= index < len(self._names):
            return self._names[index]
        return None

    def index_of(self, name: str) -> Optional[int]:
        return self._index.get(name)
