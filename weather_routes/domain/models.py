"""Immutable domain models for the weather-aware route network.

All models are frozen dataclasses with slots for memory efficiency.
These models have no external dependencies and represent the core
business concepts of the application.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class Regime(Enum):
    """Weather regime selecting one of the four parallel edge weights.

    The declaration order is the ordinal order used to index the
    weight tensor: normal=0, rain=1, snow=2, storm=3.
    """

    NORMAL = "normal"
    RAIN = "rain"
    SNOW = "snow"
    STORM = "storm"

    @property
    def index(self) -> int:
        """Ordinal position of the regime in the weight tensor."""
        return REGIMES.index(self)

    @classmethod
    def parse(cls, value: Union["Regime", int, str, None]) -> Optional["Regime"]:
        """Permissively convert a regime, ordinal or name.

        Returns None for anything that does not name one of the four
        regimes, so callers at the text/CLI boundary can keep the
        silent no-op behaviour.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            if 0 <= value < len(REGIMES):
                return REGIMES[value]
            return None
        if isinstance(value, str):
            text = value.strip().lower()
            if text.isascii() and text.isdecimal():
                return cls.parse(int(text))
            for regime in REGIMES:
                if regime.value == text:
                    return regime
        return None


REGIMES: tuple[Regime, ...] = tuple(Regime)


class CenterPolicy(Enum):
    """Eligibility rule for the graph center.

    STRICT: a city is a candidate only if it reaches every other city.
    REACHABLE_ONLY: unreachable peers are ignored; a city that reaches
        nobody has eccentricity 0 (legacy behaviour).
    """

    STRICT = "strict"
    REACHABLE_ONLY = "reachable_only"


@dataclass(frozen=True, slots=True)
class Edge:
    """A directed connection with one travel time per regime.

    Attributes:
        origin: Name of the departure city
        destination: Name of the arrival city
        weights: Travel times ordered as normal, rain, snow, storm
    """

    origin: str
    destination: str
    weights: tuple[float, float, float, float]

    def weight(self, regime: Regime) -> float:
        """Return the travel time under the given regime."""
        return self.weights[regime.index]


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Result of a shortest-route query.

    Attributes:
        path: Ordered tuple of city names from origin to destination
        total_time: Sum of the travel times along the path
        regime: Weather regime the route was computed under
    """

    path: tuple[str, ...]
    total_time: float
    regime: Regime = Regime.NORMAL

    @property
    def is_empty(self) -> bool:
        """Check if no route was found."""
        return len(self.path) == 0

    @property
    def num_stops(self) -> int:
        """Return the number of cities on the route."""
        return len(self.path)

    @property
    def intermediate(self) -> tuple[str, ...]:
        """Cities strictly between origin and destination."""
        return self.path[1:-1]


@dataclass(frozen=True, slots=True)
class SkippedLine:
    """A line of an edge file that could not be loaded."""

    line_number: int
    reason: str
    text: str


@dataclass(frozen=True, slots=True)
class LoadReport:
    """Outcome of loading an edge file.

    Attributes:
        path: File the edges were read from
        edges_loaded: Number of lines turned into edges
        skipped_lines: Lines reported and ignored
    """

    path: str
    edges_loaded: int = 0
    skipped_lines: tuple[SkippedLine, ...] = field(default_factory=tuple)

    @property
    def has_warnings(self) -> bool:
        return len(self.skipped_lines) > 0
