"""Typed domain errors for the route network.

All errors inherit from RouteNetworkError and can optionally
wrap a root cause exception for debugging.

Unknown cities are answered in-band by lookups (None, infinity or an
empty path); the errors below are raised only by insertions, by the
loader/saver, and by the raising route query.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class RouteNetworkError(Exception):
    """Base error for the route network domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class InvalidNameError(RouteNetworkError):
    """City name is empty, not a string, or contains whitespace.

    Attributes:
        name: The rejected name
    """

    name: Any = None


@dataclass
class InvalidWeightError(RouteNetworkError):
    """Travel time is negative, non-finite or not a number.

    Attributes:
        origin: Departure city of the rejected edge
        destination: Arrival city of the rejected edge
        weight: The rejected value
    """

    origin: str = ""
    destination: str = ""
    weight: Any = None


@dataclass
class UnknownRegimeError(RouteNetworkError):
    """Value does not name one of the four weather regimes.

    Attributes:
        value: The value that failed to parse
    """

    value: Any = None


@dataclass
class GraphError(RouteNetworkError):
    """Edge file could not be read or written.

    Attributes:
        file_path: Path to the graph data file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class CityNotFoundError(RouteNetworkError):
    """City name is not known to the graph.

    Attributes:
        city: The name that was not found
    """

    city: str = ""


@dataclass
class NoRouteFoundError(RouteNetworkError):
    """No path exists between the requested cities.

    Attributes:
        origin: Departure city
        destination: Arrival city
    """

    origin: str = ""
    destination: str = ""
