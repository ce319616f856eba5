"""Domain layer - Core business models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    CityNotFoundError,
    GraphError,
    InvalidNameError,
    InvalidWeightError,
    NoRouteFoundError,
    RouteNetworkError,
    UnknownRegimeError,
)
from .models import (
    REGIMES,
    CenterPolicy,
    Edge,
    LoadReport,
    Regime,
    RouteResult,
    SkippedLine,
)

__all__ = [
    # Models
    "Regime",
    "REGIMES",
    "CenterPolicy",
    "Edge",
    "RouteResult",
    "LoadReport",
    "SkippedLine",
    # Errors
    "RouteNetworkError",
    "InvalidNameError",
    "InvalidWeightError",
    "UnknownRegimeError",
    "GraphError",
    "CityNotFoundError",
    "NoRouteFoundError",
]
