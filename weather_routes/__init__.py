"""Top-level package for the weather-aware route network.

The package maintains a directed graph of cities whose edges carry one
travel time per weather regime, and answers all-pairs shortest-path
queries (distance, route, graph center) under a chosen regime.
"""

__version__ = "0.1.0"
