"""Services layer - Application orchestration.

Available services:
- RouteNetworkService: Session graph, regime switching and route queries
"""

from .route_network import RouteNetworkService

__all__ = ["RouteNetworkService"]
