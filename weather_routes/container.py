"""Dependency injection container.

This module provides a simple DI container without external frameworks.
It allows registering and resolving dependencies for the application.

Design principles:
1. No magic - explicit registration and resolution
2. Testable - easy to swap implementations
3. Lazy loading - adapters instantiated on first use
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        service = container.resolve(RouteNetworkService)

        # Testing
        container = Container()
        container.register(CachePort, lambda: NullCache())
        cache = container.resolve(CachePort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        self._factories[port_type] = factory
        if singleton:
            self._singleton_types.add(port_type)
        else:
            self._singleton_types.discard(port_type)
        self._singletons.pop(port_type, None)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        if port_type not in self._factories:
            raise KeyError(f"Type not registered: {port_type}")

        if port_type in self._singleton_types:
            if port_type not in self._singletons:
                self._singletons[port_type] = self._factories[port_type]()
            return self._singletons[port_type]

        return self._factories[port_type]()

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._factories

    def clear_singletons(self) -> None:
        """Drop cached singletons so the next resolve builds fresh ones."""
        self._singletons.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .adapters.cache import InMemoryCache, NullCache
        from .adapters.graph import FloydWarshallSolver, TextEdgeRepository
        from .graph.store import WeatherGraph
        from .ports.cache import CachePort
        from .ports.graph import EdgeRepositoryPort, RouteSolverPort
        from .services import RouteNetworkService

        config = config or get_config()
        container = cls(config=config)

        def create_cache() -> CachePort:
            if config.solver.cache_solutions:
                # One slot per regime.
                return InMemoryCache(name="solutions", max_size=4)
            return NullCache()

        container.register(CachePort, create_cache)
        container.register(
            EdgeRepositoryPort,
            lambda: TextEdgeRepository(config.graph),
        )
        container.register(
            RouteSolverPort,
            lambda: FloydWarshallSolver(center_policy=config.solver.center_policy),
        )

        def create_route_network() -> RouteNetworkService:
            return RouteNetworkService(
                repository=container.resolve(EdgeRepositoryPort),
                solver=container.resolve(RouteSolverPort),
                cache=container.resolve(CachePort),
                regime=config.solver.default_regime,
                graph=WeatherGraph(initial_capacity=config.graph.initial_capacity),
            )

        container.register(RouteNetworkService, create_route_network)

        return container


# Global default container (lazy initialized)
_default_container: Optional[Container] = None


def get_container() -> Container:
    """Get the default application container (creates one if needed)."""
    global _default_container
    if _default_container is None:
        _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Reset the default container.

    Call this in tests to ensure a fresh container.
    """
    global _default_container
    _default_container = None
