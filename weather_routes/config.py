"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for all configuration:
file locations for the edge list, solver defaults and logging.

Configuration can be overridden via environment variables:
- WR_GRAPH_DATA_DIR=/path/to/data
- WR_GRAPH_EDGES_FILE=logistica.txt
- WR_SOLVER_DEFAULT_REGIME=storm
- WR_SOLVER_CENTER_POLICY=reachable_only
- WR_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.models import CenterPolicy, Regime


class GraphConfig(BaseSettings):
    """Edge file and graph store configuration.

    Environment variables prefixed with WR_GRAPH_.
    """

    model_config = SettingsConfigDict(env_prefix="WR_GRAPH_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    edges_file: str = "logistica.txt"
    snapshot_file: str = "logistica_current.txt"
    initial_capacity: int = Field(default=16, ge=1)

    @property
    def edges_path(self) -> Path:
        """Full path to the edge list loaded at startup."""
        return self.data_dir / self.edges_file

    @property
    def snapshot_path(self) -> Path:
        """Full path where the current graph is saved."""
        return self.data_dir / self.snapshot_file


class SolverConfig(BaseSettings):
    """Shortest-path solver configuration.

    Environment variables prefixed with WR_SOLVER_.
    """

    model_config = SettingsConfigDict(env_prefix="WR_SOLVER_")

    default_regime: Regime = Regime.NORMAL
    center_policy: CenterPolicy = CenterPolicy.STRICT
    cache_solutions: bool = True


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with WR_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="WR_LOG_")

    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    show_extra: bool = True  # Append `extra={...}` fields to each record


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.graph.edges_path)
        print(config.solver.default_regime)

    Environment variables prefixed with WR_.
    """

    model_config = SettingsConfigDict(env_prefix="WR_")

    graph: GraphConfig = Field(default_factory=GraphConfig)
    solver: SolverConfig = Field(default_factory=SolverConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    @property
    def project_root(self) -> Path:
        """Return the project root directory."""
        return Path(__file__).resolve().parent.parent


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
