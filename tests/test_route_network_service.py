"""Tests for RouteNetworkService."""

import math

import pytest

from weather_routes.adapters.cache import InMemoryCache
from weather_routes.adapters.graph import FloydWarshallSolver, TextEdgeRepository
from weather_routes.config import GraphConfig
from weather_routes.domain.errors import (
    CityNotFoundError,
    GraphError,
    InvalidWeightError,
    NoRouteFoundError,
    UnknownRegimeError,
)
from weather_routes.domain.models import CenterPolicy, Regime
from weather_routes.services import RouteNetworkService


class CountingSolver:
    """Solver wrapper recording how often the network is solved."""

    def __init__(self):
        self.inner = FloydWarshallSolver(center_policy=CenterPolicy.STRICT)
        self.calls = []

    def solve(self, graph, regime):
        self.calls.append(regime)
        return self.inner.solve(graph, regime)


@pytest.fixture
def config(tmp_path):
    return GraphConfig(data_dir=tmp_path)


@pytest.fixture
def solver():
    return CountingSolver()


@pytest.fixture
def service(config, solver):
    svc = RouteNetworkService(
        repository=TextEdgeRepository(config),
        solver=solver,
        cache=InMemoryCache(name="test", max_size=4),
    )
    svc.connect("a", "b", 5, 7, 9, 15)
    svc.connect("a", "c", 3, 4, 6, 10)
    svc.connect("b", "c", 2, 3, 4, 8)
    svc.connect("b", "d", 6, 8, 10, 20)
    svc.connect("c", "d", 7, 9, 12, 25)
    return svc


def test_shortest_route_under_active_regime(service):
    route = service.shortest_route("a", "d")

    assert route.path == ("a", "c", "d")
    assert route.total_time == 10.0
    assert route.regime is Regime.NORMAL


def test_set_regime_switches_weights(service):
    service.set_regime("storm")

    assert service.regime is Regime.STORM
    assert service.distance("a", "d") == 35.0
    assert service.path("a", "d") == ["a", "b", "d"]
    assert service.distance("a", "d", Regime.NORMAL) == 10.0


def test_set_regime_rejects_unknown_value(service):
    with pytest.raises(UnknownRegimeError):
        service.set_regime("hail")

    assert service.regime is Regime.NORMAL


def test_solutions_are_cached_per_regime(service, solver):
    service.distance("a", "d")
    service.path("a", "d")
    service.center()
    assert solver.calls == [Regime.NORMAL]

    service.distance("a", "d", Regime.RAIN)
    service.distance("a", "d", Regime.RAIN)
    assert solver.calls == [Regime.NORMAL, Regime.RAIN]


def test_mutation_forces_fresh_solve(service, solver):
    assert service.distance("a", "b") == 5.0

    assert service.interrupt("a", "b")

    assert math.isinf(service.distance("a", "b"))
    assert service.distance("a", "d") == 10.0
    assert len(solver.calls) == 2
    assert not service.solution().is_stale(service.graph)


def test_interrupt_unknown_city_returns_false(service):
    version = service.graph.version

    assert not service.interrupt("a", "Nowhere")
    assert service.graph.version == version


def test_update_weather_changes_single_regime(service):
    assert service.update_weather("c", "d", "storm", 1.0)

    assert service.distance("a", "d", Regime.STORM) == 11.0
    assert service.distance("a", "d", Regime.NORMAL) == 10.0


def test_update_weather_ignores_unknown_city_or_regime(service):
    assert not service.update_weather("c", "Nowhere", Regime.RAIN, 1.0)
    assert not service.update_weather("c", "d", 7, 1.0)
    assert not service.update_weather("c", "d", "hail", 1.0)


def test_update_weather_rejects_invalid_weight(service):
    with pytest.raises(InvalidWeightError):
        service.update_weather("c", "d", Regime.RAIN, float("inf"))


def test_route_errors(service):
    with pytest.raises(CityNotFoundError):
        service.shortest_route("a", "zz")
    with pytest.raises(NoRouteFoundError):
        service.shortest_route("d", "a")


def test_center_and_distances_from(service):
    assert service.center() == "a"
    assert service.center(policy=CenterPolicy.REACHABLE_ONLY) == "d"
    assert service.distances_from("b") == {"c": 2.0, "d": 6.0}


def test_matrices_for_display(service):
    adjacency = service.adjacency_matrix(Regime.RAIN)
    distances = service.distance_matrix()

    assert adjacency.shape == (4, 4)
    assert adjacency[0, 1] == 7.0
    assert distances[0, 3] == 10.0


def test_load_creates_sample_when_missing(config, solver):
    service = RouteNetworkService(
        repository=TextEdgeRepository(config), solver=solver, cache=InMemoryCache()
    )

    service.load(create_sample=True)

    assert config.edges_path.exists()
    assert len(service.graph) == 7
    assert service.center() == "BuenosAires"


def test_load_keeps_existing_file(config, solver):
    config.edges_path.write_text("X Y 1 2 3 4\n", encoding="utf-8")
    service = RouteNetworkService(
        repository=TextEdgeRepository(config), solver=solver, cache=InMemoryCache()
    )

    service.load(create_sample=True)

    assert service.graph.cities() == ["X", "Y"]


def test_load_missing_file_without_sample_raises(config, solver):
    service = RouteNetworkService(
        repository=TextEdgeRepository(config), solver=solver, cache=InMemoryCache()
    )

    with pytest.raises(GraphError):
        service.load()


def test_load_replaces_graph_and_drops_cached_solutions(service, config, solver):
    service.distance("a", "d")
    path = TextEdgeRepository(config).write_sample()

    service.load(path)

    assert "a" not in service.graph
    assert math.isinf(service.distance("a", "d"))
    assert service.distance("BuenosAires", "Caracas") == 35.0


def test_save_writes_snapshot(service, config):
    target = service.save()

    assert target == config.snapshot_path
    assert target.read_text(encoding="utf-8").splitlines()[0] == "a b 5.0 7.0 9.0 15.0"


def test_self_pair_mutations_are_rejected(service, solver):
    service.distance("a", "d")
    version = service.graph.version

    assert not service.interrupt("a", "a")
    assert not service.update_weather("a", "a", Regime.STORM, 9.0)

    assert service.graph.version == version
    assert service.cache.size() == 1
    assert solver.calls == [Regime.NORMAL]


def test_distance_matrix_is_a_copy(service):
    matrix = service.distance_matrix()
    matrix[0, 3] = 0.0

    assert service.distance("a", "d") == 10.0
    assert service.distance_matrix()[0, 3] == 10.0
