"""Tests for the line-oriented command driver."""

import pytest

import weather_routes.cli as cli
from weather_routes.adapters.cache import InMemoryCache
from weather_routes.adapters.graph import FloydWarshallSolver, TextEdgeRepository
from weather_routes.config import AppConfig, GraphConfig
from weather_routes.container import Container
from weather_routes.domain.models import CenterPolicy, Regime
from weather_routes.services import RouteNetworkService


@pytest.fixture
def service(tmp_path):
    svc = RouteNetworkService(
        repository=TextEdgeRepository(GraphConfig(data_dir=tmp_path)),
        solver=FloydWarshallSolver(center_policy=CenterPolicy.STRICT),
        cache=InMemoryCache(name="test"),
    )
    svc.connect("a", "b", 5, 7, 9, 15)
    svc.connect("a", "c", 3, 4, 6, 10)
    svc.connect("b", "c", 2, 3, 4, 8)
    svc.connect("b", "d", 6, 8, 10, 20)
    svc.connect("c", "d", 7, 9, 12, 25)
    return svc


@pytest.fixture
def output():
    lines = []
    return lines


def run(service, output, line):
    return cli.dispatch(service, line, output.append)


def test_route_command(service, output):
    assert run(service, output, "route a d")

    assert output == ["Total time: 10.0 h (normal)", "Route: a -> c -> d", "Via: c"]


def test_route_usage_and_errors(service, output):
    run(service, output, "route a")
    run(service, output, "route a zz")
    run(service, output, "route d a")

    assert output == [
        "Usage: route ORIGIN DESTINATION",
        "Error: Unknown city: zz",
        "Error: No route from d to a",
    ]


def test_center_command_lists_distances(service, output):
    run(service, output, "center")

    assert output[0] == "Center (normal): a"
    assert "  a -> d: 10.0 h" in output


def test_center_command_without_center(service, output):
    service.interrupt("a", "b")
    service.interrupt("a", "c")

    run(service, output, "center")

    assert output == ["No city reaches every other city; the center is undefined."]


def test_interrupt_then_route(service, output):
    run(service, output, "interrupt a b")
    run(service, output, "route a b")
    run(service, output, "interrupt a zz")

    assert output == [
        "Traffic interrupted from a to b.",
        "Error: No route from a to b",
        "One or both cities do not exist.",
    ]


def test_connect_command(service, output):
    run(service, output, "connect d a 1 2 3 4")
    run(service, output, "connect d a x 2 3 4")
    run(service, output, "connect d a -1 2 3 4")

    assert output[0] == "Connection set from d to a."
    assert output[1] == "Not a number: x"
    assert output[2].startswith("Error: Travel time must be finite and non-negative")
    assert service.distance("d", "a") == 1.0


def test_weather_and_regime_commands(service, output):
    run(service, output, "weather c d storm 1")
    run(service, output, "weather c d hail 1")
    run(service, output, "regime storm")
    run(service, output, "route a d")

    assert output[0] == "storm time from c to d set to 1.0."
    assert output[1] == "Unknown city or weather regime."
    assert output[2] == "Active regime: storm"
    assert output[3] == "Total time: 11.0 h (storm)"
    assert service.regime is Regime.STORM


def test_weather_command_ignores_non_ascii_digit_regime(service, output):
    assert run(service, output, "weather c d ² 5")

    assert output == ["Unknown city or weather regime."]
    assert service.distance("c", "d", Regime.SNOW) == 12.0


def test_self_pair_commands_change_nothing(service, output):
    version = service.graph.version

    run(service, output, "interrupt a a")
    run(service, output, "weather a a storm 9")

    assert output == [cli.SAME_CITY, cli.SAME_CITY]
    assert service.graph.version == version


def test_regime_command_rejects_unknown(service, output):
    run(service, output, "regime hail")
    run(service, output, "regime")

    assert output == ["Error: Unknown weather regime: 'hail'", "Active regime: normal"]


def test_distances_command_shows_unreachable(service, output):
    run(service, output, "distances c")

    assert output == ["  c -> a: ∞", "  c -> b: ∞", "  c -> d: 7.0"]


def test_matrix_command(service, output):
    run(service, output, "matrix rain")

    text = "\n".join(output)
    assert text.startswith("Adjacency:")
    assert "Shortest times:" in text
    assert "∞" in text
    assert "13.0" in text


def test_save_command(service, output, tmp_path):
    run(service, output, f"save {tmp_path / 'out.txt'}")

    assert output == [f"Graph saved to {tmp_path / 'out.txt'}."]
    assert (tmp_path / "out.txt").exists()


def test_unknown_and_blank_lines(service, output):
    assert run(service, output, "   ")
    assert run(service, output, "teleport a b")
    assert output == ["Unknown command: teleport (type 'help')"]


def test_help_lists_commands(service, output):
    run(service, output, "help")

    assert output[0] == "Commands:"
    assert "  route ORIGIN DESTINATION" in output
    assert output[-1] == "  quit"


def test_quit_stops_session(service, output):
    assert not run(service, output, "quit")

    cli.run_session(service, ["regime rain", "exit", "regime storm"], output.append)

    assert service.regime is Regime.RAIN


def test_format_matrix():
    import numpy as np

    text = cli.format_matrix(["x", "y"], np.array([[0.0, 2.5], [float("inf"), 0.0]]))

    lines = text.splitlines()
    assert lines[0].split() == ["x", "y"]
    assert lines[1].split() == ["x", "0.0", "2.5"]
    assert lines[2].split() == ["y", "∞", "0.0"]


class TestMain:
    """Test suite for the command-line entry point."""

    @pytest.fixture(autouse=True)
    def quiet_logging(self, monkeypatch):
        monkeypatch.setattr(cli, "configure_logging", lambda config: None)

    @pytest.fixture
    def container(self, tmp_path):
        return Container.create_default(AppConfig(graph=GraphConfig(data_dir=tmp_path)))

    def test_main_runs_session_until_eof(self, container, monkeypatch, capsys):
        commands = iter(["regime snow", "route BuenosAires Caracas"])

        def fake_input(prompt):
            try:
                return next(commands)
            except StopIteration:
                raise EOFError

        monkeypatch.setattr("builtins.input", fake_input)

        assert cli.main(["--sample"], container=container) == 0

        out = capsys.readouterr().out
        assert "Loaded 7 cities" in out
        assert "Active regime: snow" in out
        assert "Route: BuenosAires -> " in out
        assert container.config.graph.edges_path.exists()

    def test_main_applies_regime_option(self, container, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda prompt: (_ for _ in ()).throw(EOFError))

        assert cli.main(["--sample", "--regime", "rain"], container=container) == 0
        assert container.resolve(RouteNetworkService).regime is Regime.RAIN

    def test_main_fails_on_missing_file(self, container, capsys):
        assert cli.main([], container=container) == 1
        assert "--sample" in capsys.readouterr().err

    def test_main_fails_on_empty_file(self, container, tmp_path, capsys):
        empty = tmp_path / "empty.txt"
        empty.write_text("\n", encoding="utf-8")

        assert cli.main(["--file", str(empty)], container=container) == 1
        assert "no valid cities" in capsys.readouterr().err

    def test_main_uses_default_container(self, container, monkeypatch, capsys):
        monkeypatch.setattr(cli, "get_container", lambda: container)
        monkeypatch.setattr("builtins.input", lambda prompt: (_ for _ in ()).throw(EOFError))

        assert cli.main(["--sample"]) == 0
        assert "Loaded 7 cities" in capsys.readouterr().out

    def test_log_level_option_is_normalised(self, container, monkeypatch):
        levels = []
        monkeypatch.setattr(cli, "configure_logging", lambda config: levels.append(config.level))
        monkeypatch.setattr("builtins.input", lambda prompt: (_ for _ in ()).throw(EOFError))

        assert cli.main(["--sample", "--log-level", "debug"], container=container) == 0
        assert levels == ["DEBUG"]

    def test_unknown_log_level_is_a_usage_error(self, container, capsys):
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--log-level", "bogus"], container=container)

        assert excinfo.value.code == 2
        assert "--log-level" in capsys.readouterr().err
