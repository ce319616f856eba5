"""Line-oriented command driver for the route network.

Each input line is split on whitespace; the first word selects a
handler from ``COMMANDS`` and the rest are its arguments. Handlers only
talk to ``RouteNetworkService``.

    python -m weather_routes --file data/logistica.txt --regime rain
"""

from __future__ import annotations

import argparse
import math
import sys
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence

import numpy as np

from .container import Container, get_container
from .domain.errors import GraphError, RouteNetworkError
from .domain.models import REGIMES
from .logging_setup import configure_logging
from .services import RouteNetworkService

Output = Callable[[str], None]
Handler = Callable[[RouteNetworkService, List[str], Output], None]

QUIT_WORDS = {"quit", "exit", "q"}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
SAME_CITY = "Origin and destination must be different cities."
CELL_WIDTH = 12


class UsageError(Exception):
    """Command called with the wrong arguments."""


def format_time(value: float) -> str:
    return "∞" if math.isinf(value) else f"{value:.1f}"


def format_matrix(cities: Sequence[str], matrix: np.ndarray) -> str:
    """Render a square matrix with city names as row and column headers."""
    header = " " * CELL_WIDTH + "".join(f"{c:<{CELL_WIDTH}}" for c in cities)
    rows = [header.rstrip()]
    for name, row in zip(cities, matrix.tolist()):
        cells = "".join(f"{format_time(v):<{CELL_WIDTH}}" for v in row)
        rows.append(f"{name:<{CELL_WIDTH}}{cells}".rstrip())
    return "\n".join(rows)


def _parse_float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise UsageError(f"Not a number: {text}")


def _expect(args: List[str], count: int, usage: str) -> None:
    if len(args) != count:
        raise UsageError(f"Usage: {usage}")


# ----------------------------------------------------------------------
# Handlers
# ----------------------------------------------------------------------


def cmd_help(service: RouteNetworkService, args: List[str], out: Output) -> None:
    out("Commands:")
    for _, usage in COMMANDS.values():
        out(f"  {usage}")
    out("  quit")


def cmd_cities(service: RouteNetworkService, args: List[str], out: Output) -> None:
    out(f"{len(service.graph)} cities: {', '.join(service.graph.cities())}")


def cmd_route(service: RouteNetworkService, args: List[str], out: Output) -> None:
    _expect(args, 2, COMMANDS["route"][1])
    route = service.shortest_route(args[0], args[1])
    out(f"Total time: {route.total_time:.1f} h ({route.regime.value})")
    out("Route: " + " -> ".join(route.path))
    if route.intermediate:
        out("Via: " + ", ".join(route.intermediate))


def cmd_center(service: RouteNetworkService, args: List[str], out: Output) -> None:
    center = service.center()
    if center is None:
        out("No city reaches every other city; the center is undefined.")
        return
    out(f"Center ({service.regime.value}): {center}")
    for city, time in service.distances_from(center).items():
        out(f"  {center} -> {city}: {time:.1f} h")


def cmd_distances(service: RouteNetworkService, args: List[str], out: Output) -> None:
    _expect(args, 1, COMMANDS["distances"][1])
    origin = args[0]
    if origin not in service.graph:
        out(f"Unknown city: {origin}")
        return
    reachable = service.distances_from(origin)
    for city in service.graph.cities():
        if city == origin:
            continue
        out(f"  {origin} -> {city}: {format_time(reachable.get(city, math.inf))}")


def cmd_interrupt(service: RouteNetworkService, args: List[str], out: Output) -> None:
    _expect(args, 2, COMMANDS["interrupt"][1])
    if args[0] == args[1]:
        out(SAME_CITY)
        return
    if service.interrupt(args[0], args[1]):
        out(f"Traffic interrupted from {args[0]} to {args[1]}.")
    else:
        out("One or both cities do not exist.")


def cmd_connect(service: RouteNetworkService, args: List[str], out: Output) -> None:
    _expect(args, 6, COMMANDS["connect"][1])
    normal, rain, snow, storm = (_parse_float(a) for a in args[2:])
    service.connect(args[0], args[1], normal, rain, snow, storm)
    out(f"Connection set from {args[0]} to {args[1]}.")


def cmd_weather(service: RouteNetworkService, args: List[str], out: Output) -> None:
    _expect(args, 4, COMMANDS["weather"][1])
    weight = _parse_float(args[3])
    if args[0] == args[1]:
        out(SAME_CITY)
        return
    if service.update_weather(args[0], args[1], args[2], weight):
        out(f"{args[2]} time from {args[0]} to {args[1]} set to {weight:.1f}.")
    else:
        out("Unknown city or weather regime.")


def cmd_regime(service: RouteNetworkService, args: List[str], out: Output) -> None:
    if not args:
        out(f"Active regime: {service.regime.value}")
        return
    _expect(args, 1, COMMANDS["regime"][1])
    regime = service.set_regime(args[0])
    out(f"Active regime: {regime.value}")


def cmd_matrix(service: RouteNetworkService, args: List[str], out: Output) -> None:
    regime = args[0] if args else None
    cities = service.graph.cities()
    out("Adjacency:")
    out(format_matrix(cities, service.adjacency_matrix(regime)))
    out("Shortest times:")
    out(format_matrix(cities, service.distance_matrix(regime)))


def cmd_save(service: RouteNetworkService, args: List[str], out: Output) -> None:
    target = service.save(args[0] if args else None)
    out(f"Graph saved to {target}.")


COMMANDS: Dict[str, tuple[Handler, str]] = {
    "help": (cmd_help, "help"),
    "cities": (cmd_cities, "cities"),
    "route": (cmd_route, "route ORIGIN DESTINATION"),
    "center": (cmd_center, "center"),
    "distances": (cmd_distances, "distances ORIGIN"),
    "interrupt": (cmd_interrupt, "interrupt ORIGIN DESTINATION"),
    "connect": (cmd_connect, "connect ORIGIN DESTINATION NORMAL RAIN SNOW STORM"),
    "weather": (cmd_weather, "weather ORIGIN DESTINATION REGIME TIME"),
    "regime": (cmd_regime, "regime [" + "|".join(r.value for r in REGIMES) + "]"),
    "matrix": (cmd_matrix, "matrix [REGIME]"),
    "save": (cmd_save, "save [PATH]"),
}


def dispatch(service: RouteNetworkService, line: str, out: Output = print) -> bool:
    """Run one command line. Returns False when the session should end."""
    words = line.split()
    if not words:
        return True

    name, args = words[0].lower(), words[1:]
    if name in QUIT_WORDS:
        return False

    entry = COMMANDS.get(name)
    if entry is None:
        out(f"Unknown command: {name} (type 'help')")
        return True

    handler, _ = entry
    try:
        handler(service, args, out)
    except UsageError as e:
        out(str(e))
    except RouteNetworkError as e:
        out(f"Error: {e}")
    return True


def run_session(
    service: RouteNetworkService, lines: Iterable[str], out: Output = print
) -> None:
    """Dispatch lines until one of them is a quit command or input ends."""
    for line in lines:
        if not dispatch(service, line, out):
            break


def _prompt_lines(prompt: str) -> Iterator[str]:
    while True:
        try:
            yield input(prompt)
        except EOFError:
            return


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weather_routes",
        description="Shortest routes and graph center under weather regimes.",
    )
    parser.add_argument("--file", help="edge file (default: configured edges file)")
    parser.add_argument(
        "--regime",
        choices=[r.value for r in REGIMES],
        help="weather regime for queries (default: configured regime)",
    )
    parser.add_argument(
        "--sample",
        action="store_true",
        help="write the sample network if the edge file is missing",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="override WR_LOG_LEVEL",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None, container: Optional[Container] = None) -> int:
    args = build_parser().parse_args(argv)

    container = container or get_container()
    config = container.config
    observability = config.observability
    if args.log_level:
        observability = observability.model_copy(update={"level": args.log_level})
    configure_logging(observability)

    service: RouteNetworkService = container.resolve(RouteNetworkService)

    try:
        service.load(args.file, create_sample=args.sample)
    except GraphError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Run with --sample to create an example edge file.", file=sys.stderr)
        return 1

    if len(service.graph) == 0:
        print("Error: the edge file contains no valid cities.", file=sys.stderr)
        return 1

    if args.regime:
        service.set_regime(args.regime)

    print(f"Loaded {len(service.graph)} cities: {', '.join(service.graph.cities())}")
    print("Type 'help' for commands.")
    run_session(service, _prompt_lines("> "))
    return 0
