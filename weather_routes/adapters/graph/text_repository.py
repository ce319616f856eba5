"""Whitespace-delimited edge file repository.

One edge per line:

    origin destination normal rain snow storm

Empty lines are ignored. Lines with the wrong number of fields,
unparseable or invalid travel times, or invalid names are logged as
warnings and skipped; the rest of the file still loads.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from ...config import GraphConfig, get_config
from ...domain.errors import GraphError, InvalidNameError, InvalidWeightError
from ...domain.models import LoadReport, Regime, SkippedLine
from ...graph.store import WeatherGraph

FIELDS_PER_LINE = 6

SAMPLE_EDGES: Tuple[Tuple[str, str, float, float, float, float], ...] = (
    ("BuenosAires", "SaoPaulo", 10.0, 15.0, 20.0, 50.0),
    ("BuenosAires", "Lima", 15.0, 20.0, 30.0, 70.0),
    ("Lima", "Quito", 10.0, 12.0, 15.0, 20.0),
    ("SaoPaulo", "Lima", 8.0, 10.0, 12.0, 25.0),
    ("SaoPaulo", "Quito", 20.0, 25.0, 30.0, 60.0),
    ("Quito", "Bogota", 5.0, 8.0, 10.0, 15.0),
    ("Lima", "Bogota", 12.0, 15.0, 18.0, 35.0),
    ("Bogota", "Caracas", 8.0, 10.0, 12.0, 20.0),
    ("SaoPaulo", "Caracas", 25.0, 30.0, 35.0, 70.0),
    ("BuenosAires", "Montevideo", 3.0, 4.0, 5.0, 8.0),
    ("Montevideo", "SaoPaulo", 12.0, 15.0, 18.0, 30.0),
)

PathLike = Union[str, Path]


def format_edge(origin: str, destination: str, weights: Iterable[float]) -> str:
    """Render one edge line with one fractional digit per weight."""
    return " ".join([origin, destination, *(f"{w:.1f}" for w in weights)])


@dataclass
class TextEdgeRepository:
    """Edge repository backed by a plain text file.

    This adapter implements EdgeRepositoryPort.

    Attributes:
        config: Graph configuration (paths, initial capacity)
    """

    config: GraphConfig = field(default_factory=lambda: get_config().graph)
    _logger: logging.Logger = field(init=False, repr=False)
    _last_report: Optional[LoadReport] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def last_report(self) -> Optional[LoadReport]:
        return self._last_report

    def exists(self, path: Optional[PathLike] = None) -> bool:
        """Check whether the edge file (the configured one by default) exists."""
        source = Path(path) if path is not None else self.config.edges_path
        return source.is_file()

    def load(self, path: Optional[PathLike] = None) -> WeatherGraph:
        """Build a new graph from an edge file.

        Returns:
            The loaded graph. The per-line outcome is in ``last_report``.

        Raises:
            GraphError: If the file cannot be read.
        """
        source = Path(path) if path is not None else self.config.edges_path
        self._logger.debug("Loading edges", extra={"path": str(source)})

        try:
            with source.open(encoding="utf-8") as f:
                lines = f.read().splitlines()
        except OSError as e:
            raise GraphError(
                f"Failed to load graph from {source}",
                file_path=str(source),
                cause=e,
            )

        graph = WeatherGraph(initial_capacity=self.config.initial_capacity)
        report = self.read_lines(lines, graph, source=str(source))
        self._last_report = report

        self._logger.info(
            "Graph loaded",
            extra={
                "path": str(source),
                "cities": len(graph),
                "edges": report.edges_loaded,
                "skipped": len(report.skipped_lines),
            },
        )
        return graph

    def read_lines(
        self, lines: Iterable[str], graph: WeatherGraph, source: str = "<lines>"
    ) -> LoadReport:
        """Add every valid edge line to ``graph``.

        Invalid lines are validated before the graph is touched, so a
        rejected line never creates a city.
        """
        loaded = 0
        skipped: List[SkippedLine] = []

        for line_number, raw in enumerate(lines, start=1):
            line = raw.strip()
            if not line:
                continue

            reason = self._add_line(line, graph)
            if reason is None:
                loaded += 1
                continue

            skipped.append(SkippedLine(line_number=line_number, reason=reason, text=line))
            self._logger.warning(
                "Skipping edge line",
                extra={"source": source, "line_number": line_number, "reason": reason},
            )

        return LoadReport(path=source, edges_loaded=loaded, skipped_lines=tuple(skipped))

    def _add_line(self, line: str, graph: WeatherGraph) -> Optional[str]:
        """Add one edge; return the reason it was rejected, if any."""
        parts = line.split()
        if len(parts) != FIELDS_PER_LINE:
            return f"expected {FIELDS_PER_LINE} fields, found {len(parts)}"

        origin, destination = parts[0], parts[1]
        try:
            weights = [float(p) for p in parts[2:]]
        except ValueError:
            return "invalid number format"

        try:
            graph.add_edge(origin, destination, *weights)
        except (InvalidNameError, InvalidWeightError) as e:
            return e.message
        return None

    def save(self, graph: WeatherGraph, path: Optional[PathLike] = None) -> Path:
        """Write every pair with a finite normal-regime travel time.

        Raises:
            GraphError: If the file cannot be written.
        """
        target = Path(path) if path is not None else self.config.snapshot_path
        lines = [
            format_edge(edge.origin, edge.destination, edge.weights)
            for edge in graph.edges(Regime.NORMAL)
        ]
        self._write(target, lines)
        self._logger.info(
            "Graph saved", extra={"path": str(target), "edges": len(lines)}
        )
        return target

    def write_sample(self, path: Optional[PathLike] = None) -> Path:
        """Write the South-American sample network.

        Raises:
            GraphError: If the file cannot be written.
        """
        target = Path(path) if path is not None else self.config.edges_path
        lines = [format_edge(o, d, ws) for o, d, *ws in SAMPLE_EDGES]
        self._write(target, lines)
        self._logger.info("Sample edge file written", extra={"path": str(target)})
        return target

    def _write(self, target: Path, lines: List[str]) -> None:
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("w", encoding="utf-8") as f:
                for line in lines:
                    f.write(line + "\n")
        except OSError as e:
            raise GraphError(
                f"Failed to write graph to {target}",
                file_path=str(target),
                cause=e,
            )
