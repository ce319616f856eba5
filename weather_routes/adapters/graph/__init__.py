"""Graph adapters - Implementations of graph-related ports.

Available implementations:
- TextEdgeRepository: Loads and saves the edge list as text
- FloydWarshallSolver: All-pairs shortest paths per weather regime
"""

from .floyd_solver import AllPairsSolution, FloydWarshallSolver
from .text_repository import SAMPLE_EDGES, TextEdgeRepository

__all__ = [
    "AllPairsSolution",
    "FloydWarshallSolver",
    "SAMPLE_EDGES",
    "TextEdgeRepository",
]
