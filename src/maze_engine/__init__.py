"""Public package interface."""

from .graph import AdjacencyGraph
from .maze import GridMaze
from .models import BoundaryError, CellState, PathResult, PathStatus

__all__ = [
    "AdjacencyGraph",
    "GridMaze",
    "BoundaryError",
    "CellState",
    "PathResult",
    "PathStatus",
]
