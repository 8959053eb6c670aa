from __future__ import annotations

from typing import Iterable, List, Optional

from .maze import GridMaze
from .models import CellState

START_MARK = "S"
END_MARK = "E"
DEAD_MARK = "#"
PATH_MARK = "*"
ALIVE_MARK = "."


def cell_marker(maze: GridMaze, node: int, path_nodes: frozenset[int] = frozenset()) -> str:
    if node == maze.start:
        return START_MARK
    if node == maze.end:
        return END_MARK
    if maze.cell_state(node) is CellState.DEAD:
        return DEAD_MARK
    if node in path_nodes:
        return PATH_MARK
    return ALIVE_MARK


def render_maze(maze: GridMaze, path: Optional[Iterable[int]] = None) -> str:
    """Render the interior as text, one row per line."""
    path_nodes = frozenset(path or ())
    rows: List[str] = []
    for y in range(1, maze.height + 1):
        rows.append(
            "".join(
                cell_marker(maze, maze.coordinate_to_id(x, y), path_nodes)
                for x in range(1, maze.width + 1)
            )
        )
    return "\n".join(rows)
