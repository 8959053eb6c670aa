from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from .graph import AdjacencyGraph
from .models import BoundaryError, CellState, PathResult

DEFAULT_WIDTH = 10
DEFAULT_HEIGHT = 10


class GridMaze:
    """
    Rectangular maze backed by an ``AdjacencyGraph``.

    The playable ``width x height`` interior is surrounded by a one-cell ring
    of border cells. Border ids exist in the graph but never carry edges.
    Interior cells are either alive (linked to their alive 4-neighbors) or
    dead (no edges).
    """

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        *,
        start: Optional[int] = None,
        end: Optional[int] = None,
        verbose: bool = False,
    ) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"Maze must be at least 1x1, got {width}x{height}.")
        self._width = width
        self._height = height
        self.verbose = verbose

        self._graph = AdjacencyGraph((width + 2) * (height + 2))
        self._states: List[CellState] = [CellState.BORDER] * len(self._graph)

        origin = self.coordinate_to_id(1, 1)
        self._start = origin if start is None else start
        self._end = self._start if end is None else end

        self.init_graph()

    def _log(self, message: str) -> None:
        if self.verbose:
            print(message)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def stride(self) -> int:
        return self._width + 2

    @property
    def start(self) -> int:
        return self._start

    @property
    def end(self) -> int:
        return self._end

    @property
    def graph(self) -> AdjacencyGraph:
        return self._graph

    def __len__(self) -> int:
        return len(self._graph)

    def set_start(self, node: int) -> None:
        self._start = node

    def set_end(self, node: int) -> None:
        self._end = node

    def coordinate_to_id(self, x: int, y: int) -> int:
        return x + y * self.stride

    def id_to_coordinate(self, node: int) -> Tuple[int, int]:
        return node % self.stride, node // self.stride

    def is_interior(self, node: int) -> bool:
        if not 0 <= node < len(self._graph):
            return False
        x, y = self.id_to_coordinate(node)
        return 0 < x <= self._width and 0 < y <= self._height

    def _require_interior(self, node: int) -> None:
        if not self.is_interior(node):
            raise BoundaryError(node)

    def interior_ids(self) -> List[int]:
        return [
            self.coordinate_to_id(x, y)
            for y in range(1, self._height + 1)
            for x in range(1, self._width + 1)
        ]

    def grid_neighbors(self, node: int) -> List[int]:
        """Interior 4-neighbors of an interior cell, in up/left/right/down order."""
        self._require_interior(node)
        x, y = self.id_to_coordinate(node)
        candidates = [(x, y - 1), (x - 1, y), (x + 1, y), (x, y + 1)]
        return [
            self.coordinate_to_id(cx, cy)
            for cx, cy in candidates
            if 0 < cx <= self._width and 0 < cy <= self._height
        ]

    def init_graph(self) -> None:
        for node in self.interior_ids():
            self._states[node] = CellState.ALIVE
            for neighbor in self.grid_neighbors(node):
                self._graph.add_edge(node, neighbor)
        self._log(
            f"Initialized {self._width}x{self._height} maze "
            f"({len(self._graph)} nodes, {len(self._graph.edges())} edges)."
        )

    def get_relation(self, node: int) -> Tuple[int, ...]:
        self._require_interior(node)
        return self._graph.neighbors(node)

    def cell_state(self, node: int) -> CellState:
        if not 0 <= node < len(self._graph):
            raise BoundaryError(node)
        return self._states[node]

    def is_alive(self, node: int) -> bool:
        return self.cell_state(node) is CellState.ALIVE

    def alive_neighbors(self, node: int) -> List[int]:
        return [n for n in self.grid_neighbors(node) if self._states[n] is CellState.ALIVE]

    def kill(self, node: int) -> None:
        self._require_interior(node)
        self._states[node] = CellState.DEAD
        former = self._graph.clear_node(node)
        self._log(f"Killed cell {self.id_to_coordinate(node)} ({len(former)} edges removed).")

    def revive(self, node: int) -> None:
        self._require_interior(node)
        self._states[node] = CellState.ALIVE
        linked = self.alive_neighbors(node)
        for neighbor in linked:
            self._graph.add_edge(node, neighbor)
        self._log(f"Revived cell {self.id_to_coordinate(node)} ({len(linked)} edges added).")

    def toggle(self, node: int) -> CellState:
        if self.cell_state(node) is CellState.ALIVE:
            self.kill(node)
        else:
            self.revive(node)
        return self._states[node]

    def find_path(self) -> PathResult:
        return self._graph.find_path(self._start, self._end)

    def shortest_path(self) -> List[int]:
        return self._graph.shortest_path(self._start, self._end)

    def move_to(self, node: int) -> PathResult:
        """
        Point ``end`` at ``node`` and search from ``start``.

        On success ``start`` advances to ``end``; otherwise ``start`` is left
        where it was.
        """
        self._require_interior(node)
        self._end = node
        result = self.find_path()
        if result.found:
            self._start = node
        self._log(
            f"Move {self.id_to_coordinate(result.start)} -> {self.id_to_coordinate(node)}: "
            f"{result.status.value}"
        )
        return result

    def to_dict(self) -> Dict[str, Any]:
        dead = [
            list(self.id_to_coordinate(node))
            for node in self.interior_ids()
            if self._states[node] is CellState.DEAD
        ]
        return {
            "width": self._width,
            "height": self._height,
            "start": list(self.id_to_coordinate(self._start)),
            "end": list(self.id_to_coordinate(self._end)),
            "dead": dead,
        }

    def _layout_cell(self, value: Any, label: str) -> int:
        """Interior node id for an ``[x, y]`` layout entry."""
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            raise ValueError(f"Layout {label} must be an [x, y] pair, got {value!r}.")
        try:
            x, y = (int(v) for v in value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Layout {label} must hold integers, got {value!r}.") from exc
        node = self.coordinate_to_id(x, y)
        if not self.is_interior(node):
            raise BoundaryError(
                node, f"Layout {label} {(x, y)} is outside the {self._width}x{self._height} grid."
            )
        return node

    def load_from_dict(self, payload: Dict[str, Any]) -> None:
        """Apply a ``to_dict`` snapshot. Nothing changes if the payload is invalid."""
        width, height = _layout_size(payload, self._width, self._height)
        if (width, height) != (self._width, self._height):
            raise ValueError(
                f"Layout is {width}x{height} but maze is {self._width}x{self._height}."
            )

        dead_field = payload.get("dead", [])
        if not isinstance(dead_field, list):
            raise ValueError(f"Layout dead cells must be a list, got {dead_field!r}.")
        dead = [self._layout_cell(value, "dead cell") for value in dead_field]
        start = self._layout_cell(payload["start"], "start") if "start" in payload else self._start
        end = self._layout_cell(payload["end"], "end") if "end" in payload else self._end

        for node in self.interior_ids():
            if self._states[node] is CellState.DEAD:
                self.revive(node)
        for node in dead:
            self.kill(node)
        self._start = start
        self._end = end

    @classmethod
    def from_dict(cls, payload: Dict[str, Any], verbose: bool = False) -> "GridMaze":
        width, height = _layout_size(payload, DEFAULT_WIDTH, DEFAULT_HEIGHT)
        maze = cls(width, height, verbose=verbose)
        maze.load_from_dict(payload)
        return maze


def _layout_size(payload: Any, width: int, height: int) -> Tuple[int, int]:
    if not isinstance(payload, dict):
        raise ValueError(f"Layout must be a JSON object, got {type(payload).__name__}.")
    try:
        return int(payload.get("width", width)), int(payload.get("height", height))
    except (TypeError, ValueError) as exc:
        raise ValueError("Layout width and height must be integers.") from exc
