from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class BoundaryError(IndexError):
    """Raised when a node id denotes a border cell or lies outside the grid."""

    def __init__(self, node: int, message: str | None = None) -> None:
        self.node = node
        super().__init__(message or f"Node {node} is not an interior cell.")


class CellState(str, Enum):
    BORDER = "border"
    DEAD = "dead"
    ALIVE = "alive"


class PathStatus(str, Enum):
    TRIVIAL = "trivial"
    REACHED = "reached"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class PathResult:
    """Outcome of one breadth-first search between two nodes."""

    status: PathStatus
    start: int
    end: int
    path: List[int] = field(default_factory=list)
    levels: int = 0

    @property
    def found(self) -> bool:
        return self.status is not PathStatus.UNREACHABLE

    @property
    def distance(self) -> int | None:
        if not self.found:
            return None
        return len(self.path) - 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "start": self.start,
            "end": self.end,
            "path": list(self.path),
            "distance": self.distance,
            "levels": self.levels,
        }
