from __future__ import annotations

from bisect import bisect_left, insort
from typing import Dict, List, Optional, Tuple

import networkx as nx

from .models import PathResult, PathStatus


class AdjacencyGraph:
    """
    Fixed-size undirected graph stored as one sorted adjacency list per node.

    Node ids are the integers ``0..len(graph) - 1``. Every edge is stored in
    both endpoint lists and each list is kept in ascending order.
    """

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"Graph size must be non-negative, got {size}.")
        self._adjacency: List[List[int]] = [[] for _ in range(size)]

    def __len__(self) -> int:
        return len(self._adjacency)

    def __getitem__(self, node: int) -> Tuple[int, ...]:
        return self.neighbors(node)

    def _check(self, node: int) -> None:
        if not 0 <= node < len(self._adjacency):
            raise IndexError(f"Node {node} is out of range [0, {len(self._adjacency)}).")

    def neighbors(self, node: int) -> Tuple[int, ...]:
        self._check(node)
        return tuple(self._adjacency[node])

    def degree(self, node: int) -> int:
        self._check(node)
        return len(self._adjacency[node])

    def has_edge(self, u: int, v: int) -> bool:
        self._check(u)
        self._check(v)
        neighbors = self._adjacency[u]
        idx = bisect_left(neighbors, v)
        return idx < len(neighbors) and neighbors[idx] == v

    def add_edge(self, u: int, v: int) -> None:
        if u == v:
            raise ValueError(f"Self loop on node {u} is not allowed.")
        if self.has_edge(u, v):
            return
        insort(self._adjacency[u], v)
        insort(self._adjacency[v], u)

    def remove_edge(self, u: int, v: int) -> None:
        self._discard(u, v)
        self._discard(v, u)

    def _discard(self, node: int, neighbor: int) -> None:
        self._check(node)
        neighbors = self._adjacency[node]
        idx = bisect_left(neighbors, neighbor)
        if idx < len(neighbors) and neighbors[idx] == neighbor:
            del neighbors[idx]

    def clear_node(self, node: int) -> List[int]:
        """Drop every edge touching ``node`` and return its former neighbors."""
        self._check(node)
        former = self._adjacency[node]
        self._adjacency[node] = []
        for neighbor in former:
            self._discard(neighbor, node)
        return former

    def is_sorted(self) -> bool:
        return all(
            all(neighbors[i] < neighbors[i + 1] for i in range(len(neighbors) - 1))
            for neighbors in self._adjacency
        )

    def is_symmetric(self) -> bool:
        for node, neighbors in enumerate(self._adjacency):
            for neighbor in neighbors:
                if not self.has_edge(neighbor, node):
                    return False
        return True

    def edges(self) -> List[Tuple[int, int]]:
        return [
            (node, neighbor)
            for node, neighbors in enumerate(self._adjacency)
            for neighbor in neighbors
            if node < neighbor
        ]

    def to_networkx(self) -> nx.Graph:
        graph = nx.Graph()
        graph.add_nodes_from(range(len(self._adjacency)))
        graph.add_edges_from(self.edges())
        return graph

    def find_path(self, start: int, end: int) -> PathResult:
        """
        Level-synchronous breadth-first search from ``start`` to ``end``.

        Each node keeps the level and predecessor of its first discovery. The
        search stops at the frontier where ``end`` is discovered.
        """
        self._check(start)
        self._check(end)
        if start == end:
            return PathResult(PathStatus.TRIVIAL, start, end, [start], 0)

        parents: Dict[int, Optional[int]] = {start: None}
        frontier: List[int] = [start]
        level = 0
        found = False

        while frontier and not found:
            level += 1
            next_frontier: List[int] = []
            for node in frontier:
                for neighbor in self._adjacency[node]:
                    if neighbor in parents:
                        continue
                    parents[neighbor] = node
                    if neighbor == end:
                        found = True
                        break
                    next_frontier.append(neighbor)
                if found:
                    break
            frontier = next_frontier

        if not found:
            return PathResult(PathStatus.UNREACHABLE, start, end, [], level)

        path: List[int] = []
        cursor: Optional[int] = end
        while cursor is not None:
            path.append(cursor)
            cursor = parents[cursor]
        path.reverse()
        return PathResult(PathStatus.REACHED, start, end, path, level)

    def shortest_path(self, start: int, end: int) -> List[int]:
        """Return the start-to-end path, or ``[start]`` when ``end`` is unreachable."""
        result = self.find_path(start, end)
        if result.found:
            return list(result.path)
        return [start]
