from __future__ import annotations

from typing import Any, Dict, List, Sequence

from .graph import AdjacencyGraph


def validate_path(
    path: Sequence[int],
    graph: AdjacencyGraph,
    source: int,
    target: int,
) -> Dict[str, Any]:
    """Check that ``path`` runs from ``source`` to ``target`` along existing edges."""

    if not path:
        return {"is_valid": False, "path_length": 0, "errors": ["Path is empty."]}

    errors: List[str] = []
    if path[0] != source:
        errors.append(f"Path starts at node {path[0]}, expected {source}.")
    if path[-1] != target:
        errors.append(f"Path ends at node {path[-1]}, expected {target}.")

    outside = [node for node in path if not 0 <= node < len(graph)]
    if outside:
        errors.append(f"Nodes outside the graph: {outside}.")
    else:
        gaps = [(u, v) for u, v in zip(path, path[1:]) if not graph.has_edge(u, v)]
        if gaps:
            errors.append(f"Steps without an edge: {gaps}.")

    return {"is_valid": not errors, "path_length": len(path) - 1, "errors": errors}
