from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List, Optional, Tuple

from .maze import DEFAULT_HEIGHT, DEFAULT_WIDTH, GridMaze
from .models import BoundaryError, PathResult
from .render import render_maze
from .validation import validate_path


def parse_coordinate(text: str) -> Tuple[int, int]:
    try:
        x_text, y_text = text.split(",")
        return int(x_text), int(y_text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected X,Y coordinate, got '{text}'.") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Grid maze shortest-path engine")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="Interior width")
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="Interior height")
    parser.add_argument("--layout", type=str, help="Path to load a maze layout JSON")
    parser.add_argument("--save-layout", type=str, help="Path to save the final layout JSON")
    parser.add_argument(
        "--kill",
        type=parse_coordinate,
        action="append",
        default=[],
        metavar="X,Y",
        help="Kill a cell (repeatable)",
    )
    parser.add_argument(
        "--toggle",
        type=parse_coordinate,
        action="append",
        default=[],
        metavar="X,Y",
        help="Toggle a cell (repeatable)",
    )
    parser.add_argument("--start", type=parse_coordinate, metavar="X,Y", help="Path start cell")
    parser.add_argument("--end", type=parse_coordinate, metavar="X,Y", help="Path end cell")
    parser.add_argument("--check", action="store_true", help="Validate graph invariants and the path")
    parser.add_argument("--quiet", action="store_true", help="Disable verbose logs")
    return parser


def _interior_id(maze: GridMaze, coordinate: Tuple[int, int]) -> int:
    node = maze.coordinate_to_id(*coordinate)
    if not maze.is_interior(node):
        raise BoundaryError(node, f"Cell {coordinate} is outside the {maze.width}x{maze.height} grid.")
    return node


def _build_maze(args: argparse.Namespace) -> GridMaze:
    verbose = not args.quiet
    if args.layout:
        payload = json.loads(Path(args.layout).read_text(encoding="utf-8"))
        maze = GridMaze.from_dict(payload, verbose=verbose)
    else:
        maze = GridMaze(args.width, args.height, verbose=verbose)

    for coordinate in args.kill:
        maze.kill(_interior_id(maze, coordinate))
    for coordinate in args.toggle:
        maze.toggle(_interior_id(maze, coordinate))
    if args.start is not None:
        maze.set_start(_interior_id(maze, args.start))
    if args.end is not None:
        maze.set_end(_interior_id(maze, args.end))
    return maze


def _print_result(maze: GridMaze, result: PathResult) -> None:
    print(render_maze(maze, result.path))
    print("=" * max(maze.width, 20))
    print(f"Status: {result.status.value}")
    print(f"Start: {maze.id_to_coordinate(result.start)}")
    print(f"End: {maze.id_to_coordinate(result.end)}")
    if result.found:
        steps = " -> ".join(str(maze.id_to_coordinate(node)) for node in result.path)
        print(f"Path ({len(result.path)} nodes): {steps}")
    else:
        print("Path: <none>")


def _check(maze: GridMaze, result: PathResult) -> List[str]:
    problems: List[str] = []
    if not maze.graph.is_symmetric():
        problems.append("Adjacency is not symmetric.")
    if not maze.graph.is_sorted():
        problems.append("Adjacency lists are not sorted.")
    if result.found:
        validation = validate_path(result.path, maze.graph, result.start, result.end)
        problems.extend(validation["errors"])
    return problems


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        maze = _build_maze(args)
        result = maze.find_path()
    except (BoundaryError, ValueError, OSError) as exc:
        print(f"Error: {exc}")
        return 2

    _print_result(maze, result)

    if args.check:
        problems = _check(maze, result)
        for problem in problems:
            print(f"Check failed: {problem}")
        if problems:
            return 2

    if args.save_layout:
        Path(args.save_layout).write_text(json.dumps(maze.to_dict(), indent=2), encoding="utf-8")
        if not args.quiet:
            print(f"Saved layout to: {Path(args.save_layout)}")

    return 0 if result.found else 1
