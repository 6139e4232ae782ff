"""
Bounded grid search used by agents to step toward a target.

The search keeps a single growing list of nodes and a cursor into it. The
node under the cursor is expanded (up, right, down, left), every walkable
neighbour not yet in the list is appended with the cursor's position as its
parent, and the cursor moves on. The search stops when the cursor lands on
the target, after MAX_EXPANSIONS expansions, or when the list runs out.

This is a best-effort search: order is decided purely by insertion order and
the expansion cap can give up on reachable targets far away.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .geometry import Coordinate

MAX_EXPANSIONS: int = 1000

# A path is a list of tile coordinates ordered from start to goal
Path = List[Coordinate]

Walkable = Callable[[Coordinate], bool]


@dataclass(frozen=True)
class SearchNode:
    position: Coordinate
    parent: Coordinate


def _search(
    start: Coordinate,
    target: Coordinate,
    walkable: Walkable,
    max_expansions: int,
) -> Optional[Dict[Coordinate, Coordinate]]:
    """
    Run the cursor search. Returns the parent links if the target was reached,
    otherwise None.
    """
    nodes: List[SearchNode] = [SearchNode(start, start)]
    parents: Dict[Coordinate, Coordinate] = {start: start}

    cursor = 0
    while cursor < len(nodes) and cursor < max_expansions:
        current = nodes[cursor].position
        if current == target:
            return parents

        for neighbor in current.neighbors():
            if neighbor in parents:
                continue
            if not walkable(neighbor):
                continue
            parents[neighbor] = current
            nodes.append(SearchNode(neighbor, current))

        cursor += 1

    # The cap can be hit with the target sitting right under the cursor
    if cursor < len(nodes) and nodes[cursor].position == target:
        return parents

    return None


def find_path(
    start: Coordinate,
    target: Coordinate,
    walkable: Walkable,
    max_expansions: int = MAX_EXPANSIONS,
) -> Optional[Path]:
    """
    Find a path from start to target.

    Args:
        start: Where the agent stands
        target: Where it wants to go
        walkable: Returns True if a tile can be entered
        max_expansions: Maximum number of nodes to expand

    Returns:
        Coordinates from start to target (excludes start, includes target),
        or None if the search gave up. Empty list if already at target.
    """
    if start == target:
        return []

    parents = _search(start, target, walkable, max_expansions)
    if parents is None:
        return None

    path: Path = []
    tile = target
    while tile != start:
        path.append(tile)
        tile = parents[tile]
    path.reverse()
    return path


def next_step(
    agent: Coordinate,
    target: Coordinate,
    walkable: Walkable,
    max_expansions: int = MAX_EXPANSIONS,
) -> Coordinate:
    """
    The tile an agent at `agent` should move to next on its way to `target`.

    Returns `agent` itself when it is already there or when no route was
    found within the search bounds; the agent then stays put.
    """
    path = find_path(agent, target, walkable, max_expansions)
    if not path:
        return agent
    return path[0]
