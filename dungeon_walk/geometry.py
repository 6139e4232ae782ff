"""
Lattice geometry shared by the generators, the classifier and the pathfinder.

Coordinates are exact integer pairs. The y axis grows upward, so "top" is
y + 1 and "bottom" is y - 1.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Tuple


@dataclass(frozen=True)
class Coordinate:
    """A position on the dungeon lattice, measured in tiles."""

    x: int
    y: int

    def step(self, direction: "Direction", distance: int = 1) -> "Coordinate":
        """Returns the coordinate `distance` tiles away in `direction`."""
        dx, dy = direction.step()
        return Coordinate(self.x + dx * distance, self.y + dy * distance)

    def offset(self, dx: int, dy: int) -> "Coordinate":
        return Coordinate(self.x + dx, self.y + dy)

    def neighbors(self) -> Iterator["Coordinate"]:
        """Yields the 4 cardinal neighbours: up, right, down, left."""
        for direction in CARDINAL_DIRECTIONS:
            yield self.step(direction)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)


class Direction(Enum):
    """Cardinal directions. Declaration order is the search/sampling order."""

    UP = (0, 1)
    RIGHT = (1, 0)
    DOWN = (0, -1)
    LEFT = (-1, 0)

    def step(self) -> Tuple[int, int]:
        """Returns the (dx, dy) offset for moving one tile in this direction."""
        return self.value


CARDINAL_DIRECTIONS: Tuple[Direction, ...] = (
    Direction.UP,
    Direction.RIGHT,
    Direction.DOWN,
    Direction.LEFT,
)

ORIGIN = Coordinate(0, 0)


def random_direction(rng: random.Random) -> Direction:
    """Pick one of the 4 cardinal directions with equal probability."""
    return CARDINAL_DIRECTIONS[rng.randrange(len(CARDINAL_DIRECTIONS))]


def manhattan_distance(a: Coordinate, b: Coordinate) -> int:
    """Steps between a and b when moving only along the 4 cardinal directions."""
    return abs(a.x - b.x) + abs(a.y - b.y)


def bounding_box(coordinates: Iterable[Coordinate]) -> Tuple[int, int, int, int]:
    """
    Returns (min_x, min_y, max_x, max_y) over the given coordinates.

    Raises:
        ValueError: If no coordinates are given.
    """
    coords = list(coordinates)
    if not coords:
        raise ValueError("bounding box of an empty coordinate set")
    xs = [c.x for c in coords]
    ys = [c.y for c in coords]
    return min(xs), min(ys), max(xs), max(ys)
