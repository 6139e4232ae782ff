"""
The grid model: which lattice coordinates are floor, wall or unclaimed.

FloorSet is the growing, insertion-ordered floor list the walk strategies
write into. GridModel is the frozen numpy snapshot handed to every consumer
once generation finishes.
"""

from enum import IntEnum
from typing import Iterable, Iterator, List, Optional, Set, Tuple

import numpy as np

from .geometry import Coordinate, bounding_box


class TileKind(IntEnum):
    """What occupies a lattice coordinate."""

    UNCLAIMED = 0
    FLOOR = 1
    WALL = 2


class FloorSet:
    """
    Ordered, duplicate-free floor coordinates.

    The last coordinate added is where the exit door goes. Once frozen the
    set is read-only; generators freeze it when their walk is done.
    """

    def __init__(self, coordinates: Optional[Iterable[Coordinate]] = None) -> None:
        self._order: List[Coordinate] = []
        self._members: Set[Coordinate] = set()
        self._frozen: bool = False
        if coordinates is not None:
            for coord in coordinates:
                self.add(coord)

    def add(self, coord: Coordinate) -> bool:
        """Append coord if it is new. Returns True if it was added."""
        if self._frozen:
            raise RuntimeError("floor set is frozen")
        if coord in self._members:
            return False
        self._members.add(coord)
        self._order.append(coord)
        return True

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def exit(self) -> Coordinate:
        """The exit door coordinate: the final floor tile laid."""
        if not self._order:
            raise RuntimeError("empty floor set has no exit")
        return self._order[-1]

    def __contains__(self, coord: object) -> bool:
        return coord in self._members

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def __getitem__(self, index: int) -> Coordinate:
        return self._order[index]

    def as_tuple(self) -> Tuple[Coordinate, ...]:
        return tuple(self._order)


class GridModel:
    """
    Read-only tile map covering the bounding box of all floor and wall tiles.

    The backing array is indexed [row, col] with row 0 at the top (largest y),
    so it can be rendered directly. Coordinates outside the box are UNCLAIMED.
    """

    def __init__(self, tiles: np.ndarray, origin: Coordinate) -> None:
        # origin is the lattice coordinate of array cell [rows - 1, 0],
        # i.e. the bottom-left corner of the box
        self._tiles = tiles
        self._tiles.flags.writeable = False
        self.origin: Coordinate = origin

        self.rows: int
        self.cols: int
        self.rows, self.cols = tiles.shape

    @classmethod
    def from_tiles(
        cls, floor: Iterable[Coordinate], walls: Iterable[Coordinate]
    ) -> "GridModel":
        """Materialize floor and wall coordinates into a numpy tile map."""
        floor = list(floor)
        walls = list(walls)
        if not floor:
            raise ValueError("cannot build a grid without floor tiles")

        min_x, min_y, max_x, max_y = bounding_box(floor + walls)
        tiles = np.full(
            (max_y - min_y + 1, max_x - min_x + 1), TileKind.UNCLAIMED, dtype=np.int8
        )
        for coord in walls:
            tiles[max_y - coord.y, coord.x - min_x] = TileKind.WALL
        for coord in floor:
            tiles[max_y - coord.y, coord.x - min_x] = TileKind.FLOOR

        return cls(tiles, Coordinate(min_x, min_y))

    @property
    def array(self) -> np.ndarray:
        """The read-only [row, col] tile array."""
        return self._tiles

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        """(min_x, min_y, max_x, max_y) of the stored box."""
        return (
            self.origin.x,
            self.origin.y,
            self.origin.x + self.cols - 1,
            self.origin.y + self.rows - 1,
        )

    def to_index(self, coord: Coordinate) -> Tuple[int, int]:
        """Array (row, col) for a lattice coordinate. May be out of range."""
        row = (self.origin.y + self.rows - 1) - coord.y
        col = coord.x - self.origin.x
        return (row, col)

    def to_coordinate(self, row: int, col: int) -> Coordinate:
        return Coordinate(col + self.origin.x, (self.origin.y + self.rows - 1) - row)

    def contains(self, coord: Coordinate) -> bool:
        row, col = self.to_index(coord)
        return 0 <= row < self.rows and 0 <= col < self.cols

    def kind_at(self, coord: Coordinate) -> TileKind:
        if not self.contains(coord):
            return TileKind.UNCLAIMED
        return TileKind(int(self._tiles[self.to_index(coord)]))

    def is_floor(self, coord: Coordinate) -> bool:
        return self.kind_at(coord) == TileKind.FLOOR

    def is_wall(self, coord: Coordinate) -> bool:
        return self.kind_at(coord) == TileKind.WALL

    def count(self, kind: TileKind) -> int:
        return int(np.count_nonzero(self._tiles == kind))
