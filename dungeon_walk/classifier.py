"""
Wall derivation and edge classification.

Walls are every coordinate touching the floor that is not itself floor. Each
wall then gets a 4-bit mask describing which of its sides face something
other than wall:

    bit 0 (1)  top neighbour open
    bit 1 (2)  right neighbour open
    bit 2 (4)  bottom neighbour open
    bit 3 (8)  left neighbour open

A mask of 0 is a wall buried in other walls and gets no edge ornament.
Masks 1..15 pick ornament variant mask - 1 from a 15-entry catalog.

The two passes must stay separate: masks are only correct once the full wall
set is known.
"""

from dataclasses import dataclass, field
from typing import Collection, Dict, Iterable, List, Optional, Set, Tuple

from .geometry import CARDINAL_DIRECTIONS, Coordinate

EDGE_VARIANT_COUNT: int = 15

TOP_OPEN: int = 1
RIGHT_OPEN: int = 2
BOTTOM_OPEN: int = 4
LEFT_OPEN: int = 8

# Bit for each direction, in CARDINAL_DIRECTIONS order (up, right, down, left)
_DIRECTION_BITS: Tuple[int, ...] = (TOP_OPEN, RIGHT_OPEN, BOTTOM_OPEN, LEFT_OPEN)

_MOORE_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
)


@dataclass(frozen=True)
class Classification:
    """Walls in discovery order plus the edge mask of each wall."""

    walls: Tuple[Coordinate, ...]
    edges: Dict[Coordinate, int] = field(hash=False)

    def mask_at(self, coord: Coordinate) -> int:
        return self.edges[coord]

    def variant_at(self, coord: Coordinate) -> Optional[int]:
        return edge_variant(self.edges[coord])

    def ornamented(self) -> List[Tuple[Coordinate, int]]:
        """(wall, variant index) for every wall that gets an ornament."""
        return [
            (wall, mask - 1) for wall, mask in self.edges.items() if mask > 0
        ]


def derive_walls(
    floor: Iterable[Coordinate], diagonal_walls: bool = False
) -> Tuple[Coordinate, ...]:
    """
    Every non-floor coordinate adjacent to the floor, in discovery order.

    With diagonal_walls, the 8 surrounding coordinates count as adjacent,
    which closes the corners of diagonal floor gaps.
    """
    floor_list = list(floor)
    floor_members: Set[Coordinate] = set(floor_list)
    seen: Set[Coordinate] = set()
    walls: List[Coordinate] = []

    for coord in floor_list:
        if diagonal_walls:
            candidates: Iterable[Coordinate] = (
                coord.offset(dx, dy) for dx, dy in _MOORE_OFFSETS
            )
        else:
            candidates = coord.neighbors()
        for candidate in candidates:
            if candidate in floor_members or candidate in seen:
                continue
            seen.add(candidate)
            walls.append(candidate)

    return tuple(walls)


def edge_mask(coord: Coordinate, walls: Collection[Coordinate]) -> int:
    """Open-side bitmask for the wall at coord."""
    mask = 0
    for direction, bit in zip(CARDINAL_DIRECTIONS, _DIRECTION_BITS):
        if coord.step(direction) not in walls:
            mask |= bit
    return mask


def edge_variant(mask: int) -> Optional[int]:
    """Ornament catalog index for a mask, or None for a fully enclosed wall."""
    if not 0 <= mask <= EDGE_VARIANT_COUNT:
        raise ValueError(f"edge mask out of range: {mask}")
    if mask == 0:
        return None
    return mask - 1


def classify(floor: Iterable[Coordinate], diagonal_walls: bool = False) -> Classification:
    """Derive the wall set from a finished floor and classify every wall."""
    walls = derive_walls(floor, diagonal_walls=diagonal_walls)

    # Only now is the wall set complete
    wall_members = frozenset(walls)
    edges = {wall: edge_mask(wall, wall_members) for wall in walls}

    return Classification(walls=walls, edges=edges)
