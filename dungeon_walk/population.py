"""
Exit placement and item/enemy spawn planning.

The exit is always the last floor tile the walk laid. Spawns are then rolled
per floor tile, scanning the floor's bounding box (grown by one tile on every
side) column by column:

- Items like nooks: a tile with at least one wall beside it, but not a
  corridor tile walled on both sides of the same axis.
- Enemies like open ground: a tile with no wall on any side.

Each eligible tile rolls 0..100 once for its category and spawns when the
roll is at or below the configured percentage. A category configured at 0%
never rolls.
"""

import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Collection, List, Optional, Sequence, Tuple

from .classifier import Classification
from .config import GenerationConfig
from .geometry import Coordinate, Direction, bounding_box
from .grid import FloorSet


class SpawnCategory(Enum):
    ITEM = auto()
    ENEMY = auto()


@dataclass(frozen=True)
class SpawnPlacement:
    """One thing for the host to instantiate: catalog entry at a coordinate."""

    coordinate: Coordinate
    catalog_index: int
    category: SpawnCategory


@dataclass(frozen=True)
class PopulationPlan:
    exit: Coordinate
    placements: Tuple[SpawnPlacement, ...]

    def of_category(self, category: SpawnCategory) -> List[SpawnPlacement]:
        return [p for p in self.placements if p.category == category]


def _walled_sides(coord: Coordinate, walls: Collection[Coordinate]) -> Tuple[bool, bool, bool, bool]:
    """(top, right, bottom, left) wall flags around coord."""
    return (
        coord.step(Direction.UP) in walls,
        coord.step(Direction.RIGHT) in walls,
        coord.step(Direction.DOWN) in walls,
        coord.step(Direction.LEFT) in walls,
    )


def is_item_eligible(coord: Coordinate, walls: Collection[Coordinate], exit_coord: Coordinate) -> bool:
    """A wall-hugging tile that is not a straight corridor and not the exit."""
    if coord == exit_coord:
        return False
    top, right, bottom, left = _walled_sides(coord, walls)
    if not (top or right or bottom or left):
        return False
    return not (top and bottom) and not (right and left)


def is_enemy_eligible(coord: Coordinate, walls: Collection[Coordinate], exit_coord: Coordinate) -> bool:
    """A tile with no wall on any side that is not the exit."""
    if coord == exit_coord:
        return False
    return not any(_walled_sides(coord, walls))


def _roll(
    rng: random.Random, percent: int, catalog: Sequence[object]
) -> Optional[int]:
    """Catalog index to spawn, or None when the roll fails."""
    if percent <= 0:
        return None
    if rng.randint(0, 100) > percent:
        return None
    return rng.randrange(len(catalog))


def plan(
    floor: FloorSet,
    classification: Classification,
    config: GenerationConfig,
    rng: random.Random,
) -> PopulationPlan:
    """
    Choose the exit and roll item/enemy spawns over a finished, classified floor.

    Raises:
        RuntimeError: If the floor set is still being written.
    """
    if not floor.frozen:
        raise RuntimeError("cannot populate a floor that is still being generated")

    exit_coord = floor.exit
    walls = frozenset(classification.walls)
    placements: List[SpawnPlacement] = []

    min_x, min_y, max_x, max_y = bounding_box(floor)
    for x in range(min_x - 1, max_x + 2):
        for y in range(min_y - 1, max_y + 2):
            coord = Coordinate(x, y)
            if coord not in floor:
                continue

            if is_item_eligible(coord, walls, exit_coord):
                index = _roll(rng, config.item_spawn_percent, config.item_catalog)
                if index is not None:
                    placements.append(SpawnPlacement(coord, index, SpawnCategory.ITEM))

            if is_enemy_eligible(coord, walls, exit_coord):
                index = _roll(rng, config.enemy_spawn_percent, config.enemy_catalog)
                if index is not None:
                    placements.append(SpawnPlacement(coord, index, SpawnCategory.ENEMY))

    return PopulationPlan(exit=exit_coord, placements=tuple(placements))
