"""
Walk Strategies
===============

Every dungeon starts as a walk from the origin. Each strategy appends the
coordinates it visits to an ordered FloorSet until the set reaches the
configured target size:

1. Caverns: take one random cardinal step per iteration. The walk may cross
   itself freely, which produces a blob-like cave.
2. Rooms: walk a straight hallway in a random direction, then carve a
   rectangular room centred on the hallway's end. Repeat.
3. Winding halls: like Rooms, but each iteration carves its room only on a
   coin flip, so corridors dominate.

The size check happens once per iteration, so a room carved on the last
iteration can overshoot the target. Nothing is trimmed afterwards.

Every strategy counts its iterations and gives up with GenerationStall once
the configured cap is reached, rather than looping forever.
"""

import random
from abc import ABC, abstractmethod
from typing import Dict

from .config import DungeonType, GenerationConfig
from .errors import GenerationStall
from .geometry import ORIGIN, Coordinate, random_direction
from .grid import FloorSet


class WalkStrategy(ABC):
    """
    Abstract base class for floor layout strategies.

    A strategy turns a config and a random source into a frozen FloorSet
    holding at least config.target_floor_count coordinates.
    """

    name: str = "walk"

    @abstractmethod
    def generate(self, config: GenerationConfig, rng: random.Random) -> FloorSet:
        """
        Lay out the floor.

        Raises:
            GenerationStall: If the iteration cap runs out before the target.
        """
        pass

    def _check_stall(self, floor: FloorSet, config: GenerationConfig, iterations: int) -> None:
        if iterations >= config.iteration_cap and len(floor) < config.target_floor_count:
            raise GenerationStall(
                self.name, len(floor), config.target_floor_count, iterations
            )


class CavernsWalk(WalkStrategy):
    """A single unconstrained random walk."""

    name = "caverns"

    def generate(self, config: GenerationConfig, rng: random.Random) -> FloorSet:
        floor = FloorSet([ORIGIN])
        position = ORIGIN
        iterations = 0

        while len(floor) < config.target_floor_count:
            self._check_stall(floor, config, iterations)
            position = position.step(random_direction(rng))
            floor.add(position)
            iterations += 1

        floor.freeze()
        return floor


def carve_hallway(
    floor: FloorSet, start: Coordinate, config: GenerationConfig, rng: random.Random
) -> Coordinate:
    """
    Walk a straight hallway from start and return where it ends.

    The start tile itself is not added; it is already floor.
    """
    direction = random_direction(rng)
    length = rng.randrange(*config.hallway_length)

    position = start
    for _ in range(length):
        position = position.step(direction)
        floor.add(position)
    return position


def carve_room(
    floor: FloorSet, center: Coordinate, config: GenerationConfig, rng: random.Random
) -> None:
    """Carve a (2w+1) x (2h+1) room centred on center, columns first."""
    half_width = rng.randint(*config.room_half_extent)
    half_height = rng.randint(*config.room_half_extent)

    for dx in range(-half_width, half_width + 1):
        for dy in range(-half_height, half_height + 1):
            floor.add(center.offset(dx, dy))


class RoomsWalk(WalkStrategy):
    """Hallways that always end in a room."""

    name = "rooms"

    def _wants_room(self, config: GenerationConfig, rng: random.Random) -> bool:
        return True

    def generate(self, config: GenerationConfig, rng: random.Random) -> FloorSet:
        floor = FloorSet([ORIGIN])
        position = ORIGIN
        iterations = 0

        while len(floor) < config.target_floor_count:
            self._check_stall(floor, config, iterations)
            position = carve_hallway(floor, position, config, rng)
            if self._wants_room(config, rng):
                carve_room(floor, position, config, rng)
            iterations += 1

        floor.freeze()
        return floor


class WindingHallsWalk(RoomsWalk):
    """Hallways where only some ends grow a room."""

    name = "winding_halls"

    def _wants_room(self, config: GenerationConfig, rng: random.Random) -> bool:
        return rng.random() < config.room_chance


WALK_STRATEGIES: Dict[DungeonType, WalkStrategy] = {
    DungeonType.CAVERNS: CavernsWalk(),
    DungeonType.ROOMS: RoomsWalk(),
    DungeonType.WINDING_HALLS: WindingHallsWalk(),
}


def strategy_for(dungeon_type: DungeonType) -> WalkStrategy:
    """Look up the walk strategy for a dungeon type."""
    try:
        return WALK_STRATEGIES[dungeon_type]
    except KeyError:
        raise ValueError(f"no walk strategy for {dungeon_type!r}") from None


def generate_floor(config: GenerationConfig, rng: random.Random) -> FloorSet:
    """Lay out the floor with the strategy the config selects."""
    return strategy_for(config.dungeon_type).generate(config, rng)
