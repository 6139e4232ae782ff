"""
Dungeon Generation Pipeline
===========================

A dungeon is built in two phases from a config and a seed:

1. Floor: the configured walk strategy lays out the ordered floor set. Every
   floor coordinate is handed to the optional tile sink (the host's tile
   materializer), then the floor is frozen and FLOOR_COMPLETE is emitted.
2. Classification and population: walls are derived and edge-classified,
   then the exit is chosen and item/enemy spawns rolled. This phase only
   reads the floor, and refuses to start before phase 1 has signalled
   completion.

A single random.Random seeded once drives both phases, so the same seed and
config always give the same dungeon.
"""

import random
import sys
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional, Tuple, TypeVar

from .classifier import Classification, classify
from .config import GenerationConfig
from .errors import GenerationStall
from .event_system import Event, EventBus
from .geometry import Coordinate
from .grid import FloorSet, GridModel
from .population import PopulationPlan, plan
from .walkers import generate_floor

# Receives each floor coordinate as phase 1 finishes, in floor order
TileSink = Callable[[Coordinate], None]

T = TypeVar("T")


class GenerationPhase(Enum):
    PENDING = auto()
    FLOOR = auto()
    CLASSIFIED = auto()
    POPULATED = auto()


@dataclass(frozen=True)
class GeneratedDungeon:
    """The frozen result of a generation run."""

    config: GenerationConfig
    seed: int
    floor: Tuple[Coordinate, ...]
    classification: Classification
    grid: GridModel
    population: PopulationPlan

    @property
    def exit(self) -> Coordinate:
        return self.population.exit

    @property
    def start(self) -> Coordinate:
        """Where the walk began, and where the player starts."""
        return self.floor[0]


class DungeonBuilder:
    """
    Runs the generation phases in order and keeps their intermediate results.

    Use build() for the whole pipeline, or call the phase methods one by one
    when the host wants to interleave its own work between them.
    """

    def __init__(
        self,
        config: GenerationConfig,
        seed: int,
        event_bus: Optional[EventBus] = None,
        tile_sink: Optional[TileSink] = None,
    ) -> None:
        self.config = config
        self.seed = seed
        self.event_bus = event_bus
        self.tile_sink = tile_sink

        self.phase: GenerationPhase = GenerationPhase.PENDING
        self._rng = random.Random(seed)

        self.floor: Optional[FloorSet] = None
        self.classification: Optional[Classification] = None
        self.population: Optional[PopulationPlan] = None

    def _emit(self, event: Event, **kwargs) -> None:
        if self.event_bus:
            self.event_bus.emit(event, **kwargs)

    def _require(self, phase: GenerationPhase, action: str) -> None:
        if self.phase != phase:
            raise RuntimeError(
                f"cannot {action} in phase {self.phase.name}, expected {phase.name}"
            )

    def _result(self, value: Optional[T], name: str) -> T:
        if value is None:
            raise RuntimeError(f"no {name} yet in phase {self.phase.name}")
        return value

    def lay_floor(self) -> FloorSet:
        """
        Phase 1: walk the floor and hand every tile to the sink.

        Raises:
            GenerationStall: If the walk runs out of iterations.
        """
        self._require(GenerationPhase.PENDING, "lay floor")

        floor = generate_floor(self.config, self._rng)
        if self.tile_sink is not None:
            for coord in floor:
                self.tile_sink(coord)

        floor.freeze()
        self.floor = floor
        self.phase = GenerationPhase.FLOOR
        self._emit(Event.FLOOR_COMPLETE, floor_count=len(floor))
        return floor

    def classify(self) -> Classification:
        """Phase 2a: derive and classify walls."""
        self._require(GenerationPhase.FLOOR, "classify walls")
        floor = self._result(self.floor, "floor")

        self.classification = classify(floor, diagonal_walls=self.config.diagonal_walls)
        self.phase = GenerationPhase.CLASSIFIED
        self._emit(Event.CLASSIFICATION_COMPLETE, wall_count=len(self.classification.walls))
        return self.classification

    def populate(self) -> PopulationPlan:
        """Phase 2b: place the exit and roll spawns."""
        self._require(GenerationPhase.CLASSIFIED, "populate")
        floor = self._result(self.floor, "floor")
        classification = self._result(self.classification, "classification")

        self.population = plan(floor, classification, self.config, self._rng)
        self.phase = GenerationPhase.POPULATED
        self._emit(
            Event.POPULATION_COMPLETE,
            exit=self.population.exit,
            placement_count=len(self.population.placements),
        )
        return self.population

    def build(self) -> GeneratedDungeon:
        """Run every remaining phase and return the frozen dungeon."""
        if self.phase == GenerationPhase.PENDING:
            self.lay_floor()
        if self.phase == GenerationPhase.FLOOR:
            self.classify()
        if self.phase == GenerationPhase.CLASSIFIED:
            self.populate()

        floor = self._result(self.floor, "floor")
        classification = self._result(self.classification, "classification")

        return GeneratedDungeon(
            config=self.config,
            seed=self.seed,
            floor=floor.as_tuple(),
            classification=classification,
            grid=GridModel.from_tiles(floor, classification.walls),
            population=self._result(self.population, "population"),
        )


def generate_dungeon(
    config: GenerationConfig,
    seed: int,
    event_bus: Optional[EventBus] = None,
    tile_sink: Optional[TileSink] = None,
) -> GeneratedDungeon:
    """
    Validate the config and generate a dungeon.

    Raises:
        ConfigurationError: If the config is invalid.
        GenerationStall: If the walk could not reach the floor target.
    """
    config.validate()
    return DungeonBuilder(config, seed, event_bus=event_bus, tile_sink=tile_sink).build()


def generate_with_retries(
    config: GenerationConfig,
    seed: int,
    attempts: int = 3,
    event_bus: Optional[EventBus] = None,
    tile_sink: Optional[TileSink] = None,
) -> GeneratedDungeon:
    """
    Generate a dungeon, retrying stalled walks with the next seeds.

    Seeds seed, seed + 1, ... are tried in turn. Configuration errors are
    not retried. A stalled walk never reaches the tile sink, so the sink only
    sees the floor of the attempt that succeeds.

    Raises:
        ConfigurationError: If the config is invalid.
        GenerationStall: The last stall, if every attempt stalled.
    """
    if attempts <= 0:
        raise ValueError(f"attempts must be positive, got {attempts}")

    config.validate()
    last_seed = seed + attempts - 1
    for attempt_seed in range(seed, last_seed + 1):
        builder = DungeonBuilder(config, attempt_seed, event_bus=event_bus, tile_sink=tile_sink)
        try:
            return builder.build()
        except GenerationStall as stall:
            print(f"Seed {attempt_seed}: {stall}", file=sys.stderr)
            if attempt_seed == last_seed:
                raise

    raise RuntimeError("retry loop exited without a result")
