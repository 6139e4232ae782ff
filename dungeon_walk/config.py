"""
Generation parameters and their validation.
"""

from dataclasses import dataclass, field, fields
from enum import Enum, auto
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from .errors import ConfigurationError

# Outer-loop iterations allowed per requested floor tile before a walk is
# declared stalled.
ITERATION_CAP_FACTOR: int = 1000


class DungeonType(Enum):
    """The walk strategy used to lay out the floor."""

    CAVERNS = auto()
    ROOMS = auto()
    WINDING_HALLS = auto()


@dataclass
class GenerationConfig:
    """
    Everything needed to generate one dungeon, apart from the seed.

    hallway_length is a half-open range [low, high); room_half_extent is
    inclusive on both ends. Catalogs are ordered sequences of whatever the
    host uses to instantiate items and enemies; only their indices are used
    here.
    """

    dungeon_type: DungeonType = DungeonType.CAVERNS
    target_floor_count: int = 500

    hallway_length: Tuple[int, int] = (9, 18)
    room_half_extent: Tuple[int, int] = (1, 4)

    # Chance that a winding hall iteration also carves a room
    room_chance: float = 0.5

    item_spawn_percent: int = 0
    enemy_spawn_percent: int = 0
    item_catalog: Sequence[Any] = field(default_factory=tuple)
    enemy_catalog: Sequence[Any] = field(default_factory=tuple)

    # Surround floors with walls on diagonals too, not just the 4 sides
    diagonal_walls: bool = False

    # None means target_floor_count * ITERATION_CAP_FACTOR
    max_iterations: Optional[int] = None

    @property
    def iteration_cap(self) -> int:
        if self.max_iterations is not None:
            return self.max_iterations
        return self.target_floor_count * ITERATION_CAP_FACTOR

    def validate(self) -> None:
        """
        Check the configuration before generation starts.

        Raises:
            ConfigurationError: Naming the first invalid parameter found.
        """
        if not isinstance(self.dungeon_type, DungeonType):
            raise ConfigurationError("dungeon_type", f"unknown strategy {self.dungeon_type!r}")

        if self.target_floor_count <= 0:
            raise ConfigurationError(
                "target_floor_count", f"must be positive, got {self.target_floor_count}"
            )

        low, high = self.hallway_length
        if low <= 0 or high <= low:
            raise ConfigurationError(
                "hallway_length", f"need 0 < low < high, got [{low}, {high})"
            )

        low, high = self.room_half_extent
        if low < 0 or high < low:
            raise ConfigurationError(
                "room_half_extent", f"need 0 <= low <= high, got [{low}, {high}]"
            )

        if not 0.0 <= self.room_chance <= 1.0:
            raise ConfigurationError("room_chance", f"must be in [0, 1], got {self.room_chance}")

        for name, percent, catalog in (
            ("item", self.item_spawn_percent, self.item_catalog),
            ("enemy", self.enemy_spawn_percent, self.enemy_catalog),
        ):
            if not 0 <= percent <= 100:
                raise ConfigurationError(
                    f"{name}_spawn_percent", f"must be in [0, 100], got {percent}"
                )
            if percent > 0 and len(catalog) == 0:
                raise ConfigurationError(
                    f"{name}_catalog", f"is empty but {name}_spawn_percent is {percent}"
                )

        if self.iteration_cap <= 0:
            raise ConfigurationError("max_iterations", f"must be positive, got {self.iteration_cap}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GenerationConfig":
        """
        Build a config from plain host data, e.g. a parsed settings file.

        The strategy may be given as a DungeonType or by name
        ("caverns", "ROOMS", "winding_halls"). Ranges may be lists.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(unknown[0], "unknown configuration key")

        kwargs: Dict[str, Any] = dict(data)

        dungeon_type = kwargs.get("dungeon_type")
        if isinstance(dungeon_type, str):
            try:
                kwargs["dungeon_type"] = DungeonType[dungeon_type.upper()]
            except KeyError:
                raise ConfigurationError(
                    "dungeon_type", f"unknown strategy {dungeon_type!r}"
                ) from None

        for range_key in ("hallway_length", "room_half_extent"):
            if range_key in kwargs:
                kwargs[range_key] = tuple(kwargs[range_key])

        return cls(**kwargs)
