"""
Level setup: turn a generated dungeon into a playable one with agents.
"""

import random
from typing import List, Optional

from .agents import Enemy, Player
from .config import GenerationConfig
from .dungeon_gen import GeneratedDungeon, TileSink, generate_with_retries
from .event_system import EventBus, Event
from .population import SpawnCategory
from .world import Dungeon


def spawn_enemies(
    dungeon: Dungeon,
    alert_range: float = 5.0,
) -> List[Enemy]:
    """
    Create an Enemy for every enemy placement in the dungeon's plan.

    Placements on a tile that is already occupied are skipped. Each enemy
    gets its own random source derived from the dungeon seed, so a level
    replays identically.
    """
    generated = dungeon.generated
    enemies: List[Enemy] = []

    placements = generated.population.of_category(SpawnCategory.ENEMY)
    for index, placement in enumerate(placements):
        if not dungeon.is_tile_walkable(placement.coordinate):
            continue
        enemy = Enemy(
            agent_id=f"enemy_{index}",
            tile=placement.coordinate,
            catalog_index=placement.catalog_index,
            alert_range=alert_range,
            rng=random.Random(generated.seed * 1_000_003 + index),
        )
        dungeon.add_agent(enemy)
        enemies.append(enemy)

    return enemies


def create_level(
    generated: GeneratedDungeon,
    event_bus: Optional[EventBus] = None,
    alert_range: float = 5.0,
) -> Dungeon:
    """
    Build a playable dungeon: the player at the walk's start, then enemies.

    Emits LEVEL_START once every agent is placed.
    """
    dungeon = Dungeon(generated, event_bus=event_bus)
    dungeon.add_agent(Player(generated.start))
    spawn_enemies(dungeon, alert_range=alert_range)

    if event_bus:
        event_bus.emit(Event.LEVEL_START)
    return dungeon


def create_random_level(
    config: GenerationConfig,
    seed: int,
    event_bus: Optional[EventBus] = None,
    tile_sink: Optional[TileSink] = None,
) -> Dungeon:
    """
    Factory function to generate and set up a level in one call.

    Raises:
        ConfigurationError: If the config is invalid.
        GenerationStall: If every generation attempt stalled.
    """
    generated = generate_with_retries(config, seed, event_bus=event_bus, tile_sink=tile_sink)
    return create_level(generated, event_bus=event_bus)
