"""Procedural tile dungeons: walk generation, wall classification, spawns and agent pathing."""

from dungeon_walk.config import DungeonType, GenerationConfig
from dungeon_walk.errors import DungeonError, ConfigurationError, GenerationStall
from dungeon_walk.geometry import Coordinate, Direction
from dungeon_walk.grid import FloorSet, GridModel, TileKind
from dungeon_walk.walkers import WalkStrategy, strategy_for
from dungeon_walk.classifier import Classification, classify, edge_variant
from dungeon_walk.population import PopulationPlan, SpawnCategory, SpawnPlacement
from dungeon_walk.pathfinding import find_path, next_step, Path
from dungeon_walk.dungeon_gen import (
    DungeonBuilder,
    GeneratedDungeon,
    generate_dungeon,
    generate_with_retries,
)
from dungeon_walk.world import Dungeon
from dungeon_walk.agents import Agent, AgentState, Enemy, Player
from dungeon_walk.event_system import EventBus, Event, EventData
