"""Tests for the ASCII debug renderer."""

import argparse

from dungeon_walk.classifier import classify
from dungeon_walk.config import DungeonType, GenerationConfig
from dungeon_walk.dungeon_gen import GeneratedDungeon
from dungeon_walk.geometry import Coordinate
from dungeon_walk.grid import FloorSet, GridModel
from dungeon_walk.population import PopulationPlan, SpawnCategory, SpawnPlacement
from tools.render_dungeon_ascii import (
    add_generation_arguments,
    config_from_args,
    render_dungeon_ascii,
)


def corridor_dungeon(placements=()) -> GeneratedDungeon:
    floor = FloorSet([Coordinate(0, 0), Coordinate(1, 0), Coordinate(2, 0), Coordinate(3, 0)])
    floor.freeze()
    classification = classify(floor)
    return GeneratedDungeon(
        config=GenerationConfig(),
        seed=0,
        floor=floor.as_tuple(),
        classification=classification,
        grid=GridModel.from_tiles(floor, classification.walls),
        population=PopulationPlan(exit=floor.exit, placements=tuple(placements)),
    )


def test_render_corridor():
    dungeon = corridor_dungeon([SpawnPlacement(Coordinate(1, 0), 0, SpawnCategory.ITEM)])
    assert render_dungeon_ascii(dungeon) == "\n".join(
        [
            " #### ",
            "#@i.X#",
            " #### ",
        ]
    )


def test_config_from_args():
    parser = argparse.ArgumentParser()
    add_generation_arguments(parser)
    args = parser.parse_args(["--type", "winding_halls", "--floor", "80", "--enemies", "0"])

    config = config_from_args(args)

    assert config.dungeon_type == DungeonType.WINDING_HALLS
    assert config.target_floor_count == 80
    assert config.enemy_spawn_percent == 0
    assert config.item_spawn_percent == 10
    config.validate()
