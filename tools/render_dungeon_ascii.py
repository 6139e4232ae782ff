#!/usr/bin/env python3
"""
Render a generated dungeon as ASCII art for debugging.

Usage:
    uv run tools/render_dungeon_ascii.py [--type caverns|rooms|winding_halls] [--floor N] [--seed S]
"""

import argparse
import random
import sys
from pathlib import Path

# Add parent directory to path so we can import dungeon_walk
sys.path.insert(0, str(Path(__file__).parent.parent))

from dungeon_walk.config import DungeonType, GenerationConfig
from dungeon_walk.dungeon_gen import GeneratedDungeon, generate_with_retries
from dungeon_walk.errors import DungeonError
from dungeon_walk.grid import TileKind
from dungeon_walk.population import SpawnCategory


TILE_TO_ASCII = {
    TileKind.UNCLAIMED: " ",
    TileKind.FLOOR: ".",
    TileKind.WALL: "#",
}

EXIT_CHAR = "X"
START_CHAR = "@"
SPAWN_TO_ASCII = {
    SpawnCategory.ITEM: "i",
    SpawnCategory.ENEMY: "m",
}


def render_dungeon_ascii(dungeon: GeneratedDungeon) -> str:
    """Convert a generated dungeon to an ASCII string, top row first."""
    grid = dungeon.grid
    rows = [
        [TILE_TO_ASCII[TileKind(int(tile))] for tile in row] for row in grid.array
    ]

    def mark(coord, char):
        row, col = grid.to_index(coord)
        rows[row][col] = char

    for placement in dungeon.population.placements:
        mark(placement.coordinate, SPAWN_TO_ASCII[placement.category])
    mark(dungeon.start, START_CHAR)
    mark(dungeon.exit, EXIT_CHAR)

    return "\n".join("".join(row) for row in rows)


def add_generation_arguments(parser: argparse.ArgumentParser) -> None:
    """Generation options shared by the render tools."""
    parser.add_argument(
        "--type", "-t",
        choices=[t.name.lower() for t in DungeonType],
        default="caverns",
        help="Walk strategy (default: caverns)",
    )
    parser.add_argument("--floor", "-f", type=int, default=500, help="Target floor tile count")
    parser.add_argument("--seed", "-s", type=int, help="Random seed for reproducible generation")
    parser.add_argument("--items", type=int, default=10, help="Item spawn percent (0-100)")
    parser.add_argument("--enemies", type=int, default=5, help="Enemy spawn percent (0-100)")
    parser.add_argument(
        "--diagonal-walls",
        action="store_true",
        help="Also wall off diagonal neighbours of the floor",
    )


def config_from_args(args: argparse.Namespace) -> GenerationConfig:
    return GenerationConfig.from_dict(
        {
            "dungeon_type": args.type,
            "target_floor_count": args.floor,
            "item_spawn_percent": args.items,
            "enemy_spawn_percent": args.enemies,
            "item_catalog": ("potion", "key", "gold"),
            "enemy_catalog": ("slime", "skeleton"),
            "diagonal_walls": args.diagonal_walls,
        }
    )


def generate_from_args(args: argparse.Namespace) -> GeneratedDungeon:
    """Generate the dungeon the arguments describe, exiting with a diagnostic on failure."""
    seed = args.seed if args.seed is not None else random.randrange(2**31)
    try:
        return generate_with_retries(config_from_args(args), seed)
    except DungeonError as e:
        print(f"Could not generate dungeon: {e}", file=sys.stderr)
        sys.exit(1)


def main():
    parser = argparse.ArgumentParser(description="Render dungeon as ASCII art")
    add_generation_arguments(parser)
    args = parser.parse_args()

    dungeon = generate_from_args(args)
    print(render_dungeon_ascii(dungeon))

    # Print some debug info
    print(f"\n--- Debug Info ---")
    print(f"Seed: {dungeon.seed}")
    print(f"Map size: {dungeon.grid.cols}x{dungeon.grid.rows} tiles")
    print(f"Floor tiles: {len(dungeon.floor)}, walls: {len(dungeon.classification.walls)}")
    print(f"Start: {dungeon.start.as_tuple()}, exit: {dungeon.exit.as_tuple()}")
    print(f"Items: {len(dungeon.population.of_category(SpawnCategory.ITEM))}")
    print(f"Enemies: {len(dungeon.population.of_category(SpawnCategory.ENEMY))}")


if __name__ == "__main__":
    main()
