#!/usr/bin/env python3
"""
Render a dungeon to an image file for visual inspection.

Useful for:
- Comparing the walk strategies
- Checking wall edge classification
- Debugging spawn placement

Usage:
    uv run tools/render_dungeon_image.py                      # Default: caverns, random seed
    uv run tools/render_dungeon_image.py --type rooms         # Rooms strategy
    uv run tools/render_dungeon_image.py --seed 42            # Reproducible dungeon
    uv run tools/render_dungeon_image.py --output my.png      # Custom output path
"""

import argparse
import cv2
import numpy as np
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dungeon_walk.classifier import BOTTOM_OPEN, LEFT_OPEN, RIGHT_OPEN, TOP_OPEN
from dungeon_walk.dungeon_gen import GeneratedDungeon
from dungeon_walk.grid import TileKind
from dungeon_walk.population import SpawnCategory

sys.path.insert(0, str(Path(__file__).parent))
from render_dungeon_ascii import add_generation_arguments, generate_from_args

# BGR colours
TILE_COLORS = {
    TileKind.UNCLAIMED: (20, 20, 20),
    TileKind.FLOOR: (150, 170, 180),
    TileKind.WALL: (70, 60, 55),
}
EDGE_COLOR = (120, 110, 100)
SPAWN_COLORS = {
    SpawnCategory.ITEM: (0, 200, 255),
    SpawnCategory.ENEMY: (40, 40, 220),
}
START_COLOR = (0, 255, 0)
EXIT_COLOR = (255, 80, 0)


def render_dungeon_image(dungeon: GeneratedDungeon, tile_size: int = 16) -> np.ndarray:
    """Draw tiles, wall edges, spawns, start and exit into a BGR image."""
    grid = dungeon.grid

    # One pixel per tile, then scale up
    palette = np.array([TILE_COLORS[kind] for kind in TileKind], dtype=np.uint8)
    image = palette[grid.array.astype(np.intp)]
    image = np.repeat(np.repeat(image, tile_size, axis=0), tile_size, axis=1)

    # Highlight wall sides that face open space
    thickness = max(1, tile_size // 8)
    for wall, mask in dungeon.classification.edges.items():
        if mask == 0:
            continue
        row, col = grid.to_index(wall)
        top, left = row * tile_size, col * tile_size
        bottom, right = top + tile_size - 1, left + tile_size - 1
        if mask & TOP_OPEN:
            cv2.line(image, (left, top), (right, top), EDGE_COLOR, thickness)
        if mask & RIGHT_OPEN:
            cv2.line(image, (right, top), (right, bottom), EDGE_COLOR, thickness)
        if mask & BOTTOM_OPEN:
            cv2.line(image, (left, bottom), (right, bottom), EDGE_COLOR, thickness)
        if mask & LEFT_OPEN:
            cv2.line(image, (left, top), (left, bottom), EDGE_COLOR, thickness)

    def dot(coord, color):
        row, col = grid.to_index(coord)
        center = (col * tile_size + tile_size // 2, row * tile_size + tile_size // 2)
        cv2.circle(image, center, max(2, tile_size // 4), color, -1)

    for placement in dungeon.population.placements:
        dot(placement.coordinate, SPAWN_COLORS[placement.category])
    dot(dungeon.start, START_COLOR)
    dot(dungeon.exit, EXIT_COLOR)

    return image


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Render a dungeon to an image file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    add_generation_arguments(parser)
    parser.add_argument(
        "--output", "-o",
        type=str,
        default="dungeon_render.png",
        help="Output image path (default: dungeon_render.png)",
    )
    parser.add_argument("--tile-size", type=int, default=16, help="Pixels per tile (default: 16)")
    parser.add_argument(
        "--show-grid",
        action="store_true",
        help="Overlay a tile grid on the image",
    )

    args = parser.parse_args()

    print(f"Generating {args.type} dungeon with {args.floor} floor tiles...")
    dungeon = generate_from_args(args)
    print(f"Seed: {dungeon.seed}, size: {dungeon.grid.cols}x{dungeon.grid.rows} tiles")

    image = render_dungeon_image(dungeon, tile_size=args.tile_size)

    if args.show_grid:
        height, width = image.shape[:2]
        for x in range(0, width + 1, args.tile_size):
            cv2.line(image, (x, 0), (x, height), (64, 64, 64), 1)
        for y in range(0, height + 1, args.tile_size):
            cv2.line(image, (0, y), (width, y), (64, 64, 64), 1)

    output_path = Path(args.output)
    cv2.imwrite(str(output_path), image)
    print(f"Saved to: {output_path.absolute()}")


if __name__ == "__main__":
    main()
