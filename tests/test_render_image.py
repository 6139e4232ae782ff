"""Tests for the image renderer."""

import numpy as np

from dungeon_walk.config import GenerationConfig
from dungeon_walk.dungeon_gen import generate_dungeon
from dungeon_walk.grid import TileKind
from tools.render_dungeon_image import (
    EXIT_COLOR,
    START_COLOR,
    TILE_COLORS,
    render_dungeon_image,
)


def pixel_at(image: np.ndarray, grid, coord, tile_size: int):
    row, col = grid.to_index(coord)
    return tuple(int(v) for v in image[row * tile_size + tile_size // 2, col * tile_size + tile_size // 2])


def test_image_matches_grid():
    dungeon = generate_dungeon(GenerationConfig(target_floor_count=60), seed=3)
    image = render_dungeon_image(dungeon, tile_size=8)

    assert image.dtype == np.uint8
    assert image.shape == (dungeon.grid.rows * 8, dungeon.grid.cols * 8, 3)
    assert pixel_at(image, dungeon.grid, dungeon.exit, 8) == EXIT_COLOR
    assert pixel_at(image, dungeon.grid, dungeon.start, 8) == START_COLOR


def test_unclaimed_corner_is_background():
    dungeon = generate_dungeon(GenerationConfig(target_floor_count=60), seed=3)
    image = render_dungeon_image(dungeon, tile_size=8)
    grid = dungeon.grid

    for row in range(grid.rows):
        for col in range(grid.cols):
            if grid.array[row, col] == TileKind.UNCLAIMED:
                assert tuple(int(v) for v in image[row * 8 + 4, col * 8 + 4]) == TILE_COLORS[TileKind.UNCLAIMED]
                return
