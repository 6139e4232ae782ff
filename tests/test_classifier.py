"""Unit tests for wall derivation and edge classification."""

import random

import pytest

from dungeon_walk.classifier import (
    BOTTOM_OPEN,
    LEFT_OPEN,
    RIGHT_OPEN,
    TOP_OPEN,
    classify,
    derive_walls,
    edge_mask,
    edge_variant,
)
from dungeon_walk.config import DungeonType, GenerationConfig
from dungeon_walk.geometry import Coordinate
from dungeon_walk.walkers import generate_floor


def c(x: int, y: int) -> Coordinate:
    return Coordinate(x, y)


class TestDeriveWalls:
    """Tests for the wall pass."""

    def test_single_floor_tile(self):
        """One floor tile is walled on its 4 sides, found up, right, down, left."""
        assert derive_walls([c(0, 0)]) == (c(0, 1), c(1, 0), c(0, -1), c(-1, 0))

    def test_diagonal_walls(self):
        """With diagonal walls the full ring of 8 is walled."""
        walls = derive_walls([c(0, 0)], diagonal_walls=True)
        assert set(walls) == {
            c(x, y) for x in (-1, 0, 1) for y in (-1, 0, 1) if (x, y) != (0, 0)
        }

    def test_walls_never_overlap_floor(self):
        """Floor tiles are never walls, and every wall touches the floor."""
        config = GenerationConfig(dungeon_type=DungeonType.ROOMS, target_floor_count=200)
        floor = set(generate_floor(config, random.Random(4)))
        walls = derive_walls(floor)

        assert not floor & set(walls)
        assert len(set(walls)) == len(walls)
        for wall in walls:
            assert any(n in floor for n in wall.neighbors())


class TestEdgeMask:
    """Tests for the per-wall bitmask."""

    def test_open_top_and_right(self):
        """A wall with walls only below and to the left has mask 3, variant 2."""
        walls = {c(0, 0), c(0, -1), c(-1, 0)}
        mask = edge_mask(c(0, 0), walls)

        assert mask == TOP_OPEN | RIGHT_OPEN == 3
        assert edge_variant(mask) == 2

    def test_enclosed_wall(self):
        """A wall surrounded by walls has mask 0 and no ornament."""
        walls = {c(x, y) for x in range(-1, 2) for y in range(-1, 2)}
        assert edge_mask(c(0, 0), walls) == 0
        assert edge_variant(0) is None

    def test_isolated_wall(self):
        """A lone wall is open on every side."""
        assert edge_mask(c(5, 5), {c(5, 5)}) == TOP_OPEN | RIGHT_OPEN | BOTTOM_OPEN | LEFT_OPEN
        assert edge_variant(15) == 14

    @pytest.mark.parametrize("mask", [-1, 16])
    def test_variant_rejects_bad_mask(self, mask):
        with pytest.raises(ValueError):
            edge_variant(mask)


class TestClassify:
    """Tests for the full two-pass classification."""

    def test_single_floor_walls_all_fully_open(self):
        """Walls around a lone floor tile touch no other wall."""
        result = classify([c(0, 0)])
        assert set(result.edges.values()) == {15}
        assert len(result.ornamented()) == 4

    def test_diagonal_ring_masks(self):
        """In a ring of 8, sides and corners see different neighbours."""
        result = classify([c(0, 0)], diagonal_walls=True)

        # Top side: walls left and right, floor below counts as open
        assert result.mask_at(c(0, 1)) == TOP_OPEN | BOTTOM_OPEN
        # Top-right corner: walls below and to the left
        assert result.mask_at(c(1, 1)) == TOP_OPEN | RIGHT_OPEN
        assert result.variant_at(c(1, 1)) == 2

    def test_corridor_walls(self):
        """Walls along a straight corridor join up with each other."""
        floor = [c(x, 0) for x in range(5)]
        result = classify(floor)

        # Above the middle of the corridor: walls left and right
        assert result.mask_at(c(2, 1)) == TOP_OPEN | BOTTOM_OPEN
        # End cap: only a floor tile next to it, nothing else
        assert result.mask_at(c(5, 0)) == 15

    def test_classify_is_deterministic(self):
        """The same floor always yields the same walls and masks."""
        config = GenerationConfig(dungeon_type=DungeonType.CAVERNS, target_floor_count=300)
        floor = generate_floor(config, random.Random(9))

        first = classify(floor)
        second = classify(floor)

        assert first.walls == second.walls
        assert first.edges == second.edges

    def test_masks_cover_every_wall(self):
        config = GenerationConfig(dungeon_type=DungeonType.WINDING_HALLS, target_floor_count=200)
        floor = generate_floor(config, random.Random(12))
        result = classify(floor)

        assert set(result.edges) == set(result.walls)
        assert all(0 <= mask <= 15 for mask in result.edges.values())
