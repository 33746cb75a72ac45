"""Tests for the voxel collision test and per-axis resolution."""

import pytest

from voxsandbox.physics import collides, resolve_move
from voxsandbox.player import PlayerState
from voxsandbox.world import OccupancyIndex

RADIUS = 0.3
HEIGHT = 1.8


class TestCollides:
    def test_empty_index(self):
        assert not collides((0.0, 0.0, 0.0), OccupancyIndex(), RADIUS, HEIGHT)

    def test_inside_voxel(self):
        index = OccupancyIndex([(0, 0, 0)])
        assert collides((0.0, 0.0, 0.0), index, RADIUS, HEIGHT)
        assert collides((0.5, 0.5, 0.5), index, RADIUS, HEIGHT)

    def test_just_outside_and_inside_horizontal_reach(self):
        index = OccupancyIndex([(0, 0, 0)])
        assert collides((0.79, 0.0, 0.0), index, RADIUS, HEIGHT)
        assert not collides((0.81, 0.0, 0.0), index, RADIUS, HEIGHT)
        assert not collides((0.0, 0.0, -0.81), index, RADIUS, HEIGHT)

    def test_vertical_reach(self):
        # The envelope reaches height + 0.5 on y, but only one cell is scanned.
        index = OccupancyIndex([(0, 0, 0)])
        assert collides((0.0, 1.4, 0.0), index, RADIUS, HEIGHT)
        assert not collides((0.0, 1.6, 0.0), index, RADIUS, HEIGHT)

    def test_open_air(self):
        index = OccupancyIndex([(0, 0, 0), (3, 1, -2), (-4, 0, 4)])
        clearance = RADIUS + 0.5 + HEIGHT + 0.5
        for pos in [(10.0, 0.0, 10.0), (0.0, clearance + 0.1, 0.0), (clearance + 0.1, 0.0, 0.0)]:
            assert not collides(pos, index, RADIUS, HEIGHT)

    def test_half_cell_positions(self):
        index = OccupancyIndex([(2, 0, 0)])
        assert not collides((0.5, 0.0, 0.0), index, RADIUS, HEIGHT)
        assert collides((1.5, 0.0, 0.0), index, RADIUS, HEIGHT)


class TestResolveMove:
    def test_free_move_applies_both_axes(self):
        player = PlayerState(pos=[0.0, 2.0, 0.0], vel=[-1.0, 0.0, -1.0])
        result = resolve_move(player, OccupancyIndex(), 0.1, 0.2)
        assert result == (False, False)
        assert player.pos == pytest.approx([0.1, 2.0, 0.2])
        assert player.vel == [-1.0, 0.0, -1.0]

    def test_wall_sliding(self):
        """Blocked on X by (5, 0, 5), the Z component still goes through."""
        index = OccupancyIndex([(5, 0, 5)])
        player = PlayerState(pos=[4.15, 0.0, 5.0], vel=[-1.0, 0.0, -1.0])
        result = resolve_move(player, index, 0.1, 0.1)
        assert result.blocked_x
        assert not result.blocked_z
        assert player.pos[0] == pytest.approx(4.15)
        assert player.pos[2] == pytest.approx(5.1)
        assert player.vel[0] == 0.0
        assert player.vel[2] == -1.0

    def test_z_tested_with_updated_x(self):
        # Moving X first clears the wall, so Z is free; from the old X it would not be.
        index = OccupancyIndex([(1, 0, 1)])
        player = PlayerState(pos=[0.25, 0.0, 0.1], vel=[1.0, 0.0, -1.0])
        result = resolve_move(player, index, -0.1, 0.15)
        assert result == (False, False)
        assert player.pos[0] == pytest.approx(0.15)
        assert player.pos[2] == pytest.approx(0.25)

    def test_blocked_both_axes(self):
        index = OccupancyIndex([(1, 0, 0), (0, 0, 1)])
        player = PlayerState(pos=[0.0, 0.0, 0.0], vel=[-2.0, 0.0, -2.0])
        result = resolve_move(player, index, 0.3, 0.3)
        assert result == (True, True)
        assert player.pos == [0.0, 0.0, 0.0]
        assert player.vel == [0.0, 0.0, 0.0]

    def test_y_never_changes(self):
        player = PlayerState(pos=[0.0, 2.0, 0.0])
        resolve_move(player, OccupancyIndex(), 1.0, 1.0)
        assert player.pos[1] == 2.0
