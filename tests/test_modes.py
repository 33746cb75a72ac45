"""Tests for the screen mode / inventory / capture state machine."""

import pytest

from voxsandbox.modes import Mode, ModeMachine


@pytest.fixture
def playing() -> ModeMachine:
    machine = ModeMachine()
    machine.start()
    return machine


class TestTransitions:
    def test_initial_state(self):
        machine = ModeMachine()
        assert machine.mode is Mode.TITLE
        assert not machine.inventory_open
        assert not machine.captured
        assert not machine.simulating

    def test_start(self, playing):
        assert playing.mode is Mode.PLAYING
        assert playing.captured
        assert not playing.inventory_open
        assert playing.simulating

    def test_start_while_playing_is_noop(self, playing):
        playing.toggle_inventory()
        assert playing.start() is False
        assert playing.inventory_open

    def test_options_and_back(self):
        machine = ModeMachine()
        assert machine.open_options()
        assert machine.mode is Mode.OPTIONS
        assert machine.start() is False
        assert machine.back()
        assert machine.mode is Mode.TITLE

    def test_back_outside_options_is_noop(self, playing):
        assert playing.back() is False
        assert playing.mode is Mode.PLAYING

    def test_quit_returns_to_title(self, playing):
        playing.toggle_inventory()
        assert playing.quit()
        assert playing.mode is Mode.TITLE
        assert not playing.inventory_open
        assert not playing.captured

    def test_set_mode_dispatch(self):
        machine = ModeMachine()
        assert machine.set_mode("options")
        assert machine.set_mode("back")
        assert machine.set_mode("start")
        assert machine.mode is Mode.PLAYING

    def test_set_mode_unknown(self):
        with pytest.raises(ValueError):
            ModeMachine().set_mode("fly")


class TestInventory:
    def test_toggle_twice_is_identity(self, playing):
        playing.toggle_inventory()
        playing.toggle_inventory()
        assert not playing.inventory_open
        assert playing.captured

    def test_opening_releases_capture(self, playing):
        playing.toggle_inventory()
        assert playing.inventory_open
        assert not playing.captured
        assert not playing.simulating

    def test_external_recapture_closes_inventory(self, playing):
        playing.toggle_inventory()
        playing.on_capture_acquired()
        assert not playing.inventory_open
        assert playing.simulating

    def test_toggle_outside_playing_is_noop(self):
        machine = ModeMachine()
        assert machine.toggle_inventory() is False
        assert not machine.inventory_open
        machine.open_options()
        assert machine.toggle_inventory() is False
        assert not machine.inventory_open

    def test_release_without_inventory(self, playing):
        playing.on_capture_released()
        assert not playing.inventory_open
        assert not playing.simulating

    def test_capture_ignored_on_title(self):
        machine = ModeMachine()
        machine.on_capture_acquired()
        assert not machine.captured
