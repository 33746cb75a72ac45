from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    TITLE = "title"
    PLAYING = "playing"
    OPTIONS = "options"


class ModeMachine:
    """Screen mode plus the inventory flag and device-capture state.

    ``inventory_open`` and ``captured`` are kept in sync by one rule: while
    playing, the inventory is open exactly when capture has been given up for
    it. Opening the inventory releases capture; any re-capture, whether from
    closing the inventory or from the host, closes it.
    """

    def __init__(self):
        self.mode = Mode.TITLE
        self.inventory_open = False
        self.captured = False

    @property
    def simulating(self) -> bool:
        return self.mode is Mode.PLAYING and self.captured

    def start(self) -> bool:
        if self.mode is not Mode.TITLE:
            logger.debug("start ignored in mode %s", self.mode.value)
            return False
        self.mode = Mode.PLAYING
        self.inventory_open = False
        self.captured = True
        return True

    def open_options(self) -> bool:
        if self.mode is not Mode.TITLE:
            logger.debug("options ignored in mode %s", self.mode.value)
            return False
        self.mode = Mode.OPTIONS
        return True

    def back(self) -> bool:
        if self.mode is not Mode.OPTIONS:
            logger.debug("back ignored in mode %s", self.mode.value)
            return False
        self.mode = Mode.TITLE
        return True

    def quit(self) -> bool:
        if self.mode is not Mode.PLAYING:
            return False
        self.mode = Mode.TITLE
        self.inventory_open = False
        self.captured = False
        return True

    def toggle_inventory(self) -> bool:
        if self.mode is not Mode.PLAYING:
            logger.debug("inventory toggle ignored in mode %s", self.mode.value)
            return False
        if self.inventory_open:
            self.on_capture_acquired()
        else:
            self.inventory_open = True
            self.captured = False
        return True

    def on_capture_acquired(self) -> None:
        if self.mode is not Mode.PLAYING:
            return
        self.captured = True
        self.inventory_open = False

    def on_capture_released(self) -> None:
        self.captured = False

    def set_mode(self, command: str) -> bool:
        handlers = {
            "start": self.start,
            "options": self.open_options,
            "back": self.back,
            "quit": self.quit,
        }
        handler = handlers.get(command)
        if handler is None:
            raise ValueError(f"unknown mode command: {command!r}")
        return handler()
