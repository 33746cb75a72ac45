from __future__ import annotations

import numpy as np
import pygame

from . import config
from .camera import add_color_offset, project, scale_color, world_to_camera
from .modes import Mode
from .session import Session


class SoftRenderer:
    """Splat renderer for the occupancy index plus the screen overlays.

    Voxels are drawn as depth-sorted squares at their cell centers, far to
    near; good enough to see the terrain and walk around it.
    """

    def __init__(self, render_w: int, render_h: int):
        self.render_w = render_w
        self.render_h = render_h
        self._cells: np.ndarray | None = None
        self._cells_for: object = None
        self._fonts: dict[int, pygame.font.Font] = {}

    def _cell_centers(self, session: Session) -> np.ndarray:
        # The index is read-only after generation, so convert it once per world.
        if self._cells_for is not session.world:
            self._cells = session.occupancy.to_array().astype(np.float64)
            self._cells_for = session.world
        return self._cells

    def font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            font = self._fonts[size] = pygame.font.Font(None, size)
        return font

    def draw_scene(self, surf: pygame.Surface, session: Session) -> None:
        surf.fill(config.SKY_COLOR)
        player = session.player
        if player is None or session.world is None:
            return

        cells = self._cell_centers(session)
        if len(cells) == 0:
            return
        cam = world_to_camera(cells, player.position, player.yaw, player.pitch)
        sx, sy, factor, visible = project(cam, self.render_w, self.render_h)
        depth = cam[:, 2]
        visible &= depth <= config.BLOCK_MAX_DIST
        visible &= (sx > -self.render_w) & (sx < self.render_w * 2)
        visible &= (sy > -self.render_h) & (sy < self.render_h * 2)

        idx = np.nonzero(visible)[0]
        idx = idx[np.argsort(-depth[idx])]
        for i in idx:
            d = depth[i]
            brightness = max(0.0, 1 - (d / config.BLOCK_MAX_DIST) ** 2)
            size = max(1, min(64, int(factor[i] * 1.08 + 0.35)))
            rect = pygame.Rect(0, 0, size, size)
            rect.center = (int(sx[i]), int(sy[i]))
            pygame.draw.rect(surf, scale_color(config.BLOCK_COLOR, brightness), rect)

        self._draw_grass(surf, session)

    def _draw_grass(self, surf: pygame.Surface, session: Session) -> None:
        decorations = session.world.decorations
        if not decorations:
            return
        player = session.player
        points = np.array([item["pos"] for item in decorations], dtype=np.float64)
        # Blades sit on the top face, half a cell above the voxel center.
        points[:, 1] -= 0.5
        cam = world_to_camera(points, player.position, player.yaw, player.pitch)
        sx, sy, factor, visible = project(cam, self.render_w, self.render_h)
        depth = cam[:, 2]
        visible &= depth <= config.BLOCK_MAX_DIST * 0.5
        visible &= (sx > 0) & (sx < self.render_w) & (sy > 0) & (sy < self.render_h)
        for i in np.nonzero(visible)[0]:
            item = decorations[i]
            brightness = max(0.0, 1 - (depth[i] / config.BLOCK_MAX_DIST) ** 2)
            color = scale_color(add_color_offset(config.GRASS_COLOR, item["color_offset"]), brightness)
            base_line = max(1, int((3 * factor[i]) / 40))
            for length_mult, tip_offset in item["blades"]:
                blade_length = max(1, int(base_line * length_mult))
                tip_x = sx[i] + tip_offset * factor[i] * 0.1
                pygame.draw.line(surf, color, (sx[i], sy[i]), (tip_x, sy[i] - blade_length))

    def draw_crosshair(self, screen: pygame.Surface) -> None:
        w, h = screen.get_size()
        cx, cy = w // 2, h // 2
        pygame.draw.line(screen, config.TEXT_COLOR, (cx - 8, cy), (cx + 8, cy), 2)
        pygame.draw.line(screen, config.TEXT_COLOR, (cx, cy - 8), (cx, cy + 8), 2)

    def draw_inventory(self, screen: pygame.Surface) -> None:
        w, h = screen.get_size()
        panel = pygame.Rect(0, 0, 600, 400)
        panel.center = (w // 2, h // 2)
        overlay = pygame.Surface(panel.size, pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 204))
        screen.blit(overlay, panel.topleft)
        pygame.draw.rect(screen, config.TEXT_COLOR, panel, 2)

        pad = 10
        gap = 4
        cell = (panel.width - 2 * pad - (config.INVENTORY_COLS - 1) * gap) // config.INVENTORY_COLS
        for row in range(config.INVENTORY_ROWS):
            for col in range(config.INVENTORY_COLS):
                slot = pygame.Rect(
                    panel.left + pad + col * (cell + gap),
                    panel.top + pad + row * (cell + gap),
                    cell,
                    cell,
                )
                pygame.draw.rect(screen, (85, 85, 85), slot, 2)

    def title_buttons(self, screen: pygame.Surface) -> dict[str, pygame.Rect]:
        w, h = screen.get_size()
        play = pygame.Rect(0, 0, 300, 54)
        play.center = (w // 2, h // 2 + 20)
        options = pygame.Rect(0, 0, 300, 54)
        options.center = (w // 2, h // 2 + 84)
        return {"start": play, "options": options}

    def draw_title(self, screen: pygame.Surface, message: str | None = None) -> None:
        screen.fill((0, 0, 0))
        w, h = screen.get_size()
        font = self.font(48)
        title = font.render("Voxel Sandbox", True, config.TEXT_COLOR)
        screen.blit(title, title.get_rect(center=(w // 2, h // 2 - 100)))
        buttons = self.title_buttons(screen)
        colors = {"start": (76, 175, 80), "options": (117, 117, 117)}
        labels = {"start": "Play Game", "options": "Options"}
        for name, rect in buttons.items():
            pygame.draw.rect(screen, colors[name], rect)
            label = font.render(labels[name], True, config.TEXT_COLOR)
            screen.blit(label, label.get_rect(center=rect.center))
        if message:
            text = font.render(message, True, (255, 120, 120))
            screen.blit(text, text.get_rect(center=(w // 2, h - 60)))

    def draw_options(self, screen: pygame.Surface) -> None:
        screen.fill((0, 0, 0))
        w, h = screen.get_size()
        font = self.font(48)
        text = font.render("Options  (Esc to go back)", True, config.TEXT_COLOR)
        screen.blit(text, text.get_rect(center=(w // 2, h // 2)))

    def draw_status(self, screen: pygame.Surface, session: Session, fps: float) -> None:
        player = session.player
        font = self.font(28)
        lines = [f"{fps:5.1f} fps"]
        if player is not None:
            x, y, z = player.position
            lines.append(f"{x:6.2f} {y:6.2f} {z:6.2f}")
        if session.world is not None and session.world.decoration_error is not None:
            lines.append("decorations unavailable")
        if session.mode is Mode.PLAYING and not session.captured and not session.inventory_open:
            lines.append("click to resume")
        for i, line in enumerate(lines):
            screen.blit(font.render(line, True, config.TEXT_COLOR), (8, 8 + i * 24))
