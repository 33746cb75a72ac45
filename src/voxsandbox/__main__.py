from __future__ import annotations

import argparse
import logging
import sys

import pygame

from . import config
from .heightfield import HEIGHT_FIELDS
from .modes import Mode
from .player import Intents
from .render_soft import SoftRenderer
from .session import Session
from .world import grass_decoration


def _set_capture(captured: bool) -> None:
    pygame.mouse.set_visible(not captured)
    pygame.event.set_grab(captured)
    # Drop motion accumulated while the pointer was free.
    pygame.mouse.get_rel()


def _read_intents() -> Intents:
    keys = pygame.key.get_pressed()
    return Intents(
        forward=bool(keys[pygame.K_w]),
        backward=bool(keys[pygame.K_s]),
        left=bool(keys[pygame.K_a]),
        right=bool(keys[pygame.K_d]),
    )


def _handle_title(session: Session, renderer: SoftRenderer, screen: pygame.Surface, event) -> str | None:
    command = None
    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        for name, rect in renderer.title_buttons(screen).items():
            if rect.collidepoint(event.pos):
                command = name
    elif event.type == pygame.KEYDOWN and event.key == pygame.K_RETURN:
        command = "start"
    elif event.type == pygame.KEYDOWN and event.key == pygame.K_o:
        command = "options"

    if command == "options":
        session.set_mode("options")
    elif command == "start":
        report = session.start()
        if report is None:
            return None
        if not report.ok:
            return "world generation failed"
        _set_capture(True)
    return None


def _handle_playing(session: Session, event) -> None:
    if event.type == pygame.KEYDOWN and event.key == pygame.K_e:
        session.toggle_inventory()
        _set_capture(session.captured)
    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
        session.on_capture_released()
        _set_capture(False)
    elif event.type == pygame.KEYDOWN and event.key == pygame.K_q:
        session.set_mode("quit")
        _set_capture(False)
    elif event.type == pygame.MOUSEBUTTONDOWN and not session.captured:
        session.on_capture_acquired()
        _set_capture(True)
    elif event.type == pygame.MOUSEMOTION and session.captured:
        session.look(*event.rel)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="voxsandbox", add_help=True)
    parser.add_argument(
        "--render-scale",
        type=int,
        choices=(1, 2, 4),
        default=4,
        help="Internal scene scale divisor relative to window (1=full, 2=half, 4=quarter).",
    )
    parser.add_argument("--terrain", choices=sorted(HEIGHT_FIELDS), default="wave")
    parser.add_argument("--world-radius", type=int, default=config.WORLD_RADIUS, help="Chunks in each direction.")
    parser.add_argument("--chunk-size", type=int, default=config.CHUNK_SIZE)
    parser.add_argument("--no-grass", action="store_true", help="Skip grass decorations.")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    session = Session(
        chunk_size=args.chunk_size,
        world_radius=args.world_radius,
        height=HEIGHT_FIELDS[args.terrain],
        decorate=None if args.no_grass else grass_decoration,
    )

    pygame.init()
    screen = pygame.display.set_mode((config.WIDTH, config.HEIGHT))
    pygame.display.set_caption("voxsandbox")
    render_w = max(1, config.WIDTH // args.render_scale)
    render_h = max(1, config.HEIGHT // args.render_scale)
    render_surf = pygame.Surface((render_w, render_h))
    renderer = SoftRenderer(render_w, render_h)

    clock = pygame.time.Clock()
    message = None

    while True:
        dt = clock.get_time() / 1000.0
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit()
                sys.exit()
            if session.mode is Mode.TITLE:
                message = _handle_title(session, renderer, screen, event) or message
            elif session.mode is Mode.OPTIONS:
                if event.type == pygame.KEYDOWN and event.key in (pygame.K_ESCAPE, pygame.K_BACKSPACE):
                    session.set_mode("back")
            else:
                message = None
                _handle_playing(session, event)

        if session.mode is Mode.TITLE:
            renderer.draw_title(screen, message)
        elif session.mode is Mode.OPTIONS:
            renderer.draw_options(screen)
        else:
            intents = _read_intents() if session.captured else Intents()
            session.step(dt, intents)

            renderer.draw_scene(render_surf, session)
            scaled = pygame.transform.scale(render_surf, (config.WIDTH, config.HEIGHT))
            screen.blit(scaled, (0, 0))
            if session.inventory_open:
                renderer.draw_inventory(screen)
            else:
                renderer.draw_crosshair(screen)
            renderer.draw_status(screen, session, clock.get_fps())
        pygame.display.flip()

        clock.tick(config.FPS_LIMIT)


if __name__ == "__main__":
    main()
