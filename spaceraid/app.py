"""Window, keyboard, drawing and sound around the game world."""

from __future__ import annotations

import argparse
import random
from dataclasses import dataclass
from pathlib import Path

import pygame

from spaceraid.components import (
    CLEAR_COLOR,
    ENEMY_EXPLOSION_SOUND,
    ENEMY_LASER_SIZE,
    ENEMY_SIZE,
    ENEMY_SPRITE,
    ENEMY_LASER_SPRITE,
    EXPLOSION_COLUMNS,
    EXPLOSION_FRAME_SIZE,
    EXPLOSION_ROWS,
    EXPLOSION_SHEET,
    PLAYER_LASER_SIZE,
    PLAYER_LASER_SPRITE,
    PLAYER_SIZE,
    PLAYER_SPRITE,
    SPRITE_SCALE,
    WINDOW_SIZE,
    WINDOW_TITLE,
    Side,
    WinSize,
)
from spaceraid.player import InputState, Key
from spaceraid.world import World

KEY_BINDINGS = {
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_SPACE: Key.SPACE,
}

_CLEAR_RGB = tuple(round(c * 255) for c in CLEAR_COLOR)


def _to_screen(x: float, y: float, win: WinSize) -> tuple[float, float]:
    """World coordinates (origin at centre, y up) to window pixels (origin top left, y down)."""
    return (win.w / 2.0 + x, win.h / 2.0 - y)


def _explosion_frame_rect(index: int) -> pygame.Rect:
    col, row = index % EXPLOSION_COLUMNS, index // EXPLOSION_COLUMNS
    size = EXPLOSION_FRAME_SIZE
    return pygame.Rect(col * size, row * size, size, size)


def _load_image(path: Path, fallback_size: tuple[float, float], color) -> pygame.Surface:
    """Load an image, or make a plain coloured box of the given size if the file is missing."""
    if path.is_file():
        image = pygame.image.load(str(path))
        if pygame.display.get_surface() is not None:
            image = image.convert_alpha()
        return image
    w, h = fallback_size
    surface = pygame.Surface((max(1, int(w)), max(1, int(h))), pygame.SRCALPHA)
    surface.fill(color)
    return surface


def _scaled(surface: pygame.Surface, scale: float) -> pygame.Surface:
    w, h = surface.get_size()
    return pygame.transform.scale(surface, (max(1, round(w * scale)), max(1, round(h * scale))))


def _load_sound(path: Path):
    if not pygame.mixer.get_init() or not path.is_file():
        return None
    try:
        return pygame.mixer.Sound(str(path))
    except pygame.error:
        return None


@dataclass
class _Assets:
    player: pygame.Surface
    player_laser: pygame.Surface
    enemy: pygame.Surface
    enemy_laser: pygame.Surface
    explosion_sheet: pygame.Surface
    explosion_sound: object

    @classmethod
    def load(cls, directory: Path) -> _Assets:
        sheet_size = (
            EXPLOSION_FRAME_SIZE * EXPLOSION_COLUMNS,
            EXPLOSION_FRAME_SIZE * EXPLOSION_ROWS,
        )
        enemy_laser = _scaled(
            _load_image(directory / ENEMY_LASER_SPRITE, ENEMY_LASER_SIZE, (230, 60, 60)),
            SPRITE_SCALE,
        )
        return cls(
            player=_scaled(
                _load_image(directory / PLAYER_SPRITE, PLAYER_SIZE, (80, 160, 255)), SPRITE_SCALE
            ),
            player_laser=_scaled(
                _load_image(directory / PLAYER_LASER_SPRITE, PLAYER_LASER_SIZE, (120, 255, 120)),
                SPRITE_SCALE,
            ),
            enemy=_scaled(
                _load_image(directory / ENEMY_SPRITE, ENEMY_SIZE, (220, 80, 200)), SPRITE_SCALE
            ),
            enemy_laser=pygame.transform.flip(enemy_laser, False, True),
            explosion_sheet=_load_image(directory / EXPLOSION_SHEET, sheet_size, (255, 170, 40)),
            explosion_sound=_load_sound(directory / ENEMY_EXPLOSION_SOUND),
        )


def _draw(screen: pygame.Surface, world: World, assets: _Assets) -> None:
    screen.fill(_CLEAR_RGB)
    items = []
    for laser in world.lasers:
        image = assets.player_laser if laser.side is Side.PLAYER else assets.enemy_laser
        items.append((laser.z, image, laser.x, laser.y))
    sheet_rect = assets.explosion_sheet.get_rect()
    for explosion in world.explosions:
        frame = _explosion_frame_rect(explosion.index).clip(sheet_rect)
        if frame.width and frame.height:
            items.append(
                (explosion.z, assets.explosion_sheet.subsurface(frame), explosion.x, explosion.y)
            )
    for enemy in world.enemies:
        items.append((enemy.z, assets.enemy, enemy.x, enemy.y))
    if world.player is not None:
        player = world.player
        items.append((player.z, assets.player, player.x, player.y))

    for _, image, x, y in sorted(items, key=lambda item: item[0]):
        screen.blit(image, image.get_rect(center=_to_screen(x, y, world.win_size)))


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return value


def _non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError("must not be negative")
    return value


def main(argv=None) -> int:
    """Open the game window and run until it is closed or the frame limit is reached."""
    parser = argparse.ArgumentParser(prog="spaceraid", description="A small space shooter.")
    parser.add_argument("--assets", type=Path, default=Path("assets"), help="asset directory")
    parser.add_argument("--fps", type=_positive_int, default=60, help="frames per second")
    parser.add_argument(
        "--frames", type=_non_negative_int, default=None, help="quit after this many frames"
    )
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)

    pygame.init()
    try:
        if not pygame.mixer.get_init():
            try:
                pygame.mixer.init()
            except pygame.error:
                pass
        screen = pygame.display.set_mode((int(WINDOW_SIZE[0]), int(WINDOW_SIZE[1])))
        pygame.display.set_caption(WINDOW_TITLE)
        assets = _Assets.load(args.assets)
        w, h = screen.get_size()
        world = World(win_size=WinSize(float(w), float(h)), rng=random.Random(args.seed))
        controls = InputState()
        clock = pygame.time.Clock()

        frame = 0
        running = True
        while running and (args.frames is None or frame < args.frames):
            dt = clock.tick(args.fps) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key in KEY_BINDINGS:
                    controls.press(KEY_BINDINGS[event.key])
                elif event.type == pygame.KEYUP and event.key in KEY_BINDINGS:
                    controls.release(KEY_BINDINGS[event.key])
            if not running:
                break

            explosions = world.step(dt, controls)
            controls.end_frame()
            if assets.explosion_sound is not None:
                for _ in range(explosions):
                    assets.explosion_sound.play()

            _draw(screen, world, assets)
            pygame.display.flip()
            frame += 1
    finally:
        pygame.quit()
    return 0