"""The player's ship: input, spawning, movement, invincibility and firing."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field

from spaceraid.components import (
    PLAYER_LASER_SIZE,
    PLAYER_RESPAWN_DELAY,
    PLAYER_SIZE,
    SPRITE_SCALE,
    Aabb2d,
    Laser,
    Movable,
    Side,
    SpriteSize,
    Timer,
    Velocity,
)

PLAYER_SPEED = 1.0
INVINCIBLE_SECONDS = 2.0
PLAYER_Z = 10.0
PLAYER_SPAWN_LIFT = 5.0
LASER_LIFT = 15.0
LASER_EDGE_INSET = 5.0


class Key(enum.Enum):
    """Keys the game reacts to."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    SPACE = "space"


class InputState:
    """Keys held down, plus those pressed since the last frame ended."""

    def __init__(self) -> None:
        self._held: set[Key] = set()
        self._just: set[Key] = set()

    def press(self, key: Key) -> None:
        if key not in self._held:
            self._just.add(key)
        self._held.add(key)

    def release(self, key: Key) -> None:
        self._held.discard(key)

    def pressed(self, key: Key) -> bool:
        return key in self._held

    def just_pressed(self, key: Key) -> bool:
        return key in self._just

    def end_frame(self) -> None:
        """Forget which keys were newly pressed; held keys stay held."""
        self._just.clear()


@dataclass
class Player:
    """The player's ship."""

    x: float
    y: float
    z: float = PLAYER_Z
    scale: float = SPRITE_SCALE
    size: SpriteSize = field(default_factory=lambda: SpriteSize.from_tuple(PLAYER_SIZE))
    velocity: Velocity = field(default_factory=Velocity)
    movable: Movable = field(default_factory=lambda: Movable(auto_despawn=False))
    invincible: Timer | None = field(
        default_factory=lambda: Timer(INVINCIBLE_SECONDS, repeating=False)
    )

    def aabb(self) -> Aabb2d:
        half = (self.size.w * self.scale / 2.0, self.size.h * self.scale / 2.0)
        return Aabb2d.from_center((self.x, self.y), half)


def _clamp(value: float, low: float, high: float) -> float:
    if low > high:
        raise ValueError(f"invalid clamp range {low}..{high}")
    return min(max(value, low), high)


def invincible_timer_system(world, dt: float) -> None:
    """Count down the player's invincibility and drop it once it runs out."""
    player = world.player
    if player is None or player.invincible is None:
        return
    player.invincible.tick(dt)
    if player.invincible.finished():
        player.invincible = None


def player_movement_system(world, dt: float) -> None:
    """Move the player by its velocity and keep it inside the window."""
    player = world.player
    if player is None:
        return
    win = world.win_size
    scaled_width = player.size.w * SPRITE_SCALE
    scaled_height = player.size.h * SPRITE_SCALE

    min_x = -win.w / 2.0 + scaled_width / 2.0
    max_x = win.w / 2.0 - scaled_width / 2.0
    min_y = -win.h / 2.0 + scaled_height / 2.0
    max_y = win.h / 2.0 - scaled_height / 2.0

    new_x = player.x + player.velocity.x * dt
    new_y = player.y + player.velocity.y * dt
    player.x = _clamp(new_x, min_x, max_x)
    player.y = _clamp(new_y, min_y, max_y)


def player_spawn_system(world) -> Player | None:
    """Spawn the player at the bottom centre if it is down and the respawn delay has passed."""
    state = world.player_state
    now = world.elapsed
    last_shot = state.last_shot
    if state.on or not (last_shot == -1.0 or now > last_shot + PLAYER_RESPAWN_DELAY):
        return None

    bottom = -world.win_size.h / 2.0
    player = Player(
        x=0.0,
        y=bottom + PLAYER_SIZE[1] / 2.0 * SPRITE_SCALE + PLAYER_SPAWN_LIFT,
    )
    world.player = player
    state.spawned()
    return player


def player_fire_system(world, controls: InputState) -> list[Laser]:
    """Fire a pair of lasers from the ship's sides when space is newly pressed."""
    player = world.player
    if player is None or not controls.just_pressed(Key.SPACE):
        return []

    x_offset = PLAYER_SIZE[0] / 2.0 * SPRITE_SCALE - LASER_EDGE_INSET
    shots = [
        Laser(
            x=player.x + offset,
            y=player.y + LASER_LIFT,
            side=Side.PLAYER,
            size=SpriteSize.from_tuple(PLAYER_LASER_SIZE),
            velocity=Velocity(0.0, 1.0),
            z=0.0,
            scale=SPRITE_SCALE,
            movable=Movable(auto_despawn=True),
        )
        for offset in (x_offset, -x_offset)
    ]
    world.lasers.extend(shots)
    return shots


def player_keyboard_event_system(world, controls: InputState) -> None:
    """Set the player's velocity from the arrow keys, normalised for diagonals."""
    player = world.player
    if player is None:
        return
    vx = vy = 0.0
    if controls.pressed(Key.LEFT):
        vx -= 1.0
    if controls.pressed(Key.RIGHT):
        vx += 1.0
    if controls.pressed(Key.UP):
        vy += 1.0
    if controls.pressed(Key.DOWN):
        vy -= 1.0

    length = math.hypot(vx, vy)
    if length > 0.0:
        vx = vx / length * PLAYER_SPEED
        vy = vy / length * PLAYER_SPEED

    player.velocity.x = vx
    player.velocity.y = vy