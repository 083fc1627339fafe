"""Game constants and the plain data pieces shared by the game systems."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

# Asset names
PLAYER_SPRITE = "player_a_01.png"
PLAYER_LASER_SPRITE = "laser_a_01.png"
ENEMY_SPRITE = "enemy_a_01.png"
ENEMY_LASER_SPRITE = "laser_b_01.png"
EXPLOSION_SHEET = "explo_a_sheet.png"
ENEMY_EXPLOSION_SOUND = "enemy_explosion.ogg"

# Sprite sizes (unscaled, in pixels)
PLAYER_SIZE = (144.0, 75.0)
PLAYER_LASER_SIZE = (9.0, 54.0)
ENEMY_SIZE = (144.0, 75.0)
ENEMY_LASER_SIZE = (17.0, 55.0)

EXPLOSION_LEN = 16
EXPLOSION_FRAME_SIZE = 64
EXPLOSION_COLUMNS = 4
EXPLOSION_ROWS = 4
EXPLOSION_FRAME_SECONDS = 0.05

SPRITE_SCALE = 0.5

BASE_SPEED = 500.0
PLAYER_RESPAWN_DELAY = 2.0
ENEMY_MAX = 2
FORMATION_MEMBERS_MAX = 2

WINDOW_TITLE = "Rust Invaders!"
WINDOW_SIZE = (598.0, 676.0)
CLEAR_COLOR = (0.04, 0.04, 0.04)

DESPAWN_MARGIN = 200.0


@dataclass
class Timer:
    """A countdown that either fires once or repeats every ``duration`` seconds."""

    duration: float
    repeating: bool = False
    elapsed: float = 0.0
    times_finished_this_tick: int = 0
    _finished: bool = field(default=False, repr=False)

    def __post_init__(self) -> None:
        if self.duration < 0:
            raise ValueError("timer duration must not be negative")

    def tick(self, dt: float) -> Timer:
        """Advance the timer by ``dt`` seconds."""
        if dt < 0:
            raise ValueError("cannot tick a timer backwards")
        if not self.repeating and self._finished:
            self.times_finished_this_tick = 0
            return self

        self.elapsed += dt
        if self.elapsed >= self.duration:
            if self.repeating:
                if self.duration > 0:
                    count = int(self.elapsed // self.duration)
                    self.elapsed -= count * self.duration
                else:
                    count = 1
                    self.elapsed = 0.0
                self.times_finished_this_tick = count
            else:
                self.times_finished_this_tick = 1
                self.elapsed = self.duration
            self._finished = True
        else:
            self.times_finished_this_tick = 0
            if self.repeating:
                self._finished = False
        return self

    def finished(self) -> bool:
        """For a repeating timer, whether it fired in the last tick; otherwise whether it ran out."""
        return self._finished


@dataclass(frozen=True)
class WinSize:
    """Window width and height."""

    w: float
    h: float


@dataclass(frozen=True)
class SpriteSize:
    """Unscaled size of a sprite."""

    w: float
    h: float

    @classmethod
    def from_tuple(cls, pair: tuple[float, float]) -> SpriteSize:
        w, h = pair
        return cls(float(w), float(h))


@dataclass
class Velocity:
    """Direction of motion, scaled by the moving system."""

    x: float = 0.0
    y: float = 0.0


@dataclass
class Movable:
    """Marks something as moved each frame; ``auto_despawn`` removes it once off screen."""

    auto_despawn: bool = False


@dataclass(frozen=True)
class Aabb2d:
    """Axis-aligned bounding box."""

    min: tuple[float, float]
    max: tuple[float, float]

    @classmethod
    def from_center(
        cls, center: tuple[float, float], half_size: tuple[float, float]
    ) -> Aabb2d:
        cx, cy = center
        hx, hy = half_size
        return cls((cx - hx, cy - hy), (cx + hx, cy + hy))

    def intersects(self, other: Aabb2d) -> bool:
        """Whether the boxes overlap; touching edges count as overlap."""
        x_overlaps = self.min[0] <= other.max[0] and self.max[0] >= other.min[0]
        y_overlaps = self.min[1] <= other.max[1] and self.max[1] >= other.min[1]
        return x_overlaps and y_overlaps


@dataclass
class PlayerState:
    """Whether the player is alive and when it was last shot (-1 for never)."""

    on: bool = False
    last_shot: float = -1.0

    def shot(self, time: float) -> None:
        self.on = False
        self.last_shot = time

    def spawned(self) -> None:
        self.on = True
        self.last_shot = -1.0


class Side(enum.Enum):
    """Who fired a laser."""

    PLAYER = "player"
    ENEMY = "enemy"


@dataclass
class Laser:
    """A laser shot in flight."""

    x: float
    y: float
    side: Side
    size: SpriteSize
    velocity: Velocity
    z: float = 0.0
    scale: float = SPRITE_SCALE
    movable: Movable = field(default_factory=lambda: Movable(auto_despawn=True))
    flipped: bool = False

    def aabb(self) -> Aabb2d:
        half = (self.size.w * self.scale / 2.0, self.size.h * self.scale / 2.0)
        return Aabb2d.from_center((self.x, self.y), half)


@dataclass
class Explosion:
    """An explosion animation playing at a position."""

    x: float
    y: float
    z: float = 0.0
    index: int = 0
    timer: Timer = field(
        default_factory=lambda: Timer(EXPLOSION_FRAME_SECONDS, repeating=True)
    )

    def advance(self, dt: float) -> bool:
        """Tick the animation; return True once the last frame has been shown."""
        self.timer.tick(dt)
        if self.timer.finished():
            self.index += 1
        return self.index >= EXPLOSION_LEN