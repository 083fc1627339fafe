"""Enemy ships: spawning in formations, firing and flying along their paths."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field

from spaceraid.components import (
    BASE_SPEED,
    ENEMY_LASER_SIZE,
    ENEMY_MAX,
    ENEMY_SIZE,
    SPRITE_SCALE,
    Aabb2d,
    Laser,
    Movable,
    Side,
    SpriteSize,
    Velocity,
)
from spaceraid.formation import Formation, uniform

ENEMY_Z = 10.0
FIRE_CHANCE = 1.0 / 60.0
LASER_DROP = 15.0
CHANGE_INTERVAL = 0.5


@dataclass
class Enemy:
    """An enemy ship and the formation it flies in."""

    x: float
    y: float
    formation: Formation
    z: float = ENEMY_Z
    scale: float = SPRITE_SCALE
    size: SpriteSize = field(default_factory=lambda: SpriteSize.from_tuple(ENEMY_SIZE))

    def aabb(self) -> Aabb2d:
        half = (self.size.w * self.scale / 2.0, self.size.h * self.scale / 2.0)
        return Aabb2d.from_center((self.x, self.y), half)


def _clamp(value: float, low: float, high: float) -> float:
    if low > high:
        raise ValueError(f"invalid clamp range {low}..{high}")
    return min(max(value, low), high)


def enemy_spawn_system(world, rng: random.Random | None = None) -> Enemy | None:
    """Spawn one enemy at its formation's start unless the enemy limit is reached."""
    if world.enemy_count >= ENEMY_MAX:
        return None
    formation = world.formation_maker.make(world.win_size, rng)
    x, y = formation.start
    enemy = Enemy(x=x, y=y, formation=formation)
    world.enemies.append(enemy)
    world.enemy_count += 1
    return enemy


def enemy_fire_criteria(rng: random.Random | None = None) -> bool:
    """Decide at random, with a one-in-sixty chance, whether enemies fire this frame."""
    rng = rng if rng is not None else random.Random()
    return rng.random() < FIRE_CHANCE


def enemy_fire_system(world) -> list[Laser]:
    """Every enemy fires one laser downwards."""
    shots = [
        Laser(
            x=enemy.x,
            y=enemy.y - LASER_DROP,
            side=Side.ENEMY,
            size=SpriteSize.from_tuple(ENEMY_LASER_SIZE),
            velocity=Velocity(0.0, -1.0),
            z=0.0,
            scale=SPRITE_SCALE,
            movable=Movable(auto_despawn=True),
            flipped=True,
        )
        for enemy in world.enemies
    ]
    world.lasers.extend(shots)
    return shots


def _reroll_deltas(formation: Formation, rng: random.Random) -> None:
    formation.pivot_delta = (uniform(rng, -20.0, 20.0), uniform(rng, -20.0, 20.0))
    formation.radius_delta = (uniform(rng, -10.0, 10.0), uniform(rng, -10.0, 10.0))
    formation.speed_delta = uniform(rng, -10.0, 10.0)


def _move_enemy(enemy: Enemy, win_w: float, win_h: float, dt: float, rng: random.Random) -> None:
    f = enemy.formation

    f.change_timer += dt
    if f.change_timer > CHANGE_INTERVAL:
        _reroll_deltas(f, rng)
        f.change_timer = 0.0

    f.pivot = (f.pivot[0] + f.pivot_delta[0] * dt, f.pivot[1] + f.pivot_delta[1] * dt)
    f.radius = (f.radius[0] + f.radius_delta[0] * dt, f.radius[1] + f.radius_delta[1] * dt)
    f.speed += f.speed_delta * dt

    w_span = win_w / 4.0
    h_span = win_h / 3.0 - 50.0
    f.pivot = (_clamp(f.pivot[0], -w_span, w_span), _clamp(f.pivot[1], 0.0, h_span))
    f.radius = (_clamp(f.radius[0], 50.0, 200.0), _clamp(f.radius[1], 50.0, 150.0))
    f.speed = _clamp(f.speed, BASE_SPEED * 0.5, BASE_SPEED * 1.5)

    x_org, y_org = enemy.x, enemy.y
    max_distance = dt * f.speed

    direction = 1.0 if f.start[0] < 0.0 else -1.0
    x_pivot, y_pivot = f.pivot
    x_radius, y_radius = f.radius

    angle = f.angle + direction * f.speed * dt / (min(x_radius, y_radius) * math.pi / 2.0)

    x_dst = x_radius * math.cos(angle) + x_pivot
    y_dst = y_radius * math.sin(angle) + y_pivot

    dx = x_org - x_dst
    dy = y_org - y_dst
    distance = math.hypot(dx, dy)
    ratio = 0.0 if distance == 0.0 else max_distance / distance

    x = x_org - dx * ratio
    x = max(x, x_dst) if dx > 0.0 else min(x, x_dst)
    y = y_org - dy * ratio
    y = max(y, y_dst) if dy > 0.0 else min(y, y_dst)

    if distance < max_distance * f.speed / 20.0:
        f.angle = angle

    enemy.x = x
    enemy.y = y


def enemy_movement_system(world, dt: float, rng: random.Random | None = None) -> None:
    """Drift each enemy's formation and move it towards its next point on the ellipse."""
    rng = rng if rng is not None else random.Random()
    win = world.win_size
    for enemy in world.enemies:
        _move_enemy(enemy, win.w, win.h, dt, rng)