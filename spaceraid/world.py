"""The game world: everything alive in one frame and the systems that update it."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from spaceraid.components import (
    BASE_SPEED,
    DESPAWN_MARGIN,
    WINDOW_SIZE,
    Explosion,
    Laser,
    PlayerState,
    Side,
    Timer,
    WinSize,
)
from spaceraid.enemy import (
    Enemy,
    enemy_fire_criteria,
    enemy_fire_system,
    enemy_movement_system,
    enemy_spawn_system,
)
from spaceraid.formation import FormationMaker
from spaceraid.player import (
    InputState,
    Player,
    invincible_timer_system,
    player_fire_system,
    player_keyboard_event_system,
    player_movement_system,
    player_spawn_system,
)

PLAYER_SPAWN_INTERVAL = 0.5
ENEMY_SPAWN_INTERVAL = 1.0


@dataclass
class World:
    """All game state, advanced one frame at a time by :meth:`step`."""

    win_size: WinSize = field(default_factory=lambda: WinSize(*WINDOW_SIZE))
    rng: random.Random = field(default_factory=random.Random)
    player_state: PlayerState = field(default_factory=PlayerState)
    player: Player | None = None
    enemies: list[Enemy] = field(default_factory=list)
    lasers: list[Laser] = field(default_factory=list)
    explosions: list[Explosion] = field(default_factory=list)
    explosions_to_spawn: list[tuple[float, float, float]] = field(default_factory=list)
    enemy_count: int = 0
    formation_maker: FormationMaker = field(default_factory=FormationMaker)
    elapsed: float = 0.0
    player_spawn_timer: Timer = field(
        default_factory=lambda: Timer(PLAYER_SPAWN_INTERVAL, repeating=True)
    )
    enemy_spawn_timer: Timer = field(
        default_factory=lambda: Timer(ENEMY_SPAWN_INTERVAL, repeating=True)
    )

    def step(self, dt: float, controls: InputState | None = None) -> int:
        """Advance the world by ``dt`` seconds; return how many enemies exploded."""
        if dt < 0:
            raise ValueError("cannot step the world backwards")
        controls = controls if controls is not None else InputState()
        self.elapsed += dt

        if self.player_spawn_timer.tick(dt).finished():
            player_spawn_system(self)
        player_keyboard_event_system(self, controls)
        movable_system(self, dt)
        player_movement_system(self, dt)
        player_fire_system(self, controls)
        invincible_timer_system(self, dt)

        if self.enemy_spawn_timer.tick(dt).finished():
            enemy_spawn_system(self, self.rng)
        if enemy_fire_criteria(self.rng):
            enemy_fire_system(self)
        enemy_movement_system(self, dt, self.rng)

        hits = player_laser_hit_enemy_system(self)
        enemy_laser_hit_player_system(self)
        explosion_to_spawn_system(self)
        explosion_animation_system(self, dt)
        return hits


def _out_of_bounds(x: float, y: float, win: WinSize) -> bool:
    return (
        y > win.h / 2.0 + DESPAWN_MARGIN
        or y < -win.h / 2.0 - DESPAWN_MARGIN
        or x > win.w / 2.0 + DESPAWN_MARGIN
        or x < -win.w / 2.0 - DESPAWN_MARGIN
    )


def movable_system(world: World, dt: float) -> None:
    """Move lasers and the player by their velocity; drop auto-despawning ones that left the screen."""
    distance = dt * BASE_SPEED
    kept = []
    for laser in world.lasers:
        laser.x += laser.velocity.x * distance
        laser.y += laser.velocity.y * distance
        if laser.movable.auto_despawn and _out_of_bounds(laser.x, laser.y, world.win_size):
            continue
        kept.append(laser)
    world.lasers[:] = kept

    player = world.player
    if player is not None:
        player.x += player.velocity.x * distance
        player.y += player.velocity.y * distance
        if player.movable.auto_despawn and _out_of_bounds(player.x, player.y, world.win_size):
            world.player = None


def player_laser_hit_enemy_system(world: World) -> int:
    """Destroy each enemy hit by a player laser, along with the laser; return the number of hits."""
    destroyed: set[int] = set()
    spent: set[int] = set()
    for laser in world.lasers:
        if laser.side is not Side.PLAYER:
            continue
        laser_box = laser.aabb()
        for enemy in world.enemies:
            if id(enemy) in destroyed or not laser_box.intersects(enemy.aabb()):
                continue
            destroyed.add(id(enemy))
            spent.add(id(laser))
            world.enemy_count -= 1
            world.explosions_to_spawn.append((enemy.x, enemy.y, enemy.z))
            break

    if destroyed:
        world.enemies[:] = [e for e in world.enemies if id(e) not in destroyed]
        world.lasers[:] = [l for l in world.lasers if id(l) not in spent]
    return len(destroyed)


def enemy_laser_hit_player_system(world: World) -> bool:
    """Destroy the player if an enemy laser hits it while not invincible; return whether it was hit."""
    player = world.player
    if player is None or player.invincible is not None:
        return False

    player_box = player.aabb()
    for laser in world.lasers:
        if laser.side is not Side.ENEMY or not laser.aabb().intersects(player_box):
            continue
        world.player = None
        world.player_state.shot(world.elapsed)
        world.lasers.remove(laser)
        world.explosions_to_spawn.append((player.x, player.y, player.z))
        return True
    return False


def explosion_to_spawn_system(world: World) -> None:
    """Start an explosion animation at every pending position."""
    world.explosions.extend(Explosion(x=x, y=y, z=z) for x, y, z in world.explosions_to_spawn)
    world.explosions_to_spawn.clear()


def explosion_animation_system(world: World, dt: float) -> None:
    """Advance explosion animations and remove those that have played out."""
    world.explosions[:] = [e for e in world.explosions if not e.advance(dt)]