# spaceraid

A small top-down arcade shooter. You pilot a ship at the bottom of the
screen. Enemies sweep in from the sides in pairs, circle along drifting
elliptical paths and fire lasers downwards. Shoot them down before they
shoot you.

## Installing

```
pip install .
```

The game window, keyboard input, drawing and sound use pygame, which is
installed as a dependency.

## Playing

```
spaceraid
```

Options:

- `--assets DIR`: directory to load sprites and sounds from (default `assets`)
- `--fps N`: frames per second, a positive integer (default 60)
- `--frames N`: quit after this many frames (default: run until the window is closed)
- `--seed N`: seed for the random number generator, for repeatable games

Controls:

- Arrow keys: move the ship (diagonal moves are as fast as straight ones)
- Space: fire a pair of lasers, one from each wing

How a round goes:

- The ship appears at the bottom centre of the screen and cannot be hit
  for two seconds after it appears. It cannot leave the window.
- At most two enemies are on screen at a time; while there is room, a new
  one arrives about once a second. Enemies come in formations of two that
  share a starting point and a path.
- At random, with a one-in-sixty chance each frame, every enemy fires a
  laser downwards at once.
- A player laser that touches an enemy destroys it and plays an explosion.
- When your ship is hit it explodes, and a new one appears about two
  seconds later.
- Lasers that fly well past the edge of the window are removed.

### Assets

The files `player_a_01.png`, `laser_a_01.png`, `enemy_a_01.png`,
`laser_b_01.png`, `explo_a_sheet.png` (a 4×4 sheet of 64×64 frames) and
`enemy_explosion.ogg` are looked up in the asset directory. Any image that
is missing is drawn as a plain coloured box of the right size, and a
missing or unplayable sound is simply not played, so the game runs
without any asset files.

## Using the game logic

The simulation in `spaceraid.world` does not need a window and can be
driven directly, for tests or for trying out the rules:

```python
import random

from spaceraid.world import World
from spaceraid.player import InputState, Key

world = World(rng=random.Random(1))
controls = InputState()

controls.press(Key.SPACE)
destroyed = world.step(1 / 60, controls)
controls.end_frame()
```

`World.step(dt, controls)` advances everything by `dt` seconds: spawning,
input, movement, firing, collisions and explosion animations. It returns
the number of enemies destroyed in that frame.

The systems can also be called one at a time:

- `spaceraid.world`: `movable_system`, `player_laser_hit_enemy_system`,
  `enemy_laser_hit_player_system`, `explosion_to_spawn_system`,
  `explosion_animation_system`
- `spaceraid.player`: `player_spawn_system`, `player_keyboard_event_system`,
  `player_movement_system`, `player_fire_system`, `invincible_timer_system`
- `spaceraid.enemy`: `enemy_spawn_system`, `enemy_fire_criteria`,
  `enemy_fire_system`, `enemy_movement_system`

`spaceraid.formation.FormationMaker` hands out enemy flight paths, and
`spaceraid.components` holds the constants and shared pieces such as
`Timer`, `Aabb2d`, `Laser`, `Explosion` and `PlayerState`.

## What it does not do

There is no score, no lives counter, no menu and no game-over screen: the
game runs until the window is closed (or `--frames` is reached), and your
ship keeps coming back after each hit.

## Running the tests

```
pip install .[test]
pytest
```