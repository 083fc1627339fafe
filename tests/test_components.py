import pytest

from spaceraid.components import (
    ENEMY_LASER_SIZE,
    EXPLOSION_FRAME_SECONDS,
    EXPLOSION_LEN,
    PLAYER_LASER_SIZE,
    SPRITE_SCALE,
    Aabb2d,
    Explosion,
    Laser,
    PlayerState,
    Side,
    SpriteSize,
    Timer,
    Velocity,
)


def test_once_timer_stays_finished():
    timer = Timer(2.0)
    timer.tick(1.0)
    assert not timer.finished()
    timer.tick(1.5)
    assert timer.finished()
    timer.tick(0.1)
    assert timer.finished()
    assert timer.elapsed == 2.0


def test_repeating_timer_fires_per_period():
    timer = Timer(0.5, repeating=True)
    timer.tick(0.5)
    assert timer.finished()
    timer.tick(0.25)
    assert not timer.finished()
    timer.tick(1.0)
    assert timer.finished()
    assert timer.times_finished_this_tick == 2


def test_timer_rejects_negative_tick():
    with pytest.raises(ValueError):
        Timer(1.0).tick(-0.1)


def test_timer_rejects_negative_duration():
    with pytest.raises(ValueError):
        Timer(-1.0)


def test_sprite_size_from_tuple():
    size = SpriteSize.from_tuple(PLAYER_LASER_SIZE)
    assert (size.w, size.h) == PLAYER_LASER_SIZE


def test_aabb_from_center_is_symmetric():
    box = Aabb2d.from_center((3.0, -2.0), (1.0, 4.0))
    assert (box.min[0] + box.max[0]) / 2 == 3.0
    assert (box.min[1] + box.max[1]) / 2 == -2.0
    assert box.max[0] - box.min[0] == 2.0
    assert box.max[1] - box.min[1] == 8.0


@pytest.mark.parametrize(
    "other, expected",
    [
        (((0.5, 0.5), (0.5, 0.5)), True),
        (((2.0, 0.0), (1.0, 1.0)), True),  # touching edges
        (((3.0, 0.0), (1.0, 1.0)), False),
        (((0.0, 5.0), (1.0, 1.0)), False),
    ],
)
def test_aabb_intersects(other, expected):
    box = Aabb2d.from_center((0.0, 0.0), (1.0, 1.0))
    other_box = Aabb2d.from_center(*other)
    assert box.intersects(other_box) is expected
    assert other_box.intersects(box) is expected


def test_player_state_lifecycle():
    state = PlayerState()
    assert state.on is False
    assert state.last_shot == -1.0
    state.spawned()
    assert state.on is True
    state.shot(12.5)
    assert state.on is False
    assert state.last_shot == 12.5
    state.spawned()
    assert state.last_shot == -1.0


def test_laser_aabb_uses_scaled_size():
    size = SpriteSize.from_tuple(ENEMY_LASER_SIZE)
    laser = Laser(x=10.0, y=20.0, side=Side.ENEMY, size=size, velocity=Velocity(0.0, -1.0))
    box = laser.aabb()
    assert box.max[0] - box.min[0] == pytest.approx(size.w * SPRITE_SCALE)
    assert box.max[1] - box.min[1] == pytest.approx(size.h * SPRITE_SCALE)
    assert laser.movable.auto_despawn is True


def test_explosion_runs_through_all_frames():
    explosion = Explosion(1.0, 2.0)
    results = [explosion.advance(EXPLOSION_FRAME_SECONDS) for _ in range(EXPLOSION_LEN)]
    assert results[-1] is True
    assert not any(results[:-1])
    assert explosion.index == EXPLOSION_LEN


def test_explosion_holds_frame_between_ticks():
    explosion = Explosion(0.0, 0.0)
    assert explosion.advance(EXPLOSION_FRAME_SECONDS / 4) is False
    assert explosion.index == 0