import math
import random

import pytest

from spaceraid.components import BASE_SPEED, FORMATION_MEMBERS_MAX, WinSize
from spaceraid.formation import FormationMaker

WIN = WinSize(598.0, 676.0)


class _FixedRng:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def test_new_formation_is_within_bounds():
    for seed in range(20):
        formation = FormationMaker().make(WIN, random.Random(seed))
        x, y = formation.start
        assert abs(x) == WIN.w / 2 + 100
        assert -(WIN.h / 2 + 100) <= y < WIN.h / 2 + 100
        px, py = formation.pivot
        assert -WIN.w / 4 <= px < WIN.w / 4
        assert 0.0 <= py < WIN.h / 3 - 50
        assert 80.0 <= formation.radius[0] < 150.0
        assert formation.radius[1] == 100.0
        assert formation.speed == BASE_SPEED
        assert formation.change_timer == 0.0
        assert all(-20.0 <= d < 20.0 for d in formation.pivot_delta)
        assert all(-10.0 <= d < 10.0 for d in formation.radius_delta)
        assert -10.0 <= formation.speed_delta < 10.0


def test_angle_points_from_pivot_to_start():
    formation = FormationMaker().make(WIN, random.Random(7))
    x, y = formation.start
    px, py = formation.pivot
    assert formation.angle == pytest.approx(math.atan2(y - py, x - px))


def test_low_draws_start_on_right_at_bottom():
    formation = FormationMaker().make(WIN, _FixedRng(0.0))
    assert formation.start == (WIN.w / 2 + 100, -(WIN.h / 2 + 100))
    assert formation.pivot == (-WIN.w / 4, 0.0)


def test_high_draw_starts_on_left():
    formation = FormationMaker().make(WIN, _FixedRng(0.9))
    assert formation.start[0] == -(WIN.w / 2 + 100)


def test_members_share_template_then_new_one_starts():
    maker = FormationMaker()
    rng = random.Random(3)
    first = maker.make(WIN, rng)
    members = [first] + [maker.make(WIN, rng) for _ in range(FORMATION_MEMBERS_MAX - 1)]
    assert all(m == first for m in members)
    assert maker.current_members == FORMATION_MEMBERS_MAX
    fresh = maker.make(WIN, rng)
    assert fresh != first
    assert maker.current_members == 1


def test_copies_are_independent():
    maker = FormationMaker()
    rng = random.Random(5)
    first = maker.make(WIN, rng)
    original_pivot = first.pivot
    first.pivot = (0.0, 0.0)
    second = maker.make(WIN, rng)
    assert second.pivot == original_pivot
    assert second is not first


def test_tiny_window_is_an_error():
    with pytest.raises(ValueError):
        FormationMaker().make(WinSize(100.0, 100.0), random.Random(1))