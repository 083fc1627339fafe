"""Enemy flight formations along drifting elliptical paths."""

from __future__ import annotations

import dataclasses
import math
import random
from dataclasses import dataclass

from spaceraid.components import BASE_SPEED, FORMATION_MEMBERS_MAX, WinSize


def uniform(rng: random.Random, low: float, high: float) -> float:
    """A value in the half-open range [low, high); an empty range is an error."""
    if not low < high:
        raise ValueError(f"empty range {low}..{high}")
    return low + (high - low) * rng.random()


@dataclass
class Formation:
    """Flight parameters of one enemy."""

    start: tuple[float, float]
    radius: tuple[float, float]
    pivot: tuple[float, float]
    speed: float
    angle: float
    change_timer: float
    pivot_delta: tuple[float, float]
    radius_delta: tuple[float, float]
    speed_delta: float

    def copy(self) -> Formation:
        return dataclasses.replace(self)


@dataclass
class FormationMaker:
    """Hands out formations, sharing one template among up to a fixed number of enemies."""

    current_template: Formation | None = None
    current_members: int = 0

    def make(self, win_size: WinSize, rng: random.Random | None = None) -> Formation:
        if self.current_template is not None and self.current_members < FORMATION_MEMBERS_MAX:
            self.current_members += 1
            return self.current_template.copy()

        rng = rng if rng is not None else random.Random()

        w_span = win_size.w / 2.0 + 100.0
        h_span = win_size.h / 2.0 + 100.0
        x = w_span if rng.random() < 0.5 else -w_span
        y = uniform(rng, -h_span, h_span)
        start = (x, y)

        w_span = win_size.w / 4.0
        h_span = win_size.h / 3.0 - 50.0
        pivot = (uniform(rng, -w_span, w_span), uniform(rng, 0.0, h_span))

        radius = (uniform(rng, 80.0, 150.0), 100.0)
        angle = math.atan2(y - pivot[1], x - pivot[0])

        pivot_delta = (uniform(rng, -20.0, 20.0), uniform(rng, -20.0, 20.0))
        radius_delta = (uniform(rng, -10.0, 10.0), uniform(rng, -10.0, 10.0))
        speed_delta = uniform(rng, -10.0, 10.0)

        formation = Formation(
            start=start,
            radius=radius,
            pivot=pivot,
            speed=BASE_SPEED,
            angle=angle,
            change_timer=0.0,
            pivot_delta=pivot_delta,
            radius_delta=radius_delta,
            speed_delta=speed_delta,
        )
        self.current_template = formation.copy()
        self.current_members = 1
        return formation