"""Second order dynamics for smoothing externally driven scalars."""

from __future__ import annotations

import math
from dataclasses import dataclass

SNAP_EPSILON = 1e-4


@dataclass(frozen=True)
class SecondOrderParameters:
    """Initial parameters for a second order system.

    Rule of thumb: change zeta to alter how movement settles, r to alter the
    initial response and freq to speed the whole system up or down.
    """

    # Natural frequency in cycles per time unit.
    freq: float
    # Damping ratio. Below 1 the value oscillates around the target, above 1 it
    # settles without overshoot.
    zeta: float
    # Response factor. Above 1 overshoots, below 0 anticipates the input.
    r: float


class SecondOrderSystem:
    """Smooth a scalar signal using a damped oscillator.

    Position is integrated explicitly, velocity semi-implicitly.
    """

    def __init__(self, params: SecondOrderParameters, x_initial: float):
        omega = 2.0 * math.pi * params.freq
        self.k1 = params.zeta / (math.pi * params.freq)
        self.k2 = 1.0 / (omega * omega)
        self.k3 = params.r * params.zeta / omega

        self._x_prev = float(x_initial)
        self._y = float(x_initial)
        self._dy = 0.0

    @property
    def velocity(self) -> float:
        return self._dy

    def update(self, timestep: float, x: float) -> float:
        """Advance towards x, estimating its speed from the previous input."""
        dx = (x - self._x_prev) / timestep if timestep > 0.0 else 0.0
        self._x_prev = x
        return self.update_with_speed(timestep, x, dx)

    def update_with_speed(self, timestep: float, x: float, dx: float) -> float:
        """Advance towards x with a known input speed dx.

        Within SNAP_EPSILON of the target the value snaps to x and the
        velocity is reset to zero, so no motion carries over to the next target.
        """
        if abs(x - self._y) < SNAP_EPSILON:
            self._y = float(x)
            self._dy = 0.0
            return self._y

        self._y = self._y + self._dy * timestep
        self._dy = (self._dy * self.k2 + (x + dx * self.k3 - self._y) * timestep) / (
            self.k2 + timestep * self.k1
        )
        return self._y

    def value(self) -> float:
        return self._y
