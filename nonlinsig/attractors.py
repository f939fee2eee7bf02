"""Chaotic attractor oscillators that run at audio rate.

Each attractor integrates two copies of the same system with the Euler
method: a primary trajectory and a secondary one that runs at its own
speed. Changing a model parameter moves the secondary trajectory back onto
the primary one.
"""

from __future__ import annotations

import abc
import math
from typing import ClassVar

import numpy as np

Vector3 = tuple[float, float, float]


def _sin(value: float) -> float:
    """Sine that yields NaN for infinite input instead of raising."""
    return math.sin(value) if math.isfinite(value) else math.nan


class Attractor(abc.ABC):
    """Base class for a pair of Euler-integrated three-dimensional attractors."""

    default_dt: ClassVar[float] = 0.01
    default_speed_primary: ClassVar[float] = 10.0
    default_speed_secondary: ClassVar[float] = 100.0
    default_scale_outputs: ClassVar[bool] = True
    default_position: ClassVar[float] = 0.001
    scale_factor: ClassVar[float] = 0.1
    parameters: ClassVar[dict[str, float]] = {}

    def __init__(
        self,
        *,
        dt: float | None = None,
        speed_primary: float | None = None,
        speed_secondary: float | None = None,
        scale_outputs: bool | None = None,
        position: float | None = None,
        **params: float,
    ) -> None:
        unknown = sorted(set(params) - set(self.parameters))
        if unknown:
            raise TypeError(
                f"{type(self).__name__} has no parameter(s): {', '.join(unknown)}"
            )
        self.params: dict[str, float] = dict(self.parameters)
        self.params.update({name: float(value) for name, value in params.items()})
        self.dt = float(self.default_dt if dt is None else dt)
        self.speed_primary = float(
            self.default_speed_primary if speed_primary is None else speed_primary
        )
        self.speed_secondary = float(
            self.default_speed_secondary if speed_secondary is None else speed_secondary
        )
        self.scale_outputs = bool(
            self.default_scale_outputs if scale_outputs is None else scale_outputs
        )
        self.position = float(self.default_position if position is None else position)
        self.x = self.y = self.z = 0.0
        self.x2 = self.y2 = self.z2 = 0.0
        self.init_state(self.position)

    def init_state(self, p: float) -> None:
        """Place both trajectories at the starting point derived from ``p``."""
        self.x = self.y = self.z = p
        self.x2 = self.y2 = self.z2 = p

    @abc.abstractmethod
    def derivatives(self, x: float, y: float, z: float) -> Vector3:
        """Return the time derivatives (dx, dy, dz) at the given point."""

    def reset_secondary(self) -> None:
        """Move the secondary trajectory onto the primary one."""
        self.x2, self.y2, self.z2 = self.x, self.y, self.z

    def set_param(self, name: str, value: float) -> None:
        """Change a model parameter and resynchronise the secondary trajectory."""
        if name not in self.params:
            raise KeyError(f"{type(self).__name__} has no parameter {name!r}")
        self.reset_secondary()
        self.params[name] = float(value)

    def _needs_reset(self) -> bool:
        x, y, z = self.x, self.y, self.z
        if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
            return True
        if x == 0.0 and y == 0.0 and z == 0.0:
            return True
        # The equality test chains as (x == y) == z, comparing a truth value with z.
        return float(x == y) == z

    def process(self, frame_count: int, samplerate: float) -> np.ndarray:
        """Advance both trajectories by ``frame_count`` samples.

        Returns an array of shape (6, frame_count) holding primary x, y, z
        followed by secondary x, y, z.
        """
        if samplerate <= 0:
            raise ValueError("samplerate must be positive")
        if frame_count < 0:
            raise ValueError("frame_count must not be negative")
        out = np.empty((6, frame_count), dtype=np.float64)
        step = self.speed_primary / samplerate
        for i in range(frame_count):
            dx, dy, dz = self.derivatives(self.x, self.y, self.z)
            self.x += step * dx
            self.y += step * dy
            self.z += step * dz

            if self._needs_reset():
                self.init_state(self.position)

            step2 = self.speed_secondary / samplerate
            dx2, dy2, dz2 = self.derivatives(self.x2, self.y2, self.z2)
            self.x2 += step2 * dx2
            self.y2 += step2 * dy2
            self.z2 += step2 * dz2

            values = (self.x, self.y, self.z, self.x2, self.y2, self.z2)
            if self.scale_outputs:
                values = tuple(math.tanh(v * self.scale_factor) for v in values)
            out[:, i] = values
        return out


class Dadras(Attractor):
    """Dadras attractor."""

    scale_factor = 0.075
    default_dt = 0.01
    parameters = {"a": 3.0, "b": 2.7, "c": 1.7, "d": 2.0, "e": 9.0}

    def derivatives(self, x: float, y: float, z: float) -> Vector3:
        p = self.params
        dx = y - p["a"] * x + p["b"] * y * z
        dy = p["c"] * y - x * z + z
        dz = p["d"] * x * y - p["e"] * z
        return dx, dy, dz


class Lorenz(Attractor):
    """Lorenz attractor."""

    scale_factor = 0.03
    default_dt = 0.005
    default_position = 0.01
    default_speed_primary = 2.0
    default_speed_secondary = 10.0
    parameters = {"sigma": 10.0, "rho": 28.0, "beta": 8.0 / 3.0}

    def init_state(self, p: float) -> None:
        self.x = self.x2 = -p
        self.y = self.y2 = self.z = self.z2 = p

    def derivatives(self, x: float, y: float, z: float) -> Vector3:
        p = self.params
        dx = p["sigma"] * (y - x)
        dy = x * (p["rho"] - z) - y
        dz = x * y - p["beta"] * z
        return dx, dy, dz


class Thomas(Attractor):
    """Thomas cyclically symmetric attractor."""

    default_dt = 0.05
    default_speed_primary = 2.0
    parameters = {"b": 0.208186}

    def init_state(self, p: float) -> None:
        self.x = self.x2 = -p
        self.y = self.y2 = self.z = self.z2 = p

    def derivatives(self, x: float, y: float, z: float) -> Vector3:
        b = self.params["b"]
        return _sin(y) - b * x, _sin(z) - b * y, _sin(x) - b * z