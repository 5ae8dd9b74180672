"""Propellant volume -> propellant level solvers.

The propellant level is measured along the rotation axis from the right
(lower, larger-X) end, which is where the tank outlet sits. The free surface
is assumed to stay orthogonal to the rotation axis (pressurized tank).

Each shape variant has its own solver, chosen when the shape is built and
stored on the RotationBody as a plain value:

- CylinderLevel: linear, exact
- ConeLevel: cubic, closed form (Cardano; one real root since V'(l) > 0)
- SegmentLevel: x^2 (3 - x) = v, solved by Halley's method

All solvers work in SI floats (m^3 in, m out).
"""

import logging
import math
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import numpy as np
from beartype import beartype

from lvmass.config import DEFAULT_CONFIG, SolverConfig
from lvmass.errors import LevelSolverError

logger = logging.getLogger(__name__)


@runtime_checkable
class LevelSolver(Protocol):
    """Protocol for volume-to-level inversion."""

    def level_of_volume(self, volume: float) -> float:
        """Propellant level [m] for a propellant volume [m^3]."""
        ...


def _check_volume(volume: float, encl_vol: float) -> None:
    if not 0.0 <= volume <= encl_vol:
        raise ValueError(f"Propellant volume {volume} outside [0, {encl_vol}] m^3")


# =============================================================================
# Truncated Cone
# =============================================================================


@beartype
@dataclass(frozen=True, slots=True)
class CylinderLevel:
    """Level of a cylinder (R == r): proportional to the volume."""

    height: float
    encl_vol: float

    def level_of_volume(self, volume: float) -> float:
        _check_volume(volume, self.encl_vol)
        return volume / self.encl_vol * self.height


@beartype
@dataclass(frozen=True, slots=True)
class ConeLevel:
    """Level of a truncated cone with R != r.

    The cube root loses accuracy as the free surface nears a pointed top, so
    a full cone returns its height directly.

    Attributes:
        height: Cone height h [m]
        delta_r: R - r [m]
        cl_vol: (3 / pi) * h^2 * delta_r [m^3]
        rh: R * h [m^2]
        rh3: (R * h)^3 [m^6]
        encl_vol: Enclosed volume [m^3]
    """

    height: float
    delta_r: float
    cl_vol: float
    rh: float
    rh3: float
    encl_vol: float

    def level_of_volume(self, volume: float) -> float:
        _check_volume(volume, self.encl_vol)
        if volume == self.encl_vol:
            return self.height
        return (self.rh - float(np.cbrt(self.rh3 - self.cl_vol * volume))) / self.delta_r


# =============================================================================
# Spherical Segment
# =============================================================================


@beartype
@dataclass(frozen=True, slots=True)
class SegmentLevel:
    """Level of a spherical segment.

    For a right-facing segment the propellant fills a polar cap of height l;
    with x = l / R and v = V / (pi/3 * R^3) this gives x^2 (3 - x) = v,
    0 <= x <= 1, 0 <= v <= 2. A left-facing segment uses the identity
    V_left(l) + V_right(h - l) = V_encl.

    Attributes:
        facing_right: Pole towards +X
        sphere_radius: R [m]
        height: Segment height h [m]
        encl_vol: Enclosed volume [m^3]
        config: Tolerance and iteration cap
    """

    facing_right: bool
    sphere_radius: float
    height: float
    encl_vol: float
    config: SolverConfig = DEFAULT_CONFIG

    def level_of_volume(self, volume: float) -> float:
        _check_volume(volume, self.encl_vol)
        if self.facing_right:
            return self._level_from_pole(volume)

        level = self.height - self._level_from_pole(self.encl_vol - volume)
        if level < -self.config.tol * self.height:
            raise ValueError(f"Negative level {level} for volume {volume}")
        return min(max(level, 0.0), self.height)

    def _level_from_pole(self, volume: float) -> float:
        """Halley iteration on f(x) = x^3 - 3x^2 + v from x = 1/2."""
        tol = self.config.tol
        v = 3.0 * volume / (math.pi * self.sphere_radius**3)
        if not 0.0 <= v < 2.0 + tol:
            raise ValueError(f"Normalized volume {v} outside [0, 2]")
        v = min(v, 2.0)
        if v == 0.0:
            return 0.0

        x = 0.5
        for i in range(self.config.max_iterations):
            x2 = x * x
            x3 = x2 * x
            dx = (x * (x - 2.0) * (x3 - 3.0 * x2 + v)
                  / (2.0 * x2 * x2 - 8.0 * x3 + 9.0 * x2 + v * (1.0 - x)))
            x -= dx
            if abs(dx) < tol:
                break
        else:
            raise LevelSolverError(
                f"Spherical segment level did not converge in "
                f"{self.config.max_iterations} iterations (v={v})"
            )

        logger.debug("Halley converged in %d iterations: v=%.6g x=%.6g", i + 1, v, x)
        x = min(max(x, 0.0), 1.0)
        return x * self.sphere_radius
