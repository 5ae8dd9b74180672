"""Numerical configuration for lvmass.

Example:
    >>> from lvmass.config import SolverConfig
    >>> strict = SolverConfig(max_iterations=50)
    >>> segm = SpherSegm.hemisphere(True, meters(0), meters(2), rho, config=strict)
"""

import sys
from dataclasses import dataclass

from beartype import beartype

EPS = sys.float_info.epsilon


@beartype
@dataclass(frozen=True, slots=True)
class SolverConfig:
    """Tolerances and limits used by the shape solvers.

    Attributes:
        tol: Relative tolerance for propellant mass/volume/level boundary
            clamps; also the Halley stop criterion on |dx|
        max_iterations: Iteration cap of the spherical segment level solver
        hemisphere_rel_tol: Relative allowance for h > r in a spherical segment
    """

    tol: float = 100.0 * EPS
    max_iterations: int = 100
    hemisphere_rel_tol: float = 10.0 * EPS

    def __post_init__(self) -> None:
        if self.tol <= 0.0:
            raise ValueError(f"tol must be > 0, got {self.tol}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")
        if self.hemisphere_rel_tol < 0.0:
            raise ValueError(
                f"hemisphere_rel_tol must be >= 0, got {self.hemisphere_rel_tol}"
            )

    @property
    def tol_factor(self) -> float:
        """Upper-bound factor applied to capacities: 1 + tol."""
        return 1.0 + self.tol


DEFAULT_CONFIG = SolverConfig()
