"""Stage composition: tanks, structure and the mass history over a burn.

Provides time-varying mass, center of mass and moments of inertia of a
launch vehicle stage as propellant is consumed. Each instant is an
independent static evaluation; nothing is integrated.

Example:
    >>> from lvmass.stage import Stage, Tank
    >>> from lvmass.units import kg_per_second, kilograms, seconds
    >>>
    >>> lox_tank = Tank("lox", [lox_bottom, lox_barrel, lox_top])
    >>> stage = Stage(
    ...     "booster",
    ...     structure=[skirt, engine],
    ...     tanks=[lox_tank],
    ...     initial_masses=[kilograms(27903)],
    ...     mass_rates=[kg_per_second(236.6)],
    ... )
    >>> state = stage.at_time(seconds(60))
    >>> print(f"Mass: {state.mass:.0f} kg, CoM: {state.com[0]:.2f} m")
"""

import logging
from collections.abc import Sequence

import numpy as np
import polars as pl
from beartype import beartype
from numpy.typing import NDArray

from lvmass.config import DEFAULT_CONFIG, SolverConfig
from lvmass.elements import ConstrElement
from lvmass.rotation_body import RotationBody
from lvmass.units import Quantity, kilograms, meters, seconds, si_value_of

logger = logging.getLogger(__name__)


# =============================================================================
# Tank
# =============================================================================


@beartype
class Tank:
    """A stack of rotation bodies holding one propellant.

    Sections are ordered from the bottom (largest X, where the outlet is) to
    the top, and are filled bottom-first: a section only receives propellant
    once every section below it is full.

    Args:
        name: Tank name, used for the level column of the stage history
        sections: Rotation bodies, bottom to top, all with the same density
        config: Tolerance on the tank capacity

    Raises:
        ValueError: If there are no sections or their densities differ
    """

    def __init__(
        self,
        name: str,
        sections: Sequence[RotationBody],
        config: SolverConfig = DEFAULT_CONFIG,
    ) -> None:
        if not sections:
            raise ValueError(f"Tank {name!r} needs at least one section")
        rho = sections[0].prop_dens.si_value
        if rho <= 0.0:
            raise ValueError(f"Tank {name!r} has zero propellant density")
        for sec in sections[1:]:
            if sec.prop_dens.si_value != rho:
                raise ValueError(
                    f"Tank {name!r}: section densities differ "
                    f"({sec.prop_dens} vs {sections[0].prop_dens})"
                )

        self.name = name
        self.sections = list(sections)
        self._config = config
        self._capacity = sum(sec.prop_mass_cap.si_value for sec in self.sections)

    @property
    def capacity(self) -> Quantity:
        """Propellant mass capacity of all sections."""
        return kilograms(self._capacity)

    def shell(self) -> ConstrElement:
        """Sum of the (final) section shells."""
        total = ConstrElement()
        for sec in self.sections:
            total += sec
        return total

    def get_prop_ce(self, prop_mass: Quantity) -> ConstrElement:
        """Mass properties of the propellant in the tank."""
        return self.get_prop_ce_with_level(prop_mass)[0]

    def get_prop_ce_with_level(self, prop_mass: Quantity) -> tuple[ConstrElement, Quantity]:
        """Propellant element and the fill level measured from the tank bottom.

        A load above the capacity but within the tolerance fills every
        section and is otherwise dropped.

        Raises:
            ValueError: If prop_mass is negative or exceeds the capacity
        """
        remaining = si_value_of(prop_mass, "mass", "prop_mass")
        if remaining < 0.0:
            raise ValueError(f"Propellant mass must be >= 0, got {prop_mass}")
        if remaining > self._capacity * self._config.tol_factor:
            raise ValueError(
                f"Propellant mass {remaining} kg outside [0, {self._capacity}] kg "
                f"of tank {self.name!r}"
            )

        total = ConstrElement()
        level = 0.0
        for sec in self.sections:
            if remaining <= 0.0:
                break
            take = min(remaining, sec.prop_mass_cap.si_value)
            ce, sec_level = sec.get_prop_ce_with_level(kilograms(take))
            total += ce
            level += sec_level.si_value
            remaining -= take

        if total.mass == 0.0:
            return ConstrElement(self.sections[0].right, 0.0, None, True), meters(0.0)
        return total, meters(level)

    def __repr__(self) -> str:
        return f"Tank({self.name!r}, sections={len(self.sections)}, capacity={self.capacity})"


# =============================================================================
# Stage
# =============================================================================


@beartype
class Stage:
    """A stage: fixed structure plus tanks drained at constant rates.

    Args:
        name: Stage name
        structure: Final elements that do not change (shells, engines, ...)
        tanks: Propellant tanks; their section shells join the dry mass
        initial_masses: Propellant loaded in each tank [mass]
        mass_rates: Consumption rate of each tank [mass_flow]
        remnants: Unusable propellant left in each tank [mass]; zero if None

    Raises:
        ValueError: On mismatched lengths or inconsistent masses
    """

    def __init__(
        self,
        name: str,
        structure: Sequence[ConstrElement],
        tanks: Sequence[Tank],
        initial_masses: Sequence[Quantity],
        mass_rates: Sequence[Quantity],
        remnants: Sequence[Quantity] | None = None,
    ) -> None:
        if remnants is None:
            remnants = [kilograms(0.0)] * len(tanks)
        if not (len(tanks) == len(initial_masses) == len(mass_rates) == len(remnants)):
            raise ValueError("tanks, initial_masses, mass_rates and remnants must match in length")

        self.name = name
        self.tanks = list(tanks)
        self._m0 = np.array([si_value_of(m, "mass", "initial_masses") for m in initial_masses])
        self._rates = np.array([si_value_of(r, "mass_flow", "mass_rates") for r in mass_rates])
        self._remnants = np.array([si_value_of(m, "mass", "remnants") for m in remnants])

        for tank, m0, rate, rem in zip(self.tanks, self._m0, self._rates, self._remnants):
            if not 0.0 <= rem <= m0 <= tank.capacity.si_value:
                raise ValueError(
                    f"Tank {tank.name!r}: need 0 <= remnant <= initial mass <= capacity, "
                    f"got {rem}, {m0}, {tank.capacity}"
                )
            if rate < 0.0:
                raise ValueError(f"Tank {tank.name!r}: mass rate must be >= 0, got {rate}")

        dry = ConstrElement()
        for ce in structure:
            dry += ce
        for tank in self.tanks:
            dry += tank.shell()
        self._dry = dry

    @property
    def dry(self) -> ConstrElement:
        """Structure and tank shells, without propellant."""
        return self._dry

    @property
    def burn_time(self) -> Quantity:
        """Time until every tank with a non-zero rate is down to its remnant."""
        times = [
            (m0 - rem) / rate
            for m0, rate, rem in zip(self._m0, self._rates, self._remnants)
            if rate > 0.0
        ]
        return seconds(float(max(times, default=0.0)))

    def propellant_masses_at(self, t: Quantity) -> list[Quantity]:
        """Propellant in each tank at time t: max(remnant, m0 - rate * t)."""
        time = si_value_of(t, "time", "t")
        if time < 0.0:
            raise ValueError(f"Time must be >= 0, got {t}")
        masses = np.maximum(self._remnants, self._m0 - self._rates * time)
        return [kilograms(float(m)) for m in masses]

    def at_propellant_masses(self, masses: Sequence[Quantity]) -> ConstrElement:
        """Total element for the given propellant mass in each tank."""
        return self._evaluate(masses)[0]

    def at_time(self, t: Quantity) -> ConstrElement:
        """Total element at time t from ignition."""
        return self.at_propellant_masses(self.propellant_masses_at(t))

    def _evaluate(self, masses: Sequence[Quantity]) -> tuple[ConstrElement, list[float]]:
        if len(masses) != len(self.tanks):
            raise ValueError(f"Expected {len(self.tanks)} propellant masses, got {len(masses)}")

        total = self._dry
        levels = []
        for tank, m in zip(self.tanks, masses):
            ce, level = tank.get_prop_ce_with_level(m)
            if ce.mass > 0.0:
                total = total + ce
            levels.append(level.si_value)
        return total, levels

    def history(self, times: NDArray[np.float64]) -> pl.DataFrame:
        """Mass properties over a time grid.

        Args:
            times: Times from ignition [s]

        Returns:
            DataFrame with time, mass, com_x/y/z, moi_x/y/z and one
            <tank>_level column per tank
        """
        rows: dict[str, list[float]] = {
            "time": [], "mass": [],
            "com_x": [], "com_y": [], "com_z": [],
            "moi_x": [], "moi_y": [], "moi_z": [],
        }
        for tank in self.tanks:
            rows[f"{tank.name}_level"] = []

        for t in times:
            ce, levels = self._evaluate(self.propellant_masses_at(seconds(float(t))))
            rows["time"].append(float(t))
            rows["mass"].append(ce.mass)
            for axis, c, j in zip("xyz", ce.com, ce.mois):
                rows[f"com_{axis}"].append(float(c))
                rows[f"moi_{axis}"].append(float(j))
            for tank, level in zip(self.tanks, levels):
                rows[f"{tank.name}_level"].append(level)

        logger.debug("%s: evaluated %d time points", self.name, len(times))
        return pl.DataFrame(rows)

    def __repr__(self) -> str:
        names = ", ".join(tank.name for tank in self.tanks)
        return f"Stage({self.name!r}, dry={self._dry.mass:.6g} kg, tanks=[{names}])"
