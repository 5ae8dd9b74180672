"""Construction elements and their mass-property algebra.

A construction element carries a center of mass (CoM), a mass and the moments
of inertia (MoI) about the OX, OY and OZ body axes. Elements are combined with
"+" and "-" to obtain the mass properties of a whole stage.

The body frame has OX along the vehicle's axis of symmetry, pointing from the
nose to the tail. MoIs are about the frame axes through the origin, not about
the element's own CoM, which is what makes them directly additive.

A shape built without an explicit mass is *non-final*: its relative mass
distribution is known (unit surface density is assumed) but its absolute
scale is not. Use get_mass_scale() and pro_rate_mass() to finalize a group of
such elements sharing one surface density:

Example:
    >>> from lvmass.elements import get_mass_scale, pro_rate_mass
    >>> from lvmass.shapes import TrCone
    >>> from lvmass.units import kilograms, kg_per_cubic_meter, meters
    >>>
    >>> lox = kg_per_cubic_meter(1141)
    >>> barrel = TrCone.cylinder(meters(0), meters(2.66), meters(4.0), lox)
    >>> skirt = TrCone.on_axis(meters(4.0), meters(2.66), meters(2.0), meters(1.2), lox)
    >>> scale = get_mass_scale([barrel, skirt], kilograms(850))
    >>> structure = pro_rate_mass(barrel, scale) + pro_rate_mass(skirt, scale)
"""

import copy
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from lvmass.config import DEFAULT_CONFIG
from lvmass.errors import NonFinalMassError
from lvmass.units import Quantity, si_value_of

logger = logging.getLogger(__name__)

# =============================================================================
# Helpers
# =============================================================================


def _as_point(values: NDArray[np.float64] | Sequence[float | int] | None, name: str) -> NDArray[np.float64]:
    """Return a read-only float64 copy of a 3-vector (zeros if None)."""
    arr = np.zeros(3) if values is None else np.array(values, dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"{name} must be shape (3,), got {arr.shape}")
    arr.flags.writeable = False
    return arr


# =============================================================================
# Mass Properties Record
# =============================================================================


@beartype
@dataclass(frozen=True)
class MassProperties:
    """Mass properties for a rigid body, in the form dynamics code expects.

    Attributes:
        mass: Total mass [kg]
        cg: Center of gravity in body frame [x, y, z] [m]
        inertia: 3x3 inertia tensor about CG in body frame [kg*m^2]

    Note:
        Construction elements track only the three axial moments, so the
        tensor is diagonal; products of inertia of tilted bodies are not
        represented.
    """
    mass: float
    cg: NDArray[np.float64]
    inertia: NDArray[np.float64]

    def translate_inertia(self, offset: NDArray[np.float64]) -> NDArray[np.float64]:
        """Translate inertia tensor to a new reference point.

        Uses parallel axis theorem: I_new = I_cg + m * (d^2 * I - d (x) d)

        Args:
            offset: Translation vector from CG to new point [m]

        Returns:
            Inertia tensor about new point
        """
        d = np.asarray(offset, dtype=np.float64)
        d_sq = np.dot(d, d)
        return self.inertia + self.mass * (d_sq * np.eye(3) - np.outer(d, d))


# =============================================================================
# Construction Element
# =============================================================================


@beartype
class ConstrElement:
    """Base construction element: CoM, mass and axial MoIs.

    The no-argument form is the zero element (all zeros, final), suitable as
    the start value of a summation.

    Args:
        com: Center of mass (x, y, z) [m]
        mass: Mass [kg]; must be positive for a non-final element
        mois: Moments of inertia about OX, OY, OZ [kg*m^2]
        is_final: Whether mass and MoIs are absolute values

    Raises:
        ValueError: On negative mass or MoI, or malformed vectors
    """

    def __init__(
        self,
        com: NDArray[np.float64] | Sequence[float | int] | None = None,
        mass: float | int = 0.0,
        mois: NDArray[np.float64] | Sequence[float | int] | None = None,
        is_final: bool = True,
    ) -> None:
        self._com = _as_point(com, "com")
        self._mass = float(mass)
        self._mois = _as_point(mois, "mois")
        self._is_final = is_final

        if self._mass < 0.0 or (not is_final and self._mass == 0.0):
            raise ValueError(f"Invalid element mass: {self._mass} (final={is_final})")
        if np.any(self._mois < 0.0):
            raise ValueError(f"MoIs must be non-negative, got {self._mois}")

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def com(self) -> NDArray[np.float64]:
        """Center of mass [m]; available even before finalization."""
        return self._com

    @property
    def is_final(self) -> bool:
        return self._is_final

    @property
    def mass(self) -> float:
        """Mass [kg].

        Raises:
            NonFinalMassError: If the element is not final yet
        """
        if not self._is_final:
            raise NonFinalMassError(f"{type(self).__name__}: mass is not final yet")
        return self._mass

    @property
    def mois(self) -> NDArray[np.float64]:
        """Moments of inertia about OX, OY, OZ [kg*m^2].

        Raises:
            NonFinalMassError: If the element is not final yet
        """
        if not self._is_final:
            raise NonFinalMassError(f"{type(self).__name__}: MoIs are not final yet")
        return self._mois

    def mass_properties(self) -> MassProperties:
        """Mass, CG and the diagonal inertia tensor about the CG.

        Raises:
            ValueError: If the element has zero mass (no CG), or its MoIs are
                smaller than those of its mass concentrated at the CG
        """
        mass = self.mass
        if mass <= 0.0:
            raise ValueError("Zero-mass element has no mass properties")
        x, y, z = self._com
        about_cg = self.mois - mass * np.array([y * y + z * z, x * x + z * z, x * x + y * y])
        # Only cancellation roundoff may go below zero
        if np.any(about_cg < -DEFAULT_CONFIG.tol * self.mois):
            raise ValueError(f"Negative inertia about the CG: {about_cg}")
        return MassProperties(
            mass=mass,
            cg=np.array(self._com),
            inertia=np.diag(np.maximum(about_cg, 0.0)),
        )

    def __repr__(self) -> str:
        c = ", ".join(f"{v:.6g}" for v in self._com)
        j = ", ".join(f"{v:.6g}" for v in self._mois)
        return (
            f"{type(self).__name__}(com=[{c}] m, mass={self._mass:.6g} kg, "
            f"mois=[{j}] kg*m^2, final={self._is_final})"
        )

    # -------------------------------------------------------------------------
    # Addition / Subtraction
    # -------------------------------------------------------------------------
    # Summands are assumed not to intersect in space.

    def _check_combinable(self, other: "ConstrElement") -> None:
        if not (self._is_final and other._is_final):
            raise NonFinalMassError("Both elements must be final to be combined")
        if self._mass == 0.0 and other._mass == 0.0:
            raise ValueError("Cannot combine two zero-mass elements: CoM is undefined")

    def __iadd__(self, other: "ConstrElement") -> "ConstrElement":
        self._check_combinable(other)
        m0 = self._mass
        mass = m0 + other._mass

        self._com = _as_point((m0 * self._com + other._mass * other._com) / mass, "com")
        self._mass = mass
        self._mois = _as_point(self._mois + other._mois, "mois")
        return self

    def __isub__(self, other: "ConstrElement") -> "ConstrElement":
        """Remove a component previously added. Use with care."""
        self._check_combinable(other)
        m0 = self._mass
        mass = m0 - other._mass
        mois = self._mois - other._mois
        if mass <= 0.0 or np.any(mois < 0.0):
            raise ValueError(
                f"Subtraction gives invalid mass properties: mass={mass}, mois={mois}"
            )

        self._com = _as_point((m0 * self._com - other._mass * other._com) / mass, "com")
        self._mass = mass
        self._mois = _as_point(mois, "mois")
        return self

    def __add__(self, other: "ConstrElement") -> "ConstrElement":
        res = ConstrElement(self._com, self._mass, self._mois, self._is_final)
        res += other
        return res

    def __sub__(self, other: "ConstrElement") -> "ConstrElement":
        res = ConstrElement(self._com, self._mass, self._mois, self._is_final)
        res -= other
        return res


# =============================================================================
# Mass Scaling
# =============================================================================

E = TypeVar("E", bound=ConstrElement)


@beartype
def get_mass_scale(elements: Sequence[ConstrElement], total_mass: Quantity) -> float:
    """Scale factor making the nominal masses of elements sum to total_mass.

    All elements must be non-final and are assumed to share the same surface
    (or volume) density, so their relative masses are unchanged by scaling.

    Args:
        elements: Non-final elements
        total_mass: Their real total mass [mass]

    Returns:
        Dimensionless factor for pro_rate_mass()

    Raises:
        NonFinalMassError: If any element is already final
        ValueError: If total_mass or the nominal total is not positive
    """
    total = si_value_of(total_mass, "mass", "total_mass")
    if total <= 0.0:
        raise ValueError(f"total_mass must be > 0, got {total_mass}")

    nominal = 0.0
    for ce in elements:
        if ce.is_final:
            raise NonFinalMassError(f"{type(ce).__name__} is already final")
        nominal += ce._mass
    if nominal <= 0.0:
        raise ValueError("Nominal total mass must be > 0")

    return total / nominal


@beartype
def pro_rate_mass(element: E, scale: float | int) -> E:
    """Finalize a non-final element by scaling its mass and MoIs.

    Returns a copy of the same type; the CoM and every shape-specific field
    are unchanged.

    Raises:
        ValueError: If scale is not positive
        NonFinalMassError: If the element is already final
    """
    if scale <= 0:
        raise ValueError(f"scale must be > 0, got {scale}")
    if element.is_final:
        raise NonFinalMassError(f"{type(element).__name__}: mass is already final")

    res = copy.copy(element)
    res._mass = element._mass * scale
    res._mois = _as_point(element._mois * scale, "mois")
    res._is_final = True
    logger.debug("Finalized %s with scale %.6g: mass=%.6g kg", type(res).__name__, scale, res._mass)
    return res


# =============================================================================
# Point Mass
# =============================================================================


@beartype
class PointMass(ConstrElement):
    """A positive mass concentrated at the point (x0, y0, z0). Always final.

    Example:
        >>> engine = PointMass(meters(19.6), meters(0), meters(0), kilograms(1090))
    """

    def __init__(self, x0: Quantity, y0: Quantity, z0: Quantity, mass: Quantity) -> None:
        x = si_value_of(x0, "length", "x0")
        y = si_value_of(y0, "length", "y0")
        z = si_value_of(z0, "length", "z0")
        m = si_value_of(mass, "mass", "mass")
        if m <= 0.0:
            raise ValueError(f"Point mass must be > 0, got {mass}")

        # Squared distances to the OX, OY and OZ axes
        mois = [m * (y * y + z * z), m * (x * x + z * z), m * (x * x + y * y)]
        super().__init__([x, y, z], m, mois, True)
