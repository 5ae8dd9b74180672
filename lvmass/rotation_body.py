"""Rotation bodies: axisymmetric shells and the propellant they contain.

A RotationBody is a 2D shell (side surface only) or the 3D volume it
encloses, generated by rotating a profile about an axis that lies in the OXY
or OXZ plane at an angle alpha (|alpha| < pi/2) to OX. The shell is the
construction element itself; the propellant filling it is obtained per time
step with get_prop_ce().

Concrete shapes (TrCone, SpherSegm) compute, from their own geometry:
- the side surface area and the enclosed volume;
- the "intrinsic" inertia parameters of the empty shell, relative to the
  right (lower, larger-X) axis end xi = 0, with the body on xi in [-h, 0]:
      J0 = integral(xi^2 dm),  J1 = integral(y'^2 dm),  K = integral(xi dm) < 0
  (per unit surface density), where y' is any direction orthogonal to the axis;
- the same parameters for the propellant as polynomials of the fill level l;
- a level solver inverting V(l).

RotationBody turns these into the CoM and the three axial MoIs. The right
axis end is the reference point because it is where the propellant stays
when the tank drains: the left boundary of the propellant moves, the right
one does not.
"""

import logging
import math
from dataclasses import dataclass

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from lvmass.config import DEFAULT_CONFIG, SolverConfig
from lvmass.elements import ConstrElement
from lvmass.level import LevelSolver
from lvmass.units import (
    Quantity,
    cubic_meters,
    kg_per_cubic_meter,
    kg_per_square_meter,
    kilograms,
    meters,
    radians,
    si_value_of,
    square_meters,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Propellant Polynomials
# =============================================================================


@beartype
@dataclass(frozen=True, slots=True)
class PropellantPolynomials:
    """Intrinsic propellant inertia parameters as polynomials of the level l.

        J0(l) = (jp05 l^2 + jp04 l + jp03) l^3
        J1(l) = ((((jp15 l + jp14) l + jp13) l + jp12) l + jp11) l
        K(l)  = (kp4 l^2 + kp3 l + kp2) l^2

    Values are per unit volume density: J0, J1 in m^5, K in m^4.
    """

    jp05: float
    jp04: float
    jp03: float
    jp15: float
    jp14: float
    jp13: float
    jp12: float
    jp11: float
    kp4: float
    kp3: float
    kp2: float

    def evaluate(self, level: float) -> tuple[float, float, float]:
        """Return (J0, J1, K) at the given level [m]."""
        x = level
        x2 = x * x
        x3 = x2 * x
        j0 = ((self.jp05 * x + self.jp04) * x + self.jp03) * x3
        j1 = ((((self.jp15 * x + self.jp14) * x + self.jp13) * x + self.jp12) * x + self.jp11) * x
        k = ((self.kp4 * x + self.kp3) * x + self.kp2) * x2
        return j0, j1, k


# =============================================================================
# Rotation Body
# =============================================================================


@beartype
class RotationBody(ConstrElement):
    """Common engine of axisymmetric shells with optional propellant.

    Built only by the concrete shape classes, which compute every argument
    from their geometry; all lengths are SI floats here.

    Args:
        side_surf_area: Side surface area, without the bases [m^2]
        encl_vol: Volume enclosed with imaginary bases [m^3]
        empty_mass: Explicit shell mass [kg], or None for a non-final element
            with unit surface density
        alpha: Rotation axis angle to OX [rad], |alpha| < pi/2
        x0, y0, z0: One end of the rotation axis [m]; y0 or z0 must be 0
        x0_is_left: Whether (x0, y0, z0) is the left (upper) end
        height: Body length along the rotation axis [m]
        je0, je1, ke: Intrinsic parameters of the empty shell [m^4, m^4, m^3]
        rho: Propellant density [kg/m^3], 0 if no propellant is modeled
        level_solver: Propellant volume -> level inversion
        prop_polys: Propellant intrinsic parameters vs level
        config: Numerical tolerances

    Raises:
        ValueError: On inconsistent orientation or invalid geometry
    """

    def __init__(
        self,
        *,
        side_surf_area: float,
        encl_vol: float,
        empty_mass: float | None,
        alpha: float,
        x0: float,
        y0: float,
        z0: float,
        x0_is_left: bool,
        height: float,
        je0: float,
        je1: float,
        ke: float,
        rho: float,
        level_solver: LevelSolver,
        prop_polys: PropellantPolynomials,
        config: SolverConfig = DEFAULT_CONFIG,
    ) -> None:
        # The rotation axis lies in OXY, OXZ, or both (then it is OX itself)
        in_xy = z0 == 0.0
        in_xz = y0 == 0.0
        if not (in_xy or in_xz):
            raise ValueError(f"Rotation axis must lie in OXY or OXZ: y0={y0}, z0={z0}")
        if in_xy and in_xz and alpha != 0.0:
            raise ValueError(f"Axis through OX requires alpha=0, got {alpha}")
        if not abs(alpha) < math.pi / 2.0:
            raise ValueError(f"|alpha| must be < pi/2, got {alpha}")
        if height <= 0.0:
            raise ValueError(f"height must be > 0, got {height}")
        if side_surf_area <= 0.0 or encl_vol <= 0.0:
            raise ValueError(
                f"Surface area and volume must be > 0, got {side_surf_area}, {encl_vol}"
            )
        if rho < 0.0:
            raise ValueError(f"Propellant density must be >= 0, got {rho}")

        self._in_xy = in_xy
        self._in_xz = in_xz
        self._alpha = alpha
        self._cos_a = math.cos(alpha)
        self._sin_a = math.sin(alpha)
        self._h = height

        # Axis ends: the other end is h away along the axis
        dx = self._cos_a * height
        dyz = self._sin_a * height
        if x0_is_left:
            left = (x0, y0, z0)
            right = (x0 + dx, y0 + dyz if in_xy else 0.0, z0 + dyz if in_xz else 0.0)
        else:
            right = (x0, y0, z0)
            left = (x0 - dx, y0 - dyz if in_xy else 0.0, z0 - dyz if in_xz else 0.0)
        self._left = np.array(left, dtype=np.float64)
        self._right = np.array(right, dtype=np.float64)
        self._left.flags.writeable = False
        self._right.flags.writeable = False
        x_r = right[0]
        yz_r = right[1] if in_xy else right[2]
        self._yz_r = yz_r

        self._side_surf_area = side_surf_area
        self._encl_vol = encl_vol
        self._rho = rho
        self._prop_mass_cap = rho * encl_vol
        self._level_solver = level_solver
        self._prop_polys = prop_polys
        self._config = config

        # Coefficients of (J0, J1, K, SV) in Jx, Jin (MoI about the in-plane
        # transverse axis) and Jort (about the axis orthogonal to the plane)
        s2 = self._sin_a * self._sin_a
        c2 = self._cos_a * self._cos_a
        self._jx = (s2, 1.0 + c2, 2.0 * self._sin_a * yz_r, yz_r * yz_r)
        self._jin = (c2, 1.0 + s2, 2.0 * self._cos_a * x_r, x_r * x_r)
        self._jort = (
            1.0,
            1.0,
            2.0 * (self._cos_a * x_r + self._sin_a * yz_r),
            x_r * x_r + yz_r * yz_r,
        )

        # Shell mass: from the explicit value, or with unit surface density
        if empty_mass is not None and empty_mass <= 0.0:
            raise ValueError(f"empty_mass must be > 0 when given, got {empty_mass}")
        is_final = empty_mass is not None
        surf_dens = empty_mass / side_surf_area if is_final else 1.0
        mass = empty_mass if is_final else side_surf_area * surf_dens

        if not (je0 > 0.0 and je1 > 0.0 and ke < 0.0):
            raise ValueError(f"Invalid empty-shape parameters: J0={je0}, J1={je1}, K={ke}")
        com, mois = self._mois_com(je0, je1, ke, side_surf_area, surf_dens)

        super().__init__(com, mass, mois, is_final)
        logger.debug(
            "%s: area=%.6g m^2 vol=%.6g m^3 cap=%.6g kg left=%s right=%s final=%s",
            type(self).__name__, side_surf_area, encl_vol, self._prop_mass_cap,
            self._left, self._right, is_final,
        )

    # -------------------------------------------------------------------------
    # Intrinsic parameters -> CoM and MoIs
    # -------------------------------------------------------------------------

    def _mois_com(
        self, j0: float, j1: float, k: float, sv: float, dens: float
    ) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """CoM [m] and MoIs [kg*m^2] from intrinsic parameters.

        Works for shells (J in m^4, K in m^3, SV = area, dens = surface
        density) and for volumes (m^5, m^4, SV = volume, volume density).
        """
        if not (j0 > 0.0 and j1 > 0.0 and sv > 0.0 and k < 0.0):
            raise ValueError(f"Invalid intrinsic parameters: J0={j0}, J1={j1}, K={k}, SV={sv}")

        def combine(c: tuple[float, float, float, float]) -> float:
            return c[0] * j0 + c[1] * j1 + c[2] * k + c[3] * sv

        jx = combine(self._jx)
        j_in = combine(self._jin)
        j_ort = combine(self._jort)
        jy = j_in if self._in_xy else j_ort
        jz = j_in if self._in_xz else j_ort
        mois = dens * np.array([jx, jy, jz])
        if np.any(mois < 0.0):
            raise ValueError(f"Negative MoIs computed: {mois}")

        # CoM position along the axis, relative to the right end
        xi_c = k / sv
        yz_c = self._yz_r + self._sin_a * xi_c
        com = np.array([
            self._right[0] + self._cos_a * xi_c,
            yz_c if self._in_xy else 0.0,
            yz_c if self._in_xz else 0.0,
        ])
        return com, mois

    # -------------------------------------------------------------------------
    # Propellant
    # -------------------------------------------------------------------------

    def get_prop_ce(self, prop_mass: Quantity) -> ConstrElement:
        """Mass properties of the propellant alone (shell excluded).

        The result is final and carries exactly prop_mass, so it can be added
        to the shell and other elements.

        Args:
            prop_mass: Current propellant mass [mass], 0 <= prop_mass <= capacity

        Raises:
            ValueError: If prop_mass is out of range
        """
        return self.get_prop_ce_with_level(prop_mass)[0]

    def get_prop_ce_with_level(self, prop_mass: Quantity) -> tuple[ConstrElement, Quantity]:
        """As get_prop_ce(), also returning the propellant level.

        The level is measured along the rotation axis from the right end.
        """
        m = si_value_of(prop_mass, "mass", "prop_mass")
        tol_fact = self._config.tol_factor
        if not 0.0 <= m <= self._prop_mass_cap * tol_fact:
            raise ValueError(
                f"Propellant mass {m} kg outside [0, {self._prop_mass_cap}] kg"
            )

        # Empty: the propellant CoM tends to the right axis end
        if m == 0.0:
            return ConstrElement(self._right, 0.0, None, True), meters(0.0)

        prop_vol = m / self._rho
        if prop_vol > self._encl_vol * tol_fact:
            raise ValueError(f"Propellant volume {prop_vol} m^3 exceeds {self._encl_vol} m^3")
        # Full within the tolerance
        if prop_vol * tol_fact >= self._encl_vol:
            prop_vol = self._encl_vol

        level = self._level_solver.level_of_volume(prop_vol)
        if not 0.0 <= level <= self._h * tol_fact:
            raise ValueError(f"Propellant level {level} m outside [0, {self._h}] m")
        level = min(level, self._h)

        j0, j1, k = self._prop_polys.evaluate(level)
        if j0 < 0.0 or j1 < 0.0 or k > 0.0:
            raise ValueError(f"Invalid propellant parameters: J0={j0}, J1={j1}, K={k}")

        # The current volume, not the capacity
        com, mois = self._mois_com(j0, j1, k, prop_vol, self._rho)
        return ConstrElement(com, m, mois, True), meters(level)

    def level_of_volume(self, volume: Quantity) -> Quantity:
        """Propellant level [length] for a propellant volume [volume]."""
        v = si_value_of(volume, "volume", "volume")
        return meters(self._level_solver.level_of_volume(v))

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def side_surf_area(self) -> Quantity:
        return square_meters(self._side_surf_area)

    @property
    def encl_vol(self) -> Quantity:
        return cubic_meters(self._encl_vol)

    @property
    def height(self) -> Quantity:
        """Over-all length along the rotation axis."""
        return meters(self._h)

    @property
    def prop_mass_cap(self) -> Quantity:
        """Propellant mass capacity: density * enclosed volume."""
        return kilograms(self._prop_mass_cap)

    @property
    def prop_dens(self) -> Quantity:
        return kg_per_cubic_meter(self._rho)

    @property
    def surf_dens(self) -> Quantity:
        """Shell mass per unit side surface area (final elements only)."""
        return kg_per_square_meter(self.mass / self._side_surf_area)

    @property
    def alpha(self) -> Quantity:
        return radians(self._alpha)

    @property
    def in_xy(self) -> bool:
        return self._in_xy

    @property
    def in_xz(self) -> bool:
        return self._in_xz

    @property
    def left(self) -> NDArray[np.float64]:
        """Left (upper, smaller-X) axis end [m]."""
        return self._left

    @property
    def right(self) -> NDArray[np.float64]:
        """Right (lower, larger-X) axis end [m]: the MoI reference point."""
        return self._right

    @property
    def level_solver(self) -> LevelSolver:
        return self._level_solver
