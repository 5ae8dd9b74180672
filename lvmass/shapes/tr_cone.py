"""Truncated cone (and cylinder) shells with propellant.

The cone is described by its left (upper) base center (x0, y0, z0), the
rotation axis angle alpha, the left and right base diameters and the height.
Either diameter may be zero, giving a full cone, but not both.

Example:
    >>> from lvmass.shapes import TrCone
    >>> from lvmass.units import kg_per_cubic_meter, kilograms, meters
    >>>
    >>> barrel = TrCone.cylinder(
    ...     meters(2.0), meters(2.66), meters(5.2), kg_per_cubic_meter(1141),
    ...     empty_mass=kilograms(420),
    ... )
    >>> prop = barrel.get_prop_ce(kilograms(15000))
"""

import math

from beartype import beartype

from lvmass.config import DEFAULT_CONFIG, SolverConfig
from lvmass.level import ConeLevel, CylinderLevel
from lvmass.rotation_body import PropellantPolynomials, RotationBody
from lvmass.units import Quantity, meters, radians, si_value_of


@beartype
class TrCone(RotationBody):
    """Truncated cone shell; a cylinder when both diameters are equal.

    Args:
        x0, y0, z0: Left base center [length]; y0 or z0 must be zero
        alpha: Rotation axis angle to OX [angle]
        d0: Left base diameter [length]
        d1: Right base diameter [length]
        h: Height along the rotation axis [length]
        rho: Propellant density [density], zero if no propellant
        empty_mass: Shell mass [mass]; None leaves the element non-final
        config: Numerical tolerances

    Raises:
        ValueError: On invalid geometry or orientation
    """

    def __init__(
        self,
        x0: Quantity,
        y0: Quantity,
        z0: Quantity,
        alpha: Quantity,
        d0: Quantity,
        d1: Quantity,
        h: Quantity,
        rho: Quantity,
        empty_mass: Quantity | None = None,
        config: SolverConfig = DEFAULT_CONFIG,
    ) -> None:
        r = si_value_of(d0, "length", "d0") / 2.0
        big_r = si_value_of(d1, "length", "d1") / 2.0
        height = si_value_of(h, "length", "h")
        if r < 0.0 or big_r < 0.0 or (r == 0.0 and big_r == 0.0):
            raise ValueError(f"Invalid cone diameters: d0={d0}, d1={d1}")
        if height <= 0.0:
            raise ValueError(f"Cone height must be > 0, got {h}")

        self._r = r
        self._big_r = big_r
        delta_r = big_r - r
        slant = math.hypot(delta_r, height)

        side_surf_area = math.pi * slant * (big_r + r)
        encl_vol = math.pi / 3.0 * height * (big_r * big_r + big_r * r + r * r)

        # Empty shell, relative to the right base center
        je0 = math.pi * height * height * slant * (r / 2.0 + big_r / 6.0)
        je1 = math.pi / 4.0 * slant * (big_r + r) * (big_r * big_r + r * r)
        ke = -math.pi / 3.0 * slant * height * (2.0 * r + big_r)

        # Propellant: radius R - a*t at the distance t from the right base
        a = delta_r / height
        a2 = a * a
        r2 = big_r * big_r
        polys = PropellantPolynomials(
            jp05=math.pi / 5.0 * a2,
            jp04=-math.pi / 2.0 * a * big_r,
            jp03=math.pi / 3.0 * r2,
            jp15=math.pi / 20.0 * a2 * a2,
            jp14=-math.pi / 4.0 * a2 * a * big_r,
            jp13=math.pi / 2.0 * a2 * r2,
            jp12=-math.pi / 2.0 * a * r2 * big_r,
            jp11=math.pi / 4.0 * r2 * r2,
            kp4=-math.pi / 4.0 * a2,
            kp3=2.0 * math.pi / 3.0 * a * big_r,
            kp2=-math.pi / 2.0 * r2,
        )

        if delta_r == 0.0:
            solver = CylinderLevel(height=height, encl_vol=encl_vol)
        else:
            rh = big_r * height
            solver = ConeLevel(
                height=height,
                delta_r=delta_r,
                cl_vol=3.0 / math.pi * height * height * delta_r,
                rh=rh,
                rh3=rh * rh * rh,
                encl_vol=encl_vol,
            )

        super().__init__(
            side_surf_area=side_surf_area,
            encl_vol=encl_vol,
            empty_mass=None if empty_mass is None else si_value_of(empty_mass, "mass", "empty_mass"),
            alpha=si_value_of(alpha, "angle", "alpha"),
            x0=si_value_of(x0, "length", "x0"),
            y0=si_value_of(y0, "length", "y0"),
            z0=si_value_of(z0, "length", "z0"),
            x0_is_left=True,
            height=height,
            je0=je0,
            je1=je1,
            ke=ke,
            rho=si_value_of(rho, "density", "rho"),
            level_solver=solver,
            prop_polys=polys,
            config=config,
        )

    @classmethod
    def on_axis(
        cls,
        x0: Quantity,
        d0: Quantity,
        d1: Quantity,
        h: Quantity,
        rho: Quantity,
        empty_mass: Quantity | None = None,
        config: SolverConfig = DEFAULT_CONFIG,
    ) -> "TrCone":
        """Truncated cone whose axis is OX itself (y0 = z0 = alpha = 0)."""
        zero = meters(0.0)
        return cls(x0, zero, zero, radians(0.0), d0, d1, h, rho, empty_mass, config)

    @classmethod
    def cylinder(
        cls,
        x0: Quantity,
        d: Quantity,
        h: Quantity,
        rho: Quantity,
        empty_mass: Quantity | None = None,
        config: SolverConfig = DEFAULT_CONFIG,
    ) -> "TrCone":
        """On-axis cylinder of diameter d."""
        return cls.on_axis(x0, d, d, h, rho, empty_mass, config)

    @property
    def left_radius(self) -> Quantity:
        """Left (upper) base radius r."""
        return meters(self._r)

    @property
    def right_radius(self) -> Quantity:
        """Right (lower) base radius R."""
        return meters(self._big_r)
