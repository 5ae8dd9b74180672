"""Spherical segment (dome) shells with propellant.

A segment is cut from a sphere of radius R by a plane orthogonal to the
rotation axis. (x0, y0, z0) is the center of its base circle. A segment
facing right has its pole towards +X (a lower tank bottom); one facing left
has its pole towards -X (an upper tank top).

Example:
    >>> from lvmass.shapes import SpherSegm
    >>> from lvmass.units import kg_per_cubic_meter, meters
    >>>
    >>> bottom = SpherSegm.on_axis(
    ...     True, meters(7.2), meters(2.66), meters(0.8), kg_per_cubic_meter(1141)
    ... )
    >>> bottom.sphere_radius
"""

import logging
import math

from beartype import beartype

from lvmass.config import DEFAULT_CONFIG, SolverConfig
from lvmass.level import SegmentLevel
from lvmass.rotation_body import PropellantPolynomials, RotationBody
from lvmass.units import Quantity, meters, radians, si_value_of

logger = logging.getLogger(__name__)


def _propellant_polynomials(facing_right: bool, big_r: float, h: float) -> PropellantPolynomials:
    """Level polynomials of the propellant, relative to the right axis end."""
    pi = math.pi
    if facing_right:
        # Polar cap of height l
        return PropellantPolynomials(
            jp05=-pi / 5.0,
            jp04=pi / 2.0 * big_r,
            jp03=0.0,
            jp15=pi / 20.0,
            jp14=-pi / 4.0 * big_r,
            jp13=pi * big_r * big_r / 3.0,
            jp12=0.0,
            jp11=0.0,
            kp4=pi / 4.0,
            kp3=-2.0 * pi / 3.0 * big_r,
            kp2=0.0,
        )

    # Layer of height l on the base
    rmh = big_r - h
    trmh = big_r + rmh
    return PropellantPolynomials(
        jp05=-pi / 5.0,
        jp04=-pi / 2.0 * rmh,
        jp03=pi / 3.0 * trmh * h,
        jp15=pi / 20.0,
        jp14=pi / 4.0 * rmh,
        jp13=pi * (big_r * big_r / 3.0 - big_r * h + h * h / 2.0),
        jp12=-pi / 2.0 * rmh * trmh * h,
        jp11=pi / 4.0 * trmh * trmh * h * h,
        kp4=pi / 4.0,
        kp3=2.0 * pi / 3.0 * rmh,
        kp2=-pi / 2.0 * trmh * h,
    )


@beartype
class SpherSegm(RotationBody):
    """Spherical segment shell, up to a hemisphere.

    Args:
        facing_right: Pole towards +X; the base center is then the left end
        x0, y0, z0: Base center [length]; y0 or z0 must be zero
        alpha: Rotation axis angle to OX [angle]
        d: Base diameter [length]
        h: Segment height [length], 0 < h <= d/2
        rho: Propellant density [density], zero if no propellant
        empty_mass: Shell mass [mass]; None leaves the element non-final
        config: Numerical tolerances

    Raises:
        ValueError: On invalid geometry or orientation
    """

    def __init__(
        self,
        facing_right: bool,
        x0: Quantity,
        y0: Quantity,
        z0: Quantity,
        alpha: Quantity,
        d: Quantity,
        h: Quantity,
        rho: Quantity,
        empty_mass: Quantity | None = None,
        config: SolverConfig = DEFAULT_CONFIG,
    ) -> None:
        r = si_value_of(d, "length", "d") / 2.0
        height = si_value_of(h, "length", "h")
        if r <= 0.0:
            raise ValueError(f"Segment base diameter must be > 0, got {d}")
        if not 0.0 < height <= r * (1.0 + config.hemisphere_rel_tol):
            raise ValueError(f"Segment height must be in (0, d/2], got h={h}, d={d}")
        if height > r:
            logger.debug("Segment height %.17g clamped to base radius %.17g", height, r)
            height = r

        big_r = (r * r / height + height) / 2.0
        self._facing_right = facing_right
        self._base_r = r
        self._big_r = big_r

        side_surf_area = 2.0 * math.pi * big_r * height
        encl_vol = math.pi * height * height * (big_r - height / 3.0)

        # Uniform area per unit axial length (2 pi R), whatever the facing
        je0 = 2.0 * math.pi / 3.0 * big_r * height**3
        je1 = big_r * encl_vol
        ke = -math.pi * big_r * height * height

        solver = SegmentLevel(
            facing_right=facing_right,
            sphere_radius=big_r,
            height=height,
            encl_vol=encl_vol,
            config=config,
        )

        super().__init__(
            side_surf_area=side_surf_area,
            encl_vol=encl_vol,
            empty_mass=None if empty_mass is None else si_value_of(empty_mass, "mass", "empty_mass"),
            alpha=si_value_of(alpha, "angle", "alpha"),
            x0=si_value_of(x0, "length", "x0"),
            y0=si_value_of(y0, "length", "y0"),
            z0=si_value_of(z0, "length", "z0"),
            x0_is_left=facing_right,
            height=height,
            je0=je0,
            je1=je1,
            ke=ke,
            rho=si_value_of(rho, "density", "rho"),
            level_solver=solver,
            prop_polys=_propellant_polynomials(facing_right, big_r, height),
            config=config,
        )

    @classmethod
    def on_axis(
        cls,
        facing_right: bool,
        x0: Quantity,
        d: Quantity,
        h: Quantity,
        rho: Quantity,
        empty_mass: Quantity | None = None,
        config: SolverConfig = DEFAULT_CONFIG,
    ) -> "SpherSegm":
        """Segment whose axis is OX itself (y0 = z0 = alpha = 0)."""
        zero = meters(0.0)
        return cls(facing_right, x0, zero, zero, radians(0.0), d, h, rho, empty_mass, config)

    @classmethod
    def hemisphere(
        cls,
        facing_right: bool,
        x0: Quantity,
        d: Quantity,
        rho: Quantity,
        empty_mass: Quantity | None = None,
        config: SolverConfig = DEFAULT_CONFIG,
    ) -> "SpherSegm":
        """On-axis hemisphere of diameter d."""
        return cls.on_axis(facing_right, x0, d, d / 2.0, rho, empty_mass, config)

    @property
    def facing_right(self) -> bool:
        return self._facing_right

    @property
    def base_radius(self) -> Quantity:
        return meters(self._base_r)

    @property
    def sphere_radius(self) -> Quantity:
        """Radius R of the sphere the segment is cut from."""
        return meters(self._big_r)
