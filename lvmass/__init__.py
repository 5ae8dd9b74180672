"""lvmass - Mass, center of mass and moments of inertia of launch vehicles.

This package models a launch vehicle stage as a sum of construction
elements: shells of revolution (truncated cones, cylinders, spherical
segments), the propellant they contain, and point masses. Elements combine
algebraically, so the stage mass properties can be evaluated at any instant
of the burn.

Example:
    >>> from lvmass import SpherSegm, TrCone, get_propellant_density
    >>> from lvmass.units import kilograms, meters
    >>>
    >>> lox = get_propellant_density("LOX")
    >>> barrel = TrCone.cylinder(meters(0), meters(2.66), meters(6.0), lox,
    ...                          empty_mass=kilograms(450))
    >>> bottom = SpherSegm.on_axis(True, meters(6.0), meters(2.66), meters(0.7), lox,
    ...                            empty_mass=kilograms(90))
    >>> prop = bottom.get_prop_ce(bottom.prop_mass_cap) + barrel.get_prop_ce(kilograms(20000))
    >>> total = barrel + bottom + prop
    >>> print(f"Mass: {total.mass:.0f} kg, CoM X: {total.com[0]:.2f} m")
"""

__version__ = "0.1.0"

from lvmass.config import DEFAULT_CONFIG, SolverConfig

# Construction elements
from lvmass.elements import (
    ConstrElement,
    MassProperties,
    PointMass,
    get_mass_scale,
    pro_rate_mass,
)
from lvmass.errors import LevelSolverError, NonFinalMassError
from lvmass.level import ConeLevel, CylinderLevel, LevelSolver, SegmentLevel
from lvmass.logging_config import setup_logging

# Propellant and materials database
from lvmass.propellants import (
    get_propellant_density,
    list_materials,
    list_propellants,
    surface_density,
)
from lvmass.rotation_body import PropellantPolynomials, RotationBody

# Shapes
from lvmass.shapes import SpherSegm, TrCone

# Stage composition
from lvmass.stage import Stage, Tank

# Units
from lvmass.units import Quantity

__all__ = [
    # Version
    "__version__",
    # Config and errors
    "DEFAULT_CONFIG",
    "SolverConfig",
    "LevelSolverError",
    "NonFinalMassError",
    "setup_logging",
    # Elements
    "ConstrElement",
    "MassProperties",
    "PointMass",
    "get_mass_scale",
    "pro_rate_mass",
    # Rotation bodies
    "RotationBody",
    "PropellantPolynomials",
    "LevelSolver",
    "CylinderLevel",
    "ConeLevel",
    "SegmentLevel",
    "TrCone",
    "SpherSegm",
    # Propellants
    "get_propellant_density",
    "list_propellants",
    "list_materials",
    "surface_density",
    # Stage
    "Tank",
    "Stage",
    # Units
    "Quantity",
]
