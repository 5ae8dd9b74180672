"""Propellant and shell material database.

Densities used to fill rotation bodies with propellant, and to turn a wall
thickness into the surface density of a shell.

Example:
    >>> from lvmass.propellants import get_propellant_density, surface_density
    >>> from lvmass.units import millimeters
    >>>
    >>> rho_lox = get_propellant_density("LOX")
    >>> sigma = surface_density("Al2219", millimeters(2.5))
"""

from beartype import beartype

from lvmass.units import Quantity, kg_per_cubic_meter, kg_per_square_meter, si_value_of

# =============================================================================
# Propellant Database
# =============================================================================

# Propellant densities at typical storage conditions [kg/m³]
# Sources: Sutton & Biblarz, propellant datasheets
PROPELLANT_DENSITIES: dict[str, float] = {
    # Oxidizers
    "LOX": 1141.0,      # Liquid oxygen at -183°C
    "LO2": 1141.0,      # Alias
    "N2O4": 1450.0,     # Nitrogen tetroxide at 20°C
    "H2O2": 1450.0,     # High-test peroxide (90%)
    "AK27": 1600.0,     # Nitric acid with 27% N2O4

    # Fuels
    "LH2": 70.8,        # Liquid hydrogen at -253°C
    "RP1": 810.0,       # RP-1 kerosene at 20°C
    "RG1": 833.0,       # Naphthyl (RG-1) kerosene, chilled
    "T1": 820.0,        # T-1 kerosene
    "CH4": 422.6,       # Liquid methane at -161°C
    "LCH4": 422.6,      # Alias
    "Ethanol": 789.0,   # Ethanol at 20°C
    "UDMH": 793.0,      # Unsymmetrical dimethylhydrazine at 20°C
    "MMH": 878.0,       # Monomethylhydrazine at 20°C
    "N2H4": 1004.0,     # Hydrazine at 20°C

    # Pressurants
    "LN2": 808.0,       # Liquid nitrogen at -196°C
}

# Shell material densities [kg/m³]
SHELL_MATERIALS: dict[str, float] = {
    "Al2219": 2840.0,
    "Al2195": 2710.0,   # Al-Li alloy
    "AMg6": 2640.0,     # Al-Mg alloy
    "SS301": 7880.0,
    "Ti6Al4V": 4430.0,
    "CFRP": 1600.0,
}


def _normalize(name: str) -> str:
    return name.upper().replace("-", "").replace(" ", "")


def _lookup(table: dict[str, float], name: str, kind: str) -> float:
    if name in table:
        return table[name]

    wanted = _normalize(name)
    for key, value in table.items():
        if _normalize(key) == wanted:
            return value

    raise ValueError(f"Unknown {kind} '{name}'. Available: {list(table)}")


@beartype
def get_propellant_density(propellant: str) -> Quantity:
    """Get the density of a propellant.

    Names are matched case-insensitively, ignoring dashes and spaces, so
    "RG-1", "rg1" and "RG1" are the same propellant.

    Args:
        propellant: Propellant name (e.g., "LOX", "RG1", "UDMH")

    Returns:
        Density [density]

    Raises:
        ValueError: If propellant not found in database
    """
    return kg_per_cubic_meter(_lookup(PROPELLANT_DENSITIES, propellant, "propellant"))


@beartype
def surface_density(material: str, thickness: Quantity) -> Quantity:
    """Surface density of a shell wall of uniform thickness.

    Args:
        material: Material name (e.g., "Al2219")
        thickness: Wall thickness [length]

    Returns:
        Shell mass per unit area [surface_density]

    Raises:
        ValueError: If the material is unknown or thickness is not positive
    """
    t = si_value_of(thickness, "length", "thickness")
    if t <= 0.0:
        raise ValueError(f"thickness must be > 0, got {thickness}")
    return kg_per_square_meter(_lookup(SHELL_MATERIALS, material, "material") * t)


@beartype
def list_propellants() -> list[str]:
    """List available propellants in the density database."""
    return list(PROPELLANT_DENSITIES.keys())


@beartype
def list_materials() -> list[str]:
    """List available shell materials."""
    return list(SHELL_MATERIALS.keys())
