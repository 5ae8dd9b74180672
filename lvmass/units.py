"""Units module for lvmass.

Provides a Quantity class for type-safe physical quantities with unit conversion.
Construction elements take their geometric and mass inputs as Quantity objects
and do their internal arithmetic in plain SI floats.

Design principles:
- Explicit over implicit: all conversions require calling .to()
- Type safe: beartype checks at runtime
- Immutable: frozen dataclasses prevent accidental mutation
"""

import math
from dataclasses import dataclass

from beartype import beartype

# =============================================================================
# Dimension and Unit Definitions
# =============================================================================

# Each dimension has a base SI unit
DIMENSIONS = {
    "length": "m",
    "mass": "kg",
    "time": "s",
    "area": "m^2",
    "volume": "m^3",
    "mass_flow": "kg/s",
    "density": "kg/m^3",
    "surface_density": "kg/m^2",
    "moment_of_inertia": "kg*m^2",
    "angle": "rad",
    "dimensionless": "1",
}

# Conversion factors TO base SI unit
# e.g., 1 ft = 0.3048 m, so CONVERSIONS["ft"] = 0.3048
CONVERSIONS: dict[str, tuple[float, str]] = {
    # Length
    "m": (1.0, "length"),
    "cm": (0.01, "length"),
    "mm": (0.001, "length"),
    "km": (1000.0, "length"),
    "ft": (0.3048, "length"),
    "in": (0.0254, "length"),
    # Mass
    "kg": (1.0, "mass"),
    "g": (0.001, "mass"),
    "t": (1000.0, "mass"),
    "lbm": (0.453592, "mass"),
    # Time
    "s": (1.0, "time"),
    "ms": (0.001, "time"),
    "min": (60.0, "time"),
    # Area
    "m^2": (1.0, "area"),
    "cm^2": (1e-4, "area"),
    "ft^2": (0.092903, "area"),
    # Volume
    "m^3": (1.0, "volume"),
    "L": (0.001, "volume"),
    "ft^3": (0.0283168, "volume"),
    # Mass flow rate
    "kg/s": (1.0, "mass_flow"),
    "lbm/s": (0.453592, "mass_flow"),
    # Density
    "kg/m^3": (1.0, "density"),
    "g/cm^3": (1000.0, "density"),
    "lbm/ft^3": (16.0185, "density"),
    # Surface density (shell mass per unit area)
    "kg/m^2": (1.0, "surface_density"),
    # Moment of inertia
    "kg*m^2": (1.0, "moment_of_inertia"),
    "t*m^2": (1000.0, "moment_of_inertia"),
    # Angle
    "rad": (1.0, "angle"),
    "deg": (math.pi / 180.0, "angle"),
    # Dimensionless
    "1": (1.0, "dimensionless"),
    "": (1.0, "dimensionless"),
}


def _get_dimension(unit: str) -> str:
    """Get the dimension for a unit string."""
    if unit not in CONVERSIONS:
        raise ValueError(f"Unknown unit: {unit!r}")
    return CONVERSIONS[unit][1]


def _get_conversion_factor(unit: str) -> float:
    """Get the conversion factor to SI base unit."""
    if unit not in CONVERSIONS:
        raise ValueError(f"Unknown unit: {unit!r}")
    return CONVERSIONS[unit][0]


def _convert(value: float, from_unit: str, to_unit: str) -> float:
    """Convert a value between units of the same dimension."""
    from_dim = _get_dimension(from_unit)
    to_dim = _get_dimension(to_unit)

    if from_dim != to_dim:
        raise ValueError(
            f"Cannot convert between different dimensions: {from_dim} and {to_dim}"
        )

    si_value = value * _get_conversion_factor(from_unit)
    return si_value / _get_conversion_factor(to_unit)


# =============================================================================
# Quantity Class
# =============================================================================


@beartype
@dataclass(frozen=True, slots=True)
class Quantity:
    """A physical quantity with value, unit, and dimension.

    Quantities are immutable and support arithmetic operations that respect
    dimensional analysis.

    Examples:
        >>> d = Quantity(2.66, "m", "length")
        >>> d.to("mm")
        Quantity(2660 mm)

        >>> length = meters(2.5)
        >>> area = length * length  # Returns Quantity with area dimension
    """

    value: float | int
    unit: str
    dimension: str

    def __post_init__(self) -> None:
        """Validate that unit matches dimension."""
        if self.unit not in CONVERSIONS:
            raise ValueError(f"Unknown unit: {self.unit!r}")
        expected_dim = CONVERSIONS[self.unit][1]
        if self.dimension != expected_dim:
            raise ValueError(
                f"Unit {self.unit!r} has dimension {expected_dim!r}, "
                f"but {self.dimension!r} was specified"
            )

    def to(self, target_unit: str) -> "Quantity":
        """Convert to a different unit of the same dimension.

        Raises:
            ValueError: If target_unit is incompatible dimension
        """
        new_value = _convert(self.value, self.unit, target_unit)
        return Quantity(new_value, target_unit, self.dimension)

    def to_si(self) -> "Quantity":
        """Convert to SI base unit for this dimension."""
        return self.to(DIMENSIONS[self.dimension])

    @property
    def si_value(self) -> float:
        """Get the value in SI base units without creating new Quantity."""
        return self.value * _get_conversion_factor(self.unit)

    def __repr__(self) -> str:
        return f"Quantity({self.value:.6g} {self.unit})"

    def __str__(self) -> str:
        return f"{self.value:.6g} {self.unit}"

    # -------------------------------------------------------------------------
    # Arithmetic Operations
    # -------------------------------------------------------------------------

    def __add__(self, other: "Quantity") -> "Quantity":
        """Add two quantities of the same dimension."""
        if self.dimension != other.dimension:
            raise ValueError(
                f"Cannot add quantities with different dimensions: "
                f"{self.dimension} and {other.dimension}"
            )
        other_converted = other.to(self.unit)
        return Quantity(self.value + other_converted.value, self.unit, self.dimension)

    def __sub__(self, other: "Quantity") -> "Quantity":
        """Subtract two quantities of the same dimension."""
        if self.dimension != other.dimension:
            raise ValueError(
                f"Cannot subtract quantities with different dimensions: "
                f"{self.dimension} and {other.dimension}"
            )
        other_converted = other.to(self.unit)
        return Quantity(self.value - other_converted.value, self.unit, self.dimension)

    def __mul__(self, other: "Quantity | float | int") -> "Quantity":
        """Multiply by a scalar or another quantity."""
        if isinstance(other, (int, float)):
            return Quantity(self.value * other, self.unit, self.dimension)
        new_dim, new_unit = _multiply_dimensions(self.dimension, other.dimension)
        new_value = self.si_value * other.si_value
        return Quantity(new_value, new_unit, new_dim)

    def __rmul__(self, other: float | int) -> "Quantity":
        """Right multiply by scalar."""
        return Quantity(self.value * other, self.unit, self.dimension)

    def __truediv__(self, other: "Quantity | float | int") -> "Quantity":
        """Divide by a scalar or another quantity."""
        if isinstance(other, (int, float)):
            return Quantity(self.value / other, self.unit, self.dimension)
        new_dim, new_unit = _divide_dimensions(self.dimension, other.dimension)
        new_value = self.si_value / other.si_value
        return Quantity(new_value, new_unit, new_dim)

    def __neg__(self) -> "Quantity":
        """Negate the quantity."""
        return Quantity(-self.value, self.unit, self.dimension)

    def __abs__(self) -> "Quantity":
        """Absolute value."""
        return Quantity(abs(self.value), self.unit, self.dimension)

    # -------------------------------------------------------------------------
    # Comparison Operations
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        """Check equality (compares SI values for same dimension)."""
        if not isinstance(other, Quantity):
            return NotImplemented
        if self.dimension != other.dimension:
            return False
        return math.isclose(self.si_value, other.si_value, rel_tol=1e-9)

    def __lt__(self, other: "Quantity") -> bool:
        if self.dimension != other.dimension:
            raise ValueError("Cannot compare quantities with different dimensions")
        return self.si_value < other.si_value

    def __le__(self, other: "Quantity") -> bool:
        return self == other or self < other

    def __gt__(self, other: "Quantity") -> bool:
        if self.dimension != other.dimension:
            raise ValueError("Cannot compare quantities with different dimensions")
        return self.si_value > other.si_value

    def __ge__(self, other: "Quantity") -> bool:
        return self == other or self > other

    def __hash__(self) -> int:
        """Hash based on SI value and dimension for consistency."""
        return hash((round(self.si_value, 9), self.dimension))


# =============================================================================
# Dimension Algebra
# =============================================================================

_MULT_TABLE: dict[tuple[str, str], str] = {
    ("length", "length"): "area",
    ("area", "length"): "volume",
    ("mass_flow", "time"): "mass",
    ("density", "volume"): "mass",
    ("surface_density", "area"): "mass",
    ("mass", "area"): "moment_of_inertia",
    ("dimensionless", "length"): "length",
    ("dimensionless", "mass"): "mass",
    ("dimensionless", "area"): "area",
    ("dimensionless", "volume"): "volume",
    ("dimensionless", "time"): "time",
    ("dimensionless", "mass_flow"): "mass_flow",
    ("dimensionless", "density"): "density",
    ("dimensionless", "moment_of_inertia"): "moment_of_inertia",
    ("dimensionless", "angle"): "angle",
    ("dimensionless", "dimensionless"): "dimensionless",
}

_DIV_TABLE: dict[tuple[str, str], str] = {
    ("area", "length"): "length",
    ("volume", "length"): "area",
    ("volume", "area"): "length",
    ("mass", "volume"): "density",
    ("mass", "area"): "surface_density",
    ("mass", "density"): "volume",
    ("mass", "time"): "mass_flow",
    ("mass", "mass_flow"): "time",
    ("moment_of_inertia", "mass"): "area",
    ("length", "length"): "dimensionless",
    ("mass", "mass"): "dimensionless",
    ("area", "area"): "dimensionless",
    ("volume", "volume"): "dimensionless",
    ("time", "time"): "dimensionless",
    ("moment_of_inertia", "moment_of_inertia"): "dimensionless",
    ("angle", "angle"): "dimensionless",
    ("dimensionless", "dimensionless"): "dimensionless",
}


def _multiply_dimensions(dim1: str, dim2: str) -> tuple[str, str]:
    """Determine result dimension and SI unit for multiplication."""
    if (dim1, dim2) in _MULT_TABLE:
        result_dim = _MULT_TABLE[(dim1, dim2)]
    elif (dim2, dim1) in _MULT_TABLE:
        result_dim = _MULT_TABLE[(dim2, dim1)]
    else:
        raise ValueError(
            f"Multiplication of {dim1} and {dim2} not supported. "
            "Result dimension is ambiguous."
        )
    return result_dim, DIMENSIONS[result_dim]


def _divide_dimensions(dim1: str, dim2: str) -> tuple[str, str]:
    """Determine result dimension and SI unit for division."""
    if (dim1, dim2) not in _DIV_TABLE:
        raise ValueError(
            f"Division of {dim1} by {dim2} not supported. "
            "Result dimension is ambiguous."
        )
    result_dim = _DIV_TABLE[(dim1, dim2)]
    return result_dim, DIMENSIONS[result_dim]


@beartype
def si_value_of(quantity: Quantity, dimension: str, name: str) -> float:
    """Check the dimension of an argument and return its SI value.

    Args:
        quantity: The argument to check
        dimension: Expected dimension (e.g. "length")
        name: Argument name used in the error message

    Raises:
        ValueError: If the dimension does not match
    """
    if quantity.dimension != dimension:
        raise ValueError(f"{name} must be {dimension}, got {quantity.dimension}")
    return float(quantity.si_value)


# =============================================================================
# Factory Functions - Clear, Explicit Quantity Creation
# =============================================================================


@beartype
def meters(value: float | int) -> Quantity:
    """Create a length quantity in meters."""
    return Quantity(value, "m", "length")


@beartype
def millimeters(value: float | int) -> Quantity:
    """Create a length quantity in millimeters."""
    return Quantity(value, "mm", "length")


@beartype
def feet(value: float | int) -> Quantity:
    """Create a length quantity in feet."""
    return Quantity(value, "ft", "length")


@beartype
def kilograms(value: float | int) -> Quantity:
    """Create a mass quantity in kilograms."""
    return Quantity(value, "kg", "mass")


@beartype
def tonnes(value: float | int) -> Quantity:
    """Create a mass quantity in metric tonnes."""
    return Quantity(value, "t", "mass")


@beartype
def seconds(value: float | int) -> Quantity:
    """Create a time quantity in seconds."""
    return Quantity(value, "s", "time")


@beartype
def square_meters(value: float | int) -> Quantity:
    """Create an area quantity in m^2."""
    return Quantity(value, "m^2", "area")


@beartype
def cubic_meters(value: float | int) -> Quantity:
    """Create a volume quantity in m^3."""
    return Quantity(value, "m^3", "volume")


@beartype
def liters(value: float | int) -> Quantity:
    """Create a volume quantity in liters."""
    return Quantity(value, "L", "volume")


@beartype
def kg_per_second(value: float | int) -> Quantity:
    """Create a mass flow rate quantity in kg/s."""
    return Quantity(value, "kg/s", "mass_flow")


@beartype
def kg_per_cubic_meter(value: float | int) -> Quantity:
    """Create a density quantity in kg/m^3."""
    return Quantity(value, "kg/m^3", "density")


@beartype
def kg_per_square_meter(value: float | int) -> Quantity:
    """Create a surface density quantity in kg/m^2."""
    return Quantity(value, "kg/m^2", "surface_density")


@beartype
def kg_square_meters(value: float | int) -> Quantity:
    """Create a moment of inertia quantity in kg*m^2."""
    return Quantity(value, "kg*m^2", "moment_of_inertia")


@beartype
def radians(value: float | int) -> Quantity:
    """Create an angle quantity in radians."""
    return Quantity(value, "rad", "angle")


@beartype
def degrees(value: float | int) -> Quantity:
    """Create an angle quantity in degrees."""
    return Quantity(value, "deg", "angle")


@beartype
def dimensionless(value: float | int) -> Quantity:
    """Create a dimensionless quantity."""
    return Quantity(value, "1", "dimensionless")

