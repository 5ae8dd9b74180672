#!/usr/bin/env python
"""Strap-on booster mass properties example for lvmass.

This example builds a kerosene/LOX strap-on booster (RD-107A class) from
construction elements and follows its mass properties through the burn:
1. Model the shells (cones, cylinders, domes) and the engine
2. Pro-rate the shell masses to the known structural mass
3. Group the shells into LOX, fuel, peroxide and liquid nitrogen tanks
4. Compute mass, CoM and MoIs at lift-off, mid-burn and cut-off
5. Plot the mass history and the dry mass breakdown

The turbopump gas generator burns H2O2 and the tanks are pressurized by
evaporated nitrogen; both drain together with the main propellants.
"""

import numpy as np

from lvmass import (
    PointMass,
    RotationBody,
    SpherSegm,
    Stage,
    Tank,
    TrCone,
    get_mass_scale,
    get_propellant_density,
    pro_rate_mass,
    setup_logging,
)
from lvmass.plotting import plot_mass_breakdown, plot_mass_history
from lvmass.units import (
    kg_per_cubic_meter,
    kg_per_second,
    kilograms,
    meters,
    radians,
    seconds,
)

# =============================================================================
# Booster Data
# =============================================================================

EMPTY_MASS = 3815.0             # kg, including the engine
ENGINE_MASS = 1090.0            # kg
FUEL_MASS = 11458.0 * 1.002     # kg, +0.2% antifreeze additive
OXID_MASS = 27903.0             # kg
FUEL_REM = 215.0 * 1.002        # kg, unspendable
OXID_REM = 451.0                # kg, unspendable
ENGINE_MASS_RATE = 326.04       # kg/s at full thrust, verniers included

H2O2_MASS = 1212.0              # kg, gas generator peroxide
H2O2_REM = 125.0                # kg, unspendable
LIQ_N2_MASS = 256.0             # kg
GAS_N2_MASS = 9.0               # kg, gas cushion, kept to cut-off
N2_MASS = LIQ_N2_MASS + GAS_N2_MASS
LIQ_N2_REM = 47.0               # kg, unspendable

MAX_D = 2.68                    # m, booster diameter at the tail end
TOP_D = 1.2                     # m, diameter at the nose cone joint


def print_header(text: str) -> None:
    """Print a formatted section header."""
    print()
    print("┌" + "─" * 68 + "┐")
    print(f"│ {text:<66} │")
    print("└" + "─" * 68 + "┘")


def print_table(rows: list[tuple[str, str]], title: str = "") -> None:
    """Print a formatted table."""
    if title:
        print(f"\n  {title}")
        print("  " + "─" * 44)
    for label, value in rows:
        print(f"  {label:<26} {value:>16}")


def mass_rates() -> dict[str, float]:
    """Consumption rate of every tank [kg/s].

    The engine rate is split by the spendable oxidizer/fuel ratio. Peroxide
    and liquid nitrogen run out to their remnants at main engine cut-off.
    """
    spendable = (OXID_MASS - OXID_REM) + (FUEL_MASS - FUEL_REM)
    burn_time = spendable / ENGINE_MASS_RATE
    return {
        "lox": ENGINE_MASS_RATE * (OXID_MASS - OXID_REM) / spendable,
        "fuel": ENGINE_MASS_RATE * (FUEL_MASS - FUEL_REM) / spendable,
        "h2o2": (H2O2_MASS - H2O2_REM) / burn_time,
        "ln2": (LIQ_N2_MASS - LIQ_N2_REM) / burn_time,
    }


def build_stage() -> tuple[Stage, dict[str, RotationBody]]:
    """Booster stage and its pro-rated shells, keyed by display name."""
    lox = get_propellant_density("LOX")
    fuel = get_propellant_density("RG-1")
    h2o2 = get_propellant_density("H2O2")
    ln2 = get_propellant_density("LN2")
    none = kg_per_cubic_meter(0.0)
    zero = meters(0.0)

    # X is measured along the booster axis from the nose tip
    nose = TrCone.on_axis(zero, zero, meters(TOP_D), meters(2.4), none)
    lox_top = SpherSegm.on_axis(False, meters(3.0), meters(TOP_D), meters(0.4), lox)
    lox_barrel = TrCone.on_axis(meters(3.0), meters(TOP_D), meters(MAX_D), meters(9.0), lox)
    lox_bottom = SpherSegm.on_axis(True, meters(12.0), meters(MAX_D), meters(0.5), lox)
    intertank = TrCone.cylinder(meters(12.0), meters(MAX_D), meters(1.0), none)
    fuel_top = SpherSegm.on_axis(False, meters(13.0), meters(MAX_D), meters(0.5), fuel)
    fuel_barrel = TrCone.cylinder(meters(13.0), meters(MAX_D), meters(2.6), fuel)
    fuel_bottom = SpherSegm.on_axis(True, meters(15.6), meters(MAX_D), meters(0.5), fuel)
    tail = TrCone.on_axis(meters(15.6), meters(MAX_D), meters(2.0), meters(2.4), none)
    # Tail compartment: peroxide on the axis, liquid nitrogen beside it
    h2o2_tank = TrCone.cylinder(meters(16.2), meters(0.8), meters(1.8), h2o2)
    ln2_tank = TrCone(
        meters(16.4), meters(0.75), zero, radians(0.0),
        meters(0.6), meters(0.6), meters(1.2), ln2,
    )

    shells = {
        "Nose cone": nose,
        "LOX top dome": lox_top,
        "LOX barrel": lox_barrel,
        "LOX bottom dome": lox_bottom,
        "Intertank": intertank,
        "Fuel top dome": fuel_top,
        "Fuel barrel": fuel_barrel,
        "Fuel bottom dome": fuel_bottom,
        "Tail section": tail,
        "H2O2 tank": h2o2_tank,
        "LN2 tank": ln2_tank,
    }

    # All shells share one surface density: scale them to the structural mass
    scale = get_mass_scale(list(shells.values()), kilograms(EMPTY_MASS - ENGINE_MASS))
    shells = {name: pro_rate_mass(ce, scale) for name, ce in shells.items()}

    tanks = [
        Tank("lox", [shells["LOX bottom dome"], shells["LOX barrel"], shells["LOX top dome"]]),
        Tank("fuel", [shells["Fuel bottom dome"], shells["Fuel barrel"], shells["Fuel top dome"]]),
        Tank("h2o2", [shells["H2O2 tank"]]),
        Tank("ln2", [shells["LN2 tank"]]),
    ]

    engine = PointMass(meters(18.6), zero, zero, kilograms(ENGINE_MASS))
    gas_n2 = PointMass(meters(17.0), meters(-0.75), zero, kilograms(GAS_N2_MASS))
    structure = [shells["Nose cone"], shells["Intertank"], shells["Tail section"], engine, gas_n2]

    rates = mass_rates()
    stage = Stage(
        "booster",
        structure=structure,
        tanks=tanks,
        initial_masses=[kilograms(m) for m in (OXID_MASS, FUEL_MASS, H2O2_MASS, LIQ_N2_MASS)],
        mass_rates=[kg_per_second(rates[tank.name]) for tank in tanks],
        remnants=[kilograms(m) for m in (OXID_REM, FUEL_REM, H2O2_REM, LIQ_N2_REM)],
    )
    return stage, shells


def main() -> None:
    """Run the booster stage example."""
    setup_logging()

    print()
    print("╔" + "═" * 68 + "╗")
    print("║" + " " * 20 + "LVMASS BOOSTER MASS MODEL" + " " * 23 + "║")
    print("║" + " " * 22 + "RG-1/LOX Strap-On Block" + " " * 23 + "║")
    print("╚" + "═" * 68 + "╝")

    # =========================================================================
    # Geometry
    # =========================================================================

    print_header("GEOMETRY")

    stage, shells = build_stage()

    print_table(
        [(name, f"{ce.mass:,.1f} kg") for name, ce in shells.items()],
        f"Shell Masses (surface density {shells['Nose cone'].surf_dens.value:.2f} kg/m²)",
    )

    # =========================================================================
    # Tanks and Stage
    # =========================================================================

    print_header("TANKS")

    loaded = {"lox": OXID_MASS, "fuel": FUEL_MASS, "h2o2": H2O2_MASS, "ln2": LIQ_N2_MASS}
    rows = []
    for tank in stage.tanks:
        rows.append((f"{tank.name.upper()} capacity", f"{tank.capacity.value:,.0f} kg"))
        rows.append((f"{tank.name.upper()} loaded", f"{loaded[tank.name]:,.0f} kg"))
    print_table(rows)

    rates = mass_rates()
    print_table(
        [(f"{name.upper()} rate", f"{rate:.2f} kg/s") for name, rate in rates.items()]
        + [
            ("Oxidizer/fuel ratio", f"{rates['lox'] / rates['fuel']:.3f}"),
            ("Burn time", f"{stage.burn_time.value:.1f} s"),
        ],
        "Consumption",
    )

    # =========================================================================
    # Mass Properties
    # =========================================================================

    print_header("MASS PROPERTIES")

    burn_time = stage.burn_time.value
    for label, t in [("Lift-off", 0.0), ("Mid-burn", burn_time / 2.0), ("Cut-off", burn_time)]:
        ce = stage.at_time(seconds(t))
        print_table([
            ("Mass", f"{ce.mass:,.0f} kg"),
            ("CoM X", f"{ce.com[0]:.3f} m"),
            ("Jx", f"{ce.mois[0]:,.0f} kg·m²"),
            ("Jy", f"{ce.mois[1]:,.0f} kg·m²"),
        ], f"{label} (t = {t:.1f} s)")

    history = stage.history(np.linspace(0.0, burn_time, 61))

    # =========================================================================
    # Generate Visualizations
    # =========================================================================

    print_header("GENERATING VISUALIZATIONS")

    print("  [1/2] Mass history...")
    fig_history = plot_mass_history(history, title="Booster Mass Properties")
    fig_history.savefig("booster_mass_history.png", dpi=150, bbox_inches="tight")
    print("        → Saved: booster_mass_history.png")

    print("  [2/2] Dry mass breakdown...")
    masses = {name: ce.mass for name, ce in shells.items()}
    masses["Engine"] = ENGINE_MASS
    masses["Gaseous N2"] = GAS_N2_MASS
    fig_mass = plot_mass_breakdown(masses, title="Booster Dry Mass")
    fig_mass.savefig("booster_mass_breakdown.png", dpi=150, bbox_inches="tight")
    print("        → Saved: booster_mass_breakdown.png")

    print()
    print(f"  Dry mass: {stage.dry.mass:,.0f} kg, history rows: {history.height}")
    print()


if __name__ == "__main__":
    main()
