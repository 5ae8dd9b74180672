"""Tests for truncated cone and cylinder shells."""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from lvmass.config import EPS
from lvmass.elements import ConstrElement
from lvmass.errors import NonFinalMassError
from lvmass.level import ConeLevel, CylinderLevel
from lvmass.shapes import TrCone
from lvmass.units import (
    cubic_meters,
    degrees,
    kg_per_cubic_meter,
    kilograms,
    meters,
)

WATER = kg_per_cubic_meter(1000.0)
NONE = kg_per_cubic_meter(0.0)


@pytest.fixture
def cylinder() -> TrCone:
    """r = 1 m, h = 2 m cylinder filled with water, 100 kg shell."""
    return TrCone.cylinder(meters(0.0), meters(2.0), meters(2.0), WATER, kilograms(100.0))


@pytest.fixture
def full_cone() -> TrCone:
    """Apex at the origin, R = 1 m base at X = 3 m."""
    return TrCone.on_axis(meters(0.0), meters(0.0), meters(2.0), meters(3.0), WATER, kilograms(10.0))


class TestConstruction:
    """Test geometry and argument validation."""

    def test_cylinder_geometry(self, cylinder: TrCone) -> None:
        assert cylinder.side_surf_area.value == pytest.approx(4.0 * math.pi)
        assert cylinder.encl_vol.value == pytest.approx(2.0 * math.pi)
        assert cylinder.height.value == 2.0
        assert cylinder.left_radius.value == 1.0
        assert cylinder.right_radius.value == 1.0
        assert isinstance(cylinder.level_solver, CylinderLevel)

    def test_cone_geometry(self, full_cone: TrCone) -> None:
        slant = math.sqrt(10.0)
        assert full_cone.side_surf_area.value == pytest.approx(math.pi * slant)
        assert full_cone.encl_vol.value == pytest.approx(math.pi)
        assert isinstance(full_cone.level_solver, ConeLevel)

    def test_axis_ends(self, full_cone: TrCone) -> None:
        assert_allclose(full_cone.left, [0.0, 0.0, 0.0])
        assert_allclose(full_cone.right, [3.0, 0.0, 0.0])
        assert full_cone.in_xy and full_cone.in_xz

    def test_tilted_axis_ends(self) -> None:
        cone = TrCone(meters(1.0), meters(0.0), meters(0.5), degrees(30.0),
                      meters(1.0), meters(2.0), meters(2.0), NONE)
        assert cone.in_xz and not cone.in_xy
        assert_allclose(cone.right, [1.0 + math.sqrt(3.0), 0.0, 1.5])
        assert cone.alpha.value == pytest.approx(math.pi / 6.0)

    def test_explicit_mass_is_final(self, cylinder: TrCone) -> None:
        assert cylinder.is_final
        assert cylinder.mass == 100.0
        assert cylinder.surf_dens.value == pytest.approx(100.0 / (4.0 * math.pi))

    def test_no_mass_is_non_final(self) -> None:
        shell = TrCone.cylinder(meters(0.0), meters(2.0), meters(2.0), NONE)
        assert not shell.is_final
        with pytest.raises(NonFinalMassError):
            _ = shell.surf_dens

    @pytest.mark.parametrize(("d0", "d1"), [(0.0, 0.0), (-1.0, 2.0), (2.0, -1.0)])
    def test_invalid_diameters_raise(self, d0: float, d1: float) -> None:
        with pytest.raises(ValueError, match="Invalid cone diameters"):
            TrCone.on_axis(meters(0.0), meters(d0), meters(d1), meters(1.0), NONE)

    def test_non_positive_height_raises(self) -> None:
        with pytest.raises(ValueError, match="height must be > 0"):
            TrCone.cylinder(meters(0.0), meters(2.0), meters(0.0), NONE)

    def test_axis_outside_planes_raises(self) -> None:
        with pytest.raises(ValueError, match="OXY or OXZ"):
            TrCone(meters(0.0), meters(1.0), meters(1.0), degrees(0.0),
                   meters(1.0), meters(1.0), meters(1.0), NONE)

    def test_tilted_axis_through_ox_raises(self) -> None:
        with pytest.raises(ValueError, match="alpha=0"):
            TrCone(meters(0.0), meters(0.0), meters(0.0), degrees(10.0),
                   meters(1.0), meters(1.0), meters(1.0), NONE)

    def test_alpha_out_of_range_raises(self) -> None:
        with pytest.raises(ValueError, match="alpha"):
            TrCone(meters(0.0), meters(1.0), meters(0.0), degrees(95.0),
                   meters(1.0), meters(1.0), meters(1.0), NONE)

    def test_non_positive_empty_mass_raises(self) -> None:
        with pytest.raises(ValueError, match="empty_mass"):
            TrCone.cylinder(meters(0.0), meters(2.0), meters(2.0), NONE, kilograms(0.0))

    def test_negative_density_raises(self) -> None:
        with pytest.raises(ValueError, match="density"):
            TrCone.cylinder(meters(0.0), meters(2.0), meters(2.0), kg_per_cubic_meter(-1.0))

    def test_wrong_dimension_raises(self) -> None:
        with pytest.raises(ValueError, match="rho must be density"):
            TrCone.cylinder(meters(0.0), meters(2.0), meters(2.0), kilograms(1.0))


class TestShellMassProperties:
    """Test the empty shell CoM and MoIs."""

    def test_cylinder_shell(self, cylinder: TrCone) -> None:
        assert_allclose(cylinder.com, [1.0, 0.0, 0.0], atol=1e-12)
        # Thin ring: m R^2 about the axis; m (R^2/2 + h^2/12) + m x^2 across it
        assert cylinder.mois[0] == pytest.approx(100.0)
        jy = 100.0 * (0.5 + 4.0 / 12.0) + 100.0 * 1.0
        assert_allclose(cylinder.mois[1:], [jy, jy])

    def test_cone_shell_com(self, full_cone: TrCone) -> None:
        """The lateral surface CoM is h/3 from the base."""
        assert_allclose(full_cone.com, [2.0, 0.0, 0.0], atol=1e-12)

    def test_offset_cylinder_parallel_axis(self) -> None:
        shell = TrCone(meters(0.0), meters(1.0), meters(0.0), degrees(0.0),
                       meters(2.0), meters(2.0), meters(2.0), NONE, kilograms(100.0))
        assert shell.in_xy and not shell.in_xz
        assert_allclose(shell.com, [1.0, 1.0, 0.0], atol=1e-12)
        assert shell.mois[0] == pytest.approx(100.0 * (1.0 + 1.0))

    @pytest.mark.parametrize(
        ("y0", "z0", "alpha"),
        [(0.0, 0.5, 20.0), (-0.3, 0.0, -15.0), (0.8, 0.0, 35.0)],
    )
    def test_tilted_shell_matches_integration(self, body_props, y0: float, z0: float, alpha: float) -> None:
        cone = TrCone(meters(1.0), meters(y0), meters(z0), degrees(alpha),
                      meters(1.2), meters(2.0), meters(3.0), NONE, kilograms(50.0))
        a = math.radians(alpha)
        axis = np.array([math.cos(a), math.sin(a), 0.0] if z0 == 0.0 else [math.cos(a), 0.0, math.sin(a)])
        slope = -0.4 / 3.0
        sigma = 50.0 / cone.side_surf_area.value
        mass, com, mois = body_props(
            cone.right, axis, lambda t: 1.0 + slope * t, 3.0, sigma, shell=True, slope=slope
        )
        assert mass == pytest.approx(50.0, rel=1e-4)
        assert_allclose(cone.com, com, atol=1e-4)
        assert_allclose(cone.mois, mois, rtol=1e-4)


class TestPropellant:
    """Test propellant mass properties and level inversion."""

    def test_cylinder_capacity_and_half_level(self, cylinder: TrCone) -> None:
        assert cylinder.prop_mass_cap.value == pytest.approx(2000.0 * math.pi)
        level = cylinder.level_of_volume(cubic_meters(math.pi))
        assert level.value == pytest.approx(1.0, abs=1e-12)

    def test_full_tank_level_is_height(self, cylinder: TrCone, full_cone: TrCone) -> None:
        for body in (cylinder, full_cone):
            _, level = body.get_prop_ce_with_level(body.prop_mass_cap)
            assert level.value == pytest.approx(body.height.value)

    def test_full_cone(self, full_cone: TrCone) -> None:
        m = 1000.0 * math.pi
        prop = full_cone.get_prop_ce(kilograms(m))
        assert prop.mass == m
        assert prop.mois[0] == pytest.approx(0.3 * m)
        # CoM h/4 above the base
        assert_allclose(prop.com, [2.25, 0.0, 0.0], atol=1e-9)
        # About its CoM: 3/20 m R^2 + 3/80 m h^2; then shifted to the origin
        assert prop.mois[1] == pytest.approx(m * (0.15 + 0.3375 + 2.25**2))

    @pytest.mark.parametrize(("d0", "d1"), [(1.0, 2.6), (2.6, 1.0), (0.0, 2.0), (2.0, 0.0)])
    @pytest.mark.parametrize("fill", [0.05, 0.4, 0.9])
    def test_partial_fill_matches_integration(self, solid_props, d0: float, d1: float, fill: float) -> None:
        cone = TrCone.on_axis(meters(2.0), meters(d0), meters(d1), meters(4.0), WATER)
        m = fill * cone.prop_mass_cap.value
        prop, level = cone.get_prop_ce_with_level(kilograms(m))
        r, big_r = d0 / 2.0, d1 / 2.0

        mass, com_x, mois = solid_props(
            lambda x: r + (big_r - r) * (x - 2.0) / 4.0, 6.0 - level.value, 6.0, 1000.0
        )
        assert prop.mass == pytest.approx(m)
        assert mass == pytest.approx(m, rel=1e-6)
        assert prop.com[0] == pytest.approx(com_x, rel=1e-6)
        assert_allclose(prop.mois, mois, rtol=1e-6)

    def test_tilted_partial_fill_matches_integration(self, body_props) -> None:
        cone = TrCone(meters(1.0), meters(0.0), meters(0.5), degrees(25.0),
                      meters(1.0), meters(2.0), meters(3.0), WATER)
        m = 0.6 * cone.prop_mass_cap.value
        prop, level = cone.get_prop_ce_with_level(kilograms(m))
        a = math.radians(25.0)
        mass, com, mois = body_props(
            cone.right, np.array([math.cos(a), 0.0, math.sin(a)]),
            lambda t: 1.0 - t / 6.0, level.value, 1000.0,
        )
        assert mass == pytest.approx(m, rel=1e-3)
        assert_allclose(prop.com, com, atol=1e-3)
        assert_allclose(prop.mois, mois, rtol=1e-3)

    def test_level_is_monotonic(self, full_cone: TrCone) -> None:
        volumes = np.linspace(0.0, full_cone.encl_vol.value, 50)
        levels = [full_cone.level_of_volume(cubic_meters(float(v))).value for v in volumes]
        assert levels[0] == pytest.approx(0.0, abs=1e-12)
        assert np.all(np.diff(levels) > 0.0)
        assert levels[-1] == pytest.approx(3.0)

    def test_zero_propellant(self, full_cone: TrCone) -> None:
        prop, level = full_cone.get_prop_ce_with_level(kilograms(0.0))
        assert prop.mass == 0.0
        assert_allclose(prop.mois, [0.0, 0.0, 0.0])
        assert_allclose(prop.com, full_cone.right)
        assert level.value == 0.0

    def test_zero_propellant_without_density(self) -> None:
        shell = TrCone.cylinder(meters(0.0), meters(2.0), meters(2.0), NONE)
        prop = shell.get_prop_ce(kilograms(0.0))
        assert isinstance(prop, ConstrElement)
        assert prop.mass == 0.0
        with pytest.raises(ValueError, match="outside"):
            shell.get_prop_ce(kilograms(1.0))

    def test_overfill_within_tolerance(self, cylinder: TrCone) -> None:
        m = cylinder.prop_mass_cap.value * (1.0 + 10.0 * EPS)
        prop, level = cylinder.get_prop_ce_with_level(kilograms(m))
        assert prop.mass == m
        assert level.value == 2.0

    def test_overfill_raises(self, cylinder: TrCone) -> None:
        with pytest.raises(ValueError, match="outside"):
            cylinder.get_prop_ce(kilograms(cylinder.prop_mass_cap.value * 1.001))

    def test_negative_mass_raises(self, cylinder: TrCone) -> None:
        with pytest.raises(ValueError, match="outside"):
            cylinder.get_prop_ce(kilograms(-1.0))

    def test_volume_out_of_range_raises(self, cylinder: TrCone) -> None:
        with pytest.raises(ValueError, match="outside"):
            cylinder.level_of_volume(cubic_meters(7.0))

    def test_shell_plus_propellant(self, cylinder: TrCone) -> None:
        prop = cylinder.get_prop_ce(kilograms(1000.0 * math.pi))
        total = cylinder + prop
        assert total.mass == pytest.approx(100.0 + 1000.0 * math.pi)
        assert_allclose(total.mois, cylinder.mois + prop.mois)
