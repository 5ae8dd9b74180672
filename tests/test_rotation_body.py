"""Tests for the rotation body engine shared by all shapes."""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from lvmass.level import CylinderLevel, LevelSolver
from lvmass.rotation_body import PropellantPolynomials, RotationBody
from lvmass.shapes import SpherSegm, TrCone
from lvmass.units import degrees, kg_per_cubic_meter, kilograms, meters


def _cylinder_polys(big_r: float) -> PropellantPolynomials:
    r2 = big_r * big_r
    return PropellantPolynomials(
        jp05=0.0, jp04=0.0, jp03=math.pi / 3.0 * r2,
        jp15=0.0, jp14=0.0, jp13=0.0, jp12=0.0, jp11=math.pi / 4.0 * r2 * r2,
        kp4=0.0, kp3=0.0, kp2=-math.pi / 2.0 * r2,
    )


class TestPropellantPolynomials:
    """Test evaluation of the level polynomials."""

    def test_cylinder_column(self) -> None:
        """A liquid column of height l: integral(xi^2 dV) = pi R^2 l^3 / 3."""
        j0, j1, k = _cylinder_polys(2.0).evaluate(3.0)
        assert j0 == pytest.approx(math.pi * 4.0 * 9.0)
        assert j1 == pytest.approx(math.pi * 4.0 * 3.0)
        assert k == pytest.approx(-math.pi * 2.0 * 9.0)

    def test_zero_level(self) -> None:
        assert _cylinder_polys(1.0).evaluate(0.0) == (0.0, 0.0, 0.0)


class TestRotationBody:
    """Test orientation handling and the shared engine."""

    def test_direct_construction(self) -> None:
        """A cylinder built straight from its intrinsic parameters."""
        area = 2.0 * math.pi * 2.0
        body = RotationBody(
            side_surf_area=area,
            encl_vol=2.0 * math.pi,
            empty_mass=10.0,
            alpha=0.0,
            x0=0.0, y0=0.0, z0=0.0,
            x0_is_left=True,
            height=2.0,
            je0=2.0 * math.pi * 8.0 / 3.0,
            je1=area / 2.0,
            ke=-2.0 * math.pi * 2.0,
            rho=1000.0,
            level_solver=CylinderLevel(height=2.0, encl_vol=2.0 * math.pi),
            prop_polys=_cylinder_polys(1.0),
        )
        assert body.mass == 10.0
        assert_allclose(body.com, [1.0, 0.0, 0.0])
        assert body.mois[0] == pytest.approx(10.0)
        ref = TrCone.cylinder(meters(0.0), meters(2.0), meters(2.0), kg_per_cubic_meter(1000.0),
                              kilograms(10.0))
        assert_allclose(body.mois, ref.mois)

    def test_arguments_are_keyword_only(self) -> None:
        with pytest.raises(TypeError):
            RotationBody(1.0, 1.0)  # type: ignore

    def test_axis_in_xy(self) -> None:
        cone = TrCone(meters(0.0), meters(1.0), meters(0.0), degrees(10.0),
                      meters(1.0), meters(1.5), meters(2.0), kg_per_cubic_meter(0.0))
        assert cone.in_xy
        assert not cone.in_xz
        assert cone.right[2] == 0.0
        assert cone.right[1] == pytest.approx(1.0 + 2.0 * math.sin(math.radians(10.0)))

    def test_axis_in_xz(self) -> None:
        cone = TrCone(meters(0.0), meters(0.0), meters(-1.0), degrees(-10.0),
                      meters(1.0), meters(1.5), meters(2.0), kg_per_cubic_meter(0.0))
        assert cone.in_xz
        assert not cone.in_xy
        assert cone.right[1] == 0.0
        assert cone.right[2] == pytest.approx(-1.0 - 2.0 * math.sin(math.radians(10.0)))

    def test_axis_ends_are_read_only(self) -> None:
        cone = TrCone.cylinder(meters(0.0), meters(1.0), meters(1.0), kg_per_cubic_meter(0.0))
        with pytest.raises(ValueError):
            cone.right[0] = 3.0
        with pytest.raises(ValueError):
            cone.left[0] = 3.0

    @pytest.mark.parametrize(
        "body",
        [
            TrCone.cylinder(meters(0.0), meters(1.0), meters(1.0), kg_per_cubic_meter(1.0)),
            TrCone.on_axis(meters(0.0), meters(1.0), meters(2.0), meters(1.0), kg_per_cubic_meter(1.0)),
            SpherSegm.hemisphere(False, meters(0.0), meters(1.0), kg_per_cubic_meter(1.0)),
        ],
    )
    def test_solvers_satisfy_protocol(self, body: RotationBody) -> None:
        assert isinstance(body.level_solver, LevelSolver)

    def test_surf_dens_of_non_final_raises(self) -> None:
        shell = TrCone.cylinder(meters(0.0), meters(1.0), meters(1.0), kg_per_cubic_meter(0.0))
        with pytest.raises(ValueError):
            _ = shell.surf_dens

    def test_propellant_and_shell_share_reference_end(self) -> None:
        """Shell and propellant CoMs lie on the same rotation axis."""
        cone = TrCone(meters(1.0), meters(0.0), meters(0.5), degrees(25.0),
                      meters(1.0), meters(2.0), meters(3.0), kg_per_cubic_meter(800.0),
                      kilograms(50.0))
        prop = cone.get_prop_ce(kilograms(0.5 * cone.prop_mass_cap.value))
        axis = np.array([math.cos(math.radians(25.0)), 0.0, math.sin(math.radians(25.0))])
        for com in (cone.com, prop.com):
            offset = com - cone.right
            assert np.linalg.norm(np.cross(offset, axis)) == pytest.approx(0.0, abs=1e-12)
