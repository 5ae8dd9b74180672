"""Shared test helpers."""

from collections.abc import Callable

import numpy as np
import pytest


def solid_of_revolution(
    radius: Callable[[np.ndarray], np.ndarray],
    x_lo: float,
    x_hi: float,
    density: float,
    n: int = 20000,
) -> tuple[float, float, np.ndarray]:
    """Mass, CoM X and axial MoIs of an on-axis solid of revolution.

    Integrates thin disks with the midpoint rule.
    """
    dx = (x_hi - x_lo) / n
    x = x_lo + (np.arange(n) + 0.5) * dx
    r2 = radius(x) ** 2
    area = np.pi * r2
    mass = density * np.sum(area) * dx
    com_x = density * np.sum(area * x) * dx / mass
    jx = density * np.sum(0.5 * area * r2) * dx
    jyz = density * np.sum(0.25 * area * r2 + area * x * x) * dx
    return mass, com_x, np.array([jx, jyz, jyz])


def tilted_body(
    right: np.ndarray,
    axis: np.ndarray,
    radius: Callable[[np.ndarray], np.ndarray],
    length: float,
    density: float,
    shell: bool = False,
    slope: float = 0.0,
    n_t: int = 200,
    n_r: int = 40,
    n_th: int = 72,
) -> tuple[float, np.ndarray, np.ndarray]:
    """Mass, CoM and axial MoIs of a body of revolution with any axis.

    The body spans the distance t in [0, length] from its right end, towards
    -axis; radius(t) is its radius there. A shell has the surface density
    `density` and radius slope `slope` (dr/dt); a solid has the volume
    density `density`.
    """
    e = axis / np.linalg.norm(axis)
    helper = np.array([0.0, 0.0, 1.0]) if abs(e[2]) < 0.9 else np.array([0.0, 1.0, 0.0])
    u = np.cross(e, helper)
    u /= np.linalg.norm(u)
    v = np.cross(e, u)

    dt = length / n_t
    t = (np.arange(n_t) + 0.5) * dt
    dth = 2.0 * np.pi / n_th
    th = (np.arange(n_th) + 0.5) * dth
    rad = radius(t)

    if shell:
        rr = rad[:, None]
        w = (rad * dth * dt * np.sqrt(1.0 + slope * slope))[:, None, None] * np.ones((1, 1, n_th))
    else:
        frac = (np.arange(n_r) + 0.5) / n_r
        rr = rad[:, None] * frac[None, :]
        dr = rad / n_r
        w = (rr * dr[:, None] * dth * dt)[:, :, None] * np.ones((1, 1, n_th))

    pts = (
        right[None, None, None, :]
        - t[:, None, None, None] * e
        + (rr[:, :, None] * np.cos(th)[None, None, :])[..., None] * u
        + (rr[:, :, None] * np.sin(th)[None, None, :])[..., None] * v
    )
    w = density * w
    mass = float(np.sum(w))
    com = np.einsum("ijk,ijkl->l", w, pts) / mass
    x, y, z = pts[..., 0], pts[..., 1], pts[..., 2]
    mois = np.array([
        np.sum(w * (y * y + z * z)),
        np.sum(w * (x * x + z * z)),
        np.sum(w * (x * x + y * y)),
    ])
    return mass, com, mois


@pytest.fixture
def solid_props() -> Callable[..., tuple[float, float, np.ndarray]]:
    return solid_of_revolution


@pytest.fixture
def body_props() -> Callable[..., tuple[float, np.ndarray, np.ndarray]]:
    return tilted_body
