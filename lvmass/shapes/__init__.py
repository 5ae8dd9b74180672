"""Concrete rotation-body shapes and their propellant level solvers."""

from lvmass.level import ConeLevel, CylinderLevel, LevelSolver, SegmentLevel
from lvmass.shapes.spher_segm import SpherSegm
from lvmass.shapes.tr_cone import TrCone

__all__ = [
    "ConeLevel",
    "CylinderLevel",
    "LevelSolver",
    "SegmentLevel",
    "SpherSegm",
    "TrCone",
]
