"""Exceptions raised by lvmass.

Every violated precondition raises immediately. Bad arguments raise plain
ValueError; the classes below single out the two conditions callers may want
to tell apart from ordinary argument errors.
"""


class NonFinalMassError(ValueError):
    """Mass or MoI of an element used before (or after) its one-time finalization."""


class LevelSolverError(RuntimeError):
    """The propellant level iteration did not converge."""
