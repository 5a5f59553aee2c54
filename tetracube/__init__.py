"""Randomized best-fit packer that tiles a cube with t-tetracubes.

This package exposes the public API surface via:

- ``tetracube.engine.solver.TetracubeSolver``: steps the search until the cube is tiled.
- ``tetracube.engine.grid.CubeGrid``: the occupancy store.
- ``tetracube.core.orientations``: the frozen orientation table.
"""

from .core.models import Piece, RotationCode, StepOutcome
from .core.orientations import orientations_for
from .engine.grid import CubeGrid
from .engine.solver import SolveResult, SolverConfig, TetracubeSolver
from .engine.validator import is_integral

__all__ = [
    "CubeGrid",
    "Piece",
    "RotationCode",
    "SolveResult",
    "SolverConfig",
    "StepOutcome",
    "TetracubeSolver",
    "is_integral",
    "orientations_for",
]

__version__ = "0.1.0"
