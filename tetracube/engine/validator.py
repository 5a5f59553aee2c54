"""Void-integrity heuristic and final tiling validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from ..core.constants import EMPTY, ORTHOGONAL_STEPS, PIECE_SIZE
from ..core.exceptions import ValidationError
from ..core.models import Cell
from .grid import CubeGrid
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def _neighbor_sum(values: np.ndarray) -> np.ndarray:
    """Sum ``values`` over the six face neighbours of every cell (out of bounds is 0)."""

    padded = np.pad(values, 1, mode="constant", constant_values=0)
    sx, sy, sz = values.shape
    total = np.zeros_like(values)
    for dx, dy, dz in ORTHOGONAL_STEPS:
        total += padded[1 + dx:1 + dx + sx, 1 + dy:1 + dy + sy, 1 + dz:1 + dz + sz]
    return total


def _unsafe_mask(cells: np.ndarray) -> np.ndarray:
    empty = (cells == EMPTY).astype(np.int64)
    openings = _neighbor_sum(empty) * empty
    # Openings of each empty cell's open neighbours, back-reference included.
    neighbor_openings = _neighbor_sum(openings)
    sealed = openings == 0
    pair = (openings == 1) & (neighbor_openings == 1)
    triple = (openings == 2) & (neighbor_openings == 2)
    return empty.astype(bool) & (sealed | pair | triple)


def find_voids(grid: CubeGrid) -> List[Cell]:
    """Empty cells that anchor a sealed pocket of one, two or three cells.

    A lone cell is reported when it has no open neighbour, a pair when
    either cell's only open neighbour has the cell as its only open
    neighbour, and a triple at its middle cell. Larger enclosed regions are
    not inspected, even when no piece could ever fit their shape.
    """

    return [(int(x), int(y), int(z)) for x, y, z in np.argwhere(_unsafe_mask(grid.cells))]


def is_integral(grid: CubeGrid) -> bool:
    """True when no empty region is too small to ever hold another piece."""

    return not bool(_unsafe_mask(grid.cells).any())


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class TilingValidator:
    """Runs deterministic validation over a grid and its placed pieces."""

    def __init__(self, require_complete: bool = True) -> None:
        self.require_complete = require_complete

    def validate(self, grid: CubeGrid) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_pieces_in_bounds(grid)
            self._check_cells_match_pieces(grid)
            self._check_no_orphan_cells(grid)
            self._check_no_overlap(grid)
            if self.require_complete:
                self._check_complete(grid)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_pieces_in_bounds(self, grid: CubeGrid) -> None:
        for identity, piece in grid.pieces.items():
            for cell in piece.cells:
                if not grid.in_bounds(cell):
                    raise ValidationError(f"Piece {identity} extends outside the cube at {cell}")

    def _check_cells_match_pieces(self, grid: CubeGrid) -> None:
        for identity, piece in grid.pieces.items():
            if piece.identity != identity:
                raise ValidationError(f"Piece keyed {identity} carries identity {piece.identity}")
            for cell in piece.cells:
                owner = grid.owner(cell)
                if owner != identity:
                    raise ValidationError(f"Cell {cell} of piece {identity} is held by {owner}")

    def _check_no_orphan_cells(self, grid: CubeGrid) -> None:
        owners = np.unique(grid.cells)
        for owner in owners.tolist():
            if owner != EMPTY and owner not in grid.pieces:
                raise ValidationError(f"Cells are held by unknown piece {owner}")

    def _check_no_overlap(self, grid: CubeGrid) -> None:
        seen = set()
        for identity, piece in grid.pieces.items():
            for cell in piece.cells:
                if cell in seen:
                    raise ValidationError(f"Piece {identity} overlaps another piece at {cell}")
                seen.add(cell)
        occupied = grid.volume - grid.empty_count
        if occupied != PIECE_SIZE * grid.placed_count:
            raise ValidationError(
                f"{occupied} occupied cells for {grid.placed_count} pieces"
            )

    def _check_complete(self, grid: CubeGrid) -> None:
        if not grid.is_complete:
            raise ValidationError(
                f"Only {grid.placed_count}/{grid.target_count} pieces placed, "
                f"{grid.empty_count} cells empty"
            )
