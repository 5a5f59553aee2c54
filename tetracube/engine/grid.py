"""Cube occupancy grid and placement helpers."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional

import numpy as np

from ..core.constants import DEFAULT_SIDE, EMPTY, MIN_SIDE, ORTHOGONAL_STEPS, PIECE_SIZE
from ..core.exceptions import PlacementError
from ..core.models import Cell, Piece
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def check_side(side: int) -> None:
    """Raise ``ValueError`` unless a cube of ``side`` can hold a complete tiling."""

    if isinstance(side, bool) or not isinstance(side, int):
        raise ValueError(f"Cube side must be an integer, got {side!r}")
    if side < MIN_SIDE:
        raise ValueError(f"Cube side must be at least {MIN_SIDE} to fit a piece, got {side}")
    if (side ** 3) % PIECE_SIZE:
        raise ValueError(f"A cube of side {side} cannot be tiled by {PIECE_SIZE}-cell pieces")


class CubeGrid:
    """An ``N x N x N`` occupancy store plus the map of placed pieces.

    ``cells[x, y, z]`` is ``0`` for an empty cell or the identity of the
    piece covering it. Every mutation goes through :meth:`place` and
    :meth:`remove`, which update the array and ``pieces`` together.
    """

    def __init__(self, side: int = DEFAULT_SIDE) -> None:
        check_side(side)
        self.side = side
        self.cells = np.zeros((side, side, side), dtype=np.int64)
        self._pieces: Dict[int, Piece] = {}

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def pieces(self) -> Mapping[int, Piece]:
        return MappingProxyType(self._pieces)

    @property
    def volume(self) -> int:
        return self.side ** 3

    @property
    def target_count(self) -> int:
        return self.volume // PIECE_SIZE

    @property
    def placed_count(self) -> int:
        return len(self._pieces)

    @property
    def empty_count(self) -> int:
        return int(np.count_nonzero(self.cells == EMPTY))

    @property
    def is_complete(self) -> bool:
        return self.placed_count == self.target_count

    def in_bounds(self, cell: Cell) -> bool:
        return all(0 <= axis < self.side for axis in cell)

    def owner(self, cell: Cell) -> int:
        x, y, z = cell
        return int(self.cells[x, y, z])

    def is_free(self, cells: Iterable[Cell]) -> bool:
        for cell in cells:
            if not self.in_bounds(cell):
                return False
            x, y, z = cell
            if self.cells[x, y, z] != EMPTY:
                return False
        return True

    def neighbors(self, cell: Cell) -> Iterator[Cell]:
        x, y, z = cell
        for dx, dy, dz in ORTHOGONAL_STEPS:
            neighbor = (x + dx, y + dy, z + dz)
            if self.in_bounds(neighbor):
                yield neighbor

    def count_openings(self, cell: Cell) -> int:
        """Number of in-bounds, empty face neighbours of ``cell``."""

        return sum(1 for nx, ny, nz in self.neighbors(cell) if self.cells[nx, ny, nz] == EMPTY)

    def piece_openings(self, piece: Piece) -> int:
        """Exposure score: openings summed over the piece's cells.

        A shared empty neighbour is counted once per adjacent cell.
        """

        return sum(self.count_openings(cell) for cell in piece.cells)

    # ------------------------------------------------------------------
    # Piece placement
    # ------------------------------------------------------------------
    def place(self, piece: Piece) -> None:
        if piece.identity == EMPTY:
            raise PlacementError(f"Identity {EMPTY} is reserved for empty cells")
        if piece.identity in self._pieces:
            raise PlacementError(f"Piece {piece.identity} is already placed")
        if not self.is_free(piece.cells):
            raise PlacementError(f"Piece {piece.identity} overlaps occupied or out-of-bounds cells")

        for x, y, z in piece.cells:
            self.cells[x, y, z] = piece.identity
        self._pieces[piece.identity] = piece

    def place_undoable(self, piece: Piece) -> Callable[[], None]:
        """Place a piece and return an undo callable for speculative placement."""

        self.place(piece)

        def undo() -> None:
            self.remove(piece.identity)

        return undo

    def remove(self, identity: int) -> Optional[Piece]:
        piece = self._pieces.pop(identity, None)
        if piece is None:
            return None
        for x, y, z in piece.cells:
            self.cells[x, y, z] = EMPTY
        return piece

    def clear(self) -> None:
        LOGGER.debug("Clearing grid with %d pieces", self.placed_count)
        self.cells.fill(EMPTY)
        self._pieces.clear()

    # ------------------------------------------------------------------
    # Snapshots and serialization
    # ------------------------------------------------------------------
    def snapshot(self) -> np.ndarray:
        return self.cells.copy()

    def to_jsonable(self) -> List[List[List[int]]]:
        return self.cells.tolist()
