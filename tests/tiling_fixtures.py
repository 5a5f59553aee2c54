"""Hand-built tilings shared by the test modules."""

from __future__ import annotations

from typing import List

from tetracube.core.models import Piece, RotationCode
from tetracube.engine.grid import CubeGrid

# Four T pieces tiling a 4x4 layer (x = row, y = column):
#
#   A A A B
#   C A B B
#   C C D B
#   C D D D
LAYER_PIECES = (
    ((0, 1), RotationCode(1, 0, 0)),
    ((1, 3), RotationCode(0, 2, 0)),
    ((2, 0), RotationCode(0, 0, 0)),
    ((3, 2), RotationCode(1, 2, 0)),
)

BLOCKED = 999


def layer_pieces(z: int, first_identity: int) -> List[Piece]:
    return [
        Piece(anchor=(x, y, z), rotation=rotation, identity=first_identity + offset)
        for offset, ((x, y), rotation) in enumerate(LAYER_PIECES)
    ]


def tile_layers(grid: CubeGrid, layers: range) -> List[Piece]:
    """Place the 4x4 layer tiling on each ``z`` in ``layers`` of a side-4 grid."""

    placed: List[Piece] = []
    for z in layers:
        for piece in layer_pieces(z, len(placed) + 1):
            grid.place(piece)
            placed.append(piece)
    return placed


def block_all_except(grid: CubeGrid, *empty_cells) -> None:
    """Fill every cell with a blocker value, leaving ``empty_cells`` open."""

    grid.cells[:] = BLOCKED
    for x, y, z in empty_cells:
        grid.cells[x, y, z] = 0
