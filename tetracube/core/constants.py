"""Shared constants for the tetracube packer."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

Offset = Tuple[int, int, int]

# Every cell of a piece sits on the center or a face-center of a 3x3x3
# neighbourhood around the anchor.
FACE_OFFSETS: Mapping[str, Offset] = MappingProxyType(
    {
        "front": (-1, 0, 0),
        "back": (1, 0, 0),
        "left": (0, 1, 0),
        "right": (0, -1, 0),
        "up": (0, 0, 1),
        "down": (0, 0, -1),
        "center": (0, 0, 0),
    }
)

DIRECTIONAL_VALUES: Tuple[int, ...] = (0, 1, 2, 3)

ORTHOGONAL_STEPS: Tuple[Offset, ...] = (
    (1, 0, 0),
    (-1, 0, 0),
    (0, 1, 0),
    (0, -1, 0),
    (0, 0, 1),
    (0, 0, -1),
)

PIECE_SIZE = 4
# The piece spans three cells along its bar.
MIN_SIDE = 3
EMPTY = 0

DEFAULT_SIDE = 6
DEFAULT_BATCH_SIZE = 1800
DEFAULT_MAX_ATTEMPT_BATCHES = 12
DEFAULT_STALL_BASE_REMOVAL = 3
DEFAULT_STALL_DOUBLING_PERIOD = 100
