"""Data models supporting the tetracube packer."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from functools import cached_property
from typing import Iterator, List, Tuple

from .constants import DIRECTIONAL_VALUES, Offset
from .orientations import orientation_key, orientations_for

Cell = Tuple[int, int, int]


@dataclass(frozen=True)
class RotationCode:
    """One of the 64 parameterized orientations of the piece."""

    r: int
    s: int
    t: int

    def __post_init__(self) -> None:
        # Fails loudly on out-of-range indices.
        orientation_key(self.r, self.s, self.t)

    @property
    def key(self) -> str:
        return f"{self.r}{self.s}{self.t}"

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.s, self.t)

    @classmethod
    def all(cls) -> Iterator["RotationCode"]:
        for r in DIRECTIONAL_VALUES:
            for s in DIRECTIONAL_VALUES:
                for t in DIRECTIONAL_VALUES:
                    yield cls(r, s, t)

    @classmethod
    def from_key(cls, key: str) -> "RotationCode":
        if len(key) != 3 or not key.isdigit():
            raise ValueError(f"Rotation key must be three digits, got {key!r}")
        r, s, t = (int(ch) for ch in key)
        return cls(r, s, t)


@dataclass(frozen=True)
class Piece:
    """A placed or candidate t-tetracube.

    ``anchor`` is the absolute position of cell ``b``. The other three cells
    are derived from the orientation table, so a piece never stores its
    cells directly.
    """

    anchor: Cell
    rotation: RotationCode
    identity: int

    @cached_property
    def relative_cells(self) -> Tuple[Offset, ...]:
        return orientations_for(self.rotation.r, self.rotation.s, self.rotation.t)

    @cached_property
    def cells(self) -> Tuple[Cell, ...]:
        ax, ay, az = self.anchor
        return tuple((ax + dx, ay + dy, az + dz) for dx, dy, dz in self.relative_cells)


@dataclass
class StepOutcome:
    """Result of a single solver step, as seen by the caller."""

    placed: bool
    complete: bool
    identity: int = 0
    removed: List[int] = field(default_factory=list)


ROTATION_CODES: Tuple[RotationCode, ...] = tuple(RotationCode.all())


def random_piece(rng: random.Random, side: int, identity: int) -> Piece:
    """Build a candidate with a uniform anchor and a uniform rotation code."""

    anchor = (rng.randrange(side), rng.randrange(side), rng.randrange(side))
    rotation = rng.choice(ROTATION_CODES)
    return Piece(anchor=anchor, rotation=rotation, identity=identity)
