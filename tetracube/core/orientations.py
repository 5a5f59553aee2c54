"""Orientation table for the t-tetracube.

The piece is four cells named ``a``, ``b``, ``c`` and ``d``::

        d
        #
      # # #
      a b c

``b`` is the anchor and always sits at the origin. ``a`` and ``c`` occupy an
antipodal pair of face-centers around it, picked from the ``r``/``t``
rotation indices, and ``d`` takes one of the four face-centers left over,
picked by ``s``. Every rotation code ``(r, s, t)`` with indices in ``0..3``
maps to one fixed tuple of offsets ordered ``a, b, c, d``.

Several codes produce the same shape. The table only has to cover every
reachable orientation, so the duplicates are kept.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import FrozenSet, Mapping, Sequence, Tuple

from .constants import DIRECTIONAL_VALUES, FACE_OFFSETS, Offset
from .exceptions import OrientationError

RotationKey = Tuple[int, int, int]
FaceNames = Tuple[str, str, str, str]

# (a, c, (r, t) pairs, pivot r, d candidates at the pivot, d candidates otherwise)
_AXIS_RULES: Tuple[Tuple[str, str, Tuple[Tuple[int, int], ...], int, Tuple[str, ...], Tuple[str, ...]], ...] = (
    (
        "front", "back", ((0, 0), (2, 2)), 0,
        ("left", "up", "right", "down"), ("right", "down", "left", "up"),
    ),
    (
        "back", "front", ((0, 2), (2, 0)), 0,
        ("left", "down", "right", "up"), ("right", "up", "left", "down"),
    ),
    (
        "up", "down", ((0, 1), (1, 1), (2, 3), (3, 1)), 0,
        ("left", "back", "right", "front"), ("right", "front", "left", "back"),
    ),
    (
        "down", "up", ((0, 3), (1, 3), (2, 1), (3, 3)), 0,
        ("left", "front", "right", "back"), ("right", "back", "left", "front"),
    ),
    (
        "left", "right", ((1, 0), (3, 2)), 1,
        ("back", "up", "front", "down"), ("front", "down", "back", "up"),
    ),
    (
        "right", "left", ((1, 2), (3, 0)), 1,
        ("back", "down", "front", "up"), ("front", "up", "back", "down"),
    ),
)


def _check_code(r: int, s: int, t: int) -> None:
    for name, value in (("r", r), ("s", s), ("t", t)):
        if isinstance(value, bool) or not isinstance(value, int) or value not in DIRECTIONAL_VALUES:
            raise OrientationError(f"Rotation index {name}={value!r} outside {DIRECTIONAL_VALUES}")


def _derive_names(r: int, s: int, t: int) -> FaceNames:
    for a, c, pairs, pivot, at_pivot, otherwise in _AXIS_RULES:
        if (r, t) in pairs:
            candidates = at_pivot if r == pivot else otherwise
            return (a, "center", c, candidates[s])
    raise OrientationError(f"No a-c axis defined for r={r}, t={t}")


def _build_table() -> Mapping[RotationKey, Tuple[Offset, ...]]:
    table = {}
    for r in DIRECTIONAL_VALUES:
        for s in DIRECTIONAL_VALUES:
            for t in DIRECTIONAL_VALUES:
                names = _derive_names(r, s, t)
                table[(r, s, t)] = tuple(FACE_OFFSETS[name] for name in names)
    return MappingProxyType(table)


ORIENTATIONS: Mapping[RotationKey, Tuple[Offset, ...]] = _build_table()


def orientation_key(r: int, s: int, t: int) -> str:
    """Return the ``"rst"`` string key for a rotation code, e.g. ``"013"``."""

    _check_code(r, s, t)
    return f"{r}{s}{t}"


def orientations_for(r: int, s: int, t: int) -> Tuple[Offset, ...]:
    """Return the four relative offsets (``a, b, c, d``) for a rotation code."""

    _check_code(r, s, t)
    return ORIENTATIONS[(r, s, t)]


def orientation_names(r: int, s: int, t: int) -> FaceNames:
    """Return the face names used for ``a, b, c, d`` of a rotation code."""

    _check_code(r, s, t)
    return _derive_names(r, s, t)


def normalize(cells: Sequence[Offset]) -> FrozenSet[Offset]:
    """Translate ``cells`` so the minimum corner of their bounding box is the origin."""

    min_x = min(x for x, _, _ in cells)
    min_y = min(y for _, y, _ in cells)
    min_z = min(z for _, _, z in cells)
    return frozenset((x - min_x, y - min_y, z - min_z) for x, y, z in cells)


def distinct_shapes() -> FrozenSet[FrozenSet[Offset]]:
    """Distinct orientations the table can produce, up to translation."""

    return frozenset(normalize(offsets) for offsets in ORIENTATIONS.values())
