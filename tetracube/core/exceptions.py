"""Custom exception hierarchy for the tetracube packer."""


class TetracubeError(Exception):
    """Base exception for packer failures."""


class OrientationError(TetracubeError, ValueError):
    """Raised when a rotation code falls outside the 4x4x4 index space."""


class PlacementError(TetracubeError):
    """Raised when a piece is placed over occupied or out-of-bounds cells."""


class ValidationError(TetracubeError):
    """Raised when the tiling integrity checks fail."""
