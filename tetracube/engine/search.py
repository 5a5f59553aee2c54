"""Best-fit placement search and stall recovery."""

from __future__ import annotations

import random
from typing import List, Optional

from ..core.constants import (DEFAULT_BATCH_SIZE, DEFAULT_MAX_ATTEMPT_BATCHES,
                              DEFAULT_STALL_BASE_REMOVAL, DEFAULT_STALL_DOUBLING_PERIOD)
from ..core.models import Piece, random_piece
from .grid import CubeGrid
from .validator import is_integral
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def generate_candidates(
    grid: CubeGrid, identity: int, rng: random.Random, batch_size: int
) -> List[Piece]:
    return [random_piece(rng, grid.side, identity) for _ in range(batch_size)]


def rank_candidates(grid: CubeGrid, candidates: List[Piece]) -> List[Piece]:
    """Drop candidates that do not fit and order the rest snuggest first.

    The sort is stable, so equal scores keep generation order.
    """

    fitting = [piece for piece in candidates if grid.is_free(piece.cells)]
    return sorted(fitting, key=grid.piece_openings)


def place_best_fit(
    grid: CubeGrid,
    identity: int,
    rng: random.Random,
    max_attempt_batches: int = DEFAULT_MAX_ATTEMPT_BATCHES,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> Optional[Piece]:
    """Place one new piece for ``identity`` or leave the grid untouched.

    Each attempt draws a fresh random batch and commits only its snuggest
    fitting candidate. A commit that leaves a void too small for any future
    piece is reverted and the attempt counts as failed.
    """

    for attempt in range(1, max_attempt_batches + 1):
        ranked = rank_candidates(grid, generate_candidates(grid, identity, rng, batch_size))
        if not ranked:
            LOGGER.debug("Attempt %d/%d: no fitting candidate", attempt, max_attempt_batches)
            continue

        best = ranked[0]
        undo = grid.place_undoable(best)
        if is_integral(grid):
            LOGGER.debug(
                "Attempt %d/%d: placed piece %d at %s rotation %s (%d fitting)",
                attempt,
                max_attempt_batches,
                identity,
                best.anchor,
                best.rotation.key,
                len(ranked),
            )
            return best
        undo()
        LOGGER.debug(
            "Attempt %d/%d: piece %d at %s would seal a void, reverted",
            attempt,
            max_attempt_batches,
            identity,
            best.anchor,
        )
    return None


class StallRecovery:
    """Remove the most exposed pieces when the search gets stuck.

    The removal count starts at ``base_removal`` and doubles after every
    ``doubling_period`` consecutive stalls. It returns to the base count
    once the grid has been emptied.
    """

    def __init__(
        self,
        base_removal: int = DEFAULT_STALL_BASE_REMOVAL,
        doubling_period: int = DEFAULT_STALL_DOUBLING_PERIOD,
    ) -> None:
        if base_removal < 1:
            raise ValueError("base_removal must be at least 1")
        if doubling_period < 1:
            raise ValueError("doubling_period must be at least 1")
        self.base_removal = base_removal
        self.doubling_period = doubling_period
        self.stalls = 0

    @property
    def current_removal(self) -> int:
        return self.base_removal * 2 ** (self.stalls // self.doubling_period)

    def reset(self) -> None:
        self.stalls = 0

    def relieve(self, grid: CubeGrid) -> List[int]:
        """Remove the top ``current_removal`` pieces by exposure and return their identities."""

        if grid.placed_count == 0:
            self.reset()
            return []

        count = self.current_removal
        self.stalls += 1
        scores = {identity: grid.piece_openings(piece) for identity, piece in grid.pieces.items()}
        # reverse=True keeps placement order among equal scores
        ranked = sorted(scores, key=scores.__getitem__, reverse=True)
        removed = ranked[:count]
        for identity in removed:
            grid.remove(identity)

        LOGGER.debug(
            "Stall %d: removed %d/%d pieces (%s)",
            self.stalls,
            len(removed),
            len(ranked),
            ", ".join(str(identity) for identity in removed),
        )
        if grid.placed_count == 0:
            LOGGER.info("Grid emptied after %d consecutive stalls; removal count reset", self.stalls)
            self.reset()
        return removed
