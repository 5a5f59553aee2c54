"""Solver loop: one piece per step until the cube is tiled."""

from __future__ import annotations

import itertools
import random
import threading
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from ..core.constants import (DEFAULT_BATCH_SIZE, DEFAULT_MAX_ATTEMPT_BATCHES, DEFAULT_SIDE,
                              DEFAULT_STALL_BASE_REMOVAL, DEFAULT_STALL_DOUBLING_PERIOD)
from ..core.exceptions import ValidationError
from ..core.models import StepOutcome
from .grid import CubeGrid, check_side
from .search import StallRecovery, place_best_fit
from .validator import TilingValidator
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class SolverConfig:
    side: int = DEFAULT_SIDE
    batch_size: int = DEFAULT_BATCH_SIZE
    max_attempt_batches: int = DEFAULT_MAX_ATTEMPT_BATCHES
    stall_base_removal: int = DEFAULT_STALL_BASE_REMOVAL
    stall_doubling_period: int = DEFAULT_STALL_DOUBLING_PERIOD
    seed: Optional[int] = None
    max_steps: Optional[int] = None
    progress_every: int = 0

    def __post_init__(self) -> None:
        check_side(self.side)
        if self.batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if self.max_attempt_batches < 1:
            raise ValueError("max_attempt_batches must be at least 1")
        if self.stall_base_removal < 1:
            raise ValueError("stall_base_removal must be at least 1")
        if self.stall_doubling_period < 1:
            raise ValueError("stall_doubling_period must be at least 1")
        if self.max_steps is not None and self.max_steps < 0:
            raise ValueError("max_steps cannot be negative")
        if self.progress_every < 0:
            raise ValueError("progress_every cannot be negative")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SolveResult:
    grid: CubeGrid
    steps: int
    stalls: int
    complete: bool
    elapsed_seconds: float
    seed: int
    validation_messages: List[str] = field(default_factory=list)


class TetracubeSolver:
    """Drives the placement search and stall recovery over one owned grid.

    Callers either pace the search themselves through
    :meth:`advance_one_step` or hand it over to :meth:`run`. Between steps
    the grid always holds a valid configuration, so stopping at any step
    boundary is safe.
    """

    def __init__(self, config: Optional[SolverConfig] = None, grid: Optional[CubeGrid] = None) -> None:
        self.config = config or SolverConfig()
        if grid is not None and grid.side != self.config.side:
            raise ValueError(f"Grid side {grid.side} does not match configured side {self.config.side}")
        self.grid = grid if grid is not None else CubeGrid(self.config.side)
        self.seed = self.config.seed if self.config.seed is not None else random.randrange(2 ** 32)
        self.rng = random.Random(self.seed)
        self.recovery = StallRecovery(
            base_removal=self.config.stall_base_removal,
            doubling_period=self.config.stall_doubling_period,
        )
        self.steps = 0
        self.stalls = 0
        first_identity = max(self.grid.pieces, default=0) + 1
        self._identities = itertools.count(first_identity)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------
    def grid_snapshot(self) -> np.ndarray:
        return self.grid.snapshot()

    def placed_piece_count(self) -> int:
        return self.grid.placed_count

    def is_complete(self) -> bool:
        return self.grid.is_complete

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------
    def advance_one_step(self) -> StepOutcome:
        """Try to add one piece; on failure prune the grid instead."""

        with self._lock:
            if self.grid.is_complete:
                return StepOutcome(placed=False, complete=True)

            self.steps += 1
            identity = next(self._identities)
            piece = place_best_fit(
                self.grid,
                identity,
                self.rng,
                max_attempt_batches=self.config.max_attempt_batches,
                batch_size=self.config.batch_size,
            )
            if piece is not None:
                return StepOutcome(placed=True, complete=self.grid.is_complete, identity=identity)

            self.stalls += 1
            removed = self.recovery.relieve(self.grid)
            return StepOutcome(placed=False, complete=False, identity=identity, removed=removed)

    def run(self, max_steps: Optional[int] = None) -> SolveResult:
        """Step until the cube is tiled or the step budget runs out.

        Without a budget (argument or config) the loop only ends on success.
        """

        budget = max_steps if max_steps is not None else self.config.max_steps
        LOGGER.info(
            "Solving %dx%dx%d cube (%d pieces) with seed %s",
            self.grid.side,
            self.grid.side,
            self.grid.side,
            self.grid.target_count,
            self.seed,
        )
        started = time.perf_counter()
        taken = 0
        while not self.grid.is_complete:
            if budget is not None and taken >= budget:
                LOGGER.warning(
                    "Step budget of %d exhausted with %d/%d pieces placed",
                    budget,
                    self.grid.placed_count,
                    self.grid.target_count,
                )
                break
            self.advance_one_step()
            taken += 1
            if self.config.progress_every and self.steps % self.config.progress_every == 0:
                LOGGER.info(
                    "Step %d: %d/%d pieces, %d stalls, next removal %d",
                    self.steps,
                    self.grid.placed_count,
                    self.grid.target_count,
                    self.stalls,
                    self.recovery.current_removal,
                )
        elapsed = time.perf_counter() - started

        messages: List[str] = []
        if self.grid.is_complete:
            validation = TilingValidator().validate(self.grid)
            if not validation.ok:
                raise ValidationError(f"Tiling validation failed: {validation.messages}")
            messages = validation.messages
            LOGGER.info(
                "Cube tiled in %d steps (%d stalls, %.2fs)", self.steps, self.stalls, elapsed
            )

        return SolveResult(
            grid=self.grid,
            steps=self.steps,
            stalls=self.stalls,
            complete=self.grid.is_complete,
            elapsed_seconds=elapsed,
            seed=self.seed,
            validation_messages=messages,
        )
