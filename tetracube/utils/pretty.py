"""Pretty-print helpers for cube grids."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List

from ..core.constants import EMPTY

if TYPE_CHECKING:
    from ..engine.grid import CubeGrid
    from ..engine.solver import SolveResult


EMPTY_SYMBOL = "."


def format_layers(grid: CubeGrid) -> str:
    """Render the cube as one block per ``x`` layer, rows ``y``, columns ``z``."""

    width = max(len(EMPTY_SYMBOL), len(str(int(grid.cells.max()))))
    lines: List[str] = []
    for x in range(grid.side):
        lines.append(f"layer {x}")
        for y in range(grid.side):
            row = []
            for z in range(grid.side):
                owner = int(grid.cells[x, y, z])
                symbol = EMPTY_SYMBOL if owner == EMPTY else str(owner)
                row.append(f"{symbol:>{width}}")
            lines.append(f"  {y:>2} | {' '.join(row)}")
    return "\n".join(lines)


def print_run_stats(result: SolveResult, *, stream=None) -> None:
    """Print grid + summary stats for a solver run."""

    stream = stream or sys.stdout
    grid = result.grid
    print(format_layers(grid), file=stream)

    print(file=stream)
    print("--- Cube ---", file=stream)
    print(f"  Size:          {grid.side}^3 ({grid.volume} cells)", file=stream)
    print(f"  Pieces:        {grid.placed_count}/{grid.target_count}", file=stream)
    if grid.empty_count:
        print(f"  Empty cells:   {grid.empty_count}", file=stream)
    print(f"  Complete:      {'yes' if result.complete else 'no'}", file=stream)

    print(file=stream)
    print("--- Search ---", file=stream)
    print(f"  Steps:         {result.steps}", file=stream)
    print(f"  Stalls:        {result.stalls}", file=stream)
    print(f"  Elapsed:       {result.elapsed_seconds:.2f}s", file=stream)

    if result.validation_messages:
        print(file=stream)
        print("--- Validation ---", file=stream)
        for msg in result.validation_messages:
            print(f"  {msg}", file=stream)

    print(file=stream)
    print(f"Seed: {result.seed}", file=stream)
