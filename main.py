"""CLI entrypoint for the t-tetracube cube packer."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from tetracube.core.constants import (DEFAULT_BATCH_SIZE, DEFAULT_MAX_ATTEMPT_BATCHES, DEFAULT_SIDE,
                                      DEFAULT_STALL_BASE_REMOVAL, DEFAULT_STALL_DOUBLING_PERIOD)
from tetracube.engine.solver import SolveResult, SolverConfig, TetracubeSolver
from tetracube.utils.logger import configure_logging
from tetracube.utils.pretty import print_run_stats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Tile a cube with t-tetracubes using randomized best-fit search",
    )
    parser.add_argument("--side", type=int, default=DEFAULT_SIDE, help="Cube side length in cells")
    parser.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_BATCH_SIZE,
        help="Random candidates generated per placement attempt",
    )
    parser.add_argument(
        "--max-batches",
        type=int,
        default=DEFAULT_MAX_ATTEMPT_BATCHES,
        help="Placement attempts per step before the step counts as a stall",
    )
    parser.add_argument(
        "--stall-base",
        type=int,
        default=DEFAULT_STALL_BASE_REMOVAL,
        help="Pieces removed on a stall before any escalation",
    )
    parser.add_argument(
        "--stall-period",
        type=int,
        default=DEFAULT_STALL_DOUBLING_PERIOD,
        help="Consecutive stalls after which the removal count doubles",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Stop after this many steps even if the cube is not tiled (default: no limit)",
    )
    parser.add_argument(
        "--progress-every",
        type=int,
        default=500,
        help="Log progress every N steps (0 disables)",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print the cube layers and stats",
    )
    return parser


def build_payload(result: SolveResult, config: SolverConfig) -> Dict[str, Any]:
    grid = result.grid
    return {
        "config": {**config.to_dict(), "seed": result.seed},
        "complete": result.complete,
        "steps": result.steps,
        "stalls": result.stalls,
        "elapsed_seconds": round(result.elapsed_seconds, 3),
        "pieces": [
            {
                "id": piece.identity,
                "anchor": list(piece.anchor),
                "rotation": piece.rotation.key,
                "cells": [list(cell) for cell in piece.cells],
            }
            for piece in grid.pieces.values()
        ],
        "grid": grid.to_jsonable(),
        "validation": result.validation_messages,
    }


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    try:
        config = SolverConfig(
            side=args.side,
            batch_size=args.batch_size,
            max_attempt_batches=args.max_batches,
            stall_base_removal=args.stall_base,
            stall_doubling_period=args.stall_period,
            seed=args.seed,
            max_steps=args.max_steps,
            progress_every=args.progress_every,
        )
        solver = TetracubeSolver(config)
    except ValueError as exc:
        parser.error(str(exc))

    result = solver.run()

    if not args.quiet:
        print_run_stats(result)

    if args.output:
        payload = build_payload(result, config)
        args.output.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    return 0 if result.complete else 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
