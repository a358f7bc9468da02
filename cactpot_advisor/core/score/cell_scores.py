from __future__ import annotations

import math
import statistics
from typing import Mapping, Sequence

from cactpot_advisor.core.expect.line_expectation import line_expectation
from cactpot_advisor.core.grid.lines import line_coverage, lines_through
from cactpot_advisor.core.model import Cell, CellScore, ScoringStrategy


REVEALED_SCORE = -1.0

STRATEGIES: tuple[str, ...] = ("coverage", "information")


def coverage_scores(cells: Sequence[Cell]) -> list[CellScore]:
    """Static heuristic: how many lines pass through each cell (center 4, corners 3, edges 2)."""
    out: list[CellScore] = []
    for i, v in enumerate(cells):
        if v is not None:
            out.append(CellScore(index=i, score=REVEALED_SCORE, revealed=True))
        else:
            out.append(CellScore(index=i, score=float(line_coverage(i)), revealed=False))
    return out


def information_scores(
    cells: Sequence[Cell],
    available: Sequence[int],
    payouts: Mapping[int, int],
) -> list[CellScore]:
    """Dynamic heuristic: how far each line's expectation swings on revealing a cell.

    For every line through an unrevealed cell, each available digit is placed
    in the cell in turn and the line is re-evaluated. The population standard
    deviation of those values, averaged over the cell's lines, is the score.
    """
    out: list[CellScore] = []
    for i, v in enumerate(cells):
        if v is not None:
            out.append(CellScore(index=i, score=REVEALED_SCORE, revealed=True))
            continue

        spreads: list[float] = []
        for line in lines_through(i):
            evs: list[float] = []
            for d in available:
                simulated = list(cells)
                simulated[i] = d
                rest = [n for n in available if n != d]
                evs.append(line_expectation(line, simulated, rest, payouts).expected_value)
            spreads.append(statistics.pstdev(evs) if evs else 0.0)

        out.append(CellScore(index=i, score=sum(spreads) / len(spreads), revealed=False))
    return out


def calculate_cell_scores(
    cells: Sequence[Cell],
    available: Sequence[int],
    payouts: Mapping[int, int],
    strategy: ScoringStrategy,
) -> list[CellScore]:
    """Scores for all 9 cells, highest first; ties keep index order."""
    if strategy == "coverage":
        scores = coverage_scores(cells)
    elif strategy == "information":
        scores = information_scores(cells, available, payouts)
    else:
        raise ValueError(f"unknown scoring strategy: {strategy}")
    return sorted(scores, key=lambda s: -s.score)


def top_cells(scores: Sequence[CellScore]) -> list[int]:
    """Indices of every unrevealed cell sharing the best score."""
    unrevealed = [s for s in scores if not s.revealed]
    if not unrevealed:
        return []
    best = max(s.score for s in unrevealed)
    return sorted(
        s.index for s in unrevealed if math.isclose(s.score, best, rel_tol=1e-9, abs_tol=1e-12)
    )
