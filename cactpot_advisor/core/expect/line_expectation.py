from __future__ import annotations

from typing import Mapping, Sequence

from cactpot_advisor.core.grid.lines import LINES
from cactpot_advisor.core.model import Cell, Line, LineExpectation, LineResult
from cactpot_advisor.core.payout.payout_table import payout


def expected_value(
    known_sum: int,
    unknown_count: int,
    available: Sequence[int],
    payouts: Mapping[int, int],
) -> float:
    """Mean payout over every way of filling the unknown cells.

    Unknown cells take distinct digits from `available`; ordered pairs and
    triples are enumerated, which weights every unordered draw equally.
    Returns 0 when there is nothing to enumerate.
    """
    if unknown_count == 0:
        return float(payout(payouts, known_sum))

    total = 0
    count = 0
    n = len(available)

    if unknown_count == 1:
        for d in available:
            total += payout(payouts, known_sum + d)
            count += 1
    elif unknown_count == 2:
        for i in range(n):
            for j in range(n):
                if i == j:
                    continue
                total += payout(payouts, known_sum + available[i] + available[j])
                count += 1
    else:
        # Only reachable with nothing known on the line, so known_sum is unused.
        for i in range(n):
            for j in range(n):
                if i == j:
                    continue
                for k in range(n):
                    if k == i or k == j:
                        continue
                    total += payout(payouts, available[i] + available[j] + available[k])
                    count += 1

    return total / count if count > 0 else 0.0


def line_expectation(
    line: Line,
    cells: Sequence[Cell],
    available: Sequence[int],
    payouts: Mapping[int, int],
) -> LineExpectation:
    """Expectation for one line, given the full 9-cell board and the unplaced digits."""
    values = tuple(cells[i] for i in line.cells)
    known = [v for v in values if v is not None]
    unknown_count = len(values) - len(known)
    known_sum = sum(known)

    return LineExpectation(
        expected_value=expected_value(known_sum, unknown_count, available, payouts),
        known_sum=known_sum,
        unknown_count=unknown_count,
        cell_values=values,  # type: ignore[arg-type]
        is_complete=unknown_count == 0,
    )


def rank_lines(
    cells: Sequence[Cell],
    available: Sequence[int],
    payouts: Mapping[int, int],
) -> list[LineResult]:
    """All 8 lines, best expected value first; ties keep table order."""
    results = [
        LineResult(
            key=line.key,
            name=line.name,
            cells=line.cells,
            expectation=line_expectation(line, cells, available, payouts),
        )
        for line in LINES
    ]
    # sorted() is stable, so equal values stay in rows/columns/diagonals order.
    return sorted(results, key=lambda r: -r.expected_value)
