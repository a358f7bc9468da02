from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional

from cactpot_advisor.core.errors import CactpotError
from cactpot_advisor.core.expect.line_expectation import line_expectation, rank_lines
from cactpot_advisor.core.grid.grid_state import Grid
from cactpot_advisor.core.grid.lines import get_line
from cactpot_advisor.core.model import Cell, CellScore, LineExpectation, LineResult, ScoringStrategy
from cactpot_advisor.core.payout.payout_table import merged_payouts
from cactpot_advisor.core.score.cell_scores import STRATEGIES, calculate_cell_scores, top_cells
from cactpot_advisor.core.suggest.suggestion import (
    OPENING_CELL,
    REVEALS_BEFORE_PICK,
    Hint,
    hint,
    suggestion_text,
)


_logger = logging.getLogger(__name__)

DEFAULT_STRATEGY: ScoringStrategy = "information"


class ExpectationEngine:
    """Advisor for one Mini Cactpot ticket.

    Owns its grid; queries recompute from the current cells on every call.
    The scoring strategy is fixed for the lifetime of the engine.
    """

    def __init__(
        self,
        grid: Optional[Grid] = None,
        payouts: Optional[Mapping[int, int]] = None,
        strategy: ScoringStrategy = DEFAULT_STRATEGY,
    ) -> None:
        if strategy not in STRATEGIES:
            raise CactpotError(
                code="E_UNKNOWN_STRATEGY",
                message=f"unknown strategy: {strategy} (choose one of: {', '.join(STRATEGIES)})",
                path="strategy",
            )
        self.grid = grid if grid is not None else Grid()
        self.payouts: dict[int, int] = dict(payouts) if payouts is not None else merged_payouts()
        self.strategy: ScoringStrategy = strategy

    @classmethod
    def from_cells(cls, cells: Iterable[Cell], **kwargs) -> "ExpectationEngine":
        return cls(grid=Grid(cells), **kwargs)

    # Grid state

    def set_cell(self, index: int, value: Cell) -> None:
        self.grid.set_cell(index, value)
        _logger.debug("cell %d set to %s (revealed=%d)", index, value, self.revealed_count())

    def get_cell(self, index: int) -> Cell:
        return self.grid.get_cell(index)

    def clear_cell(self, index: int) -> None:
        self.set_cell(index, None)

    def reset(self) -> None:
        self.grid.reset()
        _logger.debug("grid reset")

    def values(self) -> tuple[Cell, ...]:
        return self.grid.values()

    def used_numbers(self) -> list[int]:
        return self.grid.used_numbers()

    def available_numbers(self) -> list[int]:
        return self.grid.available_numbers()

    def revealed_count(self) -> int:
        return self.grid.revealed_count()

    def selectable_numbers(self, index: int) -> list[int]:
        return self.grid.selectable_numbers(index)

    # Lines

    def calculate_line_expectation(self, key: str) -> LineExpectation:
        return line_expectation(get_line(key), self.values(), self.available_numbers(), self.payouts)

    def calculate_all_expectations(self) -> list[LineResult]:
        return rank_lines(self.values(), self.available_numbers(), self.payouts)

    def best_line(self) -> LineResult:
        return self.calculate_all_expectations()[0]

    # Cells

    def calculate_cell_scores(self) -> list[CellScore]:
        return calculate_cell_scores(
            self.values(), self.available_numbers(), self.payouts, self.strategy
        )

    def suggested_cells(self) -> list[int]:
        """Cells worth revealing next; empty once enough cells are known to pick a line.

        A fresh ticket always opens on the center, whatever the strategy.
        """
        revealed = self.revealed_count()
        if revealed >= REVEALS_BEFORE_PICK:
            return []
        if revealed == 0:
            return [OPENING_CELL]
        return top_cells(self.calculate_cell_scores())

    # Narrative

    def get_suggestion(self) -> str:
        revealed = self.revealed_count()
        if revealed >= REVEALS_BEFORE_PICK:
            text = suggestion_text(revealed, [], self.calculate_all_expectations())
        elif revealed > 0:
            text = suggestion_text(revealed, self.suggested_cells(), [])
        else:
            text = suggestion_text(revealed, [], [])
        _logger.debug("suggestion (%s): %s", self.strategy, text)
        return text

    def get_hint(self) -> Hint:
        revealed = self.revealed_count()
        suggested = self.suggested_cells() if revealed < REVEALS_BEFORE_PICK else []
        return hint(revealed, suggested)
