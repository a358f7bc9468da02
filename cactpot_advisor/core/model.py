from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


ScoringStrategy = Literal["coverage", "information"]

Cell = Optional[int]  # None = not revealed


@dataclass(frozen=True)
class Line:
    key: str
    name: str
    cells: tuple[int, int, int]


@dataclass(frozen=True)
class LineExpectation:
    expected_value: float
    known_sum: int
    unknown_count: int
    cell_values: tuple[Cell, Cell, Cell]
    is_complete: bool


@dataclass(frozen=True)
class LineResult:
    key: str
    name: str
    cells: tuple[int, int, int]
    expectation: LineExpectation

    @property
    def expected_value(self) -> float:
        return self.expectation.expected_value


@dataclass(frozen=True)
class CellScore:
    index: int
    score: float
    revealed: bool

    @property
    def row(self) -> int:
        return self.index // 3 + 1

    @property
    def col(self) -> int:
        return self.index % 3 + 1
