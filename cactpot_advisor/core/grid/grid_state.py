from __future__ import annotations

from typing import Iterable, Optional

from cactpot_advisor.core.errors import DuplicateDigit, InvalidDigit, InvalidGrid, InvalidIndex
from cactpot_advisor.core.model import Cell


GRID_SIZE = 9
ALL_NUMBERS: tuple[int, ...] = tuple(range(1, 10))


class Grid:
    """The 3x3 board, row-major. Each instance is owned by exactly one engine."""

    def __init__(self, values: Optional[Iterable[Cell]] = None) -> None:
        self._cells: list[Cell] = [None] * GRID_SIZE
        if values is not None:
            values = list(values)
            if len(values) != GRID_SIZE:
                raise InvalidGrid(
                    code="E_GRID_SIZE",
                    message=f"grid needs exactly {GRID_SIZE} cells, got {len(values)}",
                    path="cells",
                )
            for i, v in enumerate(values):
                self.set_cell(i, v)

    def set_cell(self, index: int, value: Cell) -> None:
        _check_index(index)
        if value is not None:
            if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= 9:
                raise InvalidDigit(
                    code="E_INVALID_DIGIT",
                    message=f"digit must be 1-9 or empty, got {value!r}",
                    path=f"cells[{index}]",
                )
            for other, existing in enumerate(self._cells):
                if other != index and existing == value:
                    raise DuplicateDigit(
                        code="E_DUPLICATE_DIGIT",
                        message=f"digit {value} is already placed in cell {other}",
                        path=f"cells[{index}]",
                    )
        self._cells[index] = value

    def get_cell(self, index: int) -> Cell:
        _check_index(index)
        return self._cells[index]

    def clear_cell(self, index: int) -> None:
        self.set_cell(index, None)

    def reset(self) -> None:
        self._cells = [None] * GRID_SIZE

    def values(self) -> tuple[Cell, ...]:
        return tuple(self._cells)

    def used_numbers(self) -> list[int]:
        return [v for v in self._cells if v is not None]

    def available_numbers(self) -> list[int]:
        used = set(self.used_numbers())
        return [n for n in ALL_NUMBERS if n not in used]

    def revealed_count(self) -> int:
        return sum(1 for v in self._cells if v is not None)

    def selectable_numbers(self, index: int) -> list[int]:
        """Digits a picker may offer for `index`: the available ones plus its own value."""
        current = self.get_cell(index)
        available = self.available_numbers()
        if current is not None:
            available = sorted(available + [current])
        return available


def _check_index(index: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < GRID_SIZE:
        raise InvalidIndex(
            code="E_INVALID_INDEX",
            message=f"cell index must be 0-{GRID_SIZE - 1}, got {index!r}",
            path="index",
        )
