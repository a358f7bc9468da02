from __future__ import annotations

from cactpot_advisor.core.errors import UnknownLine
from cactpot_advisor.core.model import Line


# Order matters: ranking ties fall back to this order (rows, columns, diagonals).
LINES: tuple[Line, ...] = (
    Line("row0", "Row 1", (0, 1, 2)),
    Line("row1", "Row 2", (3, 4, 5)),
    Line("row2", "Row 3", (6, 7, 8)),
    Line("col0", "Column 1", (0, 3, 6)),
    Line("col1", "Column 2", (1, 4, 7)),
    Line("col2", "Column 3", (2, 5, 8)),
    Line("diag0", "Diagonal ↘", (0, 4, 8)),
    Line("diag1", "Diagonal ↙", (2, 4, 6)),
)

LINES_BY_KEY: dict[str, Line] = {line.key: line for line in LINES}


def get_line(key: str) -> Line:
    try:
        return LINES_BY_KEY[key]
    except KeyError:
        raise UnknownLine(
            code="E_UNKNOWN_LINE",
            message=f"unknown line: {key} (choose one of: {', '.join(LINES_BY_KEY)})",
            path="line",
        ) from None


def lines_through(index: int) -> list[Line]:
    """Lines whose cells include `index`, in table order."""
    return [line for line in LINES if index in line.cells]


def line_coverage(index: int) -> int:
    return len(lines_through(index))
