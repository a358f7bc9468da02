from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from cactpot_advisor.core.model import LineResult


REVEALS_BEFORE_PICK = 4

# Center cell, on four lines. Suggested for every fresh ticket.
OPENING_CELL = 4


@dataclass(frozen=True)
class Hint:
    step: str
    text: str


def cell_label(index: int) -> str:
    return f"row {index // 3 + 1}, column {index % 3 + 1}"


def suggestion_text(
    revealed: int,
    suggested: Sequence[int],
    ranked: Sequence[LineResult],
) -> str:
    """One-sentence recommendation for the current board."""
    if revealed == 0:
        return "The game uncovers one number to start. Reveal a cell and enter the digit you see."

    if revealed < REVEALS_BEFORE_PICK:
        if suggested:
            return f"Reveal the cell at {cell_label(suggested[0])} for the most information."
        return f"You can reveal {REVEALS_BEFORE_PICK - revealed} more cell(s)."

    best = ranked[0]
    return (
        f"{revealed} cells revealed. Pick {best.name} "
        f"for an expected {best.expected_value:.1f} MGP."
    )


def hint(revealed: int, suggested: Sequence[int]) -> Hint:
    if revealed == 0:
        return Hint(step="Step 1", text="Reveal the center cell first")
    if revealed < REVEALS_BEFORE_PICK:
        if len(suggested) == 1:
            return Hint(step="Step 1", text=f"Reveal the highlighted cell ({cell_label(suggested[0])})")
        if suggested:
            return Hint(step="Step 1", text="Reveal any highlighted cell")
        return Hint(step="Step 1", text=f"Entered {revealed}/{REVEALS_BEFORE_PICK}")
    return Hint(step="Step 2", text="Pick the highlighted line")
