import random

from cactpot_advisor.core.engine import ExpectationEngine
from cactpot_advisor.core.grid.lines import LINES, line_coverage, lines_through


def _random_board(rng: random.Random, revealed: int) -> list:
    cells = [None] * 9
    for index, digit in zip(rng.sample(range(9), revealed), rng.sample(range(1, 10), revealed)):
        cells[index] = digit
    return cells


def test_line_table_shape():
    assert [line.key for line in LINES] == [
        "row0", "row1", "row2", "col0", "col1", "col2", "diag0", "diag1",
    ]
    assert LINES[6].cells == (0, 4, 8)
    assert LINES[7].cells == (2, 4, 6)
    assert [line.key for line in lines_through(4)] == ["row1", "col1", "diag0", "diag1"]
    assert [line_coverage(i) for i in range(9)] == [3, 2, 3, 2, 4, 2, 3, 2, 3]


def test_ranking_returns_all_lines_sorted():
    rng = random.Random(7)
    for revealed in range(10):
        engine = ExpectationEngine.from_cells(_random_board(rng, revealed))
        ranked = engine.calculate_all_expectations()
        assert len(ranked) == 8
        assert {r.key for r in ranked} == {line.key for line in LINES}
        evs = [r.expected_value for r in ranked]
        assert evs == sorted(evs, reverse=True)


def test_ties_keep_line_table_order():
    ranked = ExpectationEngine().calculate_all_expectations()
    assert [r.key for r in ranked] == [line.key for line in LINES]


def test_best_line_on_complete_board():
    engine = ExpectationEngine.from_cells([1, 2, 3, 4, 5, 6, 7, 8, 9])
    best = engine.best_line()
    assert best.key == "row0"
    assert best.name == "Row 1"
    assert best.cells == (0, 1, 2)
    assert best.expected_value == 10000


def test_ranked_entries_expose_line_details():
    engine = ExpectationEngine.from_cells([1, None, 3, None, 5, None, None, None, 9])
    by_key = {r.key: r for r in engine.calculate_all_expectations()}
    diag = by_key["diag0"]
    assert diag.name == "Diagonal ↘"
    assert diag.expectation.cell_values == (1, 5, 9)
    assert diag.expectation.is_complete is True
    assert diag.expected_value == 180
    assert by_key["row0"].expectation.unknown_count == 1
