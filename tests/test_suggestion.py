from cactpot_advisor.core.engine import ExpectationEngine


def test_prompt_before_any_reveal():
    engine = ExpectationEngine()
    assert "Reveal a cell" in engine.get_suggestion()
    h = engine.get_hint()
    assert h.step == "Step 1"
    assert h.text == "Reveal the center cell first"
    assert engine.suggested_cells() == [4]


def test_names_best_cell_while_revealing():
    engine = ExpectationEngine.from_cells(
        [None, None, None, None, 5, None, None, None, None], strategy="coverage"
    )
    assert engine.get_suggestion() == "Reveal the cell at row 1, column 1 for the most information."
    assert engine.get_hint().text == "Reveal any highlighted cell"


def test_single_best_cell_hint():
    engine = ExpectationEngine.from_cells(
        [1, None, None, None, None, None, None, None, None], strategy="coverage"
    )
    assert engine.suggested_cells() == [4]
    assert engine.get_suggestion() == "Reveal the cell at row 2, column 2 for the most information."
    assert engine.get_hint().text == "Reveal the highlighted cell (row 2, column 2)"


def test_information_strategy_names_a_suggested_cell():
    engine = ExpectationEngine.from_cells([None, 7, None, None, 1, None, 3, None, None])
    first = engine.suggested_cells()[0]
    assert f"row {first // 3 + 1}, column {first % 3 + 1}" in engine.get_suggestion()


def test_names_best_line_after_four_reveals():
    engine = ExpectationEngine.from_cells([1, None, 3, None, 5, None, None, None, 9])
    best = engine.best_line()
    assert engine.get_suggestion() == (
        f"4 cells revealed. Pick {best.name} for an expected {best.expected_value:.1f} MGP."
    )
    h = engine.get_hint()
    assert h.step == "Step 2"
    assert h.text == "Pick the highlighted line"


def test_full_board_suggestion():
    engine = ExpectationEngine.from_cells([1, 2, 3, 4, 5, 6, 7, 8, 9])
    assert engine.get_suggestion() == "9 cells revealed. Pick Row 1 for an expected 10000.0 MGP."


def test_reset_returns_to_first_prompt():
    engine = ExpectationEngine.from_cells([1, None, 3, None, 5, None, None, None, 9])
    engine.reset()
    assert engine.revealed_count() == 0
    assert "Reveal a cell" in engine.get_suggestion()
