from typer.testing import CliRunner

from cactpot_advisor.cli import app


runner = CliRunner()


def test_cli_play_reaches_line_pick():
    r = runner.invoke(app, ["play"], input="set 1 1\nset r1c3 3\nset 5 5\nset 9 9\nquit\n")
    assert r.exit_code == 0, r.output
    assert "Step 2: Pick the highlighted line" in r.output
    assert "4 cells revealed. Pick" in r.output


def test_cli_play_reports_errors_and_keeps_going():
    r = runner.invoke(
        app,
        ["play", "--strategy", "coverage"],
        input="set 5 9\nset 1 9\nset 10 1\nset 2 x\nbogus\nclear 5\nquit\n",
    )
    assert r.exit_code == 0, r.output
    assert "E_DUPLICATE_DIGIT" in r.output
    assert "E_INVALID_INDEX" in r.output
    assert "E_INVALID_DIGIT" in r.output
    assert "unknown command: bogus" in r.output
    # After clearing the only digit, the board is back to the opening prompt.
    assert r.output.rstrip().count("Step 1: Reveal the center cell first") >= 2


def test_cli_play_reset():
    r = runner.invoke(app, ["play"], input="set 5 5\nreset\nshow\nquit\n")
    assert r.exit_code == 0, r.output
    assert r.output.count("Step 1: Reveal the center cell first") >= 3


def test_cli_play_ends_on_eof():
    r = runner.invoke(app, ["play"], input="set 5 5\n")
    assert r.exit_code == 0, r.output
