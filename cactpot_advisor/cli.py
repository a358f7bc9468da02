from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from cactpot_advisor.core.engine import DEFAULT_STRATEGY, ExpectationEngine
from cactpot_advisor.core.errors import BoardLoadError, CactpotError, InvalidIndex
from cactpot_advisor.core.grid.lines import LINES
from cactpot_advisor.core.io.load_board import read_board
from cactpot_advisor.core.model import LineResult
from cactpot_advisor.core.payout.payout_table import PayoutConfigError, load_and_merge
from cactpot_advisor.core.score.cell_scores import STRATEGIES
from cactpot_advisor.core.suggest.suggestion import REVEALS_BEFORE_PICK

app = typer.Typer(add_completion=False, no_args_is_help=True)

_CELL_RC = re.compile(r"^r([1-3])c([1-3])$", re.IGNORECASE)


@app.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine decisions to stderr"),
) -> None:
    """Mini Cactpot advisor CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("advise")
def advise(
    board: str = typer.Argument(
        ..., help="Inline board (e.g. 5........) or a board file (.yaml/.yml/.json)"
    ),
    strategy: str = typer.Option(
        DEFAULT_STRATEGY, "--strategy", help="Cell scoring strategy: coverage|information"
    ),
    payout_file: Optional[str] = typer.Option(
        None, "--payout-file", help="Optional YAML file overriding payouts per sum"
    ),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Recommend the next cell to reveal, or the line to pick once 4 are known."""
    if format not in ("text", "json"):
        _print_errors(
            [
                CactpotError(
                    code="E_ADVISE_UNKNOWN_FORMAT",
                    message=f"unknown format: {format} (choose one of: text, json)",
                    path="format",
                )
            ]
        )
        raise typer.Exit(code=2)

    try:
        cells = read_board(board)
    except BoardLoadError as e:
        if format == "json":
            _emit_json(None, errors=[e], exit_code=1)
        _print_errors([e])
        raise typer.Exit(code=1)

    engine = _build_engine(strategy, payout_file)
    try:
        for i, v in enumerate(cells):
            engine.set_cell(i, v)
    except CactpotError as e:
        if format == "json":
            _emit_json(None, errors=[e], exit_code=2)
        _print_errors([e])
        raise typer.Exit(code=2)

    if format == "json":
        _emit_json(engine, errors=[], exit_code=0)

    _render(engine, Console())


@app.command("play")
def play(
    strategy: str = typer.Option(
        DEFAULT_STRATEGY, "--strategy", help="Cell scoring strategy: coverage|information"
    ),
    payout_file: Optional[str] = typer.Option(
        None, "--payout-file", help="Optional YAML file overriding payouts per sum"
    ),
) -> None:
    """Interactive ticket: enter revealed digits and follow the advice."""
    engine = _build_engine(strategy, payout_file)
    console = Console()
    typer.echo("Commands: set <cell> <digit> | clear <cell> | reset | show | quit")
    typer.echo("Cells are 1-9 in reading order, or r<row>c<col>.")
    _render(engine, console)

    while True:
        try:
            raw = typer.prompt("cactpot", prompt_suffix="> ")
        except typer.Abort:
            break
        parts = raw.split()
        if not parts:
            continue
        cmd, args = parts[0].lower(), parts[1:]

        if cmd in ("quit", "exit", "q"):
            break
        try:
            if cmd == "set" and len(args) == 2:
                index = _parse_cell_ref(args[0])
                if not args[1].isdecimal():
                    raise CactpotError(
                        code="E_INVALID_DIGIT",
                        message=f"digit must be 1-9, got {args[1]!r}",
                        path="digit",
                    )
                engine.set_cell(index, int(args[1]))
            elif cmd == "clear" and len(args) == 1:
                engine.clear_cell(_parse_cell_ref(args[0]))
            elif cmd == "reset" and not args:
                engine.reset()
            elif cmd == "show" and not args:
                pass
            else:
                typer.echo(f"unknown command: {raw.strip()}", err=True)
                continue
        except CactpotError as e:
            _print_errors([e])
            continue
        _render(engine, console)


@app.command("lines")
def lines() -> None:
    """List the eight scoring lines and their cells."""
    typer.echo("Lines:")
    for line in LINES:
        cells = ", ".join(str(i + 1) for i in line.cells)
        typer.echo(f"- {line.key}: {line.name} (cells {cells})")


@app.command("payouts")
def payouts(
    payout_file: Optional[str] = typer.Option(
        None, "--payout-file", help="Optional YAML file overriding payouts per sum"
    ),
) -> None:
    """Show the effective payout table (sum -> MGP)."""
    table_map = _load_payouts(payout_file)
    typer.echo("Payouts:")
    for total in sorted(table_map):
        typer.echo(f"- {total}: {table_map[total]}")


def _build_engine(strategy: str, payout_file: Optional[str]) -> ExpectationEngine:
    if strategy not in STRATEGIES:
        _print_errors(
            [
                CactpotError(
                    code="E_UNKNOWN_STRATEGY",
                    message=f"unknown strategy: {strategy} (choose one of: {', '.join(STRATEGIES)})",
                    path="strategy",
                )
            ]
        )
        raise typer.Exit(code=2)
    return ExpectationEngine(payouts=_load_payouts(payout_file), strategy=strategy)  # type: ignore[arg-type]


def _load_payouts(payout_file: Optional[str]) -> dict[int, int]:
    try:
        return load_and_merge(payout_file)
    except FileNotFoundError:
        _print_errors(
            [
                BoardLoadError(
                    code="E_PAYOUT_FILE_NOT_FOUND",
                    message=f"payout file not found: {payout_file}",
                    path="payout_file",
                )
            ]
        )
        raise typer.Exit(code=1)
    except PayoutConfigError as e:
        _print_errors(
            [CactpotError(code="E_PAYOUT_FILE_INVALID", message=str(e), path="payout_file")]
        )
        raise typer.Exit(code=2)


def _parse_cell_ref(ref: str) -> int:
    m = _CELL_RC.match(ref)
    if m:
        return (int(m.group(1)) - 1) * 3 + int(m.group(2)) - 1
    if ref.isdecimal() and 1 <= int(ref) <= 9:
        return int(ref) - 1
    raise InvalidIndex(
        code="E_INVALID_INDEX",
        message=f"cell must be 1-9 or r<row>c<col>, got {ref!r}",
        path="cell",
    )


def _render(engine: ExpectationEngine, console: Console) -> None:
    revealed = engine.revealed_count()
    suggested = set(engine.suggested_cells())

    console.print(_board_text(engine, suggested), highlight=False, soft_wrap=True)
    step = engine.get_hint()
    console.print(f"{step.step}: {step.text}", highlight=False, soft_wrap=True)
    console.print(engine.get_suggestion(), highlight=False, soft_wrap=True)

    if revealed < REVEALS_BEFORE_PICK:
        return

    ranked = engine.calculate_all_expectations()
    table = Table(title="Lines by expected MGP")
    table.add_column("Line")
    table.add_column("Cells")
    table.add_column("Known sum", justify="right")
    table.add_column("Hidden", justify="right")
    table.add_column("Expected", justify="right")
    for r in ranked:
        table.add_row(
            r.name,
            " ".join(_cell_symbol(v) for v in r.expectation.cell_values),
            str(r.expectation.known_sum),
            str(r.expectation.unknown_count),
            f"{r.expected_value:.1f}",
        )
    console.print(table)


def _board_text(engine: ExpectationEngine, suggested: set[int]) -> str:
    rows: list[str] = []
    for r in range(3):
        row_cells = []
        for c in range(3):
            i = r * 3 + c
            v = engine.get_cell(i)
            if v is not None:
                mark = str(v)
            else:
                mark = "*" if i in suggested else "·"
            row_cells.append(f" {mark} ")
        rows.append("|".join(row_cells))
    return "\n---+---+---\n".join(rows)


def _cell_symbol(v: Optional[int]) -> str:
    return "_" if v is None else str(v)


def _emit_json(
    engine: Optional[ExpectationEngine], *, errors: list[CactpotError], exit_code: int
) -> None:
    payload: dict[str, Any] = {
        "tool": "cactpot",
        "command": "advise",
        "ok": not errors,
        "error_count": len(errors),
        "errors": [{"code": e.code, "message": e.message, "path": e.path} for e in errors],
    }
    if engine is not None:
        revealed = engine.revealed_count()
        ranked = engine.calculate_all_expectations()
        payload.update(
            {
                "strategy": engine.strategy,
                "cells": list(engine.values()),
                "revealed": revealed,
                "suggestion": engine.get_suggestion(),
                "suggested_cells": engine.suggested_cells(),
                "best_line": _line_item(ranked[0]) if revealed >= REVEALS_BEFORE_PICK else None,
                "lines": [_line_item(r) for r in ranked],
            }
        )
    typer.echo(json.dumps(payload, indent=2, sort_keys=True))
    raise typer.Exit(code=exit_code)


def _line_item(r: LineResult) -> dict[str, Any]:
    return {
        "key": r.key,
        "name": r.name,
        "cells": list(r.cells),
        "expected_value": r.expected_value,
        "known_sum": r.expectation.known_sum,
        "unknown_count": r.expectation.unknown_count,
        "is_complete": r.expectation.is_complete,
    }


def _print_errors(errors: list[CactpotError]) -> None:
    errors_sorted = sorted(errors, key=lambda e: (e.path or "", e.code))
    for e in errors_sorted:
        typer.echo(str(e), err=True)


def main() -> None:
    app(prog_name="cactpot")


cli = typer.main.get_command(app)

if __name__ == "__main__":
    main()
