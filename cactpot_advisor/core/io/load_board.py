from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import yaml

from cactpot_advisor.core.errors import BoardLoadError
from cactpot_advisor.core.grid.grid_state import GRID_SIZE
from cactpot_advisor.core.model import Cell


EMPTY_SYMBOLS = {"_", ".", "-", "0", "?"}
_SEPARATORS = re.compile(r"[\s,|/]+")
BOARD_SUFFIXES = {".yaml", ".yml", ".json"}


def parse_board(text: str) -> list[Cell]:
    """Parse an inline board such as `5........` or `5,_,_ / _,_,_ / _,_,_`.

    Row-major, nine symbols; digits 1-9 are revealed cells and any of
    `_ . - 0 ?` marks a hidden one. Separators are optional.
    Does not check for repeated digits; the grid owns that rule.
    """
    symbols = [s for s in _SEPARATORS.split(text.strip()) if s]
    if len(symbols) == 1:
        symbols = list(symbols[0])
    elif any(len(s) != 1 for s in symbols):
        # Mixed form like "5__ ___ ___": split every chunk into characters.
        symbols = [ch for s in symbols for ch in s]

    if len(symbols) != GRID_SIZE:
        raise BoardLoadError(
            code="E_BOARD_SIZE",
            message=f"board needs exactly {GRID_SIZE} cells, got {len(symbols)}",
            path="board",
        )

    cells: list[Cell] = []
    for i, s in enumerate(symbols):
        if s in EMPTY_SYMBOLS:
            cells.append(None)
        elif s in "123456789":
            cells.append(int(s))
        else:
            raise BoardLoadError(
                code="E_BOARD_SYMBOL",
                message=f"unexpected symbol {s!r} (use 1-9, or one of _ . - 0 ? for hidden)",
                path=f"board[{i}]",
            )
    return cells


def load_board(path: str) -> list[Cell]:
    """Load a board file (YAML/JSON) with a top-level `cells` list of 9 entries.

    Entries are digits 1-9 or null for hidden cells.
    """
    p = Path(path)
    if not p.exists():
        raise BoardLoadError(code="E_FILE_NOT_FOUND", message="file does not exist", path=str(p))

    suffix = p.suffix.lower()
    try:
        raw_text = p.read_text(encoding="utf-8")
    except Exception as e:  # pragma: no cover
        raise BoardLoadError(code="E_FILE_READ", message=str(e), path=str(p)) from e

    try:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(raw_text)
        elif suffix == ".json":
            data = json.loads(raw_text)
        else:
            raise BoardLoadError(
                code="E_UNSUPPORTED_FORMAT",
                message="supported formats are .yaml/.yml and .json",
                path=str(p),
            )
    except BoardLoadError:
        raise
    except Exception as e:
        code = "E_YAML_PARSE" if suffix in {".yaml", ".yml"} else "E_JSON_PARSE"
        raise BoardLoadError(code=code, message=str(e), path=str(p)) from e

    if not isinstance(data, dict):
        raise BoardLoadError(
            code="E_INVALID_TOP_LEVEL",
            message="top-level document must be a mapping/object",
            path=str(p),
        )

    return _coerce_cells(data.get("cells"), str(p))


def read_board(source: str) -> list[Cell]:
    """Board from a file path when it looks like one, otherwise an inline board."""
    if Path(source).suffix.lower() in BOARD_SUFFIXES:
        return load_board(source)
    return parse_board(source)


def _coerce_cells(raw: Any, file: str) -> list[Cell]:
    if not isinstance(raw, list):
        raise BoardLoadError(
            code="E_REQUIRED_FIELD",
            message="cells is required and must be an array",
            path=f"{file}:cells",
        )
    if len(raw) != GRID_SIZE:
        raise BoardLoadError(
            code="E_BOARD_SIZE",
            message=f"board needs exactly {GRID_SIZE} cells, got {len(raw)}",
            path=f"{file}:cells",
        )

    cells: list[Cell] = []
    for i, v in enumerate(raw):
        if v is None:
            cells.append(None)
        elif isinstance(v, int) and not isinstance(v, bool):
            cells.append(v)
        else:
            raise BoardLoadError(
                code="E_INVALID_TYPE",
                message=f"cell must be an integer or null, got {v!r}",
                path=f"{file}:cells[{i}]",
            )
    return cells
