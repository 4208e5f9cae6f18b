# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "zeit_sudoku" can be imported without installing
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def grid_markup(rows):
    """
    Build markup shaped like the sudoku.zeit.de widget.

    `rows` is a list of rows, each a list of cell contents: 0/None for an
    empty cell, an int or str for a single fixed value, or a list of strings
    for several fixed-value elements in one cell.
    """
    out = []
    for row in rows:
        cells = []
        for v in row:
            if v in (0, None):
                inner = '<input class="cell-input" type="text">'
            elif isinstance(v, list):
                inner = "".join(f'<span class="fixed-value">{x}</span>' for x in v)
            else:
                inner = f'<div class="value"><span class="fixed-value">{v}</span></div>'
            cells.append(f'<div class="sodokoCell">{inner}</div>')
        out.append(f'<div class="sodokoRow">{"".join(cells)}</div>')
    return "\n".join(out)


def empty_rows(n_rows=9, n_cells=9):
    return [[0] * n_cells for _ in range(n_rows)]


@pytest.fixture
def puzzle_rows():
    return [
        [5, 3, 0, 0, 7, 0, 0, 0, 0],
        [6, 0, 0, 1, 9, 5, 0, 0, 0],
        [0, 9, 8, 0, 0, 0, 0, 6, 0],
        [8, 0, 0, 0, 6, 0, 0, 0, 3],
        [4, 0, 0, 8, 0, 3, 0, 0, 1],
        [7, 0, 0, 0, 2, 0, 0, 0, 6],
        [0, 6, 0, 0, 0, 0, 2, 8, 0],
        [0, 0, 0, 4, 1, 9, 0, 0, 5],
        [0, 0, 0, 0, 8, 0, 0, 7, 9],
    ]


@pytest.fixture
def puzzle_solution():
    return (
        "534678912"
        "672195348"
        "198342567"
        "859761423"
        "426853791"
        "713924856"
        "961537284"
        "287419635"
        "345286179"
    )


@pytest.fixture
def no_sleep(monkeypatch):
    """Record retry backoffs instead of sleeping."""
    slept = []
    monkeypatch.setattr("zeit_sudoku.retry.time.sleep", slept.append)
    return slept
