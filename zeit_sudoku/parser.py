"""Turn the inner HTML of the puzzle widget into a PuzzleGrid."""
from typing import List

from bs4 import BeautifulSoup, Tag

from .errors import NumericParseError, StructuralValidationError
from .grid import SIZE, PuzzleGrid
from .utils import logger

ROW_CLASS = "sodokoRow"
FIXED_VALUE_CLASS = "fixed-value"
DIGITS = frozenset("123456789")


def _cell_value(cell: Tag, r: int, c: int) -> int:
    fixed = cell.find_all(class_=FIXED_VALUE_CLASS)
    if len(fixed) > 1:
        raise StructuralValidationError(
            f"More than one fixed value in cell ({r}, {c}): {[str(f) for f in fixed]}"
        )
    if not fixed:
        return 0

    text = fixed[0].get_text(strip=True)
    if len(text) != 1 or text not in DIGITS:
        raise NumericParseError(f"Cell ({r}, {c}) has fixed value {text!r}, expected a digit 1-9")
    return int(text)


def parse_grid(markup: str) -> PuzzleGrid:
    """
    Parse the grid container's markup.

    Expects 9 elements of class "sodokoRow", each with 9 child cells; a cell
    holds at most one "fixed-value" element with a digit, otherwise it is
    empty (0).

    Raises:
        StructuralValidationError: wrong row/cell counts or an ambiguous cell.
        NumericParseError: a fixed value that is not a digit 1-9.
    """
    soup = BeautifulSoup(markup, "html.parser")

    rows = soup.find_all(class_=ROW_CLASS)
    if len(rows) != SIZE:
        raise StructuralValidationError(f"Expected {SIZE} rows, found {len(rows)}")

    values: List[List[int]] = []
    for r, row in enumerate(rows):
        cells = row.find_all(True, recursive=False)
        if len(cells) != SIZE:
            raise StructuralValidationError(
                f"Expected {SIZE} cells, got {len(cells)} in row {r}: {row}"
            )
        values.append([_cell_value(cell, r, c) for c, cell in enumerate(cells)])

    grid = PuzzleGrid.from_rows(values)
    logger.info("Parsed grid with %d given(s)", SIZE * SIZE - len(grid.empty_cells()))
    return grid
