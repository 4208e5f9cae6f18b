from typing import Callable, Optional
import logging
import traceback

from .errors import SudokuError
from .grid import Difficulty, PuzzleGrid
from .parser import parse_grid
from .render import render as render_grid
from .session import ZeitSudokuSession
from .solver import is_solved, solve as solve_grid
from .utils import logger, setup_logging


def run(
    difficulty: Difficulty = Difficulty.HARD,
    session: Optional[ZeitSudokuSession] = None,
    solve: Callable[[PuzzleGrid], PuzzleGrid] = solve_grid,
    render: Callable[[PuzzleGrid], str] = render_grid,
) -> bool:
    """Fetch, parse and solve today's puzzle. Returns True if fully solved."""
    if session is None:
        session = ZeitSudokuSession()

    # Extract
    markup = session.extract_puzzle_markup(difficulty)
    sudoku = parse_grid(markup)
    logger.info("Found Sudoku:\n%s", render(sudoku))

    # Solve
    solved = solve(sudoku)
    ok = is_solved(solved)
    logger.info("%s Sudoku:\n%s", "Solved" if ok else "Could not completely solve", render(solved))
    return ok


def main() -> int:
    """Console entry point; takes no options. Exit status 1 on extraction or parse failure."""
    setup_logging(logging.INFO)
    try:
        run()
    except SudokuError as e:
        logger.error("Could not fetch the daily Sudoku: %s: %s", type(e).__name__, e)
        logger.debug("Full traceback:\n%s", traceback.format_exc())
        return 1
    return 0
