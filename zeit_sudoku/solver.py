from typing import List, Optional, Tuple

from .grid import BOX, SIZE, PuzzleGrid
from .utils import bit_of, bits_iter, logger, num_ones, val_of

N = SIZE * SIZE
ALL_MASK = (1 << SIZE) - 1


def _build_units() -> List[List[int]]:
    rows = [[r * SIZE + c for c in range(SIZE)] for r in range(SIZE)]
    cols = [[r * SIZE + c for r in range(SIZE)] for c in range(SIZE)]
    boxes = [
        [(br + dr) * SIZE + (bc + dc) for dr in range(BOX) for dc in range(BOX)]
        for br in range(0, SIZE, BOX)
        for bc in range(0, SIZE, BOX)
    ]
    return rows + cols + boxes


UNITS = _build_units()
# Indices sharing a row, column or box with each cell (excluding itself)
NEIGH: List[frozenset] = [
    frozenset(j for unit in UNITS if i in unit for j in unit) - {i} for i in range(N)
]


class SudokuSolver:
    """
    Bitmask solver: cells hold a single-bit mask (bit k => digit k+1) or 0.

    Deduction applies naked and hidden singles until nothing changes; the
    search then branches on the empty cell with the fewest candidates.
    """

    def __init__(self, board: List[int]):
        self.board = board

    @classmethod
    def from_grid(cls, grid: PuzzleGrid) -> "SudokuSolver":
        return cls([bit_of(v) for row in grid for v in row])

    def to_grid(self) -> PuzzleGrid:
        values = [val_of(m) for m in self.board]
        return PuzzleGrid.from_rows(values[i:i + SIZE] for i in range(0, N, SIZE))

    # ----- Helpers -----
    def _candidates(self, idx: int) -> int:
        ban = 0
        for j in NEIGH[idx]:
            ban |= self.board[j]
        return ALL_MASK & ~ban

    def _givens_consistent(self) -> bool:
        for unit in UNITS:
            seen = 0
            for idx in unit:
                m = self.board[idx]
                if seen & m:
                    return False
                seen |= m
        return True

    # ----- Deduction -----
    def _deduce(self) -> Tuple[bool, bool]:
        """One pass of singles. Returns (changed, contradiction_found)."""
        changed = False

        for idx in range(N):
            if self.board[idx]:
                continue
            opts = self._candidates(idx)
            if opts == 0:
                logger.debug("Contradiction (no candidates) at cell %d", idx)
                return changed, True
            if num_ones(opts) == 1:
                self.board[idx] = opts
                changed = True

        for unit in UNITS:
            where = {}
            placed = 0
            for idx in unit:
                if self.board[idx]:
                    placed |= self.board[idx]
                    continue
                for bit in bits_iter(self._candidates(idx)):
                    where.setdefault(bit, []).append(idx)
            for bit in bits_iter(ALL_MASK & ~placed):
                spots = where.get(bit, [])
                if not spots:
                    return changed, True
                if len(spots) == 1 and self.board[spots[0]] == 0:
                    self.board[spots[0]] = bit
                    changed = True

        return changed, False

    def _deduce_until_stable(self) -> bool:
        """Returns False when a contradiction was found."""
        rounds = 0
        while True:
            rounds += 1
            changed, bad = self._deduce()
            if bad:
                logger.debug("Fixpoint: halted by contradiction after %d round(s)", rounds)
                return False
            if not changed:
                logger.debug("Fixpoint: reached after %d round(s)", rounds)
                return True

    def _search(self) -> Optional[List[int]]:
        if not self._deduce_until_stable():
            return None
        empty = [i for i in range(N) if self.board[i] == 0]
        if not empty:
            return self.board

        best_idx = min(empty, key=lambda i: num_ones(self._candidates(i)))
        for bit in bits_iter(self._candidates(best_idx)):
            branch = SudokuSolver(self.board.copy())
            branch.board[best_idx] = bit
            result = branch._search()
            if result is not None:
                return result
        return None

    # ----- Public -----
    def solve(self) -> bool:
        """Solve in place as far as possible; True if the board is complete."""
        if not self._givens_consistent():
            logger.warning("Givens violate the Sudoku rules, not solving")
            return False

        start = self.board.copy()
        if not self._deduce_until_stable():
            self.board = start
            return False
        if all(self.board):
            logger.info("Solved the sudoku deductively")
            return True

        result = SudokuSolver(self.board.copy())._search()
        if result is None:
            logger.info("The puzzle is infeasible")
            return False
        self.board = result
        return True


def solve(grid: PuzzleGrid) -> PuzzleGrid:
    """Return a new grid, solved if possible, otherwise as far as deduction got."""
    solver = SudokuSolver.from_grid(grid)
    solver.solve()
    return solver.to_grid()


def is_solved(grid: PuzzleGrid) -> bool:
    if grid.empty_cells():
        return False
    solver = SudokuSolver.from_grid(grid)
    return solver._givens_consistent()
