from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Tuple

from .errors import StructuralValidationError

SIZE = 9
BOX = 3


class Difficulty(Enum):
    """Puzzle level; the value is the button label shown on sudoku.zeit.de."""
    EASY = "LEICHT"
    MEDIUM = "MITTEL"
    HARD = "SCHWER"


@dataclass(frozen=True)
class PuzzleGrid:
    """
    A 9×9 Sudoku grid, row-major, 0 for empty cells and 1-9 for given digits.

    The shape and value range are checked on construction; whether the
    givens form a legal Sudoku is left to the solver.
    """
    rows: Tuple[Tuple[int, ...], ...]

    def __post_init__(self):
        # Copy into tuples so the grid never shares mutable rows with the caller
        try:
            object.__setattr__(self, "rows", tuple(tuple(row) for row in self.rows))
        except TypeError as e:
            raise StructuralValidationError(f"Grid rows must be sequences of cells: {e}") from e

        if len(self.rows) != SIZE:
            raise StructuralValidationError(f"Expected {SIZE} rows, got {len(self.rows)}")
        for r, row in enumerate(self.rows):
            if len(row) != SIZE:
                raise StructuralValidationError(
                    f"Expected {SIZE} cells in row {r}, got {len(row)}"
                )
            for c, v in enumerate(row):
                if not isinstance(v, int) or isinstance(v, bool) or not 0 <= v <= SIZE:
                    raise StructuralValidationError(
                        f"Cell ({r}, {c}) holds {v!r}, expected an int in [0, {SIZE}]"
                    )

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[int]]) -> "PuzzleGrid":
        return cls(tuple(tuple(row) for row in rows))

    @classmethod
    def from_string(cls, mission: str) -> "PuzzleGrid":
        """Build from an 81-character string such as "530070000600...", 0 or . for empty."""
        if len(mission) != SIZE * SIZE:
            raise StructuralValidationError(
                f"Expected {SIZE * SIZE} characters, got {len(mission)}"
            )
        values = [0 if ch == "." else int(ch) for ch in mission]
        return cls.from_rows(values[i:i + SIZE] for i in range(0, len(values), SIZE))

    def to_string(self) -> str:
        return "".join(str(v) for row in self.rows for v in row)

    def cell(self, r: int, c: int) -> int:
        return self.rows[r][c]

    def empty_cells(self) -> List[Tuple[int, int]]:
        return [(r, c) for r, row in enumerate(self.rows) for c, v in enumerate(row) if v == 0]

    def __iter__(self) -> Iterator[Tuple[int, ...]]:
        return iter(self.rows)
