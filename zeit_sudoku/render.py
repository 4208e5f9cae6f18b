from .grid import BOX, SIZE, PuzzleGrid


def render(grid: PuzzleGrid, empty: str = ".") -> str:
    """Draw the grid as text with box separators, e.g. for log output."""
    lines = []
    for r, row in enumerate(grid):
        parts = []
        for c, v in enumerate(row):
            parts.append(str(v) if v else empty)
            if (c + 1) % BOX == 0 and c + 1 < SIZE:
                parts.append("|")
        lines.append(" ".join(parts))

        if (r + 1) % BOX == 0 and r + 1 < SIZE:
            lines.append("-" * (2 * SIZE + 2 * (SIZE // BOX - 1) - 1))
    return "\n".join(lines)
