import sys

from zeit_sudoku.pipeline import main

if __name__ == "__main__":
    sys.exit(main())
