"""
Exceptions raised by the Minesweeper engine.
"""


class MinesweeperError(Exception):
    """Base class for all engine errors."""


class InvalidDimensionsError(MinesweeperError, ValueError):
    """Board size or mine count is not playable."""


class OutOfBoundsError(MinesweeperError, IndexError):
    """A coordinate lies outside the grid."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(
            f"Position ({row}, {col}) is outside the {rows}x{cols} board"
        )
        self.row = row
        self.col = col
