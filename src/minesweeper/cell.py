"""
Cell module for Minesweeper game.

Holds the per-cell overlay the session mutates while the game is played.
The static content of a cell (mine or number) lives in the board layout.
"""
from dataclasses import dataclass


# ============================================================================
# Cell State Data Class
# ============================================================================

@dataclass
class CellState:
    """
    Player-visible state of a single cell.

    Attributes:
        opened: Whether the cell has been opened.
        exploded: Whether this is the mine that lost the game.
    """

    opened: bool = False
    exploded: bool = False

    def open(self) -> bool:
        """
        Open this cell.

        Returns:
            True if the cell was newly opened, False if already open.
        """
        if self.opened:
            return False
        self.opened = True
        return True

    def explode(self) -> None:
        """Open this cell as the detonated mine."""
        self.opened = True
        self.exploded = True

    def copy(self) -> "CellState":
        """Detached copy for read-only consumers."""
        return CellState(opened=self.opened, exploded=self.exploded)
