"""
Board module for Minesweeper game.

Implements the static side of a board: the mine layout, lazy mine
placement that keeps one cell safe, and adjacency counts.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple

import numpy as np

from .errors import InvalidDimensionsError, OutOfBoundsError


logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

# Layout value of a mine cell. Never a valid neighbour count (max 8).
MINE = 9

# Moore neighbourhood, row-major. Fixes flood-fill visitation order.
NEIGHBOR_OFFSETS: Tuple[Position, ...] = tuple(
    (delta_row, delta_col)
    for delta_row in (-1, 0, 1)
    for delta_col in (-1, 0, 1)
    if (delta_row, delta_col) != (0, 0)
)


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Total mines to place.
    """

    rows: int = 9
    cols: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise InvalidDimensionsError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise InvalidDimensionsError("Number of mines cannot be negative")
        max_mines = self.rows * self.cols - 1
        if self.num_mines > max_mines:
            raise InvalidDimensionsError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        """Number of cells without a mine."""
        return self.total_cells - self.num_mines


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(16, 30, 99)

DIFFICULTIES: Dict[str, BoardConfig] = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


# ============================================================================
# Board Engine
# ============================================================================

class BoardEngine:
    """
    Owner of the mine layout.

    The layout is a ``rows x cols`` integer array where each entry is
    either ``MINE`` or the number of mines among the eight neighbours.
    It starts all zero and is filled once the first reveal is known.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Create an empty board.

        Args:
            config: Board configuration (default: beginner).
            rng: Random source for mine placement. Anything with a numpy
                style ``integers(low, high)`` method works.
        """
        self.config = config or BoardConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self._layout = self.create_empty_board(
            self.config.rows, self.config.cols, self.config.num_mines
        )
        self._mine_positions: Tuple[Position, ...] = ()
        self._populated = False

    # ========================================================================
    # Layout Construction (Low-level)
    # ========================================================================

    @staticmethod
    def create_empty_board(rows: int, cols: int, num_mines: int) -> np.ndarray:
        """
        Build an all-zero layout.

        Raises:
            InvalidDimensionsError: If the size or mine count is unplayable.
        """
        BoardConfig(rows, cols, num_mines)
        return np.zeros((rows, cols), dtype=np.int8)

    def populate(self, safe_cell: Position) -> np.ndarray:
        """
        Place mines at random, keeping ``safe_cell`` mine-free.

        Positions are drawn by rejection sampling: a row and a column are
        drawn, and the pair is rejected if it is the safe cell or already
        holds a mine.

        Args:
            safe_cell: (row, col) that must not receive a mine.

        Returns:
            Read-only snapshot of the populated layout.

        Raises:
            OutOfBoundsError: If ``safe_cell`` is outside the grid.
        """
        row, col = safe_cell
        self._check_position(row, col)
        if self._populated:
            logger.warning("Board already populated, replacing its mines")
        positions = self._generate_mine_positions((row, col))
        return self.place_mines(positions)

    def _generate_mine_positions(self, safe_cell: Position) -> List[Position]:
        """Draw distinct mine positions, skipping the safe cell."""
        chosen: List[Position] = []
        taken: Set[Position] = set()
        while len(chosen) < self.config.num_mines:
            row = int(self.rng.integers(0, self.config.rows))
            col = int(self.rng.integers(0, self.config.cols))
            position = (row, col)
            if position == safe_cell or position in taken:
                continue
            taken.add(position)
            chosen.append(position)
        return chosen

    def place_mines(self, positions: Iterable[Position]) -> np.ndarray:
        """
        Insert mines at fixed positions and recompute adjacency counts.

        Any previous mines are cleared first.

        Args:
            positions: (row, col) coordinates of every mine.

        Returns:
            Read-only snapshot of the populated layout.

        Raises:
            InvalidDimensionsError: If the number of distinct positions
                differs from the configured mine count.
            OutOfBoundsError: If a position is outside the grid.
        """
        unique = list(dict.fromkeys((int(r), int(c)) for r, c in positions))
        if len(unique) != self.config.num_mines:
            raise InvalidDimensionsError(
                f"Expected {self.config.num_mines} mines, got {len(unique)}"
            )
        for row, col in unique:
            self._check_position(row, col)

        self._layout = self.create_empty_board(
            self.config.rows, self.config.cols, self.config.num_mines
        )
        for row, col in unique:
            self._layout[row, col] = MINE
        self._calculate_adjacent_mines()

        self._mine_positions = tuple(unique)
        self._populated = True
        logger.debug(
            "Placed %d mines on %dx%d board",
            len(unique), self.config.rows, self.config.cols,
        )
        return self.snapshot()

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all non-mine cells."""
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                if self._layout[row, col] != MINE:
                    self._layout[row, col] = self._count_adjacent_mines(
                        row, col
                    )

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbor_positions(row, col):
            if self._layout[neighbor_row, neighbor_col] == MINE:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities
    # ========================================================================

    @staticmethod
    def neighbors_of(row: int, col: int) -> Tuple[Position, ...]:
        """
        Offsets of the eight Moore neighbours of a cell.

        The offsets do not depend on the cell; bounds are not applied here.
        """
        return NEIGHBOR_OFFSETS

    def neighbor_positions(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighbouring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of in-bounds (row, col) tuples in offset order.
        """
        neighbors = []
        for delta_row, delta_col in self.neighbors_of(row, col):
            new_row = row + delta_row
            new_col = col + delta_col
            if self.in_bounds(new_row, new_col):
                neighbors.append((new_row, new_col))
        return neighbors

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    def _check_position(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBoundsError(
                row, col, self.config.rows, self.config.cols
            )

    # ========================================================================
    # Queries
    # ========================================================================

    def value_at(self, row: int, col: int) -> int:
        """
        Layout value of a cell: ``MINE`` or its neighbour mine count.

        Raises:
            OutOfBoundsError: If the position is outside the grid.
        """
        self._check_position(row, col)
        return int(self._layout[row, col])

    def is_mine(self, row: int, col: int) -> bool:
        """Check whether a cell holds a mine."""
        return self.value_at(row, col) == MINE

    @property
    def is_populated(self) -> bool:
        """Whether mines have been placed."""
        return self._populated

    @property
    def mine_positions(self) -> Tuple[Position, ...]:
        """Mine coordinates in placement order."""
        return self._mine_positions

    def snapshot(self) -> np.ndarray:
        """Read-only copy of the current layout."""
        layout = self._layout.copy()
        layout.flags.writeable = False
        return layout
