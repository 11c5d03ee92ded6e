"""
Game session module for Minesweeper.

Implements the reveal state machine on top of a BoardEngine: first-click
safe population, single cell opens, chording, flood-fill of blank regions
and win/lose detection.
"""
import logging
from collections import deque
from enum import Enum, auto
from typing import Deque, List, Optional, Set

import numpy as np

from .board import MINE, BoardConfig, BoardEngine, Position
from .cell import CellState
from .errors import OutOfBoundsError
from .events import SessionEvents


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of the game."""

    NOT_STARTED = auto()
    RUNNING = auto()
    WON = auto()
    LOST = auto()


TERMINAL_STATUSES = frozenset({GameStatus.WON, GameStatus.LOST})

# Observation values (0-8 are opened numbers)
OBS_HIDDEN = -1
OBS_MINE = 9
OBS_EXPLODED = 10


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """
    One game of Minesweeper.

    The session owns which cells are open and the game status; the
    BoardEngine it holds owns the mines. Mines are placed on the first
    reveal so that the first clicked cell is never a mine.

    Observers subscribe through ``session.events``.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Initialize the session with an empty board.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            rng: Random source for mine placement, shared across resets.
        """
        self.config = config or BoardConfig()
        self.rng = rng
        self.events = SessionEvents()
        self._status = GameStatus.NOT_STARTED
        self.reset()

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def reset(
        self,
        rows: Optional[int] = None,
        cols: Optional[int] = None,
        num_mines: Optional[int] = None,
    ) -> None:
        """
        Start a new game, optionally with a new board size.

        Omitted arguments keep their current value. If the new size is
        invalid the current game is left as it was.

        Raises:
            InvalidDimensionsError: If the board cannot be built.
        """
        config = BoardConfig(
            self.config.rows if rows is None else rows,
            self.config.cols if cols is None else cols,
            self.config.num_mines if num_mines is None else num_mines,
        )
        board = BoardEngine(config, self.rng)

        self.config = config
        self._board = board
        self._cells: List[List[CellState]] = [
            [CellState() for _ in range(config.cols)]
            for _ in range(config.rows)
        ]
        self._opened_count = 0
        self._remaining = config.safe_cells
        logger.debug(
            "New %dx%d game with %d mines",
            config.rows, config.cols, config.num_mines,
        )

        self.events.board_changed.publish(board.snapshot())
        self._status = GameStatus.NOT_STARTED
        self.events.status_changed.publish(self._status)
        self.events.remaining_safe_cells_changed.publish(self._remaining)

    # ========================================================================
    # Game Actions
    # ========================================================================

    def reveal(self, row: int, col: int) -> GameStatus:
        """
        Reveal a cell at the given position.

        On the first reveal, mines are placed avoiding this cell. Revealing
        an already opened number cell opens its unopened neighbours (chord).
        Revealing after the game has ended does nothing.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            Game status after the reveal.

        Raises:
            OutOfBoundsError: If the position is outside the grid.
        """
        self._check_position(row, col)
        if self._status in TERMINAL_STATUSES:
            return self._status

        if self._status == GameStatus.NOT_STARTED:
            self._handle_first_reveal(row, col)

        if self._cells[row][col].opened:
            self._chord(row, col)
        else:
            self._open_cell(row, col)

        self._check_win_condition()
        return self._status

    def _handle_first_reveal(self, row: int, col: int) -> None:
        """Place mines around the first revealed cell."""
        layout = self._board.populate((row, col))
        self.events.board_changed.publish(layout)
        self._set_status(GameStatus.RUNNING)

    def _open_cell(self, row: int, col: int) -> None:
        """Open an unopened cell and handle consequences."""
        if self._board.is_mine(row, col):
            self._cells[row][col].explode()
            self._set_status(GameStatus.LOST)
            return

        if self._board.value_at(row, col) == 0:
            opened = self._flood_fill(row, col)
        else:
            opened = 1 if self._cells[row][col].open() else 0
        self._decrease_remaining(opened)

    def _chord(self, row: int, col: int) -> None:
        """
        Open every unopened neighbour of an opened number cell.

        The first mine found in neighbour order explodes; the remaining
        safe neighbours are still opened before the game is lost.
        """
        if self._board.value_at(row, col) == 0:
            return

        exploded: Optional[Position] = None
        for neighbor_row, neighbor_col in self._board.neighbor_positions(
            row, col
        ):
            if self._cells[neighbor_row][neighbor_col].opened:
                continue
            if self._board.is_mine(neighbor_row, neighbor_col):
                if exploded is None:
                    exploded = (neighbor_row, neighbor_col)
                    self._cells[neighbor_row][neighbor_col].explode()
                continue
            self._open_cell(neighbor_row, neighbor_col)

        if exploded is not None:
            self._set_status(GameStatus.LOST)

    def _flood_fill(self, row: int, col: int) -> int:
        """
        Open the blank region containing a zero cell and its number border.

        Returns:
            Number of cells newly opened.
        """
        queue: Deque[Position] = deque([(row, col)])
        visited: Set[Position] = {(row, col)}
        opened = 0

        while queue:
            current_row, current_col = queue.popleft()
            if self._cells[current_row][current_col].open():
                opened += 1
            for neighbor in self._board.neighbor_positions(
                current_row, current_col
            ):
                value = self._board.value_at(*neighbor)
                if value == 0:
                    if neighbor not in visited:
                        visited.add(neighbor)
                        queue.append(neighbor)
                elif value != MINE:
                    neighbor_row, neighbor_col = neighbor
                    if self._cells[neighbor_row][neighbor_col].open():
                        opened += 1

        return opened

    def _decrease_remaining(self, count: int) -> None:
        if count <= 0:
            return
        self._opened_count += count
        self._remaining -= count
        self.events.remaining_safe_cells_changed.publish(self._remaining)

    def _check_win_condition(self) -> None:
        """Win once every safe cell is open."""
        if self._status == GameStatus.RUNNING and self._remaining == 0:
            self._set_status(GameStatus.WON)

    def _set_status(self, status: GameStatus) -> None:
        if status == self._status:
            return
        logger.debug("Game status %s -> %s", self._status.name, status.name)
        self._status = status
        self.events.status_changed.publish(status)

    def _check_position(self, row: int, col: int) -> None:
        if not self._board.in_bounds(row, col):
            raise OutOfBoundsError(
                row, col, self.config.rows, self.config.cols
            )

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def status(self) -> GameStatus:
        """Get current game status."""
        return self._status

    @property
    def is_playing(self) -> bool:
        """Check if the game can still take reveals."""
        return self._status not in TERMINAL_STATUSES

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._status == GameStatus.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._status == GameStatus.LOST

    @property
    def remaining_safe_cells(self) -> int:
        """Safe cells still unopened."""
        return self._remaining

    @property
    def opened_count(self) -> int:
        """Safe cells opened so far."""
        return self._opened_count

    @property
    def board(self) -> BoardEngine:
        """The mine layout owner."""
        return self._board

    def cell_state(self, row: int, col: int) -> CellState:
        """
        Copy of the state of one cell.

        Raises:
            OutOfBoundsError: If the position is outside the grid.
        """
        self._check_position(row, col)
        return self._cells[row][col].copy()

    def cell_id(self, row: int, col: int) -> int:
        """Row-major index of a cell."""
        self._check_position(row, col)
        return row * self.config.cols + col

    def layout_snapshot(self) -> np.ndarray:
        """Read-only copy of the mine layout."""
        return self._board.snapshot()

    def get_observation(self) -> np.ndarray:
        """
        Get the player-visible board as a numpy array.

        Returns:
            2D int8 array where:
                -1 = unopened
                0-8 = opened with adjacent count
                9 = mine (shown once the game is lost)
                10 = the exploded mine
        """
        layout = self._board.snapshot()
        show_mines = self.is_lost
        obs = np.full(layout.shape, OBS_HIDDEN, dtype=np.int8)
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                cell = self._cells[row][col]
                value = layout[row, col]
                if cell.exploded:
                    obs[row, col] = OBS_EXPLODED
                elif value == MINE:
                    if cell.opened or show_mines:
                        obs[row, col] = OBS_MINE
                elif cell.opened:
                    obs[row, col] = value
        return obs

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells that are still unopened.

        Returns:
            List of (row, col) positions.
        """
        actions = []
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                if not self._cells[row][col].opened:
                    actions.append((row, col))
        return actions
