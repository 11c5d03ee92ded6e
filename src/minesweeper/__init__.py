"""
Minesweeper game module.

Provides the core game engine: board layout, reveal state machine and
change notification, plus a Gymnasium wrapper.
"""
from .cell import CellState
from .board import (
    MINE,
    BoardConfig,
    BoardEngine,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    DIFFICULTIES,
)
from .errors import MinesweeperError, InvalidDimensionsError, OutOfBoundsError
from .events import EventChannel, SessionEvents
from .session import GameSession, GameStatus
from .environment import MinesweeperEnv, render_observation

__all__ = [
    "MINE",
    "CellState",
    "BoardConfig",
    "BoardEngine",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "DIFFICULTIES",
    "MinesweeperError",
    "InvalidDimensionsError",
    "OutOfBoundsError",
    "EventChannel",
    "SessionEvents",
    "GameSession",
    "GameStatus",
    "MinesweeperEnv",
    "render_observation",
]
