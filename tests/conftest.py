"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Iterable, Tuple

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import BoardConfig, BoardEngine, GameSession


# ============================================================================
# Random Source Helpers
# ============================================================================

class ScriptedRng:
    """Random source that draws from a fixed list of coordinates."""

    def __init__(self, draws: Iterable[Tuple[int, int]]) -> None:
        self._values = iter([value for draw in draws for value in draw])
        self.calls = 0

    def integers(self, low: int, high: int = None) -> int:
        self.calls += 1
        return next(self._values)


def session_with_mines(
    rows: int, cols: int, mines: Iterable[Tuple[int, int]]
) -> GameSession:
    """Session whose first reveal places mines at the given positions."""
    mines = list(mines)
    return GameSession(
        BoardConfig(rows, cols, len(mines)), rng=ScriptedRng(mines)
    )


@pytest.fixture
def scripted_rng():
    """Factory for scripted random sources."""
    return ScriptedRng


@pytest.fixture
def mined_session():
    """Factory for sessions with fixed mine positions."""
    return session_with_mines


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_engine() -> BoardEngine:
    """Create a default 9x9 board with 10 mines."""
    return BoardEngine(rng=np.random.default_rng(1234))


@pytest.fixture
def small_engine() -> BoardEngine:
    """Create a small 3x3 board with 1 mine."""
    return BoardEngine(BoardConfig(3, 3, 1), rng=np.random.default_rng(7))


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def default_session() -> GameSession:
    """Create a default 9x9 session with 10 mines."""
    return GameSession(rng=np.random.default_rng(42))


@pytest.fixture
def corner_mine_session() -> GameSession:
    """3x3 session with its single mine at (0, 0)."""
    return session_with_mines(3, 3, [(0, 0)])


@pytest.fixture
def empty_session() -> GameSession:
    """Create a session with no mines for cascade testing."""
    return GameSession(BoardConfig(5, 5, 0))


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
