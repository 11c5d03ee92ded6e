"""
Unit tests for the Gymnasium environment wrapper.
"""
import pytest
import numpy as np
from minesweeper import BoardConfig, MinesweeperEnv, render_observation


@pytest.fixture
def env() -> MinesweeperEnv:
    """Beginner environment rendering to text."""
    return MinesweeperEnv(render_mode="ansi")


class TestEnvironmentSpaces:
    """Test observation and action spaces."""

    def test_spaces_match_board(self) -> None:
        """Spaces follow the configured board size."""
        env = MinesweeperEnv(BoardConfig(4, 6, 5))
        assert env.observation_space.shape == (4, 6)
        assert env.action_space.n == 24

    def test_reset_observation_all_hidden(self, env: MinesweeperEnv) -> None:
        """A fresh episode shows only unopened cells."""
        obs, info = env.reset(seed=0)
        assert np.all(obs == -1)
        assert env.observation_space.contains(obs)
        assert info["game_state"] == "NOT_STARTED"
        assert info["remaining_safe"] == 71


class TestEnvironmentStep:
    """Test stepping through a game."""

    def test_first_step_is_safe(self, env: MinesweeperEnv) -> None:
        """The first action never hits a mine."""
        for seed in range(20):
            env.reset(seed=seed)
            _, reward, _, _, info = env.step(40)
            assert reward > 0
            assert info["game_state"] in ("RUNNING", "WON")

    def test_same_seed_same_board(self, env: MinesweeperEnv) -> None:
        """Seeding reset reproduces mine placement."""
        env.reset(seed=5)
        env.step(0)
        first = env.session.layout_snapshot()
        env.reset(seed=5)
        env.step(0)
        assert np.array_equal(first, env.session.layout_snapshot())

    def test_action_mask_excludes_opened(self, env: MinesweeperEnv) -> None:
        """Opened cells are masked out."""
        env.reset(seed=3)
        env.step(0)
        mask = env.get_action_mask()
        assert mask.dtype == np.int8
        assert mask[0] == 0
        assert mask.sum() == len(env.session.get_valid_actions())

    def test_random_masked_play_terminates(self) -> None:
        """Masked random play always ends in a win or a loss."""
        env = MinesweeperEnv(BoardConfig(5, 5, 4))
        env.action_space.seed(0)
        for seed in range(10):
            env.reset(seed=seed)
            terminated = False
            steps = 0
            while not terminated:
                action = env.action_space.sample(mask=env.get_action_mask())
                _, reward, terminated, truncated, info = env.step(action)
                steps += 1
                assert steps <= 25
            assert info["game_state"] in ("WON", "LOST")
            assert reward in (10.0, -10.0)

    def test_repeated_blank_cell_is_penalised(self, scripted_rng) -> None:
        """Acting on an opened blank cell changes nothing."""
        env = MinesweeperEnv(BoardConfig(1, 7, 2))
        env.reset(seed=0)
        env.session.rng = scripted_rng([(0, 0), (0, 4)])
        env.session.reset()

        _, reward, terminated, _, info = env.step(2)
        assert reward == 1.0
        assert terminated is False
        assert info["revealed"] == 3

        _, reward, terminated, _, info = env.step(2)
        assert reward == pytest.approx(-0.1)
        assert info["revealed"] == 3

    def test_stepping_on_mine_loses(self, scripted_rng) -> None:
        """Hitting a mine ends the episode with a penalty."""
        env = MinesweeperEnv(BoardConfig(1, 7, 2))
        env.reset(seed=0)
        env.session.rng = scripted_rng([(0, 0), (0, 4)])
        env.session.reset()
        env.step(2)

        obs, reward, terminated, _, info = env.step(4)
        assert reward == -10.0
        assert terminated is True
        assert info["game_state"] == "LOST"
        assert obs[0, 4] == 10
        assert obs[0, 0] == 9


class TestRender:
    """Test text rendering."""

    def test_render_ansi_returns_grid(self, env: MinesweeperEnv) -> None:
        """ANSI render produces one line per row."""
        env.reset(seed=1)
        text = env.render()
        assert len(text.splitlines()) == 9
        assert set(text.replace(" ", "").replace("\n", "")) == {"."}

    def test_render_symbols(self) -> None:
        """Each observation value maps to its symbol."""
        obs = np.array([[-1, 0, 3], [9, 10, 8]], dtype=np.int8)
        assert render_observation(obs) == ".   3\n* X 8"
