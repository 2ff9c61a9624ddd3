from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from clusters_puzzle.data import SAMPLE_PUZZLE
from clusters_puzzle.game import ClustersGame, GameConfig, GridSquare, Puzzle, calculate_layout, get_unsolved_squares


def _compute_action_mask(game: ClustersGame) -> np.ndarray:
    """Boolean (n, n) mask of grid-index pairs that select two distinct unsolved squares."""
    n = game.rules.total_items
    unsolved = np.zeros((n,), dtype=np.bool_)
    for idx, square in enumerate(game.state.grid[:n]):
        unsolved[idx] = not square.is_solved
    mask = np.outer(unsolved, unsolved)
    np.fill_diagonal(mask, False)
    return mask


def _shade_for_size(size: int, max_size: int) -> Tuple[int, int, int]:
    t = size / max(1, max_size)
    return (int(45 + 150 * t), int(58 + 90 * t), int(90 + 60 * t))


class ClustersEnv(gym.Env):
    """Pairwise merge environment over the Clusters grid.

    An action is a pair of indices into the current grid order. Valid pairs
    are fed to the game as two consecutive selections, so the first index
    names the square that survives a merge.
    """

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 30}

    def __init__(self, puzzle: Optional[Puzzle] = None, config: Optional[GameConfig] = None,
                 render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 invalid_action_penalty: float = -0.1,
                 step_penalty: float = 0.0,
                 max_steps: int = 2000) -> None:
        super().__init__()
        self.game = ClustersGame(puzzle or SAMPLE_PUZZLE, config)
        self.render_mode = render_mode

        self.invalid_action_penalty = float(invalid_action_penalty)
        self.step_penalty = float(step_penalty)
        self.max_steps = int(max_steps)
        self.reward_weights: Dict[str, float] = {
            "merge": 1.0,      # per successful merge
            "solve": 5.0,      # per category solved
            "win": 20.0,       # all categories solved
            "mistake": 1.0,    # subtracted per cross-category attempt
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        n = self.game.rules.total_items
        per_category = self.game.rules.items_per_category
        categories = self.game.rules.categories_per_puzzle

        # Observation: item count and solved flag per grid slot, 0-padded
        self.observation_space = spaces.Dict(
            {
                "sizes": spaces.Box(low=0, high=per_category, shape=(n,), dtype=np.int8),
                "solved": spaces.Box(low=0, high=1, shape=(n,), dtype=np.int8),
                "solved_count": spaces.Discrete(categories + 1),
                "mistakes": spaces.Discrete(self.max_steps + 1),
            }
        )

        # Action: (first grid index, second grid index)
        self.action_space = spaces.MultiDiscrete((n, n))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        n = self.game.rules.total_items
        state = self.game.state
        sizes = np.zeros((n,), dtype=np.int8)
        solved = np.zeros((n,), dtype=np.int8)
        for idx, square in enumerate(state.grid[:n]):
            sizes[idx] = square.size
            solved[idx] = int(square.is_solved)
        return {
            "sizes": sizes,
            "solved": solved,
            "solved_count": len(state.solved_category_ids),
            "mistakes": min(state.mistakes, self.max_steps),
        }

    def _get_info(self) -> Dict[str, Any]:
        mask = _compute_action_mask(self.game)
        valid_actions: List[Tuple[int, int]] = [(int(i), int(j)) for i, j in np.argwhere(mask)]
        state = self.game.state
        return {
            "action_mask": mask,
            "valid_actions": valid_actions,
            "mistakes": state.mistakes,
            "solved_count": len(state.solved_category_ids),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self.game.reset()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def _square_at(self, idx: int) -> Optional[GridSquare]:
        grid = self.game.state.grid
        if 0 <= idx < len(grid):
            return grid[idx]
        return None

    def step(self, action: np.ndarray | Tuple[int, int]):
        first_idx, second_idx = map(int, action)

        first = self._square_at(first_idx)
        second = self._square_at(second_idx)
        valid = (
            first is not None
            and second is not None
            and first_idx != second_idx
            and not first.is_solved
            and not second.is_solved
        )

        reward_components: Dict[str, float] = {}
        if valid:
            self.game.clear_selection()
            self.game.select_square(first.id)
            result = self.game.select_square(second.id)
            if result is not None and result.success:
                reward_components["merge"] = self.reward_weights["merge"]
                if result.solved_category is not None:
                    reward_components["solve"] = self.reward_weights["solve"]
                if self.game.state.is_won:
                    reward_components["win"] = self.reward_weights["win"]
            else:
                reward_components["mistake"] = -self.reward_weights["mistake"]
        else:
            reward_components["invalid"] = self.invalid_action_penalty

        reward_components["step"] = self.step_penalty
        self._steps += 1
        terminated = bool(self.game.state.is_won)
        truncated = (not terminated) and self._steps >= self.max_steps

        reward = float(sum(reward_components.values()))
        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            width = 250
            row_height = 12
            max_rows = self.game.rules.total_items // self.game.config.target_items_per_row
            img = np.full((max_rows * row_height, width, 3), 30, dtype=np.uint8)
            per_category = self.game.rules.items_per_category
            x = 0.0
            last_row = -1
            for item in calculate_layout(get_unsolved_squares(self.game.state.grid)):
                if item.row_index != last_row:
                    x = 0.0
                    last_row = item.row_index
                if item.row_index >= max_rows:
                    break
                w = item.width_fraction * width
                x0, x1 = int(round(x)), int(round(x + w))
                y0 = item.row_index * row_height
                img[y0 + 1 : y0 + row_height - 1, x0 + 1 : max(x0 + 1, x1 - 1), :] = _shade_for_size(
                    item.square.size, per_category
                )
                x += w
            return img
        # human rendering lives in clusters_puzzle.visualization
        return None

    def close(self) -> None:
        pass
