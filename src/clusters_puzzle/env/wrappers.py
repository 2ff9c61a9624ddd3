from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .clusters_env import _compute_action_mask


class FlattenPairActionWrapper(gym.ActionWrapper):
    """Flattens MultiDiscrete (first, second) -> Discrete(N * N) for PPO.

    Also exposes `get_action_mask()` returning a 1D boolean mask of shape (N * N,).
    Order: first, second (C-order flattening).
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        assert isinstance(env.action_space, spaces.MultiDiscrete)
        first, second = map(int, env.action_space.nvec)
        assert first == second, "Expected square pair space"
        self.size = first
        self.n = int(self.size * self.size)
        self.action_space = spaces.Discrete(self.n)

    def _unflatten(self, idx: int) -> tuple[int, int]:
        return int(idx // self.size), int(idx % self.size)

    def action(self, action: int):  # type: ignore[override]
        return np.array(self._unflatten(int(action)), dtype=np.int64)

    def get_action_mask(self) -> np.ndarray:
        mask2d = _compute_action_mask(self.env.unwrapped.game)
        return mask2d.reshape(-1)


class ResampleInvalidActionWrapper(gym.Wrapper):
    """Replaces an invalid flattened pair with a valid one before stepping.

    The replacement keeps the chosen first square when that square still has
    a valid partner, so only the second pick is resampled. Otherwise a pair is
    drawn uniformly from every valid one. Lets vanilla PPO train without
    action masking.
    """

    def choose_valid(self, action: int) -> int:
        mask = self.get_action_mask()
        action = int(action)
        if 0 <= action < mask.shape[0] and bool(mask[action]):
            return action
        valid_idxs = np.flatnonzero(mask)
        if valid_idxs.size == 0:
            return action
        size = int(round(np.sqrt(mask.shape[0])))
        first = action // size
        same_first = valid_idxs[valid_idxs // size == first]
        if same_first.size > 0:
            valid_idxs = same_first
        return int(self.np_random.choice(valid_idxs))

    def step(self, action):  # type: ignore[override]
        if isinstance(self.action_space, spaces.Discrete) and hasattr(self.env, "get_action_mask"):
            action = self.choose_valid(action)
        return self.env.step(action)

    def get_action_mask(self) -> np.ndarray:
        if hasattr(self.env, "get_action_mask"):
            return getattr(self.env, "get_action_mask")()
        raise AttributeError("Underlying env does not provide get_action_mask")

