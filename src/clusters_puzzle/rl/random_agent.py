from __future__ import annotations

import argparse
import logging
import random
from typing import Dict, List, Optional

import numpy as np
import gymnasium as gym

import clusters_puzzle.env  # noqa: F401


logger = logging.getLogger(__name__)


def run_random(episodes: int = 5, seed: Optional[int] = None, max_steps: int = 20000) -> Dict[str, float]:
    """Play episodes by picking uniformly among valid pairs.

    Returns averages over the finished episodes.
    """
    rng = random.Random(seed)
    env = gym.make("Clusters-10x10-v0", max_steps=max_steps)
    mistakes: List[int] = []
    steps: List[int] = []
    rewards: List[float] = []
    wins = 0
    try:
        for episode in range(episodes):
            obs, info = env.reset(seed=None if seed is None else seed + episode)
            total_reward = 0.0
            while True:
                valid = info.get("valid_actions", [])
                if valid:
                    action = rng.choice(valid)
                else:
                    action = env.action_space.sample()
                obs, reward, terminated, truncated, info = env.step(action)
                total_reward += float(reward)
                if terminated or truncated:
                    break
            wins += int(terminated)
            mistakes.append(int(info["mistakes"]))
            steps.append(int(info["steps"]))
            rewards.append(total_reward)
            logger.info(
                f"Episode {episode}: {'solved' if terminated else 'truncated'} after {info['steps']} steps, "
                f"{info['mistakes']} mistakes, reward {total_reward:.2f}"
            )
    finally:
        env.close()

    return {
        "episodes": float(episodes),
        "wins": float(wins),
        "avg_mistakes": float(np.mean(mistakes)) if mistakes else 0.0,
        "avg_steps": float(np.mean(steps)) if steps else 0.0,
        "avg_reward": float(np.mean(rewards)) if rewards else 0.0,
    }


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Random valid-pair agent for Clusters")
    p.add_argument("--episodes", type=int, default=5)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--max_steps", type=int, default=20000)
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    stats = run_random(episodes=args.episodes, seed=args.seed, max_steps=args.max_steps)
    print(f"Random agent: {stats['wins']:.0f}/{stats['episodes']:.0f} solved, "
          f"avg mistakes {stats['avg_mistakes']:.1f}, avg steps {stats['avg_steps']:.1f}")


if __name__ == "__main__":  # pragma: no cover
    main()
