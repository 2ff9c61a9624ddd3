"""Gymnasium environments for Clusters."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the pairwise merge environment on the 10x10 sample puzzle
register(
    id="Clusters-10x10-v0",
    entry_point="clusters_puzzle.env.clusters_env:ClustersEnv",
)

__all__ = ["Clusters-10x10-v0"]
