"""Tabular Partially Observable Markov Decision Process used for simulation."""

from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np


@dataclass
class TabularPOMDP:
    """
    Standard POMDP over integer states, actions and observations.

    T : (S, A, S) array, T[s, a, s'] = P(s' | s, a)
    Z : (A, S, O) array, Z[a, s', o] = P(o | s', a)
    R : (S, A) array of immediate rewards
    discount : discount factor in (0, 1]
    """
    T: np.ndarray
    Z: np.ndarray
    R: np.ndarray
    discount: float = 1.0

    def __post_init__(self):
        self.T = np.asarray(self.T, dtype=float)
        self.Z = np.asarray(self.Z, dtype=float)
        self.R = np.asarray(self.R, dtype=float)

        if self.T.ndim != 3 or self.T.shape[0] != self.T.shape[2]:
            raise ValueError(f"T must have shape (S, A, S), got {self.T.shape}")
        S, A, _ = self.T.shape
        if self.Z.ndim != 3 or self.Z.shape[:2] != (A, S):
            raise ValueError(f"Z must have shape ({A}, {S}, O), got {self.Z.shape}")
        if self.R.shape != (S, A):
            raise ValueError(f"R must have shape ({S}, {A}), got {self.R.shape}")
        if not np.allclose(self.T.sum(axis=2), 1.0) or np.any(self.T < 0):
            raise ValueError("Each row T[s, a, :] must be a probability distribution")
        if not np.allclose(self.Z.sum(axis=2), 1.0) or np.any(self.Z < 0):
            raise ValueError("Each row Z[a, s', :] must be a probability distribution")
        if not 0.0 < self.discount <= 1.0:
            raise ValueError(f"discount must be in (0, 1], got {self.discount}")

    @property
    def S(self) -> int:
        return self.T.shape[0]

    @property
    def A(self) -> int:
        return self.T.shape[1]

    @property
    def O(self) -> int:
        return self.Z.shape[2]

    def sample_state(self, belief: np.ndarray, rng: np.random.Generator) -> int:
        """Draw a state from a belief."""
        p = np.clip(np.asarray(belief, dtype=float), 0.0, None)
        return int(rng.choice(self.S, p=p / p.sum()))

    def evolve(self, state: int, action: int, rng: np.random.Generator) -> Tuple[int, int, float]:
        """Take action in state.

        Returns
        -------
        tuple
            (next_state, observation, reward)
        """
        reward = float(self.R[state, action])
        row = self.T[state, action]
        next_state = int(rng.choice(self.S, p=row / row.sum()))
        row = self.Z[action, next_state]
        observation = int(rng.choice(self.O, p=row / row.sum()))
        return next_state, observation, reward


def observation_model_from_data(
    S: int,
    A: int,
    O: int,
    data: Iterable[Tuple[int, int, int]]
) -> np.ndarray:
    """Estimate Z[a, s', o] from (action, next_state, observation) samples.

    Pairs (a, s') never seen in the data get a uniform distribution.
    """
    counts = np.zeros((A, S, O), dtype=float)
    for a, s_next, o in data:
        counts[a, s_next, o] += 1

    totals = counts.sum(axis=2, keepdims=True)
    with np.errstate(invalid="ignore", divide="ignore"):
        Z = np.where(totals > 0, counts / totals, 1.0 / O)
    return Z
