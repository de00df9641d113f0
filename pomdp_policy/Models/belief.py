"""Belief vectors over a finite state space."""

import numpy as np

from ..errors import InvalidBelief


def uniform_belief(n: int) -> np.ndarray:
    """Return the uniform belief over n states."""
    return np.ones(n) / n


def point_belief(n: int, state: int) -> np.ndarray:
    """Return the belief putting all mass on a single state."""
    b = np.zeros(n)
    b[state] = 1.0
    return b


def validate_belief(belief, n: int, tol: float = 1e-6) -> np.ndarray:
    """Check that belief is a length-n probability vector and return it as an array.

    Beliefs are never renormalized: a vector that is off the simplex is a
    bug in whoever tracks it.

    Raises
    ------
    InvalidBelief
        If the length is not n, an entry is negative or not finite, or the
        entries do not sum to 1 within tol.
    """
    b = np.asarray(belief, dtype=float)
    if b.shape != (n,):
        raise InvalidBelief(f"Belief must have shape ({n},), got {b.shape}")
    if not np.all(np.isfinite(b)):
        raise InvalidBelief("Belief contains non-finite entries")
    if np.any(b < -tol):
        raise InvalidBelief(f"Belief has negative entries: min {b.min()}")
    total = float(b.sum())
    if abs(total - 1.0) > tol:
        raise InvalidBelief(f"Belief must sum to 1, got {total}")
    return b
