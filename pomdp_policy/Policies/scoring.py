"""Belief scoring and tie-breaking over a horizon level.

Every node of a level is scored with dot(alpha, belief). Nodes within a
tolerance of the best score form the winning set, which both the
probability query and sampling use: each winner carries an equal share of
probability mass, given to its action (or spread over all actions for a
uniform node).
"""

from typing import Tuple

import numpy as np

from ..Models.policy_graph import HorizonLevel


def score_nodes(level: HorizonLevel, belief: np.ndarray) -> np.ndarray:
    """Return dot(alpha, belief) for every node of the level."""
    return level.alphas @ belief


def winning_set(level: HorizonLevel, belief: np.ndarray, tol: float) -> np.ndarray:
    """Return ids of the nodes whose score is within tol of the maximum.

    Never empty, since a level always holds at least one node.
    """
    scores = score_nodes(level, belief)
    best = scores.max()
    return np.flatnonzero(scores >= best - tol)


def action_distribution(level: HorizonLevel, belief: np.ndarray, A: int, tol: float) -> np.ndarray:
    """Return the length-A action distribution induced by the winning set."""
    winners = winning_set(level, belief, tol)
    uniform = level.uniform[winners]

    probs = np.zeros(A, dtype=float)
    np.add.at(probs, level.actions[winners[~uniform]], 1.0)
    probs += np.count_nonzero(uniform) / A
    return probs / len(winners)


def sample_winner(
    level: HorizonLevel,
    belief: np.ndarray,
    A: int,
    tol: float,
    rng: np.random.Generator,
) -> Tuple[int, int]:
    """Draw a node uniformly from the winning set.

    Returns
    -------
    tuple
        (action, node_id)
    """
    winners = winning_set(level, belief, tol)
    node_id = int(winners[rng.integers(len(winners))])
    return node_action(level, node_id, A, rng), node_id


def node_action(level: HorizonLevel, node_id: int, A: int, rng: np.random.Generator) -> int:
    """Action of a node, drawn uniformly if the node is tied among all actions."""
    if level.uniform[node_id]:
        return int(rng.integers(A))
    return int(level.actions[node_id])
