"""Belief-scored policies over a policy graph."""

from .policy_interface import PolicyInterface
from .config import PolicyConfig
from .policy import Policy, Continuation
from .scoring import score_nodes, winning_set, action_distribution

__all__ = [
    'PolicyInterface',
    'PolicyConfig',
    'Policy',
    'Continuation',
    'score_nodes',
    'winning_set',
    'action_distribution',
]
