"""Errors raised at the policy call boundary."""

from typing import Optional


class InvalidBelief(ValueError):
    """Belief vector is off the probability simplex or has the wrong length."""


class InvalidContinuation(ValueError):
    """Continuation handle does not belong to the level being continued from.

    Raised when a handle is reused, a step is skipped, or the id is out of
    range, instead of guessing a fallback action.
    """

    def __init__(self, message: str, horizon: Optional[int] = None, node_id: Optional[int] = None):
        super().__init__(message)
        self.horizon = horizon
        self.node_id = node_id
