"""Capability contract shared by every POMDP policy representation."""

from abc import ABC, abstractmethod

import numpy as np


class PolicyInterface(ABC):
    """Base class for policies over beliefs.

    Subclasses must implement:
    - sample_action(belief): Draw an action for the belief
    - get_action_probability(belief, action): Probability of the action under the belief
    """

    def __init__(self, S: int, A: int):
        self.S = S
        self.A = A

    @abstractmethod
    def sample_action(self, belief: np.ndarray) -> int:
        """Choose a random action for the belief, following the policy distribution."""
        pass

    @abstractmethod
    def get_action_probability(self, belief: np.ndarray, action: int) -> float:
        """Return the probability of taking action under belief."""
        pass

    def get_state_size(self) -> int:
        return self.S

    def get_action_size(self) -> int:
        return self.A
