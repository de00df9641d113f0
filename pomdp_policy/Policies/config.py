"""Configuration for policy sampling."""

from dataclasses import dataclass


@dataclass
class PolicyConfig:
    """Numeric tolerances used by the policy.

    Attributes
    ----------
    tie_tolerance : float
        Nodes scoring within this distance of the best score are tied
    belief_tolerance : float
        Allowed deviation of a belief's sum from 1
    validate_beliefs : bool
        Check beliefs at the call boundary (disable only for trusted callers)
    """
    tie_tolerance: float = 1e-6
    belief_tolerance: float = 1e-6
    validate_beliefs: bool = True

    def __post_init__(self):
        if self.tie_tolerance < 0:
            raise ValueError(f"tie_tolerance must be non-negative, got {self.tie_tolerance}")
        if self.belief_tolerance < 0:
            raise ValueError(f"belief_tolerance must be non-negative, got {self.belief_tolerance}")
