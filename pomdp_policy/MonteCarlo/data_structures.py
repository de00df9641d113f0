"""Data structures for policy rollouts."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass
class RolloutConfig:
    """Configuration for a batch of rollouts.

    Attributes
    ----------
    horizon : int
        Number of decisions per episode (the horizon of the first decision)
    num_episodes : int
        Number of episodes to run
    seed : int, optional
        Random seed for reproducibility
    store_trajectories : bool
        Whether to keep full trajectories (memory intensive)
    verbose : bool
        Print per-episode progress
    """
    horizon: int = 3
    num_episodes: int = 100
    seed: Optional[int] = 42
    store_trajectories: bool = False
    verbose: bool = False

    def __post_init__(self):
        if self.horizon <= 0:
            raise ValueError(f"horizon must be positive, got {self.horizon}")
        if self.num_episodes < 0:
            raise ValueError(f"num_episodes must be non-negative, got {self.num_episodes}")


@dataclass
class EpisodeResult:
    """Result from a single rollout.

    Attributes
    ----------
    episode_id : int
        Episode identifier
    total_reward : float
        Undiscounted sum of rewards
    discounted_reward : float
        Sum of rewards discounted by the model's discount factor
    steps : int
        Number of decisions taken
    actions : list of int
        Actions taken, in order
    trajectory : list of (state, action, observation, reward) tuples
        Complete trajectory (empty unless requested)
    """
    episode_id: int
    total_reward: float
    discounted_reward: float
    steps: int
    actions: List[int] = field(default_factory=list)
    trajectory: List[Tuple[int, int, int, float]] = field(default_factory=list)


@dataclass
class RolloutMetrics:
    """Aggregated metrics over many rollouts.

    Attributes
    ----------
    num_episodes : int
        Number of episodes aggregated
    mean_reward : float
        Mean undiscounted episode reward
    std_reward : float
        Standard deviation of undiscounted episode reward
    mean_discounted_reward : float
        Mean discounted episode reward
    action_frequencies : list of float
        Fraction of all decisions that chose each action
    """
    num_episodes: int
    mean_reward: float
    std_reward: float
    mean_discounted_reward: float
    action_frequencies: List[float] = field(default_factory=list)

    def __str__(self) -> str:
        """Format metrics for display."""
        lines = [
            "Rollout Metrics",
            "=" * 40,
            f"Episodes: {self.num_episodes}",
            f"Mean Reward: {self.mean_reward:.3f} (std {self.std_reward:.3f})",
            f"Mean Discounted Reward: {self.mean_discounted_reward:.3f}",
        ]
        if self.action_frequencies:
            lines.append("Action Frequencies:")
            for a, freq in enumerate(self.action_frequencies):
                lines.append(f"  {a}: {freq:.2%}")
        return "\n".join(lines)
