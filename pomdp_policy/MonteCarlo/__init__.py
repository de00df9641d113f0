"""Monte Carlo rollouts of policy graphs.

Runs interaction loops against a tabular POMDP simulator using the
continuation protocol: the first decision scores the initial belief and
every later decision follows the observation links of the selected node.

Modules
-------
data_structures
    RolloutConfig, EpisodeResult and RolloutMetrics dataclasses
simulation
    Episode and batch rollout functions, metric aggregation
visualization
    Plotting functions for action probabilities and rollout rewards
"""

from .data_structures import RolloutConfig, EpisodeResult, RolloutMetrics
from .simulation import run_single_episode, run_rollouts, compute_rollout_metrics
from .visualization import plot_action_probabilities, plot_rollout_rewards

__all__ = [
    # Data structures
    "RolloutConfig",
    "EpisodeResult",
    "RolloutMetrics",
    # Simulation
    "run_single_episode",
    "run_rollouts",
    "compute_rollout_metrics",
    # Visualization
    "plot_action_probabilities",
    "plot_rollout_rewards",
]
