"""Visualization functions for policies and rollout results."""

from typing import List, Optional
import numpy as np
import matplotlib.pyplot as plt

from ..Policies.policy import Policy
from .data_structures import EpisodeResult


def plot_action_probabilities(
    policy: Policy,
    horizon: Optional[int] = None,
    resolution: int = 201,
    save_path: Optional[str] = None,
    show: bool = True
):
    """Plot the action distribution along the belief segment of a 2-state policy.

    The x-axis is p = b[1] for beliefs b = (1 - p, p); one line per action.

    Parameters
    ----------
    policy : Policy
        Policy over exactly two states
    horizon : int, optional
        Horizon to query (defaults to the top horizon)
    resolution : int
        Number of belief points
    save_path : str, optional
        Path to save figure
    show : bool
        Whether to display the figure

    Returns
    -------
    np.ndarray
        (resolution, A) array of the plotted probabilities
    """
    if policy.S != 2:
        raise ValueError(f"Belief segment plot needs a 2-state policy, got S={policy.S}")

    ps = np.linspace(0.0, 1.0, resolution)
    probs = np.array([
        policy.get_action_probabilities(np.array([1.0 - p, p]), horizon)
        for p in ps
    ])

    fig, ax = plt.subplots(figsize=(8, 4))
    for a in range(policy.A):
        ax.plot(ps, probs[:, a], label=f'action {a}')

    h = policy.get_h() if horizon is None else horizon
    ax.set_xlabel('b[1]')
    ax.set_ylabel('Probability')
    ax.set_title(f'Action Probabilities (horizon {h})')
    ax.set_ylim([-0.05, 1.05])
    ax.legend()
    ax.grid(alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')
        print(f"Figure saved to {save_path}")

    if show:
        plt.show()
    else:
        plt.close(fig)

    return probs


def plot_rollout_rewards(
    results: List[EpisodeResult],
    save_path: Optional[str] = None,
    show: bool = True
):
    """Histogram of undiscounted episode rewards.

    Parameters
    ----------
    results : list of EpisodeResult
        Results from rollouts
    save_path : str, optional
        Path to save figure
    show : bool
        Whether to display the figure
    """
    if not results:
        print("No results to plot")
        return

    rewards = [r.total_reward for r in results]

    fig, ax = plt.subplots(figsize=(8, 4))
    ax.hist(rewards, bins=20, color='steelblue', alpha=0.7)
    ax.axvline(np.mean(rewards), color='red', linestyle='--', label=f'mean {np.mean(rewards):.2f}')
    ax.set_xlabel('Episode Reward')
    ax.set_ylabel('Count')
    ax.set_title('Rollout Reward Distribution')
    ax.legend()
    ax.grid(axis='y', alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')
        print(f"Figure saved to {save_path}")

    if show:
        plt.show()
    else:
        plt.close(fig)
