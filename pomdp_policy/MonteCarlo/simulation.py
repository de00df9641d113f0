"""Monte Carlo rollouts of a policy graph.

Each episode samples a start state from the initial belief, picks the
first action by scoring the belief, and from then on follows the
continuation handles: the observation received after each action selects
the next node directly, so no belief is ever updated during a rollout.
"""

from typing import List, Optional

import numpy as np

from ..Models.belief import validate_belief
from ..Models.pomdp import TabularPOMDP
from ..Policies.policy import Policy

from .data_structures import EpisodeResult, RolloutConfig, RolloutMetrics


def _check_compatible(policy: Policy, model: TabularPOMDP, horizon: int):
    if (policy.S, policy.A, policy.O) != (model.S, model.A, model.O):
        raise ValueError(
            f"Policy dimensions (S={policy.S}, A={policy.A}, O={policy.O}) do not match "
            f"model (S={model.S}, A={model.A}, O={model.O})"
        )
    if horizon <= 0:
        raise ValueError(f"horizon must be positive, got {horizon}")
    if policy.get_h() > 0 and horizon > policy.get_h():
        raise ValueError(f"Policy was computed for horizon {policy.get_h()}, cannot roll out {horizon} steps")


def run_single_episode(
    episode_id: int,
    policy: Policy,
    model: TabularPOMDP,
    initial_belief: np.ndarray,
    horizon: int,
    rng: np.random.Generator,
    store_trajectory: bool = False
) -> EpisodeResult:
    """Run one episode of horizon decisions.

    Parameters
    ----------
    episode_id : int
        Episode identifier
    policy : Policy
        Policy to follow
    model : TabularPOMDP
        Environment simulator
    initial_belief : np.ndarray
        Belief the start state is drawn from
    horizon : int
        Number of decisions to take
    rng : np.random.Generator
        Source of randomness for both the environment and the policy
    store_trajectory : bool
        Whether to store the full trajectory

    Returns
    -------
    EpisodeResult
        Complete episode result
    """
    _check_compatible(policy, model, horizon)
    belief = validate_belief(initial_belief, model.S)

    state = model.sample_state(belief, rng)
    action, handle = policy.sample_action_at(belief, horizon, rng=rng)

    total = 0.0
    discounted = 0.0
    actions = []
    trajectory = []

    for step in range(horizon):
        next_state, observation, reward = model.evolve(state, action, rng)

        total += reward
        discounted += (model.discount ** step) * reward
        actions.append(action)
        if store_trajectory:
            trajectory.append((state, action, observation, reward))

        state = next_state
        remaining = horizon - step - 1
        if remaining > 0:
            action, handle = policy.sample_continuation(handle, observation, remaining, rng=rng)

    return EpisodeResult(
        episode_id=episode_id,
        total_reward=total,
        discounted_reward=discounted,
        steps=horizon,
        actions=actions,
        trajectory=trajectory
    )


def run_rollouts(
    policy: Policy,
    model: TabularPOMDP,
    initial_belief: np.ndarray,
    config: Optional[RolloutConfig] = None
) -> List[EpisodeResult]:
    """Run config.num_episodes independent episodes.

    Returns
    -------
    list of EpisodeResult
        Results from all episodes
    """
    if config is None:
        config = RolloutConfig()

    rng = np.random.default_rng(config.seed)
    results = []

    for episode_id in range(config.num_episodes):
        result = run_single_episode(
            episode_id=episode_id,
            policy=policy,
            model=model,
            initial_belief=initial_belief,
            horizon=config.horizon,
            rng=rng,
            store_trajectory=config.store_trajectories
        )
        results.append(result)

        if config.verbose:
            print(f"Episode {episode_id}: reward={result.total_reward:.3f} actions={result.actions}")

    return results


def compute_rollout_metrics(results: List[EpisodeResult], num_actions: int) -> RolloutMetrics:
    """Aggregate episode results.

    Parameters
    ----------
    results : list of EpisodeResult
        Results from rollouts
    num_actions : int
        Size of the action space (length of the frequency histogram)

    Returns
    -------
    RolloutMetrics
        Aggregated metrics
    """
    if not results:
        return RolloutMetrics(
            num_episodes=0,
            mean_reward=0.0,
            std_reward=0.0,
            mean_discounted_reward=0.0,
            action_frequencies=[0.0] * num_actions
        )

    rewards = np.array([r.total_reward for r in results])
    discounted = np.array([r.discounted_reward for r in results])

    counts = np.zeros(num_actions)
    for r in results:
        for a in r.actions:
            counts[a] += 1
    total_actions = counts.sum()
    frequencies = counts / total_actions if total_actions > 0 else counts

    return RolloutMetrics(
        num_episodes=len(results),
        mean_reward=float(rewards.mean()),
        std_reward=float(rewards.std()),
        mean_discounted_reward=float(discounted.mean()),
        action_frequencies=frequencies.tolist()
    )
