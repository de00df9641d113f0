"""Tests for policy rollouts and their visualization."""

import matplotlib
matplotlib.use("Agg")

import pytest
import numpy as np

from ..Models.pomdp import TabularPOMDP
from ..Models.value_function import make_vlist
from ..Policies.policy import Policy
from .data_structures import EpisodeResult, RolloutConfig
from .simulation import compute_rollout_metrics, run_rollouts, run_single_episode
from .visualization import plot_action_probabilities, plot_rollout_rewards


def static_model(discount=0.9):
    """Two static states; action 0 costs 1, action 1 pays 10, action 2 pays 0."""
    T = np.zeros((2, 3, 2))
    for s in range(2):
        T[s, :, s] = 1.0
    Z = np.array([[[0.85, 0.15], [0.15, 0.85]]] * 3)
    R = np.array([[-1.0, 10.0, 0.0], [-1.0, 10.0, 0.0]])
    return TabularPOMDP(T=T, Z=Z, R=R, discount=discount)


def scripted_policy():
    """Horizon-2 policy that always plays action 0 then action 1."""
    vf = [
        make_vlist([([0.0, 0.0], 2, [])]),
        make_vlist([([0.0, 0.0], 1, [0, 0])]),
        make_vlist([([0.0, 0.0], 0, [0, 0])]),
    ]
    return Policy(2, 3, 2, vf)


def sensing_policy():
    """Horizon-2 policy whose second action depends on the observation."""
    vf = [
        make_vlist([([0.0, 0.0], 0, [])]),
        make_vlist([
            ([1.0, 0.0], 1, [0, 0]),
            ([0.0, 1.0], 2, [0, 0]),
        ]),
        make_vlist([([0.5, 0.5], 0, [0, 1])]),
    ]
    return Policy(2, 3, 2, vf)


# ============================================================
# Episode Tests
# ============================================================

class TestRunSingleEpisode:
    """Tests for a single rollout."""

    def test_scripted_actions_and_rewards(self):
        result = run_single_episode(
            episode_id=0,
            policy=scripted_policy(),
            model=static_model(),
            initial_belief=np.array([0.5, 0.5]),
            horizon=2,
            rng=np.random.default_rng(0),
            store_trajectory=True
        )

        assert result.steps == 2
        assert result.actions == [0, 1]
        assert result.total_reward == pytest.approx(9.0)
        assert result.discounted_reward == pytest.approx(-1.0 + 0.9 * 10.0)
        assert len(result.trajectory) == 2
        assert [step[1] for step in result.trajectory] == [0, 1]

    def test_observation_selects_next_action(self):
        policy = sensing_policy()
        model = static_model()
        rng = np.random.default_rng(4)

        for _ in range(30):
            result = run_single_episode(0, policy, model, np.array([0.5, 0.5]), 2, rng, store_trajectory=True)
            first_obs = result.trajectory[0][2]
            assert result.actions[1] == (1 if first_obs == 0 else 2)

    def test_default_policy_rolls_out_any_horizon(self):
        policy = Policy(2, 3, 2)
        result = run_single_episode(0, policy, static_model(), np.array([1.0, 0.0]), 7, np.random.default_rng(0))
        assert result.steps == 7
        assert all(0 <= a < 3 for a in result.actions)

    def test_horizon_beyond_policy_rejected(self):
        with pytest.raises(ValueError):
            run_single_episode(0, scripted_policy(), static_model(), np.array([0.5, 0.5]), 3, np.random.default_rng(0))

    def test_dimension_mismatch_rejected(self):
        with pytest.raises(ValueError):
            run_single_episode(0, Policy(3, 3, 2), static_model(), np.array([0.5, 0.5]), 1, np.random.default_rng(0))


# ============================================================
# Batch Tests
# ============================================================

class TestRunRollouts:
    """Tests for batches of rollouts and their metrics."""

    def test_seeded_rollouts_reproducible(self):
        config = RolloutConfig(horizon=5, num_episodes=20, seed=7)
        policy = Policy(2, 3, 2)
        first = run_rollouts(policy, static_model(), np.array([0.5, 0.5]), config)
        second = run_rollouts(policy, static_model(), np.array([0.5, 0.5]), config)
        assert [r.actions for r in first] == [r.actions for r in second]

    def test_metrics(self):
        config = RolloutConfig(horizon=2, num_episodes=10, seed=0)
        results = run_rollouts(scripted_policy(), static_model(), np.array([0.5, 0.5]), config)
        metrics = compute_rollout_metrics(results, num_actions=3)

        assert metrics.num_episodes == 10
        assert metrics.mean_reward == pytest.approx(9.0)
        assert metrics.std_reward == pytest.approx(0.0)
        assert metrics.mean_discounted_reward == pytest.approx(8.0)
        assert np.allclose(metrics.action_frequencies, [0.5, 0.5, 0.0])
        assert "Episodes: 10" in str(metrics)

    def test_empty_metrics(self):
        metrics = compute_rollout_metrics([], num_actions=2)
        assert metrics.num_episodes == 0
        assert metrics.action_frequencies == [0.0, 0.0]

    def test_verbose_prints_progress(self, capsys):
        config = RolloutConfig(horizon=1, num_episodes=2, verbose=True)
        run_rollouts(scripted_policy(), static_model(), np.array([0.5, 0.5]), config)
        out = capsys.readouterr().out
        assert "Episode 0" in out
        assert "Episode 1" in out

    def test_config_validation(self):
        with pytest.raises(ValueError):
            RolloutConfig(horizon=0)
        with pytest.raises(ValueError):
            RolloutConfig(num_episodes=-1)


# ============================================================
# Visualization Tests
# ============================================================

class TestVisualization:
    """Tests for plotting helpers."""

    def test_plot_action_probabilities(self, tmp_path):
        path = tmp_path / "probs.png"
        probs = plot_action_probabilities(sensing_policy(), horizon=1, resolution=11,
                                          save_path=str(path), show=False)

        assert path.exists()
        assert probs.shape == (11, 3)
        assert np.allclose(probs.sum(axis=1), 1.0)
        # b = (1, 0) favours action 1, b = (0, 1) favours action 2
        assert np.allclose(probs[0], [0.0, 1.0, 0.0])
        assert np.allclose(probs[-1], [0.0, 0.0, 1.0])

    def test_plot_requires_two_states(self):
        with pytest.raises(ValueError):
            plot_action_probabilities(Policy(3, 2, 2), show=False)

    def test_plot_rollout_rewards(self, tmp_path):
        path = tmp_path / "rewards.png"
        results = [EpisodeResult(episode_id=i, total_reward=float(i), discounted_reward=float(i), steps=1)
                   for i in range(5)]
        plot_rollout_rewards(results, save_path=str(path), show=False)
        assert path.exists()

    def test_plot_rollout_rewards_empty(self, capsys):
        plot_rollout_rewards([], show=False)
        assert "No results" in capsys.readouterr().out
