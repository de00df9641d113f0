"""Tests for beliefs and the tabular POMDP simulator."""

import pytest
import numpy as np

from ..errors import InvalidBelief
from .belief import point_belief, uniform_belief, validate_belief
from .pomdp import TabularPOMDP, observation_model_from_data


def noisy_sensor_model(discount=1.0):
    """Two static states, two actions, a sensor that is right 85% of the time."""
    T = np.zeros((2, 2, 2))
    for s in range(2):
        T[s, :, s] = 1.0
    Z = np.array([[[0.85, 0.15], [0.15, 0.85]]] * 2)
    R = np.array([[1.0, -1.0], [-1.0, 1.0]])
    return TabularPOMDP(T=T, Z=Z, R=R, discount=discount)


class TestBelief:
    """Tests for belief helpers and validation."""

    def test_uniform_and_point_beliefs(self):
        assert np.allclose(uniform_belief(4), [0.25] * 4)
        assert np.allclose(point_belief(3, 1), [0.0, 1.0, 0.0])

    def test_valid_belief_returned_as_array(self):
        b = validate_belief([0.2, 0.8], 2)
        assert isinstance(b, np.ndarray)
        assert np.allclose(b, [0.2, 0.8])

    @pytest.mark.parametrize("belief", [
        [0.5, 0.5, 0.0],        # wrong length
        [1.2, -0.2],            # negative entry
        [0.3, 0.3],             # does not sum to one
        [np.nan, 1.0],          # not finite
    ])
    def test_invalid_beliefs_rejected(self, belief):
        with pytest.raises(InvalidBelief):
            validate_belief(belief, 2)

    def test_invalid_belief_is_value_error(self):
        with pytest.raises(ValueError):
            validate_belief([0.3, 0.3], 2)

    def test_tolerance_absorbs_rounding(self):
        validate_belief([1.0 / 3] * 3, 3)


class TestTabularPOMDP:
    """Tests for the simulator model."""

    def test_dimensions(self):
        model = noisy_sensor_model()
        assert (model.S, model.A, model.O) == (2, 2, 2)

    def test_evolve_static_state(self):
        model = noisy_sensor_model()
        rng = np.random.default_rng(0)
        for _ in range(20):
            next_state, obs, reward = model.evolve(1, 1, rng)
            assert next_state == 1
            assert obs in (0, 1)
            assert reward == 1.0

    def test_sample_state_follows_point_belief(self):
        model = noisy_sensor_model()
        rng = np.random.default_rng(0)
        assert all(model.sample_state(np.array([0.0, 1.0]), rng) == 1 for _ in range(10))

    def test_non_stochastic_transition_rejected(self):
        model = noisy_sensor_model()
        T = model.T.copy()
        T[0, 0] = [0.5, 0.6]
        with pytest.raises(ValueError):
            TabularPOMDP(T=T, Z=model.Z, R=model.R)

    def test_shape_mismatch_rejected(self):
        model = noisy_sensor_model()
        with pytest.raises(ValueError):
            TabularPOMDP(T=model.T, Z=model.Z, R=np.zeros((2, 3)))

    def test_bad_discount_rejected(self):
        with pytest.raises(ValueError):
            noisy_sensor_model(discount=0.0)

    def test_observation_model_from_data(self):
        data = [(0, 0, 0), (0, 0, 0), (0, 0, 1), (0, 1, 1)]
        Z = observation_model_from_data(2, 2, 2, data)

        assert Z.shape == (2, 2, 2)
        assert np.allclose(Z[0, 0], [2 / 3, 1 / 3])
        assert np.allclose(Z[0, 1], [0.0, 1.0])
        # Unseen (action, state) pairs are uniform
        assert np.allclose(Z[1, 0], [0.5, 0.5])
        assert np.allclose(Z.sum(axis=2), 1.0)
