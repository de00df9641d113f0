"""Finite-horizon POMDP policy backed by a policy graph.

Building a Policy is expensive (it is the output of a solver), so it
should be done once the solution is final. Afterwards it answers, for a
belief and a horizon, which action to take and with what probability, and
hands back a continuation handle so the next timestep can be resolved
from the received observation with a table lookup instead of a new scan
over the belief.

Typical interaction loop::

    horizon = 3
    action, handle = policy.sample_action_at(belief, horizon)
    observation = env.step(action)
    horizon -= 1
    action, handle = policy.sample_continuation(handle, observation, horizon)
"""

from __future__ import annotations
import operator
from typing import NamedTuple, Optional, Tuple, Union

import numpy as np

from ..Models.belief import validate_belief
from ..Models.policy_graph import NO_CONTINUATION, PolicyGraph
from ..Models.value_function import ValueFunction
from ..errors import InvalidContinuation
from .config import PolicyConfig
from .policy_interface import PolicyInterface
from .scoring import action_distribution, node_action, sample_winner


def _as_index(name: str, value) -> int:
    """Return value as a Python int, rejecting floats and other non-integers."""
    try:
        return operator.index(value)
    except TypeError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


class Continuation(NamedTuple):
    """Handle to the node selected at a horizon level."""
    horizon: int
    node_id: int


class Policy(PolicyInterface):
    """A full horizon-indexed POMDP policy.

    Parameters
    ----------
    S : int
        Number of states of the world
    A : int
        Number of actions available to the agent
    O : int
        Number of possible observations
    value_function : ValueFunction, optional
        Solver output, one VList per horizon 0..H. If omitted the policy
        is the uniform random policy: every action has the same
        probability for every belief.
    config : PolicyConfig, optional
        Numeric tolerances
    rng : np.random.Generator, optional
        Default source of randomness for sampling
    """

    def __init__(
        self,
        S: int,
        A: int,
        O: int,
        value_function: Optional[ValueFunction] = None,
        config: Optional[PolicyConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        if value_function is None:
            graph = PolicyGraph.uniform(S, A, O)
        else:
            graph = PolicyGraph.from_value_function(S, A, O, value_function)
        self._init_from_graph(graph, config, rng)

    @classmethod
    def from_graph(
        cls,
        graph: PolicyGraph,
        config: Optional[PolicyConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> Policy:
        """Wrap an already built policy graph."""
        policy = cls.__new__(cls)
        policy._init_from_graph(graph, config, rng)
        return policy

    def _init_from_graph(self, graph, config, rng):
        super().__init__(graph.S, graph.A)
        self.O = graph.O
        self.graph = graph
        self.config = config if config is not None else PolicyConfig()
        self.rng = rng if rng is not None else np.random.default_rng()

    @property
    def H(self) -> int:
        return self.graph.H

    def get_h(self) -> int:
        """Return the highest horizon the policy was computed for."""
        return self.graph.H

    def get_observation_size(self) -> int:
        return self.O

    # ------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------

    def sample_action(self, belief: np.ndarray, rng: Optional[np.random.Generator] = None) -> int:
        """Choose an action for the belief at the highest available horizon."""
        action, _ = self.sample_action_at(belief, self.H, rng=rng)
        return action

    def sample_action_at(
        self,
        belief: np.ndarray,
        horizon: int,
        rng: Optional[np.random.Generator] = None,
    ) -> Tuple[int, Continuation]:
        """Choose an action for the belief when horizon steps remain.

        Horizons 0 and 1 are equivalent. Horizons above H are clamped to H.

        Returns
        -------
        tuple
            (action, handle), where handle records the node and the level
            actually used; pass it to sample_continuation together with
            the received observation and handle.horizon - 1.
        """
        level_h = self._resolve_level(horizon)
        b = self._check_belief(belief)
        action, node_id = sample_winner(
            self.graph.level(level_h), b, self.A, self.config.tie_tolerance, self._rng(rng)
        )
        return action, Continuation(level_h, node_id)

    def sample_continuation(
        self,
        continuation: Union[Continuation, int],
        observation: int,
        horizon: int,
        rng: Optional[np.random.Generator] = None,
    ) -> Tuple[int, Continuation]:
        """Choose the next action after acting and receiving an observation.

        horizon must be exactly one less than the level of the handle. A
        bare integer id is taken to belong to level horizon + 1 and is only
        checked for range. The stationary default policy (H = 0) keeps
        resolving on its single level.

        Raises
        ------
        InvalidContinuation
            If the handle does not belong to level horizon + 1, or its id
            is out of range there.
        ValueError
            If horizon is negative, observation is out of range, or either
            is not an integer.
        """
        horizon = _as_index("horizon", horizon)
        if horizon < 0:
            raise ValueError(f"horizon must be non-negative, got {horizon}")
        observation = self._check_observation(observation)

        if self.H == 0:
            source, target = 0, 0
        else:
            source, target = horizon + 1, horizon

        if isinstance(continuation, Continuation):
            handle_h = _as_index("continuation horizon", continuation.horizon)
            node_id = _as_index("continuation id", continuation.node_id)
        else:
            handle_h, node_id = source, _as_index("continuation id", continuation)

        if handle_h != source:
            raise InvalidContinuation(
                f"Handle from horizon {handle_h} cannot continue to horizon {horizon}",
                horizon=handle_h, node_id=node_id,
            )
        if source > self.H:
            raise InvalidContinuation(
                f"Policy has no horizon {source} (H={self.H})",
                horizon=handle_h, node_id=node_id,
            )
        if node_id < 0 or node_id >= self.graph.num_nodes(source):
            raise InvalidContinuation(
                f"Node id {node_id} out of range at horizon {source}",
                horizon=handle_h, node_id=node_id,
            )

        next_id = int(self.graph.level(source).continuations[node_id, observation])
        if next_id == NO_CONTINUATION:
            raise InvalidContinuation(
                f"Node {node_id} at horizon {source} has no continuation",
                horizon=handle_h, node_id=node_id,
            )

        action = node_action(self.graph.level(target), next_id, self.A, self._rng(rng))
        return action, Continuation(target, next_id)

    # ------------------------------------------------------------
    # Probabilities
    # ------------------------------------------------------------

    def get_action_probability(self, belief: np.ndarray, action: int, horizon: Optional[int] = None) -> float:
        """Return the probability of taking action under belief.

        Uses the highest horizon unless one is given.
        """
        action = _as_index("action", action)
        if action < 0 or action >= self.A:
            raise ValueError(f"Action {action} out of range [0, {self.A})")
        return float(self.get_action_probabilities(belief, horizon)[action])

    def get_action_probabilities(self, belief: np.ndarray, horizon: Optional[int] = None) -> np.ndarray:
        """Return the full length-A action distribution for the belief."""
        level_h = self._resolve_level(self.H if horizon is None else horizon)
        b = self._check_belief(belief)
        return action_distribution(self.graph.level(level_h), b, self.A, self.config.tie_tolerance)

    # ------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------

    def _resolve_level(self, horizon: int) -> int:
        horizon = _as_index("horizon", horizon)
        if horizon < 0:
            raise ValueError(f"horizon must be non-negative, got {horizon}")
        return min(max(horizon, 1), self.H)

    def _check_belief(self, belief) -> np.ndarray:
        if self.config.validate_beliefs:
            return validate_belief(belief, self.S, self.config.belief_tolerance)
        return np.asarray(belief, dtype=float)

    def _check_observation(self, observation: int) -> int:
        observation = _as_index("observation", observation)
        if observation < 0 or observation >= self.O:
            raise ValueError(f"Observation {observation} out of range [0, {self.O})")
        return observation

    def _rng(self, rng: Optional[np.random.Generator]) -> np.random.Generator:
        return rng if rng is not None else self.rng

    def __repr__(self) -> str:
        return f"Policy(S={self.S}, A={self.A}, O={self.O}, H={self.H})"
