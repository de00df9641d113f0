"""Horizon-indexed policy graph store.

The graph keeps, for every horizon h in [0, H], the pruned decision nodes
produced by a POMDP solver. Node ids are positions within their level and
each node points, per observation, to a node id one level below. Levels
are stored as read-only numpy arrays so a belief can be scored against a
whole level with a single matrix-vector product.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .value_function import VList, ValueFunction, make_value_function

# Marks an unused continuation slot (horizon 0 of a solved graph).
NO_CONTINUATION = -1


@dataclass(frozen=True, eq=False)
class Node:
    """One decision alternative at a given horizon level.

    Attributes
    ----------
    alpha : np.ndarray
        Length-S alpha vector used to score the node against a belief
    action : int
        Action recommended by the node
    continuation : tuple of int
        Observation -> node id at the level below (NO_CONTINUATION if unused)
    uniform : bool
        If True the node's action is tied among all actions
    """
    alpha: np.ndarray
    action: int
    continuation: Tuple[int, ...]
    uniform: bool = False


@dataclass
class HorizonLevel:
    """All nodes for one horizon, stored column-wise.

    Attributes
    ----------
    horizon : int
        Horizon value of this level
    alphas : np.ndarray
        (n, S) alpha vectors
    actions : np.ndarray
        (n,) recommended actions
    continuations : np.ndarray
        (n, O) successor node ids at horizon - 1
    uniform : np.ndarray
        (n,) flags for nodes whose action is tied among all actions
    """
    horizon: int
    alphas: np.ndarray
    actions: np.ndarray
    continuations: np.ndarray
    uniform: np.ndarray

    def __post_init__(self):
        # Copies, so the store never shares memory with the caller.
        self.alphas = np.array(self.alphas, dtype=float, ndmin=2)
        self.actions = np.array(self.actions, dtype=np.int64, ndmin=1)
        self.continuations = np.array(self.continuations, dtype=np.int64, ndmin=2)
        self.uniform = np.array(self.uniform, dtype=bool, ndmin=1)
        for arr in (self.alphas, self.actions, self.continuations, self.uniform):
            arr.setflags(write=False)

    def __len__(self) -> int:
        return self.alphas.shape[0]

    def node(self, node_id: int) -> Node:
        return Node(
            alpha=self.alphas[node_id],
            action=int(self.actions[node_id]),
            continuation=tuple(int(x) for x in self.continuations[node_id]),
            uniform=bool(self.uniform[node_id]),
        )

    @staticmethod
    def from_vlist(horizon: int, vlist: VList, S: int, A: int, O: int, uniform: bool = False) -> HorizonLevel:
        """Build a level from solver output, checking shapes and actions."""
        if len(vlist) == 0:
            raise ValueError(f"Horizon {horizon} has no entries")

        n = len(vlist)
        alphas = np.zeros((n, S), dtype=float)
        actions = np.zeros(n, dtype=np.int64)
        continuations = np.full((n, O), NO_CONTINUATION, dtype=np.int64)

        for i, entry in enumerate(vlist):
            if entry.values.shape != (S,):
                raise ValueError(
                    f"Alpha vector {i} at horizon {horizon} must have shape ({S},), got {entry.values.shape}"
                )
            if not np.all(np.isfinite(entry.values)):
                raise ValueError(f"Alpha vector {i} at horizon {horizon} is not finite")
            if entry.action < 0 or entry.action >= A:
                raise ValueError(f"Action {entry.action} of entry {i} at horizon {horizon} out of range [0, {A})")

            obs = entry.observations
            if obs:
                if len(obs) != O:
                    raise ValueError(
                        f"Entry {i} at horizon {horizon} has {len(obs)} observation links, expected {O}"
                    )
                continuations[i] = obs
            elif horizon > 0:
                raise ValueError(f"Entry {i} at horizon {horizon} has no observation links")

            alphas[i] = entry.values
            actions[i] = entry.action

        return HorizonLevel(
            horizon=horizon,
            alphas=alphas,
            actions=actions,
            continuations=continuations,
            uniform=np.full(n, uniform, dtype=bool),
        )


class PolicyGraph:
    """Immutable store of horizon levels 0..H for a POMDP policy.

    Built either as the degenerate uniform policy (a single self-referential
    node at horizon 0) or from a solver value function. All accessors assume
    valid indices.
    """

    def __init__(self, S: int, A: int, O: int, levels: Optional[Sequence[HorizonLevel]] = None):
        for name, value in (("S", S), ("A", A), ("O", O)):
            if int(value) <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

        self.S = int(S)
        self.A = int(A)
        self.O = int(O)

        if levels is None:
            levels = [HorizonLevel.from_vlist(0, make_value_function(self.S, self.O)[0],
                                              self.S, self.A, self.O, uniform=True)]

        self.levels: Tuple[HorizonLevel, ...] = tuple(levels)
        self._check_links()

    @classmethod
    def uniform(cls, S: int, A: int, O: int) -> PolicyGraph:
        """The random policy: one zero-alpha node tied among all actions."""
        return cls(S, A, O)

    @classmethod
    def from_value_function(cls, S: int, A: int, O: int, vf: ValueFunction) -> PolicyGraph:
        """Build the graph from a solver value function (index = horizon)."""
        if len(vf) == 0:
            raise ValueError("Value function must contain at least one horizon")
        for name, value in (("S", S), ("A", A), ("O", O)):
            if int(value) <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

        levels = [HorizonLevel.from_vlist(h, vlist, S, A, O) for h, vlist in enumerate(vf)]
        return cls(S, A, O, levels)

    def _check_links(self):
        if len(self.levels) == 0:
            raise ValueError("Policy graph must contain at least one horizon")

        for h, level in enumerate(self.levels):
            if level.horizon != h:
                raise ValueError(f"Level at position {h} is labelled horizon {level.horizon}")
            n = len(level)
            if n == 0:
                raise ValueError(f"Horizon {h} has no nodes")
            if (level.alphas.shape != (n, self.S) or level.continuations.shape != (n, self.O)
                    or level.actions.shape != (n,) or level.uniform.shape != (n,)):
                raise ValueError(f"Level {h} does not match dimensions n={n}, S={self.S}, O={self.O}")
            if not np.all(np.isfinite(level.alphas)):
                raise ValueError(f"Alpha vectors at horizon {h} are not finite")
            if level.actions.min() < 0 or level.actions.max() >= self.A:
                raise ValueError(f"Actions at horizon {h} must be in [0, {self.A})")

            # Horizon 0 may point into itself (stationary policy) or nowhere.
            target = self.levels[h - 1] if h > 0 else level
            links = level.continuations
            if h == 0:
                links = links[links != NO_CONTINUATION]
            if links.size and (links.min() < 0 or links.max() >= len(target)):
                raise ValueError(
                    f"Continuation ids at horizon {h} must be in [0, {len(target)})"
                )

    @property
    def H(self) -> int:
        """Top horizon the graph was built for."""
        return len(self.levels) - 1

    def level(self, horizon: int) -> HorizonLevel:
        return self.levels[horizon]

    def num_nodes(self, horizon: int) -> int:
        return len(self.levels[horizon])

    def node(self, horizon: int, node_id: int) -> Node:
        return self.levels[horizon].node(node_id)

    def alpha(self, horizon: int, node_id: int) -> np.ndarray:
        return self.levels[horizon].alphas[node_id]

    def action(self, horizon: int, node_id: int) -> int:
        return int(self.levels[horizon].actions[node_id])

    def continuation(self, horizon: int, node_id: int) -> Tuple[int, ...]:
        return tuple(int(x) for x in self.levels[horizon].continuations[node_id])

    def sizes(self) -> List[int]:
        """Number of nodes per horizon, from 0 to H."""
        return [len(level) for level in self.levels]

    def __repr__(self) -> str:
        return f"PolicyGraph(S={self.S}, A={self.A}, O={self.O}, H={self.H}, sizes={self.sizes()})"
