"""Value function format produced by POMDP solvers.

A value function is a list of VLists, one per horizon (index 0 is the
zero-horizon level). Each VList holds the pruned alpha vectors for that
horizon together with the action each one recommends and, for every
observation, the index of the entry to follow in the VList one horizon
below.
"""

from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np


@dataclass
class VEntry:
    """
    One pruned alpha vector.

    values       : length-S alpha vector
    action       : action recommended by this entry
    observations : o -> id of the successor entry at horizon h-1
    """
    values: np.ndarray
    action: int
    observations: List[int] = field(default_factory=list)

    def __post_init__(self):
        self.values = np.asarray(self.values, dtype=float)
        self.action = int(self.action)
        self.observations = [int(o) for o in self.observations]


VList = List[VEntry]
ValueFunction = List[VList]


def make_value_function(S: int, O: int = 0) -> ValueFunction:
    """Return the trivial value function for a world with S states.

    A single horizon level containing one zero alpha vector, action 0 and
    an observation table pointing every observation back at itself.
    """
    return [[VEntry(np.zeros(S), 0, [0] * O)]]


def make_vlist(entries: Sequence[tuple]) -> VList:
    """Build a VList from (values, action, observations) tuples."""
    return [VEntry(values, action, observations) for values, action, observations in entries]
