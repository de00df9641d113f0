"""Policy graph store, solver output format and simulation models."""

from .value_function import VEntry, VList, ValueFunction, make_value_function, make_vlist
from .policy_graph import Node, HorizonLevel, PolicyGraph, NO_CONTINUATION
from .belief import uniform_belief, point_belief, validate_belief
from .pomdp import TabularPOMDP, observation_model_from_data

__all__ = [
    'VEntry', 'VList', 'ValueFunction', 'make_value_function', 'make_vlist',
    'Node', 'HorizonLevel', 'PolicyGraph', 'NO_CONTINUATION',
    'uniform_belief', 'point_belief', 'validate_belief',
    'TabularPOMDP', 'observation_model_from_data',
]
