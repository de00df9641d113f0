"""
POMDP Policy Graph Library

Finite-horizon POMDP policies built from solver value functions, with
belief-scored action selection and a continuation protocol for cheap
multi-step sampling.

Modules:
- Models: Policy graph store, value function format, beliefs, tabular POMDP
- Policies: Policy interface, belief scoring and sampling
- MonteCarlo: Rollouts over the continuation protocol and plots
"""

from . import errors
from . import Models
from . import Policies
from . import MonteCarlo

from .errors import InvalidBelief, InvalidContinuation
from .Policies import Policy, PolicyInterface, PolicyConfig, Continuation

__all__ = [
    'Models', 'Policies', 'MonteCarlo',
    'InvalidBelief', 'InvalidContinuation',
    'Policy', 'PolicyInterface', 'PolicyConfig', 'Continuation',
]
__version__ = '0.1.0'
