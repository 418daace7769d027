"""
Sparse regression optimizers.

Every optimizer implements the :class:`AbstractOptimizer` contract
(``init``, ``fit``, ``set_threshold``) and can be swapped into the
regression driver and the threshold sweep without further changes.
"""

from .admm import ADMM, soft_threshold
from .base import DEFAULT_THRESHOLD, AbstractOptimizer
from .sr3 import SR3
from .stridge import STRRidge

__all__ = [
    "AbstractOptimizer",
    "DEFAULT_THRESHOLD",
    "STRRidge",
    "ADMM",
    "SR3",
    "soft_threshold",
]
