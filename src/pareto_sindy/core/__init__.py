"""
Core SINDy algorithms.

This module provides feature preprocessing, the single-threshold sparse
regression driver, Pareto fronts over (sparsity, error), and the
:func:`discover` entry point with optional threshold sweeps.
"""

from .basis import Basis, as_data_matrix, check_sample_counts, evaluate_basis
from .pareto import (
    DEFAULT_WEIGHTS,
    AbstractScalarizationMethod,
    ParetoCandidate,
    ParetoFront,
    WeightedSum,
    dominates,
)
from .preprocessing import (
    normalize_theta,
    optimal_shrinkage,
    optimal_svht,
    rescale_theta,
    rescale_xi,
)
from .regression import (
    DEFAULT_CONVERGENCE_ERROR,
    DEFAULT_MAXITER,
    sparse_regression,
    sparse_regression_features_inplace,
    sparse_regression_inplace,
)
from .result import SINDyResult
from .sindy import discover

__all__ = [
    # Identification
    "discover",
    "SINDyResult",
    # Regression driver
    "sparse_regression",
    "sparse_regression_inplace",
    "sparse_regression_features_inplace",
    "DEFAULT_MAXITER",
    "DEFAULT_CONVERGENCE_ERROR",
    # Pareto selection
    "ParetoCandidate",
    "ParetoFront",
    "AbstractScalarizationMethod",
    "WeightedSum",
    "dominates",
    "DEFAULT_WEIGHTS",
    # Preprocessing
    "normalize_theta",
    "rescale_xi",
    "rescale_theta",
    "optimal_shrinkage",
    "optimal_svht",
    # Basis contract
    "Basis",
    "as_data_matrix",
    "check_sample_counts",
    "evaluate_basis",
]
