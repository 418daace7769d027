"""
Pareto-front SINDy
==================

Sparse Identification of Nonlinear Dynamics with multi-threshold model
selection. Given state samples, their time derivatives and a basis of
candidate functions, find a sparse coefficient matrix Xi with
``X_dot ~= Xi.T @ Theta(X)``.

Main Features
-------------
- Feature normalization and optimal singular value shrinkage
- Pluggable sparse optimizers (STRRidge, ADMM, SR3)
- Threshold sweeps with per-output Pareto selection of sparsity vs. error

Quick Start
-----------
>>> from pareto_sindy import discover, STRRidge
>>>
>>> # X: [n_states, n_samples], X_dot: [n_states, n_samples]
>>> # basis(X, params, t) -> Theta: [n_features, n_samples]
>>> result = discover(X, X_dot, basis, np.logspace(-2, 0, 20), optimizer=STRRidge())
>>> result.coefficients  # [n_features, n_states]
>>> result.optimizer.threshold  # selected threshold

Data Layout
-----------
Variables and features are rows, samples are columns. Coefficient
matrices are [n_features, n_outputs].
"""

import logging

__version__ = "0.1.0"
__author__ = "Pareto-front SINDy Project"

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Core algorithms
from .core import (
    DEFAULT_CONVERGENCE_ERROR,
    DEFAULT_MAXITER,
    DEFAULT_WEIGHTS,
    AbstractScalarizationMethod,
    Basis,
    ParetoCandidate,
    ParetoFront,
    SINDyResult,
    WeightedSum,
    discover,
    dominates,
    normalize_theta,
    optimal_shrinkage,
    optimal_svht,
    rescale_theta,
    rescale_xi,
    sparse_regression,
    sparse_regression_features_inplace,
    sparse_regression_inplace,
)

# Optimizers
from .optimizers import (
    ADMM,
    DEFAULT_THRESHOLD,
    SR3,
    AbstractOptimizer,
    STRRidge,
)

__all__ = [
    # Version
    "__version__",
    # Identification
    "discover",
    "SINDyResult",
    "Basis",
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
    # Optimizers
    "AbstractOptimizer",
    "STRRidge",
    "ADMM",
    "SR3",
    "DEFAULT_THRESHOLD",
]
