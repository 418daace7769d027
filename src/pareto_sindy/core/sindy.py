"""
Sparse Identification of Nonlinear Dynamics (SINDy).

:func:`discover` identifies a sparse coefficient matrix Xi with
``X_dot ~= Xi.T @ basis(X)``, either for the optimizer's current threshold
or by sweeping a sequence of thresholds and selecting, for every output
variable independently, the best trade-off between sparsity and error.

References
----------
Brunton, Proctor & Kutz (2016) "Discovering governing equations from data by
sparse identification of nonlinear dynamical systems", PNAS 113(15).
"""

import logging
from typing import Any, Optional, Sequence

import numpy as np

from ..optimizers import AbstractOptimizer, STRRidge
from .basis import BasisLike, as_data_matrix, check_sample_counts, evaluate_basis
from .pareto import AbstractScalarizationMethod, ParetoCandidate, ParetoFront
from .preprocessing import normalize_theta, optimal_shrinkage, rescale_theta, rescale_xi
from .regression import (
    DEFAULT_CONVERGENCE_ERROR,
    DEFAULT_MAXITER,
    sparse_regression_features_inplace,
)
from .result import SINDyResult

logger = logging.getLogger(__name__)


def _objective(xi_i: np.ndarray, theta: np.ndarray, x_dot_i: np.ndarray) -> np.ndarray:
    """Objective vector [L0 pseudo-norm, L2 residual] of one output."""
    residual = x_dot_i - theta.T @ xi_i
    return np.array([np.count_nonzero(xi_i), np.linalg.norm(residual)], dtype=float)


def discover(
    X: np.ndarray,
    X_dot: np.ndarray,
    basis: BasisLike,
    thresholds: Optional[Sequence[float]] = None,
    *,
    scalarization: Optional[AbstractScalarizationMethod] = None,
    params: Optional[Sequence[Any]] = None,
    timepoints: Optional[np.ndarray] = None,
    maxiter: int = DEFAULT_MAXITER,
    optimizer: Optional[AbstractOptimizer] = None,
    denoise: bool = False,
    normalize: bool = True,
    convergence_error: float = DEFAULT_CONVERGENCE_ERROR,
    front_size: Optional[int] = 1,
) -> SINDyResult:
    """
    Identify governing equations by sparse regression.

    Without ``thresholds`` a single regression is run with the optimizer's
    current threshold. With ``thresholds`` every value is tried in order and
    each output keeps the candidate on its Pareto front that scores best
    under ``scalarization``.

    Parameters
    ----------
    X : np.ndarray
        State data with shape [n_states, n_samples]; a 1-D array is one state.
    X_dot : np.ndarray
        Derivative data with shape [n_outputs, n_samples]; a 1-D array is one
        output.
    basis : Basis or callable
        Candidate function library, evaluated as ``basis(X, params, timepoints)``.
    thresholds : sequence of float, optional
        Thresholds to sweep. Must not be empty if given.
    scalarization : AbstractScalarizationMethod, optional
        Ranking of non-dominated candidates on the normalized objectives
        (default: WeightedSum()).
    params : sequence, optional
        Basis parameters (default: empty).
    timepoints : np.ndarray, optional
        Sample times (default: empty).
    maxiter : int, optional
        Iteration cap of the optimizer (default: 10).
    optimizer : AbstractOptimizer, optional
        Sparse regression algorithm (default: STRRidge()). Its threshold is
        left at the selected value.
    denoise : bool, optional
        Denoise the feature matrix by optimal shrinkage (default: False).
    normalize : bool, optional
        Normalize feature rows before fitting (default: True).
    convergence_error : float, optional
        Optimizer tolerance (default: machine epsilon).
    front_size : int or None, optional
        Candidates kept per output during a sweep; None keeps every
        non-dominated candidate (default: 1).

    Returns
    -------
    result : SINDyResult
        Coefficients and run metadata.

    Examples
    --------
    >>> result = discover(X, X_dot, basis, np.logspace(-2, 0, 10))
    >>> result.coefficients.shape
    (6, 2)
    """
    X = as_data_matrix(X, "X")
    X_dot = as_data_matrix(X_dot, "X_dot")
    check_sample_counts(X, X_dot)

    params = [] if params is None else params
    timepoints = np.asarray([] if timepoints is None else timepoints)
    optimizer = STRRidge() if optimizer is None else optimizer

    if thresholds is None:
        return _discover_single(
            X, X_dot, basis, params, timepoints, maxiter, optimizer,
            denoise, normalize, convergence_error,
        )

    thresholds = np.atleast_1d(np.asarray(thresholds, dtype=float))
    if thresholds.size == 0:
        raise ValueError("thresholds must contain at least one value")

    return _discover_pareto(
        X, X_dot, basis, thresholds, scalarization, params, timepoints, maxiter,
        optimizer, denoise, normalize, convergence_error, front_size,
    )


def _discover_single(
    X: np.ndarray,
    X_dot: np.ndarray,
    basis: BasisLike,
    params: Sequence[Any],
    timepoints: np.ndarray,
    maxiter: int,
    optimizer: AbstractOptimizer,
    denoise: bool,
    normalize: bool,
    convergence_error: float,
) -> SINDyResult:
    theta = evaluate_basis(basis, X, params, timepoints)
    xi = np.zeros((theta.shape[0], X_dot.shape[0]))

    iterations = sparse_regression_features_inplace(
        xi, theta, X_dot, maxiter, optimizer, denoise, normalize, convergence_error
    )
    if iterations >= maxiter:
        logger.info("%r did not converge within %d iterations", optimizer, maxiter)

    return SINDyResult.assemble(
        xi, theta, basis, iterations, optimizer, X, X_dot, params, timepoints, maxiter
    )


def _discover_pareto(
    X: np.ndarray,
    X_dot: np.ndarray,
    basis: BasisLike,
    thresholds: np.ndarray,
    scalarization: Optional[AbstractScalarizationMethod],
    params: Sequence[Any],
    timepoints: np.ndarray,
    maxiter: int,
    optimizer: AbstractOptimizer,
    denoise: bool,
    normalize: bool,
    convergence_error: float,
    front_size: Optional[int],
) -> SINDyResult:
    theta = evaluate_basis(basis, X, params, timepoints)
    n_features = theta.shape[0]
    n_outputs = X_dot.shape[0]

    # Preprocess once, shared by all thresholds
    scales = np.ones(n_features)
    if denoise:
        optimal_shrinkage(theta.T)
    if normalize:
        normalize_theta(scales, theta)

    reference = np.column_stack(
        [np.full(n_outputs, n_features, dtype=float), np.linalg.norm(X_dot, axis=1)]
    )
    opt_front = ParetoFront(n_outputs, scalarization, reference, max_size=front_size)
    tmp_front = ParetoFront(n_outputs, scalarization, reference, max_size=front_size)

    xi = np.zeros((n_features, n_outputs))

    for j, threshold in enumerate(thresholds):
        optimizer.set_threshold(threshold)
        iterations = sparse_regression_features_inplace(
            xi, theta, X_dot, maxiter, optimizer, False, False, convergence_error
        )

        # Theta is still normalized here, so score before rescaling xi
        objectives = [_objective(xi[:, i], theta, X_dot[i]) for i in range(n_outputs)]
        if normalize:
            rescale_xi(xi, scales)

        for i in range(n_outputs):
            candidate = ParetoCandidate(
                objective=objectives[i],
                coefficients=xi[:, i].copy(),
                iterations=iterations,
                threshold=float(threshold),
            )
            tmp_front.set_candidate(i, candidate)
            if j == 0:
                opt_front.set_candidate(i, candidate)

        if j > 0:
            opt_front.conditional_add(tmp_front)

        logger.debug(
            "threshold %.4e: %d iterations, sparsity per output %s",
            threshold,
            iterations,
            np.count_nonzero(xi, axis=0).tolist(),
        )

    Xi = np.zeros((n_features, n_outputs))
    for i in range(n_outputs):
        Xi[:, i] = opt_front[i].coefficients

    best = opt_front.best()
    optimizer.set_threshold(best.threshold)
    if best.iterations >= maxiter:
        logger.info("%r did not converge within %d iterations", optimizer, maxiter)

    if normalize:
        rescale_theta(theta, scales)

    return SINDyResult.assemble(
        Xi, theta, basis, best.iterations, optimizer, X, X_dot, params, timepoints,
        maxiter, front=opt_front,
    )
