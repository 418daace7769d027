"""
Single-threshold sparse regression driver.

Runs one pass of denoise -> normalize -> optimize -> rescale for the
optimizer's current threshold. Three entry points are provided:

- :func:`sparse_regression` evaluates the basis and returns a new Xi.
- :func:`sparse_regression_inplace` evaluates the basis and fills a
  caller-supplied Xi buffer.
- :func:`sparse_regression_features_inplace` works on an already evaluated
  feature matrix, which it mutates in place (used by the threshold sweep).
"""

import logging
from typing import Any, Optional, Sequence, Tuple

import numpy as np

from ..optimizers import AbstractOptimizer
from .basis import BasisLike, as_data_matrix, check_sample_counts, evaluate_basis
from .preprocessing import normalize_theta, optimal_shrinkage, rescale_theta, rescale_xi

logger = logging.getLogger(__name__)

# Default number of optimizer iterations
DEFAULT_MAXITER = 10

# Default convergence tolerance (machine epsilon)
DEFAULT_CONVERGENCE_ERROR = float(np.finfo(float).eps)


def check_coefficient_shape(xi: np.ndarray, n_features: int, n_outputs: int) -> None:
    """Raise if the coefficient buffer does not match [n_features, n_outputs]."""
    if xi.shape != (n_features, n_outputs):
        raise ValueError(
            f"xi has shape {xi.shape}, expected ({n_features}, {n_outputs})"
        )


def sparse_regression_features_inplace(
    xi: np.ndarray,
    theta: np.ndarray,
    X_dot: np.ndarray,
    maxiter: int,
    optimizer: AbstractOptimizer,
    denoise: bool,
    normalize: bool,
    convergence_error: float,
) -> int:
    """
    Sparse regression on a pre-evaluated feature matrix.

    Finds ``xi`` such that ``X_dot ~= xi.T @ theta`` using ``optimizer``.
    Theta is denoised and normalized in place when requested; after the fit
    a normalized Theta is scaled back to its original units.

    Parameters
    ----------
    xi : np.ndarray
        Coefficient buffer with shape [n_features, n_outputs], overwritten.
    theta : np.ndarray
        Float feature matrix with shape [n_features, n_samples].
    X_dot : np.ndarray
        Targets with shape [n_outputs, n_samples].
    maxiter : int
        Iteration cap of the optimizer.
    optimizer : AbstractOptimizer
        Sparse regression algorithm, used with its current threshold.
    denoise : bool
        Apply optimal singular value shrinkage to Theta first.
    normalize : bool
        Normalize the rows of Theta to unit L2 norm before fitting.
    convergence_error : float
        Tolerance on the change of ``xi`` between iterations.

    Returns
    -------
    iterations : int
        Iterations used by the optimizer.
    """
    X_dot = as_data_matrix(X_dot, "X_dot")
    check_sample_counts(theta, X_dot)
    check_coefficient_shape(xi, theta.shape[0], X_dot.shape[0])

    scales = np.ones(theta.shape[0], dtype=theta.dtype)

    if denoise:
        optimal_shrinkage(theta.T)
    if normalize:
        normalize_theta(scales, theta)

    try:
        optimizer.init(xi, theta.T, X_dot.T)
        iterations = optimizer.fit(
            xi, theta.T, X_dot.T, maxiter=maxiter, convergence_error=convergence_error
        )
    finally:
        if normalize:
            rescale_theta(theta, scales)

    if normalize:
        rescale_xi(xi, scales)

    logger.debug(
        "%r finished after %d/%d iterations with %d active terms",
        optimizer,
        iterations,
        maxiter,
        int(np.count_nonzero(xi)),
    )
    return iterations


def sparse_regression_inplace(
    xi: np.ndarray,
    X: np.ndarray,
    X_dot: np.ndarray,
    basis: BasisLike,
    params: Optional[Sequence[Any]],
    timepoints: Optional[np.ndarray],
    maxiter: int,
    optimizer: AbstractOptimizer,
    denoise: bool,
    normalize: bool,
    convergence_error: float,
) -> int:
    """
    Sparse regression into a caller-supplied coefficient buffer.

    Evaluates ``basis`` on ``X`` and then behaves like
    :func:`sparse_regression_features_inplace`.

    Parameters
    ----------
    xi : np.ndarray
        Coefficient buffer with shape [n_features, n_outputs].
    X : np.ndarray
        State data with shape [n_states, n_samples].
    X_dot : np.ndarray
        Derivative data with shape [n_outputs, n_samples].
    basis : Basis or callable
        Candidate function library.
    params, timepoints
        Forwarded to the basis.

    Returns
    -------
    iterations : int
        Iterations used by the optimizer.
    """
    X = as_data_matrix(X, "X")
    X_dot = as_data_matrix(X_dot, "X_dot")
    check_sample_counts(X, X_dot)

    theta = evaluate_basis(basis, X, params, timepoints)
    check_coefficient_shape(xi, theta.shape[0], X_dot.shape[0])

    return sparse_regression_features_inplace(
        xi, theta, X_dot, maxiter, optimizer, denoise, normalize, convergence_error
    )


def sparse_regression(
    X: np.ndarray,
    X_dot: np.ndarray,
    basis: BasisLike,
    params: Optional[Sequence[Any]],
    timepoints: Optional[np.ndarray],
    maxiter: int,
    optimizer: AbstractOptimizer,
    denoise: bool,
    normalize: bool,
    convergence_error: float,
) -> Tuple[np.ndarray, int]:
    """
    Sparse regression returning a newly allocated coefficient matrix.

    Returns
    -------
    xi : np.ndarray
        Coefficients with shape [n_features, n_outputs].
    iterations : int
        Iterations used by the optimizer.

    Examples
    --------
    >>> opt = STRRidge(threshold=0.1)
    >>> xi, iters = sparse_regression(X, X_dot, basis, [], [], 10, opt, False, True, 1e-8)
    """
    X = as_data_matrix(X, "X")
    X_dot = as_data_matrix(X_dot, "X_dot")
    check_sample_counts(X, X_dot)

    theta = evaluate_basis(basis, X, params, timepoints)
    xi = np.zeros((theta.shape[0], X_dot.shape[0]), dtype=theta.dtype)

    iterations = sparse_regression_features_inplace(
        xi, theta, X_dot, maxiter, optimizer, denoise, normalize, convergence_error
    )
    return xi, iterations
