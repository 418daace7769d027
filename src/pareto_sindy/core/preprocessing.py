"""
Preprocessing of the candidate feature matrix.

This module provides the in-place transforms applied to the feature matrix
Theta before sparse regression: row normalization, the inverse rescaling of
features and coefficients, and denoising via optimal hard thresholding of
singular values.

References
----------
Gavish & Donoho (2014) "The Optimal Hard Threshold for Singular Values is
4/sqrt(3)", IEEE Transactions on Information Theory, 60(8).
"""

import logging
import warnings

import numpy as np
from scipy import linalg

logger = logging.getLogger(__name__)


def _check_scales(scales: np.ndarray, matrix: np.ndarray, name: str) -> None:
    if len(scales) != matrix.shape[0]:
        raise ValueError(
            f"scales has length {len(scales)} but {name} has {matrix.shape[0]} rows"
        )


def normalize_theta(scales: np.ndarray, theta: np.ndarray) -> None:
    """
    Normalize every feature row of Theta to unit L2 norm, in place.

    Parameters
    ----------
    scales : np.ndarray
        Output buffer with shape [n_features]. Receives the L2 norm of each
        row before normalization.
    theta : np.ndarray
        Feature matrix with shape [n_features, n_samples].

    Notes
    -----
    A row with zero norm carries no information and is left as is; its
    scale is set to 1 so that rescaling stays the identity for that row.
    """
    _check_scales(scales, theta, "theta")

    norms = np.linalg.norm(theta, axis=1)
    zero_rows = norms == 0.0
    if np.any(zero_rows):
        warnings.warn(
            f"Feature rows {np.flatnonzero(zero_rows).tolist()} are identically zero "
            "and cannot be normalized"
        )
        norms[zero_rows] = 1.0

    scales[:] = norms
    theta /= norms[:, np.newaxis]


def rescale_xi(xi: np.ndarray, scales: np.ndarray) -> None:
    """
    Map coefficients found on a normalized Theta back to original units.

    Scaling feature row i by 1/s_i requires dividing coefficient row i
    by s_i to recover the fit on the unscaled features.

    Parameters
    ----------
    xi : np.ndarray
        Coefficient matrix with shape [n_features, n_outputs], modified in place.
    scales : np.ndarray
        Scales recorded by :func:`normalize_theta`.
    """
    _check_scales(scales, xi, "xi")
    xi /= scales[:, np.newaxis]


def rescale_theta(theta: np.ndarray, scales: np.ndarray) -> None:
    """Undo :func:`normalize_theta` on Theta, in place."""
    _check_scales(scales, theta, "theta")
    theta *= scales[:, np.newaxis]


def optimal_svht(m: int, n: int) -> float:
    """
    Optimal hard threshold coefficient for singular values with unknown noise.

    Polynomial approximation of omega(beta) from Gavish & Donoho, where
    beta is the aspect ratio of the matrix (at most 1). The threshold is
    omega(beta) times the median singular value.

    Parameters
    ----------
    m, n : int
        Matrix dimensions, in any order.

    Returns
    -------
    omega : float
        Threshold coefficient.
    """
    beta = min(m, n) / max(m, n)
    return 0.56 * beta**3 - 0.95 * beta**2 + 1.82 * beta + 1.43


def optimal_shrinkage(matrix: np.ndarray) -> None:
    """
    Denoise a matrix by hard thresholding its singular values, in place.

    Singular values below ``optimal_svht(m, n) * median(sigma)`` are set to
    zero and the matrix is overwritten with the reconstruction. Works on
    views, so ``optimal_shrinkage(theta.T)`` denoises Theta itself.

    Parameters
    ----------
    matrix : np.ndarray
        Two-dimensional array to denoise.
    """
    m, n = matrix.shape
    U, sigma, Vt = linalg.svd(matrix, full_matrices=False)

    tau = optimal_svht(m, n) * np.median(sigma)
    keep = sigma >= tau
    logger.debug(
        "Optimal shrinkage keeps %d of %d singular values (tau=%.3e)",
        int(np.sum(keep)),
        len(sigma),
        tau,
    )

    sigma = np.where(keep, sigma, 0.0)
    matrix[...] = (U * sigma) @ Vt
