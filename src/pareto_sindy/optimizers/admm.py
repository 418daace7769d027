"""
LASSO regression via the alternating direction method of multipliers.

References
----------
Boyd et al. (2011) "Distributed Optimization and Statistical Learning via
the Alternating Direction Method of Multipliers", Foundations and Trends in
Machine Learning 3(1).
"""

import numpy as np
from scipy import linalg

from .base import DEFAULT_THRESHOLD, AbstractOptimizer


def soft_threshold(x: np.ndarray, kappa: float) -> np.ndarray:
    """Proximal operator of ``kappa * ||x||_1``."""
    return np.sign(x) * np.maximum(np.abs(x) - kappa, 0.0)


class ADMM(AbstractOptimizer):
    """
    Solve ``min 0.5 * ||A xi - Y||^2 + threshold * ||xi||_1`` with ADMM.

    The sparse split variable is returned as the solution, so coefficients
    below the shrinkage level are exactly zero.

    Parameters
    ----------
    threshold : float, optional
        Weight of the L1 penalty (default: 0.1).
    rho : float, optional
        Augmented Lagrangian penalty parameter (default: 1.0).
    """

    def __init__(self, threshold: float = DEFAULT_THRESHOLD, rho: float = 1.0):
        super().__init__(threshold)
        if rho <= 0:
            raise ValueError(f"rho must be positive, got {rho}")
        self.rho = rho

    def fit(
        self,
        xi: np.ndarray,
        A: np.ndarray,
        Y: np.ndarray,
        maxiter: int,
        convergence_error: float,
    ) -> int:
        self._check_maxiter(maxiter)
        self._check_data(A, Y)
        n_terms = A.shape[1]

        factor = linalg.cho_factor(A.T @ A + self.rho * np.eye(n_terms))
        AtY = A.T @ Y
        kappa = self.threshold / self.rho

        z = xi.copy()
        u = np.zeros_like(xi)
        iterations = maxiter

        for iteration in range(1, maxiter + 1):
            z_prev = z.copy()

            x = linalg.cho_solve(factor, AtY + self.rho * (z - u))
            z = soft_threshold(x + u, kappa)
            u += x - z

            if np.linalg.norm(z - z_prev) < convergence_error:
                iterations = iteration
                break

        xi[...] = z
        self._check_finite(xi)
        return iterations

    def __repr__(self) -> str:
        return f"ADMM(threshold={self.threshold!r}, rho={self.rho!r})"
