"""
Sparse relaxed regularized regression (SR3).

References
----------
Zheng et al. (2019) "A Unified Framework for Sparse Relaxed Regularized
Regression: SR3", IEEE Access 7.
Champion et al. (2020) "A unified sparse optimization framework to learn
parsimonious physics-informed models from data", IEEE Access 8.
"""

import numpy as np
from scipy import linalg

from .base import DEFAULT_THRESHOLD, AbstractOptimizer


class SR3(AbstractOptimizer):
    """
    Relaxed sparse regression with a hard-threshold proximal step.

    Alternates between a ridge-like update of the coefficients, pulled towards
    the relaxation variable ``w``, and hard thresholding of ``w`` at
    ``threshold``. The relaxation variable is returned as the solution.

    Parameters
    ----------
    threshold : float, optional
        Magnitude below which relaxed coefficients are zeroed (default: 0.1).
    nu : float, optional
        Relaxation strength; smaller values couple ``xi`` and ``w`` more
        tightly (default: 1.0).
    """

    def __init__(self, threshold: float = DEFAULT_THRESHOLD, nu: float = 1.0):
        super().__init__(threshold)
        if nu <= 0:
            raise ValueError(f"nu must be positive, got {nu}")
        self.nu = nu

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

        factor = linalg.cho_factor(A.T @ A + np.eye(n_terms) / self.nu)
        AtY = A.T @ Y

        w = np.where(np.abs(xi) > self.threshold, xi, 0.0)
        iterations = maxiter

        for iteration in range(1, maxiter + 1):
            w_prev = w.copy()

            x = linalg.cho_solve(factor, AtY + w / self.nu)
            w = np.where(np.abs(x) > self.threshold, x, 0.0)

            if np.linalg.norm(w - w_prev) < convergence_error:
                iterations = iteration
                break

        xi[...] = w
        self._check_finite(xi)
        return iterations

    def __repr__(self) -> str:
        return f"SR3(threshold={self.threshold!r}, nu={self.nu!r})"
