"""
Sequentially thresholded least squares (STLS / STRidge).

References
----------
Brunton, Proctor & Kutz (2016) "Discovering governing equations from data by
sparse identification of nonlinear dynamical systems", PNAS 113(15).
Rudy et al. (2017) "Data-driven discovery of partial differential
equations", Science Advances 3(4).
"""

import numpy as np

from .base import DEFAULT_THRESHOLD, AbstractOptimizer


class STRRidge(AbstractOptimizer):
    """
    Sequentially thresholded ridge regression.

    Each iteration zeroes every coefficient with magnitude at most the
    threshold and refits each output on its remaining support. With
    ``alpha = 0`` the refit is plain least squares (classic STLS).

    Parameters
    ----------
    threshold : float, optional
        Coefficients with ``|xi| <= threshold`` are removed (default: 0.1).
    alpha : float, optional
        Ridge penalty of the refit (default: 0.0).

    Examples
    --------
    >>> opt = STRRidge(threshold=0.05)
    >>> opt.init(xi, Theta.T, X_dot.T)
    >>> iters = opt.fit(xi, Theta.T, X_dot.T, maxiter=10, convergence_error=1e-10)
    """

    def __init__(self, threshold: float = DEFAULT_THRESHOLD, alpha: float = 0.0):
        super().__init__(threshold)
        if alpha < 0:
            raise ValueError(f"alpha must be non-negative, got {alpha}")
        self.alpha = alpha

    def _solve(self, A: np.ndarray, y: np.ndarray) -> np.ndarray:
        if self.alpha == 0.0:
            return np.linalg.lstsq(A, y, rcond=None)[0]
        n_terms = A.shape[1]
        return np.linalg.solve(A.T @ A + self.alpha * np.eye(n_terms), A.T @ y)

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
        n_outputs = Y.shape[1]

        for iteration in range(1, maxiter + 1):
            xi_prev = xi.copy()

            small = np.abs(xi) <= self.threshold
            xi[small] = 0.0

            # Refit each equation on its active terms
            for j in range(n_outputs):
                big = ~small[:, j]
                if np.any(big):
                    xi[big, j] = self._solve(A[:, big], Y[:, j])

            self._check_finite(xi)
            if np.linalg.norm(xi - xi_prev) < convergence_error:
                return iteration

        xi[np.abs(xi) <= self.threshold] = 0.0
        return maxiter

    def __repr__(self) -> str:
        return f"STRRidge(threshold={self.threshold!r}, alpha={self.alpha!r})"
