"""
Interface shared by all sparse regression optimizers.

An optimizer solves ``A @ xi ~= Y`` for a sparse coefficient matrix, where
``A = Theta.T`` has shape [n_samples, n_features] and ``Y = X_dot.T`` has
shape [n_samples, n_outputs]. Coefficients are written into a caller-owned
buffer ``xi`` of shape [n_features, n_outputs].
"""

from abc import ABC, abstractmethod

import numpy as np

# Default sparsity threshold for all optimizers
DEFAULT_THRESHOLD = 0.1


class AbstractOptimizer(ABC):
    """
    Base class for iterative sparsity-promoting solvers.

    Subclasses implement :meth:`fit`. The default :meth:`init` writes the
    ordinary least-squares solution into the buffer.

    Parameters
    ----------
    threshold : float, optional
        Sparsity-inducing threshold used by subsequent fits (default: 0.1).
    """

    def __init__(self, threshold: float = DEFAULT_THRESHOLD):
        self.set_threshold(threshold)

    @property
    def threshold(self) -> float:
        """Current sparsity threshold."""
        return self._threshold

    def set_threshold(self, value: float) -> None:
        """Update the threshold used by the next call to :meth:`fit`."""
        value = float(value)
        if not np.isfinite(value) or value < 0:
            raise ValueError(f"threshold must be a non-negative number, got {value}")
        self._threshold = value

    def init(self, xi: np.ndarray, A: np.ndarray, Y: np.ndarray) -> None:
        """
        Write the least-squares solution of ``A @ xi = Y`` into ``xi``.

        Parameters
        ----------
        xi : np.ndarray
            Coefficient buffer with shape [n_features, n_outputs].
        A : np.ndarray
            Design matrix with shape [n_samples, n_features].
        Y : np.ndarray
            Targets with shape [n_samples, n_outputs].
        """
        self._check_data(A, Y)
        xi[...] = np.linalg.lstsq(A, Y, rcond=None)[0]
        self._check_finite(xi)

    @abstractmethod
    def fit(
        self,
        xi: np.ndarray,
        A: np.ndarray,
        Y: np.ndarray,
        maxiter: int,
        convergence_error: float,
    ) -> int:
        """
        Refine ``xi`` in place starting from its current value.

        Returns
        -------
        iterations : int
            Number of iterations performed, in ``[0, maxiter]``. A value equal
            to ``maxiter`` means the tolerance was not reached.
        """

    @staticmethod
    def _check_maxiter(maxiter: int) -> None:
        if maxiter < 0:
            raise ValueError(f"maxiter must be non-negative, got {maxiter}")

    @staticmethod
    def _check_data(A: np.ndarray, Y: np.ndarray) -> None:
        if not (np.all(np.isfinite(A)) and np.all(np.isfinite(Y))):
            raise FloatingPointError("design matrix or targets contain non-finite values")

    @staticmethod
    def _check_finite(xi: np.ndarray) -> None:
        if not np.all(np.isfinite(xi)):
            raise FloatingPointError("optimizer produced non-finite coefficients")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(threshold={self.threshold!r})"
