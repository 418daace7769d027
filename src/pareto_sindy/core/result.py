"""
Result container of a sparse identification run.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence

import numpy as np

from ..optimizers import AbstractOptimizer
from .basis import BasisLike, as_data_matrix, evaluate_basis
from .pareto import ParetoFront


def _frozen(array: np.ndarray) -> np.ndarray:
    array = np.array(array, copy=True)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class SINDyResult:
    """
    Immutable outcome of :func:`discover`.

    Attributes
    ----------
    coefficients : np.ndarray
        Read-only coefficient matrix Xi with shape [n_features, n_outputs].
    basis : Basis or callable
        Basis the coefficients refer to.
    iterations : int
        Optimizer iterations of the run, or of the winning candidate of a
        threshold sweep.
    optimizer : AbstractOptimizer
        Optimizer instance, with its threshold left at the selected value.
    converged : bool
        True if ``iterations < maxiter``.
    X : np.ndarray
        State data the model was identified from.
    X_dot : np.ndarray
        Derivative data the model was identified from.
    params : sequence
        Basis parameters used during identification.
    timepoints : np.ndarray
        Sample times used during identification.
    maxiter : int
        Iteration cap of the run.
    threshold : float
        Threshold that produced the result.
    sparsity : np.ndarray
        Number of non-zero coefficients per output [n_outputs].
    error : np.ndarray
        L2 norm of the derivative residual per output [n_outputs].
    front : ParetoFront or None
        Pareto front of a threshold sweep, None for a single-threshold run.
    """

    coefficients: np.ndarray
    basis: BasisLike
    iterations: int
    optimizer: AbstractOptimizer
    converged: bool
    X: np.ndarray
    X_dot: np.ndarray
    params: Sequence[Any]
    timepoints: np.ndarray
    maxiter: int
    threshold: float
    sparsity: np.ndarray
    error: np.ndarray
    front: Optional[ParetoFront] = None

    @classmethod
    def assemble(
        cls,
        xi: np.ndarray,
        theta: np.ndarray,
        basis: BasisLike,
        iterations: int,
        optimizer: AbstractOptimizer,
        X: np.ndarray,
        X_dot: np.ndarray,
        params: Sequence[Any],
        timepoints: np.ndarray,
        maxiter: int,
        front: Optional[ParetoFront] = None,
    ) -> "SINDyResult":
        """
        Build a result from a coefficient matrix and the feature matrix it fits.

        ``theta`` must be in the same units as ``xi``; it is only used to
        compute the per-output residual and is not stored.
        """
        residual = X_dot - xi.T @ theta
        return cls(
            coefficients=_frozen(xi),
            basis=basis,
            iterations=int(iterations),
            optimizer=optimizer,
            converged=bool(iterations < maxiter),
            X=X,
            X_dot=X_dot,
            params=params,
            timepoints=timepoints,
            maxiter=maxiter,
            threshold=optimizer.threshold,
            sparsity=_frozen(np.count_nonzero(xi, axis=0)),
            error=_frozen(np.linalg.norm(residual, axis=1)),
            front=front,
        )

    @property
    def n_features(self) -> int:
        return self.coefficients.shape[0]

    @property
    def n_outputs(self) -> int:
        return self.coefficients.shape[1]

    @property
    def active(self) -> np.ndarray:
        """Boolean mask of non-zero coefficients [n_features, n_outputs]."""
        return self.coefficients != 0

    def predict(
        self,
        X: np.ndarray,
        params: Optional[Sequence[Any]] = None,
        timepoints: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """
        Evaluate the identified right-hand side on new state data.

        Parameters
        ----------
        X : np.ndarray
            State data with shape [n_states, n_samples].
        params : sequence, optional
            Basis parameters (default: the ones used for identification).
        timepoints : np.ndarray, optional
            Sample times (default: none).

        Returns
        -------
        X_dot : np.ndarray
            Predicted derivatives with shape [n_outputs, n_samples].
        """
        params = self.params if params is None else params
        theta = evaluate_basis(self.basis, as_data_matrix(X, "X"), params, timepoints)
        return self.coefficients.T @ theta
