"""
Contract for candidate-function bases and input shape handling.

Basis construction itself is outside this package. A basis is anything that
maps raw data to a feature matrix: either an object with an
``evaluate(X, params, timepoints)`` method or a plain callable with the same
signature. The returned matrix has shape [n_features, n_samples].
"""

from typing import Any, Callable, Optional, Protocol, Sequence, Union

import numpy as np


class Basis(Protocol):
    """Structural type of a basis object."""

    def evaluate(
        self, X: np.ndarray, params: Sequence[Any], timepoints: np.ndarray
    ) -> np.ndarray:
        ...


BasisLike = Union[Basis, Callable[[np.ndarray, Sequence[Any], np.ndarray], np.ndarray]]


def as_data_matrix(data: np.ndarray, name: str = "data") -> np.ndarray:
    """
    Promote a data array to the [n_variables, n_samples] layout.

    A 1-D array is treated as a single variable sampled over time and
    becomes a single-row matrix.

    Parameters
    ----------
    data : np.ndarray
        Array with one or two dimensions.
    name : str
        Name used in error messages.

    Returns
    -------
    matrix : np.ndarray
        Two-dimensional view (or copy) of ``data``.
    """
    matrix = np.asarray(data)
    if matrix.ndim == 1:
        return matrix[np.newaxis, :]
    if matrix.ndim != 2:
        raise ValueError(f"{name} must be 1-D or 2-D, got {matrix.ndim} dimensions")
    return matrix


def check_sample_counts(X: np.ndarray, X_dot: np.ndarray) -> None:
    """Raise if state and derivative data disagree on the number of samples."""
    if X.shape[-1] != X_dot.shape[-1]:
        raise ValueError(
            f"X has {X.shape[-1]} samples but X_dot has {X_dot.shape[-1]} samples"
        )


def evaluate_basis(
    basis: BasisLike,
    X: np.ndarray,
    params: Optional[Sequence[Any]] = None,
    timepoints: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Evaluate a basis on state data.

    Parameters
    ----------
    basis : Basis or callable
        Candidate function library.
    X : np.ndarray
        State data with shape [n_states, n_samples].
    params : sequence, optional
        Parameter values forwarded to the basis (default: empty).
    timepoints : np.ndarray, optional
        Sample times forwarded to the basis (default: empty).

    Returns
    -------
    theta : np.ndarray
        Float feature matrix with shape [n_features, n_samples]. Always a
        fresh array, safe to modify in place.
    """
    params = [] if params is None else params
    timepoints = np.asarray([] if timepoints is None else timepoints)

    evaluate = getattr(basis, "evaluate", basis)
    if not callable(evaluate):
        raise TypeError(f"basis of type {type(basis).__name__} is not callable")

    theta = np.array(evaluate(X, params, timepoints), dtype=float)
    theta = as_data_matrix(theta, "basis output")
    if theta.shape[1] != X.shape[-1]:
        raise ValueError(
            f"basis returned {theta.shape[1]} samples for {X.shape[-1]} input samples"
        )
    return theta
