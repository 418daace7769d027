"""
Shared fixtures: a polynomial basis and data from a linear test system.

The test system is

    dx1/dt = -0.1 * x1
    dx2/dt =  2.0 * x1 - 0.1 * x2

sampled along its analytic solution from several initial conditions.
"""

from itertools import combinations_with_replacement
from typing import List

import numpy as np
import pytest

# Dynamics matrix of the linear test system
A_TRUE = np.array([[-0.1, 0.0], [2.0, -0.1]])


class PolynomialBasis:
    """All monomials of the state up to ``degree``, including the constant."""

    def __init__(self, n_states: int, degree: int = 2):
        self.n_states = n_states
        self.degree = degree
        self.terms: List[tuple] = [()]
        for d in range(1, degree + 1):
            self.terms.extend(combinations_with_replacement(range(n_states), d))

    def __len__(self) -> int:
        return len(self.terms)

    @property
    def names(self) -> List[str]:
        return ["1" if not t else "*".join(f"x{i + 1}" for i in t) for t in self.terms]

    def index(self, name: str) -> int:
        return self.names.index(name)

    def evaluate(self, X, params, timepoints) -> np.ndarray:
        X = np.atleast_2d(X)
        rows = [np.prod(X[list(t)], axis=0) if t else np.ones(X.shape[1]) for t in self.terms]
        return np.vstack(rows)


def linear_trajectories(n_trajectories: int = 4, n_points: int = 200, t_end: float = 20.0):
    """Analytic solutions of the test system and their exact derivatives."""
    rng = np.random.default_rng(0)
    t = np.linspace(0.0, t_end, n_points)
    states = []
    for _ in range(n_trajectories):
        a, b = rng.uniform(-2.0, 2.0, size=2)
        decay = np.exp(-0.1 * t)
        states.append(np.vstack([a * decay, (b + 2.0 * a * t) * decay]))
    X = np.hstack(states)
    return X, A_TRUE @ X


@pytest.fixture
def basis():
    """Degree-2 polynomial basis in two states: 1, x1, x2, x1^2, x1*x2, x2^2."""
    return PolynomialBasis(n_states=2, degree=2)


@pytest.fixture
def linear_data():
    """Noiseless state and derivative data of the linear test system."""
    return linear_trajectories()


@pytest.fixture
def true_xi(basis):
    """Coefficient matrix of the linear test system in the polynomial basis."""
    xi = np.zeros((len(basis), 2))
    xi[basis.index("x1"), 0] = -0.1
    xi[basis.index("x1"), 1] = 2.0
    xi[basis.index("x2"), 1] = -0.1
    return xi


@pytest.fixture
def noisy_data():
    """Random states with derivatives of the test system plus Gaussian noise."""
    rng = np.random.default_rng(7)
    X = rng.uniform(-2.0, 2.0, size=(2, 400))
    X_dot = A_TRUE @ X + 0.05 * rng.standard_normal((2, 400))
    return X, X_dot
