"""
Pareto fronts over the (sparsity, error) objective space.

Each output variable owns its own front. Candidates are compared by Pareto
domination first; mutually non-dominated candidates are ranked by a
scalarization method such as :class:`WeightedSum`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import cmp_to_key
from typing import List, Optional, Sequence

import numpy as np

# Default weights of (sparsity, error) in the weighted sum
DEFAULT_WEIGHTS = (0.5, 0.5)


@dataclass
class ParetoCandidate:
    """
    One regression outcome for a single output variable.

    Attributes
    ----------
    objective : np.ndarray
        Objective vector [sparsity, error]: the number of non-zero
        coefficients and the L2 norm of the residual.
    coefficients : np.ndarray
        Coefficient vector with shape [n_features].
    iterations : int
        Optimizer iterations spent on this candidate.
    threshold : float
        Threshold the candidate was fitted with.
    """

    objective: np.ndarray
    coefficients: np.ndarray
    iterations: int
    threshold: float

    @property
    def sparsity(self) -> float:
        return float(self.objective[0])

    @property
    def error(self) -> float:
        return float(self.objective[1])


def dominates(a: np.ndarray, b: np.ndarray) -> bool:
    """
    Pareto domination for minimization.

    ``a`` dominates ``b`` if it is no worse in every objective and strictly
    better in at least one.
    """
    a = np.asarray(a)
    b = np.asarray(b)
    return bool(np.all(a <= b) and np.any(a < b))


class AbstractScalarizationMethod(ABC):
    """Collapses an objective vector into a single score (lower is better)."""

    @abstractmethod
    def __call__(self, objective: np.ndarray) -> float:
        """Score of an objective vector."""

    def compare(self, a: np.ndarray, b: np.ndarray) -> bool:
        """Return True if objective ``a`` is strictly preferred over ``b``."""
        return self(a) < self(b)


class WeightedSum(AbstractScalarizationMethod):
    """
    Weighted sum of the objectives.

    Parameters
    ----------
    weights : sequence of float, optional
        Non-negative weights, one per objective (default: (0.5, 0.5)).
    """

    def __init__(self, weights: Sequence[float] = DEFAULT_WEIGHTS):
        weights = np.asarray(weights, dtype=float)
        if weights.ndim != 1 or np.any(weights < 0) or not np.any(weights > 0):
            raise ValueError(
                f"weights must be non-negative with at least one positive entry, got {weights}"
            )
        self.weights = weights

    def __call__(self, objective: np.ndarray) -> float:
        objective = np.asarray(objective, dtype=float)
        if objective.shape != self.weights.shape:
            raise ValueError(
                f"objective has shape {objective.shape}, weights have shape {self.weights.shape}"
            )
        return float(objective @ self.weights)

    def __repr__(self) -> str:
        return f"WeightedSum(weights={self.weights.tolist()!r})"


class ParetoFront:
    """
    Per-output collection of mutually non-dominated candidates.

    Objectives are divided by a per-output reference vector before
    scalarization, which puts sparsity and error on comparable scales. The
    regression sweep uses ``(n_features, ||X_dot_i||)`` as reference.

    Parameters
    ----------
    n_outputs : int
        Number of output variables.
    scalarization : AbstractScalarizationMethod, optional
        Ranking of non-dominated candidates through its ``compare`` method
        (default: WeightedSum()).
    reference : np.ndarray, optional
        Normalization per output with shape [n_outputs, 2]. Zero entries are
        treated as 1 (default: no normalization).
    max_size : int or None, optional
        Number of candidates kept per output. 1 keeps only the scalarized
        winner; None keeps the whole non-dominated set (default: 1).
    """

    def __init__(
        self,
        n_outputs: int,
        scalarization: Optional[AbstractScalarizationMethod] = None,
        reference: Optional[np.ndarray] = None,
        max_size: Optional[int] = 1,
    ):
        if max_size is not None and max_size < 1:
            raise ValueError(f"max_size must be None or at least 1, got {max_size}")

        self.scalarization = WeightedSum() if scalarization is None else scalarization
        self.max_size = max_size

        if reference is None:
            reference = np.ones((n_outputs, 2))
        reference = np.array(reference, dtype=float)
        if reference.shape[0] != n_outputs:
            raise ValueError(
                f"reference has {reference.shape[0]} rows for {n_outputs} outputs"
            )
        reference[reference == 0.0] = 1.0
        self.reference = reference

        self._fronts: List[List[ParetoCandidate]] = [[] for _ in range(n_outputs)]
        self._evaluated: List[List[ParetoCandidate]] = [[] for _ in range(n_outputs)]

    def __len__(self) -> int:
        return len(self._fronts)

    def __getitem__(self, i: int) -> ParetoCandidate:
        return self.winner(i)

    def normalized(self, i: int, candidate: ParetoCandidate) -> np.ndarray:
        """Objective of ``candidate`` divided by the reference of output ``i``."""
        return candidate.objective / self.reference[i]

    def score(self, i: int, candidate: ParetoCandidate) -> float:
        """Scalarized, normalized objective of ``candidate`` for output ``i``."""
        return self.scalarization(self.normalized(i, candidate))

    def prefers(self, i: int, a: ParetoCandidate, b: ParetoCandidate) -> bool:
        """True if the scalarization strictly prefers ``a`` over ``b`` for output ``i``."""
        return bool(self.scalarization.compare(self.normalized(i, a), self.normalized(i, b)))

    def _order(self, i: int, a: ParetoCandidate, b: ParetoCandidate) -> int:
        if self.prefers(i, a, b):
            return -1
        if self.prefers(i, b, a):
            return 1
        return 0

    def candidates(self, i: int) -> List[ParetoCandidate]:
        """Retained candidates of output ``i``, best first."""
        return list(self._fronts[i])

    def evaluated(self, i: int) -> List[ParetoCandidate]:
        """Every candidate ever offered to output ``i``, in order."""
        return list(self._evaluated[i])

    def winner(self, i: int) -> ParetoCandidate:
        """Best retained candidate of output ``i``."""
        if not self._fronts[i]:
            raise IndexError(f"no candidate for output {i}")
        return self._fronts[i][0]

    def set_candidate(self, i: int, candidate: ParetoCandidate) -> None:
        """Replace the front of output ``i`` with a single candidate."""
        self._fronts[i] = [candidate]
        self._evaluated[i].append(candidate)

    def add(self, i: int, candidate: ParetoCandidate) -> bool:
        """
        Offer a candidate to the front of output ``i``.

        Returns
        -------
        accepted : bool
            True if the candidate is retained.
        """
        self._evaluated[i].append(candidate)
        front = self._fronts[i]

        if any(dominates(c.objective, candidate.objective) for c in front):
            return False

        survivors = [c for c in front if not dominates(candidate.objective, c.objective)]
        survivors.append(candidate)
        # Stable sort keeps earlier candidates first when neither is preferred
        survivors.sort(key=cmp_to_key(lambda a, b: self._order(i, a, b)))
        if self.max_size is not None:
            survivors = survivors[: self.max_size]

        self._fronts[i] = survivors
        return any(c is candidate for c in survivors)

    def conditional_add(self, other: "ParetoFront") -> None:
        """Merge every retained candidate of ``other`` into this front."""
        if len(other) != len(self):
            raise ValueError(
                f"cannot merge a front with {len(other)} outputs into one with {len(self)}"
            )
        for i in range(len(self)):
            for candidate in other.candidates(i):
                self.add(i, candidate)

    def best(self) -> ParetoCandidate:
        """Most preferred winner over all outputs (first on ties)."""
        best_index = 0
        for i in range(1, len(self)):
            a = self.normalized(i, self.winner(i))
            b = self.normalized(best_index, self.winner(best_index))
            if self.scalarization.compare(a, b):
                best_index = i
        return self.winner(best_index)

    @property
    def threshold(self) -> float:
        """Threshold of the overall winning candidate."""
        return self.best().threshold

    @property
    def iterations(self) -> int:
        """Iterations of the overall winning candidate."""
        return self.best().iterations
