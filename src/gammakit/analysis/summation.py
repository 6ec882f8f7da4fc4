from typing import Callable, Iterable

import numpy as np

from ..error import NonConvergenceError


class Summation:
    r"""Sum the terms of a (possibly infinite) series.

    The term callback receives the index $i$ and returns the $i$-th term. It is
    called with consecutive indices, so a term may be computed from the
    previous one by keeping state in a closure.

    Args:
        term (Callable[[float], float]): The $i$-th term of the series.
        threshold (float, optional): `sum_to_infinity` stops at the first term
            with absolute value below the threshold. Defaults to 0, which only
            allows finite sums.
        max_iterations (int, optional): Maximum number of terms of an infinite
            sum. Defaults to 1_000_000.
    """

    def __init__(
        self,
        term: Callable[[float], float],
        threshold: float = 0.0,
        max_iterations: int = 1_000_000,
    ):
        self.term = term
        self.threshold = threshold
        self.max_iterations = max_iterations

    def sum(self, start: float, stop: float, step: float = 1) -> float:
        """Sum the terms for the indices `start, start + step, ..., stop`.

        Args:
            start (float): The first index.
            stop (float): The last index, inclusive.
            step (float, optional): The index increment. Defaults to 1.

        Returns:
            float: The finite sum.
        """
        if step == 0:
            raise ValueError("step must not be 0")
        n_terms = int(np.floor((stop - start) / step)) + 1
        return self.sum_over(start + step * i for i in range(max(n_terms, 0)))

    def sum_over(self, indices: Iterable[float]) -> float:
        total = 0.0
        for i in indices:
            total += self.term(i)
        return total

    def sum_to_infinity(self, start: float = 0, step: float = 1) -> float:
        """Sum the series from `start` until the terms fall below the threshold.

        The first term below the threshold is not added.

        Raises:
            ValueError: If the threshold is 0, since the sum would never stop.
            NonConvergenceError: If `max_iterations` terms are summed without
                reaching the threshold.
        """
        if not self.threshold > 0:
            raise ValueError("The convergence threshold is 0; summing will not stop.")

        total = 0.0
        i = start
        for _ in range(self.max_iterations):
            value = self.term(i)
            if abs(value) < self.threshold:
                return total
            total += value
            i += step

        raise NonConvergenceError(self.max_iterations)
