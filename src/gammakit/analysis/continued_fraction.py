from typing import Callable

from ..base import UnivariateRealFunction
from ..error import NonConvergenceError
from ..robust_math import EPSILON, SMALL_NUMBER


class ContinuedFraction(UnivariateRealFunction):
    r"""A continued fraction evaluated with the modified Lentz algorithm.

    The continued fraction is

    $$
    f(x) = b_0 + \\frac{a_1}{b_1 + \\frac{a_2}{b_2 + \\frac{a_3}{b_3 + \\cdots}}}
    $$

    where the partial numerators $a_n(x)$, $n \\geq 1$, and the partial
    denominators $b_n(x)$, $n \\geq 0$, are given as callbacks.

    Args:
        a (Callable[[int, float], float]): The partial numerator $a_n(x)$.
        b (Callable[[int, float], float]): The partial denominator $b_n(x)$.
        tolerance (float, optional): Stop when the multiplicative update
            $\\Delta_n$ satisfies $|\\Delta_n - 1| < $ tolerance. Defaults to EPSILON.
        max_iterations (int, optional): Maximum number of iterations. Defaults to 100_000.
    """

    def __init__(
        self,
        a: Callable[[int, float], float],
        b: Callable[[int, float], float],
        tolerance: float = EPSILON,
        max_iterations: int = 100_000,
    ):
        self.a = a
        self.b = b
        self.tolerance = tolerance
        self.max_iterations = max_iterations

    def evaluate(self, x: float) -> float:
        """Evaluate the continued fraction at `x`.

        Raises:
            NonConvergenceError: If `max_iterations` is exceeded.
        """
        b0 = self.b(0, x)
        f = b0 if b0 != 0 else SMALL_NUMBER
        C = f
        D = 0.0

        for n in range(1, self.max_iterations + 1):
            an = self.a(n, x)
            bn = self.b(n, x)

            D = bn + an * D
            D = SMALL_NUMBER if D == 0 else D
            D = 1.0 / D

            C = bn + an / C
            C = SMALL_NUMBER if C == 0 else C

            delta = C * D
            f *= delta

            if abs(delta - 1.0) < self.tolerance:
                return f

        raise NonConvergenceError(self.max_iterations)
