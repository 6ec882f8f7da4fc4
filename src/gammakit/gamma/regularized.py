import numpy as np

from ..analysis import ContinuedFraction, Summation
from ..base import BivariateRealFunction
from ..error import DomainError
from ..logging import logger
from ..robust_math import EPSILON
from .loggamma import LogGamma

# Above this x, Q(s, x) underflows for every s the series can handle
UNDERFLOW_X = 1e8


class GammaRegularizedQ(BivariateRealFunction):
    r"""The regularized upper incomplete gamma function.

    $$
    Q(s, x) = \\frac{\\Gamma(s, x)}{\\Gamma(s)} = \\frac{1}{\\Gamma(s)} \\int_x^\\infty t^{s-1} e^{-t} dt
    $$

    for $s \\geq 0$ and $x \\geq 0$. For $x < s + 1$ Pearson's series
    converges fast, otherwise Legendre's continued fraction is used.

    Args:
        log_gamma (LogGamma, optional): The log-gamma evaluator. Defaults to LogGamma().
        epsilon (float, optional): Convergence threshold of the series and the
            continued fraction. Defaults to EPSILON.
        max_series_terms (int, optional): Term budget of the series. Defaults to 1_000_000.
        max_cf_iterations (int, optional): Iteration budget of the continued
            fraction. Defaults to 100_000.
    """

    def __init__(
        self,
        log_gamma: LogGamma | None = None,
        epsilon: float = EPSILON,
        max_series_terms: int = 1_000_000,
        max_cf_iterations: int = 100_000,
    ):
        self.log_gamma = log_gamma if log_gamma is not None else LogGamma()
        self.epsilon = epsilon
        self.max_series_terms = max_series_terms
        self.max_cf_iterations = max_cf_iterations

    @staticmethod
    def _validate(s: float, x: float) -> None:
        if not s >= 0:
            raise DomainError(f"s must be >= 0, got {s}.")
        if not x >= 0:
            raise DomainError(
                f"x must be >= 0, got {x}; x < 0 gives a complex number."
            )

    def evaluate(self, s: float, x: float) -> float:
        """Evaluate $Q(s, x)$.

        Args:
            s (float): $s \\geq 0$.
            x (float): $x \\geq 0$.

        Returns:
            float: $Q(s, x)$.

        Raises:
            DomainError: If $s < 0$ or $x < 0$.
            NonConvergenceError: If the series or continued fraction does not
                converge within its budget.
        """
        s, x = float(s), float(x)
        self._validate(s, x)

        if s == 0:
            # Q(0, x) = 0, including Q(0, 0)
            return 0.0
        if x == 0:
            return 1.0
        if x > UNDERFLOW_X:
            return 0.0
        if x < s + 1:
            return self.evaluate_by_series(s, x)
        return self.evaluate_by_continued_fraction(s, x)

    def _log_prefactor(self, s: float, x: float) -> float:
        # log(x^s e^{-x} / Gamma(s))
        return s * np.log(x) - x - self.log_gamma.evaluate(s)

    def evaluate_by_series(self, s: float, x: float) -> float:
        """Evaluate $Q(s, x)$ with Pearson's series, fast for $x < s + 1$."""
        term = 0.0

        def next_term(n: float) -> float:
            nonlocal term
            if n == 0:
                term = 1.0 / s
            else:
                term *= x / (s + n)
            return term

        series = Summation(
            next_term, threshold=self.epsilon, max_iterations=self.max_series_terms
        )
        total = series.sum_to_infinity(0)
        logger.debug(f"Q({s}, {x}) by Pearson's series.")
        return 1.0 - float(np.exp(self._log_prefactor(s, x))) * total

    def evaluate_by_continued_fraction(self, s: float, x: float) -> float:
        """Evaluate $Q(s, x)$ with Legendre's continued fraction, fast for $x \\geq s + 1$."""

        def a(n: int, u: float) -> float:
            if n == 1:
                return 1.0
            return (n - 1) * (s - (n - 1))

        def b(n: int, u: float) -> float:
            if n == 0:
                return 0.0
            return 2 * n - 1 - s + u

        cf = ContinuedFraction(
            a, b, tolerance=self.epsilon, max_iterations=self.max_cf_iterations
        )
        logger.debug(f"Q({s}, {x}) by Legendre's continued fraction.")
        return float(np.exp(self._log_prefactor(s, x))) * cf.evaluate(x)


class GammaRegularizedP(BivariateRealFunction):
    r"""The regularized lower incomplete gamma function $P(s, x) = 1 - Q(s, x)$.

    Args:
        q (GammaRegularizedQ, optional): The evaluator of $Q$. Defaults to GammaRegularizedQ().
    """

    def __init__(self, q: GammaRegularizedQ | None = None):
        self.q = q if q is not None else GammaRegularizedQ()

    def evaluate(self, s: float, x: float) -> float:
        return 1.0 - self.q.evaluate(s, x)
