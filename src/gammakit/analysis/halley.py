from typing import Callable

import numpy as np

from ..error import NoRootFoundError
from ..logging import logger
from ..robust_math import EPSILON

# Steps below this relative size are rounding noise once |f| stops decreasing.
_STALL_STEP = float(np.sqrt(EPSILON))


class Halley:
    r"""Halley's root-finding method.

    Given $f$ and its first two derivatives, iterate

    $$
    x_{n+1} = x_n - \\frac{2 f(x_n) f'(x_n)}{2 f'(x_n)^2 - f(x_n) f''(x_n)}
    $$

    which converges cubically near a simple root.

    The iteration stops when the step is smaller than
    $\\max(\\text{tolerance}, 4 \\epsilon |x|)$, when $f(x) = 0$, or when a
    step smaller than $\\sqrt{\\epsilon}|x|$ no longer reduces $|f|$.

    Args:
        tolerance (float): Absolute tolerance of the step size.
        max_iterations (int): Maximum number of iterations.
        lower (float | None, optional): Lower bound of the search interval.
            An iterate at or beyond the bound is replaced by the midpoint
            between the current iterate and the bound. Defaults to None.
        upper (float | None, optional): Upper bound, handled like `lower`.
            Defaults to None.
    """

    def __init__(
        self,
        tolerance: float,
        max_iterations: int,
        lower: float | None = None,
        upper: float | None = None,
    ):
        self.tolerance = tolerance
        self.max_iterations = max_iterations
        self.lower = lower
        self.upper = upper

    def _bracket(self, x: float, x_new: float) -> float:
        if self.lower is not None and x_new <= self.lower:
            return 0.5 * (x + self.lower)
        if self.upper is not None and x_new >= self.upper:
            return 0.5 * (x + self.upper)
        return x_new

    def solve(
        self,
        f: Callable[[float], float],
        df: Callable[[float], float],
        d2f: Callable[[float], float],
        guess: float,
    ) -> float:
        """Search for a root of `f` starting from `guess`.

        Args:
            f (Callable[[float], float]): The function.
            df (Callable[[float], float]): The first derivative of `f`.
            d2f (Callable[[float], float]): The second derivative of `f`.
            guess (float): The initial guess.

        Returns:
            float: The root.

        Raises:
            NoRootFoundError: If an iterate is not finite, the update is
                undefined, or the iteration budget is exhausted.
        """
        x = float(guess)
        if not np.isfinite(x):
            raise NoRootFoundError(0, f"Initial guess {x} is not finite.")
        fx = f(x)

        for i in range(1, self.max_iterations + 1):
            if fx == 0:
                logger.debug(f"Halley: exact root after {i - 1} iterations.")
                return x

            dfx = df(x)
            d2fx = d2f(x)
            denominator = 2.0 * dfx * dfx - fx * d2fx
            if denominator == 0 or not np.isfinite(denominator):
                raise NoRootFoundError(
                    i, f"Halley update undefined at x = {x} (iteration {i})."
                )

            x_new = self._bracket(x, x - 2.0 * fx * dfx / denominator)
            if not np.isfinite(x_new):
                raise NoRootFoundError(i, f"Halley iterate diverged at iteration {i}.")

            step = abs(x_new - x)
            logger.trace(f"Halley iteration {i}: x = {x_new!r}, step = {step:.3e}")
            if step <= max(self.tolerance, 4.0 * EPSILON * abs(x_new)):
                logger.debug(f"Halley: converged after {i} iterations.")
                return x_new

            fx_new = f(x_new)
            if abs(fx_new) >= abs(fx) and step <= _STALL_STEP * abs(x_new):
                logger.debug(f"Halley: reached rounding floor after {i} iterations.")
                return x

            x, fx = x_new, fx_new

        raise NoRootFoundError(self.max_iterations)
