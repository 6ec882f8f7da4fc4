import numba as nb
import numpy as np

from ..base import UnivariateRealFunction
from ..error import UndefinedInputError

SMALL_ARGUMENT = 1e-4
ASYMPTOTIC_THRESHOLD = 30.0

PI_SQUARED_OVER_6 = np.pi * np.pi / 6.0
# 2 * zeta(3)
TWO_ZETA_3 = 2.404113806319188570799476


@nb.njit()
def _trigamma_asymptotic(x: float) -> float:
    z = 1.0 / (x * x)
    return 0.5 * z + (
        1.0
        + z
        * (
            1.0 / 6.0
            + z * (-1.0 / 30.0 + z * (1.0 / 42.0 + z * (-1.0 / 30.0 + z * 5.0 / 66.0)))
        )
    ) / x


@nb.njit()
def _trigamma_positive(x: float) -> float:
    if x < SMALL_ARGUMENT:
        return 1.0 / (x * x) + PI_SQUARED_OVER_6 - TWO_ZETA_3 * x

    # psi_1(x) = psi_1(x + 1) + 1 / x^2, summed from the largest shift down
    n = 0
    while x + n < ASYMPTOTIC_THRESHOLD:
        n += 1
    result = _trigamma_asymptotic(x + n)
    for k in range(n - 1, -1, -1):
        y = x + k
        result += 1.0 / (y * y)
    return result


@nb.njit()
def trigamma_kernel(x: float) -> float:
    if x == 0.0:
        return np.inf
    if x < 0.0:
        # Reflection: psi_1(1 - x) + psi_1(x) = (pi / sin(pi x))^2
        r = np.pi / np.sin(np.pi * x)
        return r * r - _trigamma_positive(1.0 - x)
    return _trigamma_positive(x)


class Trigamma(UnivariateRealFunction):
    r"""The trigamma function $\\psi_1(x) = \\frac{d^2}{dx^2} \\log\\Gamma(x)$.

    - $0 < x < 10^{-4}$: the Laurent series $1/x^2 + \\pi^2/6 - 2\\zeta(3)x$;
    - $x \\geq 30$: the asymptotic expansion in $1/x^2$;
    - otherwise the recurrence $\\psi_1(x) = \\psi_1(x + 1) + 1/x^2$;
    - $x < 0$: the reflection formula.

    $\\psi_1(0) = +\\infty$.
    """

    def evaluate(self, x: float) -> float:
        x = float(x)
        if np.isnan(x):
            raise UndefinedInputError("trigamma is undefined for NaN.")
        return float(trigamma_kernel(x))
