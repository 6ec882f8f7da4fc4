import numba as nb
import numpy as np

from ..base import UnivariateRealFunction
from ..error import UndefinedInputError

ASYMPTOTIC_THRESHOLD = 10.0

# -B_{2k} / (2k) for k = 1, ..., 20, the coefficients of 1 / x^{2k}
ASYMPTOTIC_COEFFICIENTS = np.array([
    -1.0 / 12.0,
    1.0 / 120.0,
    -1.0 / 252.0,
    1.0 / 240.0,
    -1.0 / 132.0,
    691.0 / 32760.0,
    -1.0 / 12.0,
    3617.0 / 8160.0,
    -43867.0 / 14364.0,
    174611.0 / 6600.0,
    -77683.0 / 276.0,
    236364091.0 / 65520.0,
    -657931.0 / 12.0,
    3392780147.0 / 3480.0,
    -1723168255201.0 / 85932.0,
    7709321041217.0 / 16320.0,
    -151628697551.0 / 12.0,
    26315271553053477373.0 / 69090840.0,
    -154210205991661.0 / 12.0,
    261082718496449122051.0 / 541200.0,
])
ASYMPTOTIC_COEFFICIENTS.flags.writeable = False


@nb.njit()
def _digamma_asymptotic(x: float, coefficients: np.ndarray) -> float:
    z = 1.0 / (x * x)
    series = 0.0
    for k in range(coefficients.shape[0] - 1, -1, -1):
        series = (series + coefficients[k]) * z
    return np.log(x) - 0.5 / x + series


@nb.njit()
def _digamma_positive(x: float, coefficients: np.ndarray) -> float:
    if x >= ASYMPTOTIC_THRESHOLD:
        return _digamma_asymptotic(x, coefficients)
    # psi(x) = psi(x + n) - sum_{k=0}^{n-1} 1 / (x + k)
    n = int(np.ceil(ASYMPTOTIC_THRESHOLD - x))
    correction = 0.0
    for k in range(n):
        correction += 1.0 / (x + k)
    return _digamma_asymptotic(x + n, coefficients) - correction


@nb.njit()
def digamma_kernel(x: float, coefficients: np.ndarray) -> float:
    if x == 0.0:
        return -np.inf
    if x < 0.0:
        # Reflection, Abramowitz and Stegun eq. 6.3.7
        return (
            _digamma_positive(-x, coefficients)
            - 1.0 / x
            + np.pi / np.tan(np.pi * -x)
        )
    return _digamma_positive(x, coefficients)


class Digamma(UnivariateRealFunction):
    r"""The digamma function $\\psi(x) = \\frac{d}{dx} \\log\\Gamma(x)$.

    For $x \\geq 10$ the asymptotic expansion

    $$
    \\psi(x) \\sim \\log x - \\frac{1}{2x} - \\sum_{k=1}^{20} \\frac{B_{2k}}{2k x^{2k}}
    $$

    is used. Smaller positive arguments are shifted above 10 with the
    recurrence $\\psi(x + 1) = \\psi(x) + 1/x$, negative arguments are
    reflected. $\\psi(0) = -\\infty$. The function has poles at the negative
    integers, where the result is meaningless.
    """

    def evaluate(self, x: float) -> float:
        x = float(x)
        if np.isnan(x):
            raise UndefinedInputError("digamma is undefined for NaN.")
        return float(digamma_kernel(x, ASYMPTOTIC_COEFFICIENTS))
