from typing import Callable

import numpy as np

from .gamma import (
    DEFAULT_LANCZOS,
    Digamma,
    GammaLanczosQuick,
    GammaLowerIncomplete,
    GammaRegularizedP,
    GammaRegularizedPInverse,
    GammaRegularizedQ,
    GammaUpperIncomplete,
    LogGamma,
    Trigamma,
)
from .types import PrecisionMode

# Built once at import and never modified; shared by the functions below.
_LOG_GAMMA = LogGamma(lanczos=DEFAULT_LANCZOS, mode=PrecisionMode.QUICK)
_GAMMA = GammaLanczosQuick(lanczos=DEFAULT_LANCZOS)
_DIGAMMA = Digamma()
_TRIGAMMA = Trigamma()
_Q = GammaRegularizedQ(log_gamma=_LOG_GAMMA)
_P = GammaRegularizedP(q=_Q)
_P_INVERSE = GammaRegularizedPInverse(p=_P, log_gamma=_LOG_GAMMA, gamma=_GAMMA)
_LOWER = GammaLowerIncomplete(p=_P, gamma=_GAMMA)
_UPPER = GammaUpperIncomplete(q=_Q, gamma=_GAMMA)


def _apply(function: Callable[..., float], *args) -> float | np.ndarray:
    values = np.vectorize(function, otypes=[np.float64])(*args)
    if values.ndim == 0:
        return float(values)
    return values


def gamma(x: float | np.ndarray) -> float | np.ndarray:
    r"""The gamma function $\\Gamma(x)$, with $\\Gamma(0) = +\\infty$."""
    return _apply(_GAMMA.evaluate, x)


def log_gamma(x: float | np.ndarray) -> float | np.ndarray:
    r"""The log-gamma function $\\log\\Gamma(x)$ for $x > 0$."""
    return _apply(_LOG_GAMMA.evaluate, x)


def digamma(x: float | np.ndarray) -> float | np.ndarray:
    r"""The digamma function $\\psi(x)$, with $\\psi(0) = -\\infty$."""
    return _apply(_DIGAMMA.evaluate, x)


def trigamma(x: float | np.ndarray) -> float | np.ndarray:
    r"""The trigamma function $\\psi_1(x)$, with $\\psi_1(0) = +\\infty$."""
    return _apply(_TRIGAMMA.evaluate, x)


def regularized_gamma_p(s: float | np.ndarray, x: float | np.ndarray) -> float | np.ndarray:
    r"""The regularized lower incomplete gamma function $P(s, x)$, $s, x \\geq 0$."""
    return _apply(_P.evaluate, s, x)


def regularized_gamma_q(s: float | np.ndarray, x: float | np.ndarray) -> float | np.ndarray:
    r"""The regularized upper incomplete gamma function $Q(s, x)$, $s, x \\geq 0$."""
    return _apply(_Q.evaluate, s, x)


def regularized_gamma_p_inverse(
    s: float | np.ndarray, u: float | np.ndarray
) -> float | np.ndarray:
    r"""The inverse $x = P^{-1}(s, u)$ for $s > 0$ and $0 \\leq u \\leq 1$."""
    return _apply(_P_INVERSE.evaluate, s, u)


def lower_incomplete_gamma(
    s: float | np.ndarray, x: float | np.ndarray
) -> float | np.ndarray:
    r"""The lower incomplete gamma function $\\gamma(s, x)$, $s > 0$, $x \\geq 0$."""
    return _apply(_LOWER.evaluate, s, x)


def upper_incomplete_gamma(
    s: float | np.ndarray, x: float | np.ndarray
) -> float | np.ndarray:
    r"""The upper incomplete gamma function $\\Gamma(s, x)$, $s > 0$, $x \\geq 0$."""
    return _apply(_UPPER.evaluate, s, x)


__all__ = [
    "gamma",
    "log_gamma",
    "digamma",
    "trigamma",
    "regularized_gamma_p",
    "regularized_gamma_q",
    "regularized_gamma_p_inverse",
    "lower_incomplete_gamma",
    "upper_incomplete_gamma",
]
