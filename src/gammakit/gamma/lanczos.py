import math
from dataclasses import dataclass
from decimal import Decimal

import mpmath
import numba as nb
import numpy as np

from ..error import DomainError
from ..logging import logger
from ..types import LanczosParameters

# Extra decimal digits carried while deriving the tables. The products
# D.B.C.F cancel terms of order 2^(2n), so the coefficients lose digits.
GUARD_DIGITS = 10


@nb.njit()
def _log_gamma_quick(x: float, g: float, coefficients: np.ndarray) -> float:
    r"""Lanczos log-gamma in float64 for $x > 0$."""
    inner = coefficients[0]
    for i in range(1, coefficients.shape[0]):
        # 1 / (i + z) with z = x - 1
        inner += coefficients[i] / (x + (i - 1))
    t = x + g - 0.5
    return np.log(inner) + (x - 0.5) * np.log(t) - t


def _read_only(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


def _matrix_b(n: int, ctx) -> np.ndarray:
    """The binomial triangle: first row of ones, alternating binomials above the diagonal."""
    B = np.full((n, n), ctx.zero, dtype=object)
    B[0, :] = ctx.one
    for i in range(1, n):
        sign = 1
        for j in range(i, n):
            B[i, j] = ctx.mpf(sign * math.comb(i + j - 1, j - i))
            sign = -sign
    return B


def _matrix_c(n: int, ctx) -> np.ndarray:
    """The coefficients of the even Chebyshev polynomials."""
    C = np.full((n, n), ctx.zero, dtype=object)
    C[0, 0] = ctx.mpf(0.5)
    for i in range(1, n):
        sign = -1 if i % 2 == 1 else 1
        for j in range(i + 1):
            total = sum(
                math.comb(2 * i, 2 * k) * math.comb(k, k + j - i)
                for k in range(i + 1)
                if k + j - i >= 0
            )
            C[i, j] = ctx.mpf(sign * total)
            sign = -sign
    return C


def _matrix_d(n: int, ctx) -> np.ndarray:
    D = np.full((n, n), ctx.zero, dtype=object)
    D[0, 0] = ctx.one
    if n > 1:
        D[1, 1] = -ctx.one
    for i in range(2, n):
        D[i, i] = D[i - 1, i - 1] * (2 * (2 * i - 1)) / (i - 1)
    return D


def _vector_f(n: int, g: float, ctx) -> np.ndarray:
    F = np.full(n, ctx.zero, dtype=object)
    for i in range(n):
        v = ctx.mpf(2)
        for j in range(i + 1, 2 * i + 1):
            v = v * j / 4
        t = ctx.mpf(g) + i + 0.5
        F[i] = v * ctx.exp(t) / ctx.power(t, i + 0.5)
    return F


@dataclass(frozen=True, eq=False)
class LanczosTables:
    r"""The coefficient tables of the Lanczos approximation.

    The log-gamma function is approximated as

    $$
    \\log\\Gamma(z + 1) = \\log(Z(z) \\cdot P) + (z + 0.5)\\log(z + g + 0.5) - (z + g + 0.5)
    $$

    with $Z(z) = [1, 1/(z+1), \\ldots, 1/(z+n-1)]$ and $P = DBCF$.

    All arrays are read-only and the arbitrary precision `context` is never
    modified after construction, so one instance can be shared between
    threads. Use `derive_lanczos_tables` to construct it.

    Attributes:
        parameters (LanczosParameters): The parameters the tables are derived from.
        context (mpmath.MPContext): The arbitrary precision context of the tables.
        B (np.ndarray): The $n \\times n$ binomial matrix.
        C (np.ndarray): The $n \\times n$ Chebyshev coefficient matrix.
        D (np.ndarray): The $n \\times n$ diagonal scaling matrix.
        F (np.ndarray): The length $n$ vector $F$.
        P (np.ndarray): The length $n$ coefficient vector $DBCF$, in arbitrary precision.
        P_fast (np.ndarray): `P` narrowed to float64.
    """

    parameters: LanczosParameters
    context: mpmath.MPContext
    B: np.ndarray
    C: np.ndarray
    D: np.ndarray
    F: np.ndarray
    P: np.ndarray
    P_fast: np.ndarray

    @property
    def g(self) -> float:
        return self.parameters.g

    @property
    def n(self) -> int:
        return self.parameters.n

    def _to_mpf(self, x):
        ctx = self.context
        if isinstance(x, (str, Decimal)):
            return ctx.mpf(str(x))
        return ctx.mpf(x)

    def Z(self, x) -> np.ndarray:
        r"""The row vector $[1, 1/x, 1/(x+1), \\ldots, 1/(x+n-2)]$ in arbitrary precision.

        This is $Z(z)$ at $z = x - 1$, formed without computing $x - 1$ so that
        tiny $x$ loses no digits.
        """
        ctx = self.context
        x = self._to_mpf(x)
        return np.array(
            [ctx.one] + [1 / (x + (i - 1)) for i in range(1, self.n)],
            dtype=object,
        )

    def log_gamma_precise(self, x) -> mpmath.mpf:
        """Compute log-gamma for a positive `x` in arbitrary precision.

        Args:
            x (float | str | Decimal | mpmath.mpf): $x > 0$. Strings and
                decimals are parsed at the precision of the tables.

        Returns:
            mpmath.mpf: $\\log\\Gamma(x)$ with all digits of the tables'
            context. Later arithmetic on it uses mpmath's global precision.
        """
        ctx = self.context
        x = self._to_mpf(x)
        if not x > 0:
            raise DomainError(f"log-gamma requires x > 0, got {x}.")
        inner = self.Z(x) @ self.P
        t = x + (ctx.mpf(self.g) - 0.5)
        result = ctx.log(inner) + (x - 0.5) * ctx.log(t) - t
        # Rebuild as a global mpf at the tables' precision; the global
        # context is left untouched.
        return mpmath.mpf(result, prec=ctx.prec)

    def log_gamma(self, x: float) -> float:
        """Compute log-gamma for a positive `x` in arbitrary precision, narrowed to float."""
        return float(self.log_gamma_precise(x))

    def log_gamma_quick(self, x: float) -> float:
        """Compute log-gamma for a positive `x` entirely in float64."""
        x = float(x)
        if not x > 0:
            raise DomainError(f"log-gamma requires x > 0, got {x}.")
        return float(_log_gamma_quick(x, float(self.g), self.P_fast))


def derive_lanczos_tables(
    parameters: LanczosParameters = LanczosParameters(),
) -> LanczosTables:
    """Derive the Lanczos coefficient tables for the given parameters.

    Args:
        parameters (LanczosParameters, optional): The Lanczos parameters.
            Defaults to g = 607/128, n = 15, scale = 30.

    Returns:
        LanczosTables: The immutable coefficient tables.
    """
    ctx = mpmath.MPContext()
    ctx.dps = parameters.scale + GUARD_DIGITS

    n = parameters.n
    B = _matrix_b(n, ctx)
    C = _matrix_c(n, ctx)
    D = _matrix_d(n, ctx)
    F = _vector_f(n, parameters.g, ctx)
    P = D @ B @ C @ F
    P_fast = np.array([float(p) for p in P], dtype=np.float64)

    logger.debug(
        f"Derived Lanczos tables for g={parameters.g}, n={n}, "
        f"scale={parameters.scale} ({ctx.dps} working digits)."
    )
    return LanczosTables(
        parameters=parameters,
        context=ctx,
        B=_read_only(B),
        C=_read_only(C),
        D=_read_only(D),
        F=_read_only(F),
        P=_read_only(P),
        P_fast=_read_only(P_fast),
    )


DEFAULT_LANCZOS = derive_lanczos_tables()
