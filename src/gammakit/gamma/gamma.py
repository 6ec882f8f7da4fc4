from abc import abstractmethod

import numpy as np

from ..base import UnivariateRealFunction
from ..types import PrecisionMode
from .lanczos import DEFAULT_LANCZOS, LanczosTables
from .loggamma import LogGamma


def reflection_formula(x_pos: float, gamma_x_pos: float) -> float:
    r"""Euler's reflection formula.

    Given $x > 0$ and $\\Gamma(x)$, compute

    $$
    \\Gamma(-x) = \\frac{\\pi}{x \\Gamma(x) \\sin(-\\pi x)}.
    $$
    """
    return np.pi / (x_pos * gamma_x_pos * np.sin(-np.pi * x_pos))


class Gamma(UnivariateRealFunction):
    r"""The gamma function $\\Gamma(x)$ on the real line.

    $\\Gamma(0)$ is $+\\infty$. Negative arguments are reflected with
    `reflection_formula`.
    """

    @abstractmethod
    def evaluate_positive(self, x: float) -> float:
        r"""Evaluate $\\Gamma(x)$ for $x > 0$."""
        raise NotImplementedError("Should implement evaluate_positive method")

    def evaluate(self, x: float) -> float:
        x = float(x)
        if np.isnan(x):
            return np.nan
        if x == 0:
            return np.inf
        if x > 0:
            return self.evaluate_positive(x)
        x_pos = -x
        return float(reflection_formula(x_pos, self.evaluate_positive(x_pos)))


class GammaLanczos(Gamma):
    """The gamma function by the Lanczos approximation.

    Args:
        lanczos (LanczosTables, optional): The Lanczos coefficient tables.
            Defaults to DEFAULT_LANCZOS.
        mode (PrecisionMode, optional): Precision of the log-gamma evaluation.
            Defaults to PrecisionMode.PRECISE.
    """

    def __init__(
        self,
        lanczos: LanczosTables = DEFAULT_LANCZOS,
        mode: PrecisionMode = PrecisionMode.PRECISE,
    ):
        self.log_gamma = LogGamma(lanczos=lanczos, mode=mode)

    @property
    def mode(self) -> PrecisionMode:
        return self.log_gamma.mode

    def evaluate_positive(self, x: float) -> float:
        with np.errstate(over="ignore"):
            return float(np.exp(self.log_gamma.evaluate(x)))


class GammaLanczosQuick(GammaLanczos):
    """The gamma function by the Lanczos approximation, entirely in float64."""

    def __init__(self, lanczos: LanczosTables = DEFAULT_LANCZOS):
        super().__init__(lanczos=lanczos, mode=PrecisionMode.QUICK)


class GammaGergoNemes(Gamma):
    r"""A cheap closed-form approximation of the gamma function by Gergő Nemes.

    $$
    \\Gamma(z) \\approx \\sqrt{\\frac{2\\pi}{z}} \\left(\\frac{1}{e}\\left(z + \\frac{1}{12z - \\frac{1}{10z}}\\right)\\right)^z
    $$

    The relative error is about $10^{-4}$ near $z = 1$ and decreases with
    $z$. There is no iteration.
    """

    def evaluate_positive(self, x: float) -> float:
        with np.errstate(over="ignore"):
            return float(
                np.sqrt(2 * np.pi / x)
                * np.power((x + 1 / (12 * x - 0.1 / x)) / np.e, x)
            )
