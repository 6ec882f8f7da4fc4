from ..base import BivariateRealFunction
from ..error import DomainError
from .gamma import Gamma, GammaLanczosQuick
from .regularized import GammaRegularizedP, GammaRegularizedQ


def _validate_shape(s: float) -> None:
    if not s > 0:
        raise DomainError(f"s must be > 0, got {s}.")


class GammaLowerIncomplete(BivariateRealFunction):
    r"""The lower incomplete gamma function.

    $$
    \\gamma(s, x) = \\int_0^x t^{s-1} e^{-t} dt = P(s, x) \\Gamma(s)
    $$

    Args:
        p (GammaRegularizedP, optional): The evaluator of $P$. Defaults to GammaRegularizedP().
        gamma (Gamma, optional): The evaluator of $\\Gamma$. Defaults to GammaLanczosQuick().
    """

    def __init__(
        self,
        p: GammaRegularizedP | None = None,
        gamma: Gamma | None = None,
    ):
        self.p = p if p is not None else GammaRegularizedP()
        self.gamma = gamma if gamma is not None else GammaLanczosQuick()

    def evaluate(self, s: float, x: float) -> float:
        s = float(s)
        _validate_shape(s)
        return self.p.evaluate(s, x) * self.gamma.evaluate(s)


class GammaUpperIncomplete(BivariateRealFunction):
    r"""The upper incomplete gamma function.

    $$
    \\Gamma(s, x) = \\int_x^\\infty t^{s-1} e^{-t} dt = Q(s, x) \\Gamma(s)
    $$

    Args:
        q (GammaRegularizedQ, optional): The evaluator of $Q$. Defaults to GammaRegularizedQ().
        gamma (Gamma, optional): The evaluator of $\\Gamma$. Defaults to GammaLanczosQuick().
    """

    def __init__(
        self,
        q: GammaRegularizedQ | None = None,
        gamma: Gamma | None = None,
    ):
        self.q = q if q is not None else GammaRegularizedQ()
        self.gamma = gamma if gamma is not None else GammaLanczosQuick()

    def evaluate(self, s: float, x: float) -> float:
        s = float(s)
        _validate_shape(s)
        return self.q.evaluate(s, x) * self.gamma.evaluate(s)
