from ..base import UnivariateRealFunction
from ..types import PrecisionMode
from .lanczos import DEFAULT_LANCZOS, LanczosTables


class LogGamma(UnivariateRealFunction):
    r"""The log-gamma function $\\log\\Gamma(x)$ for $x > 0$ by the Lanczos approximation.

    Negative arguments must be reflected by the caller, see `GammaLanczos`.

    Args:
        lanczos (LanczosTables, optional): The Lanczos coefficient tables.
            Defaults to DEFAULT_LANCZOS.
        mode (PrecisionMode, optional): Evaluate in float64 (QUICK) or in
            arbitrary precision (PRECISE). Defaults to PrecisionMode.QUICK.
    """

    def __init__(
        self,
        lanczos: LanczosTables = DEFAULT_LANCZOS,
        mode: PrecisionMode = PrecisionMode.QUICK,
    ):
        self.lanczos = lanczos
        self.mode = mode

    def evaluate(self, x: float) -> float:
        if self.mode is PrecisionMode.PRECISE:
            return self.lanczos.log_gamma(x)
        return self.lanczos.log_gamma_quick(x)
