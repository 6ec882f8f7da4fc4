from dataclasses import dataclass
from enum import Enum

from .error import DomainError


class PrecisionMode(Enum):
    """Selects the arithmetic in which the log-gamma function is evaluated.

    `QUICK` evaluates entirely in `float64`. `PRECISE` evaluates in arbitrary
    precision and narrows the result to `float64`.
    """

    QUICK = "quick"
    PRECISE = "precise"


@dataclass(frozen=True)
class LanczosParameters:
    r"""Parameters of the Lanczos approximation.

    Attributes:
        g (float): The free parameter $g$ of the approximation.
        n (int): The number of terms of the partial fraction series.
        scale (int): Decimal digits of the arbitrary precision arithmetic.
            Only the precise evaluation depends on it.
    """

    g: float = 607.0 / 128.0
    n: int = 15
    scale: int = 30

    def __post_init__(self):
        if self.n < 1:
            raise DomainError(f"n must be >= 1, got {self.n}.")
        if self.scale < 1:
            raise DomainError(f"scale must be >= 1, got {self.scale}.")
        if not self.g > 0:
            raise DomainError(f"g must be > 0, got {self.g}.")


__all__ = ["PrecisionMode", "LanczosParameters"]
