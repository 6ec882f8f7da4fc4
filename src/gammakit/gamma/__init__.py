from .digamma import Digamma
from .gamma import (
    Gamma,
    GammaGergoNemes,
    GammaLanczos,
    GammaLanczosQuick,
    reflection_formula,
)
from .incomplete import GammaLowerIncomplete, GammaUpperIncomplete
from .inverse import GammaRegularizedPInverse
from .lanczos import DEFAULT_LANCZOS, LanczosTables, derive_lanczos_tables
from .loggamma import LogGamma
from .regularized import GammaRegularizedP, GammaRegularizedQ
from .trigamma import Trigamma

__all__ = [
    "DEFAULT_LANCZOS",
    "LanczosTables",
    "derive_lanczos_tables",
    "LogGamma",
    "Gamma",
    "GammaLanczos",
    "GammaLanczosQuick",
    "GammaGergoNemes",
    "reflection_formula",
    "Digamma",
    "Trigamma",
    "GammaRegularizedQ",
    "GammaRegularizedP",
    "GammaRegularizedPInverse",
    "GammaLowerIncomplete",
    "GammaUpperIncomplete",
]
