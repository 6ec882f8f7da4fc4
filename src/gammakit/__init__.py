# ruff: noqa: E402

from importlib.metadata import version

from . import analysis, base, error, functions, gamma, types
from .functions import (
    digamma,
    gamma as gamma_function,
    log_gamma,
    lower_incomplete_gamma,
    regularized_gamma_p,
    regularized_gamma_p_inverse,
    regularized_gamma_q,
    trigamma,
    upper_incomplete_gamma,
)
from .logging import disable_logging, set_log_level

__version__ = version("gammakit")

__all__ = [
    "analysis",
    "base",
    "error",
    "functions",
    "gamma",
    "types",
    "gamma_function",
    "log_gamma",
    "digamma",
    "trigamma",
    "regularized_gamma_p",
    "regularized_gamma_q",
    "regularized_gamma_p_inverse",
    "lower_incomplete_gamma",
    "upper_incomplete_gamma",
    "set_log_level",
    "disable_logging",
]
