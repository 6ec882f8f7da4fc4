from .function import BivariateRealFunction, UnivariateRealFunction

__all__ = [
    "UnivariateRealFunction",
    "BivariateRealFunction",
]
