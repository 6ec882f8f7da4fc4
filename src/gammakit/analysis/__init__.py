from .continued_fraction import ContinuedFraction
from .halley import Halley
from .summation import Summation

__all__ = [
    "ContinuedFraction",
    "Halley",
    "Summation",
]
