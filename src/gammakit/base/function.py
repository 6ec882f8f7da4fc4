from abc import ABC, abstractmethod


class UnivariateRealFunction(ABC):
    """A real function of one real variable."""

    @abstractmethod
    def evaluate(self, x: float) -> float:
        raise NotImplementedError("Should implement evaluate method")

    def __call__(self, x: float) -> float:
        return self.evaluate(x)


class BivariateRealFunction(ABC):
    """A real function of two real variables."""

    @abstractmethod
    def evaluate(self, x1: float, x2: float) -> float:
        raise NotImplementedError("Should implement evaluate method")

    def __call__(self, x1: float, x2: float) -> float:
        return self.evaluate(x1, x2)
