class DomainError(ValueError):
    r"""Exception raised for arguments outside the domain of a function."""

    def __init__(self, message="This value is outside the domain of the function."):
        self.message = message
        super().__init__(self.message)


class UndefinedInputError(ValueError):
    r"""Exception raised when a function is called with an undefined input, e.g. NaN."""

    def __init__(self, message="The function is undefined for this input."):
        self.message = message
        super().__init__(self.message)


class NumericalError(ArithmeticError):
    r"""Base class of the numerical failures, as opposed to domain errors."""


class NonConvergenceError(NumericalError):
    r"""Exception raised when an iterative evaluation exhausts its iteration budget.

    Args:
        iterations (int): The maximum number of iterations that was exceeded.
        message (str | None, optional): Overrides the default message.
    """

    def __init__(self, iterations: int, message: str | None = None):
        self.iterations = iterations
        if message is None:
            message = f"Maximum number of iterations {iterations} exceeded."
        self.message = message
        super().__init__(self.message)


class NoRootFoundError(NonConvergenceError):
    r"""Exception raised when a root finder fails to converge to a root."""
