from __future__ import annotations


class CureSurvError(Exception):
    """Base class for errors raised by cure-model operations."""

    pass


class DomainError(CureSurvError, ValueError):
    """Argument outside its domain: a probability or cure fraction outside
    [0, 1], a negative time or a negative sample size."""

    pass


class DegenerateParameterError(DomainError):
    """Cure fraction of one requested for an operation that needs a finite
    root. The answer is infinite rather than unknown, so this is kept apart
    from :class:`ConvergenceError`."""

    pass


class ConvergenceError(CureSurvError, ArithmeticError):
    """Root finding or numerical integration did not converge.

    Attributes
    ----------
    index: int
        index of the element that failed, in the recycled input arrays. It
        is appended to the error message when set.
    """

    def __init__(self, *args, index: int | None = None) -> None:
        super().__init__(*args)
        self.index = index

    def __str__(self) -> str:
        suffix = ""
        if self.index is not None:
            suffix += f"\nThrown while evaluating element {self.index}"
        return super().__str__() + suffix
