# Errors.py


class BubblePieError(Exception):
    """Base class for all errors raised by BubblePie."""


class DegenerateCompositionError(BubblePieError, ValueError):
    """Raised when a composition vector sums to zero and no pie can be built."""


class DegenerateLimitsError(BubblePieError, ArithmeticError):
    """Raised when the limit solve produces a non-increasing (lo, hi) pair."""
