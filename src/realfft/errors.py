"""
Exceptions raised by the real FFT package.

All of them signal a violated precondition (a programming mistake on the
caller's side), never a transient condition.
"""


class RealFFTError(ValueError):
    """Base class for precondition failures in this package."""


class SizeMismatch(RealFFTError):
    """Buffer length does not fit the plan, or is not a power of two."""


class MalformedPlan(RealFFTError):
    """Plan tables are inconsistent with the declared transform size."""


class BufferLayoutError(RealFFTError):
    """Buffer cannot be reinterpreted as complex pairs without a copy."""
