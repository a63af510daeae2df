"""
Transform plans.

A plan fixes the real transform length N and its direction, and precomputes
the two rotation tables the transform needs:

- ``twiddles``: stage-ordered factors for the radix-2 complex FFT of length
  N/2. The stage of half-width ``s`` occupies ``twiddles[s - 1:2 * s - 1]``.
- ``factors``: the N/4 factors ``exp(sign * 2j * pi * k / N)`` used to
  recombine the half-size complex FFT into a real spectrum.

Plans are immutable and may be shared between any number of transforms.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

import numpy as np

from .errors import MalformedPlan, SizeMismatch

logger = logging.getLogger(__name__)


class Operation(Enum):
    """Transform direction."""

    FORWARD = 'forward'
    BACKWARD = 'backward'   # unnormalized
    INVERSE = 'inverse'     # normalized, undoes FORWARD

    @property
    def sign(self) -> float:
        """Sign of the exponent in the DFT kernel."""
        return -1.0 if self is Operation.FORWARD else 1.0


def is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def _readonly(a: np.ndarray) -> np.ndarray:
    a.setflags(write=False)
    return a


def stage_twiddles(half_size: int, sign: float) -> np.ndarray:
    """
    Rotation table for a radix-2 complex FFT of length ``half_size``.

    Parameters
    ----------
    half_size : int
        Complex transform length (N/2), a power of two
    sign : float
        Exponent sign, -1 for forward and +1 for backward

    Returns
    -------
    np.ndarray
        complex128 array of length ``half_size - 1``
    """
    stages = []
    step = 1
    while step < half_size:
        k = np.arange(step)
        stages.append(np.exp(sign * 1j * np.pi * k / step))
        step <<= 1
    if not stages:
        return np.empty(0, dtype=np.complex128)
    return np.concatenate(stages).astype(np.complex128)


def compose_factors(size: int, sign: float) -> np.ndarray:
    """Recombination factors ``exp(sign * 2j * pi * k / size)`` for k < size/4."""
    k = np.arange(size // 4)
    return np.exp(sign * 2j * np.pi * k / size).astype(np.complex128)


@dataclass(frozen=True, eq=False)
class Plan:
    """
    Immutable execution plan for a real transform of length ``size``.

    Use :meth:`Plan.new` (or the cached :func:`make_plan`) rather than the
    constructor; the constructor only validates the tables it is given.
    """

    size: int
    operation: Operation
    factors: np.ndarray
    twiddles: np.ndarray

    def __post_init__(self):
        if not isinstance(self.operation, Operation):
            raise MalformedPlan(f"Unknown operation: {self.operation!r}")
        if not isinstance(self.size, (int, np.integer)) or not is_power_of_two(int(self.size)) or self.size < 2:
            raise SizeMismatch(
                f"Transform size must be a power of two >= 2, got {self.size}"
            )
        for name, expected in (('factors', self.size // 4), ('twiddles', self.size // 2 - 1)):
            table = getattr(self, name)
            if not isinstance(table, np.ndarray) or table.ndim != 1:
                raise MalformedPlan(f"Plan {name} must be a 1-D array")
            if table.dtype != np.complex128:
                raise MalformedPlan(f"Plan {name} must be complex128, got {table.dtype}")
            if len(table) != expected:
                raise MalformedPlan(
                    f"Plan of size {self.size} needs {expected} {name}, got {len(table)}"
                )

    @property
    def half_size(self) -> int:
        """Length of the complex half-buffer."""
        return self.size // 2

    @classmethod
    def new(cls, operation: Operation, size: int) -> 'Plan':
        """
        Build a plan for a real transform of length ``size``.

        Raises
        ------
        SizeMismatch
            If ``size`` is not a power of two or is smaller than 2.
        """
        size = int(size)
        if not is_power_of_two(size) or size < 2:
            raise SizeMismatch(f"Transform size must be a power of two >= 2, got {size}")
        try:
            operation = Operation(operation)
        except ValueError as e:
            raise MalformedPlan(f"Unknown operation: {operation!r}") from e
        sign = operation.sign
        logger.debug(f"Building {operation.value} plan for size {size}")
        return cls(
            size=size,
            operation=operation,
            factors=_readonly(compose_factors(size, sign)),
            twiddles=_readonly(stage_twiddles(size // 2, sign)),
        )

    def __repr__(self):
        return f"Plan(size={self.size}, operation={self.operation.name})"


@lru_cache(maxsize=64)
def make_plan(operation: Operation, size: int) -> Plan:
    """Cached :meth:`Plan.new`; plans are immutable, so sharing is safe."""
    return Plan.new(operation, size)
