"""
In-place complex FFT driven by a plan.

Iterative radix-2 decimation-in-time Cooley-Tukey transform (Numba JIT):
1. In-place bit-reversal permutation
2. log2(n) butterfly stages, twiddles read from the plan instead of being
   recomputed per call
"""

import numpy as np
from numba import jit

from .errors import SizeMismatch
from .plan import Operation, Plan


@jit(nopython=True, cache=True)
def _bit_reverse_permute(data: np.ndarray) -> None:
    """Swap data[i] and data[rev(i)] in place."""
    n = len(data)
    j = 0
    for i in range(1, n):
        bit = n >> 1
        while j & bit:
            j ^= bit
            bit >>= 1
        j |= bit
        if i < j:
            tmp = data[i]
            data[i] = data[j]
            data[j] = tmp


@jit(nopython=True, cache=True)
def _fft_inplace(data: np.ndarray, twiddles: np.ndarray) -> None:
    n = len(data)
    _bit_reverse_permute(data)

    # Stages: half-width 1, 2, 4, ..., n/2
    step = 1
    while step < n:
        offset = step - 1
        for k in range(0, n, 2 * step):
            for j in range(step):
                top = k + j
                bottom = top + step
                odd = twiddles[offset + j] * data[bottom]
                data[bottom] = data[top] - odd
                data[top] = data[top] + odd
        step <<= 1


def transform_complex(data: np.ndarray, plan: Plan) -> None:
    """
    Transform a complex half-buffer in place according to ``plan``.

    Parameters
    ----------
    data : np.ndarray
        complex128 array of length ``plan.size // 2``
    plan : Plan
        Plan for the real transform of length ``plan.size``

    Notes
    -----
    ``Operation.INVERSE`` scales the result by ``1 / len(data)``;
    ``Operation.BACKWARD`` does not scale.
    """
    n = plan.half_size
    if len(data) != n:
        raise SizeMismatch(
            f"Complex buffer of length {len(data)} does not match plan size {plan.size} "
            f"(expected {n} complex values)"
        )
    if n > 1:
        _fft_inplace(data, plan.twiddles)
    if plan.operation is Operation.INVERSE:
        data *= 1.0 / n
