"""
numpy-style wrappers around the in-place real transform.

These copy their input, so they are convenient rather than fast; use
``transform`` with a shared plan to avoid the allocation.
"""

import numpy as np

from .errors import SizeMismatch
from .packed import PackedSpectrum
from .plan import Operation, make_plan
from .real import transform, unpack


def _as_buffer(x: np.ndarray) -> np.ndarray:
    x = np.array(x, dtype=np.float64, order='C', copy=True)
    if x.ndim != 1:
        raise SizeMismatch(f"Expected a 1-D signal, got shape {x.shape}")
    return x


def rfft(x: np.ndarray) -> np.ndarray:
    """
    Compute the 1-D FFT of a real signal of power-of-two length.

    Parameters
    ----------
    x : np.ndarray
        Real input of length N (power of two, N >= 2)

    Returns
    -------
    np.ndarray
        The non-negative frequency terms, length N // 2 + 1, matching
        ``numpy.fft.rfft(x)``

    Examples
    --------
    >>> x = np.array([1.0, 2.0, 1.0, -1.0, 1.5, 1.0, 0.5, -0.5])
    >>> X = rfft(x)
    >>> # Should match np.fft.rfft(x)
    """
    buffer = _as_buffer(x)
    transform(buffer, make_plan(Operation.FORWARD, len(buffer)))
    return PackedSpectrum(buffer).one_sided()


def irfft(X: np.ndarray) -> np.ndarray:
    """
    Inverse of :func:`rfft`.

    The output length is ``2 * (len(X) - 1)`` and must be a power of two.
    Imaginary parts of the first and last bins are ignored.
    """
    packed = PackedSpectrum.from_one_sided(X)
    buffer = packed.data
    transform(buffer, make_plan(Operation.INVERSE, len(buffer)))
    return buffer


def fft_real(x: np.ndarray) -> np.ndarray:
    """
    Full complex spectrum of a real signal, matching ``numpy.fft.fft(x)``.
    """
    buffer = _as_buffer(x)
    transform(buffer, make_plan(Operation.FORWARD, len(buffer)))
    return unpack(buffer)

