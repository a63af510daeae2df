"""
Complex view over a real buffer.

A C-contiguous float64 array of even length N has the memory layout of N/2
complex128 values (real part first). ``complex_view`` exposes that memory as a
complex array without copying, and locks the real array against writes for as
long as the complex view is in use.
"""

from contextlib import contextmanager
from typing import Iterator

import numpy as np

from .errors import BufferLayoutError


def check_real_buffer(buffer: np.ndarray) -> None:
    """Raise BufferLayoutError unless ``buffer`` can be viewed as complex pairs."""
    if not isinstance(buffer, np.ndarray):
        raise BufferLayoutError(f"Expected a numpy array, got {type(buffer).__name__}")
    if buffer.dtype != np.float64:
        raise BufferLayoutError(f"Expected a float64 buffer, got {buffer.dtype}")
    if buffer.ndim != 1:
        raise BufferLayoutError(f"Expected a 1-D buffer, got shape {buffer.shape}")
    if not buffer.flags.c_contiguous:
        raise BufferLayoutError("Buffer must be C-contiguous")
    if not buffer.flags.writeable:
        raise BufferLayoutError("Buffer must be writeable")
    if len(buffer) % 2 != 0:
        raise BufferLayoutError(f"Buffer length must be even, got {len(buffer)}")


@contextmanager
def complex_view(buffer: np.ndarray) -> Iterator[np.ndarray]:
    """
    Reinterpret ``buffer`` as ``len(buffer) // 2`` complex numbers.

    Examples
    --------
    >>> x = np.array([1.0, 2.0, 3.0, 4.0])
    >>> with complex_view(x) as z:
    ...     z[1] = z[1].conjugate()
    >>> x
    array([ 1.,  2.,  3., -4.])
    """
    check_real_buffer(buffer)
    data = buffer.view(np.complex128)
    buffer.flags.writeable = False
    try:
        yield data
    finally:
        buffer.flags.writeable = True
