"""
Real-valued FFT via a half-size complex FFT.

A real sequence x of length N is read as N/2 complex values
z[k] = x[2k] + 1j * x[2k+1]. The complex FFT Z of z is recombined into the
positive-frequency half of the real spectrum X with

    X[k] = 0.5 * (Z[k] + conj(Z[N/2-k]))
           - 0.5j * W^k * (Z[k] - conj(Z[N/2-k])),    W = exp(-2j*pi/N)

and the same butterfly, with the sign flipped, undoes the recombination
before an inverse complex FFT.

Packed layout produced by a forward transform (see PackedSpectrum):
    buffer[0]          real part of X[0]   (DC)
    buffer[1]          real part of X[N/2] (Nyquist)
    buffer[2k:2k+2]    X[k], for 0 < k < N/2

References
----------
W. H. Press, S. A. Teukolsky, W. T. Vetterling, B. P. Flannery,
"Numerical Recipes 3rd Edition: The Art of Scientific Computing",
Cambridge University Press, 2007, section 12.3.
"""

import numpy as np
from numba import jit

from .complex_fft import transform_complex
from .errors import BufferLayoutError, MalformedPlan, SizeMismatch
from .packed import PackedSpectrum
from .plan import Operation, Plan, is_power_of_two
from .view import complex_view


@jit(nopython=True, cache=True)
def _compose(data: np.ndarray, factors: np.ndarray, inverse: bool) -> None:
    n = len(data)

    # DC and Nyquist arrive combined in data[0]
    d0 = data[0]
    data[0] = complex(d0.real + d0.imag, d0.real - d0.imag)
    if inverse:
        data[0] = 0.5 * data[0]

    sign = 1.0 if inverse else -1.0
    for i in range(1, n // 2):
        j = n - i
        part1 = data[i] + data[j].conjugate()
        part2 = data[i] - data[j].conjugate()
        # factors[n - j] is the mirrored index M - j taken modulo M
        product = complex(0.0, sign) * factors[n - j] * part2
        data[i] = 0.5 * (part1 + product)
        data[j] = (0.5 * (part1 - product)).conjugate()

    if n >= 2:
        data[n // 2] = data[n // 2].conjugate()


def compose(data: np.ndarray, factors: np.ndarray, inverse: bool) -> None:
    """
    Convert between the complex FFT of packed real data and the packed real
    spectrum, in place.

    Parameters
    ----------
    data : np.ndarray
        complex128 half-buffer of length n (n = N/2)
    factors : np.ndarray
        Recombination factors of length n/2 (``Plan.factors``)
    inverse : bool
        False after a forward complex FFT, True before an inverse one
    """
    if len(factors) != len(data) // 2:
        raise MalformedPlan(
            f"Half-buffer of length {len(data)} needs {len(data) // 2} factors, got {len(factors)}"
        )
    _compose(data, factors, bool(inverse))


def transform(buffer: np.ndarray, plan: Plan) -> None:
    """
    Perform the real transform described by ``plan`` on ``buffer`` in place.

    With ``Operation.FORWARD`` the samples are replaced by the packed
    positive-frequency half of their DFT. With ``Operation.BACKWARD`` or
    ``Operation.INVERSE`` the buffer is assumed to hold such a packed
    spectrum; ``INVERSE`` recovers the original samples exactly (up to
    rounding), ``BACKWARD`` recovers them multiplied by N/2.

    Parameters
    ----------
    buffer : np.ndarray
        float64, C-contiguous, writeable array of length ``plan.size``
    plan : Plan
        Transform plan

    Raises
    ------
    SizeMismatch
        If ``len(buffer) != plan.size``.
    BufferLayoutError
        If the buffer cannot be viewed as complex pairs.

    Examples
    --------
    >>> x = np.array([1.0, 2.0, 3.0, 4.0])
    >>> transform(x, Plan.new(Operation.FORWARD, 4))
    >>> x
    array([10., -2., -2.,  2.])
    """
    if len(buffer) != plan.size:
        raise SizeMismatch(
            f"The plan is not appropriate for the dataset: "
            f"buffer has {len(buffer)} values, plan expects {plan.size}"
        )

    with complex_view(buffer) as data:
        if plan.operation is Operation.FORWARD:
            transform_complex(data, plan)
            _compose(data, plan.factors, False)
        else:
            _compose(data, plan.factors, True)
            transform_complex(data, plan)


@jit(nopython=True, cache=True)
def _unpack(packed: np.ndarray) -> np.ndarray:
    n = len(packed)
    out = np.empty(n, dtype=np.complex128)
    out[0] = complex(packed[0], 0.0)
    if n == 1:
        return out

    half = n // 2
    for i in range(1, half):
        out[i] = complex(packed[2 * i], packed[2 * i + 1])
    out[half] = complex(packed[1], 0.0)
    # Negative frequencies from Hermitian symmetry
    for i in range(half + 1, n):
        out[i] = out[n - i].conjugate()
    return out


def unpack(packed) -> np.ndarray:
    """
    Expand a packed real spectrum into the full complex spectrum.

    Parameters
    ----------
    packed : array_like or PackedSpectrum
        Packed spectrum of length N, N a power of two

    Returns
    -------
    np.ndarray
        New complex128 array of length N with out[N-i] == conj(out[i])

    Raises
    ------
    SizeMismatch
        If the length is not a power of two.
    BufferLayoutError
        If the input is complex; its imaginary parts would otherwise be lost.

    Examples
    --------
    >>> unpack([1.0, 2.0, 3.0, 4.0])
    array([1.+0.j, 3.+4.j, 2.+0.j, 3.-4.j])
    """
    if isinstance(packed, PackedSpectrum):
        packed = packed.data
    packed = np.asarray(packed)
    if np.iscomplexobj(packed):
        raise BufferLayoutError(f"Packed spectrum must be real, got {packed.dtype}")
    packed = np.ascontiguousarray(packed, dtype=np.float64)
    if packed.ndim != 1:
        raise SizeMismatch(f"Expected a 1-D packed spectrum, got shape {packed.shape}")
    n = len(packed)
    if not is_power_of_two(n):
        raise SizeMismatch(f"The number of points should be a power of two, got {n}")
    return _unpack(packed)
