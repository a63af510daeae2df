"""
Packed real-spectrum layout shared by the forward transform and unpack.

For a real signal of length N the spectrum is Hermitian, so only bins
0..N/2 are independent, and bins 0 and N/2 are purely real. They fit into N
real values:

    index 0          DC        X[0].real
    index 1          Nyquist   X[N/2].real
    index 2k, 2k+1   X[k].real, X[k].imag     for 0 < k < N/2
"""

import numpy as np

from .errors import BufferLayoutError, SizeMismatch
from .plan import is_power_of_two


class PackedSpectrum:
    """
    Named wrapper around a packed spectrum buffer.

    A float64 array is wrapped without a copy, so a PackedSpectrum built over
    a buffer that was just transformed in place reads the transform's output
    directly. Any other input (lists, other real dtypes) is copied into a new
    float64 array; complex input is rejected.
    """

    def __init__(self, data: np.ndarray):
        data = np.asarray(data)
        if np.iscomplexobj(data):
            raise BufferLayoutError(f"Packed spectrum must be real, got {data.dtype}")
        if data.dtype != np.float64:
            data = data.astype(np.float64)
        if data.ndim != 1 or not is_power_of_two(len(data)) or len(data) < 2:
            raise SizeMismatch(
                f"Packed spectrum length must be a power of two >= 2, got shape {data.shape}"
            )
        self.data = data

    @property
    def size(self) -> int:
        """Length N of the real signal the spectrum belongs to."""
        return len(self.data)

    @property
    def dc(self) -> float:
        return float(self.data[0])

    @property
    def nyquist(self) -> float:
        return float(self.data[1])

    def bin(self, k: int) -> complex:
        """Spectrum value at frequency bin k, 0 <= k <= N/2."""
        half = self.size // 2
        if not 0 <= k <= half:
            raise IndexError(f"Bin {k} out of range [0, {half}]")
        if k == 0:
            return complex(self.dc, 0.0)
        if k == half:
            return complex(self.nyquist, 0.0)
        return complex(self.data[2 * k], self.data[2 * k + 1])

    def one_sided(self) -> np.ndarray:
        """Bins 0..N/2 as complex128, the layout of ``numpy.fft.rfft``."""
        half = self.size // 2
        out = np.empty(half + 1, dtype=np.complex128)
        out[0] = self.dc
        out[1:half].real = self.data[2::2]
        out[1:half].imag = self.data[3::2]
        out[half] = self.nyquist
        return out

    @classmethod
    def from_one_sided(cls, bins) -> 'PackedSpectrum':
        """
        Pack bins 0..N/2 (``numpy.fft.rfft`` layout) into a new buffer.

        The imaginary parts of the DC and Nyquist bins are dropped.
        """
        bins = np.asarray(bins, dtype=np.complex128)
        if bins.ndim != 1 or len(bins) < 2:
            raise SizeMismatch(f"Expected at least 2 one-sided bins, got shape {bins.shape}")
        n = 2 * (len(bins) - 1)
        data = np.empty(n, dtype=np.float64)
        data[0] = bins[0].real
        data[1] = bins[-1].real
        data[2::2] = bins[1:-1].real
        data[3::2] = bins[1:-1].imag
        return cls(data)

    def unpack(self) -> np.ndarray:
        """Full length-N complex spectrum, see :func:`realfft.real.unpack`."""
        from .real import unpack
        return unpack(self)

    def __len__(self):
        return self.size

    def __repr__(self):
        return f"PackedSpectrum(size={self.size}, dc={self.dc:.6g}, nyquist={self.nyquist:.6g})"
