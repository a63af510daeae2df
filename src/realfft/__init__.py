"""
Real FFT Module - Real-valued FFT through a half-size complex FFT

A real signal of length N is viewed in place as N/2 complex values,
transformed with a radix-2 complex FFT, and recombined into the packed
positive-frequency half of its spectrum (and back).

Modules:
    - plan: Operation and immutable Plan with precomputed rotation tables
    - view: zero-copy complex view over a real buffer
    - complex_fft: in-place radix-2 complex FFT driven by a plan
    - real: the real transform, its recombination step and unpack
    - packed: PackedSpectrum, the packed layout as a named type
    - fft: numpy-style rfft / irfft / fft_real wrappers
"""

from .errors import RealFFTError, SizeMismatch, MalformedPlan, BufferLayoutError
from .plan import Operation, Plan, make_plan
from .view import complex_view
from .complex_fft import transform_complex
from .real import transform, compose, unpack
from .packed import PackedSpectrum
from .fft import rfft, irfft, fft_real

__all__ = [
    # Errors
    'RealFFTError',
    'SizeMismatch',
    'MalformedPlan',
    'BufferLayoutError',
    # Plans
    'Operation',
    'Plan',
    'make_plan',
    # Transforms
    'complex_view',
    'transform_complex',
    'transform',
    'compose',
    'unpack',
    'PackedSpectrum',
    # numpy-style wrappers
    'rfft',
    'irfft',
    'fft_real',
]

__version__ = '1.0.0'
