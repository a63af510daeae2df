"""
Unit Tests for the Real FFT Module

Validates the in-place real transform, the recombination step and unpack
against scipy/numpy reference FFTs.

Test Coverage:
    - transform: round trip, DC/Nyquist identities, linearity, size checks
    - compose: direction asymmetry, factor validation
    - unpack: known vectors, Hermitian symmetry, input preservation
    - PackedSpectrum and the numpy-style wrappers

Run:
    pytest tests/test_realfft.py -v
"""

import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest
from scipy.fft import fft as scipy_fft, rfft as scipy_rfft

from src.realfft import (
    Operation,
    Plan,
    make_plan,
    transform,
    compose,
    unpack,
    PackedSpectrum,
    rfft,
    irfft,
    fft_real,
    SizeMismatch,
    MalformedPlan,
    BufferLayoutError,
)

SIZES = [2, 4, 8, 16, 64, 256, 1024, 4096]


def forward(x: np.ndarray) -> np.ndarray:
    buffer = np.array(x, dtype=np.float64)
    transform(buffer, make_plan(Operation.FORWARD, len(buffer)))
    return buffer


class TestTransform:
    """Test suite for the in-place real transform."""

    def test_known_small_vector(self):
        """Forward transform of [1, 2, 3, 4] in packed layout."""
        x = np.array([1.0, 2.0, 3.0, 4.0])
        transform(x, Plan.new(Operation.FORWARD, 4))

        # DC = 10, Nyquist = -2, X[1] = -2 + 2j
        assert np.allclose(x, [10.0, -2.0, -2.0, 2.0])

    def test_matches_scipy_rfft(self):
        """Packed forward output equals scipy's one-sided spectrum."""
        for N in SIZES:
            x = np.random.randn(N)
            packed = forward(x)
            X_ours = PackedSpectrum(packed).one_sided()
            X_scipy = scipy_rfft(x)
            error = np.abs(X_ours - X_scipy).max() / max(np.abs(X_scipy).max(), 1.0)
            assert error < 1e-12, f"Forward transform failed for N={N}: {error}"

        print(f"\n[Forward vs scipy] All sizes passed ✓")

    def test_roundtrip(self):
        """FORWARD followed by INVERSE reproduces the input."""
        for N in SIZES:
            x = np.random.randn(N)
            buffer = x.copy()
            transform(buffer, make_plan(Operation.FORWARD, N))
            transform(buffer, make_plan(Operation.INVERSE, N))

            error = np.abs(buffer - x).max() / max(np.abs(x).max(), 1e-300)
            assert error < 1e-9, f"Round trip failed for N={N}: {error}"

        print(f"\n[Round Trip] All sizes passed ✓")

    def test_backward_is_unnormalized(self):
        """BACKWARD recovers the input scaled by N/2."""
        N = 128
        x = np.random.randn(N)
        buffer = x.copy()
        transform(buffer, make_plan(Operation.FORWARD, N))
        transform(buffer, make_plan(Operation.BACKWARD, N))

        assert np.allclose(buffer, x * (N // 2), rtol=1e-10, atol=1e-9)

    def test_dc_and_nyquist(self):
        """Bins 0 and 1 hold the plain and alternating sums of the input."""
        for N in SIZES:
            x = np.random.randn(N)
            packed = forward(x)
            alternating = np.sum(x * (-1.0) ** np.arange(N))

            assert packed[0] == pytest.approx(np.sum(x), rel=1e-10, abs=1e-10)
            assert packed[1] == pytest.approx(alternating, rel=1e-10, abs=1e-10)

    def test_linearity(self):
        """transform(a*x + b*y) == a*transform(x) + b*transform(y)."""
        N = 512
        a, b = 2.5, -0.75
        x = np.random.randn(N)
        y = np.random.randn(N)

        lhs = forward(a * x + b * y)
        rhs = a * forward(x) + b * forward(y)
        assert np.allclose(lhs, rhs, rtol=1e-10, atol=1e-9)

    def test_sine_wave(self):
        """A pure cosine puts all its energy into one bin."""
        N = 1024
        k = 37
        x = np.cos(2 * np.pi * k * np.arange(N) / N)
        spectrum = PackedSpectrum(forward(x))

        assert abs(spectrum.bin(k)) == pytest.approx(N / 2, rel=1e-10)
        others = [abs(spectrum.bin(i)) for i in range(N // 2 + 1) if i != k]
        assert max(others) < 1e-9

    def test_size_mismatch(self):
        """A buffer that does not fit the plan is rejected before any write."""
        plan = make_plan(Operation.FORWARD, 8)
        for n in [4, 16]:
            x = np.random.randn(n)
            original = x.copy()
            with pytest.raises(SizeMismatch):
                transform(x, plan)
            assert np.array_equal(x, original)
            assert x.flags.writeable

    def test_rejects_bad_layout(self):
        """Buffers that cannot be viewed as complex pairs are rejected."""
        plan = make_plan(Operation.FORWARD, 8)

        with pytest.raises(BufferLayoutError):
            transform(np.random.randn(8).astype(np.float32), plan)

        strided = np.random.randn(16)[::2]
        with pytest.raises(BufferLayoutError):
            transform(strided, plan)

        readonly = np.random.randn(8)
        readonly.setflags(write=False)
        with pytest.raises(BufferLayoutError):
            transform(readonly, plan)

    def test_buffer_unlocked_after_transform(self):
        x = np.random.randn(32)
        transform(x, make_plan(Operation.FORWARD, 32))
        x[0] = 1.0
        assert x[0] == 1.0


class TestCompose:
    """Test suite for the recombination step."""

    def test_inverse_undoes_forward(self):
        """compose(forward) then compose(inverse) is the identity."""
        N = 64
        z = np.random.randn(N // 2) + 1j * np.random.randn(N // 2)
        data = z.copy()
        compose(data, make_plan(Operation.FORWARD, N).factors, False)
        compose(data, make_plan(Operation.INVERSE, N).factors, True)

        assert np.allclose(data, z, rtol=1e-12, atol=1e-12)

    def test_dc_nyquist_scaling_only_on_inverse(self):
        """The DC/Nyquist pair is halved when inverting, not when going forward."""
        data = np.array([3.0 + 1.0j, 0.0, 0.0, 0.0])
        compose(data, make_plan(Operation.FORWARD, 8).factors, False)
        assert data[0] == 4.0 + 2.0j

        data = np.array([3.0 + 1.0j, 0.0, 0.0, 0.0])
        compose(data, make_plan(Operation.INVERSE, 8).factors, True)
        assert data[0] == 2.0 + 1.0j

    def test_midpoint_is_conjugated(self):
        data = np.array([0.0, 0.0, 1.0 + 2.0j, 0.0])
        compose(data, make_plan(Operation.FORWARD, 8).factors, False)
        assert data[2] == 1.0 - 2.0j

    def test_factor_length_checked(self):
        data = np.zeros(8, dtype=np.complex128)
        with pytest.raises(MalformedPlan):
            compose(data, np.ones(3, dtype=np.complex128), False)


class TestUnpack:
    """Test suite for unpack."""

    def test_known_vectors(self):
        """Known packed inputs and their full spectra."""
        assert np.array_equal(
            unpack([1.0, 2.0, 3.0, 4.0]),
            np.array([1 + 0j, 3 + 4j, 2 + 0j, 3 - 4j]),
        )
        assert np.array_equal(
            unpack(np.arange(1, 9, dtype=np.float64)),
            np.array([1 + 0j, 3 + 4j, 5 + 6j, 7 + 8j, 2 + 0j, 7 - 8j, 5 - 6j, 3 - 4j]),
        )

    def test_hermitian_symmetry(self):
        """out[N - i] == conj(out[i]); DC and Nyquist are purely real."""
        for N in SIZES:
            out = unpack(np.random.randn(N))
            assert out.dtype == np.complex128
            assert len(out) == N
            assert out[0].imag == 0.0
            assert out[N // 2].imag == 0.0
            for i in range(1, N):
                assert out[N - i] == np.conj(out[i])

    def test_matches_full_fft(self):
        """unpack(transform(x)) equals the full complex FFT of x."""
        for N in [4, 16, 256, 2048]:
            x = np.random.randn(N)
            X_ours = unpack(forward(x))
            X_scipy = scipy_fft(x)
            error = np.abs(X_ours - X_scipy).max() / np.abs(X_scipy).max()
            assert error < 1e-12, f"unpack failed for N={N}"

    def test_does_not_alias_input(self):
        packed = np.random.randn(16)
        original = packed.copy()
        out = unpack(packed)
        out[:] = 0

        assert np.array_equal(packed, original)
        assert not np.shares_memory(out, packed)

    def test_single_point(self):
        assert np.array_equal(unpack([5.0]), np.array([5.0 + 0j]))

    def test_rejects_non_power_of_two(self):
        for n in [0, 3, 6, 12]:
            with pytest.raises(SizeMismatch):
                unpack(np.zeros(n))

    def test_rejects_complex_input(self):
        """Complex input is refused instead of silently dropping imaginary parts."""
        with pytest.raises(BufferLayoutError):
            unpack(np.array([1 + 1j, 2, 3, 4]))
        with pytest.raises(BufferLayoutError):
            unpack([1.0, 2.0, 3.0, 4.0j])

    def test_accepts_packed_spectrum(self):
        spectrum = PackedSpectrum(np.arange(1, 9, dtype=np.float64))
        assert np.array_equal(spectrum.unpack(), unpack(spectrum.data))


class TestPackedSpectrum:
    """Test suite for the packed layout type."""

    def test_accessors(self):
        spectrum = PackedSpectrum([1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0])
        assert spectrum.size == 8
        assert len(spectrum) == 8
        assert spectrum.dc == 1.0
        assert spectrum.nyquist == 2.0
        assert spectrum.bin(0) == 1 + 0j
        assert spectrum.bin(1) == 3 + 4j
        assert spectrum.bin(3) == 7 + 8j
        assert spectrum.bin(4) == 2 + 0j
        with pytest.raises(IndexError):
            spectrum.bin(5)

    def test_one_sided_layout(self):
        spectrum = PackedSpectrum([1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0])
        assert np.array_equal(
            spectrum.one_sided(),
            np.array([1 + 0j, 3 + 4j, 5 + 6j, 7 + 8j, 2 + 0j]),
        )

    def test_from_one_sided(self):
        bins = np.array([1 + 9j, 3 + 4j, 5 + 6j, 7 + 8j, 2 - 9j])
        spectrum = PackedSpectrum.from_one_sided(bins)
        assert np.array_equal(spectrum.data, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0])

    def test_wraps_without_copy(self):
        buffer = np.random.randn(16)
        spectrum = PackedSpectrum(buffer)
        buffer[0] = 42.0
        assert spectrum.dc == 42.0

    def test_copies_other_dtypes(self):
        """Only float64 arrays are wrapped in place; other input is converted."""
        ints = np.arange(8)
        spectrum = PackedSpectrum(ints)
        assert spectrum.data.dtype == np.float64
        assert not np.shares_memory(spectrum.data, ints)

        values = [1.0, 2.0, 3.0, 4.0]
        spectrum = PackedSpectrum(values)
        spectrum.data[0] = 9.0
        assert values[0] == 1.0

    def test_rejects_complex(self):
        with pytest.raises(BufferLayoutError):
            PackedSpectrum(np.array([1 + 2j, 3, 4, 5]))

    def test_rejects_bad_length(self):
        for data in [np.zeros(6), np.zeros(1), np.zeros((4, 4))]:
            with pytest.raises(SizeMismatch):
                PackedSpectrum(data)


class TestWrappers:
    """Test suite for the numpy-style wrappers."""

    def test_rfft(self):
        x = np.random.randn(1024)
        X_ours = rfft(x)
        X_scipy = scipy_rfft(x)

        error = np.abs(X_ours - X_scipy)
        print(f"\n[RFFT]")
        print(f"  Output length: {len(X_ours)} (expected {len(x)//2 + 1})")
        print(f"  Max error: {error.max():.2e}")

        assert len(X_ours) == len(x) // 2 + 1
        assert error.max() < 1e-10

    def test_rfft_does_not_modify_input(self):
        x = np.random.randn(64)
        original = x.copy()
        rfft(x)
        assert np.array_equal(x, original)

    def test_irfft(self):
        x = np.random.randn(2048)
        assert np.allclose(irfft(np.fft.rfft(x)), x, rtol=1e-10, atol=1e-12)
        assert np.allclose(irfft(rfft(x)), x, rtol=1e-10, atol=1e-12)

    def test_fft_real(self):
        x = np.random.randn(512)
        error = np.abs(fft_real(x) - scipy_fft(x))
        assert error.max() < 1e-10

    def test_rejects_non_power_of_two(self):
        with pytest.raises(SizeMismatch):
            rfft(np.random.randn(100))
        with pytest.raises(SizeMismatch):
            rfft(np.random.randn(4, 4))


def run_all_tests():
    """Run all test suites."""
    print("=" * 70)
    print("Real FFT Module - Unit Tests")
    print("=" * 70)

    for suite in [TestTransform(), TestCompose(), TestUnpack(), TestPackedSpectrum(), TestWrappers()]:
        print(f"\n{type(suite).__name__}")
        for name in dir(suite):
            if name.startswith('test_'):
                getattr(suite, name)()
                print(f"  {name} ✓")

    print("\n" + "=" * 70)
    print("ALL TESTS PASSED ✓")
    print("=" * 70)


if __name__ == "__main__":
    run_all_tests()
