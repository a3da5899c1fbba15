# -*- coding: utf-8 -*-
"""
Tests for the clamped sliding-window matrix estimator.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-02-24

Modified
--------
2026-03-06
"""

# Third-party
import numpy as np
import pytest

# GRPOL
from grpol.exceptions import ConfigurationError, ValidationError
from grpol.polarimetry.estimator import (
    MatrixEstimator,
    PixelWindow,
    clamped_window_counts,
    mean_correlation_c2,
    windowed_mean,
)
from grpol.polarimetry.kinds import MatrixKind


@pytest.fixture
def full_pol_bands():
    rng = np.random.default_rng(11)
    return [rng.standard_normal((12, 10)) for _ in range(8)]


@pytest.fixture
def dual_pol_bands():
    rng = np.random.default_rng(5)
    return [rng.standard_normal((9, 9)) for _ in range(4)]


class TestPixelWindow:

    def test_from_size(self):
        assert PixelWindow.from_size(5) == PixelWindow(2, 2)
        assert PixelWindow.from_size(1).size == (1, 1)

    @pytest.mark.parametrize('size', [0, 2, -3])
    def test_rejects_even_or_small(self, size):
        with pytest.raises(ValidationError):
            PixelWindow.from_size(size)

    def test_rejects_non_int(self):
        with pytest.raises(ValidationError):
            PixelWindow.from_size(3.0)

    def test_corner_count(self):
        # 5x5 window at the top-left corner of a 10x10 image sees 3x3 pixels.
        assert PixelWindow.from_size(5).count(0, 0, (10, 10)) == 9

    def test_edge_count(self):
        # Five rows by four columns next to the left edge.
        assert PixelWindow.from_size(5).count(5, 1, (10, 10)) == 20

    def test_bounds_clamped(self):
        assert PixelWindow.from_size(3).bounds(0, 9, (10, 10)) == (0, 1, 8, 9)


class TestClampedWindowCounts:

    def test_small_image(self):
        counts = clamped_window_counts((5, 5), PixelWindow.from_size(3))
        assert counts[0, 0] == 4
        assert counts[0, 2] == 6
        assert counts[2, 2] == 9
        assert counts[4, 4] == 4

    def test_counts_use_image_bounds(self):
        # An interior region never sees the image edge.
        counts = clamped_window_counts(
            (2, 2), PixelWindow.from_size(5), origin=(2, 2), image_shape=(10, 10)
        )
        np.testing.assert_array_equal(counts, np.full((2, 2), 25.0))

    def test_matches_pixel_window_count(self):
        window = PixelWindow.from_size(5)
        counts = clamped_window_counts((10, 10), window)
        assert counts[5, 1] == 20
        for row, col in [(0, 0), (5, 1), (9, 4), (4, 4)]:
            assert counts[row, col] == window.count(row, col, (10, 10))


class TestWindowedMean:

    def test_constant_field_unchanged(self):
        m = np.zeros((6, 7, 2, 2), dtype=np.complex128)
        m[..., 0, 0] = 3.0
        m[..., 1, 1] = 1.0
        m[..., 0, 1] = 1 + 2j
        m[..., 1, 0] = 1 - 2j
        out = windowed_mean(m, PixelWindow.from_size(5))
        np.testing.assert_allclose(out, m)

    def test_unit_window_is_identity(self):
        m = np.random.default_rng(0).standard_normal((3, 3, 2, 2)) + 0j
        m = m + np.conj(np.swapaxes(m, -1, -2))
        np.testing.assert_allclose(windowed_mean(m, PixelWindow(0, 0)), m)

    def test_non_finite_sample_stays_local(self):
        m = np.zeros((12, 12, 2, 2), dtype=np.complex128)
        m[..., 0, 0] = 3.0
        m[..., 1, 1] = 1.0
        m[2, 2, 0, 0] = np.nan
        out = windowed_mean(m, PixelWindow.from_size(3))
        assert np.all(np.isfinite(out))
        # The 3x3 neighbourhood of (2, 2) sees the sample as zero power.
        assert out[2, 2, 0, 0].real == pytest.approx(3.0 * 8.0 / 9.0)
        np.testing.assert_allclose(out[5:, 5:], m[5:, 5:])


class TestMatrixEstimator:

    def test_properties(self):
        est = MatrixEstimator(MatrixKind.FULL, MatrixKind.T3, PixelWindow.from_size(3))
        assert est.source_kind is MatrixKind.FULL
        assert est.target_kind is MatrixKind.T3
        assert est.window == PixelWindow(1, 1)

    def test_invalid_conversion(self):
        with pytest.raises(ConfigurationError):
            MatrixEstimator(MatrixKind.DUAL_HH_HV, MatrixKind.T3, PixelWindow(1, 1))

    def test_single_look_dual_pol_power(self):
        # HH = 3 + 4i, HV = 0: C11 = |HH|^2 = 25.
        bands = [np.full((2, 2), v) for v in (3.0, 4.0, 0.0, 0.0)]
        est = MatrixEstimator(MatrixKind.DUAL_HH_HV, MatrixKind.C2, PixelWindow(0, 0))
        c2 = est.estimate(bands)
        np.testing.assert_allclose(np.real(c2[..., 0, 0]), 25.0)
        np.testing.assert_allclose(np.real(c2[..., 1, 1]), 0.0)

    def test_output_hermitian(self, full_pol_bands):
        est = MatrixEstimator(MatrixKind.FULL, MatrixKind.T4, PixelWindow.from_size(5))
        t4 = est.estimate(full_pol_bands)
        assert t4.shape == (12, 10, 4, 4)
        np.testing.assert_array_equal(t4, np.conj(np.swapaxes(t4, -1, -2)))

    @pytest.mark.parametrize('row, col', [(0, 0), (5, 4), (11, 9), (0, 7)])
    def test_matches_per_pixel_mean(self, full_pol_bands, row, col):
        est = MatrixEstimator(MatrixKind.FULL, MatrixKind.C3, PixelWindow.from_size(5))
        full = est.estimate(full_pol_bands)
        np.testing.assert_allclose(
            full[row, col], est.mean_matrix_at(full_pol_bands, row, col), atol=1e-12
        )

    def test_tile_with_halo_matches_full_image(self, full_pol_bands):
        window = PixelWindow.from_size(5)
        est = MatrixEstimator(MatrixKind.FULL, MatrixKind.T3, window)
        full = est.estimate(full_pol_bands)
        # Tile rows 4..7, cols 0..4 read with a 2-pixel halo, clamped.
        r0, r1, c0, c1 = 2, 10, 0, 7
        sub = [band[r0:r1, c0:c1] for band in full_pol_bands]
        tile = est.estimate(sub, origin=(r0, c0), image_shape=(12, 10))
        np.testing.assert_allclose(tile[2:6, 0:5], full[4:8, 0:5], atol=1e-12)

    def test_matrix_source_identity(self, full_pol_bands):
        window = PixelWindow.from_size(3)
        from_raw = MatrixEstimator(MatrixKind.FULL, MatrixKind.C3, PixelWindow(0, 0))
        c3 = from_raw.pixel_matrices(full_pol_bands)
        bands = [c3[..., 0, 0].real, c3[..., 0, 1].real, c3[..., 0, 1].imag,
                 c3[..., 0, 2].real, c3[..., 0, 2].imag, c3[..., 1, 1].real,
                 c3[..., 1, 2].real, c3[..., 1, 2].imag, c3[..., 2, 2].real]
        via_matrix = MatrixEstimator(MatrixKind.C3, MatrixKind.C3, window)
        via_raw = MatrixEstimator(MatrixKind.FULL, MatrixKind.C3, window)
        np.testing.assert_allclose(
            via_matrix.estimate(bands), via_raw.estimate(full_pol_bands), atol=1e-12
        )


class TestMeanCorrelation:

    def test_self_correlation_matches_covariance(self, dual_pol_bands):
        window = PixelWindow.from_size(3)
        corr = mean_correlation_c2(
            dual_pol_bands, dual_pol_bands, MatrixKind.DUAL_HH_VV, window
        )
        est = MatrixEstimator(MatrixKind.DUAL_HH_VV, MatrixKind.C2, window)
        np.testing.assert_allclose(corr, est.estimate(dual_pol_bands), atol=1e-12)

    def test_not_hermitian_in_general(self, dual_pol_bands):
        other = [b[::-1] for b in dual_pol_bands]
        corr = mean_correlation_c2(
            dual_pol_bands, other, MatrixKind.DUAL_HH_HV, PixelWindow(0, 0)
        )
        assert not np.allclose(corr[..., 0, 1], np.conj(corr[..., 1, 0]))

    def test_quad_pol_rejected(self, full_pol_bands):
        with pytest.raises(ConfigurationError):
            mean_correlation_c2(
                full_pol_bands, full_pol_bands, MatrixKind.FULL, PixelWindow(1, 1)
            )
