# -*- coding: utf-8 -*-
"""
Tests for matrix products and the polarimetric boxcar speckle filter.

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
2026-02-11

Modified
--------
2026-03-06
"""

# Third-party
import numpy as np
import pytest

# GRPOL
from grpol.exceptions import ConfigurationError, ValidationError
from grpol.image_processing import PolarimetricBoxcarFilter, PolarimetricMatrices
from grpol.polarimetry.converter import channel_names
from grpol.polarimetry.kinds import MatrixKind


@pytest.fixture
def full_pol_bands():
    rng = np.random.default_rng(9)
    return [rng.standard_normal((10, 12)) for _ in range(8)]


@pytest.fixture
def dual_pol_bands():
    rng = np.random.default_rng(10)
    return [rng.standard_normal((10, 12)) for _ in range(4)]


class TestPolarimetricMatrices:

    def test_default_target(self):
        op = PolarimetricMatrices()
        assert op.target == 'T3'
        assert op.window_size == 1
        assert op.output_kind(MatrixKind.FULL) is MatrixKind.T3

    def test_band_names(self):
        op = PolarimetricMatrices(target='C4')
        assert op.band_names(MatrixKind.FULL) == channel_names(MatrixKind.C4)

    def test_apply_shapes(self, full_pol_bands):
        bands = PolarimetricMatrices(target='C3', window_size=3).apply(
            full_pol_bands, MatrixKind.FULL)
        assert list(bands) == list(channel_names(MatrixKind.C3))
        for values in bands.values():
            assert values.shape == (10, 12)
            assert values.dtype == np.float64

    def test_single_look_c2_power(self):
        bands = [np.full((2, 2), v) for v in (3.0, 4.0, 0.0, 0.0)]
        out = PolarimetricMatrices(target='C2').apply(bands, MatrixKind.DUAL_HH_HV)
        np.testing.assert_allclose(out['C11'], 25.0)
        np.testing.assert_allclose(out['C12_real'], 0.0)

    def test_invalid_target(self):
        with pytest.raises(ValidationError):
            PolarimetricMatrices(target='FULL')

    def test_unsupported_conversion(self, dual_pol_bands):
        with pytest.raises(ConfigurationError, match='Full-pol'):
            PolarimetricMatrices(target='T3').apply(dual_pol_bands, MatrixKind.DUAL_HH_HV)

    def test_even_window_rejected(self):
        with pytest.raises(ValidationError):
            PolarimetricMatrices(window_size=4)


class TestPolarimetricBoxcarFilter:

    def test_output_kinds(self):
        boxcar = PolarimetricBoxcarFilter()
        assert boxcar.output_kind(MatrixKind.FULL) is MatrixKind.T3
        assert boxcar.output_kind(MatrixKind.LCHCP) is MatrixKind.C2
        assert boxcar.output_kind(MatrixKind.C4) is MatrixKind.C4

    def test_window_bounds(self):
        with pytest.raises(ValidationError):
            PolarimetricBoxcarFilter(window_size=1)

    def test_smooths_but_preserves_mean_of_constant(self, dual_pol_bands):
        constant = [np.full((10, 12), v) for v in (1.0, 2.0, 0.5, -1.0)]
        out = PolarimetricBoxcarFilter(window_size=5).apply(constant, MatrixKind.DUAL_HH_VV)
        np.testing.assert_allclose(out['C11'], 5.0)
        np.testing.assert_allclose(out['C22'], 1.25)

    def test_reduces_variance(self, full_pol_bands):
        single = PolarimetricMatrices(target='T3').apply(full_pol_bands, MatrixKind.FULL)
        filtered = PolarimetricBoxcarFilter(window_size=5).apply(
            full_pol_bands, MatrixKind.FULL)
        assert filtered['T11'].var() < single['T11'].var()

    def test_preformed_matrix_round_trip(self, full_pol_bands):
        t3 = PolarimetricMatrices(target='T3').apply(full_pol_bands, MatrixKind.FULL)
        boxcar = PolarimetricBoxcarFilter(window_size=3)
        from_matrix = boxcar.apply(list(t3.values()), MatrixKind.T3)
        from_raw = boxcar.apply(full_pol_bands, MatrixKind.FULL)
        for name in channel_names(MatrixKind.T3):
            np.testing.assert_allclose(from_matrix[name], from_raw[name], atol=1e-12)

    def test_repr(self):
        assert repr(PolarimetricBoxcarFilter(window_size=7)) == \
            'PolarimetricBoxcarFilter(window_size=7)'
