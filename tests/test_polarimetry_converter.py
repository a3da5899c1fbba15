# -*- coding: utf-8 -*-
"""
Tests for band layouts, conversion planning and basis changes.

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
from grpol.polarimetry.algebra import covariance_outer, span
from grpol.polarimetry.converter import (
    MatrixElement,
    channel_element,
    channel_names,
    convert,
    embed_dual_pol,
    read_matrix,
    resolve_conversion,
    scattering_vector,
    write_channels,
)
from grpol.polarimetry.kinds import MatrixKind


def _full_pol_bands(shape=(4, 5), seed=3):
    rng = np.random.default_rng(seed)
    return [rng.standard_normal(shape) for _ in range(8)]


class TestChannelNames:

    def test_c3_layout(self):
        assert channel_names(MatrixKind.C3) == (
            'C11', 'C12_real', 'C12_imag', 'C13_real', 'C13_imag',
            'C22', 'C23_real', 'C23_imag', 'C33',
        )

    def test_t4_count(self):
        assert len(channel_names(MatrixKind.T4)) == 16
        assert channel_names(MatrixKind.T4)[0] == 'T11'

    def test_raw_layout(self):
        assert channel_names(MatrixKind.FULL) == (
            'i_HH', 'q_HH', 'i_HV', 'q_HV', 'i_VH', 'q_VH', 'i_VV', 'q_VV',
        )
        assert channel_names(MatrixKind.LCHCP) == ('i_LH', 'q_LH', 'i_LV', 'q_LV')


class TestChannelElement:

    def test_decode(self):
        assert channel_element('T12_imag') == MatrixElement(0, 1, True)
        assert channel_element('C33') == MatrixElement(2, 2, False)

    @pytest.mark.parametrize('name', ['C21_real', 'C11_imag', 'C12', 'C1', 'Cxy'])
    def test_rejects_bad_names(self, name):
        with pytest.raises(ValidationError):
            channel_element(name)


class TestReadWrite:

    def test_round_trip(self):
        rng = np.random.default_rng(0)
        bands = [rng.standard_normal((3, 3)) for _ in range(9)]
        matrix = read_matrix(bands, MatrixKind.T3)
        assert matrix.shape == (3, 3, 3, 3)
        out = write_channels(matrix, MatrixKind.T3)
        for band, name in zip(bands, channel_names(MatrixKind.T3)):
            np.testing.assert_array_equal(out[name], band)

    def test_wrong_band_count(self):
        with pytest.raises(ValidationError, match='expects 9 bands'):
            read_matrix([np.zeros((2, 2))] * 4, MatrixKind.C3)

    def test_scattering_vector(self):
        bands = [np.full((2, 2), v) for v in (3.0, 4.0, 0.0, 1.0)]
        k = scattering_vector(bands, MatrixKind.DUAL_HH_HV)
        assert k.shape == (2, 2, 2)
        assert k[0, 0, 0] == 3 + 4j
        assert k[0, 0, 1] == 1j


class TestResolveConversion:

    def test_same_kind_is_identity(self):
        assert resolve_conversion(MatrixKind.T3, MatrixKind.T3).is_identity

    def test_raw_target_rejected(self):
        with pytest.raises(ConfigurationError, match='Target must be one of'):
            resolve_conversion(MatrixKind.C3, MatrixKind.FULL)

    def test_c2_from_quad_pol_rejected(self):
        with pytest.raises(ConfigurationError, match='Dual-pol product is expected'):
            resolve_conversion(MatrixKind.FULL, MatrixKind.C2)

    def test_upsizing_rejected(self):
        with pytest.raises(ConfigurationError, match='Cannot convert'):
            resolve_conversion(MatrixKind.T3, MatrixKind.C4)

    def test_dual_pol_to_c3_rejected(self):
        with pytest.raises(ConfigurationError, match='Full-pol'):
            resolve_conversion(MatrixKind.DUAL_HH_HV, MatrixKind.C3)

    def test_dual_pol_to_c2(self):
        plan = resolve_conversion(MatrixKind.DUAL_HH_VV, MatrixKind.C2)
        assert plan.is_identity


class TestConvert:

    def test_surface_c3_to_t3(self):
        # HH = VV = 1: all power in the first Pauli component.
        c3 = np.array([[1, 0, 1], [0, 0, 0], [1, 0, 1]], dtype=np.complex128)
        t3 = convert(c3, MatrixKind.C3, MatrixKind.T3)
        np.testing.assert_allclose(np.real(np.diag(t3)), [2.0, 0.0, 0.0], atol=1e-12)

    def test_c3_t3_round_trip(self):
        k = np.random.default_rng(1).standard_normal((4, 3)) * (1 + 0.5j)
        c3 = covariance_outer(k)
        back = convert(convert(c3, MatrixKind.C3, MatrixKind.T3),
                       MatrixKind.T3, MatrixKind.C3)
        np.testing.assert_allclose(back, c3, atol=1e-12)

    def test_span_preserved_between_bases(self):
        c4 = covariance_outer(np.random.default_rng(2).standard_normal((5, 4)) + 0j)
        t4 = convert(c4, MatrixKind.C4, MatrixKind.T4)
        np.testing.assert_allclose(span(t4), span(c4))

    def test_raw_and_matrix_paths_agree(self):
        bands = _full_pol_bands()
        via_raw = resolve_conversion(MatrixKind.FULL, MatrixKind.T3).pixel_matrices(bands)
        c3 = resolve_conversion(MatrixKind.FULL, MatrixKind.C3).pixel_matrices(bands)
        np.testing.assert_allclose(
            via_raw, convert(c3, MatrixKind.C3, MatrixKind.T3), atol=1e-12
        )

    def test_raw_source_rejected(self):
        with pytest.raises(ValidationError):
            convert(np.eye(4), MatrixKind.FULL, MatrixKind.C4)


class TestEmbedDualPol:

    def test_hh_hv_slots(self):
        c2 = np.array([[4.0, 1 + 1j], [1 - 1j, 2.0]])
        c3 = embed_dual_pol(c2, MatrixKind.DUAL_HH_HV)
        assert c3[0, 0] == pytest.approx(4.0)
        assert c3[1, 1] == pytest.approx(4.0)
        assert c3[2, 2] == pytest.approx(0.0)
        assert c3[0, 1] == pytest.approx(np.sqrt(2.0) * (1 + 1j))

    def test_hh_vv_slots(self):
        c2 = np.array([[4.0, 1.0], [1.0, 9.0]], dtype=np.complex128)
        c3 = embed_dual_pol(c2, MatrixKind.DUAL_HH_VV)
        np.testing.assert_allclose(np.real(np.diag(c3)), [4.0, 0.0, 9.0])
        assert c3[0, 2] == pytest.approx(1.0)

    def test_preformed_c2_is_hh_hv(self):
        c2 = np.diag([1.0, 2.0]).astype(np.complex128)
        np.testing.assert_allclose(
            embed_dual_pol(c2, MatrixKind.C2),
            embed_dual_pol(c2, MatrixKind.DUAL_HH_HV),
        )

    def test_compact_pol_rejected(self):
        with pytest.raises(ConfigurationError):
            embed_dual_pol(np.eye(2, dtype=np.complex128), MatrixKind.LCHCP)
