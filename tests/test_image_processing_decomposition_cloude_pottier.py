# -*- coding: utf-8 -*-
"""
Tests for the dual-pol Cloude-Pottier H/Alpha classifier.

All tests use synthetic C2 matrices.

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
2026-02-16

Modified
--------
2026-03-06
"""

# Third-party
import numpy as np
import pytest

# GRPOL
from grpol.image_processing.decomposition.cloude_pottier import (
    NO_DATA_ZONE,
    CloudePottierClassifier,
    HAlphaPlane,
    h_alpha_c2,
)
from grpol.polarimetry.estimator import MatrixEstimator, PixelWindow
from grpol.polarimetry.kinds import MatrixKind


# ===================================================================
# Fixtures
# ===================================================================

@pytest.fixture
def classifier():
    return CloudePottierClassifier()


@pytest.fixture
def copol_only():
    """Co-pol power only: a single deterministic scatterer."""
    return np.diag([1.0, 0.0]).astype(np.complex128)


@pytest.fixture
def equal_power():
    """Equal, uncorrelated power in both channels."""
    rng = np.random.default_rng(123)
    bands = [rng.standard_normal((64, 64)) for _ in range(4)]
    est = MatrixEstimator(MatrixKind.DUAL_VH_VV, MatrixKind.C2, PixelWindow.from_size(7))
    return est.estimate(bands)


# ===================================================================
# Parameters
# ===================================================================

class TestHAlphaParameters:

    def test_copol_only(self, copol_only):
        p = h_alpha_c2(copol_only)
        assert p['entropy'] == pytest.approx(0.0)
        assert p['anisotropy'] == pytest.approx(1.0)
        assert p['alpha'] == pytest.approx(0.0)
        assert p['span'] == pytest.approx(1.0)

    def test_cross_pol_only(self):
        p = h_alpha_c2(np.diag([0.0, 1.0]).astype(np.complex128))
        assert p['entropy'] == pytest.approx(0.0)
        assert p['alpha'] == pytest.approx(90.0)

    def test_equal_power_entropy(self):
        # Two equal eigenvalues: -2 * 0.5 * log3(0.5) = log3(2).
        p = h_alpha_c2(np.eye(2, dtype=np.complex128))
        assert p['entropy'] == pytest.approx(np.log(2.0) / np.log(3.0))
        assert p['anisotropy'] == pytest.approx(0.0)

    def test_ranges(self, equal_power):
        p = h_alpha_c2(equal_power)
        assert np.all((p['entropy'] >= 0.0) & (p['entropy'] <= 1.0))
        assert np.all((p['anisotropy'] >= 0.0) & (p['anisotropy'] <= 1.0))
        assert np.all((p['alpha'] >= 0.0) & (p['alpha'] <= 90.0))

    def test_zero_matrix_is_nan(self):
        p = h_alpha_c2(np.zeros((2, 2), dtype=np.complex128))
        assert np.isnan(p['entropy'])
        assert np.isnan(p['alpha'])


# ===================================================================
# Zone assignment
# ===================================================================

class TestHAlphaPlane:

    @pytest.mark.parametrize('entropy, alpha, legacy, lee', [
        (0.2, 60.0, 1, 6),
        (0.2, 45.0, 2, 7),
        (0.2, 10.0, 3, 8),
        (0.7, 60.0, 4, 3),
        (0.7, 45.0, 5, 4),
        (0.7, 10.0, 6, 5),
        (0.95, 70.0, 7, 1),
        (0.95, 40.0, 8, 2),
    ])
    def test_zones(self, entropy, alpha, legacy, lee):
        assert HAlphaPlane.LEGACY.classify(np.array(entropy), np.array(alpha)) == legacy
        assert HAlphaPlane.LEE.classify(np.array(entropy), np.array(alpha)) == lee

    def test_boundaries_inclusive_below(self):
        assert HAlphaPlane.LEGACY.classify(np.array(0.5), np.array(42.5)) == 3
        assert HAlphaPlane.LEGACY.classify(np.array(0.9), np.array(50.0)) == 5

    def test_non_finite_is_no_data(self):
        zones = HAlphaPlane.LEGACY.classify(np.array([np.nan, 0.2]),
                                            np.array([10.0, np.inf]))
        np.testing.assert_array_equal(zones, [NO_DATA_ZONE, NO_DATA_ZONE])

    def test_dtype(self):
        assert HAlphaPlane.LEE.classify(np.zeros(3), np.zeros(3)).dtype == np.uint8


# ===================================================================
# Classifier
# ===================================================================

class TestClassifier:

    def test_names(self, classifier):
        assert classifier.component_names == ('entropy', 'anisotropy', 'alpha', 'span')
        assert classifier.band_names == ('H_alpha_class',)

    def test_parameter_bands(self):
        cp = CloudePottierClassifier(include_parameters=True)
        assert cp.band_names == ('H_alpha_class', 'Entropy', 'Anisotropy', 'Alpha')

    def test_copol_only_zone(self, classifier, copol_only):
        bands = classifier.to_bands(classifier.decompose(copol_only))
        assert bands['H_alpha_class'] == 3

    def test_lee_numbering(self, copol_only):
        cp = CloudePottierClassifier(plane='lee')
        assert cp.h_alpha_plane is HAlphaPlane.LEE
        assert cp.to_bands(cp.decompose(copol_only))['H_alpha_class'] == 8

    def test_zero_matrix_maps_to_no_data(self):
        cp = CloudePottierClassifier(include_parameters=True)
        bands = cp.to_bands(cp.decompose(np.zeros((2, 3, 2, 2), dtype=np.complex128)))
        np.testing.assert_array_equal(bands['H_alpha_class'], NO_DATA_ZONE)
        for name in ('Entropy', 'Anisotropy', 'Alpha'):
            assert np.all(np.isfinite(bands[name]))

    def test_zones_in_range(self, classifier, equal_power):
        zones = classifier.to_bands(classifier.decompose(equal_power))['H_alpha_class']
        assert zones.shape == (64, 64)
        assert zones.min() >= 0 and zones.max() <= 8

    def test_rejects_3x3(self, classifier):
        with pytest.raises(ValueError):
            classifier.decompose(np.eye(3, dtype=np.complex128))

    def test_no_global_pass(self, classifier):
        assert not classifier.has_global_pass
