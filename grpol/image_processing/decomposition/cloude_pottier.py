# -*- coding: utf-8 -*-
"""
Cloude-Pottier Dual-Pol Classifier - H/Alpha zone classification of C2.

Eigen-analyses the window-averaged 2x2 covariance matrix of a dual-pol
or compact-pol product in closed form and places every pixel in a zone
of the entropy/alpha plane.

For eigenvalues ``l1 >= l2`` with pseudo-probabilities
``p_i = l_i / (l1 + l2)``::

    entropy    H = -sum(p_i * log3(p_i))
    anisotropy A = (l1 - l2) / (l1 + l2)
    alpha        = sum(p_i * arccos(|v_i[0]|))       (degrees)

where ``v_i`` is the unit eigenvector of ``l_i``. Pixels whose entropy,
anisotropy or alpha is not finite (for example zero total power) are
assigned zone 0, the no-data class.

The plane is partitioned into eight feasible zones by two entropy
bounds (0.5, 0.9) and per-band alpha bounds. The theoretically
non-feasible high-entropy, low-alpha cell is folded into its neighbour.
Two numbering conventions are provided, see ``HAlphaPlane``.

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

# Standard library
from enum import Enum
from typing import Annotated, Dict, Optional, Tuple, TYPE_CHECKING

# Third-party
import numpy as np

# GRPOL internal
from grpol.image_processing.decomposition.base import PolarimetricDecomposition
from grpol.image_processing.params import Desc, Options
from grpol.image_processing.versioning import processor_version, processor_tags
from grpol.polarimetry.kinds import MatrixKind
from grpol.vocabulary import ImageModality, ProcessorCategory

if TYPE_CHECKING:
    from grpol.runtime.span import SpanStatistic

#: Zone written where the H/Alpha parameters are not finite.
NO_DATA_ZONE = 0

ENTROPY_LOW = 0.5
ENTROPY_HIGH = 0.9

_LOG3 = np.log(3.0)


class HAlphaPlane(Enum):
    """Zone numbering of the entropy/alpha plane.

    Both conventions share the boundaries

    ===========  ===================  ================
    entropy      alpha bounds (deg)   zones
    ===========  ===================  ================
    H <= 0.5     42.5, 47.5           surface, dipole, dihedral
    0.5 < H      40, 50               surface, vegetation, multiple
    H > 0.9      55                   vegetation, multiple
    ===========  ===================  ================

    ``LEGACY`` numbers from low entropy upwards and, within a band, from
    high alpha downwards (1 = low-entropy dihedral, 8 = high-entropy
    vegetation). ``LEE`` numbers from high entropy downwards
    (1 = high-entropy multiple scattering, 8 = low-entropy surface).
    """

    LEGACY = "legacy"
    LEE = "lee"

    def classify(self, entropy: np.ndarray, alpha: np.ndarray) -> np.ndarray:
        """Zone index of each pixel.

        Parameters
        ----------
        entropy, alpha : np.ndarray
            Entropy in [0, 1] and mean alpha in degrees. Non-finite values
            classify as ``NO_DATA_ZONE``.

        Returns
        -------
        np.ndarray
            ``uint8`` zones in ``[0, 8]``.
        """
        entropy = np.asarray(entropy, dtype=np.float64)
        alpha = np.asarray(alpha, dtype=np.float64)
        low_h = entropy <= ENTROPY_LOW
        high_h = entropy > ENTROPY_HIGH
        mid_h = ~low_h & ~high_h

        # Cells ordered: low-H (dihedral, dipole, surface),
        # mid-H (multiple, vegetation, surface), high-H (multiple, vegetation).
        cells = [
            low_h & (alpha > 47.5),
            low_h & (alpha > 42.5) & (alpha <= 47.5),
            low_h & (alpha <= 42.5),
            mid_h & (alpha > 50.0),
            mid_h & (alpha > 40.0) & (alpha <= 50.0),
            mid_h & (alpha <= 40.0),
            high_h & (alpha > 55.0),
            high_h & (alpha <= 55.0),
        ]
        if self is HAlphaPlane.LEGACY:
            labels = [1, 2, 3, 4, 5, 6, 7, 8]
        else:
            labels = [6, 7, 8, 3, 4, 5, 1, 2]
        zones = np.select(cells, labels, default=NO_DATA_ZONE)
        finite = np.isfinite(entropy) & np.isfinite(alpha)
        return np.where(finite, zones, NO_DATA_ZONE).astype(np.uint8)


def h_alpha_c2(c2: np.ndarray) -> Dict[str, np.ndarray]:
    """Entropy, anisotropy and mean alpha of averaged C2 matrices.

    Parameters
    ----------
    c2 : np.ndarray
        Complex ``(..., 2, 2)`` Hermitian matrices.

    Returns
    -------
    Dict[str, np.ndarray]
        ``'entropy'``, ``'anisotropy'``, ``'alpha'`` (degrees) and
        ``'span'``. Parameters are NaN where the total power is not
        positive or not finite.
    """
    c11 = np.real(c2[..., 0, 0])
    c22 = np.real(c2[..., 1, 1])
    c12_mag2 = np.abs(c2[..., 0, 1]) ** 2

    # -- Closed-form 2x2 eigenvalues --
    trace = c11 + c22
    det = c11 * c22 - c12_mag2
    disc = np.sqrt(np.maximum(trace ** 2 - 4.0 * det, 0.0))
    lam1 = np.maximum((trace + disc) * 0.5, 0.0)
    lam2 = np.maximum((trace - disc) * 0.5, 0.0)
    total = lam1 + lam2

    valid = np.isfinite(total) & (total > 0.0)
    safe_total = np.where(valid, total, 1.0)
    p1 = lam1 / safe_total
    p2 = lam2 / safe_total

    # -- Entropy in base 3 --
    entropy = np.zeros_like(total)
    for p in (p1, p2):
        pos = p > 0.0
        entropy[pos] -= p[pos] * np.log(p[pos]) / _LOG3

    # -- Alpha from the first eigenvector component --
    # Eigenvector of lambda_i is [C12, lambda_i - C11] (unnormalised).
    c12_abs = np.sqrt(c12_mag2)
    alphas = []
    for lam in (lam1, lam2):
        norm = np.sqrt(c12_mag2 + (lam - c11) ** 2)
        degenerate = ~(norm > 0.0)
        cos_alpha = np.clip(c12_abs / np.where(degenerate, 1.0, norm), 0.0, 1.0)
        # Degenerate: C12 = 0 and lambda = C11, so the eigenvector is [1, 0].
        alphas.append(np.where(degenerate, 0.0, np.arccos(cos_alpha)))
    alpha = np.degrees(p1 * alphas[0] + p2 * alphas[1])

    anisotropy = (lam1 - lam2) / safe_total

    nan = np.full_like(total, np.nan)
    return {
        'entropy': np.where(valid, entropy, nan),
        'anisotropy': np.where(valid, anisotropy, nan),
        'alpha': np.where(valid, alpha, nan),
        'span': trace,
    }


@processor_version('1.0.0')
@processor_tags(
    modalities=[ImageModality.POLSAR],
    category=ProcessorCategory.CLASSIFICATION,
    description='Dual-pol H/Alpha zone classification',
)
class CloudePottierClassifier(PolarimetricDecomposition):
    """Dual-pol Cloude-Pottier H/Alpha classifier.

    Parameters
    ----------
    plane : str
        Zone numbering, ``'legacy'`` or ``'lee'``. Default ``'legacy'``.
    include_parameters : bool
        Also emit ``Entropy``, ``Anisotropy`` and ``Alpha`` bands.
        Default ``False``.

    Examples
    --------
    >>> classifier = CloudePottierClassifier(plane='lee')
    >>> comps = classifier.decompose(c2)
    >>> classifier.to_bands(comps)['H_alpha_class'].dtype
    dtype('uint8')
    """

    input_kind = MatrixKind.C2

    plane: Annotated[str, Options('legacy', 'lee'),
                     Desc('H/Alpha zone numbering')] = 'legacy'
    include_parameters: Annotated[bool, Desc('Emit entropy/anisotropy/alpha bands')] = False

    @property
    def h_alpha_plane(self) -> HAlphaPlane:
        return HAlphaPlane(self.plane)

    @property
    def component_names(self) -> Tuple[str, str, str, str]:
        return ('entropy', 'anisotropy', 'alpha', 'span')

    @property
    def band_names(self) -> Tuple[str, ...]:
        if self.include_parameters:
            return ('H_alpha_class', 'Entropy', 'Anisotropy', 'Alpha')
        return ('H_alpha_class',)

    def decompose(self, matrix: np.ndarray) -> Dict[str, np.ndarray]:
        """H/Alpha parameters of averaged C2 matrices.

        Parameters
        ----------
        matrix : np.ndarray
            Complex ``(..., 2, 2)`` covariance matrices.

        Returns
        -------
        Dict[str, np.ndarray]
            ``'entropy'``, ``'anisotropy'``, ``'alpha'``, ``'span'``.
        """
        self._validate_matrix(matrix)
        with np.errstate(invalid='ignore', divide='ignore'):
            return h_alpha_c2(matrix)

    def classify(self, components: Dict[str, np.ndarray]) -> np.ndarray:
        """Zone index per pixel; 0 where any parameter is not finite."""
        zones = self.h_alpha_plane.classify(components['entropy'], components['alpha'])
        finite = np.isfinite(components['anisotropy'])
        return np.where(finite, zones, NO_DATA_ZONE).astype(np.uint8)

    def to_bands(
        self,
        components: Dict[str, np.ndarray],
        span_statistic: Optional['SpanStatistic'] = None,
    ) -> Dict[str, np.ndarray]:
        bands = {'H_alpha_class': self.classify(components)}
        if self.include_parameters:
            for band, name in (('Entropy', 'entropy'),
                               ('Anisotropy', 'anisotropy'),
                               ('Alpha', 'alpha')):
                values = components[name]
                bands[band] = np.where(np.isfinite(values), values,
                                       self.no_data_value)
        return bands

    def __repr__(self) -> str:
        return f"CloudePottierClassifier(plane={self.plane!r})"
