# -*- coding: utf-8 -*-
"""
Freeman-Durden Decomposition - Three-component model-based decomposition.

Models the averaged covariance matrix C3 as the sum of a randomly
oriented dipole cloud (volume), a first-order Bragg surface and a
dihedral (double bounce)::

    C3 = fv * C_vol + fs * C_surf(beta) + fd * C_dbl(alpha)

The volume contribution is fixed by the cross-pol power, ``fv = 4 C22``,
and removed from the co-pol terms (``3/8`` from C11 and C33, ``1/8``
from Re C13). The remaining 2x2 co-pol system is underdetermined; the
sign of the residual Re C13 decides whether surface (``Re C13 >= 0``,
``alpha = -1``) or double bounce (``Re C13 < 0``, ``beta = 1``) is
dominant. When the residual co-pol powers are not positive, the pixel is
all volume.

Returned powers are::

    Ps = fs * (1 + |beta|^2),   Pd = fd * (1 + |alpha|^2),   Pv = fv

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
2026-02-20

Modified
--------
2026-03-06
"""

# Standard library
from typing import Dict, Tuple

# Third-party
import numpy as np

# GRPOL internal
from grpol.image_processing.decomposition.base import (
    PowerDecomposition,
    real_diagonal,
    safe_ratio,
)
from grpol.image_processing.intensity import EPS
from grpol.image_processing.versioning import processor_version, processor_tags
from grpol.vocabulary import ImageModality, ProcessorCategory


def freeman_durden_powers(c3: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Surface, double-bounce and volume power of averaged C3 matrices.

    Parameters
    ----------
    c3 : np.ndarray
        Complex ``(..., 3, 3)`` covariance matrices.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray, np.ndarray]
        ``(ps, pd, pv)``, each shaped ``c3.shape[:-2]``.
    """
    c22 = real_diagonal(c3, 1)
    fv = 4.0 * c22
    c11 = real_diagonal(c3, 0) - fv * 3.0 / 8.0
    c33 = real_diagonal(c3, 2) - fv * 3.0 / 8.0
    c13_re = np.real(c3[..., 0, 2]) - fv / 8.0
    c13_im = np.imag(c3[..., 0, 2]).astype(np.float64)
    a1 = c11 * c33
    active = (c11 > EPS) & (c33 > EPS)

    # Cauchy-Schwarz: |C13|^2 may not exceed C11 * C33 after volume removal.
    a2 = c13_re ** 2 + c13_im ** 2
    clamp = active & (a1 < a2)
    scale = np.sqrt(safe_ratio(np.where(clamp, a1, 0.0), np.where(clamp, a2, 0.0)))
    scale = np.where(clamp, scale, 1.0)
    c13_re = c13_re * scale
    c13_im = c13_im * scale
    c13_mag2 = c13_re ** 2 + c13_im ** 2

    # Double bounce dominant: beta = 1.
    fs_d = np.abs(safe_ratio(a1 - c13_mag2, c11 + c33 - 2.0 * c13_re))
    fd_d = np.abs(c33 - fs_d)
    alpha2 = safe_ratio((c13_re - fs_d) ** 2 + c13_im ** 2, fd_d ** 2)
    ps_d = 2.0 * fs_d
    pd_d = fd_d * (1.0 + alpha2)

    # Surface dominant: alpha = -1.
    fd_s = np.abs(safe_ratio(a1 - c13_mag2, c11 + c33 + 2.0 * c13_re))
    fs_s = np.abs(c33 - fd_s)
    beta2 = safe_ratio((c13_re + fd_s) ** 2 + c13_im ** 2, fs_s ** 2)
    ps_s = fs_s * (1.0 + beta2)
    pd_s = 2.0 * fd_s

    double_dominant = c13_re < 0.0
    ps = np.where(active, np.where(double_dominant, ps_d, ps_s), 0.0)
    pd = np.where(active, np.where(double_dominant, pd_d, pd_s), 0.0)
    return ps, pd, fv


@processor_version('1.0.0')
@processor_tags(
    modalities=[ImageModality.POLSAR],
    category=ProcessorCategory.DECOMPOSITION,
    description='Freeman-Durden three-component powers in dB',
)
class FreemanDurdenDecomposition(PowerDecomposition):
    """Freeman-Durden three-component decomposition.

    Parameters
    ----------
    normalize : bool
        Scale powers by the image-wide span range before dB conversion.

    Examples
    --------
    >>> fd = FreemanDurdenDecomposition()
    >>> powers = fd.decompose(np.diag([4.0, 4.0, 4.0]).astype(complex))
    >>> float(powers['volume'])
    16.0
    """

    @property
    def component_names(self) -> Tuple[str, str, str]:
        return ('double_bounce', 'volume', 'surface')

    @property
    def band_names(self) -> Tuple[str, str, str]:
        return ('Freeman_dbl_r', 'Freeman_vol_g', 'Freeman_surf_b')

    def decompose(self, matrix: np.ndarray) -> Dict[str, np.ndarray]:
        """Freeman-Durden powers of averaged C3 matrices.

        Parameters
        ----------
        matrix : np.ndarray
            Complex ``(..., 3, 3)`` covariance matrices.

        Returns
        -------
        Dict[str, np.ndarray]
            ``'double_bounce'``, ``'volume'``, ``'surface'`` linear power.
        """
        self._validate_matrix(matrix)
        with np.errstate(invalid='ignore', divide='ignore'):
            ps, pd, pv = freeman_durden_powers(matrix)
        return {'double_bounce': pd, 'volume': pv, 'surface': ps}
