# -*- coding: utf-8 -*-
"""
Yamaguchi Decomposition - Four-component model-based decomposition.

Extends Freeman-Durden with a helix term and a volume model that adapts
to the co-pol power ratio ``10 log10(C33 / C11)``::

    ratio <= -2 dB  ->  (k1, k2, k3) = ( 1/6, 7/30, 4/15)
    ratio >   2 dB  ->  (k1, k2, k3) = (-1/6, 7/30, 4/15)
    otherwise       ->  (k1, k2, k3) = (   0,  1/4,  1/4)

Working on the coherency matrix T3 with ``span = tr T3``::

    Pc = 2 |Im T23|
    Pv = (T33 - Pc / 2) / k3

If ``Pv <= 0`` the four-component model does not apply and the pixel
falls back to the Freeman-Durden result with ``Pc = 0``. Otherwise the
surface and double-bounce powers are solved from the residual T11, T22
and T12, the branch chosen by the sign of
``C0 = Re C13 - C22 / 2 + Pc / 2``. Negative powers are re-zeroed and
the remaining span is reassigned so that all four powers stay
non-negative.

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
from grpol.image_processing.decomposition.freeman_durden import freeman_durden_powers
from grpol.image_processing.versioning import processor_version, processor_tags
from grpol.polarimetry.converter import convert
from grpol.polarimetry.kinds import MatrixKind
from grpol.vocabulary import ImageModality, ProcessorCategory


def _volume_coefficients(c11: np.ndarray, c33: np.ndarray) -> Tuple[np.ndarray, ...]:
    """Volume model coefficients selected by the co-pol power ratio."""
    ratio = 10.0 * np.log10(c33 / c11)
    low = ratio <= -2.0
    high = ratio > 2.0
    k1 = np.select([low, high], [1.0 / 6.0, -1.0 / 6.0], default=0.0)
    k2 = np.select([low, high], [7.0 / 30.0, 7.0 / 30.0], default=0.25)
    k3 = np.select([low, high], [4.0 / 15.0, 4.0 / 15.0], default=0.25)
    return k1, k2, k3


def yamaguchi_powers(c3: np.ndarray) -> Tuple[np.ndarray, ...]:
    """Surface, double-bounce, volume and helix power of averaged C3 matrices.

    Returns
    -------
    Tuple[np.ndarray, ...]
        ``(ps, pd, pv, pc)``, each shaped ``c3.shape[:-2]``.
    """
    t3 = convert(c3, MatrixKind.C3, MatrixKind.T3)
    t11 = real_diagonal(t3, 0)
    t22 = real_diagonal(t3, 1)
    t33 = real_diagonal(t3, 2)
    total = t11 + t22 + t33
    pc = 2.0 * np.abs(np.imag(t3[..., 1, 2]))

    k1, k2, k3 = _volume_coefficients(real_diagonal(c3, 0), real_diagonal(c3, 2))
    pv = (t33 - 0.5 * pc) / k3
    four_component = pv > 0.0

    s = t11 - 0.5 * pv
    d = t22 - k2 * pv - 0.5 * pc
    c_mag2 = (np.real(t3[..., 0, 1]) - k1 * pv) ** 2 + np.imag(t3[..., 0, 1]) ** 2
    c0 = np.real(c3[..., 0, 2]) - 0.5 * real_diagonal(c3, 1) + 0.5 * pc

    surface_dominant = c0 >= 0.0
    ps = np.where(surface_dominant, s + safe_ratio(c_mag2, s), s - safe_ratio(c_mag2, d))
    pd = np.where(surface_dominant, d - safe_ratio(c_mag2, s), d + safe_ratio(c_mag2, d))

    remainder = total - pv - pc
    both_negative = (ps < 0.0) & (pd < 0.0)
    pd_negative = (pd < 0.0) & ~both_negative
    ps_negative = (ps < 0.0) & ~both_negative
    ps, pd = (
        np.where(pd_negative, remainder, np.where(ps_negative | both_negative, 0.0, ps)),
        np.where(ps_negative, remainder, np.where(pd_negative | both_negative, 0.0, pd)),
    )
    pv = np.where(both_negative, total - pc, pv)

    # Volume and helix alone exceed the span: the pixel is volume and helix.
    saturated = pv + pc >= total
    ps = np.where(saturated, 0.0, ps)
    pd = np.where(saturated, 0.0, pd)
    pv = np.where(saturated, total - pc, pv)

    fd_ps, fd_pd, fd_pv = freeman_durden_powers(c3)
    return (
        np.where(four_component, ps, fd_ps),
        np.where(four_component, pd, fd_pd),
        np.where(four_component, pv, fd_pv),
        np.where(four_component, pc, 0.0),
    )


@processor_version('1.0.0')
@processor_tags(
    modalities=[ImageModality.POLSAR],
    category=ProcessorCategory.DECOMPOSITION,
    description='Yamaguchi four-component powers in dB',
)
class YamaguchiDecomposition(PowerDecomposition):
    """Yamaguchi four-component decomposition with Freeman-Durden fallback.

    Parameters
    ----------
    normalize : bool
        Scale powers by the image-wide span range before dB conversion.
    """

    @property
    def component_names(self) -> Tuple[str, str, str, str]:
        return ('double_bounce', 'volume', 'surface', 'helix')

    @property
    def band_names(self) -> Tuple[str, str, str, str]:
        return ('Yamaguchi_dbl_r', 'Yamaguchi_vol_g', 'Yamaguchi_surf_b',
                'Yamaguchi_hlx')

    def decompose(self, matrix: np.ndarray) -> Dict[str, np.ndarray]:
        """Yamaguchi powers of averaged C3 matrices.

        Parameters
        ----------
        matrix : np.ndarray
            Complex ``(..., 3, 3)`` covariance matrices.

        Returns
        -------
        Dict[str, np.ndarray]
            ``'double_bounce'``, ``'volume'``, ``'surface'``, ``'helix'``.
        """
        self._validate_matrix(matrix)
        with np.errstate(invalid='ignore', divide='ignore'):
            ps, pd, pv, pc = yamaguchi_powers(matrix)
        return {'double_bounce': pd, 'volume': pv, 'surface': ps, 'helix': pc}
