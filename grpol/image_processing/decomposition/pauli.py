# -*- coding: utf-8 -*-
"""
Pauli Decomposition - Power in the Pauli scattering basis.

Projects the averaged covariance matrix onto the three Pauli basis
mechanisms. In terms of the scattering matrix::

    double bounce  = |S_HH - S_VV|^2 / 2      (red)
    volume         = |S_HV + S_VH|^2 / 2      (green)
    surface        = |S_HH + S_VV|^2 / 2      (blue)

and, equivalently, from the lexicographic covariance matrix C3::

    double bounce  = (C11 - 2 Re C13 + C33) / 2
    volume         = C22
    surface        = (C11 + 2 Re C13 + C33) / 2

Dual-pol inputs are embedded into C3 with zero power in the missing
polarisation.

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
2026-01-30

Modified
--------
2026-03-06
"""

# Standard library
from typing import Dict, Tuple

# Third-party
import numpy as np

# GRPOL internal
from grpol.image_processing.decomposition.base import PowerDecomposition, real_diagonal
from grpol.image_processing.versioning import processor_version, processor_tags
from grpol.vocabulary import ImageModality, ProcessorCategory


@processor_version('1.0.0')
@processor_tags(
    modalities=[ImageModality.POLSAR],
    category=ProcessorCategory.DECOMPOSITION,
    description='Pauli basis powers in dB',
)
class PauliDecomposition(PowerDecomposition):
    """Pauli basis power decomposition.

    Examples
    --------
    >>> pauli = PauliDecomposition()
    >>> powers = pauli.decompose(c3)          # linear power
    >>> bands = pauli.to_bands(powers)        # {'Pauli_r': dB, ...}
    """

    accepts_dual_pol = True

    @property
    def component_names(self) -> Tuple[str, str, str]:
        return ('double_bounce', 'volume', 'surface')

    @property
    def band_names(self) -> Tuple[str, str, str]:
        return ('Pauli_r', 'Pauli_g', 'Pauli_b')

    def decompose(self, matrix: np.ndarray) -> Dict[str, np.ndarray]:
        """Pauli powers from averaged C3 matrices.

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
        c11 = real_diagonal(matrix, 0)
        c33 = real_diagonal(matrix, 2)
        re_c13 = np.real(matrix[..., 0, 2])
        return {
            'double_bounce': 0.5 * (c11 - 2.0 * re_c13 + c33),
            'volume': real_diagonal(matrix, 1).copy(),
            'surface': 0.5 * (c11 + 2.0 * re_c13 + c33),
        }

