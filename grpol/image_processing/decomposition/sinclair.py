# -*- coding: utf-8 -*-
"""
Sinclair Decomposition - Direct lexicographic channel powers.

Maps the scattering channels straight to colour::

    red    = |S_VV|^2                 = C33
    green  = |(S_HV + S_VH) / 2|^2    = C22 / 2
    blue   = |S_HH|^2                 = C11

For a dual-pol HH/HV product the embedded C3 has no VV power, so red is
the dB floor and blue is the HH power.

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
from grpol.image_processing.decomposition.base import PowerDecomposition, real_diagonal
from grpol.image_processing.versioning import processor_version, processor_tags
from grpol.vocabulary import ImageModality, ProcessorCategory


@processor_version('1.0.0')
@processor_tags(
    modalities=[ImageModality.POLSAR],
    category=ProcessorCategory.DECOMPOSITION,
    description='Sinclair channel powers in dB',
)
class SinclairDecomposition(PowerDecomposition):
    """Sinclair lexicographic power decomposition."""

    accepts_dual_pol = True

    @property
    def component_names(self) -> Tuple[str, str, str]:
        return ('vv', 'cross', 'hh')

    @property
    def band_names(self) -> Tuple[str, str, str]:
        return ('Sinclair_r', 'Sinclair_g', 'Sinclair_b')

    def decompose(self, matrix: np.ndarray) -> Dict[str, np.ndarray]:
        self._validate_matrix(matrix)
        return {
            'vv': real_diagonal(matrix, 2).copy(),
            'cross': 0.5 * real_diagonal(matrix, 1),
            'hh': real_diagonal(matrix, 0).copy(),
        }

