# -*- coding: utf-8 -*-
"""
Polarimetric Speckle Filters - Boxcar filtering of polarimetric matrices.

The boxcar filter replaces every matrix element with its mean over a
square window clamped to the image, which is the maximum-likelihood
covariance estimate for a homogeneous neighbourhood. Filtering always
acts on the full matrix, never on individual channels, so the output
stays Hermitian and positive semi-definite.

Output kind follows the source:

- quad-pol scattering channels (``FULL``) -> ``T3``
- dual-pol or compact-pol channels -> ``C2``
- pre-formed matrices -> the same kind

Dependencies
------------
scipy

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

# Standard library
from typing import Annotated

# GRPOL internal
from grpol.image_processing.matrices import MatrixProcessor
from grpol.image_processing.params import Desc, Range
from grpol.image_processing.versioning import processor_tags, processor_version
from grpol.polarimetry.kinds import MatrixKind
from grpol.vocabulary import ImageModality, ProcessorCategory


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FILTERS,
                modalities=[ImageModality.POLSAR])
class PolarimetricBoxcarFilter(MatrixProcessor):
    """Boxcar speckle filter for polarimetric products.

    Parameters
    ----------
    window_size : int
        Square window side length. Must be odd and >= 3. Default 5.

    Examples
    --------
    >>> boxcar = PolarimetricBoxcarFilter(window_size=7)
    >>> bands = boxcar.apply(full_pol_bands, MatrixKind.FULL)
    >>> list(bands)[0]
    'T11'
    """

    window_size: Annotated[int, Range(min=3, max=31),
                           Desc('Boxcar window size (odd)')] = 5

    def output_kind(self, source_kind: MatrixKind) -> MatrixKind:
        if source_kind is MatrixKind.FULL:
            return MatrixKind.T3
        if source_kind.is_raw:
            return MatrixKind.C2
        return source_kind

    def __repr__(self) -> str:
        return f"PolarimetricBoxcarFilter(window_size={self.window_size})"
