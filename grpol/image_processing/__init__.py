# -*- coding: utf-8 -*-
"""
Image Processing Module - Polarimetric processors.

All processor types inherit from ``ImageProcessor`` which provides version
checking, tunable parameter validation, and global-pass discovery.

Sub-modules
-----------
decomposition/
    Pauli, Sinclair, Freeman-Durden, Yamaguchi and the dual-pol
    Cloude-Pottier H/Alpha classifier.
filters/
    Polarimetric boxcar speckle filter.
matrices.py
    C2/C3/C4/T3/T4 matrix products.
intensity.py
    Decibel conversion with an epsilon floor and span normalisation.
versioning.py
    ``@processor_version``, ``@processor_tags`` and ``@globalprocessor``.
params.py
    ``Range``, ``Options``, ``Desc`` constraint markers.

Usage
-----
Freeman-Durden powers of an averaged covariance matrix:

    >>> from grpol.image_processing import FreemanDurdenDecomposition
    >>> fd = FreemanDurdenDecomposition()
    >>> bands = fd.to_bands(fd.decompose(c3))

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
2026-01-30

Modified
--------
2026-03-06
"""

from grpol.image_processing.base import ImageProcessor, ImageTransform
from grpol.image_processing.params import Range, Options, Desc, ParamSpec
from grpol.image_processing.versioning import (
    processor_version,
    processor_tags,
    globalprocessor,
)
from grpol.image_processing.intensity import (
    EPS,
    ToDecibels,
    normalize_to_span,
    power_to_db,
)
from grpol.image_processing.matrices import MatrixProcessor, PolarimetricMatrices
from grpol.image_processing.filters import PolarimetricBoxcarFilter
from grpol.image_processing.decomposition import (
    PolarimetricDecomposition,
    PowerDecomposition,
    PauliDecomposition,
    SinclairDecomposition,
    FreemanDurdenDecomposition,
    YamaguchiDecomposition,
    CloudePottierClassifier,
    HAlphaPlane,
    create_decomposition,
)

__all__ = [
    'ImageProcessor',
    'ImageTransform',
    'Range',
    'Options',
    'Desc',
    'ParamSpec',
    'processor_version',
    'processor_tags',
    'globalprocessor',
    'EPS',
    'ToDecibels',
    'normalize_to_span',
    'power_to_db',
    'MatrixProcessor',
    'PolarimetricMatrices',
    'PolarimetricBoxcarFilter',
    'PolarimetricDecomposition',
    'PowerDecomposition',
    'PauliDecomposition',
    'SinclairDecomposition',
    'FreemanDurdenDecomposition',
    'YamaguchiDecomposition',
    'CloudePottierClassifier',
    'HAlphaPlane',
    'create_decomposition',
]
