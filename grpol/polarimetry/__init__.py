# -*- coding: utf-8 -*-
"""
Polarimetry Module - Matrix kinds, algebra, conversion, and estimation.

Sub-modules
-----------
kinds.py
    ``MatrixKind`` and ``MatrixBasis`` enums.
algebra.py
    Vectorised Hermitian matrix primitives.
converter.py
    Band layouts and legal source-to-target conversions.
estimator.py
    Clamped sliding-window matrix estimation.

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
2026-02-18

Modified
--------
2026-03-04
"""

from grpol.polarimetry.kinds import MatrixBasis, MatrixKind
from grpol.polarimetry.converter import (
    ConversionPlan,
    MatrixElement,
    channel_element,
    channel_names,
    convert,
    element_map,
    embed_dual_pol,
    read_matrix,
    resolve_conversion,
    scattering_vector,
    write_channels,
)
from grpol.polarimetry.estimator import (
    MatrixEstimator,
    PixelWindow,
    clamped_window_counts,
    mean_correlation_c2,
    windowed_mean,
)

__all__ = [
    'MatrixBasis',
    'MatrixKind',
    'ConversionPlan',
    'MatrixElement',
    'channel_element',
    'channel_names',
    'convert',
    'element_map',
    'embed_dual_pol',
    'read_matrix',
    'resolve_conversion',
    'scattering_vector',
    'write_channels',
    'MatrixEstimator',
    'PixelWindow',
    'clamped_window_counts',
    'mean_correlation_c2',
    'windowed_mean',
]
