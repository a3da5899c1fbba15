# -*- coding: utf-8 -*-
"""
GRPOL - GEOINT Rapid Polarimetry Library.

Building blocks for polarimetric SAR processing: windowed covariance and
coherency matrix estimation, format conversion, Pauli, Sinclair,
Freeman-Durden, Yamaguchi and Cloude-Pottier decompositions, LUT-based
radiometric calibration, and a tiled thread-pool runtime.

Dependencies
------------
numpy
scipy
pyyaml

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

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from grpol.exceptions import (
    GrpolError,
    ValidationError,
    ConfigurationError,
    ProcessorError,
)
from grpol.vocabulary import (
    ImageModality,
    ProcessorCategory,
    DecompositionMethod,
    CalibrationMode,
    IncidenceAngleSource,
    SampleUnit,
)
from grpol.polarimetry import MatrixKind
from grpol.config import ProcessingConfig, CalibrationConfig, load_config

__all__ = [
    'GrpolError',
    'ValidationError',
    'ConfigurationError',
    'ProcessorError',
    'ImageModality',
    'ProcessorCategory',
    'DecompositionMethod',
    'CalibrationMode',
    'IncidenceAngleSource',
    'SampleUnit',
    'MatrixKind',
    'ProcessingConfig',
    'CalibrationConfig',
    'load_config',
]
