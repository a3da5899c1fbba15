# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for the GRPOL framework.

Defines the controlled vocabularies used across processors, the
configuration layer, and the tile runtime: image modalities, processor
categories, decomposition methods, calibration modes, and sample units.
All modules import from here so that tag values stay consistent.

Author
------
Steven Siebert

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-02-10

Modified
--------
2026-03-02
"""

from enum import Enum


class ImageModality(Enum):
    """Supported image modalities for processor tagging."""

    SAR = "SAR"
    POLSAR = "POLSAR"


class ProcessorCategory(Enum):
    """Processing categories for processor tagging.

    Each value corresponds to a functional grouping of polarimetric
    operations.
    """

    FILTERS = "filters"
    DECOMPOSITION = "decomposition"
    CLASSIFICATION = "classification"
    CALIBRATION = "calibration"
    MATH = "math"


class DecompositionMethod(Enum):
    """Closed set of decomposition algorithms.

    Values are the names accepted by the configuration layer.
    """

    PAULI = "pauli"
    SINCLAIR = "sinclair"
    FREEMAN_DURDEN = "freeman-durden"
    YAMAGUCHI = "yamaguchi"
    CLOUDE_POTTIER = "cloude-pottier"


class CalibrationMode(Enum):
    """Radiometric calibration target quantity.

    Each mode selects the lookup table of the same backscatter convention.
    """

    SIGMA0 = "sigma0"
    GAMMA0 = "gamma0"
    BETA0 = "beta0"

    @property
    def lut_name(self) -> str:
        """Metadata name of the lookup table for this mode."""
        return {
            CalibrationMode.SIGMA0: 'lutSigma',
            CalibrationMode.GAMMA0: 'lutGamma',
            CalibrationMode.BETA0: 'lutBeta',
        }[self]

    @property
    def band_prefix(self) -> str:
        """Prefix of calibrated output band names (``Sigma0_HH``)."""
        return self.value.capitalize()


class IncidenceAngleSource(Enum):
    """Where the incidence angle used for calibration comes from.

    ``ELLIPSOID`` applies no correction (the LUT already includes the
    ellipsoid geometry). ``DEM`` multiplies by the sine of a per-pixel
    local incidence angle raster.
    """

    ELLIPSOID = "ellipsoid"
    DEM = "dem"


class SampleUnit(Enum):
    """Physical unit of an input sample band."""

    AMPLITUDE = "amplitude"
    INTENSITY = "intensity"
    INTENSITY_DB = "intensity_db"
    REAL = "real"
    IMAGINARY = "imaginary"
