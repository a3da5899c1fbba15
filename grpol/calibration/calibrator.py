# -*- coding: utf-8 -*-
"""
Radiometric Calibrator - LUT-based conversion of raw samples to backscatter.

Converts the digital numbers of a SAR product into sigma0, gamma0 or
beta0 with the product's calibration LUT. The linear digital number
``dn`` is first recovered from the sample unit::

    amplitude        dn = a^2
    intensity        dn = v
    real + imag      dn = i^2 + q^2
    intensity (dB)   dn = 10^(v / 10)

and then calibrated per column ``x``::

    complex (SLC)    sigma = dn / gain[x]^2
    detected         sigma = (dn + offset) / gain[x]

Optionally the result is multiplied by the sine of a per-pixel local
incidence angle (DEM-based correction), converted to dB with the common
epsilon floor, or, for SLC input, written back as a complex pair
``sqrt(sigma) * (i, q) / |z|`` that keeps the sample phase.

The calibrator is a small state machine::

    UNINITIALIZED --load()--> LUT_LOADED --validate()--> READY

and ``calibrate`` may only be called when ``READY``. Once ready it holds
only immutable state and may be shared between tile workers.

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
2026-02-26

Modified
--------
2026-03-06
"""

# Standard library
import logging
from enum import Enum
from typing import Optional, Tuple, TYPE_CHECKING

# Third-party
import numpy as np

# GRPOL internal
from grpol.calibration.lut import CalibrationLUT, load_lut
from grpol.exceptions import ConfigurationError, ValidationError
from grpol.image_processing.intensity import power_to_db
from grpol.vocabulary import CalibrationMode, IncidenceAngleSource, SampleUnit

if TYPE_CHECKING:
    from grpol.runtime.contracts import MetadataAccessor

logger = logging.getLogger(__name__)


class CalibratorState(Enum):
    """Lifecycle of a ``RadiometricCalibrator``."""

    UNINITIALIZED = "uninitialized"
    LUT_LOADED = "lut_loaded"
    READY = "ready"


class RadiometricCalibrator:
    """LUT-based radiometric calibrator.

    Parameters
    ----------
    mode : CalibrationMode
        Output quantity. Default ``SIGMA0``.
    incidence_angle_source : IncidenceAngleSource
        ``DEM`` multiplies by ``sin`` of a per-pixel local incidence angle.
        Default ``ELLIPSOID`` (no correction).
    output_db : bool
        Convert the calibrated power to dB. Default ``False``.
    output_complex : bool
        For SLC products, emit calibrated ``(i, q)`` pairs instead of
        power. Default ``False``.

    Examples
    --------
    >>> cal = RadiometricCalibrator(mode=CalibrationMode.SIGMA0)
    >>> cal.initialize(metadata, width=cols)
    >>> sigma0 = cal.calibrate(dn, SampleUnit.INTENSITY, np.arange(cols))
    """

    def __init__(
        self,
        mode: CalibrationMode = CalibrationMode.SIGMA0,
        incidence_angle_source: IncidenceAngleSource = IncidenceAngleSource.ELLIPSOID,
        output_db: bool = False,
        output_complex: bool = False,
    ) -> None:
        self.mode = mode
        self.incidence_angle_source = incidence_angle_source
        self.output_db = output_db
        self.output_complex = output_complex
        self._state = CalibratorState.UNINITIALIZED
        self._lut: Optional[CalibrationLUT] = None
        self._is_complex = False
        self._is_calibrated = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def state(self) -> CalibratorState:
        return self._state

    @property
    def lut(self) -> Optional[CalibrationLUT]:
        return self._lut

    @property
    def is_complex(self) -> bool:
        """Whether the source product is complex (SLC)."""
        return self._is_complex

    def load(self, metadata: 'MetadataAccessor', width: int) -> None:
        """Load the LUT and product flags; moves to ``LUT_LOADED``.

        Raises
        ------
        ConfigurationError
            If the calibrator was already loaded or the LUT is unusable.
        """
        if self._state is not CalibratorState.UNINITIALIZED:
            raise ConfigurationError(
                f"Calibrator already initialised (state {self._state.value})"
            )
        self._lut = load_lut(metadata, self.mode, width)
        self._is_complex = bool(metadata.is_slc())
        self._is_calibrated = bool(metadata.is_calibrated())
        self._state = CalibratorState.LUT_LOADED

    def validate(self) -> None:
        """Check the option set against the product; moves to ``READY``.

        Raises
        ------
        ConfigurationError
            If the product is already calibrated, complex output is
            requested for a detected product, or complex and dB output are
            both requested.
        """
        if self._state is not CalibratorState.LUT_LOADED:
            raise ConfigurationError(
                f"Calibrator must be LUT_LOADED to validate, "
                f"state is {self._state.value}"
            )
        if self._is_calibrated:
            raise ConfigurationError(
                "Absolute radiometric calibration has already been applied "
                "to the product"
            )
        if self.output_complex and not self._is_complex:
            raise ConfigurationError(
                "Complex output requires a complex (SLC) product"
            )
        if self.output_complex and self.output_db:
            raise ConfigurationError(
                "Complex output cannot be written in dB"
            )
        self._state = CalibratorState.READY
        logger.info(
            "Calibrator ready: %s, %s product, incidence %s",
            self.mode.value, 'complex' if self._is_complex else 'detected',
            self.incidence_angle_source.value,
        )

    def initialize(self, metadata: 'MetadataAccessor', width: int) -> None:
        """``load`` followed by ``validate``."""
        self.load(metadata, width)
        self.validate()

    def _require_ready(self) -> CalibrationLUT:
        if self._state is not CalibratorState.READY:
            raise ConfigurationError(
                f"Calibrator is not ready (state {self._state.value})"
            )
        return self._lut

    # ------------------------------------------------------------------
    # Per-pixel calibration
    # ------------------------------------------------------------------

    @staticmethod
    def linear_dn(
        samples: np.ndarray,
        unit: SampleUnit,
        imaginary: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """Linear digital number from samples of *unit*.

        Raises
        ------
        ConfigurationError
            For ``REAL`` without an imaginary band, or a bare ``IMAGINARY``.
        """
        samples = np.asarray(samples, dtype=np.float64)
        if unit is SampleUnit.AMPLITUDE:
            return samples * samples
        if unit is SampleUnit.INTENSITY:
            return samples.copy()
        if unit is SampleUnit.INTENSITY_DB:
            return np.power(10.0, samples / 10.0)
        if unit is SampleUnit.REAL and imaginary is not None:
            q = np.asarray(imaginary, dtype=np.float64)
            return samples * samples + q * q
        raise ConfigurationError(f"Unhandled unit {unit.value!r}")

    def calibrate(
        self,
        samples: np.ndarray,
        unit: SampleUnit,
        columns: np.ndarray,
        imaginary: Optional[np.ndarray] = None,
        incidence_angle: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """Calibrated power (linear or dB) of a block of samples.

        Parameters
        ----------
        samples : np.ndarray
            Sample values, shape ``(rows, cols)``. For ``REAL`` units the
            in-phase band.
        unit : SampleUnit
        columns : np.ndarray
            Source column index of each sample column, shape ``(cols,)``.
        imaginary : np.ndarray, optional
            Quadrature band for ``REAL`` units.
        incidence_angle : np.ndarray, optional
            Local incidence angle in degrees, required for ``DEM``.

        Returns
        -------
        np.ndarray
            Float64 calibrated values, same shape as *samples*.
        """
        lut = self._require_ready()
        dn = self.linear_dn(samples, unit, imaginary)
        gains = lut.gain_for_columns(columns)
        if self._is_complex:
            sigma = dn / (gains * gains)
        else:
            sigma = (dn + lut.offset) / gains
        if self.incidence_angle_source is IncidenceAngleSource.DEM:
            if incidence_angle is None:
                raise ValidationError(
                    "DEM incidence-angle correction needs an incidence angle raster"
                )
            sigma = sigma * np.sin(np.radians(incidence_angle))
        if self.output_db:
            return power_to_db(sigma)
        return sigma

    def calibrate_complex(
        self,
        i: np.ndarray,
        q: np.ndarray,
        columns: np.ndarray,
        incidence_angle: Optional[np.ndarray] = None,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Calibrated complex pair that keeps the sample phase.

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            ``(i, q)`` scaled by ``sqrt(sigma) / |z|``; zero where ``|z|``
            is zero.
        """
        i = np.asarray(i, dtype=np.float64)
        q = np.asarray(q, dtype=np.float64)
        sigma = self.calibrate(i, SampleUnit.REAL, columns, q, incidence_angle)
        magnitude = np.hypot(i, q)
        nonzero = magnitude > 0.0
        scale = np.where(
            nonzero, np.sqrt(sigma) / np.where(nonzero, magnitude, 1.0), 0.0
        )
        return i * scale, q * scale

    def __repr__(self) -> str:
        return (
            f"RadiometricCalibrator(mode={self.mode.value!r}, "
            f"state={self._state.value!r})"
        )
