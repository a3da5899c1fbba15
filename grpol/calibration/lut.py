# -*- coding: utf-8 -*-
"""
Calibration Lookup Tables - Immutable per-column gain tables.

A calibration LUT holds a scalar offset and one gain per range column of
the full product. When the source is a spatial subset of the product,
``subset_offset`` shifts subset column ``x`` to product column
``x + subset_offset``.

LUTs are looked up in product metadata by the name matching the
calibration mode (``lutSigma``, ``lutGamma``, ``lutBeta``).

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
from dataclasses import dataclass
from typing import TYPE_CHECKING

# Third-party
import numpy as np

# GRPOL internal
from grpol.exceptions import ConfigurationError
from grpol.vocabulary import CalibrationMode

if TYPE_CHECKING:
    from grpol.runtime.contracts import MetadataAccessor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalibrationLUT:
    """Immutable calibration lookup table.

    Attributes
    ----------
    name : str
        Metadata name of the table (e.g. ``'lutSigma'``).
    offset : float
        Additive offset applied to detected samples.
    gains : np.ndarray
        Read-only float64 gain per product column.
    subset_offset : int
        Product column of the source's first column.
    """

    name: str
    offset: float
    gains: np.ndarray
    subset_offset: int = 0

    def __post_init__(self) -> None:
        gains = np.array(self.gains, dtype=np.float64).ravel()
        gains.setflags(write=False)
        object.__setattr__(self, 'gains', gains)
        object.__setattr__(self, 'offset', float(self.offset))

    def __len__(self) -> int:
        return int(self.gains.size)

    def gain_for_columns(self, columns: np.ndarray) -> np.ndarray:
        """Gains for source columns (subset coordinates)."""
        return self.gains[np.asarray(columns, dtype=np.intp) + self.subset_offset]


def load_lut(
    metadata: 'MetadataAccessor', mode: CalibrationMode, width: int
) -> CalibrationLUT:
    """Fetch and validate the LUT for *mode* from product metadata.

    Parameters
    ----------
    metadata : MetadataAccessor
        Product metadata.
    mode : CalibrationMode
        Selects ``lutSigma``, ``lutGamma`` or ``lutBeta``.
    width : int
        Width of the source raster in columns.

    Returns
    -------
    CalibrationLUT

    Raises
    ------
    ConfigurationError
        If the LUT is missing, shorter than ``width + subset_offset``, or
        contains non-positive gains in the range that will be used.
    """
    name = mode.lut_name
    record = metadata.get_lut(name)
    if record is None:
        raise ConfigurationError(f"{name} not found in product metadata")
    offset, gains = record
    lut = CalibrationLUT(name, offset, gains, metadata.subset_offset_x())
    used = lut.subset_offset + width
    if len(lut) < used:
        raise ConfigurationError(
            f"Calibration LUT is smaller than source product width: "
            f"{name} has {len(lut)} gains, {used} required"
        )
    if np.any(~(lut.gains[lut.subset_offset:used] > 0.0)):
        raise ConfigurationError(f"{name} contains non-positive gains")
    logger.info("Loaded %s: %d gains, offset %g", name, len(lut), lut.offset)
    return lut
