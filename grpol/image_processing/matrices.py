# -*- coding: utf-8 -*-
"""
Polarimetric Matrices - Write covariance or coherency matrices as bands.

``MatrixProcessor`` is the shared base of every processor whose output is
a window-averaged polarimetric matrix split into named real bands.
``PolarimetricMatrices`` converts any supported source to a requested
C2, C3, C4, T3 or T4 product; the boxcar speckle filter in
:mod:`grpol.image_processing.filters.speckle` derives its output kind
from the source instead.

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
2026-02-24

Modified
--------
2026-03-06
"""

# Standard library
from abc import abstractmethod
from typing import Annotated, Dict, Optional, Sequence, Tuple

# Third-party
import numpy as np

# GRPOL internal
from grpol.image_processing.base import ImageProcessor
from grpol.image_processing.params import Desc, Options, Range
from grpol.image_processing.versioning import processor_version, processor_tags
from grpol.polarimetry.converter import channel_names, write_channels
from grpol.polarimetry.estimator import MatrixEstimator, PixelWindow
from grpol.polarimetry.kinds import MatrixKind
from grpol.vocabulary import ImageModality, ProcessorCategory


class MatrixProcessor(ImageProcessor):
    """Base class for processors that emit averaged matrices as bands.

    Subclasses declare a ``window_size`` parameter and implement
    ``output_kind``.
    """

    window_size: int = 1

    #: Value written to every output band where the source is no-data.
    no_data_value: float = 0.0

    def __post_init__(self) -> None:
        PixelWindow.from_size(self.window_size)

    @property
    def window(self) -> PixelWindow:
        return PixelWindow.from_size(self.window_size)

    @abstractmethod
    def output_kind(self, source_kind: MatrixKind) -> MatrixKind:
        """Matrix kind produced from *source_kind*.

        Raises
        ------
        ConfigurationError
            If *source_kind* cannot produce an output.
        """
        ...

    def estimator(self, source_kind: MatrixKind) -> MatrixEstimator:
        """Build the estimator for *source_kind*, validating the conversion."""
        return MatrixEstimator(source_kind, self.output_kind(source_kind), self.window)

    def band_names(self, source_kind: MatrixKind) -> Tuple[str, ...]:
        return channel_names(self.output_kind(source_kind))

    def apply(
        self,
        channels: Sequence[np.ndarray],
        source_kind: MatrixKind,
        origin: Tuple[int, int] = (0, 0),
        image_shape: Optional[Tuple[int, int]] = None,
    ) -> Dict[str, np.ndarray]:
        """Estimate the output matrix and split it into named bands.

        Parameters
        ----------
        channels : Sequence[np.ndarray]
            Source bands in ``channel_names(source_kind)`` order.
        source_kind : MatrixKind
        origin, image_shape
            Placement of the region in the full image.

        Returns
        -------
        Dict[str, np.ndarray]
            Ordered ``{band_name: float64 array}``.
        """
        matrix = self.estimator(source_kind).estimate(channels, origin, image_shape)
        return write_channels(matrix, self.output_kind(source_kind))


@processor_version('1.0.0')
@processor_tags(
    modalities=[ImageModality.POLSAR],
    category=ProcessorCategory.MATH,
    description='Covariance or coherency matrix generation',
)
class PolarimetricMatrices(MatrixProcessor):
    """Generate a C2, C3, C4, T3 or T4 matrix product.

    Parameters
    ----------
    target : str
        Output matrix kind. Default ``'T3'``.
    window_size : int
        Odd averaging window side. Default 1 (single look).

    Examples
    --------
    >>> op = PolarimetricMatrices(target='C3', window_size=3)
    >>> bands = op.apply(full_pol_bands, MatrixKind.FULL)
    >>> list(bands)[:3]
    ['C11', 'C12_real', 'C12_imag']
    """

    target: Annotated[str, Options('C2', 'C3', 'C4', 'T3', 'T4'),
                      Desc('Output matrix kind')] = 'T3'
    window_size: Annotated[int, Range(min=1, max=31),
                           Desc('Averaging window size (odd)')] = 1

    def output_kind(self, source_kind: MatrixKind) -> MatrixKind:
        return MatrixKind.parse(self.target)

    def __repr__(self) -> str:
        return (f"PolarimetricMatrices(target={self.target!r}, "
                f"window_size={self.window_size})")
